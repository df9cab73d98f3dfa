"""Pass-likelihood pyramid output."""

from enum import Enum

from pydantic import BaseModel


class PyramidLevelKey(str, Enum):
    SURE = "sure"
    LIKELY = "likely"
    POSSIBLE = "possible"
    CHALLENGE = "challenge"
    BELOW_CHALLENGE = "belowChallenge"


LEVEL_LABELS = {
    PyramidLevelKey.SURE: "확실권",
    PyramidLevelKey.LIKELY: "유력권",
    PyramidLevelKey.POSSIBLE: "가능권",
    PyramidLevelKey.CHALLENGE: "도전권",
    PyramidLevelKey.BELOW_CHALLENGE: "도전권 이하",
}


class BoundState(str, Enum):
    VALUE = "value"  # a cohort member sits at the boundary rank
    OPEN = "open"  # the tier has no bound on this side
    UNREACHED = "unreached"  # nobody holds a rank in the tier yet
    EMPTY = "empty"  # the tier has no ranks for this recruit count


class ScoreBound(BaseModel):
    state: BoundState
    score: float | None = None

    @classmethod
    def value(cls, score: float) -> "ScoreBound":
        return cls(state=BoundState.VALUE, score=score)

    @classmethod
    def open(cls) -> "ScoreBound":
        return cls(state=BoundState.OPEN)

    @classmethod
    def unreached(cls) -> "ScoreBound":
        return cls(state=BoundState.UNREACHED)

    @classmethod
    def empty(cls) -> "ScoreBound":
        return cls(state=BoundState.EMPTY)


class PyramidLevel(BaseModel):
    key: PyramidLevelKey
    label: str
    count: int = 0
    start_rank: int
    end_rank: int | None = None  # None for the open-ended bottom tier
    min_score: ScoreBound
    max_score: ScoreBound
    min_multiple: float | None = None
    max_multiple: float | None = None
    is_current: bool = False


class Pyramid(BaseModel):
    levels: list[PyramidLevel] = []
    counts: dict[str, int] = {}
    current: PyramidLevelKey
