"""Known-final-score ranking after fitness test and interview."""

from pydantic import BaseModel

from models.schemas.bonus import BonusType


class KnownFinalScore(BaseModel):
    martial_bonus_point: float = 0.0
    known_bonus_point: float = 0.0
    known_final_score: float | None = None  # None when the fitness test failed


class FinalRankEntry(BaseModel):
    submission_id: int
    known_final_score: float
    written_score: float
    known_bonus_point: float = 0.0
    bonus_type: BonusType = BonusType.NONE


class FinalRank(BaseModel):
    submission_id: int
    final_rank: int | None = None
    total_participants: int = 0


class FinalPrediction(BaseModel):
    """Known final score of one candidate and its rank among known entries."""
    submission_id: int
    written_score: float
    fitness_passed: bool
    known: KnownFinalScore
    final_rank: int | None = None  # None when the fitness test failed
    total_participants: int = 0
