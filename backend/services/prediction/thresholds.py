"""Pass and likely multiples derived from recruit headcount.

Multiples are kept as exact fractions so the ceil/floor of rank boundaries
never drifts (e.g. 3 recruits -> pass multiple 8/3, pass count exactly 8).
"""

import math
from fractions import Fraction

from pydantic import BaseModel

from services.errors import InvalidRecruitPolicy

# Small cohorts advance a flat number of candidates to the interview.
SMALL_RECRUIT_PASS_COUNTS: dict[int, int] = {
    1: 3,
    2: 6,
    3: 8,
    4: 9,
    5: 10,
}

LIKELY_MULTIPLE_STANDARD = Fraction(6, 5)
CHALLENGE_FACTOR = Fraction(13, 10)


class Thresholds(BaseModel):
    """Multiples and rank boundaries for one recruit headcount."""
    recruit_count: int
    pass_multiple: Fraction
    likely_multiple: Fraction
    challenge_multiple: Fraction
    sure_max: int
    likely_max: int
    possible_max: int  # the pass count
    challenge_max: int

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    @property
    def pass_count(self) -> int:
        return self.possible_max


def require_recruit_count(recruit_count: int) -> int:
    if isinstance(recruit_count, bool) or not isinstance(recruit_count, int) or recruit_count < 1:
        raise InvalidRecruitPolicy()
    return recruit_count


def get_pass_multiple(recruit_count: int) -> Fraction:
    recruit_count = require_recruit_count(recruit_count)
    if recruit_count >= 150:
        return Fraction(3, 2)
    if recruit_count >= 100:
        return Fraction(8, 5)
    if recruit_count >= 50:
        return Fraction(17, 10)
    if recruit_count >= 6:
        return Fraction(9, 5)

    pass_count = SMALL_RECRUIT_PASS_COUNTS.get(recruit_count)
    if not pass_count:
        raise InvalidRecruitPolicy("유효하지 않은 선발인원입니다.")
    return Fraction(pass_count, recruit_count)


def get_likely_multiple(pass_multiple: Fraction) -> Fraction:
    return min(LIKELY_MULTIPLE_STANDARD, Fraction(pass_multiple))


def get_pass_count(recruit_count: int, pass_multiple: Fraction | None = None) -> int:
    if pass_multiple is None:
        pass_multiple = get_pass_multiple(recruit_count)
    return math.ceil(recruit_count * Fraction(pass_multiple))


def max_rank_by_multiple(recruit_count: int, multiple: Fraction) -> int:
    return max(1, math.floor(recruit_count * multiple))


def build_thresholds(recruit_count: int) -> Thresholds:
    pass_multiple = get_pass_multiple(recruit_count)
    likely_multiple = get_likely_multiple(pass_multiple)
    challenge_multiple = pass_multiple * CHALLENGE_FACTOR
    return Thresholds(
        recruit_count=recruit_count,
        pass_multiple=pass_multiple,
        likely_multiple=likely_multiple,
        challenge_multiple=challenge_multiple,
        sure_max=recruit_count,
        likely_max=max_rank_by_multiple(recruit_count, likely_multiple),
        possible_max=get_pass_count(recruit_count, pass_multiple),
        challenge_max=max_rank_by_multiple(recruit_count, challenge_multiple),
    )


def to_display(value: Fraction | float) -> float:
    """Render a multiple or score for output (2 decimals)."""
    return round(float(value), 2)
