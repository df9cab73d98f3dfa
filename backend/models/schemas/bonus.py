"""Bonus-point categories, their families and the per-family pass caps."""

from enum import Enum

from pydantic import BaseModel


class BonusType(str, Enum):
    NONE = "NONE"
    VETERAN_5 = "VETERAN_5"
    VETERAN_10 = "VETERAN_10"
    HERO_3 = "HERO_3"
    HERO_5 = "HERO_5"


class BonusFamily(str, Enum):
    NONE = "NONE"
    VETERAN = "VETERAN"  # 취업지원대상자
    HERO = "HERO"  # 의사상자


class BonusRule(BaseModel):
    """Eligibility gate and pass cap shared by every bonus type of a family."""
    family: BonusFamily
    label: str
    min_recruit_count: int
    cap_percent: int  # cap as a whole percentage of recruit headcount

    model_config = {"frozen": True}

    def cap_count(self, recruit_count: int) -> int:
        return recruit_count * self.cap_percent // 100


BONUS_RATE_BY_TYPE: dict[BonusType, float] = {
    BonusType.NONE: 0.0,
    BonusType.VETERAN_5: 0.05,
    BonusType.VETERAN_10: 0.10,
    BonusType.HERO_3: 0.03,
    BonusType.HERO_5: 0.05,
}

FAMILY_BY_TYPE: dict[BonusType, BonusFamily] = {
    BonusType.NONE: BonusFamily.NONE,
    BonusType.VETERAN_5: BonusFamily.VETERAN,
    BonusType.VETERAN_10: BonusFamily.VETERAN,
    BonusType.HERO_3: BonusFamily.HERO,
    BonusType.HERO_5: BonusFamily.HERO,
}

BONUS_RULES: dict[BonusFamily, BonusRule] = {
    BonusFamily.VETERAN: BonusRule(
        family=BonusFamily.VETERAN,
        label="취업지원대상자",
        min_recruit_count=4,
        cap_percent=30,
    ),
    BonusFamily.HERO: BonusRule(
        family=BonusFamily.HERO,
        label="의사상자",
        min_recruit_count=10,
        cap_percent=10,
    ),
}


def family_of(bonus_type: BonusType) -> BonusFamily:
    return FAMILY_BY_TYPE[BonusType(bonus_type)]


def bonus_rate(bonus_type: BonusType | str | None) -> float:
    if not bonus_type:
        return 0.0
    try:
        return BONUS_RATE_BY_TYPE[BonusType(bonus_type)]
    except ValueError:
        return 0.0
