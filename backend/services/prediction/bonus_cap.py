"""Bonus cap validator: limits how many candidates pass only because of a bonus.

A candidate "passes because of the bonus" when they are in the top
``pass_count`` by final score, are not in the top ``pass_count`` by raw score,
and hold a bonus type of the family being checked. Both orderings compare
scores on their ``ScoreKey`` and break ties by submission id
ascending.

The check is advisory. It reads the cohort snapshot it is given and does not
serialize writes: two concurrent submissions in the same cohort may each pass
validation against a snapshot that lacks the other, and land over the cap once
both are stored. Callers that need a hard guarantee must serialize
validate-and-write per (exam, region, exam type) themselves.
"""

import logging
from collections.abc import Iterable

from models.schemas.bonus import BONUS_RULES, BonusFamily, BonusRule, BonusType, family_of
from models.schemas.cohort import CandidateRow, CohortMember
from services.errors import BonusCapExceeded, BonusFamilyIneligible
from services.prediction.score_bands import to_score_key
from services.prediction.thresholds import get_pass_count, get_pass_multiple

logger = logging.getLogger(__name__)


def _pass_set(rows: list[CandidateRow], pass_count: int, attr: str) -> list[CandidateRow]:
    ordered = sorted(rows, key=lambda row: (-to_score_key(getattr(row, attr)), row.id))
    return ordered[:pass_count]


def count_bonus_beneficiaries(
    rows: list[CandidateRow], pass_count: int, family: BonusFamily
) -> list[CandidateRow]:
    """Final-score passers of ``family`` that would not pass on raw score."""
    pass_by_final = _pass_set(rows, pass_count, "final_score")
    raw_passer_ids = {row.id for row in _pass_set(rows, pass_count, "raw_score")}
    return [
        row for row in pass_by_final
        if family_of(row.bonus_type) == family and row.id not in raw_passer_ids
    ]


class BonusCapValidator:
    def __init__(self, rules: dict[BonusFamily, BonusRule] | None = None) -> None:
        self.rules = rules if rules is not None else BONUS_RULES

    def rule_for(self, bonus_type: BonusType) -> BonusRule | None:
        return self.rules.get(family_of(bonus_type))

    def check_eligibility(self, bonus_type: BonusType, recruit_count: int) -> BonusRule | None:
        """Raise BonusFamilyIneligible when the cohort is too small for the family."""
        rule = self.rule_for(bonus_type)
        if rule is None:
            return None
        if recruit_count < rule.min_recruit_count:
            raise BonusFamilyIneligible(
                f"{rule.label} 가산점은 모집인원 {rule.min_recruit_count}명 이상 지역에서만 선택 가능합니다."
            )
        if rule.cap_count(recruit_count) < 1:
            raise BonusFamilyIneligible(
                f"{rule.label} 가산점 합격 상한(선발예정인원 {rule.cap_percent}%)을 적용할 수 없는 모집단입니다."
            )
        return rule

    def validate(
        self,
        *,
        recruit_count: int,
        cohort: Iterable[CohortMember],
        bonus_type: BonusType,
        raw_score: float,
        final_score: float,
        has_cutoff: bool = False,
        submission_id: int | None = None,
    ) -> None:
        """Raise BonusCapExceeded if storing this row would break the cap.

        ``cohort`` is the set of currently-qualifying members of the same
        exam/region/exam type. ``submission_id`` is set when editing an
        existing row; its stored version is replaced by the new scores.
        """
        bonus_type = BonusType(bonus_type)
        if family_of(bonus_type) == BonusFamily.NONE or has_cutoff:
            return

        rule = self.check_eligibility(bonus_type, recruit_count)
        cap_count = rule.cap_count(recruit_count)

        existing = [member for member in cohort if not member.has_cutoff]
        candidate_id = submission_id
        if candidate_id is None:
            candidate_id = max((member.id for member in existing), default=0) + 1

        rows = [
            CandidateRow(
                id=member.id,
                raw_score=member.raw_score,
                final_score=member.final_score,
                bonus_type=member.bonus_type,
            )
            for member in existing
            if member.id != candidate_id
        ]
        rows.append(CandidateRow(
            id=candidate_id,
            raw_score=raw_score,
            final_score=final_score,
            bonus_type=bonus_type,
        ))

        if len(rows) <= recruit_count:
            logger.debug(
                "Bonus cap exempt: %d applicants for %d recruits", len(rows), recruit_count
            )
            return

        pass_count = get_pass_count(recruit_count, get_pass_multiple(recruit_count))
        if pass_count < 1:
            return

        beneficiaries = count_bonus_beneficiaries(rows, pass_count, rule.family)
        if len(beneficiaries) > cap_count:
            logger.info(
                "Bonus cap exceeded for %s: %d beneficiaries, cap %d (recruit %d)",
                rule.family.value, len(beneficiaries), cap_count, recruit_count,
            )
            raise BonusCapExceeded(
                f"{rule.label} 가산점으로 합격 가능한 인원 상한({cap_count}명, "
                f"선발예정인원의 {rule.cap_percent}%)을 초과합니다.",
                family=rule.family.value,
                cap_count=cap_count,
                cap_percent=rule.cap_percent,
            )
