"""Prediction orchestrator: wires the engine components together.

Flow:
    user_id (+ submission_id)
      ├─ source.resolve_candidate()          → CandidateSubmission
      ├─ source.recruit_count()              → recruit headcount
      ├─ source.load_cohort()                → list[CohortMember]
      │          ↓
      ├─ build_score_bands(final scores)     → ScoreBandTable
      ├─ build_thresholds(recruit_count)     → Thresholds
      │          ↓
      ├─ build_pyramid(table, thresholds)    → Pyramid
      ├─ paginate_competitors(table, ...)    → CompetitorPage
      │          ↓
      └─ _to_summary()                       → PredictionSummary
                 ↓
         PredictionResult

Every call loads a fresh cohort and keeps no state between requests.
"""

import logging

from config import settings
from models.schemas.bonus import BonusType
from models.schemas.cohort import EXAM_TYPE_LABELS, CandidateSubmission, CohortMember, ExamType
from models.schemas.prediction_result import CompetitorPage, PredictionResult, PredictionSummary
from models.schemas.pyramid import Pyramid
from services.errors import CandidateNotFound, CandidateNotInCohort, CutoffFailed
from services.prediction.bonus_cap import BonusCapValidator
from services.prediction.competitors import paginate_competitors
from services.prediction.pyramid import build_pyramid, grade_label
from services.prediction.score_bands import ScoreBandTable, build_score_bands
from services.prediction.sources import PredictionSource
from services.prediction.thresholds import (
    Thresholds,
    build_thresholds,
    require_recruit_count,
    to_display,
)

logger = logging.getLogger(__name__)


class PredictionService:
    def __init__(
        self,
        source: PredictionSource,
        bonus_validator: BonusCapValidator | None = None,
    ) -> None:
        self.source = source
        self.bonus_validator = bonus_validator or BonusCapValidator()

    async def _load(
        self, user_id: int, submission_id: int | None
    ) -> tuple[CandidateSubmission, int, list[CohortMember]]:
        candidate = await self.source.resolve_candidate(user_id, submission_id)
        if candidate is None:
            raise CandidateNotFound()
        if candidate.submission.has_cutoff:
            raise CutoffFailed()

        recruit_count = await self.source.recruit_count(
            candidate.exam.id, candidate.region.region_id, candidate.exam_type
        )
        recruit_count = require_recruit_count(recruit_count)

        cohort = await self.source.load_cohort(
            candidate.exam.id, candidate.region.region_id, candidate.exam_type
        )
        return candidate, recruit_count, cohort

    @staticmethod
    def _rank_cohort(
        candidate: CandidateSubmission, cohort: list[CohortMember]
    ) -> tuple[ScoreBandTable, int]:
        table = build_score_bands((member.id, member.final_score) for member in cohort)
        my_rank = table.rank_of_submission(candidate.submission.id)
        if my_rank is None:
            logger.error(
                "Submission %d missing from its own cohort (%d members)",
                candidate.submission.id, table.total_participants,
            )
            raise CandidateNotInCohort()
        return table, my_rank

    async def calculate(
        self,
        user_id: int,
        submission_id: int | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> PredictionResult:
        """Summary, pyramid and competitor page for one candidate."""

        # --- Stage 1: Loading (external collaborators) ---
        candidate, recruit_count, cohort = await self._load(user_id, submission_id)

        # --- Stage 2: Ranking + thresholds ---
        table, my_rank = self._rank_cohort(candidate, cohort)
        thresholds = build_thresholds(recruit_count)

        # --- Stage 3: Pyramid + competitors ---
        pyramid = build_pyramid(table, thresholds, my_rank)
        members = {member.id: member for member in cohort}
        competitors = paginate_competitors(
            table, members, candidate.submission.id, page=page, limit=limit
        )

        summary = _to_summary(candidate, table, thresholds, my_rank, pyramid)
        logger.info(
            "Prediction for submission %d: rank %d/%d, grade %s",
            candidate.submission.id, my_rank, table.total_participants,
            summary.prediction_grade,
        )
        return PredictionResult(summary=summary, pyramid=pyramid, competitors=competitors)

    async def competitors(
        self,
        user_id: int,
        submission_id: int | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> CompetitorPage:
        candidate, _, cohort = await self._load(user_id, submission_id)
        table, _ = self._rank_cohort(candidate, cohort)
        members = {member.id: member for member in cohort}
        return paginate_competitors(
            table, members, candidate.submission.id, page=page, limit=limit
        )

    async def validate_bonus_cap(
        self,
        *,
        exam_id: int,
        region_id: int,
        exam_type: ExamType,
        bonus_type: BonusType,
        raw_score: float,
        final_score: float,
        has_cutoff: bool = False,
        submission_id: int | None = None,
    ) -> None:
        """Gate a create/edit write; raises BonusFamilyIneligible / BonusCapExceeded."""
        recruit_count = await self.source.recruit_count(exam_id, region_id, exam_type)
        recruit_count = require_recruit_count(recruit_count)
        cohort = await self.source.load_cohort(exam_id, region_id, exam_type)
        self.bonus_validator.validate(
            recruit_count=recruit_count,
            cohort=cohort,
            bonus_type=bonus_type,
            raw_score=raw_score,
            final_score=final_score,
            has_cutoff=has_cutoff,
            submission_id=submission_id,
        )


def _to_summary(
    candidate: CandidateSubmission,
    table: ScoreBandTable,
    thresholds: Thresholds,
    my_rank: int,
    pyramid: Pyramid,
) -> PredictionSummary:
    recruit_count = thresholds.recruit_count
    pass_count = thresholds.pass_count
    pass_line_score = table.score_at_position(min(pass_count, table.total_participants))
    exam = candidate.exam
    region = candidate.region

    return PredictionSummary(
        submission_id=candidate.submission.id,
        exam_id=exam.id,
        exam_name=exam.name,
        exam_year=exam.year,
        exam_round=exam.round,
        user_name=candidate.submission.user_name,
        exam_type=candidate.exam_type,
        exam_type_label=EXAM_TYPE_LABELS[candidate.exam_type],
        region_id=region.region_id,
        region_name=region.region_name,
        recruit_count=recruit_count,
        estimated_applicants=recruit_count * settings.estimated_applicant_multiplier,
        total_participants=table.total_participants,
        my_score=to_display(candidate.submission.final_score),
        my_rank=my_rank,
        my_multiple=to_display(my_rank / recruit_count),
        pass_multiple=to_display(thresholds.pass_multiple),
        likely_multiple=to_display(thresholds.likely_multiple),
        pass_count=pass_count,
        pass_line_score=None if pass_line_score is None else to_display(pass_line_score),
        prediction_grade=grade_label(pyramid.current),
        low_sample=table.total_participants < pass_count,
        disclaimer=settings.prediction_disclaimer,
    )
