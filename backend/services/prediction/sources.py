"""Data collaborators of the prediction engine.

Loading is the only I/O in a prediction request and it happens before any
ranking work. Implementations must return fresh data on every call; the
engine never caches a cohort between requests.
"""

import logging
from typing import Protocol

from config import settings
from models.schemas.cohort import (
    CandidateSubmission,
    CohortMember,
    CohortSnapshot,
    ExamType,
    RegionQuota,
)

logger = logging.getLogger(__name__)


class CandidateResolver(Protocol):
    async def resolve_candidate(
        self, user_id: int, submission_id: int | None = None
    ) -> CandidateSubmission | None:
        """The given submission of ``user_id``, or their latest one.

        Suspicious submissions are skipped whenever ``load_cohort`` skips them,
        so a resolved candidate without a cutoff is always in its own cohort.
        """


class CohortLoader(Protocol):
    async def load_cohort(
        self, exam_id: int, region_id: int, exam_type: ExamType
    ) -> list[CohortMember]:
        """All non-cutoff-failed submissions of the cohort."""


class RecruitCountSource(Protocol):
    async def recruit_count(self, exam_id: int, region_id: int, exam_type: ExamType) -> int:
        ...


class PredictionSource(CandidateResolver, CohortLoader, RecruitCountSource, Protocol):
    pass


def region_recruit_count(region: RegionQuota, exam_type: ExamType) -> int:
    """Career (경행경채) quotas fall back to the general quota when unset."""
    if exam_type == ExamType.CAREER:
        return region.recruit_count_career if region.recruit_count_career > 0 else region.recruit_count
    return region.recruit_count


class SnapshotSource:
    """PredictionSource over an in-memory snapshot of a single cohort."""

    def __init__(self, snapshot: CohortSnapshot, exclude_suspicious: bool | None = None) -> None:
        self.snapshot = snapshot
        self.exclude_suspicious = (
            settings.exclude_suspicious if exclude_suspicious is None else exclude_suspicious
        )

    def _matches(self, exam_id: int, region_id: int, exam_type: ExamType) -> bool:
        return (
            self.snapshot.exam.id == exam_id
            and self.snapshot.region.region_id == region_id
            and self.snapshot.exam_type == exam_type
        )

    async def resolve_candidate(
        self, user_id: int, submission_id: int | None = None
    ) -> CandidateSubmission | None:
        mine = [s for s in self.snapshot.submissions if s.user_id == user_id]
        if self.exclude_suspicious:
            mine = [s for s in mine if not s.is_suspicious]
        if submission_id is not None:
            mine = [s for s in mine if s.id == submission_id]
        if not mine:
            return None
        latest = max(mine, key=lambda s: s.id)
        return CandidateSubmission(
            submission=latest,
            exam=self.snapshot.exam,
            region=self.snapshot.region,
            exam_type=self.snapshot.exam_type,
        )

    async def load_cohort(
        self, exam_id: int, region_id: int, exam_type: ExamType
    ) -> list[CohortMember]:
        if not self._matches(exam_id, region_id, exam_type):
            return []
        members = [s for s in self.snapshot.submissions if not s.has_cutoff]
        if self.exclude_suspicious:
            members = [s for s in members if not s.is_suspicious]
        logger.debug(
            "Loaded cohort exam=%s region=%s type=%s: %d members",
            exam_id, region_id, exam_type.value, len(members),
        )
        return members

    async def recruit_count(self, exam_id: int, region_id: int, exam_type: ExamType) -> int:
        return region_recruit_count(self.snapshot.region, exam_type)
