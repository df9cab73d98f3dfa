"""Submission snapshots handed to the engine by the data collaborators."""

from enum import Enum

from pydantic import BaseModel

from models.schemas.bonus import BonusType


class ExamType(str, Enum):
    PUBLIC = "PUBLIC"  # 공채
    CAREER = "CAREER"  # 경행경채


EXAM_TYPE_LABELS = {
    ExamType.PUBLIC: "공채",
    ExamType.CAREER: "경행경채",
}


class CohortMember(BaseModel):
    """One submission as seen by ranking and bonus-cap checks.

    raw_score excludes the bonus; final_score includes it.
    """
    id: int
    user_id: int = 0
    user_name: str = ""
    raw_score: float = 0.0
    final_score: float = 0.0
    bonus_type: BonusType = BonusType.NONE
    has_cutoff: bool = False  # any subject under the 과락 line
    is_suspicious: bool = False


class CandidateRow(BaseModel):
    """Row used by the bonus-cap pass-set comparison."""
    id: int
    raw_score: float
    final_score: float
    bonus_type: BonusType = BonusType.NONE


class RegionQuota(BaseModel):
    region_id: int
    region_name: str = ""
    recruit_count: int = 0
    recruit_count_career: int = 0
    applicant_count: int | None = None
    applicant_count_career: int | None = None


class ExamInfo(BaseModel):
    id: int
    name: str = ""
    year: int = 0
    round: int = 0


class CandidateSubmission(BaseModel):
    """The resolved "my" submission with exam and region metadata."""
    submission: CohortMember
    exam: ExamInfo
    region: RegionQuota
    exam_type: ExamType = ExamType.PUBLIC


class CohortSnapshot(BaseModel):
    """All submissions of one (exam, region, exam type) cohort, as loaded."""
    exam: ExamInfo
    region: RegionQuota
    exam_type: ExamType = ExamType.PUBLIC
    submissions: list[CohortMember] = []
