"""Per-region pass-cut snapshot rows."""

from pydantic import BaseModel

from models.schemas.cohort import ExamType


class RegionSubmission(BaseModel):
    id: int
    region_id: int
    exam_type: ExamType = ExamType.PUBLIC
    final_score: float
    has_cutoff: bool = False
    is_suspicious: bool = False


class PassCutRow(BaseModel):
    region_id: int
    region_name: str = ""
    exam_type: ExamType
    recruit_count: int
    applicant_count: int | None = None
    estimated_applicants: int = 0
    is_applicant_count_exact: bool = False
    competition_rate: float | None = None
    participant_count: int = 0
    average_score: float | None = None
    one_multiple_cut_score: float | None = None  # score at rank == recruit count
    sure_min_score: float | None = None
    likely_min_score: float | None = None
    possible_min_score: float | None = None
