"""PredictionService output: summary, pyramid and competitor page."""

from datetime import datetime, timezone

from pydantic import BaseModel, Field

from models.schemas.cohort import ExamType
from models.schemas.pyramid import Pyramid


class PredictionSummary(BaseModel):
    submission_id: int
    exam_id: int
    exam_name: str = ""
    exam_year: int = 0
    exam_round: int = 0
    user_name: str = ""
    exam_type: ExamType
    exam_type_label: str = ""
    region_id: int
    region_name: str = ""
    recruit_count: int
    estimated_applicants: int = 0
    total_participants: int = 0
    my_score: float = 0.0
    my_rank: int
    my_multiple: float
    pass_multiple: float
    likely_multiple: float
    pass_count: int
    pass_line_score: float | None = None
    prediction_grade: str
    low_sample: bool = False  # fewer participants than the pass count
    disclaimer: str = ""


class Competitor(BaseModel):
    submission_id: int
    user_id: int = 0
    rank: int
    score: float
    masked_name: str
    is_mine: bool = False


class CompetitorPage(BaseModel):
    page: int = 1
    limit: int = 20
    total_count: int = 0
    total_pages: int = 1
    items: list[Competitor] = []


class PredictionResult(BaseModel):
    summary: PredictionSummary
    pyramid: Pyramid
    competitors: CompetitorPage
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
