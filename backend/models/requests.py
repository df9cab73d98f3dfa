from pydantic import BaseModel, Field

from models.schemas.bonus import BonusType
from models.schemas.cohort import CohortSnapshot, ExamType, RegionQuota
from models.schemas.final_rank import FinalRankEntry
from models.schemas.pass_cut import RegionSubmission
from models.schemas.score_result import AnswerInput, AnswerKeyEntry


class PredictionRequest(BaseModel):
    user_id: int
    submission_id: int | None = None
    page: int | None = Field(None, description="1-based page of the competitor list")
    limit: int | None = Field(None, description="Competitors per page (capped)")
    snapshot: CohortSnapshot


class BonusValidationRequest(BaseModel):
    snapshot: CohortSnapshot
    bonus_type: BonusType = BonusType.NONE
    raw_score: float = Field(..., ge=0)
    final_score: float = Field(..., ge=0)
    has_cutoff: bool = False
    submission_id: int | None = Field(None, description="Set when editing an existing submission")


class ScoringRequest(BaseModel):
    exam_type: ExamType = ExamType.PUBLIC
    answer_key: list[AnswerKeyEntry]
    answers: list[AnswerInput] = Field(..., max_length=200)
    bonus_type: BonusType | None = None
    veteran_percent: int = 0
    hero_percent: int = 0


class PassCutRequest(BaseModel):
    include_career: bool = False
    quotas: list[RegionQuota]
    submissions: list[RegionSubmission] = []


class FinalRankRequest(BaseModel):
    submission_id: int
    entries: list[FinalRankEntry] = []


class FinalPredictionRequest(BaseModel):
    submission_id: int
    written_score: float = Field(..., ge=0)
    fitness_passed: bool
    martial_dan_level: float = Field(0, ge=0, description="Martial arts dan level")
    additional_bonus_point: float = 0.0
    bonus_type: BonusType = BonusType.NONE
    entries: list[FinalRankEntry] = Field([], description="Known final scores of the other candidates")
