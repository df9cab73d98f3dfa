"""OMR scoring input and output for one submission."""

from pydantic import BaseModel

from models.schemas.bonus import BonusType
from models.schemas.cohort import ExamType


class AnswerInput(BaseModel):
    subject_name: str
    question_no: int
    answer: int  # 1-4


class AnswerKeyEntry(BaseModel):
    subject_name: str
    question_no: int
    correct_answer: int


class SubjectScore(BaseModel):
    subject_name: str
    question_count: int
    correct_count: int = 0
    raw_score: float = 0.0
    max_score: float
    bonus_score: float = 0.0
    final_score: float = 0.0
    is_cutoff: bool = False  # raw score under 40% of max


class AnswerResult(BaseModel):
    subject_name: str
    question_no: int
    selected_answer: int
    is_correct: bool


class ScoreResult(BaseModel):
    exam_type: ExamType
    bonus_type: BonusType = BonusType.NONE
    bonus_rate: float = 0.0
    total_score: float = 0.0  # raw, without bonus
    bonus_score: float = 0.0
    final_score: float = 0.0
    has_cutoff: bool = False
    scores: list[SubjectScore] = []
    answers: list[AnswerResult] = []
