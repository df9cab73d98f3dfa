"""Data contracts shared by the scoring and prediction engine."""

from models.schemas.bonus import BonusFamily, BonusRule, BonusType
from models.schemas.cohort import CandidateRow, CandidateSubmission, CohortMember, CohortSnapshot, ExamType
from models.schemas.prediction_result import CompetitorPage, PredictionResult, PredictionSummary
from models.schemas.pyramid import Pyramid, PyramidLevel, PyramidLevelKey, ScoreBound
from models.schemas.score_band import ScoreBand

__all__ = [
    "BonusFamily",
    "BonusRule",
    "BonusType",
    "CandidateRow",
    "CandidateSubmission",
    "CohortMember",
    "CohortSnapshot",
    "ExamType",
    "CompetitorPage",
    "PredictionResult",
    "PredictionSummary",
    "Pyramid",
    "PyramidLevel",
    "PyramidLevelKey",
    "ScoreBound",
    "ScoreBand",
]
