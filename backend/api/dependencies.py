"""Shared dependencies for API routes."""

from models.schemas.cohort import CohortSnapshot
from services.prediction.orchestrator import PredictionService
from services.prediction.sources import SnapshotSource


def get_prediction_service(snapshot: CohortSnapshot) -> PredictionService:
    return PredictionService(SnapshotSource(snapshot))
