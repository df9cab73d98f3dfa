import logging

from fastapi import APIRouter, HTTPException, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from api.dependencies import get_prediction_service
from config import settings
from models.requests import (
    BonusValidationRequest,
    FinalPredictionRequest,
    FinalRankRequest,
    PassCutRequest,
    PredictionRequest,
    ScoringRequest,
)
from models.responses import BonusValidationResponse, PassCutResponse
from models.schemas.bonus import family_of
from models.schemas.final_rank import FinalPrediction, FinalRank
from models.schemas.prediction_result import CompetitorPage, PredictionResult
from models.schemas.score_result import ScoreResult
from services import final_prediction, scoring
from services.errors import PredictionError
from services.prediction.pass_cut import build_pass_cut_rows

logger = logging.getLogger(__name__)

router = APIRouter()
limiter = Limiter(key_func=get_remote_address)


def _to_http(err: PredictionError) -> HTTPException:
    if err.user_facing:
        logger.info("Rejected request: %s", err.message)
    else:
        logger.error("%s: %s", type(err).__name__, err.message)
    return HTTPException(status_code=err.status, detail=err.message)


@router.get("/health")
async def health():
    return {
        "status": "ok",
        "exclude_suspicious": settings.exclude_suspicious,
    }


@router.post("/prediction", response_model=PredictionResult)
@limiter.limit(settings.rate_limit)
async def prediction(request: Request, body: PredictionRequest):
    service = get_prediction_service(body.snapshot)
    try:
        return await service.calculate(
            body.user_id, submission_id=body.submission_id, page=body.page, limit=body.limit
        )
    except PredictionError as err:
        raise _to_http(err)


@router.post("/prediction/competitors", response_model=CompetitorPage)
@limiter.limit(settings.rate_limit)
async def prediction_competitors(request: Request, body: PredictionRequest):
    service = get_prediction_service(body.snapshot)
    try:
        return await service.competitors(
            body.user_id, submission_id=body.submission_id, page=body.page, limit=body.limit
        )
    except PredictionError as err:
        raise _to_http(err)


@router.post("/submissions/validate-bonus", response_model=BonusValidationResponse)
@limiter.limit(settings.rate_limit)
async def validate_bonus(request: Request, body: BonusValidationRequest):
    service = get_prediction_service(body.snapshot)
    snapshot = body.snapshot
    try:
        await service.validate_bonus_cap(
            exam_id=snapshot.exam.id,
            region_id=snapshot.region.region_id,
            exam_type=snapshot.exam_type,
            bonus_type=body.bonus_type,
            raw_score=body.raw_score,
            final_score=body.final_score,
            has_cutoff=body.has_cutoff,
            submission_id=body.submission_id,
        )
    except PredictionError as err:
        raise _to_http(err)
    return BonusValidationResponse(bonus_type=body.bonus_type, family=family_of(body.bonus_type))


@router.post("/scoring", response_model=ScoreResult)
@limiter.limit(settings.rate_limit)
async def score(request: Request, body: ScoringRequest):
    try:
        bonus_type = body.bonus_type or scoring.bonus_type_from_percents(
            body.veteran_percent, body.hero_percent
        )
        return scoring.score_answers(body.exam_type, body.answer_key, body.answers, bonus_type)
    except PredictionError as err:
        raise _to_http(err)


@router.post("/pass-cut", response_model=PassCutResponse)
@limiter.limit(settings.rate_limit)
async def pass_cut(request: Request, body: PassCutRequest):
    rows = build_pass_cut_rows(body.quotas, body.submissions, include_career=body.include_career)
    return PassCutResponse(rows=rows)


@router.post("/final-prediction/rank", response_model=FinalRank)
@limiter.limit(settings.rate_limit)
async def final_rank(request: Request, body: FinalRankRequest):
    return final_prediction.final_rank_for(body.entries, body.submission_id)


@router.post("/final-prediction", response_model=FinalPrediction)
@limiter.limit(settings.rate_limit)
async def final_prediction_route(request: Request, body: FinalPredictionRequest):
    return final_prediction.predict_final(
        body.submission_id,
        body.written_score,
        body.fitness_passed,
        body.entries,
        martial_dan_level=body.martial_dan_level,
        additional_bonus_point=body.additional_bonus_point,
        bonus_type=body.bonus_type,
    )
