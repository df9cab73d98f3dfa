import math
import os
from pydantic import field_validator
from pydantic_settings import BaseSettings

DEFAULT_ESTIMATED_APPLICANT_MULTIPLIER = 20


def _parse_cors_origins() -> list[str] | None:
    """Parse CORS_ORIGINS env var as comma-separated string or JSON list."""
    raw = os.environ.get("CORS_ORIGINS")
    if not raw:
        return None
    if raw.startswith("["):
        import json
        return json.loads(raw)
    return [o.strip() for o in raw.split(",") if o.strip()]


class Settings(BaseSettings):
    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]
    debug: bool = False
    log_level: str = "INFO"
    rate_limit: str = "60/minute"

    # Competitor list paging
    competitor_default_limit: int = 20
    competitor_max_limit: int = 50

    # Prediction summary
    estimated_applicant_multiplier: int = DEFAULT_ESTIMATED_APPLICANT_MULTIPLIER
    exclude_suspicious: bool = False  # drop suspicious submissions before ranking
    prediction_disclaimer: str = (
        "본 서비스는 참여자 데이터 기반 예측이며, 실제 합격 결과와 다를 수 있습니다."
    )

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @field_validator("estimated_applicant_multiplier", mode="before")
    @classmethod
    def _normalize_multiplier(cls, value):
        try:
            parsed = float(value)
        except (TypeError, ValueError):
            return DEFAULT_ESTIMATED_APPLICANT_MULTIPLIER
        if not math.isfinite(parsed) or parsed <= 0:
            return DEFAULT_ESTIMATED_APPLICANT_MULTIPLIER
        return max(1, round(parsed))


_cors_override = _parse_cors_origins()
settings = Settings(**{"cors_origins": _cors_override} if _cors_override else {})
