"""Paginated, name-masked view of a ranked cohort."""

import math

from config import settings
from models.schemas.cohort import CohortMember
from models.schemas.prediction_result import Competitor, CompetitorPage
from services.prediction.score_bands import ScoreBandTable
from services.prediction.thresholds import to_display

ANONYMOUS_MASK = "익명**"


def mask_name(name: str | None) -> str:
    """Keep the first character only: "홍길동" -> "홍**"."""
    trimmed = (name or "").strip()
    if not trimmed:
        return ANONYMOUS_MASK
    return f"{trimmed[0]}**"


def parse_page(value: int | None) -> int:
    if not isinstance(value, int) or value < 1:
        return 1
    return value


def parse_limit(value: int | None) -> int:
    if not isinstance(value, int) or value < 1:
        return settings.competitor_default_limit
    return min(value, settings.competitor_max_limit)


def paginate_competitors(
    table: ScoreBandTable,
    members: dict[int, CohortMember],
    my_submission_id: int | None,
    page: int | None = None,
    limit: int | None = None,
) -> CompetitorPage:
    """Rank-ordered page of competitors; ``page`` is clamped to the last page."""
    page = parse_page(page)
    limit = parse_limit(limit)

    total = table.total_participants
    total_pages = max(1, math.ceil(total / limit))
    page = min(page, total_pages)
    start = (page - 1) * limit

    items: list[Competitor] = []
    for submission_id, rank, score in table.ranked_entries()[start:start + limit]:
        member = members.get(submission_id)
        items.append(Competitor(
            submission_id=submission_id,
            user_id=member.user_id if member else 0,
            rank=rank,
            score=to_display(score),
            masked_name=mask_name(member.user_name if member else ""),
            is_mine=submission_id == my_submission_id,
        ))

    return CompetitorPage(
        page=page,
        limit=limit,
        total_count=total,
        total_pages=total_pages,
        items=items,
    )
