"""Pass-cut snapshot: cut scores per region and exam type.

Uses the same score bands and thresholds as the per-candidate prediction, so
the published cut lines always agree with the pyramid tiers.
"""

import logging
from collections import defaultdict
from collections.abc import Iterable

from models.schemas.cohort import ExamType, RegionQuota
from models.schemas.pass_cut import PassCutRow, RegionSubmission
from services.prediction.score_bands import ScoreBandTable, build_score_bands
from services.prediction.sources import region_recruit_count
from services.prediction.thresholds import build_thresholds, to_display

logger = logging.getLogger(__name__)


def _applicant_count(quota: RegionQuota, exam_type: ExamType) -> int | None:
    raw = quota.applicant_count if exam_type == ExamType.PUBLIC else quota.applicant_count_career
    if raw is None or raw < 0:
        return None
    return int(raw)


def _min_score_in_range(table: ScoreBandTable | None, start: int, end: int) -> float | None:
    """Score at rank ``end``; None until the cohort actually reaches that rank."""
    if table is None or start < 1 or start > end:
        return None
    score = table.score_at_position(end)
    return None if score is None else to_display(score)


def build_pass_cut_rows(
    quotas: Iterable[RegionQuota],
    submissions: Iterable[RegionSubmission],
    include_career: bool = False,
) -> list[PassCutRow]:
    exam_types = [ExamType.PUBLIC, ExamType.CAREER] if include_career else [ExamType.PUBLIC]

    grouped: dict[tuple[int, ExamType], list[RegionSubmission]] = defaultdict(list)
    for submission in submissions:
        if submission.has_cutoff or submission.is_suspicious:
            continue
        grouped[(submission.region_id, submission.exam_type)].append(submission)

    rows: list[PassCutRow] = []
    for quota in sorted(quotas, key=lambda q: q.region_name):
        for exam_type in exam_types:
            recruit_count = region_recruit_count(quota, exam_type)
            if recruit_count < 1:
                continue

            members = grouped.get((quota.region_id, exam_type), [])
            table = build_score_bands((m.id, m.final_score) for m in members) if members else None
            average = (
                to_display(sum(m.final_score for m in members) / len(members)) if members else None
            )
            applicant_count = _applicant_count(quota, exam_type)
            thresholds = build_thresholds(recruit_count)

            rows.append(PassCutRow(
                region_id=quota.region_id,
                region_name=quota.region_name,
                exam_type=exam_type,
                recruit_count=recruit_count,
                applicant_count=applicant_count,
                estimated_applicants=applicant_count or 0,
                is_applicant_count_exact=applicant_count is not None,
                competition_rate=(
                    to_display(applicant_count / recruit_count)
                    if applicant_count is not None else None
                ),
                participant_count=len(members),
                average_score=average,
                one_multiple_cut_score=_min_score_in_range(table, 1, recruit_count),
                sure_min_score=_min_score_in_range(table, 1, thresholds.sure_max),
                likely_min_score=_min_score_in_range(
                    table, thresholds.sure_max + 1, thresholds.likely_max
                ),
                possible_min_score=_min_score_in_range(
                    table, thresholds.likely_max + 1, thresholds.possible_max
                ),
            ))

    logger.debug("Built %d pass-cut rows", len(rows))
    return rows
