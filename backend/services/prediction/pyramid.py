"""Pyramid classifier: five pass-likelihood tiers over a ranked cohort.

Tier rank ranges (inclusive):
    sure            [1, sure_max]
    likely          (sure_max, likely_max]
    possible        (likely_max, possible_max]
    challenge       (possible_max, challenge_max]
    belowChallenge  (challenge_max, inf)

A score band is counted whole in the tier whose range holds its shared rank,
so tied candidates never straddle two tiers and the counts always add up to
the cohort size. The candidate's own tier is decided on rank / recruit count,
compared with ``<=`` at every boundary.
"""

import logging
from fractions import Fraction

from models.schemas.pyramid import (
    LEVEL_LABELS,
    Pyramid,
    PyramidLevel,
    PyramidLevelKey,
    ScoreBound,
)
from models.schemas.score_band import ScoreBand
from services.prediction.score_bands import ScoreBandTable
from services.prediction.thresholds import Thresholds, to_display

logger = logging.getLogger(__name__)

TIER_ORDER = (
    PyramidLevelKey.SURE,
    PyramidLevelKey.LIKELY,
    PyramidLevelKey.POSSIBLE,
    PyramidLevelKey.CHALLENGE,
    PyramidLevelKey.BELOW_CHALLENGE,
)


def classify_multiple(my_multiple: Fraction | float, thresholds: Thresholds) -> PyramidLevelKey:
    boundaries = (
        (Fraction(1), PyramidLevelKey.SURE),
        (thresholds.likely_multiple, PyramidLevelKey.LIKELY),
        (thresholds.pass_multiple, PyramidLevelKey.POSSIBLE),
        (thresholds.challenge_multiple, PyramidLevelKey.CHALLENGE),
    )
    my_multiple = Fraction(my_multiple)
    for boundary, key in boundaries:
        if my_multiple <= boundary:
            return key
    return PyramidLevelKey.BELOW_CHALLENGE


def classify_rank(my_rank: int, thresholds: Thresholds) -> PyramidLevelKey:
    return classify_multiple(Fraction(my_rank, thresholds.recruit_count), thresholds)


def grade_label(level: PyramidLevelKey) -> str:
    """Four-way prediction grade; everything past the pass line is 도전권."""
    if level == PyramidLevelKey.BELOW_CHALLENGE:
        return LEVEL_LABELS[PyramidLevelKey.CHALLENGE]
    return LEVEL_LABELS[level]


def tier_ranges(thresholds: Thresholds) -> dict[PyramidLevelKey, tuple[int, int | None]]:
    return {
        PyramidLevelKey.SURE: (1, thresholds.sure_max),
        PyramidLevelKey.LIKELY: (thresholds.sure_max + 1, thresholds.likely_max),
        PyramidLevelKey.POSSIBLE: (thresholds.likely_max + 1, thresholds.possible_max),
        PyramidLevelKey.CHALLENGE: (thresholds.possible_max + 1, thresholds.challenge_max),
        PyramidLevelKey.BELOW_CHALLENGE: (thresholds.challenge_max + 1, None),
    }


def _tier_bounds(
    bands: list[ScoreBand],
    start: int,
    end: int | None,
) -> tuple[ScoreBound, ScoreBound]:
    """(min_score, max_score) of the bands ranked in [start, end]."""
    if end is not None and start > end:
        return ScoreBound.empty(), ScoreBound.empty()

    if end is None:
        min_bound = ScoreBound.open()
    elif not bands:
        min_bound = ScoreBound.unreached()
    else:
        min_bound = ScoreBound.value(to_display(bands[-1].score))

    if start == 1:
        max_bound = ScoreBound.open()
    elif not bands:
        max_bound = ScoreBound.unreached()
    else:
        max_bound = ScoreBound.value(to_display(bands[0].score))
    return min_bound, max_bound


def _multiple_bounds(
    key: PyramidLevelKey, thresholds: Thresholds
) -> tuple[float | None, float | None]:
    edges = [
        None,
        Fraction(1),
        thresholds.likely_multiple,
        thresholds.pass_multiple,
        thresholds.challenge_multiple,
        None,
    ]
    index = TIER_ORDER.index(key)
    low, high = edges[index], edges[index + 1]
    return (
        None if low is None else to_display(low),
        None if high is None else to_display(high),
    )


def build_pyramid(table: ScoreBandTable, thresholds: Thresholds, my_rank: int) -> Pyramid:
    current = classify_rank(my_rank, thresholds)
    ranges = tier_ranges(thresholds)

    levels: list[PyramidLevel] = []
    for key in TIER_ORDER:
        start, end = ranges[key]
        bands = table.bands_ranked_within(start, end)
        count = sum(band.count for band in bands)
        min_score, max_score = _tier_bounds(bands, start, end)
        min_multiple, max_multiple = _multiple_bounds(key, thresholds)
        levels.append(PyramidLevel(
            key=key,
            label=LEVEL_LABELS[key],
            count=count,
            start_rank=start,
            end_rank=end,
            min_score=min_score,
            max_score=max_score,
            min_multiple=min_multiple,
            max_multiple=max_multiple,
            is_current=key == current,
        ))

    logger.debug(
        "Pyramid for rank %d of %d: %s", my_rank, table.total_participants, current.value
    )
    return Pyramid(
        levels=levels,
        counts={level.key.value: level.count for level in levels},
        current=current,
    )
