"""Score band builder: dense, tie-aware ranking of a cohort's final scores.

Scores are grouped on a fixed-point ``ScoreKey`` (score x 10^6, rounded) so
that two floats that print the same always land in the same band. Ties share
one rank and the next distinct score skips past the tied group:

    [100, 100, 90, 90, 90, 80]  ->  ranks 1, 1, 3, 3, 3, 6
"""

import bisect
import logging
from collections.abc import Iterable
from typing import NewType

from models.schemas.score_band import ScoreBand
from services.errors import NoParticipants

logger = logging.getLogger(__name__)

ScoreKey = NewType("ScoreKey", int)

SCORE_KEY_SCALE = 1_000_000


def to_score_key(score: float) -> ScoreKey:
    return ScoreKey(round(float(score) * SCORE_KEY_SCALE))


def from_score_key(key: ScoreKey) -> float:
    return key / SCORE_KEY_SCALE


class ScoreBandTable:
    """Ordered, immutable list of score bands for one cohort."""

    def __init__(self, bands: list[ScoreBand]) -> None:
        self._bands = tuple(bands)
        self._by_key = {band.key: band for band in self._bands}
        self._end_ranks = [band.end_rank for band in self._bands]
        self._rank_by_id = {
            submission_id: band.rank
            for band in self._bands
            for submission_id in band.submission_ids
        }
        self.total_participants = sum(band.count for band in self._bands)

    @property
    def bands(self) -> tuple[ScoreBand, ...]:
        return self._bands

    def band_for_score(self, score: float) -> ScoreBand | None:
        """Exact ScoreKey match only; never interval membership."""
        return self._by_key.get(to_score_key(score))

    def rank_of_score(self, score: float) -> int | None:
        band = self.band_for_score(score)
        return band.rank if band else None

    def band_at_position(self, position: int) -> ScoreBand | None:
        """Band occupying the 1-based ``position``; None when out of range."""
        if position < 1 or position > self.total_participants:
            return None
        return self._bands[bisect.bisect_left(self._end_ranks, position)]

    def score_at_position(self, position: int) -> float | None:
        band = self.band_at_position(position)
        return band.score if band else None

    def bands_ranked_within(self, start: int, end: int | None = None) -> list[ScoreBand]:
        """Bands whose shared rank lies in ``[start, end]`` (end None = open).

        A tie band belongs wholly to the range holding its rank, even when its
        members occupy positions past ``end``.
        """
        return [
            band for band in self._bands
            if band.rank >= start and (end is None or band.rank <= end)
        ]

    def ranked_entries(self) -> list[tuple[int, int, float]]:
        """``(submission_id, rank, score)`` by score desc, then id asc."""
        return [
            (submission_id, band.rank, band.score)
            for band in self._bands
            for submission_id in band.submission_ids
        ]

    def rank_of_submission(self, submission_id: int) -> int | None:
        return self._rank_by_id.get(submission_id)


def build_score_bands(entries: Iterable[tuple[int, float]]) -> ScoreBandTable:
    """Group ``(submission_id, final_score)`` pairs into rank bands.

    Raises NoParticipants for an empty cohort.
    """
    keyed = sorted(
        ((to_score_key(score), submission_id) for submission_id, score in entries),
        key=lambda item: (-item[0], item[1]),
    )
    if not keyed:
        raise NoParticipants()

    bands: list[ScoreBand] = []
    position = 1
    index = 0
    while index < len(keyed):
        key = keyed[index][0]
        ids: list[int] = []
        while index < len(keyed) and keyed[index][0] == key:
            ids.append(keyed[index][1])
            index += 1
        bands.append(ScoreBand(
            score=from_score_key(key),
            key=key,
            count=len(ids),
            rank=position,
            end_rank=position + len(ids) - 1,
            submission_ids=ids,
        ))
        position += len(ids)

    table = ScoreBandTable(bands)
    logger.debug(
        "Built %d score bands for %d participants", len(bands), table.total_participants
    )
    return table
