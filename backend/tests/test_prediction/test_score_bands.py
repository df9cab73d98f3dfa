"""Tests for the score band builder."""

import random

import pytest

from services.errors import NoParticipants
from services.prediction.score_bands import build_score_bands, to_score_key


def _entries(scores):
    return list(enumerate(scores, start=1))


class TestBuildScoreBands:
    def setup_method(self):
        self.table = build_score_bands(_entries([100, 100, 90, 90, 90, 80, 70, 60, 50, 40]))

    def test_scenario_bands(self):
        bands = self.table.bands
        assert (bands[0].score, bands[0].count, bands[0].rank, bands[0].end_rank) == (100, 2, 1, 2)
        assert (bands[1].score, bands[1].count, bands[1].rank, bands[1].end_rank) == (90, 3, 3, 5)
        assert (bands[2].score, bands[2].count, bands[2].rank, bands[2].end_rank) == (80, 1, 6, 6)
        assert len(bands) == 7

    def test_tied_score_shares_first_rank(self):
        assert self.table.rank_of_score(90) == 3
        for submission_id in (3, 4, 5):
            assert self.table.rank_of_submission(submission_id) == 3

    def test_next_distinct_score_skips_tied_group(self):
        assert self.table.rank_of_score(80) == 6

    def test_rank_lookup_is_exact_match_only(self):
        # 85 sits between two bands but belongs to neither
        assert self.table.rank_of_score(85) is None
        assert self.table.band_for_score(85) is None

    def test_band_at_position(self):
        assert self.table.band_at_position(4).score == 90
        assert self.table.score_at_position(6) == 80
        assert self.table.band_at_position(0) is None
        assert self.table.band_at_position(11) is None

    def test_bands_ranked_within(self):
        assert [b.score for b in self.table.bands_ranked_within(3, 6)] == [90, 80]
        # the 100 band holds rank 1, so it never lands in a range starting at 2
        assert [b.score for b in self.table.bands_ranked_within(2, 4)] == [90]
        assert [b.score for b in self.table.bands_ranked_within(8)] == [60, 50, 40]
        assert self.table.bands_ranked_within(5, 4) == []
        assert [b.rank for b in self.table.bands_ranked_within(9, 50)] == [9, 10]

    def test_ranked_entries_order(self):
        entries = self.table.ranked_entries()
        assert [e[0] for e in entries] == list(range(1, 11))
        assert [e[1] for e in entries] == [1, 1, 3, 3, 3, 6, 7, 8, 9, 10]


class TestScoreKey:
    def test_float_drift_lands_in_same_band(self):
        table = build_score_bands([(1, 0.1 + 0.2), (2, 0.3)])
        assert len(table.bands) == 1
        assert table.bands[0].count == 2

    def test_sub_epsilon_difference_is_a_tie(self):
        table = build_score_bands([(1, 90.0000001), (2, 90.0)])
        assert table.rank_of_submission(1) == table.rank_of_submission(2) == 1

    def test_distinct_hundredths_are_separate(self):
        table = build_score_bands([(1, 87.35), (2, 87.34)])
        assert [band.rank for band in table.bands] == [1, 2]

    def test_key_scale(self):
        assert to_score_key(87.5) == 87_500_000


class TestInvariants:
    @pytest.mark.parametrize("seed", range(5))
    def test_rank_sum_and_contiguity(self, seed):
        rng = random.Random(seed)
        scores = [rng.choice(range(100, 250)) * 0.5 for _ in range(300)]
        table = build_score_bands(_entries(scores))

        assert sum(band.count for band in table.bands) == table.total_participants == 300
        bands = table.bands
        for previous, current in zip(bands, bands[1:]):
            assert previous.score > current.score
            assert current.rank == previous.end_rank + 1
        assert bands[0].rank == 1
        assert bands[-1].end_rank == 300

    def test_ties_get_rank_of_first_sorted_row(self):
        scores = [70, 95, 70, 88, 95, 70]
        table = build_score_bands(_entries(scores))
        ordered = sorted(scores, reverse=True)
        for submission_id, score in _entries(scores):
            assert table.rank_of_submission(submission_id) == ordered.index(score) + 1

    def test_empty_cohort_raises(self):
        with pytest.raises(NoParticipants):
            build_score_bands([])
