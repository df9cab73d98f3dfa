"""Tests for pass/likely multiples and rank boundaries."""

from fractions import Fraction

import pytest

from services.errors import InvalidRecruitPolicy
from services.prediction.thresholds import (
    build_thresholds,
    get_likely_multiple,
    get_pass_count,
    get_pass_multiple,
)


class TestGetPassMultiple:
    @pytest.mark.parametrize("recruit_count, expected", [
        (150, Fraction(3, 2)),
        (400, Fraction(3, 2)),
        (149, Fraction(8, 5)),
        (100, Fraction(8, 5)),
        (99, Fraction(17, 10)),
        (50, Fraction(17, 10)),
        (49, Fraction(9, 5)),
        (6, Fraction(9, 5)),
    ])
    def test_graduated_table(self, recruit_count, expected):
        assert get_pass_multiple(recruit_count) == expected

    def test_fifty_is_exactly_one_point_seven(self):
        assert get_pass_multiple(50) == Fraction(17, 10)
        assert float(get_pass_multiple(50)) == 1.7

    def test_three_recruits_uses_absolute_count(self):
        assert get_pass_multiple(3) == Fraction(8, 3)
        assert float(get_pass_multiple(3)) == pytest.approx(2.6667, abs=1e-4)

    @pytest.mark.parametrize("recruit_count, pass_count", [(1, 3), (2, 6), (3, 8), (4, 9), (5, 10)])
    def test_small_cohort_pass_counts(self, recruit_count, pass_count):
        assert get_pass_count(recruit_count) == pass_count

    def test_defined_for_every_positive_count(self):
        for recruit_count in range(1, 500):
            assert get_pass_multiple(recruit_count) >= 1

    @pytest.mark.parametrize("recruit_count", [0, -1, -150])
    def test_non_positive_is_invalid(self, recruit_count):
        with pytest.raises(InvalidRecruitPolicy):
            get_pass_multiple(recruit_count)

    def test_invalid_policy_is_internal(self):
        with pytest.raises(InvalidRecruitPolicy) as exc:
            get_pass_multiple(0)
        assert exc.value.status == 500
        assert exc.value.user_facing is False


class TestLikelyMultiple:
    def test_capped_at_standard(self):
        assert get_likely_multiple(Fraction(17, 10)) == Fraction(6, 5)
        assert float(get_likely_multiple(Fraction(17, 10))) == 1.2

    def test_never_exceeds_pass_multiple(self):
        assert get_likely_multiple(Fraction(1)) == Fraction(1)


class TestBuildThresholds:
    def test_pass_count_has_no_float_drift(self):
        assert build_thresholds(50).pass_count == 85
        assert build_thresholds(100).pass_count == 160
        assert build_thresholds(6).pass_count == 11

    def test_boundaries_for_ten_recruits(self):
        t = build_thresholds(10)
        assert (t.sure_max, t.likely_max, t.possible_max, t.challenge_max) == (10, 12, 18, 23)

    def test_monotonic_boundaries(self):
        for recruit_count in range(1, 400):
            t = build_thresholds(recruit_count)
            assert t.likely_multiple <= t.pass_multiple
            assert t.sure_max <= t.likely_max <= t.possible_max <= t.challenge_max
