import pytest

from config import DEFAULT_ESTIMATED_APPLICANT_MULTIPLIER, Settings


class TestEstimatedApplicantMultiplier:
    @pytest.mark.parametrize("value, expected", [
        (20, 20),
        ("35", 35),
        (12.6, 13),
        (0.3, 1),
    ])
    def test_valid_values(self, value, expected):
        assert Settings(estimated_applicant_multiplier=value).estimated_applicant_multiplier == expected

    @pytest.mark.parametrize("value", [0, -4, "abc", "nan", "inf", None])
    def test_invalid_values_fall_back(self, value):
        settings = Settings(estimated_applicant_multiplier=value)
        assert settings.estimated_applicant_multiplier == DEFAULT_ESTIMATED_APPLICANT_MULTIPLIER


def test_defaults():
    settings = Settings()
    assert settings.competitor_default_limit == 20
    assert settings.competitor_max_limit == 50
    assert settings.rate_limit == "60/minute"
