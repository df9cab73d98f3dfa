"""Shared test configuration and fixtures."""

import pytest

from models.schemas.cohort import CohortMember, CohortSnapshot, ExamInfo, ExamType, RegionQuota

# Ten submissions, recruit 2: bands (100 x2), (90 x3), 80, 70, 60, 50, 40
SCENARIO_SCORES = [100, 100, 90, 90, 90, 80, 70, 60, 50, 40]
SCENARIO_NAMES = ["김철수", "이영희", "박민수", "최지은", "정하늘", "강다온", "윤서준", "임나래", "한지우", ""]


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "api: exercises the FastAPI app through TestClient"
    )


def scenario_snapshot(recruit_count: int = 2, **region_overrides) -> CohortSnapshot:
    members = [
        CohortMember(
            id=index,
            user_id=100 + index,
            user_name=SCENARIO_NAMES[index - 1],
            raw_score=score,
            final_score=score,
        )
        for index, score in enumerate(SCENARIO_SCORES, start=1)
    ]
    region = dict(region_id=7, region_name="서울", recruit_count=recruit_count)
    region.update(region_overrides)
    return CohortSnapshot(
        exam=ExamInfo(id=1, name="경찰공무원 1차", year=2026, round=1),
        region=RegionQuota(**region),
        exam_type=ExamType.PUBLIC,
        submissions=members,
    )


@pytest.fixture
def snapshot() -> CohortSnapshot:
    return scenario_snapshot()


@pytest.fixture
def make_snapshot():
    """Factory for the scenario cohort with a different quota."""
    return scenario_snapshot
