"""Tests for the PredictionService orchestration."""

import pytest

from models.schemas.bonus import BonusType
from models.schemas.cohort import CohortMember, ExamType
from models.schemas.pyramid import PyramidLevelKey
from services.errors import (
    BonusCapExceeded,
    CandidateNotFound,
    CandidateNotInCohort,
    CutoffFailed,
    InvalidRecruitPolicy,
    NoParticipants,
)
from services.prediction.orchestrator import PredictionService
from services.prediction.sources import SnapshotSource, region_recruit_count


def _service(snapshot, exclude_suspicious=False):
    return PredictionService(SnapshotSource(snapshot, exclude_suspicious=exclude_suspicious))


class TestCalculate:
    @pytest.mark.asyncio
    async def test_summary(self, snapshot):
        result = await _service(snapshot).calculate(103)
        summary = result.summary

        assert summary.submission_id == 3
        assert summary.my_rank == 3
        assert summary.my_multiple == 1.5
        assert summary.pass_multiple == 3.0
        assert summary.likely_multiple == 1.2
        assert summary.pass_count == 6
        assert summary.pass_line_score == 80
        assert summary.estimated_applicants == 40
        assert summary.total_participants == 10
        assert summary.prediction_grade == "가능권"
        assert summary.exam_type_label == "공채"
        assert summary.low_sample is False

    @pytest.mark.asyncio
    async def test_pyramid_and_competitors(self, snapshot):
        result = await _service(snapshot).calculate(103, limit=4)

        assert result.pyramid.current == PyramidLevelKey.POSSIBLE
        assert sum(result.pyramid.counts.values()) == 10
        assert result.competitors.total_pages == 3
        assert [c.is_mine for c in result.competitors.items] == [False, False, True, False]
        assert result.competitors.items[0].masked_name == "김**"

    @pytest.mark.asyncio
    async def test_low_sample_when_cohort_below_pass_count(self, make_snapshot):
        result = await _service(make_snapshot(recruit_count=10)).calculate(101)

        assert result.summary.pass_count == 18
        assert result.summary.low_sample is True
        assert result.summary.pass_line_score == 40
        assert result.summary.prediction_grade == "확실권"

    @pytest.mark.asyncio
    async def test_specific_submission(self, snapshot):
        snapshot.submissions.append(
            CohortMember(id=11, user_id=103, user_name="박민수", raw_score=95, final_score=95)
        )
        service = _service(snapshot)

        latest = await service.calculate(103)
        assert latest.summary.submission_id == 11
        assert latest.summary.my_rank == 3

        earlier = await service.calculate(103, submission_id=3)
        assert earlier.summary.submission_id == 3
        assert earlier.summary.my_rank == 4

    @pytest.mark.asyncio
    async def test_career_quota_falls_back_to_general(self, snapshot):
        snapshot.exam_type = ExamType.CAREER
        result = await _service(snapshot).calculate(103)
        assert result.summary.recruit_count == 2
        assert result.summary.exam_type_label == "경행경채"


class TestCalculateErrors:
    @pytest.mark.asyncio
    async def test_unknown_user(self, snapshot):
        with pytest.raises(CandidateNotFound):
            await _service(snapshot).calculate(999)

    @pytest.mark.asyncio
    async def test_unknown_submission_id(self, snapshot):
        with pytest.raises(CandidateNotFound):
            await _service(snapshot).calculate(103, submission_id=4)

    @pytest.mark.asyncio
    async def test_cutoff_failed(self, snapshot):
        snapshot.submissions[2].has_cutoff = True
        with pytest.raises(CutoffFailed):
            await _service(snapshot).calculate(103)

    @pytest.mark.asyncio
    async def test_zero_recruit_count(self, make_snapshot):
        with pytest.raises(InvalidRecruitPolicy) as exc:
            await _service(make_snapshot(recruit_count=0)).calculate(103)
        assert exc.value.user_facing is False

    @pytest.mark.asyncio
    async def test_excluded_suspicious_candidate_is_not_found(self, snapshot):
        snapshot.submissions[2].is_suspicious = True
        with pytest.raises(CandidateNotFound):
            await _service(snapshot, exclude_suspicious=True).calculate(103)

    @pytest.mark.asyncio
    async def test_excluded_suspicious_falls_back_to_clean_submission(self, snapshot):
        snapshot.submissions.append(CohortMember(
            id=11, user_id=103, raw_score=95, final_score=95, is_suspicious=True,
        ))
        result = await _service(snapshot, exclude_suspicious=True).calculate(103)
        assert result.summary.submission_id == 3
        assert result.summary.total_participants == 10

    @pytest.mark.asyncio
    async def test_candidate_missing_from_cohort(self, snapshot):
        class DropsCandidate(SnapshotSource):
            async def load_cohort(self, exam_id, region_id, exam_type):
                members = await super().load_cohort(exam_id, region_id, exam_type)
                return [m for m in members if m.id != 3]

        with pytest.raises(CandidateNotInCohort) as exc:
            await PredictionService(DropsCandidate(snapshot)).calculate(103)
        assert exc.value.status == 500

    @pytest.mark.asyncio
    async def test_suspicious_rows_kept_by_default(self, snapshot):
        snapshot.submissions[0].is_suspicious = True
        result = await _service(snapshot).calculate(103)
        assert result.summary.total_participants == 10

    @pytest.mark.asyncio
    async def test_empty_cohort(self, snapshot):
        class EmptyCohort(SnapshotSource):
            async def load_cohort(self, exam_id, region_id, exam_type):
                return []

        with pytest.raises(NoParticipants):
            await PredictionService(EmptyCohort(snapshot)).calculate(103)


class TestCompetitors:
    @pytest.mark.asyncio
    async def test_page(self, snapshot):
        page = await _service(snapshot).competitors(103, page=2, limit=4)
        assert page.page == 2
        assert [c.rank for c in page.items] == [3, 6, 7, 8]
        assert page.items[-1].masked_name == "임**"

    @pytest.mark.asyncio
    async def test_blank_name_is_anonymous(self, snapshot):
        page = await _service(snapshot).competitors(103, page=3, limit=4)
        assert page.items[-1].masked_name == "익명**"


class TestValidateBonusCap:
    def _hero_snapshot(self, make_snapshot):
        # Recruit 10 -> pass count 18; id 11 passes only on its bonus.
        snapshot = make_snapshot(recruit_count=10)
        snapshot.submissions.append(CohortMember(
            id=11, user_id=111, raw_score=20, final_score=95, bonus_type=BonusType.HERO_5,
        ))
        snapshot.submissions += [
            CohortMember(id=i, user_id=200 + i, raw_score=30, final_score=30)
            for i in range(12, 32)
        ]
        return snapshot

    @pytest.mark.asyncio
    async def test_rejects_over_cap(self, make_snapshot):
        snapshot = self._hero_snapshot(make_snapshot)
        with pytest.raises(BonusCapExceeded):
            await _service(snapshot).validate_bonus_cap(
                exam_id=1,
                region_id=7,
                exam_type=ExamType.PUBLIC,
                bonus_type=BonusType.HERO_3,
                raw_score=30,
                final_score=85,
            )

    @pytest.mark.asyncio
    async def test_edit_of_existing_row_passes(self, make_snapshot):
        snapshot = self._hero_snapshot(make_snapshot)
        await _service(snapshot).validate_bonus_cap(
            exam_id=1,
            region_id=7,
            exam_type=ExamType.PUBLIC,
            bonus_type=BonusType.HERO_5,
            raw_score=20,
            final_score=95,
            submission_id=11,
        )


def test_region_recruit_count(snapshot):
    region = snapshot.region
    assert region_recruit_count(region, ExamType.CAREER) == 2
    region.recruit_count_career = 1
    assert region_recruit_count(region, ExamType.CAREER) == 1
    assert region_recruit_count(region, ExamType.PUBLIC) == 2
