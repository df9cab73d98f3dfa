"""Final (post-interview) ranking from scores known after the fitness test."""

import logging

from models.schemas.bonus import BonusFamily, BonusType, family_of
from models.schemas.final_rank import FinalPrediction, FinalRank, FinalRankEntry, KnownFinalScore
from services.scoring import round_score

logger = logging.getLogger(__name__)


def martial_bonus_point(dan_level: float) -> int:
    if dan_level >= 4:
        return 2
    if dan_level >= 2:
        return 1
    return 0


def calculate_known_final_score(
    written_score: float,
    fitness_passed: bool,
    martial_dan_level: float = 0,
    additional_bonus_point: float = 0.0,
) -> KnownFinalScore:
    if not fitness_passed:
        return KnownFinalScore()

    martial = martial_bonus_point(martial_dan_level)
    known_bonus = round_score(martial + max(0.0, additional_bonus_point))
    return KnownFinalScore(
        martial_bonus_point=martial,
        known_bonus_point=known_bonus,
        known_final_score=round_score(max(0.0, written_score) + known_bonus),
    )


def _sort_key(entry: FinalRankEntry):
    # Veteran-preferred candidates win ties on the known final score.
    is_veteran = family_of(entry.bonus_type) == BonusFamily.VETERAN
    return (
        -entry.known_final_score,
        not is_veteran,
        -entry.written_score,
        -entry.known_bonus_point,
        entry.submission_id,
    )


def rank_known_final_scores(entries: list[FinalRankEntry]) -> dict[int, int]:
    """Ordinal ranks (no shared ranks) keyed by submission id."""
    ordered = sorted(entries, key=_sort_key)
    return {entry.submission_id: index for index, entry in enumerate(ordered, start=1)}


def final_rank_for(entries: list[FinalRankEntry], submission_id: int) -> FinalRank:
    if not entries:
        return FinalRank(submission_id=submission_id)
    ranks = rank_known_final_scores(entries)
    return FinalRank(
        submission_id=submission_id,
        final_rank=ranks.get(submission_id),
        total_participants=len(entries),
    )


def predict_final(
    submission_id: int,
    written_score: float,
    fitness_passed: bool,
    others: list[FinalRankEntry],
    martial_dan_level: float = 0,
    additional_bonus_point: float = 0.0,
    bonus_type: BonusType = BonusType.NONE,
) -> FinalPrediction:
    """Score the candidate's known results and rank them against ``others``.

    A failed fitness test leaves the candidate unranked; ``others`` are still
    counted in ``total_participants``.
    """
    known = calculate_known_final_score(
        written_score, fitness_passed, martial_dan_level, additional_bonus_point
    )
    entries = [entry for entry in others if entry.submission_id != submission_id]
    if known.known_final_score is not None:
        entries.append(FinalRankEntry(
            submission_id=submission_id,
            known_final_score=known.known_final_score,
            written_score=written_score,
            known_bonus_point=known.known_bonus_point,
            bonus_type=bonus_type,
        ))

    rank = final_rank_for(entries, submission_id)
    logger.debug(
        "Final prediction for submission %d: rank %s of %d",
        submission_id, rank.final_rank, rank.total_participants,
    )
    return FinalPrediction(
        submission_id=submission_id,
        written_score=written_score,
        fitness_passed=fitness_passed,
        known=known,
        final_rank=rank.final_rank,
        total_participants=rank.total_participants,
    )
