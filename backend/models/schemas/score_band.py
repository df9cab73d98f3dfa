"""Tie bands produced by the score band builder."""

from pydantic import BaseModel


class ScoreBand(BaseModel):
    """All submissions sharing one score.

    ``rank`` is the 1-based rank of every member; the band occupies positions
    ``rank..end_rank`` of the ordering.
    """
    score: float
    key: int  # fixed-point ScoreKey of ``score``
    count: int
    rank: int
    end_rank: int
    submission_ids: list[int] = []  # ascending

    model_config = {"frozen": True}
