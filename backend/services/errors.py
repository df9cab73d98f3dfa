"""Typed errors raised by the scoring and prediction engine.

The engine only classifies severity. ``status`` is the HTTP-like code the API
layer should answer with; ``user_facing`` is False for configuration/data
errors that the end user cannot correct.
"""


class PredictionError(Exception):
    status: int = 400
    user_facing: bool = True

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status is not None:
            self.status = status


class NoParticipants(PredictionError):
    status = 404

    def __init__(self, message: str = "합격예측을 위한 참여 데이터가 아직 없습니다.") -> None:
        super().__init__(message)


class CandidateNotFound(PredictionError):
    status = 404

    def __init__(self, message: str = "합격예측을 위한 제출 데이터가 없습니다.") -> None:
        super().__init__(message)


class CutoffFailed(PredictionError):
    status = 400

    def __init__(self, message: str = "과락으로 인해 합격예측을 제공할 수 없습니다.") -> None:
        super().__init__(message)


class InvalidRecruitPolicy(PredictionError):
    status = 500
    user_facing = False

    def __init__(self, message: str = "선발인원 정보가 올바르지 않습니다.") -> None:
        super().__init__(message)


class CandidateNotInCohort(PredictionError):
    status = 500
    user_facing = False

    def __init__(self, message: str = "합격예측 대상 데이터가 없습니다.") -> None:
        super().__init__(message)


class BonusFamilyIneligible(PredictionError):
    status = 400


class BonusCapExceeded(PredictionError):
    status = 400

    def __init__(self, message: str, family: str, cap_count: int, cap_percent: int) -> None:
        super().__init__(message)
        self.family = family
        self.cap_count = cap_count
        self.cap_percent = cap_percent


class ScoringError(PredictionError):
    status = 400
