"""OMR scoring for police written exams.

Each subject is scored at 2.5 points per correct answer. A bonus of
``max_score * bonus_rate`` is added per subject, and a subject whose raw score
is under 40% of its maximum is a cutoff (과락), which removes the submission
from every ranking.
"""

import logging
from collections.abc import Iterable

from models.schemas.bonus import BonusType, bonus_rate
from models.schemas.cohort import ExamType
from models.schemas.score_result import (
    AnswerInput,
    AnswerKeyEntry,
    AnswerResult,
    ScoreResult,
    SubjectScore,
)
from services.errors import ScoringError

logger = logging.getLogger(__name__)

SUBJECT_CUTOFF_RATE = 0.4
MIN_CHOICE = 1
MAX_CHOICE = 4

# (name, question_count, point_per_question, max_score)
SUBJECT_RULES: dict[ExamType, tuple[tuple[str, int, float, float], ...]] = {
    ExamType.PUBLIC: (
        ("헌법", 20, 2.5, 50),
        ("형사법", 40, 2.5, 100),
        ("경찰학", 40, 2.5, 100),
    ),
    ExamType.CAREER: (
        ("범죄학", 20, 2.5, 50),
        ("형사법", 40, 2.5, 100),
        ("경찰학", 40, 2.5, 100),
    ),
}

VETERAN_PERCENTS = {0: None, 5: BonusType.VETERAN_5, 10: BonusType.VETERAN_10}
HERO_PERCENTS = {0: None, 3: BonusType.HERO_3, 5: BonusType.HERO_5}


def round_score(value: float) -> float:
    return round(value, 2)


def normalize_subject_name(name: str) -> str:
    return "".join(name.split())


def bonus_type_from_percents(veteran_percent: int, hero_percent: int) -> BonusType:
    """Map the two percentage pickers of the input form to one BonusType."""
    if veteran_percent > 0 and hero_percent > 0:
        raise ScoringError("취업지원과 의사상자 가산점은 동시에 적용할 수 없습니다.")
    if veteran_percent not in VETERAN_PERCENTS:
        raise ScoringError("취업지원 가산점은 0, 5, 10%만 선택할 수 있습니다.")
    if hero_percent not in HERO_PERCENTS:
        raise ScoringError("의사상자 가산점은 0, 3, 5%만 선택할 수 있습니다.")
    return VETERAN_PERCENTS[veteran_percent] or HERO_PERCENTS[hero_percent] or BonusType.NONE


def _index_answer_key(
    exam_type: ExamType, answer_key: Iterable[AnswerKeyEntry]
) -> dict[tuple[str, int], int]:
    rules = {normalize_subject_name(rule[0]): rule for rule in SUBJECT_RULES[exam_type]}
    indexed: dict[tuple[str, int], int] = {}
    for entry in answer_key:
        subject = normalize_subject_name(entry.subject_name)
        if subject in rules:
            indexed[(subject, entry.question_no)] = entry.correct_answer

    for name, question_count, _, _ in SUBJECT_RULES[exam_type]:
        subject = normalize_subject_name(name)
        for question_no in range(1, question_count + 1):
            if (subject, question_no) not in indexed:
                raise ScoringError(f"{name} 정답키가 모두 입력되지 않았습니다.")
    return indexed


def _index_answers(
    exam_type: ExamType, answers: Iterable[AnswerInput]
) -> dict[tuple[str, int], int]:
    rules = {normalize_subject_name(rule[0]): rule for rule in SUBJECT_RULES[exam_type]}
    selected: dict[tuple[str, int], int] = {}
    for answer in answers:
        subject = normalize_subject_name(answer.subject_name)
        rule = rules.get(subject)
        if rule is None:
            raise ScoringError(f"유효하지 않은 과목입니다: {answer.subject_name}")

        name, question_count = rule[0], rule[1]
        if answer.question_no < 1 or answer.question_no > question_count:
            raise ScoringError(f"{name} 문항 번호가 올바르지 않습니다.")
        if answer.answer < MIN_CHOICE or answer.answer > MAX_CHOICE:
            raise ScoringError(f"{name} {answer.question_no}번 문항 답안은 1~4만 가능합니다.")

        key = (subject, answer.question_no)
        if key in selected:
            raise ScoringError(f"{name} {answer.question_no}번 문항이 중복 제출되었습니다.")
        selected[key] = answer.answer
    return selected


def score_answers(
    exam_type: ExamType,
    answer_key: Iterable[AnswerKeyEntry],
    answers: Iterable[AnswerInput],
    bonus_type: BonusType = BonusType.NONE,
) -> ScoreResult:
    """Score one OMR sheet. Unanswered questions count as wrong."""
    exam_type = ExamType(exam_type)
    bonus_type = BonusType(bonus_type)
    rate = bonus_rate(bonus_type)
    key_map = _index_answer_key(exam_type, answer_key)
    selected = _index_answers(exam_type, answers)

    scores: list[SubjectScore] = []
    answer_results: list[AnswerResult] = []
    total_score = 0.0
    total_bonus = 0.0
    has_cutoff = False

    for name, question_count, point, max_score in SUBJECT_RULES[exam_type]:
        subject = normalize_subject_name(name)
        correct_count = 0
        for question_no in range(1, question_count + 1):
            choice = selected.get((subject, question_no))
            if choice is None:
                continue
            is_correct = choice == key_map[(subject, question_no)]
            correct_count += is_correct
            answer_results.append(AnswerResult(
                subject_name=name,
                question_no=question_no,
                selected_answer=choice,
                is_correct=is_correct,
            ))

        raw_score = round_score(correct_count * point)
        bonus_score = round_score(max_score * rate)
        is_cutoff = raw_score < round_score(max_score * SUBJECT_CUTOFF_RATE)
        has_cutoff = has_cutoff or is_cutoff
        total_score = round_score(total_score + raw_score)
        total_bonus = round_score(total_bonus + bonus_score)

        scores.append(SubjectScore(
            subject_name=name,
            question_count=question_count,
            correct_count=correct_count,
            raw_score=raw_score,
            max_score=max_score,
            bonus_score=bonus_score,
            final_score=round_score(raw_score + bonus_score),
            is_cutoff=is_cutoff,
        ))

    logger.debug(
        "Scored %s sheet: raw %.2f, bonus %.2f, cutoff=%s",
        exam_type.value, total_score, total_bonus, has_cutoff,
    )
    return ScoreResult(
        exam_type=exam_type,
        bonus_type=bonus_type,
        bonus_rate=rate,
        total_score=total_score,
        bonus_score=total_bonus,
        final_score=round_score(total_score + total_bonus),
        has_cutoff=has_cutoff,
        scores=scores,
        answers=answer_results,
    )
