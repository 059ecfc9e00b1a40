from dataclasses import dataclass
from typing import List

from django.db import transaction
from django.utils import timezone
import structlog

from ..config import COMPLETION_QUALITY
from ..data.repos import (
    get_review_record,
    latest_completion,
    lock_user,
    persist_schedule,
    review_state,
)
from ..domain.scheduling import ScheduleResult, quality_from_score, round_half_up, schedule
from ..utils.time import to_utc_iso
from .gamification import Award, award_completion, award_quiz

logger = structlog.get_logger()


@dataclass
class CompletionResult:
    user: object
    schedule: ScheduleResult
    award: Award


@dataclass
class QuizResult:
    user: object
    score: int
    results: List[dict]
    schedule: ScheduleResult
    award: Award


def record_review(user, lesson, quality, now, completed=False):
    """
    Run the scheduler against the user's stored record for ``lesson``
    and persist the outcome. The caller holds the user lock.
    """
    record = get_review_record(user, lesson)
    result = schedule(review_state(record), quality, now)
    persist_schedule(user, lesson, result, completed=completed)

    logger.info("review_scheduled",
        user_id=str(user.pk),
        lesson_id=str(lesson.pk),
        quality=quality,
        first_review=record is None,
        outcome=result.outcome.value,
        interval_days=result.interval,
        ease_factor=result.ease_factor,
        repetitions=result.repetitions,
        next_review_utc=to_utc_iso(result.due_date),
    )
    return result


def complete_lesson(user_id, lesson, now=None):
    now = now or timezone.now()
    logger.info("lesson_completion_received", user_id=str(user_id), lesson_id=str(lesson.pk))

    # Serialize review updates per user
    with transaction.atomic():
        user = lock_user(user_id)
        previous = latest_completion(user)
        result = record_review(user, lesson, COMPLETION_QUALITY, now, completed=True)
        award = award_completion(user, previous, now)

    logger.info("lesson_completed",
        user_id=str(user.pk),
        lesson_id=str(lesson.pk),
        points_awarded=award.points,
        total_points=user.total_points,
        streak=user.streak,
        achievements=award.unlocked,
    )
    return CompletionResult(user=user, schedule=result, award=award)


def grade_quiz(questions, answers):
    """
    Compare ``answers`` (selected option indices, by question position)
    against the questions and return (score percent, per-question results).
    """
    correct = 0
    results = []
    for index, question in enumerate(questions):
        user_answer = answers[index] if index < len(answers) else None
        is_correct = user_answer == question.correct_answer
        if is_correct:
            correct += 1
        results.append({
            "question": question.question,
            "options": question.options,
            "user_answer": user_answer,
            "correct_answer": question.correct_answer,
            "is_correct": is_correct,
            "explanation": question.explanation,
        })
    score = round_half_up(correct / len(questions) * 100)
    return score, results


def submit_quiz(user_id, lesson, answers, now=None):
    now = now or timezone.now()
    questions = list(lesson.quiz_questions.all())
    if not questions:
        raise ValueError(f"lesson {lesson.pk} has no quiz questions")

    score, results = grade_quiz(questions, answers)
    quality = quality_from_score(score)
    logger.info("quiz_graded", user_id=str(user_id), lesson_id=str(lesson.pk), score=score, quality=quality)

    with transaction.atomic():
        user = lock_user(user_id)
        result = record_review(user, lesson, quality, now)
        award = award_quiz(user, score, now)

    logger.info("quiz_submitted",
        user_id=str(user.pk),
        lesson_id=str(lesson.pk),
        score=score,
        bonus_points=award.points,
        total_points=user.total_points,
        achievements=award.unlocked,
    )
    return QuizResult(user=user, score=score, results=results, schedule=result, award=award)
