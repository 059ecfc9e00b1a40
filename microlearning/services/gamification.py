from dataclasses import dataclass, field
from typing import List

import structlog

from accounts.models import UserAchievement
from ..config import (
    COMPLETION_POINTS,
    FIRST_LESSON_COUNT,
    PERFECT_SCORE,
    QUIZ_BONUS,
    QUIZ_MASTER_COUNT,
    STREAK_BONUS,
    TEN_LESSONS_COUNT,
)
from ..data.repos import count_completed_lessons, count_reviewed_lessons
from ..domain.enums import Achievement
from ..utils.time import ONE_DAY, local_date

logger = structlog.get_logger()


@dataclass
class Award:
    points: int = 0
    unlocked: List[str] = field(default_factory=list)


def unlock(user, achievement, now):
    _, created = UserAchievement.objects.get_or_create(
        user=user, achievement_id=achievement.value,
        defaults={"unlocked_at": now},
    )
    if created:
        logger.info("achievement_unlocked", user_id=str(user.pk), achievement=achievement.value)
    return created


def streak_bonus(streak):
    for threshold, bonus in STREAK_BONUS:
        if streak >= threshold:
            return bonus
    return 0


def quiz_bonus(score):
    for threshold, bonus in QUIZ_BONUS:
        if score >= threshold:
            return bonus
    return 0


def advance_streak(user, previous_completion, now):
    """
    Update user.streak from the completion before this one and return
    the streak bonus earned. Only a completion on the day after the
    previous one extends the streak (and pays a bonus); a second
    completion on the same day leaves it as it is.
    """
    today = local_date(now)
    last_day = local_date(previous_completion) if previous_completion else None

    if last_day == today - ONE_DAY:
        user.streak += 1
        return streak_bonus(user.streak)
    if last_day == today:
        user.streak = max(user.streak, 1)
        return 0
    user.streak = 1
    return 0


def award_completion(user, previous_completion, now):
    """Points, streak and lesson-count achievements for a completed lesson."""
    award = Award(points=COMPLETION_POINTS)
    award.points += advance_streak(user, previous_completion, now)
    user.total_points += award.points

    completed = count_completed_lessons(user)
    milestones = {
        FIRST_LESSON_COUNT: Achievement.FIRST_LESSON,
        TEN_LESSONS_COUNT: Achievement.TEN_LESSONS,
    }
    if completed in milestones and unlock(user, milestones[completed], now):
        award.unlocked.append(milestones[completed].value)

    user.save(update_fields=["total_points", "streak"])
    return award


def award_quiz(user, score, now):
    """Bonus points and quiz achievements for a graded quiz."""
    award = Award(points=quiz_bonus(score))
    user.total_points += award.points

    if score == PERFECT_SCORE and unlock(user, Achievement.PERFECT_SCORE, now):
        award.unlocked.append(Achievement.PERFECT_SCORE.value)
    if count_reviewed_lessons(user) == QUIZ_MASTER_COUNT and unlock(user, Achievement.QUIZ_MASTER, now):
        award.unlocked.append(Achievement.QUIZ_MASTER.value)

    user.save(update_fields=["total_points"])
    return award
