import math
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone as dt_tz
from typing import Optional

from .enums import ReviewOutcome
from ..config import (
    BOOTSTRAP_INTERVALS,
    DEFAULT_EASE_FACTOR,
    DEFAULT_INTERVAL_DAYS,
    MAX_QUALITY,
    MIN_EASE_FACTOR,
    MIN_QUALITY,
    PASSING_QUALITY,
    QUIZ_SCORE_PER_QUALITY,
)


@dataclass(frozen=True)
class ReviewState:
    """Scheduling fields of a stored review record."""

    interval: int
    ease_factor: float
    repetitions: int


@dataclass(frozen=True)
class ScheduleResult:
    completed_at: datetime
    review_date: datetime
    interval: int
    ease_factor: float
    repetitions: int
    outcome: ReviewOutcome

    @property
    def due_date(self) -> datetime:
        return self.review_date

    @property
    def state(self) -> ReviewState:
        return ReviewState(self.interval, self.ease_factor, self.repetitions)


def round_half_up(value: float) -> int:
    # round() would send 12.5 to 12
    return int(math.floor(value + 0.5))


def add_days(moment: datetime, days: int) -> datetime:
    """Exactly ``days`` x 24h after ``moment``, whatever DST does in its zone."""
    if moment.tzinfo is None:
        return moment + timedelta(days=days)
    return (moment.astimezone(dt_tz.utc) + timedelta(days=days)).astimezone(moment.tzinfo)


def quality_from_score(score: float) -> int:
    """Map a 0-100 quiz percentage onto the 0-5 quality scale."""
    quality = int(math.floor(score / QUIZ_SCORE_PER_QUALITY))
    return max(MIN_QUALITY, min(MAX_QUALITY, quality))


def next_ease_factor(ease_factor: float, quality: int) -> float:
    miss = MAX_QUALITY - quality
    return max(MIN_EASE_FACTOR, ease_factor + (0.1 - miss * (0.08 + miss * 0.02)))


def schedule(existing: Optional[ReviewState], quality: int, now: datetime) -> ScheduleResult:
    """
    SM-2 update for one lesson review.

    ``existing`` is None on the first review of a lesson. That bootstrap
    path keeps the default ease factor whatever the quality; only
    reviews of a stored record move it.
    """
    if not MIN_QUALITY <= quality <= MAX_QUALITY:
        raise ValueError(f"quality must be between {MIN_QUALITY} and {MAX_QUALITY}, got {quality}")

    prior = existing or ReviewState(DEFAULT_INTERVAL_DAYS, DEFAULT_EASE_FACTOR, 0)
    repetitions = prior.repetitions + 1
    ease_factor = prior.ease_factor

    if quality < PASSING_QUALITY:
        outcome = ReviewOutcome.LAPSED
        repetitions = 0
        interval = DEFAULT_INTERVAL_DAYS
    else:
        outcome = ReviewOutcome.RECALLED
        if repetitions in BOOTSTRAP_INTERVALS:
            interval = BOOTSTRAP_INTERVALS[repetitions]
        else:
            interval = round_half_up(prior.interval * prior.ease_factor)
        if existing is not None:
            ease_factor = next_ease_factor(prior.ease_factor, quality)

    due = add_days(now, interval)
    return ScheduleResult(
        completed_at=now,
        review_date=due,
        interval=interval,
        ease_factor=ease_factor,
        repetitions=repetitions,
        outcome=outcome,
    )
