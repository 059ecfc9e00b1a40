from django.contrib.auth import get_user_model
from django.db.models import Max

from ..domain.scheduling import ReviewState
from .models import MicroLesson, ReviewQueueEntry, ReviewRecord


def lock_user(user_id):
    """
    Fetch the user row and lock it for update so review writes for one
    user are applied one after another. Must run inside transaction.atomic().
    """
    return get_user_model().objects.select_for_update().get(pk=user_id)


def get_active_lesson(lesson_id):
    return MicroLesson.objects.filter(pk=lesson_id, is_active=True).first()


def active_lessons(category=None):
    qs = MicroLesson.objects.filter(is_active=True)
    if category is not None:
        qs = qs.filter(category=category)
    return qs


def get_review_record(user, lesson):
    return ReviewRecord.objects.filter(user=user, lesson=lesson).first()


def review_state(record):
    if record is None:
        return None
    return ReviewState(
        interval=record.interval,
        ease_factor=record.ease_factor,
        repetitions=record.repetitions,
    )


def persist_schedule(user, lesson, result, completed=False):
    """
    Upsert the user's review record and queue entry for one lesson.
    ``completed`` marks a plain lesson completion rather than a quiz.
    """
    defaults = {
        "completed_at": result.completed_at,
        "review_date": result.review_date,
        "interval": result.interval,
        "ease_factor": result.ease_factor,
        "repetitions": result.repetitions,
    }
    if completed:
        defaults["lesson_completed_at"] = result.completed_at
    record, _ = ReviewRecord.objects.update_or_create(user=user, lesson=lesson, defaults=defaults)
    ReviewQueueEntry.objects.update_or_create(
        user=user, lesson=lesson,
        defaults={"due_date": result.due_date},
    )
    return record


def latest_completion(user):
    return ReviewRecord.objects.filter(user=user).aggregate(last=Max("lesson_completed_at"))["last"]


def completed_lesson_ids(user):
    return set(ReviewRecord.objects.filter(user=user, lesson_completed_at__isnull=False).values_list("lesson_id", flat=True))


def count_completed_lessons(user):
    return ReviewRecord.objects.filter(user=user, lesson_completed_at__isnull=False).count()


def count_reviewed_lessons(user):
    return ReviewRecord.objects.filter(user=user, repetitions__gt=0).count()


def due_queue_entries(user, now):
    return (
        ReviewQueueEntry.objects
        .select_related("lesson")
        .filter(user=user, due_date__lte=now, lesson__is_active=True)
        .order_by("due_date")
    )
