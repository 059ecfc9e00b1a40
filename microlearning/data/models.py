from django.conf import settings
from django.db import models
from django.utils import timezone

from ..config import DEFAULT_EASE_FACTOR, DEFAULT_INTERVAL_DAYS
from ..domain.enums import Difficulty


class MicroLesson(models.Model):
    title = models.CharField(max_length=200)
    description = models.TextField()
    content = models.TextField()
    category = models.CharField(max_length=100)
    difficulty = models.CharField(
        max_length=20,
        choices=[(d.value, d.value.title()) for d in Difficulty],
    )
    estimated_time = models.PositiveIntegerField(default=5)  # minutes
    key_points = models.JSONField(default=list, blank=True)
    practice_exercise = models.TextField(blank=True, default="")
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["category", "is_active"], name="microlesson_category_idx"),
        ]

    def __str__(self):
        return self.title


class QuizQuestion(models.Model):
    lesson = models.ForeignKey(MicroLesson, related_name="quiz_questions", on_delete=models.CASCADE)
    question = models.TextField()
    options = models.JSONField(default=list)
    correct_answer = models.PositiveSmallIntegerField()  # index into options
    explanation = models.TextField(blank=True, default="")
    position = models.PositiveSmallIntegerField(default=0)

    class Meta:
        ordering = ["position", "id"]


class ReviewRecord(models.Model):
    user = models.ForeignKey(settings.AUTH_USER_MODEL, related_name="review_records", on_delete=models.CASCADE)
    lesson = models.ForeignKey(MicroLesson, related_name="review_records", on_delete=models.CASCADE)
    completed_at = models.DateTimeField(default=timezone.now)
    # set only by plain lesson completion, never by a quiz
    lesson_completed_at = models.DateTimeField(null=True, blank=True)
    review_date = models.DateTimeField()
    interval = models.PositiveIntegerField(default=DEFAULT_INTERVAL_DAYS)  # days
    ease_factor = models.FloatField(default=DEFAULT_EASE_FACTOR)
    repetitions = models.PositiveIntegerField(default=0)

    class Meta:
        unique_together = (("user", "lesson"),)
        indexes = [
            models.Index(fields=["user", "completed_at"], name="reviewrecord_user_done_idx"),
        ]


class ReviewQueueEntry(models.Model):
    user = models.ForeignKey(settings.AUTH_USER_MODEL, related_name="review_queue", on_delete=models.CASCADE)
    lesson = models.ForeignKey(MicroLesson, related_name="queue_entries", on_delete=models.CASCADE)
    due_date = models.DateTimeField()

    class Meta:
        unique_together = (("user", "lesson"),)
        indexes = [
            models.Index(fields=["user", "due_date"], name="reviewqueue_user_due_idx"),
        ]
