from django.conf import settings
from django.contrib.auth.models import AbstractUser
from django.db import models
from django.utils import timezone


class User(AbstractUser):
    """
    Learner account. Extends the default Django user with the
    gamification totals reported back after every lesson.
    """

    total_points = models.PositiveIntegerField(default=0)
    level = models.PositiveIntegerField(default=1)
    streak = models.PositiveIntegerField(default=0)

    class Meta:
        indexes = [
            models.Index(fields=["-total_points"], name="accounts_user_points_idx"),
        ]


class UserAchievement(models.Model):
    user = models.ForeignKey(settings.AUTH_USER_MODEL, related_name="achievements", on_delete=models.CASCADE)
    achievement_id = models.CharField(max_length=64)
    unlocked_at = models.DateTimeField(default=timezone.now)

    class Meta:
        unique_together = (("user", "achievement_id"),)
        ordering = ["unlocked_at", "id"]
