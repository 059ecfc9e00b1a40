from django.apps import AppConfig


class MicrolearningConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "microlearning"
    verbose_name = "Micro-learning"
