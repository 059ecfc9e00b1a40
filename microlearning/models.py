from .data.models import MicroLesson, QuizQuestion, ReviewQueueEntry, ReviewRecord

__all__ = ["MicroLesson", "QuizQuestion", "ReviewRecord", "ReviewQueueEntry"]
