from django.urls import path
from .views import (
    CategoryLessonsView,
    CompleteLessonView,
    GenerateLessonView,
    LessonDetailView,
    LessonListView,
    QuizSubmissionView,
    ReviewLessonsView,
)

urlpatterns = [
    path("lessons", LessonListView.as_view(), name="lesson-list"),
    path("lessons/review", ReviewLessonsView.as_view(), name="lesson-review"),
    path("lessons/generate", GenerateLessonView.as_view(), name="lesson-generate"),
    path("lessons/category/<str:category>", CategoryLessonsView.as_view(), name="lesson-category"),
    path("lessons/<int:lesson_id>", LessonDetailView.as_view(), name="lesson-detail"),
    path("lessons/<int:lesson_id>/complete", CompleteLessonView.as_view(), name="lesson-complete"),
    path("lessons/<int:lesson_id>/quiz", QuizSubmissionView.as_view(), name="lesson-quiz"),
]
