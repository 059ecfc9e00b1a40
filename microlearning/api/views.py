import uuid

from django.utils import timezone
from rest_framework import status, views
from rest_framework.exceptions import APIException, NotFound, ValidationError
from rest_framework.response import Response
import structlog

from ..data.repos import active_lessons, completed_lesson_ids, due_queue_entries, get_active_lesson
from ..services.content import ContentGenerationError, create_generated_lesson
from ..services.reviews import complete_lesson, submit_quiz
from ..utils.time import to_utc_iso
from .serializers import (
    GenerateLessonSerializer,
    LessonDetailSerializer,
    LessonSummarySerializer,
    QuizSubmissionSerializer,
)

base_logger = structlog.get_logger()


class ContentUnavailable(APIException):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = "Lesson generation is unavailable."
    default_code = "content_unavailable"


def request_logger(request):
    return base_logger.bind(request_id=str(uuid.uuid4()), user_id=str(request.user.pk))


def lesson_or_404(lesson_id):
    lesson = get_active_lesson(lesson_id)
    if lesson is None:
        raise NotFound("Lesson not found")
    return lesson


class LessonListView(views.APIView):
    def get(self, request):
        logger = request_logger(request)
        due_ids = {entry.lesson_id for entry in due_queue_entries(request.user, timezone.now())}
        completed = completed_lesson_ids(request.user)

        lessons = [
            {**row, "completed": row["id"] in completed, "due_for_review": row["id"] in due_ids}
            for row in LessonSummarySerializer(active_lessons(), many=True).data
        ]

        logger.info("lessons_listed", lesson_count=len(lessons), review_count=len(due_ids))
        return Response({"lessons": lessons, "review_count": len(due_ids)})


class ReviewLessonsView(views.APIView):
    def get(self, request):
        logger = request_logger(request)
        entries = list(due_queue_entries(request.user, timezone.now()))
        lessons = [
            {**LessonSummarySerializer(entry.lesson).data, "due_date": to_utc_iso(entry.due_date)}
            for entry in entries
        ]
        logger.info("review_lessons_listed", lesson_count=len(lessons))
        return Response({"lessons": lessons})


class CategoryLessonsView(views.APIView):
    def get(self, request, category):
        completed = completed_lesson_ids(request.user)
        lessons = [
            {**row, "completed": row["id"] in completed}
            for row in LessonSummarySerializer(active_lessons(category=category), many=True).data
        ]
        return Response({"lessons": lessons})


class LessonDetailView(views.APIView):
    def get(self, request, lesson_id):
        lesson = lesson_or_404(lesson_id)
        return Response({"lesson": LessonDetailSerializer(lesson).data})


class CompleteLessonView(views.APIView):
    def post(self, request, lesson_id):
        logger = request_logger(request)
        lesson = lesson_or_404(lesson_id)

        outcome = complete_lesson(request.user.pk, lesson)
        user, sched = outcome.user, outcome.schedule

        logger.info("complete_api_response",
            lesson_id=str(lesson.pk),
            interval_days=sched.interval,
            next_review_utc=to_utc_iso(sched.due_date),
            status=status.HTTP_200_OK,
        )
        return Response({
            "message": "Lesson marked as completed",
            "total_points": user.total_points,
            "level": user.level,
            "streak": user.streak,
            "points_awarded": outcome.award.points,
            "achievements": outcome.award.unlocked,
            "next_review_date": to_utc_iso(sched.due_date),
            "interval": sched.interval,
        })


class QuizSubmissionView(views.APIView):
    def post(self, request, lesson_id):
        logger = request_logger(request)
        lesson = lesson_or_404(lesson_id)

        s = QuizSubmissionSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        if not lesson.quiz_questions.exists():
            raise ValidationError({"answers": ["This lesson has no quiz."]})

        outcome = submit_quiz(request.user.pk, lesson, s.validated_data["answers"])
        user, sched = outcome.user, outcome.schedule

        logger.info("quiz_api_response",
            lesson_id=str(lesson.pk),
            score=outcome.score,
            interval_days=sched.interval,
            next_review_utc=to_utc_iso(sched.due_date),
            status=status.HTTP_200_OK,
        )
        return Response({
            "score": outcome.score,
            "results": outcome.results,
            "bonus_points": outcome.award.points,
            "achievements": outcome.award.unlocked,
            "message": f"You scored {outcome.score}% on the quiz!",
            "total_points": user.total_points,
            "level": user.level,
            "next_review_date": to_utc_iso(sched.due_date),
            "interval": sched.interval,
        })


class GenerateLessonView(views.APIView):
    def post(self, request):
        logger = request_logger(request)
        s = GenerateLessonSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        try:
            lesson = create_generated_lesson(**s.validated_data)
        except ContentGenerationError as e:
            logger.warning("generate_api_failed", topic=s.validated_data["topic"], error=str(e))
            raise ContentUnavailable(str(e)) from e

        return Response(
            {"message": "Lesson created successfully", "lesson": LessonDetailSerializer(lesson).data},
            status=status.HTTP_201_CREATED,
        )
