from rest_framework import serializers

from ..data.models import MicroLesson, QuizQuestion
from ..domain.enums import Difficulty


class QuizSubmissionSerializer(serializers.Serializer):
    # Selected option index per question, in question order
    answers = serializers.ListField(child=serializers.IntegerField(allow_null=True), allow_empty=True)


class GenerateLessonSerializer(serializers.Serializer):
    topic = serializers.CharField(max_length=200)
    category = serializers.CharField(max_length=100)
    difficulty = serializers.ChoiceField(choices=[d.value for d in Difficulty])


class LessonSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = MicroLesson
        fields = ["id", "title", "description", "difficulty", "estimated_time", "category"]


class QuizQuestionSerializer(serializers.ModelSerializer):
    class Meta:
        model = QuizQuestion
        fields = ["id", "question", "options"]


class LessonDetailSerializer(serializers.ModelSerializer):
    quiz_questions = QuizQuestionSerializer(many=True, read_only=True)

    class Meta:
        model = MicroLesson
        fields = [
            "id", "title", "description", "content", "category", "difficulty",
            "estimated_time", "key_points", "practice_exercise", "quiz_questions",
            "created_at",
        ]
