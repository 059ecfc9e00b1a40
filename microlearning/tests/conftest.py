import itertools

import pytest
from django.contrib.auth import get_user_model

from microlearning.models import MicroLesson, QuizQuestion

_titles = itertools.count(1)


@pytest.fixture
def user(db):
    return get_user_model().objects.create_user(username="learner", password="testpassword")


@pytest.fixture
def make_lesson(db):
    def _make(questions=2, category="learning", is_active=True, **fields):
        n = next(_titles)
        lesson = MicroLesson.objects.create(
            title=fields.pop("title", f"Lesson {n}"),
            description=f"Description {n}",
            content=f"Content {n}",
            category=category,
            difficulty=fields.pop("difficulty", "beginner"),
            is_active=is_active,
            **fields,
        )
        for i in range(questions):
            QuizQuestion.objects.create(
                lesson=lesson,
                question=f"Question {i + 1}?",
                options=["a", "b", "c", "d"],
                correct_answer=i % 4,
                explanation=f"Option {i % 4} is right.",
                position=i,
            )
        return lesson

    return _make


@pytest.fixture
def lesson(make_lesson):
    return make_lesson()
