import logging
from datetime import timedelta

import pytest
from django.urls import reverse
from django.utils import timezone

from microlearning.models import ReviewQueueEntry
from microlearning.services.content import ContentGenerator, GeneratedContent

logger = logging.getLogger(__name__)

# Helpers

def as_user(user):
    return {"HTTP_X_USER_NAME": user.username}


def complete(client, user, lesson):
    resp = client.post(reverse("lesson-complete", kwargs={"lesson_id": lesson.pk}), **as_user(user))
    data = resp.json()
    logger.info(
        "POST /complete lesson=%s → status=%s interval=%s points=%s",
        lesson.pk, resp.status_code, data.get("interval"), data.get("total_points"),
    )
    return resp


def quiz(client, user, lesson, payload):
    url = reverse("lesson-quiz", kwargs={"lesson_id": lesson.pk})
    resp = client.post(url, data=payload, content_type="application/json", **as_user(user))
    logger.info("POST /quiz lesson=%s → status=%s", lesson.pk, resp.status_code)
    return resp


def list_lessons(client, user):
    return client.get(reverse("lesson-list"), **as_user(user))


# Tests

@pytest.mark.django_db
def test_requires_user_header(client):
    resp = client.get(reverse("lesson-list"))

    assert resp.status_code == 401


@pytest.mark.django_db
def test_unknown_user_rejected(client):
    resp = client.get(reverse("lesson-list"), HTTP_X_USER_NAME="nobody")

    assert resp.status_code == 401


@pytest.mark.django_db
def test_list_marks_completed_and_due(client, user, make_lesson):
    done, due, fresh = make_lesson(), make_lesson(), make_lesson()
    make_lesson(is_active=False)

    complete(client, user, done)
    complete(client, user, due)
    ReviewQueueEntry.objects.filter(user=user, lesson=due).update(due_date=timezone.now() - timedelta(minutes=1))

    data = list_lessons(client, user).json()
    by_id = {item["id"]: item for item in data["lessons"]}

    assert set(by_id) == {done.pk, due.pk, fresh.pk}
    assert by_id[done.pk]["completed"] is True
    assert by_id[done.pk]["due_for_review"] is False
    assert by_id[due.pk]["due_for_review"] is True
    assert by_id[fresh.pk]["completed"] is False
    assert data["review_count"] == 1
    # newest first
    assert [item["id"] for item in data["lessons"]] == [fresh.pk, due.pk, done.pk]


@pytest.mark.django_db
def test_review_queue_lists_due_lessons(client, user, make_lesson):
    due, later = make_lesson(), make_lesson()
    complete(client, user, due)
    complete(client, user, later)
    ReviewQueueEntry.objects.filter(user=user, lesson=due).update(due_date=timezone.now() - timedelta(hours=1))

    data = client.get(reverse("lesson-review"), **as_user(user)).json()

    assert [item["id"] for item in data["lessons"]] == [due.pk]
    assert "due_date" in data["lessons"][0]


@pytest.mark.django_db
def test_review_queue_skips_inactive_lessons(client, user, lesson):
    complete(client, user, lesson)
    ReviewQueueEntry.objects.filter(user=user, lesson=lesson).update(due_date=timezone.now() - timedelta(hours=1))
    lesson.is_active = False
    lesson.save()

    data = client.get(reverse("lesson-review"), **as_user(user)).json()

    assert data["lessons"] == []


@pytest.mark.django_db
def test_category_filter(client, user, make_lesson):
    a = make_lesson(category="productivity")
    make_lesson(category="learning")
    complete(client, user, a)

    url = reverse("lesson-category", kwargs={"category": "productivity"})
    data = client.get(url, **as_user(user)).json()

    assert [item["id"] for item in data["lessons"]] == [a.pk]
    assert data["lessons"][0]["completed"] is True


@pytest.mark.django_db
def test_lesson_detail_hides_answers(client, user, lesson):
    resp = client.get(reverse("lesson-detail", kwargs={"lesson_id": lesson.pk}), **as_user(user))
    data = resp.json()["lesson"]

    assert resp.status_code == 200
    assert data["title"] == lesson.title
    assert len(data["quiz_questions"]) == 2
    assert "correct_answer" not in data["quiz_questions"][0]


@pytest.mark.django_db
def test_missing_or_inactive_lesson_is_404(client, user, make_lesson):
    hidden = make_lesson(is_active=False)

    for lesson_id in (hidden.pk, 999999):
        url = reverse("lesson-detail", kwargs={"lesson_id": lesson_id})
        assert client.get(url, **as_user(user)).status_code == 404

    url = reverse("lesson-complete", kwargs={"lesson_id": hidden.pk})
    resp = client.post(url, **as_user(user))
    assert resp.status_code == 404
    assert resp.json() == {"detail": "Lesson not found"}


@pytest.mark.django_db
def test_completion_intervals_grow(client, user, lesson):
    intervals = [complete(client, user, lesson).json()["interval"] for _ in range(3)]

    assert intervals == [1, 6, 16]
    logger.info("✓ Passed: completion intervals %s", intervals)


@pytest.mark.django_db
def test_completion_response(client, user, lesson):
    resp = complete(client, user, lesson)
    data = resp.json()

    assert resp.status_code == 200
    assert data["message"] == "Lesson marked as completed"
    assert data["total_points"] == 10
    assert data["level"] == 1
    assert data["streak"] == 1
    assert data["achievements"] == ["first_lesson"]
    assert data["next_review_date"]


@pytest.mark.django_db
def test_quiz_submission(client, user, lesson):
    resp = quiz(client, user, lesson, {"answers": [0, 1]})
    data = resp.json()

    assert resp.status_code == 200
    assert data["score"] == 100
    assert data["bonus_points"] == 5
    assert data["message"] == "You scored 100% on the quiz!"
    assert data["interval"] == 1
    assert [r["is_correct"] for r in data["results"]] == [True, True]


@pytest.mark.django_db
@pytest.mark.parametrize("payload", [{}, {"answers": "0,1"}, {"answers": ["x"]}])
def test_quiz_rejects_bad_answers(client, user, lesson, payload):
    assert quiz(client, user, lesson, payload).status_code == 400


@pytest.mark.django_db
def test_quiz_on_lesson_without_questions(client, user, make_lesson):
    resp = quiz(client, user, make_lesson(questions=0), {"answers": []})

    assert resp.status_code == 400


@pytest.mark.django_db
def test_generate_lesson(client, user, monkeypatch):
    monkeypatch.setattr(
        ContentGenerator, "generate",
        lambda self, topic: GeneratedContent(title="Chunking", content="Group items.", key_points=["a", "b"]),
    )
    payload = {"topic": "chunking", "category": "learning", "difficulty": "beginner"}

    resp = client.post(reverse("lesson-generate"), data=payload, content_type="application/json", **as_user(user))
    data = resp.json()

    assert resp.status_code == 201
    assert data["message"] == "Lesson created successfully"
    assert data["lesson"]["title"] == "Chunking"
    assert data["lesson"]["key_points"] == ["a", "b"]
    assert data["lesson"]["practice_exercise"] == "Practice exercise for chunking"
    assert data["lesson"]["estimated_time"] == 5


@pytest.mark.django_db
@pytest.mark.parametrize("payload", [
    {"category": "learning", "difficulty": "beginner"},
    {"topic": "x", "difficulty": "beginner"},
    {"topic": "x", "category": "learning", "difficulty": "expert"},
])
def test_generate_lesson_validation(client, user, payload):
    resp = client.post(reverse("lesson-generate"), data=payload, content_type="application/json", **as_user(user))

    assert resp.status_code == 400


@pytest.mark.django_db
def test_generate_lesson_unconfigured(client, user, settings):
    settings.CONTENT_AI_KEY = ""
    payload = {"topic": "chunking", "category": "learning", "difficulty": "beginner"}

    resp = client.post(reverse("lesson-generate"), data=payload, content_type="application/json", **as_user(user))

    assert resp.status_code == 503


@pytest.mark.django_db
def test_quiz_alone_does_not_mark_lesson_completed(client, user, lesson):
    quiz(client, user, lesson, {"answers": [0, 1]})

    data = list_lessons(client, user).json()

    assert [item["completed"] for item in data["lessons"]] == [False]
