"""
Live checks against a running server seeded with `manage.py init_data`.
Run with: pytest -m integration
"""
import logging

import pytest
import requests

BASE_URL = "http://127.0.0.1:8000/api"
HEADERS = {"X-User-NAME": "testuser1"}
logger = logging.getLogger(__name__)


def get_lessons():
    r = requests.get(f"{BASE_URL}/lessons", headers=HEADERS)
    data = r.json()
    logger.info("GET /lessons → status=%s lesson_count=%s", r.status_code, len(data["lessons"]))
    return r


def post_complete(lesson_id):
    r = requests.post(f"{BASE_URL}/lessons/{lesson_id}/complete", headers=HEADERS)
    logger.info("POST /complete lesson=%s → status=%s interval=%s", lesson_id, r.status_code, r.json().get("interval"))
    return r


def post_quiz(lesson_id, answers):
    r = requests.post(f"{BASE_URL}/lessons/{lesson_id}/quiz", headers=HEADERS, json={"answers": answers})
    logger.info("POST /quiz lesson=%s → status=%s score=%s", lesson_id, r.status_code, r.json().get("score"))
    return r


@pytest.mark.integration
def test_unauthenticated_live():
    r = requests.get(f"{BASE_URL}/lessons")
    assert r.status_code == 401


@pytest.mark.integration
def test_lessons_listed_live():
    r = get_lessons()
    assert r.status_code == 200
    assert r.json()["lessons"]
    assert "review_count" in r.json()


@pytest.mark.integration
def test_completion_schedules_review_live():
    lesson_id = get_lessons().json()["lessons"][0]["id"]

    r = post_complete(lesson_id)
    d = r.json()
    assert r.status_code == 200
    assert d["interval"] >= 1
    assert d["next_review_date"]
    logger.info("✓ Passed: completion scheduled in %s day(s)", d["interval"])


@pytest.mark.integration
def test_failed_quiz_resets_interval_live():
    lesson_id = get_lessons().json()["lessons"][-1]["id"]

    r = post_quiz(lesson_id, [])
    d = r.json()
    assert r.status_code == 200
    assert d["score"] == 0
    assert d["interval"] == 1
    assert d["bonus_points"] == 1
    logger.info("✓ Passed: failed quiz reset interval to 1 day")
