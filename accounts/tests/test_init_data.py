import pytest
from django.core.management import call_command
from django.core.management.base import CommandError
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from accounts.models import User
from microlearning.models import MicroLesson, QuizQuestion


@pytest.mark.django_db
class TestInitData:
    def test_command_loads_mock_data(self):
        call_command("init_data")

        assert User.objects.filter(is_superuser=True, username="admin").exists()
        assert User.objects.filter(username__startswith="testuser").count() == 3
        assert MicroLesson.objects.count() == 3
        assert QuizQuestion.objects.count() == 6

    def test_command_replaces_existing_data(self):
        call_command("init_data")
        call_command("init_data")

        assert MicroLesson.objects.count() == 3
        assert User.objects.filter(username="admin").count() == 1

    def test_command_missing_file(self):
        with pytest.raises(CommandError):
            call_command("init_data", file="NOPE.json")

    def test_endpoint_requires_staff(self):
        User.objects.create_user(username="learner")
        client = APIClient()

        response = client.post(reverse("init-data"), {}, HTTP_X_USER_NAME="learner")

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_endpoint_as_staff(self):
        User.objects.create_user(username="staff", is_staff=True)
        client = APIClient()

        response = client.post(reverse("init-data"), {}, HTTP_X_USER_NAME="staff")

        assert response.status_code == status.HTTP_200_OK
        assert MicroLesson.objects.count() == 3
