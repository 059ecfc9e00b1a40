import json
import os
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction
from accounts.models import User
from microlearning.models import MicroLesson, QuizQuestion


class Command(BaseCommand):
    help = "Replace demo users and micro-lessons with the contents of a JSON file"

    def add_arguments(self, parser):
        parser.add_argument(
            "--file", default="MOCK_DATA.json", help="JSON file name to load data from"
        )

    def handle(self, *args, **options):
        file_name = options.get("file", "MOCK_DATA.json")
        json_file_path = os.path.join(os.path.dirname(__file__), os.path.basename(file_name))

        try:
            with open(json_file_path) as json_file:
                data = json.load(json_file)
        except (OSError, json.JSONDecodeError) as e:
            raise CommandError(f"Error loading data: {e}") from e

        with transaction.atomic():
            User.objects.filter(is_superuser=False).delete()
            MicroLesson.objects.all().delete()
            self.stdout.write(self.style.SUCCESS("All existing users and lessons have been deleted"))

            if not User.objects.filter(username="admin").exists():
                User.objects.create_superuser(
                    "admin", email="admin@example.com", password="testpassword"
                )
            for entry in data.get("users", []):
                User.objects.create_user(
                    entry["username"],
                    email=entry.get("email", ""),
                    password="testpassword",
                )

            for entry in data.get("lessons", []):
                questions = entry.pop("quiz_questions", [])
                lesson = MicroLesson.objects.create(**entry)
                QuizQuestion.objects.bulk_create(
                    QuizQuestion(lesson=lesson, position=i, **q) for i, q in enumerate(questions)
                )

        self.stdout.write(
            self.style.SUCCESS(f"Mock data loaded successfully from {file_name}")
        )
