import json
from dataclasses import dataclass, field
from typing import List, Optional

from django.conf import settings
import requests
import structlog

from ..data.models import MicroLesson

logger = structlog.get_logger()

PROMPT = (
    "Write a short micro-lesson about: {topic}\n"
    "Reply with a single JSON object with the keys "
    '"title" (string), "content" (string, a few short paragraphs), '
    '"keyPoints" (list of 3-5 strings) and "practice" (one practice exercise).'
)


class ContentGenerationError(Exception):
    pass


@dataclass
class GeneratedContent:
    title: Optional[str] = None
    content: Optional[str] = None
    key_points: List[str] = field(default_factory=list)
    practice: Optional[str] = None


def _strip_fences(text):
    text = text.strip()
    if text.startswith("```"):
        text = text.split("\n", 1)[1] if "\n" in text else ""
        if text.rstrip().endswith("```"):
            text = text.rstrip()[:-3]
    return text.strip()


def parse_content(text):
    """Turn the model reply into GeneratedContent; plain prose becomes the content."""
    try:
        data = json.loads(_strip_fences(text))
    except json.JSONDecodeError:
        return GeneratedContent(content=text.strip() or None)
    if not isinstance(data, dict):
        return GeneratedContent(content=text.strip() or None)
    key_points = data.get("keyPoints") or data.get("key_points") or []
    return GeneratedContent(
        title=data.get("title") or None,
        content=data.get("content") or None,
        key_points=[str(p) for p in key_points if p],
        practice=data.get("practice") or None,
    )


class ContentGenerator:
    """Client for an OpenAI-compatible chat completions endpoint."""

    def __init__(self, api_url=None, api_key=None, model=None, timeout=None, session=None):
        self.api_url = api_url or settings.CONTENT_AI_URL
        self.api_key = api_key or settings.CONTENT_AI_KEY
        self.model = model or settings.CONTENT_AI_MODEL
        self.timeout = timeout or settings.CONTENT_AI_TIMEOUT
        self.session = session or requests.Session()

    @property
    def configured(self):
        return bool(self.api_url and self.api_key)

    def generate(self, topic):
        if not self.configured:
            raise ContentGenerationError("content generation is not configured")

        payload = {
            "model": self.model,
            "messages": [{"role": "user", "content": PROMPT.format(topic=topic)}],
        }
        headers = {"Authorization": f"Bearer {self.api_key}"}
        logger.info("content_generation_requested", topic=topic, model=self.model)
        try:
            r = self.session.post(self.api_url, json=payload, headers=headers, timeout=self.timeout)
            r.raise_for_status()
            text = r.json()["choices"][0]["message"]["content"]
        except requests.RequestException as e:
            logger.warning("content_generation_failed", topic=topic, error=str(e))
            raise ContentGenerationError(f"content provider request failed: {e}") from e
        except (KeyError, IndexError, TypeError, ValueError) as e:
            logger.warning("content_generation_bad_response", topic=topic, error=str(e))
            raise ContentGenerationError("unexpected content provider response") from e

        return parse_content(text)


def create_generated_lesson(topic, category, difficulty, generator=None):
    generator = generator or ContentGenerator()
    generated = generator.generate(topic)

    lesson = MicroLesson.objects.create(
        title=generated.title or topic,
        description=generated.content or f"Learn about {topic}",
        content=generated.content or f"Detailed content about {topic}",
        category=category,
        difficulty=difficulty,
        estimated_time=5,
        key_points=generated.key_points,
        practice_exercise=generated.practice or f"Practice exercise for {topic}",
    )
    logger.info("lesson_generated", lesson_id=str(lesson.pk), topic=topic, category=category)
    return lesson
