from enum import Enum


class ReviewOutcome(Enum):
    RECALLED = "recalled"
    LAPSED = "lapsed"


class Difficulty(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class Achievement(str, Enum):
    FIRST_LESSON = "first_lesson"
    TEN_LESSONS = "ten_lessons"
    PERFECT_SCORE = "perfect_score"
    QUIZ_MASTER = "quiz_master"


ACHIEVEMENT_LABELS = {
    Achievement.FIRST_LESSON: "First lesson completed",
    Achievement.TEN_LESSONS: "Ten lessons completed",
    Achievement.PERFECT_SCORE: "Perfect quiz score",
    Achievement.QUIZ_MASTER: "Quiz master",
}
