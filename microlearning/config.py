MIN_QUALITY = 0
MAX_QUALITY = 5
PASSING_QUALITY = 3        # quality >= 3 counts as a successful recall
COMPLETION_QUALITY = 5     # plain "mark as completed"
QUIZ_SCORE_PER_QUALITY = 20

DEFAULT_INTERVAL_DAYS = 1
DEFAULT_EASE_FACTOR = 2.5
MIN_EASE_FACTOR = 1.3
BOOTSTRAP_INTERVALS = {
    1: 1,   # first successful review: 1 day
    2: 6,   # second successful review: 6 days
}

COMPLETION_POINTS = 10
STREAK_BONUS = (
    (7, 20),   # weekly streak
    (3, 10),   # 3-day streak
)
QUIZ_BONUS = (
    (80, 5),   # high score
    (60, 3),
    (0, 1),    # encouragement
)

FIRST_LESSON_COUNT = 1
TEN_LESSONS_COUNT = 10
QUIZ_MASTER_COUNT = 10
PERFECT_SCORE = 100
