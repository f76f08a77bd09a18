from dataclasses import dataclass, field

INITIAL_EASE_FACTOR = 2.5
MIN_EASE_FACTOR = 1.3
EASE_BONUS = 0.1
EASE_PENALTY_LINEAR = 0.08
EASE_PENALTY_QUADRATIC = 0.02
PASSING_QUALITY = 3
FIRST_INTERVAL_DAYS = {
    1: 1,  # first successful recall
    2: 6,  # second in a row
}
SEED_REVIEW_DELAY_DAYS = 1
MATURE_REPETITION = 3
DEFAULT_DUE_LIMIT = 20
MAX_DUE_LIMIT = 200


@dataclass(frozen=True)
class SchedulerParams:
    initial_ease_factor: float = INITIAL_EASE_FACTOR
    min_ease_factor: float = MIN_EASE_FACTOR
    ease_bonus: float = EASE_BONUS
    ease_penalty_linear: float = EASE_PENALTY_LINEAR
    ease_penalty_quadratic: float = EASE_PENALTY_QUADRATIC
    passing_quality: int = PASSING_QUALITY
    first_interval_days: dict = field(default_factory=lambda: dict(FIRST_INTERVAL_DAYS))


DEFAULT_PARAMS = SchedulerParams()
