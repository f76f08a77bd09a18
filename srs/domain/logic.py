import math
from dataclasses import dataclass
from datetime import datetime

from ..config import DEFAULT_PARAMS, MATURE_REPETITION, SchedulerParams
from ..errors import InvalidInputError
from ..utils.time import days_after, utc_now
from .enums import Maturity, ResponseQuality


@dataclass(frozen=True)
class ReviewResult:
    next_review_date: datetime
    ease_factor: float
    interval: int
    repetition: int


def validate_quality(quality) -> ResponseQuality:
    # bool is an int subclass, but True is not a rating
    if isinstance(quality, bool) or not isinstance(quality, int):
        raise InvalidInputError(f"quality must be an integer 0-5, got {quality!r}")
    try:
        return ResponseQuality(quality)
    except ValueError:
        raise InvalidInputError(f"quality must be between 0 and 5, got {quality}") from None


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def next_ease_factor(quality: int, prior_ease: float, params: SchedulerParams = DEFAULT_PARAMS) -> float:
    miss = 5 - quality
    ease = prior_ease + params.ease_bonus - miss * (
        params.ease_penalty_linear + miss * params.ease_penalty_quadratic
    )
    # No ceiling: repeated perfect recalls keep growing the factor.
    return max(ease, params.min_ease_factor)


def compute_next_review(
    quality: int,
    prior_ease: float | None = None,
    prior_interval: int = 0,
    prior_repetition: int = 0,
    *,
    now: datetime | None = None,
    params: SchedulerParams = DEFAULT_PARAMS,
) -> ReviewResult:
    """
    SM-2 style scheduling step.

    Pure: given the same inputs (including ``now``) it always returns the
    same result. ``now`` defaults to the current UTC time.
    """
    quality = validate_quality(quality)
    if prior_ease is None:
        prior_ease = params.initial_ease_factor
    if prior_interval < 0 or prior_repetition < 0:
        raise InvalidInputError("prior interval and repetition must be non-negative")

    ease = next_ease_factor(quality, prior_ease, params)

    if quality >= params.passing_quality:
        repetition = prior_repetition + 1
        if repetition in params.first_interval_days:
            interval = params.first_interval_days[repetition]
        else:
            interval = round_half_up(prior_interval * ease)
    else:
        repetition = 0
        interval = 1

    if now is None:
        now = utc_now()

    return ReviewResult(
        next_review_date=days_after(now, interval),
        ease_factor=ease,
        interval=interval,
        repetition=repetition,
    )


def classify_maturity(repetition: int) -> Maturity:
    if repetition <= 0:
        return Maturity.NEW
    if repetition < MATURE_REPETITION:
        return Maturity.LEARNING
    return Maturity.MATURE
