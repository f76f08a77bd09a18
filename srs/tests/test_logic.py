import logging
from datetime import datetime, timedelta, timezone

import pytest

from srs.config import SchedulerParams
from srs.domain.enums import Maturity
from srs.domain.logic import classify_maturity, compute_next_review, round_half_up
from srs.errors import InvalidInputError

logger = logging.getLogger(__name__)

NOW = datetime(2026, 3, 1, 9, 30, tzinfo=timezone.utc)


def review_chain(qualities, now=NOW):
    """Feed each result back in as the prior state, starting from defaults."""
    results = []
    ease, interval, repetition = None, 0, 0
    for q in qualities:
        r = compute_next_review(q, ease, interval, repetition, now=now)
        results.append(r)
        ease, interval, repetition = r.ease_factor, r.interval, r.repetition
    return results


def test_same_inputs_same_output():
    """Scheduling is a pure function of its inputs."""
    for q in range(6):
        first = compute_next_review(q, 2.1, 10, 4, now=NOW)
        second = compute_next_review(q, 2.1, 10, 4, now=NOW)
        assert first == second
    logger.info("✓ Passed: deterministic for every quality")


@pytest.mark.parametrize("quality", range(6))
@pytest.mark.parametrize("prior_ease", [1.3, 1.31, 1.5, 2.5, 4.0])
def test_ease_never_below_floor(quality, prior_ease):
    r = compute_next_review(quality, prior_ease, 12, 3, now=NOW)
    assert r.ease_factor >= 1.3


def test_three_perfect_reviews_from_defaults():
    """1 day, then 6 days, then 6 x ease-after-third-update rounded."""
    r1, r2, r3 = review_chain([5, 5, 5])

    assert (r1.repetition, r1.interval) == (1, 1)
    assert (r2.repetition, r2.interval) == (2, 6)
    assert r3.repetition == 3
    assert r3.interval == round_half_up(6 * r3.ease_factor)
    assert [r.interval for r in (r1, r2, r3)] == [1, 6, 17]

    assert r1.ease_factor == pytest.approx(2.6)
    assert r2.ease_factor == pytest.approx(2.7)
    assert r3.ease_factor == pytest.approx(2.8)
    assert 2.5 <= r1.ease_factor <= r2.ease_factor <= r3.ease_factor
    logger.info("✓ Passed: intervals %s", [r.interval for r in (r1, r2, r3)])


def test_fourth_success_multiplies_prior_interval():
    r4 = review_chain([5, 5, 5, 5])[-1]
    assert r4.repetition == 4
    assert r4.interval == round_half_up(17 * r4.ease_factor)


@pytest.mark.parametrize("quality", [0, 1, 2])
@pytest.mark.parametrize("prior", [(2.5, 0, 0), (2.0, 30, 5), (1.3, 400, 12)])
def test_failure_resets_progress(quality, prior):
    r = compute_next_review(quality, *prior, now=NOW)
    assert r.repetition == 0
    assert r.interval == 1


def test_ease_adjustment_by_quality():
    assert compute_next_review(5, 2.5, now=NOW).ease_factor == pytest.approx(2.6)
    assert compute_next_review(4, 2.5, now=NOW).ease_factor == pytest.approx(2.5)
    assert compute_next_review(3, 2.5, now=NOW).ease_factor == pytest.approx(2.36)
    assert compute_next_review(2, 2.5, now=NOW).ease_factor == pytest.approx(2.18)
    assert compute_next_review(0, 2.5, now=NOW).ease_factor == pytest.approx(1.7)
    assert compute_next_review(0, 1.5, now=NOW).ease_factor == pytest.approx(1.3)


def test_ease_has_no_ceiling():
    results = review_chain([5] * 30)
    assert results[-1].ease_factor == pytest.approx(2.5 + 30 * 0.1)


def test_next_review_date_is_now_plus_interval():
    r1, r2 = review_chain([4, 4])
    assert r1.next_review_date == NOW + timedelta(days=1)
    assert r2.next_review_date == NOW + timedelta(days=6)


def test_uses_current_time_when_now_omitted():
    before = datetime.now(timezone.utc)
    r = compute_next_review(5)
    after = datetime.now(timezone.utc)
    assert before + timedelta(days=1) <= r.next_review_date <= after + timedelta(days=1)


@pytest.mark.parametrize("quality", [-1, 6, 2.5, True, "3", None])
def test_rejects_out_of_range_quality(quality):
    with pytest.raises(InvalidInputError):
        compute_next_review(quality, now=NOW)


def test_rejects_negative_prior_state():
    with pytest.raises(InvalidInputError):
        compute_next_review(5, 2.5, -1, 0, now=NOW)
    with pytest.raises(InvalidInputError):
        compute_next_review(5, 2.5, 0, -1, now=NOW)


def test_custom_params_are_honoured():
    params = SchedulerParams(initial_ease_factor=3.0, min_ease_factor=2.0)
    assert compute_next_review(5, now=NOW, params=params).ease_factor == pytest.approx(3.1)
    assert compute_next_review(0, now=NOW, params=params).ease_factor == pytest.approx(2.2)
    assert compute_next_review(0, 2.0, now=NOW, params=params).ease_factor == pytest.approx(2.0)

    wider = SchedulerParams(first_interval_days={1: 2, 2: 10})
    assert compute_next_review(5, now=NOW, params=wider).interval == 2


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(15.5) == 16
    assert round_half_up(16.2) == 16
    assert round_half_up(16.8) == 17


@pytest.mark.parametrize(
    "repetition, bucket",
    [(0, Maturity.NEW), (1, Maturity.LEARNING), (2, Maturity.LEARNING), (3, Maturity.MATURE), (9, Maturity.MATURE)],
)
def test_classify_maturity(repetition, bucket):
    assert classify_maturity(repetition) == bucket
