import pytest
import logging
from datetime import datetime, timedelta, timezone

from scheduler.domain.enums import Quality, QUALITY_LABELS
from scheduler.domain.errors import InvalidQuality
from scheduler.domain.logic import (
    SchedulingState,
    advance,
    card_mastery,
    deck_mastery,
    due_cards,
    round_half_up,
)

logger = logging.getLogger(__name__)

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def review_many(state, qualities, now=NOW):
    for q in qualities:
        state = advance(state, q, now=now)
    return state


# Scheduler

def test_fresh_card_defaults():
    s = SchedulingState()
    assert (s.interval, s.ease_factor, s.repetitions) == (0, 2.5, 0)


def test_first_intervals_then_growth_with_unchanged_ease():
    """quality=3 keeps ease at 2.5: intervals 1, 3, round(3 * 2.5) = 8."""
    intervals = []
    state = SchedulingState()
    for _ in range(3):
        state = advance(state, Quality.HARD, now=NOW)
        intervals.append(state.interval)

    assert intervals == [1, 3, 8]
    assert state.ease_factor == 2.5
    assert state.repetitions == 3
    logger.info("✓ Passed: intervals %s", intervals)


def test_three_perfect_reviews_from_fresh_card():
    state = review_many(SchedulingState(), [5, 5, 5])

    assert state.repetitions == 3
    assert state.ease_factor == pytest.approx(3.1)
    # third interval uses the ease after the third review: round(3 * 3.1)
    assert state.interval == 9


def test_ease_steps_follow_quality():
    assert advance(SchedulingState(), 4, now=NOW).ease_factor == pytest.approx(2.6)
    assert advance(SchedulingState(), 5, now=NOW).ease_factor == pytest.approx(2.7)
    assert advance(SchedulingState(), 3, now=NOW).ease_factor == 2.5


def test_failure_resets_progress_and_penalizes_ease():
    card = SchedulingState(interval=20, ease_factor=2.0, repetitions=5)
    state = advance(card, 1, now=NOW)

    assert state.repetitions == 0
    assert state.interval == 1
    assert state.ease_factor == pytest.approx(1.8)


@pytest.mark.parametrize("quality", [1, 2])
def test_every_failing_quality_resets(quality):
    card = SchedulingState(interval=40, ease_factor=2.3, repetitions=7)
    state = advance(card, quality, now=NOW)
    assert (state.interval, state.repetitions) == (1, 0)


def test_ease_never_drops_below_floor():
    state = SchedulingState(interval=3, ease_factor=1.4, repetitions=2)
    for _ in range(5):
        state = advance(state, Quality.AGAIN, now=NOW)
        assert state.ease_factor >= 1.3
    assert state.ease_factor == 1.3

    # a hard-but-correct answer at the floor stays at the floor
    assert advance(state, Quality.HARD, now=NOW).ease_factor == 1.3


def test_ease_has_no_upper_clamp():
    state = review_many(SchedulingState(), [5] * 10)
    assert state.ease_factor == pytest.approx(4.5)


def test_success_increments_repetitions_by_one():
    card = SchedulingState(interval=8, ease_factor=2.5, repetitions=3)
    state = advance(card, Quality.GOOD, now=NOW)
    assert state.repetitions == card.repetitions + 1
    assert state.interval == round_half_up(8 * 2.6)


def test_interval_rounds_half_away_from_zero():
    card = SchedulingState(interval=5, ease_factor=2.5, repetitions=2)
    # 5 * 2.5 = 12.5; banker's rounding would give 12
    assert advance(card, Quality.HARD, now=NOW).interval == 13


@pytest.mark.parametrize("interval, expected", [(85, 196), (195, 449)])
def test_interval_rounds_exact_half_products_up(interval, expected):
    # 85 * 2.3 = 195.5 and 195 * 2.3 = 448.5 exactly, but not in float
    card = SchedulingState(interval=interval, ease_factor=2.3, repetitions=6)
    assert advance(card, Quality.HARD, now=NOW).interval == expected


def test_interval_uses_stored_ease_precision():
    # 2.6 + 0.1 accumulates to 2.7000000000000002 before rounding
    card = SchedulingState(interval=5, ease_factor=2.6, repetitions=2)
    state = advance(card, Quality.GOOD, now=NOW)
    assert state.ease_factor == 2.7
    assert state.interval == 14  # 5 * 2.7 = 13.5


def test_interval_restarts_after_lapse():
    state = review_many(SchedulingState(), [4, 4, 4, 1, 4, 4])
    assert state.repetitions == 2
    assert state.interval == 3


def test_next_review_is_now_plus_interval_days():
    state = advance(SchedulingState(interval=3, ease_factor=2.5, repetitions=2), 3, now=NOW)
    assert state.next_review == NOW + timedelta(days=8)


def test_next_review_defaults_to_current_time():
    before = datetime.now(timezone.utc)
    state = advance(SchedulingState(), Quality.GOOD)
    after = datetime.now(timezone.utc)
    assert before + timedelta(days=1) <= state.next_review <= after + timedelta(days=1)


def test_advance_does_not_mutate_input():
    card = SchedulingState(interval=3, ease_factor=2.5, repetitions=2)
    advance(card, 5, now=NOW)
    assert card == SchedulingState(interval=3, ease_factor=2.5, repetitions=2)


@pytest.mark.parametrize("quality", [0, 6, -1, 2.5, "4", None, True])
def test_invalid_quality_is_rejected(quality):
    with pytest.raises(InvalidQuality) as exc:
        advance(SchedulingState(), quality, now=NOW)
    assert exc.value.value == quality


def test_quality_labels_and_answer_mapping():
    assert Quality.from_answer(True) is Quality.GOOD
    assert Quality.from_answer(False) is Quality.AGAIN
    assert QUALITY_LABELS[Quality.GOOD] == "Agora sei"
    assert Quality.HARD.is_success and not Quality.WRONG.is_success


# Mastery

def test_card_mastery_of_fresh_card():
    assert card_mastery(SchedulingState()) == 30


def test_card_mastery_weights():
    card = SchedulingState(interval=20, ease_factor=2.0, repetitions=5)
    # 20/365*0.4 + 2.0/2.5*0.3 + 5/10*0.3 = 0.4119...
    assert card_mastery(card) == 41


def test_card_mastery_saturates_at_100():
    assert card_mastery(SchedulingState(interval=365, ease_factor=2.5, repetitions=10)) == 100
    # ease above 2.5 does not push the score past 100
    assert card_mastery(SchedulingState(interval=900, ease_factor=4.0, repetitions=30)) == 100


def test_card_mastery_lowest_reachable_score():
    assert card_mastery(SchedulingState(interval=0, ease_factor=1.3, repetitions=0)) == 16


def test_card_mastery_is_repeatable():
    card = SchedulingState(interval=8, ease_factor=2.6, repetitions=3)
    assert card_mastery(card) == card_mastery(card)
    assert card == SchedulingState(interval=8, ease_factor=2.6, repetitions=3)


def test_deck_mastery_of_empty_deck_is_zero():
    assert deck_mastery([]) == 0


def test_deck_mastery_is_rounded_mean():
    fresh = SchedulingState()
    mid = SchedulingState(interval=20, ease_factor=2.0, repetitions=5)
    # (30 + 41) / 2 = 35.5
    assert deck_mastery([fresh, mid]) == 36
    assert deck_mastery(iter([fresh, fresh])) == 30


# Due set

def test_due_cards_inclusive_boundary():
    due_now = SchedulingState(next_review=NOW)
    overdue = SchedulingState(interval=1, next_review=NOW - timedelta(days=2))
    future = SchedulingState(interval=2, next_review=NOW + timedelta(seconds=1))

    assert due_cards([due_now, future, overdue], NOW) == [due_now, overdue]


def test_due_cards_empty_when_nothing_scheduled():
    future = SchedulingState(next_review=NOW + timedelta(days=1))
    assert due_cards([future], NOW) == []
    assert due_cards([], NOW) == []


def test_reviewed_card_leaves_due_set_until_interval_passes():
    state = advance(SchedulingState(next_review=NOW), Quality.GOOD, now=NOW)
    assert due_cards([state], NOW) == []
    assert due_cards([state], NOW + timedelta(days=1)) == [state]
