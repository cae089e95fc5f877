from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from decimal import Decimal, ROUND_HALF_UP

from .enums import Quality
from .errors import InvalidQuality
from ..config import (
    EASE_PRECISION,
    EASE_STEP,
    FAIL_EASE_PENALTY,
    FAIL_INTERVAL_DAYS,
    FIRST_INTERVALS,
    INITIAL_EASE,
    MASTERY_MAX_EASE,
    MASTERY_MAX_INTERVAL_DAYS,
    MASTERY_MAX_REPETITIONS,
    MASTERY_WEIGHTS,
    MIN_EASE,
)


@dataclass(frozen=True)
class SchedulingState:
    interval: int = 0
    ease_factor: float = INITIAL_EASE
    repetitions: int = 0
    next_review: datetime | None = None


def to_decimal(value) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(repr(value))


def round_half_up(value) -> int:
    # round() is banker's rounding; 7.5 must become 8
    return int(to_decimal(value).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def validate_quality(quality) -> Quality:
    if isinstance(quality, bool) or not isinstance(quality, int):
        raise InvalidQuality(quality)
    try:
        return Quality(quality)
    except ValueError:
        raise InvalidQuality(quality) from None


def advance(card, quality, now: datetime | None = None) -> SchedulingState:
    """
    Compute the scheduling state that follows one review of ``card``.

    ``card`` only needs ``interval``, ``ease_factor`` and ``repetitions``
    attributes. Nothing is mutated; the caller persists the returned state.
    """
    quality = validate_quality(quality)
    now = now or datetime.now(timezone.utc)

    interval = card.interval
    ease = card.ease_factor
    repetitions = card.repetitions

    if not quality.is_success:
        repetitions = 0
        interval = FAIL_INTERVAL_DAYS
        ease = round(max(MIN_EASE, ease - FAIL_EASE_PENALTY), EASE_PRECISION)
    else:
        repetitions += 1
        ease = round(max(MIN_EASE, ease + EASE_STEP * (quality - 3)), EASE_PRECISION)
        if repetitions in FIRST_INTERVALS:
            interval = FIRST_INTERVALS[repetitions]
        else:
            # multiply as decimals: 85 * 2.3 is 195.49999999999997 in float
            interval = round_half_up(to_decimal(interval) * to_decimal(ease))

    return SchedulingState(
        interval=interval,
        ease_factor=ease,
        repetitions=repetitions,
        next_review=now + timedelta(days=interval),
    )


def card_mastery(card) -> int:
    interval_weight = min(card.interval / MASTERY_MAX_INTERVAL_DAYS, 1) * MASTERY_WEIGHTS["interval"]
    # Ease grows without bound; cap its share so the score stays within 0-100
    ease_weight = min(card.ease_factor / MASTERY_MAX_EASE, 1) * MASTERY_WEIGHTS["ease"]
    repetitions_weight = (
        min(card.repetitions / MASTERY_MAX_REPETITIONS, 1) * MASTERY_WEIGHTS["repetitions"]
    )
    return round_half_up((interval_weight + ease_weight + repetitions_weight) * 100)


def deck_mastery(cards) -> int:
    scores = [card_mastery(c) for c in cards]
    if not scores:
        return 0
    return round_half_up(sum(scores) / len(scores))


def due_cards(cards, now: datetime | None = None) -> list:
    now = now or datetime.now(timezone.utc)
    return [c for c in cards if c.next_review <= now]
