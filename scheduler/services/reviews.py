from django.db import transaction
from django.utils import timezone
import structlog
from ..data.repos import (
    apply_schedule,
    get_card_for_update,
    get_existing_idempotent,
    persist_review,
    refresh_deck_mastery,
)
from ..domain.logic import advance, validate_quality
from ..utils.time import to_local_iso

logger = structlog.get_logger()

def record_review(card_id, quality, idempotency_key: str, now=None):
    """
    Apply one review to a card and return (card, log, was_idempotent).

    Raises InvalidQuality before touching the database and Card.DoesNotExist
    for an unknown card.
    """
    quality = validate_quality(quality)
    logger.info("review_received",
        card_id=str(card_id),
        quality=int(quality),
        idempotency_key=idempotency_key,
    )

    # Fast path: return previous result if same idempotency_key
    existing = get_existing_idempotent(card_id, idempotency_key)
    if existing:
        logger.info("idempotent_reuse",
            card_id=str(card_id),
            next_review_utc=existing.next_review.isoformat(),
            next_review_local=to_local_iso(existing.next_review),
        )
        return existing.card, existing, True

    now = now or timezone.now()
    with transaction.atomic():
        # Serialize read-modify-write per card
        card = get_card_for_update(card_id)
        state = advance(card, quality, now=now)

        log, was_idempotent = persist_review(card, quality, idempotency_key, state)
        if was_idempotent:
            logger.info("idempotent_race", card_id=str(card_id))
            return log.card, log, True

        apply_schedule(card, state)
        deck = refresh_deck_mastery(card.deck, studied_at=now)

    logger.info("review_scheduled",
        card_id=str(card_id),
        deck_id=str(deck.pk),
        interval_days=state.interval,
        ease_factor=state.ease_factor,
        repetitions=state.repetitions,
        deck_mastery=deck.mastery_level,
        next_review_utc=state.next_review.isoformat(),
        next_review_local=to_local_iso(state.next_review),
    )

    return card, log, False
