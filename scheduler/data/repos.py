from django.db import transaction, IntegrityError
from django.utils import timezone
from .models import Card, Deck, ReviewLog
from ..config import INITIAL_EASE
from ..domain.logic import deck_mastery


def get_card_for_update(card_id):
    """
    Fetch a card and lock its row until the surrounding transaction ends.
    Must be called inside transaction.atomic().
    """
    return Card.objects.select_for_update().select_related("deck").get(pk=card_id)


def get_existing_idempotent(card_id, idem_key):
    return ReviewLog.objects.filter(
        card_id=card_id, idempotency_key=idem_key
    ).select_related("card", "card__deck").first()


def persist_review(card, quality, idem_key, state):
    """
    Insert ReviewLog; if a concurrent duplicate slips in, return the existing one.
    """
    try:
        with transaction.atomic():
            return ReviewLog.objects.create(
                card=card, quality=int(quality), idempotency_key=idem_key,
                interval=state.interval, ease_factor=state.ease_factor,
                repetitions=state.repetitions, next_review=state.next_review,
            ), False
    except IntegrityError:
        # Duplicate idempotency key safeguard
        existing = get_existing_idempotent(card.pk, idem_key)
        return existing, True


def apply_schedule(card, state):
    card.interval = state.interval
    card.ease_factor = state.ease_factor
    card.repetitions = state.repetitions
    card.next_review = state.next_review
    card.save(update_fields=["interval", "ease_factor", "repetitions", "next_review"])
    return card


def refresh_deck_mastery(deck, studied_at=None):
    """Recompute the deck's cached mastery from its current card states."""
    deck.mastery_level = deck_mastery(deck.cards.all())
    deck.last_studied = studied_at or timezone.now()
    deck.save(update_fields=["mastery_level", "last_studied"])
    return deck


def create_deck(title, description="", cards=()):
    """Create a deck whose cards start with default scheduling fields."""
    now = timezone.now()
    with transaction.atomic():
        deck = Deck.objects.create(
            title=title, description=description,
            last_studied=now, created_at=now,
        )
        Card.objects.bulk_create([
            Card(
                deck=deck, position=i,
                front=c["front"], back=c["back"],
                interval=0, ease_factor=INITIAL_EASE,
                repetitions=0, next_review=now,
            )
            for i, c in enumerate(cards)
        ])
        refresh_deck_mastery(deck, studied_at=now)
    return deck
