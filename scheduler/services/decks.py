from django.utils import timezone
import structlog
from ..data.repos import create_deck
from ..domain.logic import deck_mastery, due_cards

logger = structlog.get_logger()


def new_deck(title, description="", cards=()):
    deck = create_deck(title, description, cards)
    logger.info("deck_created",
        deck_id=str(deck.pk),
        title=title,
        card_count=deck.cards.count(),
    )
    return deck


def study_queue(deck, now=None, browse=False):
    """
    Cards to study now and whether they come from the schedule.

    With nothing due the whole deck is offered in browse mode
    (scheduled=False) so the caller can still run a free session.
    """
    now = now or timezone.now()
    cards = list(deck.cards.all())
    if browse:
        return cards, False

    due = due_cards(cards, now)
    if due:
        return due, True

    logger.info("no_cards_due", deck_id=str(deck.pk), card_count=len(cards))
    return cards, False


def deck_summary(deck, now=None):
    now = now or timezone.now()
    cards = list(deck.cards.all())
    return {
        "mastery_level": deck_mastery(cards),
        "total_cards": len(cards),
        "due_count": len(due_cards(cards, now)),
    }
