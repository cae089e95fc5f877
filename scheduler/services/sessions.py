import structlog
from ..domain.enums import Quality
from ..domain.errors import SessionFinished
from ..domain.session import StudySession
from .decks import study_queue
from .reviews import record_review

logger = structlog.get_logger()


def start_session(deck, now=None, browse=False, max_rounds=None):
    """Build a study session over the deck's due cards (or the whole deck)."""
    cards, scheduled = study_queue(deck, now, browse=browse)
    kwargs = {} if max_rounds is None else {"max_rounds": max_rounds}
    session = StudySession(cards, **kwargs)
    logger.info("session_started",
        deck_id=str(deck.pk),
        card_count=len(cards),
        scheduled=scheduled,
    )
    return session, scheduled


def answer_current(session, idempotency_key: str, quality=None, correct=None, now=None):
    """
    Record the answer for the session's current card and move the session on.

    Pass either a 1-5 ``quality`` or the binary ``correct`` flag of the
    "Agora sei" / "Ainda não sei" buttons. Returns the updated card.
    """
    if session.finished:
        raise SessionFinished("no cards left in this session")
    if quality is None:
        if correct is None:
            raise ValueError("either quality or correct is required")
        quality = Quality.from_answer(correct)

    card = session.current()
    updated, _, _ = record_review(card.pk, quality, idempotency_key, now=now)
    session.answer(quality)

    logger.info("session_answer",
        card_id=str(card.pk),
        quality=int(quality),
        round=session.round,
        remaining=session.remaining,
    )
    if session.finished:
        logger.info("session_finished", **session.stats())
    return updated
