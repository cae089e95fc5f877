"""
Study session ordering.

A session walks a list of cards in rounds. Cards missed in a round come back
in the next one, weakest first, until everything is answered correctly or
the round limit is reached. Session scores are transient and never touch
the card's scheduling fields.
"""

from .enums import Quality
from .errors import SessionFinished
from .logic import validate_quality
from ..config import MAX_SESSION_ROUNDS


class StudySession:
    def __init__(self, cards, max_rounds: int = MAX_SESSION_ROUNDS):
        self.cards = list(cards)
        self.max_rounds = max_rounds
        self.round = 1
        self.correct = 0
        self.incorrect = 0
        self._order = {id(c): i for i, c in enumerate(self.cards)}
        self._scores = {id(c): 0 for c in self.cards}
        self._queue = list(self.cards)
        self._missed = []
        self._wrong = []

    @property
    def finished(self) -> bool:
        return not self._queue

    @property
    def remaining(self) -> int:
        return len(self._queue)

    def current(self):
        return self._queue[0] if self._queue else None

    def score(self, card) -> int:
        return self._scores[id(card)]

    def answer(self, quality) -> Quality:
        if self.finished:
            raise SessionFinished("no cards left in this session")
        quality = validate_quality(quality)
        card = self._queue.pop(0)

        if quality.is_success:
            self.correct += 1
            self._scores[id(card)] += 1
        else:
            self.incorrect += 1
            self._scores[id(card)] -= 1
            # identity, not equality: equal states may be distinct cards
            if all(c is not card for c in self._missed):
                self._missed.append(card)
            if all(c is not card for c in self._wrong):
                self._wrong.append(card)

        if not self._queue:
            self._next_round()
        return quality

    def _next_round(self):
        if not self._missed or self.round >= self.max_rounds:
            return
        self.round += 1
        self._queue = sorted(
            self._missed,
            key=lambda c: (self._scores[id(c)], self._order[id(c)]),
        )
        self._missed = []

    def stats(self) -> dict:
        answered = self.correct + self.incorrect
        accuracy = round(self.correct / answered * 100, 1) if answered else 0.0
        return {
            "correct": self.correct,
            "incorrect": self.incorrect,
            "accuracy": accuracy,
            "rounds": self.round,
            "wrong_card_ids": [getattr(c, "id", None) for c in self._wrong],
        }
