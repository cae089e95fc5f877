from enum import IntEnum

from ..config import SUCCESS_THRESHOLD


class Quality(IntEnum):
    AGAIN = 1
    WRONG = 2
    HARD = 3
    GOOD = 4
    EASY = 5

    @property
    def is_success(self):
        return self >= SUCCESS_THRESHOLD

    @classmethod
    def from_answer(cls, correct: bool) -> "Quality":
        # "Agora sei" / "Ainda não sei" buttons
        return cls.GOOD if correct else cls.AGAIN


QUALITY_LABELS = {
    Quality.AGAIN: "Ainda não sei",
    Quality.WRONG: "Errei",
    Quality.HARD: "Difícil",
    Quality.GOOD: "Agora sei",
    Quality.EASY: "Fácil",
}
