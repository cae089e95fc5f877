class InvalidQuality(ValueError):
    """Quality score outside the 1-5 ordinal scale."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"quality must be an integer between 1 and 5, got {value!r}")


class SessionFinished(RuntimeError):
    """Raised when answering a study session that has no cards left."""
