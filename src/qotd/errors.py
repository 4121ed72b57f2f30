"""Exceptions raised by the question-of-the-day core."""


class QotdError(Exception):
    """Base class for every error this package raises on purpose."""


class LoadError(QotdError):
    """The question source is missing, unreadable or empty."""


class NoQuestionsAvailable(LoadError):
    """The question pool is empty, so nothing can be scheduled."""


class CorruptStateError(QotdError):
    """A stored value is present but cannot be deserialized."""

    def __init__(self, key: str, raw: str | None = None):
        self.key = key
        self.raw = raw
        super().__init__(f"Stored value for '{key}' is corrupt: {raw!r}")


class AlreadyAnsweredToday(QotdError):
    """Today's question has already been answered."""
