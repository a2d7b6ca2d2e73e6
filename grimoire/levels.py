"""Log severity levels."""

from enum import IntEnum

NULL_LABEL = "∅"


class Level(IntEnum):
    """Severity of a log entry, from NULL (disabled) up to FATAL."""

    NULL = 0
    TRACE = 1
    DEBUG = 2
    INFO = 3
    WARN = 4
    ERROR = 5
    FATAL = 6

    @classmethod
    def from_string(cls, text: str) -> "Level":
        """Parse a five-character level label; unknown text gives NULL."""
        return _FROM_LABEL.get(text, cls.NULL)

    def label(self) -> str:
        """Return the display label of this level."""
        return _LABELS.get(self, NULL_LABEL)


_LABELS = {
    Level.TRACE: "TRACE",
    Level.DEBUG: "DEBUG",
    Level.INFO: "INFO",
    Level.WARN: "WARN",
    Level.ERROR: "ERROR",
    Level.FATAL: "FATAL",
}

# Labels are matched as fixed five-character fields, so INFO and WARN carry a pad.
_FROM_LABEL = {
    "TRACE": Level.TRACE,
    "DEBUG": Level.DEBUG,
    "INFO ": Level.INFO,
    "WARN ": Level.WARN,
    "ERROR": Level.ERROR,
    "FATAL": Level.FATAL,
}


def level_from_string(text: str) -> Level:
    """Parse a level label; unknown text gives ``Level.NULL``."""
    return Level.from_string(text)