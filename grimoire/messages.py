"""Messages exchanged over websocket connections."""

from dataclasses import dataclass
from typing import Any


class MessageError(ValueError):
    """A message is incomplete or carries an error."""


def _show(value: Any) -> str:
    return "<nil>" if value is None else str(value)


@dataclass
class Message:
    """A keyed message with a frame type, a payload and an optional error."""

    name: str = ""
    frame_type: int = 0
    data: Any = None
    error: str = ""

    def validate(self) -> None:
        """Raise MessageError unless the message has a key, no error and data."""
        if not self.name:
            raise MessageError("message has no key")
        if self.error:
            raise MessageError(self.error)
        if self.data is None:
            raise MessageError("data for message is nil")

    def key(self) -> str:
        """Return the message key."""
        return self.name

    def __str__(self) -> str:
        return (
            f"{{ \tKEY: {self.name},\n\tTYPE:{self.frame_type},\n"
            f"\tData: {_show(self.data)},\n\tError: {self.error}\n}}"
        )


@dataclass
class SimMessage:
    """A keyed message with a payload."""

    name: str = ""
    data: Any = None

    def validate(self) -> None:
        """Raise MessageError unless the message has a key and data."""
        if not self.name:
            raise MessageError("message has no key")
        if self.data is None:
            raise MessageError("data for message is nil")

    def key(self) -> str:
        """Return the message key."""
        return self.name

    def __str__(self) -> str:
        return f"{{ KEY: {self.name}, Data: {_show(self.data)} }}"