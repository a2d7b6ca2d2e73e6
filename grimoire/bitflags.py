"""A 32-bit mutable flag set."""

from dataclasses import dataclass

_MASK = 0xFFFFFFFF


@dataclass
class Bit:
    """Unsigned 32-bit value manipulated as a set of flags."""

    value: int = 0

    def __post_init__(self) -> None:
        self.value &= _MASK

    def set(self, flag: int) -> None:
        """Turn on the bits in ``flag``."""
        self.value = (self.value | flag) & _MASK

    def clear(self, flag: int) -> None:
        """Turn off the bits in ``flag``."""
        self.value &= ~flag & _MASK

    def toggle(self, flag: int) -> None:
        """Flip the bits in ``flag``."""
        self.value = (self.value ^ flag) & _MASK

    def has(self, flag: int) -> bool:
        """Return True if any bit of ``flag`` is on."""
        return self.value & flag != 0

    def __int__(self) -> int:
        return self.value