"""Random, URL-safe identifier generation."""

import secrets

ALPHA_NUMERIC = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"
UPPERCASE_ALPHA_NUMERIC = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"
ALPHABETIC = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"
NUMERIC = "0123456789"

DEFAULT_LENGTH = 16
SECURE_BYTES = 64

# Characters are drawn with 6-bit indices, so only the first 64 of a set are reachable.
_INDEX_BITS = 6
_MAX_SET_LEN = 1 << _INDEX_BITS


def _generate(n: int, charset: str) -> str:
    if n < 0:
        raise ValueError("identifier length must not be negative")
    usable = charset[:_MAX_SET_LEN]
    if not usable:
        raise ValueError("character set must not be empty")
    return "".join(secrets.choice(usable) for _ in range(n))


def new() -> str:
    """Return a 16-character alphanumeric identifier."""
    return _generate(DEFAULT_LENGTH, ALPHA_NUMERIC)


def new_uid(n: int) -> str:
    """Return an alphanumeric identifier of length ``n``."""
    return _generate(n, ALPHA_NUMERIC)


def new_secure_512() -> str:
    """Return 64 cryptographically random bytes as a hex string."""
    return secrets.token_bytes(SECURE_BYTES).hex()


def new_uid_src(n: int, charset: str) -> str:
    """Return an identifier of length ``n`` drawn from ``charset``."""
    return _generate(n, charset)