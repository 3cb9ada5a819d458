"""Base62 encoding for short codes."""

import string

# Digits, then uppercase, then lowercase (index 0..61)
ALPHABET = string.digits + string.ascii_uppercase + string.ascii_lowercase
BASE = len(ALPHABET)

_INDEX = {char: i for i, char in enumerate(ALPHABET)}


def encode(num: int) -> str:
    """Convert a non-negative integer to a base62 string.

    Args:
        num: Integer to convert

    Returns:
        Base62 string, most significant digit first

    Raises:
        ValueError: If num is negative
    """
    if num < 0:
        raise ValueError(f"Cannot encode negative number: {num}")

    if num == 0:
        return ALPHABET[0]

    result = []
    while num > 0:
        num, remainder = divmod(num, BASE)
        result.append(ALPHABET[remainder])

    return ''.join(reversed(result))


def decode(code: str) -> int:
    """Convert a base62 string back to an integer.

    Only used by tests and tooling; short codes are opaque in the service.

    Args:
        code: Base62 string

    Returns:
        Integer value

    Raises:
        ValueError: If code is empty or has a character outside the alphabet
    """
    if not code:
        raise ValueError("Cannot decode an empty string")

    result = 0
    for char in code:
        if char not in _INDEX:
            raise ValueError(f"Invalid base62 character: {char!r}")
        result = result * BASE + _INDEX[char]

    return result


def fit_width(code: str, width: int) -> str:
    """Left-pad with the zero character, or keep the rightmost `width` characters."""
    if len(code) < width:
        return code.rjust(width, ALPHABET[0])
    return code[-width:]


def is_alphabet_string(value: str) -> bool:
    return all(char in _INDEX for char in value)
