"""Short code generation utilities."""

import hashlib
import secrets
import string
import time
from typing import Optional

from .encoder import encode, fit_width, is_alphabet_string


CODE_LENGTH = 6

# Number of leading hex digits of the digest used as the code seed (~32 bits)
DIGEST_HEX_DIGITS = 8


class ShortCodeGenerator:
    """Generate short codes for URLs."""

    # Case-sensitive alphanumeric characters for salts
    SALT_CHARS = string.ascii_letters + string.digits
    SALT_LENGTH = 6

    def __init__(self, length: int = CODE_LENGTH):
        """Initialize short code generator.

        Args:
            length: Length of generated codes
        """
        self.length = length

    def generate(self, url: str, salt: str = "") -> str:
        """Generate a short code from a URL hash.

        Same (url, salt) always yields the same code. Different salts are
        used to get a different candidate after a collision.

        Args:
            url: The URL to hash
            salt: Optional perturbation appended to the URL

        Returns:
            Short code of exactly `length` base62 characters
        """
        digest = hashlib.md5((url + salt).encode("utf-8")).hexdigest()
        seed = int(digest[:DIGEST_HEX_DIGITS], 16)
        return fit_width(encode(seed), self.length)

    def generate_from_timestamp(self, millis: Optional[int] = None) -> str:
        """Generate a short code from a millisecond timestamp.

        Args:
            millis: Milliseconds since epoch (uses the current time if not specified)

        Returns:
            Short code based on the timestamp
        """
        if millis is None:
            millis = time.time_ns() // 1_000_000
        return fit_width(encode(millis), self.length)

    def generate_salt(self) -> str:
        """Draw a random salt."""
        return ''.join(secrets.choice(self.SALT_CHARS) for _ in range(self.SALT_LENGTH))

    def is_valid_format(self, code: str) -> bool:
        """Check if code has the generated format (exact length, base62 only)."""
        return (
            isinstance(code, str)
            and len(code) == self.length
            and is_alphabet_string(code)
        )


