"""Validation utilities for URL shortener."""

from typing import Tuple
from urllib.parse import urlparse

from ..encoder import is_alphabet_string
from ..shortcode import CODE_LENGTH

MAX_URL_LENGTH = 2048

SHORT_CODE_FORMAT = f"Code must be {CODE_LENGTH} characters using Base62 (A-Z, a-z, 0-9)"


def is_valid_url(url: str, strict: bool = False) -> Tuple[bool, str]:
    """Validate a URL.

    Without `strict`, any non-empty string up to MAX_URL_LENGTH is accepted
    as is. With `strict`, the URL must also use http or https and have a host.

    Args:
        url: The URL to validate
        strict: Whether to check scheme and domain

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url or not isinstance(url, str) or not url.strip():
        return False, "URL is required"

    if len(url) > MAX_URL_LENGTH:
        return False, f"URL is too long (max {MAX_URL_LENGTH} characters)"

    if not strict:
        return True, ""

    try:
        result = urlparse(url)
    except ValueError as e:
        return False, f"Invalid URL format: {str(e)}"

    if result.scheme not in ["http", "https"]:
        return False, "URL must use http or https protocol"

    if not result.netloc:
        return False, "URL must have a valid domain"

    return True, ""


def is_valid_short_code(short_code: str) -> Tuple[bool, str]:
    """Validate a short code.

    Args:
        short_code: The short code to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not isinstance(short_code, str) or len(short_code) != CODE_LENGTH:
        return False, SHORT_CODE_FORMAT

    if not is_alphabet_string(short_code):
        return False, SHORT_CODE_FORMAT

    return True, ""
