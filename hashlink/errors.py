"""Exceptions raised by the URL shortener.

Every error carries a machine-stable ``kind`` and a human-readable
``detail``. The web layer maps them to status codes; nothing internal
(tracebacks, connection strings) ends up in ``detail``.
"""


class ShortenerError(Exception):
    """Base class for URL shortener errors."""

    kind = "internal_error"

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class InvalidURLError(ShortenerError, ValueError):
    """The submitted URL is missing or malformed."""

    kind = "invalid_url"


class InvalidShortCodeError(ShortenerError, ValueError):
    """The short code is not 6 base62 characters."""

    kind = "invalid_short_code"


class ShortCodeNotFoundError(ShortenerError):
    """No record exists for a well-formed short code."""

    kind = "not_found"

    def __init__(self, short_code: str):
        super().__init__(f"Short code '{short_code}' not found")
        self.short_code = short_code


class ShortCodeConflictError(ShortenerError):
    """The store rejected an insert because the short code is taken."""

    kind = "short_code_conflict"

    def __init__(self, short_code: str):
        super().__init__(f"Short code '{short_code}' is already in use")
        self.short_code = short_code


class OriginalURLConflictError(ShortenerError):
    """The store rejected an insert because the URL already has a record.

    Only raised by stores configured to enforce original URL uniqueness.
    """

    kind = "original_url_conflict"

    def __init__(self, original_url: str):
        super().__init__("A record for this URL already exists")
        self.original_url = original_url


class StoreError(ShortenerError):
    """The backing store is unavailable or failed an operation."""

    kind = "store_unavailable"
