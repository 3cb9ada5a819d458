"""Collision handling for generated short codes."""

import inspect
import itertools
import logging
import time
from typing import Awaitable, Callable, Optional, Union

from .shortcode import ShortCodeGenerator


ExistsCallback = Callable[[str], Union[bool, Awaitable[bool]]]

DEFAULT_MAX_ATTEMPTS = 10


class UniquenessResolver:
    """Produce a short code that is absent from the store.

    The unsalted URL hash is tried first, then salted variants, with at
    most `max_attempts` existence checks in total. When every candidate
    collides, a timestamp-derived code is returned without another check;
    the store's unique constraint is what catches the residual collision.
    """

    def __init__(
        self,
        generator: Optional[ShortCodeGenerator] = None,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        monotonic_fallback: bool = False,
        clock: Optional[Callable[[], int]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize resolver.

        Args:
            generator: Short code generator
            max_attempts: Maximum number of existence checks before falling back
            monotonic_fallback: Add a process-local counter to the fallback timestamp
            clock: Returns milliseconds since epoch (wall clock if not specified)
            logger: Optional logger
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

        self.generator = generator or ShortCodeGenerator()
        self.max_attempts = max_attempts
        self.monotonic_fallback = monotonic_fallback
        self.clock = clock or (lambda: time.time_ns() // 1_000_000)
        self.logger = logger or logging.getLogger(__name__)
        self._fallback_counter = itertools.count()

    async def resolve(self, url: str, exists: ExistsCallback) -> str:
        """Resolve a unique short code for a URL.

        Args:
            url: The original URL
            exists: Predicate (plain or async) telling whether a code is taken

        Returns:
            Short code; unique unless the fallback was used and collided
        """
        code = self.generator.generate(url)

        for attempt in range(1, self.max_attempts + 1):
            if not await self._check(exists, code):
                if attempt > 1:
                    self.logger.debug(f"Resolved code after {attempt} attempts: {code}")
                return code

            if attempt < self.max_attempts:
                code = self.generator.generate(url, self.generator.generate_salt())

        code = self.generator.generate_from_timestamp(self._fallback_seed())
        self.logger.warning(
            f"All {self.max_attempts} candidates collided for {url}, "
            f"using timestamp fallback: {code}"
        )
        return code

    def _fallback_seed(self) -> int:
        millis = self.clock()
        if self.monotonic_fallback:
            millis += next(self._fallback_counter)
        return millis

    @staticmethod
    async def _check(exists: ExistsCallback, code: str) -> bool:
        result = exists(code)
        if inspect.isawaitable(result):
            result = await result
        return bool(result)
