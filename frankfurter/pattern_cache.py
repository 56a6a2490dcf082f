"""Thread-safe LRU cache of compiled regular expressions."""

import logging
import re
from collections import OrderedDict
from threading import RLock

from frankfurter.config import PATTERN_CACHE_SIZE

logger = logging.getLogger(__name__)


class PatternCache:
    """Compiles case-insensitive patterns once and keeps the most recently used ones.

    Blank and invalid patterns are never cached: `get_or_compile` returns None for
    them so that lookups can treat them as "no match". Patterns the regex parser
    rejects with an overflow or recursion error count as invalid.
    """

    def __init__(self, maxsize: int = PATTERN_CACHE_SIZE) -> None:
        if maxsize <= 0:
            raise ValueError("maxsize must be positive")
        self._maxsize = maxsize
        self._cache: OrderedDict[str, re.Pattern] = OrderedDict()
        self._lock = RLock()


    def get_or_compile(self, pattern: str | None) -> re.Pattern | None:
        """Return the compiled form of `pattern`, compiling it on first use.

        Args:
            pattern: Regular expression source text.

        Returns:
            Case-insensitive compiled pattern, or None if the pattern is blank or invalid.
        """
        if pattern is None or not pattern.strip():
            return None

        with self._lock:
            compiled = self._cache.get(pattern)
            if compiled is not None:
                self._cache.move_to_end(pattern)
                return compiled

            try:
                compiled = re.compile(pattern, re.IGNORECASE)
            except (re.error, OverflowError, RecursionError) as e:
                logger.debug(f"Ignoring invalid pattern {pattern!r}: {e}")
                return None

            self._cache[pattern] = compiled
            if len(self._cache) > self._maxsize:
                self._cache.popitem(last=False)
            return compiled

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()

    def size(self) -> int:
        with self._lock:
            return len(self._cache)

    def __len__(self) -> int:
        return self.size()
