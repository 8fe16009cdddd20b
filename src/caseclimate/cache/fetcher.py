"""Cache-aside wrapper around remote lookups.

check cache -> (miss or error document) -> live lookup -> validate -> store -> return.
Only successful documents are stored, so a transient provider failure is
retried on the next run instead of poisoning the cache.
"""

import logging
from typing import Any, Callable, Dict, Optional

from caseclimate.contracts.failure import CacheUnavailable, LookupFailure
from caseclimate.contracts.result import Failure, Result, Success
from caseclimate.models import LookupRequest

__all__ = ['CachedFetcher', 'has_error_marker']

logger = logging.getLogger(__name__)

Transport = Callable[[LookupRequest], Any]
ErrorMarker = Callable[[Any], bool]


def has_error_marker(doc: Any) -> bool:
    """Default error marker: a dict document carrying an ``error`` field."""
    return isinstance(doc, dict) and bool(doc.get("error"))


class CachedFetcher:
    """Fetch documents through a persistent cache.

    Polymorphic over the remote call: ``transport`` is any callable taking a
    LookupRequest and returning the decoded response body, raising
    LookupFailure on transport errors (HttpTransport in production, a stub
    in tests).

    Guarantee: once a key has resolved successfully, every later fetch of
    that key, in this run or a later one, returns the cached document
    without calling the transport.

    Parameters
    ----------
    cache : SQLiteKeyValueCache or None
        Persistent store. None disables caching (every call is live).
    transport : callable
        ``transport(request) -> document``.
    is_error : callable, optional
        Default error marker for documents; providers may override per call.
    """

    def __init__(self, cache, transport: Transport,
                 is_error: ErrorMarker = has_error_marker):
        self.cache = cache
        self.transport = transport
        self.is_error = is_error

        self.hits = 0
        self.misses = 0
        self.failures = 0
        self.cache_errors = 0

    def fetch(self, request: LookupRequest,
              is_error: Optional[ErrorMarker] = None) -> Result[Any]:
        """Return the document for ``request``.

        Never raises for lookup problems: the outcome is a Success with the
        document or a Failure carrying a LookupFailure.
        """
        is_error = is_error or self.is_error

        doc = self._read_cache(request.key)
        if doc is not None and not is_error(doc):
            self.hits += 1
            logger.debug("Cache HIT for %s", request.key)
            return Success(doc)

        self.misses += 1
        logger.info("Fetching: %s", request.key)
        try:
            doc = self.transport(request)
        except LookupFailure as e:
            self.failures += 1
            logger.warning("Lookup failed: %s", e)
            return Failure(e)

        if doc is None or is_error(doc):
            self.failures += 1
            detail = _error_detail(doc)
            logger.warning("Provider returned an error for %s: %s", request.key, detail)
            return Failure(LookupFailure(request.key, detail))

        self._write_cache(request.key, doc)
        return Success(doc)

    def _read_cache(self, key: str) -> Optional[Any]:
        if self.cache is None:
            return None
        try:
            return self.cache.get(key)
        except CacheUnavailable as e:
            # A cache outage turns into a slower run, not a failed one.
            self.cache_errors += 1
            logger.warning("Cache unavailable, falling back to live lookup: %s", e)
            return None

    def _write_cache(self, key: str, doc: Any) -> None:
        if self.cache is None:
            return
        try:
            self.cache.set(key, doc)
        except (CacheUnavailable, TypeError) as e:
            self.cache_errors += 1
            logger.warning("Could not cache %s: %s", key, e)

    def stats(self) -> Dict[str, int]:
        return {
            "hits": self.hits,
            "misses": self.misses,
            "failures": self.failures,
            "cache_errors": self.cache_errors,
        }


def _error_detail(doc: Any) -> str:
    if doc is None:
        return "empty response"
    if isinstance(doc, dict):
        for field in ("error", "error_message", "message", "status"):
            if doc.get(field):
                return str(doc[field])
    return "error document"
