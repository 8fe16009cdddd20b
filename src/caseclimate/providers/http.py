"""Shared HTTP transport for all remote lookups.

Every provider routes its requests through ``HttpTransport`` so timeouts,
User-Agent and error mapping are consistent. The transport knows nothing
about caching; CachedFetcher wraps it.
"""

import logging
from typing import Any, Optional

import requests

from caseclimate.contracts.failure import LookupFailure
from caseclimate.models import LookupRequest

__all__ = ['HttpTransport']

logger = logging.getLogger(__name__)


class HttpTransport:
    """Callable ``LookupRequest -> decoded JSON body``.

    Parameters
    ----------
    timeout_s : float
        Per-call timeout. A timeout is reported as LookupFailure.
    user_agent : str
        Sent with every request.
    session : requests.Session, optional
        Injected session (connection reuse, tests). Created if omitted.
    """

    def __init__(self, timeout_s: float = 30.0, user_agent: str = "caseclimate/0.1",
                 session: Optional[requests.Session] = None):
        self.timeout_s = timeout_s
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": user_agent})

    def __call__(self, request: LookupRequest) -> Any:
        """Perform a GET and return the JSON body.

        Raises
        ------
        LookupFailure
            On connection errors, timeouts, HTTP error status or a body that
            is not JSON. The message carries the credential-free key only.
        """
        try:
            response = self.session.get(
                request.url, params=request.params or None, timeout=self.timeout_s
            )
            response.raise_for_status()
            return response.json()
        except requests.Timeout:
            raise LookupFailure(request.key, f"timed out after {self.timeout_s}s") from None
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else "?"
            raise LookupFailure(request.key, f"HTTP {status}") from None
        except ValueError:
            raise LookupFailure(request.key, "response is not valid JSON") from None
        except requests.RequestException as e:
            raise LookupFailure(request.key, type(e).__name__) from None

    def close(self):
        self.session.close()
