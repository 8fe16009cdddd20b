"""Explicit success/failure values threaded through the pipeline.

Components that talk to the outside world return a Result instead of raising
or returning None, so callers decide between propagation and suppression.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from caseclimate.contracts.failure import EnrichmentError

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Failure:
    error: EnrichmentError

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self):
        """Raise the carried error."""
        raise self.error


Result = Union[Success[T], Failure]
