"""Error taxonomy for the enrichment pipeline.

Every per-entity failure derives from EnrichmentError and is converted into
"no record for this entity" at the pipeline boundary. Two errors sit outside
that hierarchy on purpose:

- InputFormatError: the input file cannot be trusted, the run stops
- ContractViolation: a pipeline stage broke its own guarantee (a bug)
"""

from enum import Enum


class FailurePolicy(str, Enum):
    """How the orchestrator reacts to a failed entity.

    SKIP_ENTITY (default): log a diagnostic, omit the entity, continue
    FAIL_FAST: re-raise the first entity failure (debugging aid)
    """
    SKIP_ENTITY = "skip_entity"
    FAIL_FAST = "fail_fast"


class EnrichmentError(Exception):
    """Base class for recoverable, per-entity failures."""


class CacheUnavailable(EnrichmentError):
    """The key-value store could not be reached or read.

    Callers degrade to a live lookup; this never fails an entity on its own.
    """


class LookupFailure(EnrichmentError):
    """A remote lookup failed or returned an error document."""

    def __init__(self, key: str, detail: str = "") -> None:
        self.key = key
        self.detail = detail
        super().__init__(f"Lookup failed for {key}: {detail}" if detail else f"Lookup failed for {key}")


class InsufficientDataError(EnrichmentError):
    """Entity has too few cases (or days) for a meaningful growth rate."""


class CapitalResolutionError(EnrichmentError):
    """Neither the override table nor country metadata names a capital."""


class GeocodeError(EnrichmentError):
    """Geocoding returned no usable match."""


class DivisionByZeroError(EnrichmentError, ZeroDivisionError):
    """A growth step has a zero predecessor.

    Unreachable with the default load-time case floor.
    """


class InputFormatError(ValueError):
    """Input table is missing its header or has an unexpected shape."""


class ContractViolation(RuntimeError):
    """Raised when a pipeline stage does not deliver what it promised.

    Key distinction:
    - ValueError / InputFormatError: bad user input
    - EnrichmentError: expected, per-entity data problem
    - ContractViolation: pipeline bug (programmer error)
    """
    pass
