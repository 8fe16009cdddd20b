"""Pipeline contracts, error taxonomy and result values.

Key principle:
- Pydantic validates config correctness
- Contracts validate pipeline correctness
- EnrichmentError subclasses describe expected per-entity data problems
"""

from caseclimate.contracts.failure import (
    FailurePolicy,
    EnrichmentError,
    CacheUnavailable,
    LookupFailure,
    InsufficientDataError,
    CapitalResolutionError,
    GeocodeError,
    DivisionByZeroError,
    InputFormatError,
    ContractViolation,
)
from caseclimate.contracts.result import Success, Failure, Result
from caseclimate.contracts.base import require
from caseclimate.contracts.time_series import assert_time_series_header, assert_time_series
from caseclimate.contracts.records import assert_output_records

__all__ = [
    "FailurePolicy",
    "EnrichmentError",
    "CacheUnavailable",
    "LookupFailure",
    "InsufficientDataError",
    "CapitalResolutionError",
    "GeocodeError",
    "DivisionByZeroError",
    "InputFormatError",
    "ContractViolation",
    "Success",
    "Failure",
    "Result",
    "require",
    "assert_time_series_header",
    "assert_time_series",
    "assert_output_records",
]
