"""Base contract enforcement utilities.

The require() function is the single enforcement mechanism for all contracts.
"""

from typing import Type

from caseclimate.contracts.failure import ContractViolation


def require(condition: bool, message: str,
            error: Type[Exception] = ContractViolation) -> None:
    """Enforce a pipeline contract.

    Called at stage boundaries to verify the preceding stage produced the
    guaranteed invariants. Fail-fast: no recovery, no fallback.

    Parameters
    ----------
    condition : bool
        The invariant that must be true.

    message : str
        Error message explaining the violation.

    error : type, optional
        Exception class to raise (default ContractViolation). Input checks
        pass InputFormatError so bad files are reported as user errors.

    Examples
    --------
    >>> require(len(columns) > 4, "Input contract: too few columns", InputFormatError)
    """
    if not condition:
        raise error(message)
