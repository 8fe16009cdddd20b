"""Output contract.

Checked right before records are handed to the writer.
"""

from typing import Sequence

from caseclimate.contracts.base import require
from caseclimate.models import EnrichedRecord


def assert_output_records(records: Sequence[EnrichedRecord]) -> None:
    """Every written record is finite and maps to exactly one entity."""
    seen = set()
    for record in records:
        require(
            record.is_finite(),
            f"Output contract violated: non-finite statistic for '{record.entity_id}'",
        )
        require(
            record.entity_id not in seen,
            f"Output contract violated: duplicate record for '{record.entity_id}'",
        )
        seen.add(record.entity_id)
