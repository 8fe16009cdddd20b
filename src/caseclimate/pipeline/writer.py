"""Write enriched records to the result CSV."""

import logging
from pathlib import Path
from typing import Sequence

import pandas as pd

from caseclimate.models import EnrichedRecord

__all__ = ['write_results', 'OUTPUT_COLUMNS']

logger = logging.getLogger(__name__)

# record attribute -> column title, in output order
OUTPUT_COLUMNS = {
    "entity_id": "Country",
    "capital": "Capital",
    "median": "Median growth",
    "mean": "Mean growth",
    "average_temp": "Average Temp",
    "average_humidity": "Average humidity",
    "total_cases": "Total cases",
}


def write_results(records: Sequence[EnrichedRecord], path: Path | str) -> Path:
    """Write one row per record, header always present.

    Raises
    ------
    OSError
        If the file cannot be written.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    df = pd.DataFrame(
        [[getattr(r, attr) for attr in OUTPUT_COLUMNS] for r in records],
        columns=list(OUTPUT_COLUMNS.values()),
    )
    df.to_csv(path, index=False)
    logger.info("Wrote %d records to %s", len(df), path)
    return path
