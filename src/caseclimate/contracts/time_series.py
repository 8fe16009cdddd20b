"""Input and loader contracts.

The header contract runs before any row is interpreted: a file without a
header, or with fewer columns than the configured ordinal positions, is
rejected instead of silently losing its first row.
"""

from typing import Sequence

import pandas as pd

from caseclimate.contracts.base import require
from caseclimate.contracts.failure import InputFormatError

TIME_SERIES_COLUMNS = ("date", "entity", "label", "new_cases", "cumulative", "city")


def assert_time_series_header(header: Sequence[str], required_positions: Sequence[int],
                              date_col: int) -> None:
    """Enforce input header contract.

    Parameters
    ----------
    header : sequence of str
        First row of the input file.

    required_positions : sequence of int
        Ordinal column positions the loader must be able to read.

    date_col : int
        Position of the date column. Its header cell must not be a date,
        otherwise the file has no header row.

    Raises
    ------
    InputFormatError
        If the header is missing or too short.
    """
    require(
        len(header) > max(required_positions),
        f"Input contract violated: header has {len(header)} columns, "
        f"need at least {max(required_positions) + 1}",
        InputFormatError,
    )
    first = str(header[date_col]).strip()
    require(
        first != "" and pd.isna(pd.to_datetime(first, errors="coerce")),
        f"Input contract violated: header cell {first!r} looks like data, "
        "file appears to have no header row",
        InputFormatError,
    )


def assert_time_series(df: pd.DataFrame) -> None:
    """Enforce loader output contract.

    Called after load_time_series(). Downstream stages rely on these columns
    and on dates being real timestamps.
    """
    for col in TIME_SERIES_COLUMNS:
        require(
            col in df.columns,
            f"Time series contract violated: missing column '{col}'",
        )
    require(
        pd.api.types.is_datetime64_any_dtype(df["date"]),
        f"Time series contract violated: 'date' dtype is {df['date'].dtype}, expected datetime",
    )
    require(
        not df["cumulative"].isna().any(),
        "Time series contract violated: 'cumulative' contains NaN",
    )
