"""Read the per-country case-count CSV into a normalised TimeSeries.

Columns are addressed by ordinal position (configurable) so files from
different publishers only need a different ``input`` config section. The
first row must be a header; it is validated, never interpreted as data.

Output DataFrame columns: date, entity, label, new_cases, cumulative, city.
"""

import logging
from pathlib import Path
from typing import List

import pandas as pd

from caseclimate.contracts import InputFormatError, assert_time_series, assert_time_series_header
from caseclimate.models import Entity

__all__ = ['load_time_series', 'discover_entities']

logger = logging.getLogger(__name__)


def _column(raw: pd.DataFrame, position) -> pd.Series:
    if position is None or position >= raw.shape[1]:
        return pd.Series([None] * len(raw), index=raw.index, dtype=object)
    return raw.iloc[:, position]


def load_time_series(path: Path | str, input_cfg) -> pd.DataFrame:
    """Load and validate the input table.

    Parameters
    ----------
    path : Path or str
        CSV file with a header row.
    input_cfg : InternalInputConfig
        Column positions and ``case_floor``.

    Returns
    -------
    pd.DataFrame
        TimeSeries in file order. Rows with ``cumulative <= case_floor`` are
        excluded; rows with an unparseable date or cumulative are dropped
        with a warning.

    Raises
    ------
    InputFormatError
        Missing or malformed header, or no usable data row.
    OSError
        File cannot be read.
    """
    path = Path(path)
    try:
        raw = pd.read_csv(path, header=None, dtype=str, keep_default_na=False,
                          skip_blank_lines=True)
    except pd.errors.EmptyDataError:
        raise InputFormatError(f"Input file is empty: {path}") from None
    except pd.errors.ParserError as e:
        raise InputFormatError(f"Cannot parse {path}: {e}") from e

    required = [input_cfg.date_col, input_cfg.entity_col, input_cfg.cumulative_col]
    assert_time_series_header(list(raw.iloc[0]), required, input_cfg.date_col)

    data = raw.iloc[1:]
    if data.empty:
        raise InputFormatError(f"Input file has a header but no data rows: {path}")

    entity = _column(data, input_cfg.entity_col).astype(str).str.strip()
    label_col = input_cfg.label_col if input_cfg.label_col is not None else input_cfg.entity_col
    # object dtype so blank cells stay None under the pandas string dtype
    city = pd.Series(
        [v.strip() if isinstance(v, str) and v.strip() else None
         for v in _column(data, input_cfg.city_col)],
        index=data.index, dtype=object,
    )

    df = pd.DataFrame({
        "date": pd.to_datetime(_column(data, input_cfg.date_col), errors="coerce"),
        "entity": entity,
        "label": _column(data, label_col).astype(str).str.strip(),
        "new_cases": pd.to_numeric(_column(data, input_cfg.new_cases_col), errors="coerce"),
        "cumulative": pd.to_numeric(_column(data, input_cfg.cumulative_col), errors="coerce"),
        "city": city,
    })

    bad = df["date"].isna() | df["cumulative"].isna() | (df["entity"] == "")
    if bad.all():
        raise InputFormatError(f"No row in {path} has a parseable date and cumulative count")
    if bad.any():
        logger.warning("Dropped %d unparseable rows from %s", int(bad.sum()), path.name)
        df = df[~bad]

    n_before = len(df)
    df = df[df["cumulative"] > input_cfg.case_floor].reset_index(drop=True)
    logger.info("Loaded %s: %d rows kept, %d below case floor (%d)",
                path.name, len(df), n_before - len(df), input_cfg.case_floor)

    assert_time_series(df)
    return df


def discover_entities(time_series: pd.DataFrame) -> List[Entity]:
    """One Entity per distinct id, in order of first appearance.

    ``total_cases`` is the last cumulative count seen for the entity in load
    order; ``city_hint`` is its first non-empty city value.
    """
    entities = []
    for entity_id, rows in time_series.groupby("entity", sort=False):
        cities = rows["city"].dropna()
        entities.append(Entity(
            id=str(entity_id),
            label=str(rows["label"].iloc[0]),
            total_cases=int(round(rows["cumulative"].iloc[-1])),
            city_hint=str(cities.iloc[0]) if not cities.empty else None,
        ))
    logger.info("Discovered %d entities", len(entities))
    return entities
