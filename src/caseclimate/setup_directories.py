"""
Directory setup for the enrichment pipeline.

Layout under the base directory:
- cache/    persistent lookup cache (SQLite)
- results/  result CSV files
- logs/     pipeline log files
"""

import logging
from pathlib import Path
from datetime import datetime, timezone

logger = logging.getLogger(__name__)


def setup_output_directories(base_output_dir="./output"):
    """
    Set up organized output directory structure.

    Parameters
    ----------
    base_output_dir : str or Path, optional
        Base output directory (default: ./output). ``~`` is expanded.

    Returns
    -------
    dict
        Dictionary with paths: 'base', 'cache', 'results', 'logs'
    """
    base_output_dir = Path(base_output_dir).expanduser().resolve()

    directories = {
        "base": base_output_dir,
        "cache": base_output_dir / "cache",
        "results": base_output_dir / "results",
        "logs": base_output_dir / "logs",
    }

    for path in directories.values():
        path.mkdir(parents=True, exist_ok=True)

    logger.debug("Output directories: %s", {k: str(v) for k, v in directories.items()})
    return directories


def get_result_path(output_dirs, filename=None, timestamp=None):
    """
    Get a result CSV path under results/.

    Parameters
    ----------
    output_dirs : dict
        Output directories from setup_output_directories()
    filename : str, optional
        File name. If None, generated from the timestamp.
    timestamp : datetime or str, optional
        Used for the generated name. If None, uses current time.

    Returns
    -------
    Path
        results/filename

    Example
    -------
    >>> get_result_path(dirs, timestamp="2020-03-15T08:00:00")
    Path('output/results/result_20200315_080000.csv')
    """
    if filename is None:
        if timestamp is None:
            timestamp = datetime.now(timezone.utc)
        elif isinstance(timestamp, str):
            timestamp = datetime.fromisoformat(timestamp.replace('Z', '+00:00'))
        filename = f"result_{timestamp.strftime('%Y%m%d_%H%M%S')}.csv"

    results_dir = Path(output_dirs["results"])
    results_dir.mkdir(parents=True, exist_ok=True)
    return results_dir / filename
