"""Root-level pytest fixtures for the caseclimate test suite.

Provides shared configuration fixtures following Pydantic-based architecture.
Tests build configs through these fixtures instead of raw dicts. Nothing in
the suite touches the network: lookups go through FakeTransport.
"""

import pytest
from pathlib import Path
import tempfile
import shutil

from caseclimate.cache import SQLiteKeyValueCache
from caseclimate.schemas import ParamConfig, UserConfig, resolve_config
from caseclimate.setup_directories import setup_output_directories

from tests.helpers.fake_transport import FakeTransport


# =============================================================================
# Configuration Fixtures (Pydantic-based)
# =============================================================================

@pytest.fixture
def param_config():
    """Expert configuration with all defaults."""
    return ParamConfig()


@pytest.fixture
def internal_config(param_config):
    """Fully validated runtime configuration (no overrides)."""
    return resolve_config(param_config, None, None)


@pytest.fixture
def make_config(param_config):
    """Factory fixture for creating custom test configs.

    Returns a callable that accepts UserConfig-compatible kwargs.

    Examples
    --------
    >>> def test_custom_threshold(make_config):
    ...     config = make_config(min_total_cases=100)
    ...     assert config.growth.min_total_cases == 100.0
    """
    def _make(**user_overrides):
        if user_overrides:
            user = UserConfig(**user_overrides)
            return resolve_config(param_config, user, None)
        return resolve_config(param_config, None, None)

    return _make


# =============================================================================
# Directory Fixtures
# =============================================================================

@pytest.fixture
def temp_dir():
    """Temporary directory that is cleaned up after test."""
    d = tempfile.mkdtemp()
    yield Path(d)
    shutil.rmtree(d, ignore_errors=True)


@pytest.fixture
def output_dirs(temp_dir):
    """Standard output directory structure: base, cache, results, logs."""
    return setup_output_directories(temp_dir)


# =============================================================================
# Data and Collaborator Fixtures
# =============================================================================

@pytest.fixture
def cache(temp_dir):
    c = SQLiteKeyValueCache(temp_dir / "cache.db")
    yield c
    c.close()


@pytest.fixture
def fake_transport():
    """Transport that knows one country, X, with capital override CapX."""
    return FakeTransport(
        capitals={"FR": "Paris"},
        coords={"CapX, X": (1.0, 2.0), "Paris, France": (48.85, 2.35)},
    )


HEADER = "dateRep,countriesAndTerritories,cases,deaths,cumulative,deaths_total,city"


@pytest.fixture
def write_csv(temp_dir):
    """Write CSV rows (without header unless given) and return the path.

    Each row is ``(date, entity, new_cases, cumulative)``; missing columns
    are padded.
    """
    def _write(rows, header=HEADER, name="cases.csv"):
        lines = [header] if header is not None else []
        for row in rows:
            date, entity, new_cases, cumulative = row[:4]
            city = row[4] if len(row) > 4 else ""
            lines.append(f"{date},{entity},{new_cases},0,{cumulative},0,{city}")
        path = temp_dir / name
        path.write_text("\n".join(lines) + "\n")
        return path

    return _write
