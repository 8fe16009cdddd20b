from pathlib import Path

import pytest

from caseclimate.setup_directories import get_result_path, setup_output_directories

pytestmark = pytest.mark.unit


def test_setup_output_directories_creates_all(tmp_path):
    dirs = setup_output_directories(tmp_path)

    assert set(dirs.keys()) == {"base", "cache", "results", "logs"}

    for path in dirs.values():
        assert isinstance(path, Path)
        assert path.exists()
        assert path.is_dir()


def test_setup_output_directories_is_idempotent(tmp_path):
    dirs1 = setup_output_directories(tmp_path)
    dirs2 = setup_output_directories(tmp_path)

    assert dirs1 == dirs2


def test_nested_base_created(tmp_path):
    dirs = setup_output_directories(tmp_path / "a" / "b")
    assert dirs["cache"].exists()


def test_result_path_with_filename(tmp_path):
    dirs = setup_output_directories(tmp_path)
    assert get_result_path(dirs, "result.csv") == dirs["results"] / "result.csv"


def test_result_path_from_timestamp(tmp_path):
    dirs = setup_output_directories(tmp_path)
    path = get_result_path(dirs, timestamp="2020-03-15T08:00:00Z")

    assert path.name == "result_20200315_080000.csv"
