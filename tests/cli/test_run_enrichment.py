import csv
import logging

import pytest

from caseclimate.cli.run_enrichment import (
    build_parser,
    load_user_config_dict,
    main,
    run_enrichment_pipeline,
)

pytestmark = [pytest.mark.unit, pytest.mark.pipeline]


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    saved = root.handlers[:], root.level
    yield
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
    for handler in saved[0]:
        root.addHandler(handler)
    root.setLevel(saved[1])


@pytest.fixture
def user_config_file(temp_dir, write_csv):
    data = write_csv([(f"2020-03-0{i + 1}", "X", c, c) for i, c in enumerate([5, 10, 20, 40, 80])])
    path = temp_dir / "my_config.py"
    path.write_text(
        "CONFIG = {\n"
        f"    'INPUT_PATH': {str(data)!r},\n"
        f"    'BASE_DIR': {str(temp_dir / 'out')!r},\n"
        "    'CAPITAL_OVERRIDES': {'X': 'CapX'},\n"
        "    'WEATHER_API_KEY': 'wx',\n"
        "    'GEOCODER_API_KEY': 'geo',\n"
        "}\n"
    )
    return path


def test_load_user_config_dict(user_config_file):
    cfg = load_user_config_dict(str(user_config_file))
    assert cfg["CAPITAL_OVERRIDES"] == {"X": "CapX"}


def test_load_user_config_missing_file(temp_dir):
    with pytest.raises(FileNotFoundError):
        load_user_config_dict(str(temp_dir / "nope.py"))


def test_load_user_config_without_dict(temp_dir):
    path = temp_dir / "empty_config.py"
    path.write_text("SETTINGS = 1\n")
    with pytest.raises(ValueError, match="No CONFIG"):
        load_user_config_dict(str(path))


def test_parser_flags():
    args = build_parser().parse_args(
        ["cfg.py", "--input", "a.csv", "--output", "r.csv", "--cache-db", "c.db",
         "--log-level", "debug", "-v"]
    )
    assert args.config == "cfg.py"
    assert args.input_path == "a.csv"
    assert args.output_path == "r.csv"
    assert args.cache_db == "c.db"
    assert args.log_level == "DEBUG"
    assert args.verbose is True


def test_run_with_fake_transport(user_config_file, fake_transport, temp_dir):
    records = run_enrichment_pipeline(str(user_config_file), transport=fake_transport)

    assert [r.entity_id for r in records] == ["X"]
    with open(temp_dir / "out" / "results" / "result.csv", newline="") as fh:
        rows = list(csv.DictReader(fh))
    assert rows[0]["Capital"] == "CapX"
    assert (temp_dir / "out" / "cache" / "lookup_cache.db").exists()


def test_cli_input_overrides_config(user_config_file, fake_transport, temp_dir, write_csv):
    other = write_csv([("2020-03-01", "X", 5, 100), ("2020-03-02", "X", 100, 200)], name="other.csv")
    records = run_enrichment_pipeline(
        str(user_config_file), cli_args={"input_path": str(other)}, transport=fake_transport,
    )

    assert records[0].total_cases == 200


def test_main_bad_header_exit_code(temp_dir, write_csv):
    path = write_csv([("2020-03-01", "X", 5, 10)], header=None)
    code = main(["--input", str(path), "--base-dir", str(temp_dir / "out")])
    assert code == 1


def test_main_missing_input_exit_code(temp_dir):
    code = main(["--input", str(temp_dir / "missing.csv"), "--base-dir", str(temp_dir / "out")])
    assert code == 1


def test_main_without_input_exit_code(temp_dir):
    assert main(["--base-dir", str(temp_dir / "out")]) == 1
