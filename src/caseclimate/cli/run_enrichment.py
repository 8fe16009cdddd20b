"""Core enrichment pipeline execution logic.

This module contains the actual pipeline runner and the ``caseclimate``
console entry point. scripts/run_enrichment_pipeline.py is a thin wrapper.
"""

import sys
import json
import shutil
import logging
import argparse
import importlib.util
from pathlib import Path
from typing import Optional, Dict, Any, List

from pydantic import ValidationError

from caseclimate.contracts import InputFormatError
from caseclimate.models import EnrichedRecord
from caseclimate.setup_directories import setup_output_directories
from caseclimate.pipeline.orchestrator import PipelineOrchestrator
from caseclimate.schemas import resolve_config, ParamConfig, UserConfig, CLIConfig


logger = logging.getLogger(__name__)


def load_user_config_dict(config_path: str) -> dict:
    """Load user config dict from Python file.

    Returns the raw dict before Pydantic validation.

    Parameters
    ----------
    config_path : str
        Path to user config Python file containing CONFIG dict.

    Returns
    -------
    dict
        Raw user configuration dictionary.

    Raises
    ------
    FileNotFoundError
        If config file does not exist.
    ValueError
        If no CONFIG dict found in file.
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config not found: {path}")

    spec = importlib.util.spec_from_file_location("config_module", path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    for name in dir(module):
        if name.startswith('CONFIG'):
            obj = getattr(module, name)
            if isinstance(obj, dict):
                return obj

    raise ValueError(f"No CONFIG dict found in {path}")


def run_enrichment_pipeline(
    user_config_path: Optional[str] = None,
    cli_args: Optional[Dict[str, Any]] = None,
    rerun: bool = False,
    verbose: bool = False,
    transport=None,
) -> List[EnrichedRecord]:
    """Execute the enrichment pipeline.

    1. Loads and resolves configuration (Param < User < CLI)
    2. Sets up output directories
    3. Optionally cleans the output directory if rerun=True (the lookup
       cache lives there too)
    4. Runs the orchestrator to completion

    Parameters
    ----------
    user_config_path : str, optional
        Path to user config file (Python file with CONFIG dict). If None,
        expert defaults plus CLI overrides are used.

    cli_args : dict, optional
        CLI argument overrides. Keys: input_path, output_path, base_dir,
        cache_db, log_level. All optional.

    rerun : bool, optional
        If True, delete the output directory before running.

    verbose : bool, optional
        If True, enable DEBUG logging and print the resolved config.

    transport : callable, optional
        Replaces the HTTP transport (tests, offline runs).

    Returns
    -------
    list of EnrichedRecord
        Written records.

    Raises
    ------
    FileNotFoundError
        If user_config_path does not exist.
    ValueError
        If configuration validation fails or no input is configured.
    InputFormatError
        If the input file has a missing or malformed header.

    Examples
    --------
    Run with user config only::

        run_enrichment_pipeline("scripts/user_config.py")

    Run with CLI overrides::

        run_enrichment_pipeline(
            "scripts/user_config.py",
            cli_args={"input_path": "full_data.csv", "base_dir": "/tmp/cc"},
        )
    """
    param_cfg = ParamConfig()

    user_cfg_dict = load_user_config_dict(user_config_path) if user_config_path else {}
    user_cfg = UserConfig.model_validate(user_cfg_dict)

    cli_args = dict(cli_args or {})
    if verbose and not cli_args.get("log_level"):
        cli_args["log_level"] = "DEBUG"

    cli_dict = {k: v for k, v in cli_args.items() if v is not None}
    cli_cfg = CLIConfig.model_validate(cli_dict) if cli_dict else CLIConfig()

    config = resolve_config(param_cfg, user_cfg, cli_cfg)

    if rerun:
        base_dir_path = Path(config.base_dir)
        if base_dir_path.exists():
            print(f"Cleaning output directory: {base_dir_path}")
            shutil.rmtree(base_dir_path)

    output_dirs = setup_output_directories(config.base_dir)

    print(f"\n{'='*60}")
    print("caseclimate Enrichment Pipeline")
    print('='*60)
    print(f"Config: {user_config_path or '(defaults)'}")
    print(f"Input:  {config.input.path}")
    print(f"Window: {config.weather.year}-{config.weather.month:02d} at {config.weather.sample_hour:02d}:00")
    print(f"Output: {config.base_dir}")
    print('='*60)

    if verbose:
        print("\nFull Internal Configuration:")
        dump = config.model_dump()
        for section in ("weather", "geocoder"):
            if dump[section].get("api_key"):
                dump[section]["api_key"] = "***"
        print(json.dumps(dump, indent=2))
        print('='*60)

    orchestrator = PipelineOrchestrator(config, output_dirs, transport=transport)
    return orchestrator.run()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="caseclimate",
        description="Enrich per-country case counts with capital weather and growth rates",
    )
    parser.add_argument("config", nargs="?", help="Path to user config file (optional)")
    parser.add_argument("--input", dest="input_path", help="Input CSV (header row required)")
    parser.add_argument("--output", dest="output_path", help="Result CSV path")
    parser.add_argument("--base-dir", help="Output directory")
    parser.add_argument("--cache-db", help="Lookup cache SQLite file")
    parser.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                        type=str.upper, help="Log level")
    parser.add_argument("--rerun", action="store_true",
                        help="Delete output directory (including the cache) before running")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Console entry point. Returns the process exit code."""
    args = build_parser().parse_args(argv)

    cli_args = {
        "input_path": args.input_path,
        "output_path": args.output_path,
        "base_dir": args.base_dir,
        "cache_db": args.cache_db,
        "log_level": args.log_level,
    }

    try:
        records = run_enrichment_pipeline(
            args.config, cli_args=cli_args, rerun=args.rerun, verbose=args.verbose,
        )
    except InputFormatError as e:
        print(f"Input error: {e}", file=sys.stderr)
        return 1
    except (ValidationError, ValueError) as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"I/O error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return 130

    print(f"Done: {len(records)} records written")
    return 0


if __name__ == "__main__":
    sys.exit(main())
