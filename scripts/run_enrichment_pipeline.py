#!/usr/bin/env python3
"""caseclimate Enrichment Pipeline Runner.

Usage:
    python scripts/run_enrichment_pipeline.py scripts/user_config.py
    python scripts/run_enrichment_pipeline.py scripts/user_config.py --input full_data.csv
    python scripts/run_enrichment_pipeline.py --input full_data.csv --base-dir /tmp/cc -v

Note: User config in scripts/user_config.py, expert defaults in
caseclimate.schemas.param. Credentials are read from WEATHER_API_KEY and
GEOCODER_API_KEY when not set in the config file.
"""

import sys
from pathlib import Path

# Add src to path
project_root = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(project_root / "src"))

from caseclimate.cli.run_enrichment import main


if __name__ == "__main__":
    sys.exit(main())
