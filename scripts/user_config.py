"""caseclimate User Configuration.

This is the user-facing configuration file. Modify settings here to customize
the pipeline behavior. Advanced settings are in caseclimate/schemas/param.py

Usage:
    python scripts/run_enrichment_pipeline.py scripts/user_config.py
    python scripts/run_enrichment_pipeline.py scripts/user_config.py --input other.csv
"""

CONFIG = {
    # ========================================================================
    # INPUT & OUTPUT
    # ========================================================================
    "INPUT_PATH": "full_data.csv",   # Daily per-country case counts, header row required
    "BASE_DIR": "./output",          # cache/, results/ and logs/ go here
    "OUTPUT_PATH": None,             # None = <BASE_DIR>/results/result.csv

    # ========================================================================
    # DATA THRESHOLDS
    # ========================================================================
    "CASE_FLOOR": 4,                 # Rows with cumulative <= floor are ignored
    "MIN_TOTAL_CASES": 75,           # Countries below this are skipped

    # ========================================================================
    # WEATHER WINDOW
    # ========================================================================
    "WEATHER_YEAR": 2020,
    "WEATHER_MONTH": 2,              # Every day of the month is sampled
    "SAMPLE_HOUR": 12,               # Local sample time (HH:00:00)

    # ========================================================================
    # PROVIDERS
    # ========================================================================
    # Leave keys as None to read WEATHER_API_KEY / GEOCODER_API_KEY from the environment
    "WEATHER_API_KEY": None,
    "GEOCODER_API_KEY": None,
    "TIMEOUT_S": 30,

    # Entity label -> city used instead of the capital (merged with the defaults)
    "CAPITAL_OVERRIDES": {
        "China": "Wuhan",
        "Philippines": "Manila",
        "Czech Republic": "Prague",
    },
}
