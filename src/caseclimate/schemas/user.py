"""UserConfig: Forgiving, minimal user-facing configuration.

Accepts user inputs with aliases for common naming patterns
(e.g., INPUT_PATH -> input_path, MIN_TOTAL_CASES -> min_total_cases).

Users only specify what they want to override from the expert defaults.
Validation is lenient: uppercase or lowercase keys, integers where floats
are expected, unknown legacy keys ignored.
"""

from typing import Literal, Optional
from pydantic import Field, field_validator
from caseclimate.schemas.base import CaseClimateBaseModel


class UserInputConfig(CaseClimateBaseModel):
    """User-facing input layout."""
    path: Optional[str] = None
    date_col: Optional[int] = None
    entity_col: Optional[int] = None
    label_col: Optional[int] = None
    new_cases_col: Optional[int] = None
    cumulative_col: Optional[int] = None
    city_col: Optional[int] = None
    case_floor: Optional[int] = None


class UserWeatherConfig(CaseClimateBaseModel):
    """User-facing weather config."""
    base_url: Optional[str] = None
    api_key: Optional[str] = None
    exclude: Optional[str] = None
    temperature_unit: Optional[str] = None
    year: Optional[int] = None
    month: Optional[int] = None
    sample_hour: Optional[int] = None

    @field_validator("temperature_unit", mode="before")
    @classmethod
    def normalize_unit(cls, v):
        """Normalize unit names to lowercase."""
        if isinstance(v, str):
            return v.lower().strip()
        return v


class UserGeocoderConfig(CaseClimateBaseModel):
    """User-facing geocoder config."""
    base_url: Optional[str] = None
    api_key: Optional[str] = None


class UserCountriesConfig(CaseClimateBaseModel):
    """User-facing country metadata config."""
    base_url: Optional[str] = None
    capital_overrides: Optional[dict[str, str]] = None


class UserHttpConfig(CaseClimateBaseModel):
    """User-facing HTTP config."""
    timeout_s: Optional[float] = None
    user_agent: Optional[str] = None


class UserConfig(CaseClimateBaseModel):
    """User-facing configuration schema.

    Minimal, forgiving, and uses common aliases. Converted to internal
    overrides during resolution.

    Usage
    -----
        user_cfg = UserConfig(
            input_path="full_data.csv",
            base_dir="/data/caseclimate",
            min_total_cases=100,
            capital_overrides={"India": "Mumbai"},
        )

        internal = resolve_config(param_cfg, user_cfg, cli_cfg)
    """

    # Top-level operational settings
    input_path: Optional[str] = Field(None, alias="INPUT_PATH")
    output_path: Optional[str] = Field(None, alias="OUTPUT_PATH")
    base_dir: Optional[str] = Field(None, alias="BASE_DIR")
    cache_db: Optional[str] = Field(None, alias="CACHE_DB")
    log_level: Optional[Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]] = Field(
        None, alias="LOG_LEVEL"
    )

    # Data thresholds (flat aliases)
    case_floor: Optional[int] = Field(None, alias="CASE_FLOOR")
    min_total_cases: Optional[float] = Field(None, alias="MIN_TOTAL_CASES")

    # Weather window (flat aliases)
    weather_year: Optional[int] = Field(None, alias="WEATHER_YEAR")
    weather_month: Optional[int] = Field(None, alias="WEATHER_MONTH")
    sample_hour: Optional[int] = Field(None, alias="SAMPLE_HOUR")

    # Providers (flat aliases)
    weather_api_key: Optional[str] = Field(None, alias="WEATHER_API_KEY")
    geocoder_api_key: Optional[str] = Field(None, alias="GEOCODER_API_KEY")
    capital_overrides: Optional[dict[str, str]] = Field(None, alias="CAPITAL_OVERRIDES")
    timeout_s: Optional[float] = Field(None, alias="TIMEOUT_S")
    failure_policy: Optional[Literal["skip_entity", "fail_fast"]] = Field(
        None, alias="FAILURE_POLICY"
    )

    # Nested overrides (advanced users)
    input: Optional[UserInputConfig] = None
    weather: Optional[UserWeatherConfig] = None
    geocoder: Optional[UserGeocoderConfig] = None
    countries: Optional[UserCountriesConfig] = None
    http: Optional[UserHttpConfig] = None

    model_config = CaseClimateBaseModel.model_config.copy()
    # Allow forgiving input dictionaries (ignore unknown legacy keys)
    model_config.update({"populate_by_name": True, "extra": "ignore"})

    @field_validator("min_total_cases", "timeout_s", mode="before")
    @classmethod
    def coerce_numeric_fields(cls, v):
        """Accept int or float for numeric fields."""
        if v is not None:
            return float(v)
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        if isinstance(v, str):
            return v.upper().strip()
        return v

    def to_internal_overrides(self) -> dict:
        """Convert flat UserConfig to nested InternalConfig structure.

        Returns
        -------
        dict
            Nested dictionary matching InternalConfig structure
        """
        overrides = {}

        if self.base_dir is not None:
            overrides["base_dir"] = str(self.base_dir)

        # Input section
        input_cfg = {}
        if self.input_path is not None:
            input_cfg["path"] = self.input_path
        if self.case_floor is not None:
            input_cfg["case_floor"] = self.case_floor
        if self.input is not None:
            input_cfg.update(self.input.model_dump(exclude_none=True))
        if input_cfg:
            overrides["input"] = input_cfg

        if self.min_total_cases is not None:
            overrides["growth"] = {"min_total_cases": self.min_total_cases}

        # Weather section
        weather = {}
        if self.weather_year is not None:
            weather["year"] = self.weather_year
        if self.weather_month is not None:
            weather["month"] = self.weather_month
        if self.sample_hour is not None:
            weather["sample_hour"] = self.sample_hour
        if self.weather_api_key is not None:
            weather["api_key"] = self.weather_api_key
        if self.weather is not None:
            weather.update(self.weather.model_dump(exclude_none=True))
        if weather:
            overrides["weather"] = weather

        # Geocoder section
        geocoder = {}
        if self.geocoder_api_key is not None:
            geocoder["api_key"] = self.geocoder_api_key
        if self.geocoder is not None:
            geocoder.update(self.geocoder.model_dump(exclude_none=True))
        if geocoder:
            overrides["geocoder"] = geocoder

        # Countries section (overrides merge onto the defaults, not replace them)
        countries = {}
        if self.countries is not None:
            countries.update(self.countries.model_dump(exclude_none=True))
        if self.capital_overrides is not None:
            merged = dict(countries.get("capital_overrides", {}))
            merged.update(self.capital_overrides)
            countries["capital_overrides"] = merged
        if countries:
            overrides["countries"] = countries

        # HTTP section
        http = {}
        if self.timeout_s is not None:
            http["timeout_s"] = self.timeout_s
        if self.http is not None:
            http.update(self.http.model_dump(exclude_none=True))
        if http:
            overrides["http"] = http

        if self.cache_db is not None:
            overrides["cache"] = {"db_path": self.cache_db}

        if self.output_path is not None:
            overrides["output"] = {"path": self.output_path}

        if self.failure_policy is not None:
            overrides["pipeline"] = {"failure_policy": self.failure_policy}

        if self.log_level is not None:
            overrides["logging"] = {"level": self.log_level}

        return overrides
