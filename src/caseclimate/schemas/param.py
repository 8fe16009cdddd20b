"""ParamConfig: Expert defaults for the enrichment pipeline.

ALL pipeline parameters have their defaults here. No runtime code defines
fallback values; runtime code only receives InternalConfig.
"""

from typing import Literal, Optional
from pydantic import Field, field_validator
from caseclimate.schemas.base import CaseClimateBaseModel


DEFAULT_CAPITAL_OVERRIDES = {
    "China": "Wuhan",
    "Philippines": "Manila",
    "Czech Republic": "Prague",
}


# =============================================================================
# Nested Configuration Models
# =============================================================================

class InputConfig(CaseClimateBaseModel):
    """Case-count CSV layout (ordinal column positions, header row required)."""
    path: Optional[str] = None
    date_col: int = Field(0, ge=0)
    entity_col: int = Field(1, ge=0)
    label_col: Optional[int] = Field(None, ge=0)
    new_cases_col: Optional[int] = Field(2, ge=0)
    cumulative_col: int = Field(4, ge=0)
    city_col: Optional[int] = Field(6, ge=0)
    case_floor: int = Field(4, ge=0, description="Rows with cumulative <= floor are dropped at load")


class GrowthConfig(CaseClimateBaseModel):
    """Growth-rate analysis settings."""
    min_total_cases: float = Field(75.0, ge=0, description="Minimum last cumulative count")

    @field_validator("min_total_cases", mode="before")
    @classmethod
    def coerce_min_total_cases(cls, v):
        """Allow int or float."""
        return float(v)


class WeatherConfig(CaseClimateBaseModel):
    """DarkSky-compatible historical weather API and sampling window."""
    base_url: str = "https://api.pirateweather.net/forecast"
    api_key: Optional[str] = None
    exclude: str = "daily,flags,minutely,alerts"
    temperature_unit: Literal["fahrenheit", "celsius"] = "fahrenheit"
    year: int = Field(2020, ge=1940)
    month: int = Field(2, ge=1, le=12)
    sample_hour: int = Field(12, ge=0, le=23)


class GeocoderConfig(CaseClimateBaseModel):
    """Google Geocoding API settings."""
    base_url: str = "https://maps.googleapis.com/maps/api/geocode/json"
    api_key: Optional[str] = None


class CountriesConfig(CaseClimateBaseModel):
    """Country metadata lookup and capital overrides."""
    base_url: str = "https://restcountries.com/v3.1"
    capital_overrides: dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_CAPITAL_OVERRIDES)
    )


class HttpConfig(CaseClimateBaseModel):
    """Shared HTTP transport settings."""
    timeout_s: float = Field(30.0, gt=0, description="Per-call timeout in seconds")
    user_agent: str = "caseclimate/0.1"


class CacheConfig(CaseClimateBaseModel):
    """Persistent lookup cache."""
    db_filename: str = "lookup_cache.db"
    db_path: Optional[str] = None


class OutputConfig(CaseClimateBaseModel):
    """Result table."""
    filename: str = "result.csv"
    path: Optional[str] = None


class PipelineConfig(CaseClimateBaseModel):
    """Entity-level failure handling."""
    failure_policy: Literal["skip_entity", "fail_fast"] = "skip_entity"


class LoggingConfig(CaseClimateBaseModel):
    """Logging configuration."""
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"


# =============================================================================
# Main ParamConfig
# =============================================================================

class ParamConfig(CaseClimateBaseModel):
    """Complete expert configuration with all defaults.

    This config is NOT used directly by runtime code. It is the base layer in
    config resolution:

        internal_cfg = resolve_config(param_cfg, user_cfg, cli_cfg)
    """

    base_dir: str = "./output"
    input: InputConfig = Field(default_factory=InputConfig)
    growth: GrowthConfig = Field(default_factory=GrowthConfig)
    weather: WeatherConfig = Field(default_factory=WeatherConfig)
    geocoder: GeocoderConfig = Field(default_factory=GeocoderConfig)
    countries: CountriesConfig = Field(default_factory=CountriesConfig)
    http: HttpConfig = Field(default_factory=HttpConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    pipeline: PipelineConfig = Field(default_factory=PipelineConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
