"""InternalConfig: Authoritative runtime configuration.

This is the ONLY config schema that runtime code sees. It is fully validated
and normalized. .get() calls and fallback defaults are not used in runtime
code; everything is explicit here.
"""

from typing import Literal, Optional
from pydantic import Field, ConfigDict
from caseclimate.schemas.base import CaseClimateBaseModel


# =============================================================================
# Nested Configuration Models (Runtime)
# =============================================================================

class InternalInputConfig(CaseClimateBaseModel):
    """Runtime input layout.

    Note: path may be None while merging; the CLI requires it before a run.
    """
    path: Optional[str]
    date_col: int
    entity_col: int
    label_col: Optional[int]
    new_cases_col: Optional[int]
    cumulative_col: int
    city_col: Optional[int]
    case_floor: int


class InternalGrowthConfig(CaseClimateBaseModel):
    """Runtime growth settings."""
    min_total_cases: float


class InternalWeatherConfig(CaseClimateBaseModel):
    """Runtime weather provider settings."""
    base_url: str
    api_key: Optional[str]
    exclude: str
    temperature_unit: Literal["fahrenheit", "celsius"]
    year: int
    month: int = Field(ge=1, le=12)
    sample_hour: int = Field(ge=0, le=23)


class InternalGeocoderConfig(CaseClimateBaseModel):
    """Runtime geocoder settings."""
    base_url: str
    api_key: Optional[str]


class InternalCountriesConfig(CaseClimateBaseModel):
    """Runtime country metadata settings."""
    base_url: str
    capital_overrides: dict[str, str]


class InternalHttpConfig(CaseClimateBaseModel):
    """Runtime HTTP settings."""
    timeout_s: float = Field(gt=0)
    user_agent: str


class InternalCacheConfig(CaseClimateBaseModel):
    """Runtime cache settings."""
    db_filename: str
    db_path: Optional[str]


class InternalOutputConfig(CaseClimateBaseModel):
    """Runtime output settings."""
    filename: str
    path: Optional[str]


class InternalPipelineConfig(CaseClimateBaseModel):
    """Runtime pipeline settings."""
    failure_policy: Literal["skip_entity", "fail_fast"]


class InternalLoggingConfig(CaseClimateBaseModel):
    """Runtime logging configuration."""
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


# =============================================================================
# Main InternalConfig
# =============================================================================

class InternalConfig(CaseClimateBaseModel):
    """Authoritative runtime configuration.

    Runtime modules receive InternalConfig and access fields directly:

        def __init__(self, config: InternalConfig):
            self.min_total_cases = config.growth.min_total_cases  # NOT .get()

    All validation happens during config resolution, not in runtime code.
    """

    base_dir: str
    input: InternalInputConfig
    growth: InternalGrowthConfig
    weather: InternalWeatherConfig
    geocoder: InternalGeocoderConfig
    countries: InternalCountriesConfig
    http: InternalHttpConfig
    cache: InternalCacheConfig
    output: InternalOutputConfig
    pipeline: InternalPipelineConfig
    logging: InternalLoggingConfig

    model_config = ConfigDict(
        extra='forbid',
        validate_assignment=True,
        use_enum_values=True,
        str_strip_whitespace=True,
        frozen=True,  # Immutable after construction
    )
