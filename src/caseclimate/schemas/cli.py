"""CLIConfig: Command-line operational overrides.

Minimal configuration for operational parameters that commonly change
between runs: input/output paths, cache location, verbosity.
"""

from typing import Literal, Optional
from caseclimate.schemas.base import CaseClimateBaseModel


class CLIConfig(CaseClimateBaseModel):
    """Command-line configuration overrides.

    Highest priority in config resolution.

    Usage
    -----
        cli_cfg = CLIConfig(
            input_path="full_data.csv",
            base_dir="/scratch/caseclimate",
            log_level="DEBUG",
        )

        internal = resolve_config(param_cfg, user_cfg, cli_cfg)
    """

    input_path: Optional[str] = None
    output_path: Optional[str] = None
    base_dir: Optional[str] = None
    cache_db: Optional[str] = None
    log_level: Optional[Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]] = None

    def to_internal_overrides(self) -> dict:
        """Convert CLI config to internal config structure.

        Returns
        -------
        dict
            Nested dictionary matching InternalConfig structure
        """
        overrides = {}

        if self.base_dir is not None:
            overrides["base_dir"] = str(self.base_dir)
        if self.input_path is not None:
            overrides["input"] = {"path": str(self.input_path)}
        if self.output_path is not None:
            overrides["output"] = {"path": str(self.output_path)}
        if self.cache_db is not None:
            overrides["cache"] = {"db_path": str(self.cache_db)}
        if self.log_level is not None:
            overrides["logging"] = {"level": self.log_level}

        return overrides
