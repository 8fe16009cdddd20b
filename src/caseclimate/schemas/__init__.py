"""Pydantic configuration schemas for the caseclimate pipeline.

Exports
-------
resolve_config : function
    Single entrypoint for configuration resolution
InternalConfig : class
    Fully validated, authoritative runtime configuration
ParamConfig : class
    Expert defaults (complete)
UserConfig : class
    User-facing configuration (forgiving, minimal)
CLIConfig : class
    Command-line operational overrides
"""

from caseclimate.schemas.resolve import resolve_config
from caseclimate.schemas.internal import InternalConfig
from caseclimate.schemas.param import ParamConfig
from caseclimate.schemas.user import UserConfig
from caseclimate.schemas.cli import CLIConfig

__all__ = [
    'resolve_config',
    'InternalConfig',
    'ParamConfig',
    'UserConfig',
    'CLIConfig',
]
