"""Editor configuration loading and validation."""

from path_export.configs.loader import (
    DEFAULT_CONFIG_PATH,
    ConfigError,
    GeneralConfig,
    RobotConfig,
    load_config,
    parse_config,
)

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "ConfigError",
    "GeneralConfig",
    "RobotConfig",
    "load_config",
    "parse_config",
]
