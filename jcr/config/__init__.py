"""Configuration for the rule engine."""

from .config import Config, EvalConfig, LogConfig, get_config, reset_config

__all__ = [
    "Config",
    "EvalConfig",
    "LogConfig",
    "get_config",
    "reset_config",
]
