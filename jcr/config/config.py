"""
Configuration management for the rule engine.
Loads settings from environment variables with sensible defaults.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from ..rule_nodes.constants import DEFAULT_MAX_DEPTH, TRACE_PREVIEW_LENGTH


VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class EvalConfig:
    """
    Evaluation settings.

    Attributes:
        trace: Emit trace lines for every evaluation
        max_depth: Maximum nested rule evaluations per top-level call
        preview_length: Characters of data shown in trace lines
    """
    trace: bool = False
    max_depth: int = DEFAULT_MAX_DEPTH
    preview_length: int = TRACE_PREVIEW_LENGTH

    def __post_init__(self):
        if self.max_depth < 1:
            raise ValueError(f"JCR_MAX_DEPTH must be >= 1, got {self.max_depth}")
        if self.preview_length < 4:
            raise ValueError(
                f"JCR_TRACE_PREVIEW must be >= 4, got {self.preview_length}"
            )


@dataclass
class LogConfig:
    """Logging configuration."""
    level: str = "WARNING"

    def __post_init__(self):
        self.level = self.level.upper()
        if self.level not in VALID_LOG_LEVELS:
            raise ValueError(
                f"JCR_LOG_LEVEL must be one of {list(VALID_LOG_LEVELS)}, got '{self.level}'"
            )


class Config:
    """
    Central configuration manager.

    Loads configuration from environment variables (and an optional .env
    file) and provides typed access to all settings.
    """

    _instance: Optional['Config'] = None

    def __new__(cls, *args, **kwargs):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, env_file: str = ".env"):
        if self._initialized:
            return

        env_path = Path(env_file)
        if env_path.exists():
            load_dotenv(env_path, override=False)

        self.eval = self._load_eval_config()
        self.log = self._load_log_config()

        self._initialized = True

    def _load_eval_config(self) -> EvalConfig:
        """Load evaluation configuration from environment."""
        return EvalConfig(
            trace=os.getenv("JCR_TRACE", "false").lower() in ("1", "true", "yes"),
            max_depth=int(os.getenv("JCR_MAX_DEPTH", str(DEFAULT_MAX_DEPTH))),
            preview_length=int(os.getenv("JCR_TRACE_PREVIEW", str(TRACE_PREVIEW_LENGTH))),
        )

    def _load_log_config(self) -> LogConfig:
        """Load logging configuration from environment."""
        return LogConfig(level=os.getenv("JCR_LOG_LEVEL", "WARNING"))

    def summary_short(self) -> str:
        """Generate a short one-line configuration summary."""
        return (
            f"trace={self.eval.trace} | max_depth={self.eval.max_depth} | "
            f"log={self.log.level}"
        )


def get_config(env_file: str = ".env") -> Config:
    """Get or create the global config instance."""
    return Config(env_file)


def reset_config() -> None:
    """Drop the global config so the next get_config() reloads it."""
    Config._instance = None
