"""
Settings and logging configuration.

Usage:
    from treetransformer.config import TransformerSettings, setup_logging

    settings = TransformerSettings.from_env()
    logger = setup_logging(level=settings.log_level)
"""

import logging
import os
from typing import Literal

from pydantic import BaseModel, field_validator

ENV_PREFIX = "TREETRANSFORMER_"

LOG_FORMATS = {
    "default": "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    "compact": "%(asctime)s | %(levelname)-8s | %(message)s",
}


class TransformerSettings(BaseModel):
    """Runtime settings for the command line and interactive session.

    Params:
        extension: File extension required for serialized trees
        log_level: Logging level name
        log_format: Either "default" or "compact"
    """

    extension: str = ".tt"
    log_level: str = "WARNING"
    log_format: Literal["default", "compact"] = "default"

    @field_validator("extension")
    @classmethod
    def _check_extension(cls, value: str) -> str:
        if not value.startswith(".") or len(value) < 2:
            raise ValueError(f"Extension must start with '.', got {value!r}")
        return value

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level {value!r}")
        return level

    @classmethod
    def from_env(cls, **overrides) -> "TransformerSettings":
        """
        Build settings from `TREETRANSFORMER_*` environment variables.

        Explicit keyword overrides take precedence over the environment, which
        takes precedence over defaults. None overrides are ignored.
        """
        values = {}
        for name in cls.model_fields:
            env_value = os.environ.get(f"{ENV_PREFIX}{name.upper()}")
            if env_value:
                values[name] = env_value
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


def setup_logging(
    level: str | int | None = None,
    verbose: bool = False,
    name: str | None = None,
    format_style: str = "default",
) -> logging.Logger:
    """
    Configure logging with a consistent format.

    Params:
        level: Level name ("DEBUG", "INFO", ...) or number. Defaults to WARNING,
            or DEBUG when `verbose` is set.
        verbose: Use DEBUG unless `level` is given
        name: Logger name; defaults to the root logger
        format_style: "default" or "compact"

    Returns:
        The configured logger
    """
    if level is not None:
        if isinstance(level, str):
            log_level = getattr(logging, level.upper(), logging.WARNING)
        else:
            log_level = level
    else:
        log_level = logging.DEBUG if verbose else logging.WARNING

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMATS.get(format_style, LOG_FORMATS["default"]),
        datefmt="%H:%M:%S",
        force=True,
    )
    return logging.getLogger(name)
