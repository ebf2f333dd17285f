"""Environment variable loading and validation."""

import os
from typing import Optional

from .exceptions import ConfigurationError

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
VALID_LOG_FORMATS = ["json", "key-value"]


class EnvironmentConfig:
    """Environment variable configuration holder."""

    def __init__(
        self,
        log_level: Optional[str] = None,
        log_format: Optional[str] = None,
        environment: Optional[str] = None,
        max_transcript_length: Optional[int] = None,
    ):
        self.log_level = log_level
        self.log_format = log_format
        self.environment = environment or "local"
        self.max_transcript_length = max_transcript_length


def load_environment_config() -> EnvironmentConfig:
    """
    Load and validate environment variables.

    All variables are optional:
    - LOG_LEVEL: Override log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - LOG_FORMAT: Override log format (json, key-value)
    - ENVIRONMENT: Environment label attached to every log record (default: local)
    - MAX_TRANSCRIPT_LENGTH: Override comparison.max_transcript_length

    Returns:
        EnvironmentConfig object with validated values

    Raises:
        ConfigurationError: If any variable is set to an invalid value
    """
    errors = []

    log_level = os.getenv("LOG_LEVEL")
    log_format = os.getenv("LOG_FORMAT")
    environment = os.getenv("ENVIRONMENT")
    max_length_str = os.getenv("MAX_TRANSCRIPT_LENGTH")

    if log_level:
        if log_level.upper() not in VALID_LOG_LEVELS:
            errors.append(
                f"Invalid LOG_LEVEL: '{log_level}'. Must be one of: {', '.join(VALID_LOG_LEVELS)}"
            )
        else:
            log_level = log_level.upper()

    if log_format and log_format not in VALID_LOG_FORMATS:
        errors.append(
            f"Invalid LOG_FORMAT: '{log_format}'. Must be one of: {', '.join(VALID_LOG_FORMATS)}"
        )

    max_transcript_length = None
    if max_length_str:
        try:
            max_transcript_length = int(max_length_str)
            if max_transcript_length < 1:
                errors.append(
                    f"Invalid MAX_TRANSCRIPT_LENGTH: {max_transcript_length}. Must be at least 1."
                )
        except ValueError:
            errors.append(
                f"Invalid MAX_TRANSCRIPT_LENGTH: '{max_length_str}'. Must be a valid integer."
            )

    if errors:
        raise ConfigurationError(
            "Environment variable validation failed",
            errors=errors,
            suggestions=[
                "Check the values in your .env file",
                "Unset variables you do not need; all of them are optional",
            ],
        )

    return EnvironmentConfig(
        log_level=log_level,
        log_format=log_format,
        environment=environment,
        max_transcript_length=max_transcript_length,
    )
