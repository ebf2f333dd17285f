"""Configuration loader for the transcription diff engine."""

from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import ValidationError

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .models import AppConfig, ComparisonConfig
from .validators import check_for_warnings, emit_warnings

DEFAULT_CONFIG_CANDIDATES = [
    Path("config.yaml"),
    Path("config") / "config.yaml",
]


def load_config(config_path: Optional[Path] = None) -> tuple[AppConfig, EnvironmentConfig]:
    """
    Load and validate configuration from a YAML file and environment variables.

    Config file lookup:
    1. Use config_path if given (it must exist)
    2. Try config.yaml in the current directory
    3. Try ./config/config.yaml
    4. Fall back to built-in defaults

    Environment overrides (MAX_TRANSCRIPT_LENGTH) are applied on top of the
    file values.

    Args:
        config_path: Optional path to configuration file

    Returns:
        Tuple of (AppConfig, EnvironmentConfig) with validated configuration

    Raises:
        ConfigurationError: If configuration is invalid or config_path is missing
    """
    config_file = _find_config_file(config_path)

    config_dict = _read_yaml(config_file) if config_file else {}

    warnings = check_for_warnings(config_dict)
    if warnings:
        emit_warnings(warnings)

    try:
        app_config = AppConfig.model_validate(config_dict)
    except ValidationError as e:
        raise ConfigurationError(
            "Configuration validation failed",
            errors=_format_validation_errors(e),
            suggestions=[
                "Review config.example.yaml for correct format",
                "Verify field types match the expected schema",
            ],
        )

    env_config = load_environment_config()
    app_config = _apply_environment_overrides(app_config, env_config)

    return app_config, env_config


def _read_yaml(config_file: Path) -> dict:
    """Read a YAML mapping from config_file; an empty file yields an empty dict."""
    try:
        with open(config_file, "r", encoding="utf-8") as f:
            config_dict = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Failed to parse YAML configuration: {e}",
            suggestions=[
                "Check YAML syntax in your config file",
                "Ensure proper indentation (use spaces, not tabs)",
            ],
        )
    except OSError as e:
        raise ConfigurationError(
            f"Failed to read configuration file: {e}",
            suggestions=[
                f"Ensure {config_file} is readable",
                "Check file permissions",
            ],
        )

    if config_dict is None:
        return {}

    if not isinstance(config_dict, dict):
        raise ConfigurationError(
            "Configuration file must contain a YAML mapping",
            errors=[f"Top-level value is a {type(config_dict).__name__}"],
            suggestions=["Review config.example.yaml for correct format"],
        )

    return config_dict


def _format_validation_errors(error: ValidationError) -> List[str]:
    """Convert pydantic validation errors to user-friendly messages."""
    errors = []
    for item in error.errors():
        field_path = " -> ".join(str(loc) for loc in item["loc"]) or "config"
        error_msg = item["msg"]
        error_type = item["type"]

        if error_type == "missing":
            errors.append(f"Missing required field: {field_path}")
        elif error_type in ["string_type", "int_type", "bool_type", "int_parsing", "bool_parsing"]:
            expected_type = error_type.split("_")[0]
            errors.append(
                f"Invalid type for '{field_path}': expected {expected_type}, got {item.get('input')!r}"
            )
        elif "enum" in error_type:
            errors.append(f"Invalid value for '{field_path}': {error_msg}")
        else:
            errors.append(f"{field_path}: {error_msg}")
    return errors


def _apply_environment_overrides(
    app_config: AppConfig, env_config: EnvironmentConfig
) -> AppConfig:
    """Return app_config with environment overrides applied and re-validated."""
    if env_config.max_transcript_length is None:
        return app_config

    try:
        comparison = ComparisonConfig.model_validate(
            {
                **app_config.comparison.model_dump(),
                "max_transcript_length": env_config.max_transcript_length,
            }
        )
    except ValidationError as e:
        raise ConfigurationError(
            "Invalid MAX_TRANSCRIPT_LENGTH override",
            errors=_format_validation_errors(e),
            suggestions=["Use a value between 1 and 100000"],
        )

    return app_config.model_copy(update={"comparison": comparison})


def _find_config_file(config_path: Optional[Path] = None) -> Optional[Path]:
    """
    Find the configuration file.

    Returns:
        Path to the configuration file, or None when no default file exists

    Raises:
        ConfigurationError: If an explicit config_path does not exist
    """
    if config_path:
        if not config_path.exists():
            raise ConfigurationError(
                f"Specified configuration file not found: {config_path}",
                suggestions=[
                    f"Ensure {config_path} exists",
                    "Copy config.example.yaml to config.yaml",
                ],
            )
        return config_path

    for candidate in DEFAULT_CONFIG_CANDIDATES:
        if candidate.exists():
            return candidate

    return None


def validate_config_file(config_path: Path) -> bool:
    """
    Validate a configuration file without loading environment variables.

    Args:
        config_path: Path to configuration file

    Returns:
        True if valid, False otherwise (errors printed to stdout)
    """
    try:
        AppConfig.model_validate(_read_yaml(config_path))
        print(f"✓ Configuration file {config_path} is valid")
        return True
    except ConfigurationError as e:
        print(f"✗ Configuration validation failed:\n{e}")
        return False
    except ValidationError as e:
        errors = "\n".join(f"  - {msg}" for msg in _format_validation_errors(e))
        print(f"✗ Configuration validation failed:\n{errors}")
        return False
