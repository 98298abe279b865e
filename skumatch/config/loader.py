"""Configuration loader for the SKU matcher."""

from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml
from pydantic import ValidationError

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .models import AppConfig
from .validators import check_for_warnings, emit_warnings

DEFAULT_LOCATIONS = (
    Path("skumatch.yaml"),
    Path("config.yaml"),
    Path("config") / "config.yaml",
)


def load_config(
    config_path: Optional[Path] = None, allow_missing: bool = False
) -> Tuple[AppConfig, EnvironmentConfig]:
    """
    Load and validate configuration from a YAML file and environment variables.

    Config file lookup:
    1. Use config_path if given (it must exist)
    2. Try skumatch.yaml, config.yaml, then config/config.yaml
    3. If nothing is found: use built-in defaults when allow_missing is set,
       otherwise fail with a helpful error

    Args:
        config_path: Optional path to configuration file
        allow_missing: Fall back to defaults when no file is found

    Returns:
        Tuple of (AppConfig, EnvironmentConfig)

    Raises:
        ConfigurationError: If configuration is invalid or file not found
    """
    config_file = _find_config_file(config_path, allow_missing=allow_missing)

    if config_file is None:
        app_config = AppConfig()
    else:
        config_dict = _read_yaml(config_file)
        if not config_dict:
            raise ConfigurationError(
                "Configuration file is empty",
                suggestions=[
                    "Copy config.example.yaml to config.yaml",
                    "Add at least a 'catalog' section to your config file",
                ],
            )
        if not isinstance(config_dict, dict):
            raise ConfigurationError(
                f"Configuration file {config_file} must contain a mapping at the top level",
                suggestions=["Review config.example.yaml for the expected layout"],
            )

        warnings = check_for_warnings(config_dict)
        if warnings:
            emit_warnings(warnings)

        app_config = _validate(config_dict)

    try:
        env_config = load_environment_config()
    except ConfigurationError:
        raise
    except Exception as e:
        raise ConfigurationError(
            f"Failed to load environment configuration: {e}",
            suggestions=["Check the variables in your .env file"],
        ) from e

    return app_config, env_config


def validate_config_file(config_path: Path) -> bool:
    """
    Validate a configuration file without loading environment variables.

    Useful for pre-deployment checks.

    Args:
        config_path: Path to configuration file

    Returns:
        True if valid, False otherwise (errors printed to stdout)
    """
    try:
        config_dict = _read_yaml(config_path)
        _validate(config_dict or {})
    except ConfigurationError as e:
        print(f"✗ Configuration validation failed:\n{e}")
        return False

    print(f"✓ Configuration file {config_path} is valid")
    return True


def _read_yaml(config_file: Path) -> Any:
    """Parse a YAML file, mapping I/O and syntax problems to ConfigurationError."""
    try:
        with open(config_file, "r", encoding="utf-8") as f:
            return yaml.safe_load(f)
    except FileNotFoundError as e:
        raise ConfigurationError(
            f"Configuration file not found: {config_file}",
            suggestions=[
                "Copy config.example.yaml to config.yaml",
                f"Ensure {config_file} exists and is readable",
            ],
        ) from e
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Failed to parse YAML configuration: {e}",
            suggestions=[
                "Check YAML syntax in your config file",
                "Ensure proper indentation (use spaces, not tabs)",
            ],
        ) from e
    except OSError as e:
        raise ConfigurationError(
            f"Failed to read configuration file: {e}",
            suggestions=[f"Ensure {config_file} is readable", "Check file permissions"],
        ) from e


def _validate(config_dict: Dict[str, Any]) -> AppConfig:
    """Validate a raw mapping into AppConfig with user-friendly errors."""
    try:
        return AppConfig.model_validate(config_dict)
    except ValidationError as e:
        raise ConfigurationError(
            "Configuration validation failed",
            errors=_format_validation_errors(e),
            suggestions=[
                "Review config.example.yaml for correct format",
                "Verify field types match the expected schema",
            ],
        ) from e


def _format_validation_errors(exc: ValidationError) -> List[str]:
    errors = []
    for error in exc.errors():
        field_path = " -> ".join(str(loc) for loc in error["loc"]) or "config"
        error_type = error["type"]

        if error_type == "missing":
            errors.append(f"Missing required field: {field_path}")
        elif error_type in ("string_type", "int_type", "bool_type", "list_type", "float_type"):
            expected_type = error_type.replace("_type", "")
            errors.append(
                f"Invalid type for '{field_path}': expected {expected_type}, got {error.get('input')!r}"
            )
        elif "enum" in error_type:
            errors.append(f"Invalid value for '{field_path}': {error['msg']}")
        else:
            errors.append(f"{field_path}: {error['msg']}")
    return errors


def _find_config_file(
    config_path: Optional[Path] = None, allow_missing: bool = False
) -> Optional[Path]:
    """
    Find the configuration file.

    Args:
        config_path: Optional explicit path to config file
        allow_missing: Return None instead of raising when nothing is found

    Returns:
        Path to configuration file, or None

    Raises:
        ConfigurationError: If no config file is found and allow_missing is False
    """
    if config_path:
        if not config_path.exists():
            raise ConfigurationError(
                f"Specified configuration file not found: {config_path}",
                suggestions=[f"Ensure {config_path} exists", "Check the path and try again"],
            )
        return config_path

    for candidate in DEFAULT_LOCATIONS:
        if candidate.exists():
            return candidate

    if allow_missing:
        return None

    raise ConfigurationError(
        "Configuration file not found",
        errors=[f"Tried: {candidate}" for candidate in DEFAULT_LOCATIONS],
        suggestions=[
            "Copy config.example.yaml to config.yaml",
            "Use --config flag to specify a custom location",
        ],
    )
