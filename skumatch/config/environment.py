"""Environment variable loading and validation."""

import os
from typing import Optional

from .exceptions import ConfigurationError

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class EnvironmentConfig:
    """Environment variable configuration holder."""

    def __init__(
        self,
        log_level: Optional[str] = None,
        database_url: Optional[str] = None,
        catalog_path: Optional[str] = None,
        catalog_api_token: Optional[str] = None,
        environment: Optional[str] = None,
    ):
        """Initialize environment configuration."""
        self.log_level = log_level
        self.database_url = database_url
        self.catalog_path = catalog_path
        self.catalog_api_token = catalog_api_token
        self.environment = environment or "local"


def load_environment_config() -> EnvironmentConfig:
    """
    Load and validate environment variables.

    All variables are optional:
    - LOG_LEVEL: Override log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - DATABASE_URL: Product store URL for the database catalog type
    - CATALOG_PATH: Catalog YAML file, overrides catalog.path
    - CATALOG_API_TOKEN: Bearer token for the http catalog type
    - ENVIRONMENT: Environment label attached to log records

    Returns:
        EnvironmentConfig object with validated values

    Raises:
        ConfigurationError: If a variable has an invalid value
    """
    errors = []

    log_level = _get("LOG_LEVEL")
    database_url = _get("DATABASE_URL")
    catalog_path = _get("CATALOG_PATH")
    catalog_api_token = _get("CATALOG_API_TOKEN")
    environment = _get("ENVIRONMENT")

    if log_level:
        if log_level.upper() not in VALID_LOG_LEVELS:
            errors.append(
                f"Invalid LOG_LEVEL: '{log_level}'. Must be one of: {', '.join(VALID_LOG_LEVELS)}"
            )
        else:
            log_level = log_level.upper()

    if database_url and "://" not in database_url:
        errors.append(
            f"Invalid DATABASE_URL: '{database_url}'. Expected a URL like sqlite:///./data/catalog.db"
        )

    if errors:
        raise ConfigurationError(
            "Environment variable validation failed",
            errors=errors,
            suggestions=[
                "Check the variables in your .env file",
                f"LOG_LEVEL must be one of: {', '.join(VALID_LOG_LEVELS)}",
            ],
        )

    return EnvironmentConfig(
        log_level=log_level,
        database_url=database_url,
        catalog_path=catalog_path,
        catalog_api_token=catalog_api_token,
        environment=environment,
    )


def _get(name: str) -> Optional[str]:
    """Read a variable, treating blank values as unset."""
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()
