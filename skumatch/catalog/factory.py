"""Factory function for instantiating catalog providers from configuration."""

from skumatch.config.environment import EnvironmentConfig
from skumatch.config.exceptions import ConfigurationError
from skumatch.config.models import CatalogSourceConfig, CatalogType
from skumatch.logging import get_logger

from .database import SqlCatalogProvider
from .demo import DEMO_CATALOG
from .http import HttpCatalogProvider
from .provider import CatalogProvider, StaticCatalogProvider, YamlCatalogProvider

logger = get_logger(__name__, component="catalog")


def build_provider(
    catalog_config: CatalogSourceConfig, env_config: EnvironmentConfig
) -> CatalogProvider:
    """Create the catalog provider described by the configuration.

    Environment values win over the config file: CATALOG_PATH replaces
    catalog.path and DATABASE_URL replaces catalog.database_url.

    Args:
        catalog_config: Catalog section of the app configuration
        env_config: Environment configuration

    Returns:
        CatalogProvider for the configured source

    Raises:
        ConfigurationError: If the source is missing a required setting

    Example:
        >>> provider = build_provider(CatalogSourceConfig(type="demo"), EnvironmentConfig())
        >>> snapshot = await provider.load()
    """
    catalog_type = CatalogType(catalog_config.type)

    if catalog_type == CatalogType.DEMO:
        provider: CatalogProvider = StaticCatalogProvider(DEMO_CATALOG)
    elif catalog_type == CatalogType.YAML:
        provider = YamlCatalogProvider(env_config.catalog_path or catalog_config.path)
    elif catalog_type == CatalogType.DATABASE:
        database_url = env_config.database_url or catalog_config.database_url
        if not database_url:
            raise ConfigurationError(
                "No database URL for the database catalog",
                suggestions=[
                    "Set catalog.database_url in the config file",
                    "Or export DATABASE_URL",
                ],
            )
        provider = SqlCatalogProvider(database_url)
    else:
        provider = HttpCatalogProvider(
            catalog_config.url,
            api_token=env_config.catalog_api_token,
            timeout=catalog_config.timeout,
            page_size=catalog_config.page_size,
        )

    logger.debug(
        "Catalog provider created",
        extra={
            "catalog_type": catalog_type.value,
            "catalog_source": provider.source,
            "provider_class": type(provider).__name__,
        },
    )
    return provider
