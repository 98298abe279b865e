"""Configuration schema models using Pydantic."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class CatalogType(str, Enum):
    """Supported catalog sources."""

    DEMO = "demo"
    YAML = "yaml"
    DATABASE = "database"
    HTTP = "http"


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


class ExportFormat(str, Enum):
    """Result export file formats."""

    JSON = "json"
    CSV = "csv"


class ExportField(str, Enum):
    """Columns available when exporting match results."""

    SKU = "sku"
    STATUS = "status"
    SEARCH_QUERY = "search_query"
    TIMESTAMP = "timestamp"
    MATCH_SCORE = "match_score"
    PRODUCT_NAME = "product_name"
    PRODUCT_SKU = "product_sku"
    DESCRIPTION = "description"
    VARIANTS = "variants"


STATUS_FILTERS = ("all", "found", "partial_match", "not_found")

DEFAULT_EXPORT_FIELDS = [
    ExportField.SKU,
    ExportField.STATUS,
    ExportField.PRODUCT_NAME,
    ExportField.MATCH_SCORE,
]


class ScoringRules(BaseModel):
    """Score table for the SKU matching rule chain.

    Defaults reproduce the fixed heuristics: exact 1.0, candidate SKU contains
    the query 0.9, query contains the candidate SKU 0.8, name overlap 0.6;
    found from 0.9, partial match from 0.6.
    """

    exact_score: float = Field(1.0, gt=0.0, le=1.0, description="Query equals candidate SKU")
    sku_contains_query_score: float = Field(
        0.9, gt=0.0, le=1.0, description="Candidate SKU contains the query"
    )
    query_contains_sku_score: float = Field(
        0.8, gt=0.0, le=1.0, description="Query contains the candidate SKU"
    )
    name_score: float = Field(
        0.6, gt=0.0, le=1.0, description="Product name and query contain one another"
    )
    found_threshold: float = Field(0.9, gt=0.0, le=1.0, description="Minimum score for 'found'")
    partial_threshold: float = Field(
        0.6, gt=0.0, le=1.0, description="Minimum score for 'partial_match'"
    )

    @model_validator(mode="after")
    def validate_thresholds(self):
        """Partial threshold must not exceed the found threshold."""
        if self.partial_threshold > self.found_threshold:
            raise ValueError(
                f"partial_threshold ({self.partial_threshold}) cannot exceed "
                f"found_threshold ({self.found_threshold})"
            )
        return self

    def is_default(self) -> bool:
        """True if every value equals the built-in default."""
        return self == ScoringRules()

    model_config = {"frozen": True}


class CatalogSourceConfig(BaseModel):
    """Where the catalog snapshot for each batch comes from."""

    type: CatalogType = Field(CatalogType.DEMO, description="demo, yaml, database or http")
    path: Optional[str] = Field(None, description="Catalog YAML file (type: yaml)")
    database_url: Optional[str] = Field(
        None, description="SQLAlchemy URL (type: database); DATABASE_URL overrides"
    )
    url: Optional[str] = Field(None, description="Product API base URL (type: http)")
    timeout: int = Field(30, ge=5, le=300, description="HTTP timeout in seconds")
    page_size: int = Field(100, ge=1, le=1000, description="Products per API page")

    @field_validator("path", "database_url", "url")
    @classmethod
    def strip_optional(cls, v: Optional[str]) -> Optional[str]:
        """Strip whitespace; blank strings become None."""
        if v is None:
            return None
        stripped = v.strip()
        return stripped or None

    @model_validator(mode="after")
    def validate_source_fields(self):
        """Check the fields each catalog type needs."""
        if self.type == CatalogType.YAML and not self.path:
            raise ValueError("catalog.path is required when catalog.type is 'yaml'")
        if self.type == CatalogType.HTTP and not self.url:
            raise ValueError("catalog.url is required when catalog.type is 'http'")
        return self

    model_config = {"use_enum_values": True}


class MatchingConfig(BaseModel):
    """Batch matching settings."""

    chunk_size: int = Field(5, ge=1, le=1000, description="Queries per chunk")
    scoring: ScoringRules = Field(default_factory=ScoringRules, description="Score table")


class ExportConfig(BaseModel):
    """Defaults for exporting match results."""

    format: ExportFormat = Field(ExportFormat.JSON, description="json or csv")
    fields: List[ExportField] = Field(
        default_factory=lambda: list(DEFAULT_EXPORT_FIELDS),
        min_length=1,
        description="Columns to export, in order",
    )
    status_filter: str = Field("all", description="all, found, partial_match or not_found")

    @field_validator("fields")
    @classmethod
    def dedupe_fields(cls, v: List[ExportField]) -> List[ExportField]:
        """Drop repeated columns, keeping the first occurrence."""
        seen = []
        for export_field in v:
            if export_field not in seen:
                seen.append(export_field)
        return seen

    @field_validator("status_filter")
    @classmethod
    def validate_status_filter(cls, v: str) -> str:
        """Restrict the filter to known statuses."""
        normalized = v.strip().lower()
        if normalized not in STATUS_FILTERS:
            raise ValueError(
                f"status_filter must be one of {', '.join(STATUS_FILTERS)}, got: {v}"
            )
        return normalized

    model_config = {"use_enum_values": True}


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(
        LogFormat.KEY_VALUE, description="Log output format (json or key-value)"
    )

    model_config = {"use_enum_values": True}


class AppConfig(BaseModel):
    """Root configuration object for the SKU matcher."""

    catalog: CatalogSourceConfig = Field(
        default_factory=CatalogSourceConfig, description="Catalog source"
    )
    matching: MatchingConfig = Field(
        default_factory=MatchingConfig, description="Batch matching settings"
    )
    export: ExportConfig = Field(default_factory=ExportConfig, description="Export defaults")
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
