"""Integration tests for configuration module."""

import warnings
from pathlib import Path

import pytest

from skumatch.config import (
    CatalogType,
    ConfigurationError,
    ExportField,
    load_config,
    validate_config_file,
)
from skumatch.config.environment import load_environment_config
from skumatch.config.models import AppConfig, ExportConfig
from skumatch.config.validators import check_for_warnings

# Test fixtures directory
FIXTURES_DIR = Path(__file__).parent / "fixtures"


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(text)
    return path


class TestConfigurationLoading:
    """Test configuration loading from YAML files."""

    def test_load_valid_config(self):
        """Test loading a valid configuration file."""
        app_config, env_config = load_config(FIXTURES_DIR / "valid_config.yaml")

        assert app_config.catalog.type == CatalogType.YAML
        assert app_config.catalog.path == "tests/fixtures/catalog.yaml"
        assert app_config.matching.chunk_size == 10
        assert app_config.matching.scoring.is_default()
        assert app_config.export.format == "csv"
        assert app_config.export.fields == ["sku", "status", "match_score", "product_sku"]
        assert app_config.export.status_filter == "found"
        assert app_config.logging.level == "DEBUG"
        assert app_config.logging.format == "json"
        assert env_config.environment == "local"

    def test_load_minimal_config(self, tmp_path):
        """A single section is enough; everything else defaults."""
        app_config, _ = load_config(_write(tmp_path, "catalog:\n  type: demo\n"))

        assert app_config.catalog.type == "demo"
        assert app_config.matching.chunk_size == 5
        assert app_config.export.fields == ["sku", "status", "product_name", "match_score"]
        assert app_config.logging.format == "key-value"

    def test_config_file_not_found(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            load_config(tmp_path / "missing.yaml")

    def test_no_config_anywhere_uses_defaults(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        app_config, _ = load_config(allow_missing=True)

        assert app_config == AppConfig()

    def test_no_config_anywhere_is_an_error_by_default(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        with pytest.raises(ConfigurationError) as exc_info:
            load_config()

        assert "Tried: skumatch.yaml" in str(exc_info.value)

    def test_default_location_found(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "config.yaml").write_text("matching:\n  chunk_size: 7\n")

        app_config, _ = load_config()

        assert app_config.matching.chunk_size == 7

    def test_invalid_yaml_syntax(self, tmp_path):
        path = _write(tmp_path, "catalog: [unclosed\n")

        with pytest.raises(ConfigurationError, match="Failed to parse YAML"):
            load_config(path)

    def test_empty_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="empty"):
            load_config(_write(tmp_path, ""))

    def test_top_level_list(self, tmp_path):
        with pytest.raises(ConfigurationError, match="mapping"):
            load_config(_write(tmp_path, "- a\n- b\n"))


class TestConfigurationValidation:
    """Test schema validation errors."""

    def test_yaml_catalog_requires_path(self, tmp_path):
        path = _write(tmp_path, "catalog:\n  type: yaml\n")

        with pytest.raises(ConfigurationError) as exc_info:
            load_config(path)

        assert any("catalog.path is required" in e for e in exc_info.value.errors)

    def test_http_catalog_requires_url(self, tmp_path):
        with pytest.raises(ConfigurationError):
            load_config(_write(tmp_path, "catalog:\n  type: http\n"))

    def test_invalid_catalog_type(self, tmp_path):
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(_write(tmp_path, "catalog:\n  type: erp\n"))

        assert "catalog -> type" in str(exc_info.value)

    @pytest.mark.parametrize("chunk_size", [0, 1001])
    def test_chunk_size_range(self, tmp_path, chunk_size):
        with pytest.raises(ConfigurationError):
            load_config(_write(tmp_path, f"matching:\n  chunk_size: {chunk_size}\n"))

    def test_thresholds_out_of_order(self, tmp_path):
        text = "matching:\n  scoring:\n    found_threshold: 0.5\n    partial_threshold: 0.7\n"

        with pytest.raises(ConfigurationError) as exc_info:
            with warnings.catch_warnings():
                warnings.simplefilter("ignore")
                load_config(_write(tmp_path, text))

        assert "cannot exceed" in str(exc_info.value)

    def test_unknown_status_filter(self):
        with pytest.raises(ValueError):
            ExportConfig(status_filter="maybe")

    def test_status_filter_normalized(self):
        assert ExportConfig(status_filter=" Found ").status_filter == "found"

    def test_export_fields_deduplicated(self):
        config = ExportConfig(fields=["sku", "status", "sku"])
        assert config.fields == [ExportField.SKU, ExportField.STATUS]

    def test_export_fields_not_empty(self):
        with pytest.raises(ValueError):
            ExportConfig(fields=[])

    def test_blank_path_counts_as_missing(self):
        with pytest.raises(ValueError):
            AppConfig.model_validate({"catalog": {"type": "yaml", "path": "   "}})

    def test_error_message_lists_suggestions(self, tmp_path):
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(_write(tmp_path, "matching:\n  chunk_size: nope\n"))

        message = str(exc_info.value)
        assert "Validation Errors:" in message
        assert "1. " in message
        assert "Suggestions:" in message


class TestConfigurationWarnings:
    """Non-fatal configuration warnings."""

    def test_large_chunk_size(self):
        warnings_found = check_for_warnings({"matching": {"chunk_size": 800}})
        assert len(warnings_found) == 1
        assert "chunk_size" in warnings_found[0]

    def test_custom_scoring(self):
        warnings_found = check_for_warnings({"matching": {"scoring": {"name_score": 0.5}}})
        assert "name_score" in warnings_found[0]

    def test_default_scoring_values_no_warning(self):
        assert check_for_warnings({"matching": {"scoring": {"name_score": 0.6}}}) == []

    def test_duplicate_export_fields(self):
        warnings_found = check_for_warnings({"export": {"fields": ["sku", "SKU"]}})
        assert "sku" in warnings_found[0]

    def test_warnings_emitted_on_load(self, tmp_path):
        path = _write(tmp_path, "matching:\n  chunk_size: 600\n")

        with pytest.warns(UserWarning, match="Large chunk_size"):
            app_config, _ = load_config(path)

        assert app_config.matching.chunk_size == 600


class TestEnvironmentVariables:
    """Test environment variable loading."""

    def test_all_optional(self):
        env_config = load_environment_config()

        assert env_config.log_level is None
        assert env_config.database_url is None
        assert env_config.environment == "local"

    def test_values_read(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("DATABASE_URL", "sqlite:///./data/catalog.db")
        monkeypatch.setenv("CATALOG_PATH", " catalog.yaml ")
        monkeypatch.setenv("CATALOG_API_TOKEN", "tok")
        monkeypatch.setenv("ENVIRONMENT", "staging")

        env_config = load_environment_config()

        assert env_config.log_level == "DEBUG"
        assert env_config.database_url == "sqlite:///./data/catalog.db"
        assert env_config.catalog_path == "catalog.yaml"
        assert env_config.catalog_api_token == "tok"
        assert env_config.environment == "staging"

    def test_blank_values_ignored(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "  ")
        assert load_environment_config().log_level is None

    def test_invalid_log_level(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "LOUD")

        with pytest.raises(ConfigurationError) as exc_info:
            load_environment_config()

        assert "Invalid LOG_LEVEL" in exc_info.value.errors[0]

    def test_invalid_database_url(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "catalog.db")

        with pytest.raises(ConfigurationError, match="DATABASE_URL"):
            load_environment_config()

    def test_environment_error_surfaces_from_load_config(self, tmp_path, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "LOUD")

        with pytest.raises(ConfigurationError):
            load_config(_write(tmp_path, "catalog:\n  type: demo\n"))


class TestConfigurationHelpers:
    """Test helper functions."""

    def test_validate_config_file_utility(self, capsys):
        assert validate_config_file(FIXTURES_DIR / "valid_config.yaml") is True
        assert "is valid" in capsys.readouterr().out

    def test_example_config_is_valid(self, capsys):
        example = Path(__file__).parent.parent / "config.example.yaml"

        assert validate_config_file(example) is True

    def test_validate_config_file_invalid(self, tmp_path, capsys):
        assert validate_config_file(_write(tmp_path, "catalog:\n  type: yaml\n")) is False
        assert "validation failed" in capsys.readouterr().out

    def test_configuration_error_accumulates(self):
        error = ConfigurationError("Broken")
        error.add_error("first")
        error.add_suggestion("fix it")

        assert "1. first" in str(error)
        assert "- fix it" in str(error)
