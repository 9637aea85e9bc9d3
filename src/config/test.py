"""Tests for configuration management."""

import logging

import pytest

from .lib import (
    EnvConfig,
    EnvVar,
    get_environment,
    get_environment_info,
    get_log_level,
    get_style_defaults,
    list_environment_variables,
)

# =============================================================================
# Tests for get_environment (main interface)
# =============================================================================


class TestGetEnvironment:
    """Tests for the unified get_environment interface."""

    @pytest.mark.unit
    def test_returns_default_when_not_set(self, monkeypatch):
        """Returns default value when env var is not set."""
        monkeypatch.delenv("DESIGNGEN_MAX_VARIANTS", raising=False)
        result = get_environment(EnvVar.MAX_VARIANTS)
        assert result == 16

    @pytest.mark.unit
    def test_override_takes_priority(self, monkeypatch):
        """Override parameter takes highest priority."""
        monkeypatch.setenv("DESIGNGEN_MAX_VARIANTS", "4")
        result = get_environment(EnvVar.MAX_VARIANTS, override=8)
        assert result == 8

    @pytest.mark.unit
    def test_env_var_overrides_default(self, monkeypatch):
        """Environment variable overrides default value."""
        monkeypatch.setenv("DESIGNGEN_MAX_VARIANTS", "12")
        result = get_environment(EnvVar.MAX_VARIANTS)
        assert result == 12
        assert isinstance(result, int)

    @pytest.mark.unit
    def test_bool_type_conversion_true(self, monkeypatch):
        """Boolean type conversion for true values."""
        for value in ("true", "1", "yes", "TRUE", "Yes"):
            monkeypatch.setenv("DESIGNGEN_PREFER_MULTI_MODE", value)
            result = get_environment(EnvVar.PREFER_MULTI_MODE)
            assert result is True

    @pytest.mark.unit
    def test_bool_type_conversion_false(self, monkeypatch):
        """Boolean type conversion for false values."""
        for value in ("false", "0", "no", "FALSE", "No"):
            monkeypatch.setenv("DESIGNGEN_USE_VARIABLES", value)
            result = get_environment(EnvVar.USE_VARIABLES)
            assert result is False

    @pytest.mark.unit
    def test_unrecognized_bool_returns_default(self, monkeypatch):
        """Unparseable booleans fall back to the default."""
        monkeypatch.setenv("DESIGNGEN_USE_VARIABLES", "maybe")
        assert get_environment(EnvVar.USE_VARIABLES) is True

    @pytest.mark.unit
    def test_string_type(self, monkeypatch):
        """String type returns as-is."""
        monkeypatch.setenv("DESIGNGEN_COLLECTION_PREFIX", "Brand")
        result = get_environment(EnvVar.COLLECTION_PREFIX)
        assert result == "Brand"

    @pytest.mark.unit
    def test_invalid_int_returns_default(self, monkeypatch):
        """Invalid integer value returns default."""
        monkeypatch.setenv("DESIGNGEN_MAX_VARIANTS", "lots")
        result = get_environment(EnvVar.MAX_VARIANTS)
        assert result == 16


class TestGetEnvironmentInfo:
    """Tests for environment variable metadata."""

    @pytest.mark.unit
    def test_returns_env_config(self):
        """Returns EnvConfig dataclass."""
        info = get_environment_info(EnvVar.MAX_VARIANTS)
        assert isinstance(info, EnvConfig)
        assert info.name == "DESIGNGEN_MAX_VARIANTS"
        assert info.default == 16
        assert info.var_type is int
        assert info.category == "variants"

    @pytest.mark.unit
    def test_description_present(self):
        """Description field is populated."""
        info = get_environment_info(EnvVar.FALLBACK_TO_DIRECT_VALUES)
        assert "literal" in info.description


class TestListEnvironmentVariables:
    """Tests for listing environment variables."""

    @pytest.mark.unit
    def test_returns_all_variables(self):
        """Returns all EnvVar members when no category."""
        result = list_environment_variables()
        assert len(result) == len(EnvVar)
        assert all(isinstance(v, EnvVar) for v in result)

    @pytest.mark.unit
    def test_filter_by_category(self):
        """Filters by category correctly."""
        style_vars = list_environment_variables("style")
        assert EnvVar.USE_VARIABLES in style_vars
        assert EnvVar.COLLECTION_PREFIX in style_vars
        assert EnvVar.LIBRARY_NAME not in style_vars


# =============================================================================
# Tests for convenience functions
# =============================================================================


class TestStyleDefaults:
    """Tests for style switch resolution."""

    @pytest.mark.unit
    def test_defaults(self, monkeypatch):
        """Defaults match the documented switches."""
        for var in list_environment_variables("style"):
            monkeypatch.delenv(var.value.name, raising=False)
        assert get_style_defaults() == {
            "use_variables": True,
            "fallback_to_direct_values": True,
            "collection_prefix": "Default",
            "prefer_multi_mode": False,
        }

    @pytest.mark.unit
    def test_strict_mode_from_env(self, monkeypatch):
        """Fallback can be disabled through the environment."""
        monkeypatch.setenv("DESIGNGEN_FALLBACK_TO_DIRECT_VALUES", "0")
        assert get_style_defaults()["fallback_to_direct_values"] is False


class TestLogLevel:
    """Tests for log level resolution."""

    @pytest.mark.unit
    def test_default_info(self, monkeypatch):
        """INFO when nothing is configured."""
        monkeypatch.delenv("DESIGNGEN_LOG_LEVEL", raising=False)
        assert get_log_level() == logging.INFO

    @pytest.mark.unit
    def test_env_level(self, monkeypatch):
        """Environment level name is honoured."""
        monkeypatch.setenv("DESIGNGEN_LOG_LEVEL", "debug")
        assert get_log_level() == logging.DEBUG

    @pytest.mark.unit
    def test_override_level(self, monkeypatch):
        """Override beats the environment."""
        monkeypatch.setenv("DESIGNGEN_LOG_LEVEL", "debug")
        assert get_log_level("error") == logging.ERROR
