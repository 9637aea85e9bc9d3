"""Tests for the error taxonomy."""

import pytest

from .lib import (
    ComponentNotFoundError,
    ConfigurationError,
    ErrorCategory,
    ErrorCollector,
    InvalidColorError,
    Severity,
    ThemeError,
    WidgetError,
)


class TestExceptions:
    """Tests for exception classes."""

    @pytest.mark.unit
    def test_widget_error_user_message(self):
        """Widget errors mention the widget type."""
        err = WidgetError("unsupported", widget_type="button")
        assert err.to_user_message() == "Widget error in button: unsupported"
        assert err.category == ErrorCategory.WIDGET
        assert err.context == {"widget_type": "button"}

    @pytest.mark.unit
    def test_theme_error_without_path(self):
        """Location suffix is omitted when absent."""
        assert ThemeError("missing").to_user_message() == "Theme error: missing"

    @pytest.mark.unit
    def test_invalid_color_is_value_error(self):
        """InvalidColorError can be caught as ValueError."""
        with pytest.raises(ValueError, match="Invalid hex color format: #12"):
            raise InvalidColorError("#12")

    @pytest.mark.unit
    def test_component_not_found_is_configuration_error(self):
        """Unknown components are configuration-class failures."""
        err = ComponentNotFoundError("Button / Primary")
        assert isinstance(err, ConfigurationError)
        assert err.category == ErrorCategory.CONFIGURATION
        assert "Button / Primary" in str(err)


class TestErrorCollector:
    """Tests for ErrorCollector."""

    @pytest.mark.unit
    def test_warnings_do_not_fail(self):
        """Warnings alone leave has_errors False."""
        collector = ErrorCollector()
        collector.add_warning("fallback used", ErrorCategory.VARIABLE, "n1")
        assert not collector.has_errors
        assert len(collector.warnings) == 1

    @pytest.mark.unit
    def test_add_exception(self):
        """Exceptions are recorded with their user message."""
        collector = ErrorCollector()
        collector.add_exception(InvalidColorError("zz"), node_id="w1")
        record = collector.errors[0]
        assert record.severity == Severity.ERROR
        assert record.category == ErrorCategory.STYLE
        assert record.node_id == "w1"
        assert "zz" in record.message

    @pytest.mark.unit
    def test_extend_and_to_dict(self):
        """Collectors merge and serialize by severity."""
        first = ErrorCollector()
        first.add_error("boom")
        second = ErrorCollector()
        second.add_warning("hmm")
        first.extend(second)
        data = first.to_dict()
        assert [e["message"] for e in data["errors"]] == ["boom"]
        assert [w["message"] for w in data["warnings"]] == ["hmm"]
