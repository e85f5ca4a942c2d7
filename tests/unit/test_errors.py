"""Tests for structured errors."""

import pytest

from tw2panda.errors import (
    ConfigurationError,
    DesignSystemError,
    ErrorCategory,
    ExtractionError,
    Tw2PandaError,
)


class TestErrors:
    """Tests for error formatting and categories."""

    def test_format_with_suggestion_and_details(self):
        """Test formatted output includes suggestion and details."""
        error = Tw2PandaError(
            category=ErrorCategory.CONFIGURATION,
            message="bad value",
            suggestion="fix it",
            details={"key": "mining.batchSize"},
        )
        assert error.format() == "Error: bad value\nSuggestion: fix it\n  key: mining.batchSize"
        assert str(error) == error.format()

    def test_configuration_error(self):
        """Test default suggestion and config file detail."""
        error = ConfigurationError("broken", config_file="tw2panda.config.json")
        assert error.category is ErrorCategory.CONFIGURATION
        assert error.suggestion
        assert error.details == {"config_file": "tw2panda.config.json"}

    def test_design_system_error(self):
        """Test design system errors carry their source."""
        error = DesignSystemError("unterminated @theme block", source="app.css")
        assert error.category is ErrorCategory.DESIGN_SYSTEM
        assert "source: app.css" in error.format()

    def test_extraction_error_without_path(self):
        """Test details are omitted when no file is given."""
        error = ExtractionError("unreadable")
        assert error.category is ErrorCategory.EXTRACTION
        assert error.details is None
        assert error.format().startswith("Error: unreadable\nSuggestion: ")

    def test_raisable(self):
        """Test errors behave as exceptions."""
        with pytest.raises(Tw2PandaError, match="unreadable"):
            raise ExtractionError("unreadable", file_path="a.tsx")
