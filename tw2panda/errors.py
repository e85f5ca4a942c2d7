"""Structured error types with recovery suggestions.

Only failures that stop all conversion surface as exceptions. Per-class and
per-file problems degrade locally and are reported through result fields.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(Enum):
    """Categories of errors for organization and handling."""

    DESIGN_SYSTEM = "design_system"  # Theme/config CSS could not be loaded
    CONFIGURATION = "configuration"  # Invalid tw2panda config values
    EXTRACTION = "extraction"  # Source text could not be read or scanned


@dataclass
class Tw2PandaError(Exception):
    """Base class for structured errors with recovery suggestions.

    Attributes:
        category: Error category for grouping.
        message: Human-readable error message.
        suggestion: Optional actionable recovery suggestion.
        details: Optional additional details dict.
    """

    category: ErrorCategory
    message: str
    suggestion: str | None = None
    details: dict[str, Any] | None = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Initialize the exception with the message."""
        super().__init__(self.message)

    def format(self) -> str:
        """Format the error for display, with suggestion and details."""
        lines = [f"Error: {self.message}"]

        if self.suggestion:
            lines.append(f"Suggestion: {self.suggestion}")

        if self.details:
            for key, value in self.details.items():
                lines.append(f"  {key}: {value}")

        return "\n".join(lines)

    def __str__(self) -> str:
        return self.format()


class DesignSystemError(Tw2PandaError):
    """The design system could not be constructed from its configuration."""

    def __init__(self, message: str, source: str | None = None):
        super().__init__(
            category=ErrorCategory.DESIGN_SYSTEM,
            message=message,
            suggestion="Check the @theme block and @import directives of your Tailwind CSS entry",
            details={"source": source} if source else None,
        )


class ConfigurationError(Tw2PandaError):
    """Error in configuration file or settings."""

    def __init__(
        self,
        message: str,
        config_file: str | None = None,
        suggestion: str | None = None,
    ):
        super().__init__(
            category=ErrorCategory.CONFIGURATION,
            message=message,
            suggestion=suggestion
            or "Check your configuration file syntax and required fields",
            details={"config_file": config_file} if config_file else None,
        )


class ExtractionError(Tw2PandaError):
    """A source file could not be read or scanned for class lists."""

    def __init__(self, message: str, file_path: str | None = None):
        super().__init__(
            category=ErrorCategory.EXTRACTION,
            message=message,
            suggestion="Verify the file is readable UTF-8 text",
            details={"file_path": file_path} if file_path else None,
        )
