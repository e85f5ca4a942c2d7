"""tw2panda configuration loader.

Loads and validates tw2panda.config.json configuration files.
"""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .design_system.default_theme import DEFAULT_ENTRY_CSS
from .design_system.resolver import DesignSystem, get_cached_resolver
from .errors import ConfigurationError
from .tw_logging import LogCategory, get_category_logger

logger = get_category_logger(LogCategory.CONFIG)

# Default configuration file name
CONFIG_FILENAME = "tw2panda.config.json"
CONFIG_ENV_VAR = "TW2PANDA_CONFIG"

# Flattened style keys containing one of these land on the "size" axis
DEFAULT_SIZE_KEYS = [
    "padding",
    "paddingX",
    "paddingY",
    "p",
    "px",
    "py",
    "fontSize",
    "height",
    "width",
    "gap",
]
# ...else on the "variant" axis when they contain one of these
DEFAULT_VISUAL_KEYS = ["backgroundColor", "bg", "bgColor", "color", "borderColor"]

DEFAULT_INCLUDE = [
    "**/*.tsx",
    "**/*.jsx",
    "**/*.ts",
    "**/*.js",
    "**/*.html",
    "**/*.vue",
    "**/*.svelte",
    "**/*.astro",
]

PATTERN_SCOPES = ("file", "span")
OUTPUT_FORMATS = ("json", "markdown", "both")


@dataclass
class DesignSystemConfig:
    """Where the Tailwind entry stylesheet comes from.

    ``css`` wins over ``css_path``; with neither, the bundled default theme
    is used.
    """

    css: str | None = None
    css_path: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "css": self.css,
            "cssPath": self.css_path,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DesignSystemConfig":
        """Create from dictionary."""
        return cls(
            css=data.get("css"),
            css_path=data.get("cssPath"),
        )

    def stylesheet_path(self, project_path: Path | None = None) -> Path | None:
        if not self.css_path:
            return None
        path = Path(self.css_path)
        if not path.is_absolute() and project_path:
            path = Path(project_path) / path
        return path

    def base_dir(self, project_path: Path | None = None) -> Path | None:
        """Directory local ``@import`` rules resolve against.

        The stylesheet's own directory for ``css_path`` (and for inline
        ``css`` when a path is also given), else the project root.
        """
        path = self.stylesheet_path(project_path)
        if path is not None:
            return path.parent
        return Path(project_path) if project_path else None

    def get_resolver(self, project_path: Path | None = None) -> DesignSystem:
        """Cached design system for this configuration.

        Raises:
            ConfigurationError: If ``css_path`` does not exist.
            DesignSystemError: If the stylesheet or one of its imports is
                malformed or unreadable.
        """
        path = self.stylesheet_path(project_path)
        source = str(path) if path is not None and self.css is None else "inline"
        return get_cached_resolver(
            self.load_css(project_path), source, self.base_dir(project_path)
        )

    def load_css(self, project_path: Path | None = None) -> str:
        """Return the entry stylesheet text.

        Raises:
            ConfigurationError: If ``css_path`` does not exist.
        """
        if self.css is not None:
            return self.css
        path = self.stylesheet_path(project_path)
        if path is not None:
            if not path.exists():
                raise ConfigurationError(
                    f"Tailwind stylesheet not found: {path}",
                    suggestion="Point designSystem.cssPath at your Tailwind CSS entry file",
                )
            logger.debug(f"Loading Tailwind stylesheet from {path}")
            return path.read_text(encoding="utf-8")
        return DEFAULT_ENTRY_CSS


@dataclass
class ConditionConfig:
    """Extra destination conditions beyond the Panda defaults."""

    conditions: list[str] = field(default_factory=list)
    breakpoints: list[str] = field(
        default_factory=lambda: ["sm", "md", "lg", "xl", "2xl"]
    )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "conditions": self.conditions,
            "breakpoints": self.breakpoints,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ConditionConfig":
        """Create from dictionary."""
        return cls(
            conditions=data.get("conditions", []),
            breakpoints=data.get("breakpoints", ["sm", "md", "lg", "xl", "2xl"]),
        )


@dataclass
class MiningConfig:
    """Corpus mining thresholds and scan patterns."""

    min_pattern_occurrences: int = 2
    min_similarity: float = 0.5
    batch_size: int = 4
    pattern_scope: str = "file"
    size_keys: list[str] = field(default_factory=lambda: list(DEFAULT_SIZE_KEYS))
    visual_keys: list[str] = field(default_factory=lambda: list(DEFAULT_VISUAL_KEYS))
    include: list[str] = field(default_factory=lambda: list(DEFAULT_INCLUDE))
    exclude: list[str] = field(default_factory=list)
    shorthands: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "minPatternOccurrences": self.min_pattern_occurrences,
            "minSimilarity": self.min_similarity,
            "batchSize": self.batch_size,
            "patternScope": self.pattern_scope,
            "sizeKeys": self.size_keys,
            "visualKeys": self.visual_keys,
            "include": self.include,
            "exclude": self.exclude,
            "shorthands": self.shorthands,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MiningConfig":
        """Create from dictionary."""
        return cls(
            min_pattern_occurrences=data.get("minPatternOccurrences", 2),
            min_similarity=data.get("minSimilarity", 0.5),
            batch_size=data.get("batchSize", 4),
            pattern_scope=data.get("patternScope", "file"),
            size_keys=data.get("sizeKeys", list(DEFAULT_SIZE_KEYS)),
            visual_keys=data.get("visualKeys", list(DEFAULT_VISUAL_KEYS)),
            include=data.get("include", list(DEFAULT_INCLUDE)),
            exclude=data.get("exclude", []),
            shorthands=data.get("shorthands", False),
        )

    def validate(self) -> None:
        """Raise ConfigurationError for out-of-range values."""
        if not isinstance(self.min_pattern_occurrences, int) or self.min_pattern_occurrences < 1:
            raise ConfigurationError(
                f"minPatternOccurrences must be a positive integer, got {self.min_pattern_occurrences!r}"
            )
        if not isinstance(self.min_similarity, int | float) or not 0.0 <= self.min_similarity <= 1.0:
            raise ConfigurationError(
                f"minSimilarity must be between 0 and 1, got {self.min_similarity!r}"
            )
        if not isinstance(self.batch_size, int) or self.batch_size < 1:
            raise ConfigurationError(
                f"batchSize must be a positive integer, got {self.batch_size!r}"
            )
        if self.pattern_scope not in PATTERN_SCOPES:
            raise ConfigurationError(
                f"patternScope must be one of {', '.join(PATTERN_SCOPES)}, got {self.pattern_scope!r}"
            )
        if not isinstance(self.shorthands, bool):
            raise ConfigurationError(f"shorthands must be true or false, got {self.shorthands!r}")


@dataclass
class OutputConfig:
    """Output format configuration."""

    report_dir: str = ".tw2panda"
    dry_run: bool = False
    format: str = "both"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "reportDir": self.report_dir,
            "dryRun": self.dry_run,
            "format": self.format,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "OutputConfig":
        """Create from dictionary."""
        return cls(
            report_dir=data.get("reportDir", ".tw2panda"),
            dry_run=data.get("dryRun", False),
            format=data.get("format", "both"),
        )

    def validate(self) -> None:
        if self.format not in OUTPUT_FORMATS:
            raise ConfigurationError(
                f"output.format must be one of {', '.join(OUTPUT_FORMATS)}, got {self.format!r}"
            )


@dataclass
class Tw2PandaConfig:
    """Complete tw2panda configuration."""

    design_system: DesignSystemConfig = field(default_factory=DesignSystemConfig)
    conditions: ConditionConfig = field(default_factory=ConditionConfig)
    mining: MiningConfig = field(default_factory=MiningConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "designSystem": self.design_system.to_dict(),
            "conditions": self.conditions.to_dict(),
            "mining": self.mining.to_dict(),
            "output": self.output.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Tw2PandaConfig":
        """Create from dictionary."""
        return cls(
            design_system=DesignSystemConfig.from_dict(data.get("designSystem", {})),
            conditions=ConditionConfig.from_dict(data.get("conditions", {})),
            mining=MiningConfig.from_dict(data.get("mining", {})),
            output=OutputConfig.from_dict(data.get("output", {})),
        )

    def validate(self) -> None:
        """Validate every section.

        Raises:
            ConfigurationError: On the first invalid value.
        """
        self.mining.validate()
        self.output.validate()


class ConfigLoader:
    """Loader for tw2panda configuration."""

    def __init__(self, project_path: Path | None = None):
        """Initialize the config loader.

        Args:
            project_path: Path to the project root. Defaults to current directory.
        """
        self.project_path = Path(project_path) if project_path else Path.cwd()

    def load(self, config_path: Path | None = None) -> Tw2PandaConfig:
        """Load tw2panda configuration.

        Precedence (highest to lowest):
        1. Explicit config_path
        2. Environment variable TW2PANDA_CONFIG
        3. tw2panda.config.json in project root
        4. Default configuration

        Args:
            config_path: Optional explicit path to config file.

        Returns:
            Loaded and validated Tw2PandaConfig instance.

        Raises:
            ConfigurationError: If a config file is not valid JSON or holds
                invalid values.
        """
        # Try explicit path
        if config_path and config_path.exists():
            return self._load_from_file(config_path)

        # Try environment variable
        env_path = os.environ.get(CONFIG_ENV_VAR)
        if env_path:
            env_config_path = Path(env_path)
            if env_config_path.exists():
                return self._load_from_file(env_config_path)

        # Try project root
        project_config = self.project_path / CONFIG_FILENAME
        if project_config.exists():
            return self._load_from_file(project_config)

        # Return defaults
        logger.debug("No tw2panda config found, using defaults")
        return Tw2PandaConfig()

    def _load_from_file(self, config_path: Path) -> Tw2PandaConfig:
        """Load configuration from a file."""
        logger.debug(f"Loading tw2panda config from {config_path}")
        content = config_path.read_text(encoding="utf-8")
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Invalid JSON: {e.msg} (line {e.lineno})", config_file=str(config_path)
            ) from e
        if not isinstance(data, dict):
            raise ConfigurationError(
                "Top-level value must be an object", config_file=str(config_path)
            )

        config = Tw2PandaConfig.from_dict(data)
        try:
            config.validate()
        except ConfigurationError as e:
            raise ConfigurationError(e.message, config_file=str(config_path)) from e
        return config

    def save(self, config: Tw2PandaConfig, config_path: Path | None = None) -> Path:
        """Save configuration to a file.

        Args:
            config: Configuration to save.
            config_path: Optional path. Defaults to project root.

        Returns:
            Path where config was saved.
        """
        if config_path is None:
            config_path = self.project_path / CONFIG_FILENAME

        content = json.dumps(config.to_dict(), indent=2)
        config_path.write_text(content, encoding="utf-8")
        logger.info(f"Saved tw2panda config to {config_path}")
        return config_path


def load_config(project_path: Path | None = None) -> Tw2PandaConfig:
    """Convenience function to load tw2panda configuration.

    Args:
        project_path: Optional project root path.

    Returns:
        Loaded Tw2PandaConfig instance.
    """
    loader = ConfigLoader(project_path)
    return loader.load()
