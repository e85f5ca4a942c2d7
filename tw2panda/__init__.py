"""tw2panda - convert Tailwind class lists into Panda CSS style objects.

Resolves utility classes through a Tailwind-compatible design system, maps
the resulting declarations onto Panda style properties and token
references, and mines whole projects for repeated class combinations that
can become recipes.
"""

__version__ = "0.1.0"

from .config import ConfigLoader, Tw2PandaConfig, load_config
from .converter import ClassSetConversion, class_set_to_style_object
from .design_system import (
    CSSResolver,
    DesignSystem,
    StaticResolver,
    create_resolver,
    get_cached_resolver,
    parse_candidate,
    reset_resolver_cache,
    resolve_candidates,
)
from .errors import ConfigurationError, DesignSystemError, ExtractionError, Tw2PandaError
from .mining import MiningOptions, ProjectAnalysis, load_analysis, mine_project, write_analysis
from .registry import TokenRegistry
from .tw_logging import get_logger, setup_logging

__all__ = [
    "__version__",
    "ConfigLoader",
    "Tw2PandaConfig",
    "load_config",
    "ClassSetConversion",
    "class_set_to_style_object",
    "CSSResolver",
    "DesignSystem",
    "StaticResolver",
    "create_resolver",
    "get_cached_resolver",
    "parse_candidate",
    "reset_resolver_cache",
    "resolve_candidates",
    "ConfigurationError",
    "DesignSystemError",
    "ExtractionError",
    "Tw2PandaError",
    "MiningOptions",
    "ProjectAnalysis",
    "load_analysis",
    "mine_project",
    "write_analysis",
    "TokenRegistry",
    "get_logger",
    "setup_logging",
]
