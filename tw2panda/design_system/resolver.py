"""CSS resolver: candidate strings → declaration text.

``DesignSystem`` is the oracle the converter talks to. Building one means
parsing the theme, so instances are memoized process-wide, keyed by the
configuration CSS they were built from. The cache is an explicit service:
``create_resolver`` always builds, ``get_cached_resolver`` reuses, and
``reset_resolver_cache`` forgets.
"""

import re
import threading
import time
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Protocol

from ..tw_logging import LogCategory, get_category_logger
from .candidate import Candidate, parse_candidate
from .default_theme import DEFAULT_ENTRY_CSS
from .theme import Theme
from .utilities import compile_utility
from .variants import variant_selectors

logger = get_category_logger(LogCategory.RESOLVER)

CSS_ESCAPE_PATTERN = re.compile(r"([^a-zA-Z0-9_-])")


class CSSResolver(Protocol):
    """What the converter and miner need from a resolver."""

    def candidates_to_css(self, candidates: list[str]) -> list[str | None]: ...

    def resolve_theme_value(self, name: str) -> str | None: ...

    def parse_candidate(self, raw: str) -> Candidate | None: ...


def escape_class_name(class_name: str) -> str:
    """Escape a class name for use in a CSS selector."""
    escaped = CSS_ESCAPE_PATTERN.sub(r"\\\1", class_name)
    if escaped[:1].isdigit():
        escaped = f"\\3{escaped[0]} {escaped[1:]}"
    return escaped


def render_rule(
    class_name: str, declarations: list[tuple[str, str]], selectors: list[str]
) -> str:
    """Render declarations nested under the variant selectors."""
    lines = [f".{escape_class_name(class_name)} {{"]
    depth = 1
    for selector in selectors:
        lines.append(f"{'  ' * depth}{selector} {{")
        depth += 1
    for prop, value in declarations:
        lines.append(f"{'  ' * depth}{prop}: {value};")
    for level in range(depth - 1, -1, -1):
        lines.append(f"{'  ' * level}}}")
    return "\n".join(lines)


class DesignSystem:
    """Resolves candidates against a theme built from configuration CSS."""

    def __init__(self, theme: Theme, config_css: str = DEFAULT_ENTRY_CSS):
        self.theme = theme
        self.config_css = config_css

    @classmethod
    def from_css(
        cls,
        config_css: str,
        source: str = "inline",
        base_dir: Path | str | None = None,
    ) -> "DesignSystem":
        """Build a design system from an entry stylesheet.

        Local ``@import`` paths resolve against ``base_dir``.

        Raises:
            DesignSystemError: If the stylesheet is malformed.
        """
        return cls(Theme.from_css(config_css, source, base_dir), config_css)

    def parse_candidate(self, raw: str) -> Candidate | None:
        return parse_candidate(raw)

    def resolve_theme_value(self, name: str) -> str | None:
        """One-level theme lookup; the value may itself reference variables."""
        return self.theme.get(name)

    def candidate_to_css(self, raw: str) -> str | None:
        """Declaration block for one class, or None if it is not a utility."""
        candidate = parse_candidate(raw)
        if candidate is None or candidate.is_marker:
            return None

        declarations = compile_utility(candidate, self.theme)
        if not declarations:
            return None

        selectors = variant_selectors(candidate.modifiers, self.theme)
        if selectors is None:
            return None

        if candidate.important:
            declarations = [(prop, f"{value} !important") for prop, value in declarations]
        return render_rule(raw, declarations, selectors)

    def candidates_to_css(self, candidates: list[str]) -> list[str | None]:
        """Resolve a batch; each entry fails independently."""
        return [self.candidate_to_css(raw) for raw in candidates]


class StaticResolver:
    """Resolver backed by fixed tables.

    Useful for embedding known output (or for tests) without a theme:
    ``css_by_class`` maps class names to declaration text and
    ``theme_values`` maps variable names to raw values.
    """

    def __init__(
        self,
        css_by_class: Mapping[str, str],
        theme_values: Mapping[str, str] | None = None,
    ):
        self.css_by_class = dict(css_by_class)
        self.theme_values = dict(theme_values or {})

    def parse_candidate(self, raw: str) -> Candidate | None:
        return parse_candidate(raw)

    def resolve_theme_value(self, name: str) -> str | None:
        return self.theme_values.get(name)

    def candidates_to_css(self, candidates: list[str]) -> list[str | None]:
        return [self.css_by_class.get(raw) for raw in candidates]


_cache_lock = threading.Lock()
_cached_key: tuple[str, str | None] | None = None
_cached_system: DesignSystem | None = None


def create_resolver(
    config_css: str | None = None,
    source: str = "inline",
    base_dir: Path | str | None = None,
) -> DesignSystem:
    """Build a fresh design system, bypassing the cache.

    Args:
        config_css: Entry stylesheet text; defaults to ``@import "tailwindcss";``.
        source: Name used in error details.
        base_dir: Directory local ``@import`` paths are relative to.

    Raises:
        DesignSystemError: If the stylesheet is malformed.
    """
    css = DEFAULT_ENTRY_CSS if config_css is None else config_css
    start = time.perf_counter()
    system = DesignSystem.from_css(css, source, base_dir)
    logger.debug(
        f"Built design system with {len(system.theme)} theme variables",
        extra={
            "operation": "create_resolver",
            "duration_ms": round((time.perf_counter() - start) * 1000, 2),
        },
    )
    return system


def get_cached_resolver(
    config_css: str | None = None,
    source: str = "inline",
    base_dir: Path | str | None = None,
) -> DesignSystem:
    """Return the process-wide design system for ``config_css``.

    Rebuilt only when the configuration text (or the directory its local
    imports resolve against) differs from the cached one.
    """
    global _cached_key, _cached_system

    css = DEFAULT_ENTRY_CSS if config_css is None else config_css
    key = (css, str(base_dir) if base_dir else None)
    with _cache_lock:
        if _cached_system is not None and _cached_key == key:
            return _cached_system
        if _cached_system is not None:
            logger.info("Configuration CSS changed, rebuilding design system")
        system = create_resolver(css, source, base_dir)
        _cached_key = key
        _cached_system = system
        return system


def reset_resolver_cache() -> None:
    """Forget the cached design system."""
    global _cached_key, _cached_system

    with _cache_lock:
        _cached_key = None
        _cached_system = None


def resolve_candidates(
    class_tokens: Iterable[str], resolver: CSSResolver | None = None
) -> list[str | None]:
    """Declaration text (or None) for each class token, in input order."""
    active = resolver if resolver is not None else get_cached_resolver()
    return active.candidates_to_css(list(class_tokens))
