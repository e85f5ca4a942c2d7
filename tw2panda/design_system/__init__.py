"""Tailwind design system: theme, candidate parsing and CSS resolution.

This package turns configuration CSS into a resolver that answers
"what CSS does this class emit?" for the converter.
"""

from .candidate import Candidate, CandidateKind, parse_candidate, split_top_level
from .default_theme import DEFAULT_ENTRY_CSS, DEFAULT_THEME_CSS
from .resolver import (
    CSSResolver,
    DesignSystem,
    StaticResolver,
    create_resolver,
    get_cached_resolver,
    reset_resolver_cache,
    resolve_candidates,
)
from .theme import Theme

__all__ = [
    # Candidates
    "Candidate",
    "CandidateKind",
    "parse_candidate",
    "split_top_level",
    # Theme
    "Theme",
    "DEFAULT_ENTRY_CSS",
    "DEFAULT_THEME_CSS",
    # Resolver
    "CSSResolver",
    "DesignSystem",
    "StaticResolver",
    "create_resolver",
    "get_cached_resolver",
    "reset_resolver_cache",
    "resolve_candidates",
]
