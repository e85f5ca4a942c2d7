"""Class-list extraction from source text.

Extractors find class-bearing strings in arbitrary source files. The
default one is a set of regexes: fast, good enough for the common JSX and
HTML shapes, and knowingly blind to anything dynamic.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

# Leftovers of template interpolation (`${...}`, `{cond && ...}`)
DEBRIS_PREFIXES = ("{", "$")


@dataclass(frozen=True)
class ClassListMatch:
    """One class-bearing string found in a source file."""

    raw_text: str
    span: tuple[int, int]  # character offsets of raw_text
    line: int  # 1-based line of span start

    @property
    def classes(self) -> list[str]:
        """Whitespace-separated classes, minus interpolation debris."""
        return split_classes(self.raw_text)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "raw_text": self.raw_text,
            "span": list(self.span),
            "line": self.line,
        }


def split_classes(text: str) -> list[str]:
    return [cls for cls in text.split() if not cls.startswith(DEBRIS_PREFIXES)]


class ClassListExtractor(ABC):
    """Abstract base class for class-list extractors.

    ``extract`` must be pure: calling it twice on the same content yields
    the same matches, so callers can iterate the result as often as needed.
    """

    @abstractmethod
    def extract(self, content: str) -> list[ClassListMatch]:
        """Find class lists in source text.

        Args:
            content: Full source text.

        Returns:
            Matches ordered by position.
        """
        ...


class RegexClassExtractor(ClassListExtractor):
    """Regex extractor for attribute values, template tags and helper calls."""

    DEFAULT_PATTERNS = (
        # class="..." / className='...'
        re.compile(r"""(?:class|className)=["']([^"']+)["']"""),
        # className={`...`}
        re.compile(r"(?:class|className)=\{`([^`]+)`\}"),
        # tw`...`
        re.compile(r"tw`([^`]+)`"),
        # clsx("..."), cn('...'), cx(...), cva(...)
        re.compile(r"""(?:clsx|cn|cx|cva)\s*\(\s*["']([^"']+)["']"""),
    )

    def __init__(self, patterns: list[re.Pattern[str]] | None = None):
        """Initialize the extractor.

        Args:
            patterns: Regexes whose first group captures a class list.
                Defaults to DEFAULT_PATTERNS.
        """
        self.patterns = list(patterns) if patterns is not None else list(self.DEFAULT_PATTERNS)

    def extract(self, content: str) -> list[ClassListMatch]:
        matches = []
        for pattern in self.patterns:
            for match in pattern.finditer(content):
                start, end = match.span(1)
                matches.append(
                    ClassListMatch(
                        raw_text=match.group(1),
                        span=(start, end),
                        line=content.count("\n", 0, start) + 1,
                    )
                )
        matches.sort(key=lambda m: m.span)
        return matches
