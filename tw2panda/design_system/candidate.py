"""Candidate parsing: one class token into root, value, modifiers and flags.

Parsing is pure. It never raises; anything it cannot make sense of comes
back as ``None`` and is treated as a custom class downstream.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .utilities import FUNCTIONAL_ROOTS, MODIFIABLE_ROOTS, STATIC_UTILITIES

MARKER_PATTERN = re.compile(r"^(group|peer)(?:/([\w-]+))?$")
PROPERTY_NAME_PATTERN = re.compile(r"^-{0,2}[a-zA-Z][\w-]*$")

_OPENERS = {"[": "]", "(": ")"}
_CLOSERS = {"]", ")"}


class CandidateKind(Enum):
    """What a parsed class token represents."""

    UTILITY = "utility"
    ARBITRARY_PROPERTY = "arbitrary_property"  # [mask-type:luminance]
    MARKER = "marker"  # group, peer/item


@dataclass(frozen=True)
class Candidate:
    """A parsed utility class.

    ``modifiers`` keeps authoring order (``md:hover:p-4`` → ``("md", "hover")``).
    Arbitrary values keep their brackets verbatim (``[calc(100%-2rem)]``).
    """

    raw: str
    root: str
    value: str | None = None
    modifiers: tuple[str, ...] = ()
    important: bool = False
    kind: CandidateKind = CandidateKind.UTILITY
    negative: bool = False
    arbitrary: bool = False
    value_modifier: str | None = None  # `50` in bg-red-500/50
    scope: str | None = None  # `item` in group/item

    @property
    def is_marker(self) -> bool:
        return self.kind is CandidateKind.MARKER

    @property
    def is_arbitrary_property(self) -> bool:
        return self.kind is CandidateKind.ARBITRARY_PROPERTY

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "raw": self.raw,
            "root": self.root,
            "value": self.value,
            "modifiers": list(self.modifiers),
            "important": self.important,
            "kind": self.kind.value,
            "negative": self.negative,
            "arbitrary": self.arbitrary,
            "value_modifier": self.value_modifier,
            "scope": self.scope,
        }


def split_top_level(text: str, separator: str = ":") -> list[str] | None:
    """Split on ``separator`` outside of ``[...]`` and ``(...)``.

    Returns None when brackets are unbalanced.
    """
    parts: list[str] = []
    stack: list[str] = []
    start = 0

    for i, char in enumerate(text):
        if char in _OPENERS:
            stack.append(_OPENERS[char])
        elif char in _CLOSERS:
            if not stack or stack.pop() != char:
                return None
        elif char == separator and not stack:
            parts.append(text[start:i])
            start = i + 1

    if stack:
        return None
    parts.append(text[start:])
    return parts


def _closing_index(text: str, start: int) -> int | None:
    """Index of the bracket closing the one at ``start``."""
    stack: list[str] = []
    for i in range(start, len(text)):
        char = text[i]
        if char in _OPENERS:
            stack.append(_OPENERS[char])
        elif char in _CLOSERS:
            if not stack or stack.pop() != char:
                return None
            if not stack:
                return i
    return None


def _split_value_modifier(root: str, value: str) -> tuple[str, str | None] | None:
    """Split ``red-500/50`` into value and modifier for roots that accept one."""
    if root not in MODIFIABLE_ROOTS or "/" not in value:
        return value, None
    head, _, modifier = value.rpartition("/")
    if not head or not modifier:
        return None
    return head, modifier


def _parse_arbitrary_value(
    raw: str, base: str, common: dict[str, Any]
) -> Candidate | None:
    positions = [i for i in (base.find("-["), base.find("-(")) if i > 0]
    if not positions:
        return None
    index = min(positions)
    root = base[:index]
    end = _closing_index(base, index + 1)
    if end is None:
        return None

    value = base[index + 1 : end + 1]
    rest = base[end + 1 :]
    value_modifier = None
    if rest:
        if not rest.startswith("/") or root not in MODIFIABLE_ROOTS or len(rest) == 1:
            return None
        value_modifier = rest[1:]

    return Candidate(
        raw=raw,
        root=root,
        value=value,
        arbitrary=True,
        value_modifier=value_modifier,
        **common,
    )


def parse_candidate(raw: str) -> Candidate | None:
    """Parse a single class token.

    Args:
        raw: Class token as authored, e.g. ``md:hover:!bg-red-500/50``.

    Returns:
        The parsed Candidate, or None when the token is not parseable
        (empty, whitespace, unbalanced brackets, empty modifier segment,
        template interpolation debris).
    """
    if not raw or any(char.isspace() for char in raw) or raw[0] in "{$":
        return None

    segments = split_top_level(raw)
    if segments is None or any(not segment for segment in segments):
        return None

    *modifiers, base = segments
    important = False
    if base.startswith("!"):
        important, base = True, base[1:]
    elif base.endswith("!"):
        important, base = True, base[:-1]
    if not base:
        return None

    negative = False
    if base.startswith("-") and len(base) > 1:
        negative, base = True, base[1:]

    marker = MARKER_PATTERN.match(base)
    if marker and not modifiers and not negative and not important:
        return Candidate(
            raw=raw,
            root=marker.group(1),
            kind=CandidateKind.MARKER,
            scope=marker.group(2),
        )

    common: dict[str, Any] = {
        "modifiers": tuple(modifiers),
        "important": important,
        "negative": negative,
    }

    if base.startswith("[") and base.endswith("]"):
        prop, sep, value = base[1:-1].partition(":")
        if negative or not sep or not value or not PROPERTY_NAME_PATTERN.match(prop):
            return None
        return Candidate(
            raw=raw,
            root=prop,
            value=value,
            kind=CandidateKind.ARBITRARY_PROPERTY,
            arbitrary=True,
            **common,
        )

    if base in STATIC_UTILITIES:
        return Candidate(raw=raw, root=base, **common)

    if "-[" in base or "-(" in base:
        return _parse_arbitrary_value(raw, base, common)

    for root in FUNCTIONAL_ROOTS:
        if base == root:
            return Candidate(raw=raw, root=root, **common)
        if base.startswith(f"{root}-"):
            split = _split_value_modifier(root, base[len(root) + 1 :])
            if split is None:
                return None
            value, value_modifier = split
            return Candidate(
                raw=raw,
                root=root,
                value=value,
                value_modifier=value_modifier,
                **common,
            )

    root, _, value = base.partition("-")
    if not root:
        return None
    return Candidate(raw=raw, root=root, value=value or None, **common)
