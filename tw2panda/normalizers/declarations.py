"""Property-token mapping for resolved declaration blocks.

Turns emitted CSS like ``background-color: var(--color-blue-500);`` into a
style property plus a Panda token reference with a literal fallback:
``backgroundColor: token(colors.blue.500, #3b82f6)``.
"""

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ..registry import TokenRegistry, kebab_to_camel

if TYPE_CHECKING:
    from ..design_system.resolver import CSSResolver

DECLARATION_PATTERN = re.compile(r"([a-z-]+)\s*:\s*([^;{}]+);", re.IGNORECASE)
SPACING_CALC_PATTERN = re.compile(r"calc\(var\(--spacing\)\s*\*\s*(-?\d+(?:\.\d+)?)\)")
VAR_NAME_PATTERN = re.compile(r"var\(\s*(--[\w-]+)")
DIMENSION_PATTERN = re.compile(r"^(-?\d*\.?\d+)([a-z%]*)$")
IMPORTANT_PATTERN = re.compile(r"\s*!important\s*$")

DESCRIPTOR_KEYS = frozenset(["syntax", "inherits", "initial-value"])

# Variable-name prefixes that name a token category, not a token path
TOKEN_PREFIXES = (
    "color-",
    "text-",
    "leading-",
    "tracking-",
    "font-weight-",
    "font-size-",
    "radius-",
    "shadow-",
    "container-",
    "spacing-",
    "font-",
    "ease-",
    "blur-",
)

USABLE_VALUE_PATTERNS = [
    re.compile(r"^#[0-9a-fA-F]{3,8}$"),
    re.compile(r"^(rgb|rgba|hsl|hsla|oklch|oklab|lab|lch)\("),
    re.compile(
        r"^-?[\d.]+(%|px|rem|em|vh|vw|vmin|vmax|ch|ex|cm|mm|in|pt|pc|deg|rad|turn|s|ms)?$"
    ),
    re.compile(
        r"^(auto|none|inherit|initial|unset|revert|normal|bold|italic|block|inline|"
        r"flex|grid|hidden|visible|absolute|relative|fixed|sticky|static)$"
    ),
    re.compile(
        r"^(left|right|center|top|bottom|baseline|stretch|start|end|"
        r"space-between|space-around|space-evenly)$"
    ),
    re.compile(r"^(solid|dashed|dotted|double|groove|ridge|inset|outset)$"),
    re.compile(r"^(uppercase|lowercase|capitalize)$"),
    re.compile(r"^(wrap|nowrap|wrap-reverse)$"),
    re.compile(r"^(row|column|row-reverse|column-reverse)$"),
    re.compile(r"^(cover|contain)$"),
    re.compile(r"^url\("),
    re.compile(r"^calc\("),
]

MAX_RESOLVE_DEPTH = 16


@dataclass
class ResolvedDeclaration:
    """One declaration with its derived token path and literal value."""

    property: str  # CSS name, e.g. background-color
    raw_value: str  # as emitted, without !important
    token_path: str
    literal: str  # resolved literal, or the raw reference when unresolvable
    important: bool = False

    @property
    def style_property(self) -> str:
        """camelCase property name used in style objects."""
        return kebab_to_camel(self.property)

    @property
    def fallback(self) -> str | None:
        """The literal if it can serve as a token fallback, else None."""
        return self.literal if is_usable_fallback(self.literal) else None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "property": self.property,
            "raw_value": self.raw_value,
            "token_path": self.token_path,
            "literal": self.literal,
            "important": self.important,
        }


def parse_declarations(css: str) -> list[tuple[str, str]]:
    """Extract ``(property, value)`` pairs from declaration text.

    Custom properties and ``@property`` descriptors are skipped.
    """
    pairs = []
    for match in DECLARATION_PATTERN.finditer(css):
        prop = match.group(1).strip()
        value = match.group(2).strip()
        if not prop or not value:
            continue
        if prop.startswith("--") or prop in DESCRIPTOR_KEYS:
            continue
        pairs.append((prop, value))
    return pairs


def var_name_to_token_path(var_name: str) -> str:
    """``--color-gray-500`` → ``gray.500``; ``--text-xs`` → ``xs``."""
    name = var_name.strip().removeprefix("--")
    for prefix in TOKEN_PREFIXES:
        if name.startswith(prefix):
            name = name[len(prefix) :]
            break
    return name.replace("-", ".")


def is_usable_fallback(value: str) -> bool:
    """Whether a literal is concrete enough to be a token fallback."""
    if "var(--" in value:
        return False
    stripped = value.strip()
    return any(pattern.match(stripped) for pattern in USABLE_VALUE_PATTERNS)


def _closing_paren(text: str, open_index: int) -> int | None:
    depth = 0
    for i in range(open_index, len(text)):
        if text[i] == "(":
            depth += 1
        elif text[i] == ")":
            depth -= 1
            if depth == 0:
                return i
    return None


def _split_fallback(inner: str) -> tuple[str, str | None]:
    """Split ``--a, 1px`` into name and fallback at the first top-level comma."""
    depth = 0
    for i, char in enumerate(inner):
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
        elif char == "," and depth == 0:
            return inner[:i].strip(), inner[i + 1 :].strip() or None
    return inner.strip(), None


def expand_variables(
    value: str,
    resolver: "CSSResolver",
    seen: frozenset[str] = frozenset(),
    depth: int = 0,
) -> str | None:
    """Replace every ``var()`` in ``value`` with its resolved literal.

    Fallbacks (``var(--a, 1px)``) are used when ``--a`` is undefined.
    Returns None when any reference cannot be resolved, including cycles.
    """
    if depth > MAX_RESOLVE_DEPTH:
        return None

    parts: list[str] = []
    position = 0
    while True:
        start = value.find("var(", position)
        if start == -1:
            parts.append(value[position:])
            break
        end = _closing_paren(value, start + 3)
        if end is None:
            return None

        name, fallback = _split_fallback(value[start + 4 : end])
        replacement = None
        if name not in seen:
            raw = resolver.resolve_theme_value(name)
            if raw is not None:
                replacement = expand_variables(raw, resolver, seen | {name}, depth + 1)
        if replacement is None and fallback is not None:
            replacement = expand_variables(fallback, resolver, seen, depth + 1)
        if replacement is None:
            return None

        parts.append(value[position:start])
        parts.append(replacement)
        position = end + 1

    return "".join(parts)


def _format_number(number: float) -> str:
    text = f"{number:.4f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def _spacing_literal(multiplier: str, resolver: "CSSResolver") -> str | None:
    """``N × --spacing`` in the base unit, e.g. ``4`` → ``1rem``."""
    base = expand_variables("var(--spacing)", resolver)
    if base is None:
        return None
    match = DIMENSION_PATTERN.match(base.strip())
    if not match:
        return None
    amount = float(multiplier) * float(match.group(1))
    return f"{_format_number(amount)}{match.group(2)}"


def resolve_declaration(prop: str, value: str, resolver: "CSSResolver") -> ResolvedDeclaration:
    """Derive token path and literal for one declaration."""
    important = bool(IMPORTANT_PATTERN.search(value))
    raw_value = IMPORTANT_PATTERN.sub("", value).strip()
    token_path = raw_value
    literal = raw_value

    spacing = SPACING_CALC_PATTERN.search(raw_value)
    if spacing:
        token_path = spacing.group(1)
        literal = _spacing_literal(spacing.group(1), resolver) or raw_value
    elif "var(--" in raw_value:
        first = VAR_NAME_PATTERN.search(raw_value)
        if first:
            token_path = var_name_to_token_path(first.group(1))
        # A reference that bottoms out at another variable stays as written
        literal = expand_variables(raw_value, resolver) or raw_value

    return ResolvedDeclaration(
        property=prop,
        raw_value=raw_value,
        token_path=token_path,
        literal=literal,
        important=important,
    )


def map_declarations(css: str, resolver: "CSSResolver") -> list[ResolvedDeclaration]:
    """Resolve every declaration in a block, in source order."""
    return [
        resolve_declaration(prop, value, resolver)
        for prop, value in parse_declarations(css)
    ]


def format_token_value(
    declaration: ResolvedDeclaration,
    registry: TokenRegistry,
    important: bool = False,
) -> str:
    """Style value for a declaration.

    Wrapped as ``token(category.path, fallback)`` only when the path differs
    from the literal, the literal is a usable fallback and the property has
    a token category. Important declarations mark both path and literal.
    """
    is_important = important or declaration.important
    literal = declaration.literal
    marked_literal = f"{literal} !important" if is_important else literal

    if declaration.token_path == literal or not is_usable_fallback(literal):
        return marked_literal

    category = registry.category_for(declaration.style_property)
    if category is None:
        return marked_literal

    path = f"{declaration.token_path}!" if is_important else declaration.token_path
    return f"token({category}.{path}, {marked_literal})"
