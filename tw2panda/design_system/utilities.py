"""Utility tables: how a parsed candidate becomes CSS declarations.

Static utilities map a class name straight to declarations. Functional
utilities map a root (``p``, ``bg``, ``rounded``...) plus a value to
declarations, looking values up in the theme. Values that reference the
theme are emitted as ``var(--name)`` so the mapper can recover the token.
"""

import re
from collections.abc import Callable
from typing import TYPE_CHECKING

from .theme import Theme

if TYPE_CHECKING:
    from .candidate import Candidate

Declaration = tuple[str, str]
UtilityHandler = Callable[["Candidate", Theme], list[Declaration] | None]

NUMBER_PATTERN = re.compile(r"^\d+(?:\.\d+)?$")
FRACTION_PATTERN = re.compile(r"^\d+/\d+$")
TYPE_HINT_PATTERN = re.compile(
    r"^(color|length|number|percentage|url|image|family-name|line-width|position|size):"
)
COLOR_LITERAL_PATTERN = re.compile(
    r"^(#[0-9a-fA-F]{3,8}|(rgb|rgba|hsl|hsla|oklch|oklab|lab|lch|color-mix|color)\(|"
    r"var\(--color-)"
)


def _display(value: str) -> tuple[Declaration, ...]:
    return (("display", value),)


STATIC_UTILITIES: dict[str, tuple[Declaration, ...]] = {
    # Display
    "block": _display("block"),
    "inline-block": _display("inline-block"),
    "inline": _display("inline"),
    "flex": _display("flex"),
    "inline-flex": _display("inline-flex"),
    "grid": _display("grid"),
    "inline-grid": _display("inline-grid"),
    "table": _display("table"),
    "contents": _display("contents"),
    "flow-root": _display("flow-root"),
    "hidden": _display("none"),
    # Position
    "static": (("position", "static"),),
    "fixed": (("position", "fixed"),),
    "absolute": (("position", "absolute"),),
    "relative": (("position", "relative"),),
    "sticky": (("position", "sticky"),),
    # Visibility
    "visible": (("visibility", "visible"),),
    "invisible": (("visibility", "hidden"),),
    "isolate": (("isolation", "isolate"),),
    "sr-only": (
        ("position", "absolute"),
        ("width", "1px"),
        ("height", "1px"),
        ("padding", "0"),
        ("margin", "-1px"),
        ("overflow", "hidden"),
        ("clip", "rect(0, 0, 0, 0)"),
        ("white-space", "nowrap"),
        ("border-width", "0"),
    ),
    # Flexbox
    "flex-row": (("flex-direction", "row"),),
    "flex-row-reverse": (("flex-direction", "row-reverse"),),
    "flex-col": (("flex-direction", "column"),),
    "flex-col-reverse": (("flex-direction", "column-reverse"),),
    "flex-wrap": (("flex-wrap", "wrap"),),
    "flex-wrap-reverse": (("flex-wrap", "wrap-reverse"),),
    "flex-nowrap": (("flex-wrap", "nowrap"),),
    "flex-1": (("flex", "1"),),
    "flex-auto": (("flex", "auto"),),
    "flex-initial": (("flex", "0 auto"),),
    "flex-none": (("flex", "none"),),
    "grow": (("flex-grow", "1"),),
    "grow-0": (("flex-grow", "0"),),
    "shrink": (("flex-shrink", "1"),),
    "shrink-0": (("flex-shrink", "0"),),
    # Alignment
    "items-start": (("align-items", "flex-start"),),
    "items-end": (("align-items", "flex-end"),),
    "items-center": (("align-items", "center"),),
    "items-baseline": (("align-items", "baseline"),),
    "items-stretch": (("align-items", "stretch"),),
    "justify-start": (("justify-content", "flex-start"),),
    "justify-end": (("justify-content", "flex-end"),),
    "justify-center": (("justify-content", "center"),),
    "justify-between": (("justify-content", "space-between"),),
    "justify-around": (("justify-content", "space-around"),),
    "justify-evenly": (("justify-content", "space-evenly"),),
    "justify-stretch": (("justify-content", "stretch"),),
    "content-start": (("align-content", "flex-start"),),
    "content-end": (("align-content", "flex-end"),),
    "content-center": (("align-content", "center"),),
    "content-between": (("align-content", "space-between"),),
    "self-auto": (("align-self", "auto"),),
    "self-start": (("align-self", "flex-start"),),
    "self-end": (("align-self", "flex-end"),),
    "self-center": (("align-self", "center"),),
    "self-stretch": (("align-self", "stretch"),),
    "place-items-center": (("place-items", "center"),),
    "place-content-center": (("place-content", "center"),),
    # Typography
    "text-left": (("text-align", "left"),),
    "text-center": (("text-align", "center"),),
    "text-right": (("text-align", "right"),),
    "text-justify": (("text-align", "justify"),),
    "text-start": (("text-align", "start"),),
    "text-end": (("text-align", "end"),),
    "uppercase": (("text-transform", "uppercase"),),
    "lowercase": (("text-transform", "lowercase"),),
    "capitalize": (("text-transform", "capitalize"),),
    "normal-case": (("text-transform", "none"),),
    "italic": (("font-style", "italic"),),
    "not-italic": (("font-style", "normal"),),
    "underline": (("text-decoration-line", "underline"),),
    "overline": (("text-decoration-line", "overline"),),
    "line-through": (("text-decoration-line", "line-through"),),
    "no-underline": (("text-decoration-line", "none"),),
    "antialiased": (
        ("-webkit-font-smoothing", "antialiased"),
        ("-moz-osx-font-smoothing", "grayscale"),
    ),
    "truncate": (
        ("overflow", "hidden"),
        ("text-overflow", "ellipsis"),
        ("white-space", "nowrap"),
    ),
    "text-ellipsis": (("text-overflow", "ellipsis"),),
    "text-clip": (("text-overflow", "clip"),),
    "whitespace-normal": (("white-space", "normal"),),
    "whitespace-nowrap": (("white-space", "nowrap"),),
    "whitespace-pre": (("white-space", "pre"),),
    "whitespace-pre-line": (("white-space", "pre-line"),),
    "whitespace-pre-wrap": (("white-space", "pre-wrap"),),
    "break-words": (("overflow-wrap", "break-word"),),
    "break-all": (("word-break", "break-all"),),
    # Overflow
    "overflow-auto": (("overflow", "auto"),),
    "overflow-hidden": (("overflow", "hidden"),),
    "overflow-clip": (("overflow", "clip"),),
    "overflow-visible": (("overflow", "visible"),),
    "overflow-scroll": (("overflow", "scroll"),),
    "overflow-x-auto": (("overflow-x", "auto"),),
    "overflow-y-auto": (("overflow-y", "auto"),),
    "overflow-x-hidden": (("overflow-x", "hidden"),),
    "overflow-y-hidden": (("overflow-y", "hidden"),),
    "overflow-x-scroll": (("overflow-x", "scroll"),),
    "overflow-y-scroll": (("overflow-y", "scroll"),),
    # Borders
    "border-solid": (("border-style", "solid"),),
    "border-dashed": (("border-style", "dashed"),),
    "border-dotted": (("border-style", "dotted"),),
    "border-double": (("border-style", "double"),),
    "border-none": (("border-style", "none"),),
    "outline-none": (("outline", "2px solid transparent"), ("outline-offset", "2px")),
    # Interaction
    "cursor-auto": (("cursor", "auto"),),
    "cursor-default": (("cursor", "default"),),
    "cursor-pointer": (("cursor", "pointer"),),
    "cursor-wait": (("cursor", "wait"),),
    "cursor-text": (("cursor", "text"),),
    "cursor-move": (("cursor", "move"),),
    "cursor-not-allowed": (("cursor", "not-allowed"),),
    "pointer-events-none": (("pointer-events", "none"),),
    "pointer-events-auto": (("pointer-events", "auto"),),
    "select-none": (("user-select", "none"),),
    "select-text": (("user-select", "text"),),
    "select-all": (("user-select", "all"),),
    "select-auto": (("user-select", "auto"),),
    "resize": (("resize", "both"),),
    "resize-none": (("resize", "none"),),
    # Layout
    "aspect-square": (("aspect-ratio", "1 / 1"),),
    "aspect-video": (("aspect-ratio", "16 / 9"),),
    "aspect-auto": (("aspect-ratio", "auto"),),
    "object-cover": (("object-fit", "cover"),),
    "object-contain": (("object-fit", "contain"),),
    "object-fill": (("object-fit", "fill"),),
    "box-border": (("box-sizing", "border-box"),),
    "box-content": (("box-sizing", "content-box"),),
    "container": (("width", "100%"),),
    # Transitions
    "transition": (
        (
            "transition-property",
            "color, background-color, border-color, text-decoration-color, fill, "
            "stroke, opacity, box-shadow, transform, translate, scale, rotate, filter",
        ),
        ("transition-timing-function", "var(--default-transition-timing-function)"),
        ("transition-duration", "var(--default-transition-duration)"),
    ),
    "transition-colors": (
        (
            "transition-property",
            "color, background-color, border-color, text-decoration-color, fill, stroke",
        ),
        ("transition-timing-function", "var(--default-transition-timing-function)"),
        ("transition-duration", "var(--default-transition-duration)"),
    ),
    "transition-opacity": (
        ("transition-property", "opacity"),
        ("transition-timing-function", "var(--default-transition-timing-function)"),
        ("transition-duration", "var(--default-transition-duration)"),
    ),
    "transition-none": (("transition-property", "none"),),
}

# Roots that may carry a leading `-`
NEGATABLE_ROOTS = frozenset(
    [
        "m", "mx", "my", "mt", "mr", "mb", "ml", "ms", "me",
        "inset", "inset-x", "inset-y", "top", "right", "bottom", "left",
        "z", "order", "tracking",
    ]
)

# Roots whose value may carry a `/opacity` (or `/line-height`) modifier
MODIFIABLE_ROOTS = frozenset(
    [
        "bg", "text", "border", "border-t", "border-r", "border-b", "border-l",
        "border-x", "border-y", "outline", "ring", "fill", "stroke", "caret",
        "accent", "decoration",
    ]
)


def decode_arbitrary(value: str) -> str:
    """Decode an arbitrary value: ``[1fr_auto]`` → ``1fr auto``, ``(--x)`` → ``var(--x)``."""
    if value.startswith("(") and value.endswith(")"):
        inner = value[1:-1]
        return f"var({inner})" if inner.startswith("--") else inner

    inner = value[1:-1] if value.startswith("[") and value.endswith("]") else value
    inner = TYPE_HINT_PATTERN.sub("", inner)
    return inner.replace("\\_", "\x00").replace("_", " ").replace("\x00", "_")


def _type_hint(value: str) -> str | None:
    if value.startswith("[") and value.endswith("]"):
        match = TYPE_HINT_PATTERN.match(value[1:-1])
        if match:
            return match.group(1)
    return None


def _spacing(theme: Theme, value: str, negative: bool = False) -> str | None:
    """Spacing scale value: ``4`` → ``calc(var(--spacing) * 4)``."""
    if value == "px":
        return "-1px" if negative else "1px"
    if NUMBER_PATTERN.match(value) and "--spacing" in theme:
        # Only quarter steps exist on the scale
        if float(value) * 4 != int(float(value) * 4):
            return None
        sign = "-" if negative else ""
        return f"calc(var(--spacing) * {sign}{value})"
    named = theme.lookup("--spacing", value)
    if named:
        return f"calc(var({named}) * -1)" if negative else f"var({named})"
    return None


def _negate(value: str) -> str:
    return f"calc({value} * -1)"


def _fraction(value: str) -> str | None:
    if FRACTION_PATTERN.match(value):
        return f"calc({value} * 100%)"
    return None


def _opacity(modifier: str) -> str | None:
    if modifier.startswith("[") and modifier.endswith("]"):
        return decode_arbitrary(modifier)
    if NUMBER_PATTERN.match(modifier) and float(modifier) <= 100:
        return f"{modifier}%"
    return None


def _color(theme: Theme, candidate: "Candidate") -> str | None:
    """Color value with optional ``/opacity`` mixing."""
    value = candidate.value
    if value is None:
        return None

    if candidate.arbitrary:
        color = decode_arbitrary(value)
    elif value == "inherit":
        color = "inherit"
    elif value == "current":
        color = "currentcolor"
    elif value == "transparent":
        color = "transparent"
    else:
        name = theme.lookup("--color", value)
        if name is None:
            return None
        color = f"var({name})"

    if candidate.value_modifier is None:
        return color
    amount = _opacity(candidate.value_modifier)
    if amount is None:
        return None
    return f"color-mix(in oklab, {color} {amount}, transparent)"


def _is_color_value(candidate: "Candidate") -> bool:
    """Whether an arbitrary value should be treated as a color."""
    hint = _type_hint(candidate.value or "")
    if hint is not None:
        return hint == "color"
    return bool(COLOR_LITERAL_PATTERN.match(decode_arbitrary(candidate.value or "")))


def _themed(theme: Theme, namespace: str, value: str | None) -> str | None:
    if value is None:
        return None
    name = theme.lookup(namespace, value)
    return f"var({name})" if name else None


def spacing_utility(*properties: str, keywords: dict[str, str] | None = None) -> UtilityHandler:
    """Handler for padding/margin/gap/inset style roots."""
    extra = keywords or {}

    def handler(candidate: "Candidate", theme: Theme) -> list[Declaration] | None:
        value = candidate.value
        if value is None:
            return None
        if candidate.arbitrary:
            resolved = decode_arbitrary(value)
            if candidate.negative:
                resolved = _negate(resolved)
        elif value in extra:
            resolved = extra[value]
            if candidate.negative:
                resolved = _negate(resolved)
        else:
            resolved = _spacing(theme, value, candidate.negative)
            if resolved is None:
                resolved = _fraction(value)
                if resolved and candidate.negative:
                    resolved = _negate(resolved)
        if resolved is None:
            return None
        return [(prop, resolved) for prop in properties]

    return handler


_SIZE_KEYWORDS = {
    "auto": "auto",
    "full": "100%",
    "min": "min-content",
    "max": "max-content",
    "fit": "fit-content",
    "px": "1px",
}


def sizing_utility(*properties: str, axis: str = "x", none: bool = False) -> UtilityHandler:
    """Handler for width/height style roots."""
    viewport = {"x": "vw", "y": "vh"}[axis]

    def handler(candidate: "Candidate", theme: Theme) -> list[Declaration] | None:
        value = candidate.value
        if value is None or candidate.negative:
            return None
        if candidate.arbitrary:
            resolved = decode_arbitrary(value)
        elif value in _SIZE_KEYWORDS:
            resolved = _SIZE_KEYWORDS[value]
        elif value == "screen":
            resolved = f"100{viewport}"
        elif value in ("dvh", "svh", "lvh", "dvw", "svw", "lvw"):
            resolved = f"100{value}"
        elif value == "none" and none:
            resolved = "none"
        elif value == "prose":
            resolved = "65ch"
        else:
            resolved = (
                _spacing(theme, value)
                or _fraction(value)
                or _themed(theme, "--container", value)
            )
        if resolved is None:
            return None
        return [(prop, resolved) for prop in properties]

    return handler


def color_utility(prop: str) -> UtilityHandler:
    def handler(candidate: "Candidate", theme: Theme) -> list[Declaration] | None:
        if candidate.negative:
            return None
        resolved = _color(theme, candidate)
        return [(prop, resolved)] if resolved else None

    return handler


def _text(candidate: "Candidate", theme: Theme) -> list[Declaration] | None:
    """``text-*`` is a font size when the theme knows the key, else a color."""
    value = candidate.value
    if value is None or candidate.negative:
        return None

    if candidate.arbitrary:
        if _is_color_value(candidate):
            return color_utility("color")(candidate, theme)
        return [("font-size", decode_arbitrary(value))]

    size = _themed(theme, "--text", value)
    if size is None:
        return color_utility("color")(candidate, theme)

    declarations = [("font-size", size)]
    if candidate.value_modifier:
        line_height = _spacing(theme, candidate.value_modifier) or _themed(
            theme, "--leading", candidate.value_modifier
        )
        if line_height is None:
            return None
        declarations.append(("line-height", line_height))
    return declarations


def border_utility(width_props: tuple[str, ...], color_prop: str) -> UtilityHandler:
    """``border`` family: bare/number → width, anything else → color."""

    def handler(candidate: "Candidate", theme: Theme) -> list[Declaration] | None:
        value = candidate.value
        if candidate.negative:
            return None
        if value is None:
            return [("border-style", "solid")] + [(p, "1px") for p in width_props]
        if candidate.arbitrary:
            if _is_color_value(candidate):
                return color_utility(color_prop)(candidate, theme)
            return [(p, decode_arbitrary(value)) for p in width_props]
        if NUMBER_PATTERN.match(value) and candidate.value_modifier is None:
            return [("border-style", "solid")] + [(p, f"{value}px") for p in width_props]
        return color_utility(color_prop)(candidate, theme)

    return handler


def _font(candidate: "Candidate", theme: Theme) -> list[Declaration] | None:
    if candidate.negative or candidate.value is None:
        return None
    if candidate.arbitrary:
        hint = _type_hint(candidate.value)
        decoded = decode_arbitrary(candidate.value)
        if hint == "family-name" or not NUMBER_PATTERN.match(decoded):
            return [("font-family", decoded)]
        return [("font-weight", decoded)]
    weight = _themed(theme, "--font-weight", candidate.value)
    if weight:
        return [("font-weight", weight)]
    family = _themed(theme, "--font", candidate.value)
    if family:
        return [("font-family", family)]
    return None


def _leading(candidate: "Candidate", theme: Theme) -> list[Declaration] | None:
    value = candidate.value
    if candidate.negative or value is None:
        return None
    if candidate.arbitrary:
        return [("line-height", decode_arbitrary(value))]
    if value == "none":
        return [("line-height", "1")]
    resolved = _themed(theme, "--leading", value) or _spacing(theme, value)
    return [("line-height", resolved)] if resolved else None


def _tracking(candidate: "Candidate", theme: Theme) -> list[Declaration] | None:
    value = candidate.value
    if value is None:
        return None
    resolved = decode_arbitrary(value) if candidate.arbitrary else _themed(theme, "--tracking", value)
    if resolved is None:
        return None
    if candidate.negative:
        resolved = _negate(resolved)
    return [("letter-spacing", resolved)]


def radius_utility(*properties: str) -> UtilityHandler:
    def handler(candidate: "Candidate", theme: Theme) -> list[Declaration] | None:
        value = candidate.value
        if candidate.negative:
            return None
        if value is None:
            resolved = "0.25rem"
        elif candidate.arbitrary:
            resolved = decode_arbitrary(value)
        elif value == "none":
            resolved = "0"
        elif value == "full":
            resolved = "calc(infinity * 1px)"
        else:
            resolved = _themed(theme, "--radius", value)
        if resolved is None:
            return None
        return [(prop, resolved) for prop in properties]

    return handler


def _shadow(candidate: "Candidate", theme: Theme) -> list[Declaration] | None:
    value = candidate.value
    if candidate.negative:
        return None
    if value is None:
        resolved = _themed(theme, "--shadow", "sm")
    elif candidate.arbitrary:
        resolved = decode_arbitrary(value)
    elif value == "none":
        resolved = "0 0 #0000"
    else:
        resolved = _themed(theme, "--shadow", value)
    return [("box-shadow", resolved)] if resolved else None


def _ring(candidate: "Candidate", theme: Theme) -> list[Declaration] | None:
    value = candidate.value
    if candidate.negative:
        return None
    if value is None or (NUMBER_PATTERN.match(value) and not candidate.arbitrary):
        width = value or "1"
        return [("box-shadow", f"0 0 0 {width}px var(--tw-ring-color, currentcolor)")]
    resolved = _color(theme, candidate)
    return [("--tw-ring-color", resolved)] if resolved else None


def _outline(candidate: "Candidate", theme: Theme) -> list[Declaration] | None:
    value = candidate.value
    if candidate.negative:
        return None
    if value is None:
        return [("outline-style", "solid"), ("outline-width", "1px")]
    if not candidate.arbitrary and NUMBER_PATTERN.match(value):
        return [("outline-style", "solid"), ("outline-width", f"{value}px")]
    return color_utility("outline-color")(candidate, theme)


def _stroke(candidate: "Candidate", theme: Theme) -> list[Declaration] | None:
    value = candidate.value
    if value is not None and not candidate.arbitrary and NUMBER_PATTERN.match(value):
        return [("stroke-width", value)]
    return color_utility("stroke")(candidate, theme)


def _decoration(candidate: "Candidate", theme: Theme) -> list[Declaration] | None:
    value = candidate.value
    if value is not None and not candidate.arbitrary and NUMBER_PATTERN.match(value):
        return [("text-decoration-thickness", f"{value}px")]
    return color_utility("text-decoration-color")(candidate, theme)


def numeric_utility(prop: str, suffix: str = "", keywords: dict[str, str] | None = None) -> UtilityHandler:
    """Handler for plain numeric roots (``z``, ``order``, ``opacity``, ``duration``)."""
    extra = keywords or {}

    def handler(candidate: "Candidate", theme: Theme) -> list[Declaration] | None:
        value = candidate.value
        if value is None:
            return None
        if candidate.arbitrary:
            resolved = decode_arbitrary(value)
        elif value in extra:
            resolved = extra[value]
        elif value.isdigit():
            resolved = f"{value}{suffix}"
        else:
            return None
        if candidate.negative:
            resolved = f"calc({resolved} * -1)"
        return [(prop, resolved)]

    return handler


def _ease(candidate: "Candidate", theme: Theme) -> list[Declaration] | None:
    value = candidate.value
    if value is None or candidate.negative:
        return None
    if candidate.arbitrary:
        resolved = decode_arbitrary(value)
    elif value == "linear":
        resolved = "linear"
    elif value == "initial":
        resolved = "initial"
    else:
        resolved = _themed(theme, "--ease", value)
    return [("transition-timing-function", resolved)] if resolved else None


def _grid_cols(candidate: "Candidate", theme: Theme) -> list[Declaration] | None:
    value = candidate.value
    if value is None or candidate.negative:
        return None
    if candidate.arbitrary:
        return [("grid-template-columns", decode_arbitrary(value))]
    if value == "none":
        return [("grid-template-columns", "none")]
    if value.isdigit():
        return [("grid-template-columns", f"repeat({value}, minmax(0, 1fr))")]
    return None


def _col_span(candidate: "Candidate", theme: Theme) -> list[Declaration] | None:
    value = candidate.value
    if value is None or candidate.negative:
        return None
    if value == "full":
        return [("grid-column", "1 / -1")]
    if candidate.arbitrary:
        span = decode_arbitrary(value)
    elif value.isdigit():
        span = value
    else:
        return None
    return [("grid-column", f"span {span} / span {span}")]


def _bg(candidate: "Candidate", theme: Theme) -> list[Declaration] | None:
    value = candidate.value or ""
    if candidate.arbitrary and (
        _type_hint(value) in ("url", "image") or decode_arbitrary(value).startswith("url(")
    ):
        return [("background-image", decode_arbitrary(value))]
    if value == "none":
        return [("background-image", "none")]
    return color_utility("background-color")(candidate, theme)


FUNCTIONAL_UTILITIES: dict[str, UtilityHandler] = {
    # Padding
    "p": spacing_utility("padding"),
    "px": spacing_utility("padding-inline"),
    "py": spacing_utility("padding-block"),
    "ps": spacing_utility("padding-inline-start"),
    "pe": spacing_utility("padding-inline-end"),
    "pt": spacing_utility("padding-top"),
    "pr": spacing_utility("padding-right"),
    "pb": spacing_utility("padding-bottom"),
    "pl": spacing_utility("padding-left"),
    # Margin
    "m": spacing_utility("margin", keywords={"auto": "auto"}),
    "mx": spacing_utility("margin-inline", keywords={"auto": "auto"}),
    "my": spacing_utility("margin-block", keywords={"auto": "auto"}),
    "ms": spacing_utility("margin-inline-start", keywords={"auto": "auto"}),
    "me": spacing_utility("margin-inline-end", keywords={"auto": "auto"}),
    "mt": spacing_utility("margin-top", keywords={"auto": "auto"}),
    "mr": spacing_utility("margin-right", keywords={"auto": "auto"}),
    "mb": spacing_utility("margin-bottom", keywords={"auto": "auto"}),
    "ml": spacing_utility("margin-left", keywords={"auto": "auto"}),
    # Gap
    "gap": spacing_utility("gap"),
    "gap-x": spacing_utility("column-gap"),
    "gap-y": spacing_utility("row-gap"),
    # Inset
    "inset": spacing_utility("inset", keywords={"auto": "auto", "full": "100%"}),
    "inset-x": spacing_utility("inset-inline", keywords={"auto": "auto", "full": "100%"}),
    "inset-y": spacing_utility("inset-block", keywords={"auto": "auto", "full": "100%"}),
    "top": spacing_utility("top", keywords={"auto": "auto", "full": "100%"}),
    "right": spacing_utility("right", keywords={"auto": "auto", "full": "100%"}),
    "bottom": spacing_utility("bottom", keywords={"auto": "auto", "full": "100%"}),
    "left": spacing_utility("left", keywords={"auto": "auto", "full": "100%"}),
    "basis": spacing_utility("flex-basis", keywords={"auto": "auto", "full": "100%"}),
    # Sizing
    "w": sizing_utility("width", axis="x"),
    "h": sizing_utility("height", axis="y"),
    "min-w": sizing_utility("min-width", axis="x"),
    "min-h": sizing_utility("min-height", axis="y"),
    "max-w": sizing_utility("max-width", axis="x", none=True),
    "max-h": sizing_utility("max-height", axis="y", none=True),
    "size": sizing_utility("width", "height"),
    # Colors
    "bg": _bg,
    "text": _text,
    "fill": color_utility("fill"),
    "stroke": _stroke,
    "caret": color_utility("caret-color"),
    "accent": color_utility("accent-color"),
    "decoration": _decoration,
    "outline": _outline,
    "ring": _ring,
    # Borders
    "border": border_utility(("border-width",), "border-color"),
    "border-x": border_utility(("border-left-width", "border-right-width"), "border-inline-color"),
    "border-y": border_utility(("border-top-width", "border-bottom-width"), "border-block-color"),
    "border-t": border_utility(("border-top-width",), "border-top-color"),
    "border-r": border_utility(("border-right-width",), "border-right-color"),
    "border-b": border_utility(("border-bottom-width",), "border-bottom-color"),
    "border-l": border_utility(("border-left-width",), "border-left-color"),
    "rounded": radius_utility("border-radius"),
    "rounded-t": radius_utility("border-top-left-radius", "border-top-right-radius"),
    "rounded-r": radius_utility("border-top-right-radius", "border-bottom-right-radius"),
    "rounded-b": radius_utility("border-bottom-right-radius", "border-bottom-left-radius"),
    "rounded-l": radius_utility("border-top-left-radius", "border-bottom-left-radius"),
    "rounded-tl": radius_utility("border-top-left-radius"),
    "rounded-tr": radius_utility("border-top-right-radius"),
    "rounded-br": radius_utility("border-bottom-right-radius"),
    "rounded-bl": radius_utility("border-bottom-left-radius"),
    # Typography
    "font": _font,
    "leading": _leading,
    "tracking": _tracking,
    # Effects
    "shadow": _shadow,
    "opacity": numeric_utility("opacity", suffix="%"),
    # Layout
    "z": numeric_utility("z-index", keywords={"auto": "auto"}),
    "order": numeric_utility(
        "order", keywords={"first": "-9999", "last": "9999", "none": "0"}
    ),
    "grid-cols": _grid_cols,
    "col-span": _col_span,
    # Transitions
    "duration": numeric_utility("transition-duration", suffix="ms"),
    "delay": numeric_utility("transition-delay", suffix="ms"),
    "ease": _ease,
}

# Roots that produce CSS with no value (`rounded`, `border`, `shadow`...)
BARE_ROOTS = frozenset(
    [
        "border", "border-x", "border-y", "border-t", "border-r", "border-b", "border-l",
        "rounded", "rounded-t", "rounded-r", "rounded-b", "rounded-l",
        "rounded-tl", "rounded-tr", "rounded-br", "rounded-bl",
        "shadow", "ring", "outline",
    ]
)

# Longest first so `min-w-4` picks `min-w` before `m`
FUNCTIONAL_ROOTS: tuple[str, ...] = tuple(
    sorted(FUNCTIONAL_UTILITIES, key=len, reverse=True)
)


def compile_utility(candidate: "Candidate", theme: Theme) -> list[Declaration] | None:
    """Declarations for a utility or arbitrary-property candidate, or None."""
    if candidate.is_marker:
        return None

    if candidate.is_arbitrary_property:
        return [(candidate.root, decode_arbitrary(candidate.value or ""))]

    if candidate.value is None and candidate.root in STATIC_UTILITIES:
        if candidate.negative:
            return None
        return list(STATIC_UTILITIES[candidate.root])

    if candidate.negative and candidate.root not in NEGATABLE_ROOTS:
        return None

    if candidate.value is None and candidate.root not in BARE_ROOTS:
        return None

    handler = FUNCTIONAL_UTILITIES.get(candidate.root)
    if handler is None:
        return None
    return handler(candidate, theme)
