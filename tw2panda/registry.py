"""Destination token registry: Panda conditions and token categories.

The registry answers two questions for the converter: which condition key a
Tailwind modifier maps to, and which token category a style property reads
from. It also holds the longhand → shorthand table for shorthand output.
"""

import re
from dataclasses import dataclass, field

from .config import ConditionConfig

KEBAB_PATTERN = re.compile(r"-(\w)")

# Panda's built-in conditions (prefixed form)
DEFAULT_CONDITIONS = frozenset(
    [
        "_hover", "_focus", "_focusWithin", "_focusVisible", "_disabled",
        "_active", "_visited", "_target", "_readOnly", "_readWrite", "_empty",
        "_checked", "_enabled", "_expanded", "_highlighted", "_complete",
        "_incomplete", "_dragging", "_before", "_after", "_firstLetter",
        "_firstLine", "_marker", "_selection", "_file", "_backdrop", "_first",
        "_last", "_only", "_even", "_odd", "_firstOfType", "_lastOfType",
        "_onlyOfType", "_peerFocus", "_peerHover", "_peerActive",
        "_peerFocusWithin", "_peerFocusVisible", "_peerDisabled",
        "_peerChecked", "_peerInvalid", "_peerExpanded",
        "_peerPlaceholderShown", "_groupFocus", "_groupHover", "_groupActive",
        "_groupFocusWithin", "_groupFocusVisible", "_groupDisabled",
        "_groupChecked", "_groupExpanded", "_groupInvalid", "_indeterminate",
        "_required", "_valid", "_invalid", "_autofill", "_inRange",
        "_outOfRange", "_placeholder", "_placeholderShown", "_pressed",
        "_selected", "_default", "_optional", "_open", "_closed",
        "_fullscreen", "_loading", "_currentPage", "_currentStep",
        "_motionReduce", "_motionSafe", "_print", "_landscape", "_portrait",
        "_dark", "_light", "_osDark", "_osLight", "_highContrast",
        "_lessContrast", "_moreContrast", "_ltr", "_rtl", "_scrollbar",
        "_scrollbarThumb", "_scrollbarTrack", "_horizontal", "_vertical",
        "_starting",
    ]
)

DEFAULT_BREAKPOINTS = ("sm", "md", "lg", "xl", "2xl")

# Style property (camelCase) → Panda token category
PROPERTY_CATEGORIES: dict[str, str] = {
    "color": "colors",
    "backgroundColor": "colors",
    "borderColor": "colors",
    "borderTopColor": "colors",
    "borderRightColor": "colors",
    "borderBottomColor": "colors",
    "borderLeftColor": "colors",
    "outlineColor": "colors",
    "fill": "colors",
    "stroke": "colors",
    "caretColor": "colors",
    "accentColor": "colors",
    "textDecorationColor": "colors",
    "fontSize": "fontSizes",
    "fontWeight": "fontWeights",
    "fontFamily": "fonts",
    "lineHeight": "lineHeights",
    "letterSpacing": "letterSpacings",
    "width": "sizes",
    "height": "sizes",
    "minWidth": "sizes",
    "minHeight": "sizes",
    "maxWidth": "sizes",
    "maxHeight": "sizes",
    "padding": "spacing",
    "paddingTop": "spacing",
    "paddingRight": "spacing",
    "paddingBottom": "spacing",
    "paddingLeft": "spacing",
    "paddingInline": "spacing",
    "paddingBlock": "spacing",
    "margin": "spacing",
    "marginTop": "spacing",
    "marginRight": "spacing",
    "marginBottom": "spacing",
    "marginLeft": "spacing",
    "marginInline": "spacing",
    "marginBlock": "spacing",
    "gap": "spacing",
    "rowGap": "spacing",
    "columnGap": "spacing",
    "top": "spacing",
    "right": "spacing",
    "bottom": "spacing",
    "left": "spacing",
    "inset": "spacing",
    "borderRadius": "radii",
    "borderTopLeftRadius": "radii",
    "borderTopRightRadius": "radii",
    "borderBottomLeftRadius": "radii",
    "borderBottomRightRadius": "radii",
    "borderWidth": "borderWidths",
    "borderTopWidth": "borderWidths",
    "borderRightWidth": "borderWidths",
    "borderBottomWidth": "borderWidths",
    "borderLeftWidth": "borderWidths",
    "boxShadow": "shadows",
    "opacity": "opacity",
    "zIndex": "zIndex",
    "transitionDuration": "durations",
    "transitionTimingFunction": "easings",
    "animationDuration": "durations",
    "animationTimingFunction": "easings",
}

# Longhand property → Panda shorthand
PROPERTY_SHORTHANDS: dict[str, str] = {
    "background": "bg",
    "backgroundColor": "bgColor",
    "backgroundImage": "bgImage",
    "backgroundSize": "bgSize",
    "backgroundPosition": "bgPosition",
    "backgroundRepeat": "bgRepeat",
    "padding": "p",
    "paddingInline": "px",
    "paddingBlock": "py",
    "paddingTop": "pt",
    "paddingRight": "pr",
    "paddingBottom": "pb",
    "paddingLeft": "pl",
    "paddingInlineStart": "ps",
    "paddingInlineEnd": "pe",
    "margin": "m",
    "marginInline": "mx",
    "marginBlock": "my",
    "marginTop": "mt",
    "marginRight": "mr",
    "marginBottom": "mb",
    "marginLeft": "ml",
    "marginInlineStart": "ms",
    "marginInlineEnd": "me",
    "width": "w",
    "height": "h",
    "minWidth": "minW",
    "maxWidth": "maxW",
    "minHeight": "minH",
    "maxHeight": "maxH",
    "borderRadius": "rounded",
    "borderTopLeftRadius": "roundedTopLeft",
    "borderTopRightRadius": "roundedTopRight",
    "borderBottomRightRadius": "roundedBottomRight",
    "borderBottomLeftRadius": "roundedBottomLeft",
    "position": "pos",
    "boxShadow": "shadow",
    "flexDirection": "flexDir",
    "textDecoration": "textDecor",
    "insetInline": "insetX",
    "insetBlock": "insetY",
}


def kebab_to_camel(name: str) -> str:
    """``focus-visible`` → ``focusVisible``."""
    return KEBAB_PATTERN.sub(lambda m: m.group(1).upper(), name)


@dataclass
class TokenRegistry:
    """Destination condition names and property → token category table.

    ``property_shorthands`` is only consulted when a conversion asks for
    shorthand output.
    """

    conditions: frozenset[str] = DEFAULT_CONDITIONS
    breakpoints: tuple[str, ...] = DEFAULT_BREAKPOINTS
    property_categories: dict[str, str] = field(
        default_factory=lambda: dict(PROPERTY_CATEGORIES)
    )
    property_shorthands: dict[str, str] = field(
        default_factory=lambda: dict(PROPERTY_SHORTHANDS)
    )

    @classmethod
    def default(cls) -> "TokenRegistry":
        return cls()

    @classmethod
    def from_config(cls, config: ConditionConfig) -> "TokenRegistry":
        """Registry with the configured extra conditions and breakpoints."""
        extra = {
            condition if condition.startswith("_") else f"_{condition}"
            for condition in config.conditions
        }
        return cls(
            conditions=DEFAULT_CONDITIONS | frozenset(extra),
            breakpoints=tuple(config.breakpoints),
        )

    def condition_key(self, modifier: str) -> str:
        """Condition key for a modifier.

        Prefixed condition (``hover`` → ``_hover``) if registered, else a
        bare breakpoint (``md``), else the raw modifier as a selector.
        """
        camel = kebab_to_camel(modifier)
        prefixed = f"_{camel}"
        if prefixed in self.conditions:
            return prefixed
        if camel in self.breakpoints:
            return camel
        return modifier

    def category_for(self, style_property: str) -> str | None:
        """Token category for a camelCase property, or None."""
        return self.property_categories.get(style_property)

    def shorthand_for(self, style_property: str) -> str:
        """Panda shorthand for a longhand property, or the property itself."""
        return self.property_shorthands.get(style_property, style_property)
