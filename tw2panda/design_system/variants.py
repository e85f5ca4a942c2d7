"""Variant table: modifier name → nested selector or at-rule."""

from .theme import Theme
from .utilities import decode_arbitrary

PSEUDO_CLASSES: dict[str, str] = {
    "hover": ":hover",
    "focus": ":focus",
    "focus-visible": ":focus-visible",
    "focus-within": ":focus-within",
    "active": ":active",
    "visited": ":visited",
    "target": ":target",
    "first": ":first-child",
    "last": ":last-child",
    "only": ":only-child",
    "odd": ":nth-child(odd)",
    "even": ":nth-child(even)",
    "first-of-type": ":first-of-type",
    "last-of-type": ":last-of-type",
    "only-of-type": ":only-of-type",
    "empty": ":empty",
    "disabled": ":disabled",
    "enabled": ":enabled",
    "checked": ":checked",
    "indeterminate": ":indeterminate",
    "default": ":default",
    "required": ":required",
    "optional": ":optional",
    "valid": ":valid",
    "invalid": ":invalid",
    "in-range": ":in-range",
    "out-of-range": ":out-of-range",
    "placeholder-shown": ":placeholder-shown",
    "autofill": ":autofill",
    "read-only": ":read-only",
    "open": ":is([open], :popover-open)",
}

PSEUDO_ELEMENTS: dict[str, str] = {
    "before": "::before",
    "after": "::after",
    "placeholder": "::placeholder",
    "file": "::file-selector-button",
    "marker": "::marker",
    "selection": "::selection",
    "first-line": "::first-line",
    "first-letter": "::first-letter",
    "backdrop": "::backdrop",
}

MEDIA_VARIANTS: dict[str, str] = {
    "dark": "@media (prefers-color-scheme: dark)",
    "motion-safe": "@media (prefers-reduced-motion: no-preference)",
    "motion-reduce": "@media (prefers-reduced-motion: reduce)",
    "print": "@media print",
    "portrait": "@media (orientation: portrait)",
    "landscape": "@media (orientation: landscape)",
    "contrast-more": "@media (prefers-contrast: more)",
    "contrast-less": "@media (prefers-contrast: less)",
}

ARIA_STATES = frozenset(
    [
        "busy", "checked", "disabled", "expanded", "hidden",
        "pressed", "readonly", "required", "selected",
    ]
)


def _state_selector(name: str) -> str | None:
    """Selector fragment for a state usable after group-/peer-."""
    if name in PSEUDO_CLASSES:
        return PSEUDO_CLASSES[name]
    if name.startswith("[") and name.endswith("]"):
        return decode_arbitrary(name).replace("&", "")
    if name.startswith("aria-") and name[5:] in ARIA_STATES:
        return f'[aria-{name[5:]}="true"]'
    if name.startswith("data-") and len(name) > 5:
        return f"[{_data_attribute(name[5:])}]"
    return None


def _data_attribute(value: str) -> str:
    if value.startswith("[") and value.endswith("]"):
        return f"data-{decode_arbitrary(value)}"
    return f"data-{value}"


def _compound(kind: str, modifier: str) -> str | None:
    """``group-hover/item`` → ``&:is(:where(.group\\/item):hover *)``."""
    rest = modifier[len(kind) + 1 :]
    state, _, scope = rest.partition("/")
    selector = _state_selector(state)
    if selector is None:
        return None
    marker = f".{kind}\\/{scope}" if scope else f".{kind}"
    combinator = "*" if kind == "group" else "~ *"
    return f"&:is(:where({marker}){selector} {combinator})"


def variant_selector(modifier: str, theme: Theme) -> str | None:
    """Nesting rule for one modifier, or None when the variant is unknown."""
    if modifier in PSEUDO_CLASSES:
        return f"&{PSEUDO_CLASSES[modifier]}"
    if modifier in PSEUDO_ELEMENTS:
        return f"&{PSEUDO_ELEMENTS[modifier]}"
    if modifier in MEDIA_VARIANTS:
        return MEDIA_VARIANTS[modifier]

    breakpoint = theme.get(f"--breakpoint-{modifier}")
    if breakpoint:
        return f"@media (width >= {breakpoint})"

    if modifier.startswith("max-"):
        target = modifier[4:]
        if target.startswith("[") and target.endswith("]"):
            return f"@media (width < {decode_arbitrary(target)})"
        breakpoint = theme.get(f"--breakpoint-{target}")
        return f"@media (width < {breakpoint})" if breakpoint else None

    if modifier.startswith("min-[") and modifier.endswith("]"):
        return f"@media (width >= {decode_arbitrary(modifier[4:])})"

    if modifier.startswith("group-"):
        return _compound("group", modifier)
    if modifier.startswith("peer-"):
        return _compound("peer", modifier)

    if modifier.startswith("aria-"):
        value = modifier[5:]
        if value.startswith("[") and value.endswith("]"):
            return f"&[aria-{decode_arbitrary(value)}]"
        if value in ARIA_STATES:
            return f'&[aria-{value}="true"]'
        return None

    if modifier.startswith("data-") and len(modifier) > 5:
        return f"&[{_data_attribute(modifier[5:])}]"

    if modifier.startswith("[") and modifier.endswith("]"):
        selector = decode_arbitrary(modifier)
        if selector.startswith("@") or "&" in selector:
            return selector
        return None

    return None


def variant_selectors(modifiers: tuple[str, ...], theme: Theme) -> list[str] | None:
    """Nesting rules for a modifier chain in authoring order.

    Returns None as soon as one modifier is unknown; the whole candidate is
    then unresolvable.
    """
    selectors = []
    for modifier in modifiers:
        selector = variant_selector(modifier, theme)
        if selector is None:
            return None
        selectors.append(selector)
    return selectors
