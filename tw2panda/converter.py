"""Class-set conversion: Tailwind class list → Panda style object.

Each class is resolved to CSS, mapped to style properties and token values,
wrapped in its condition tree, and the per-class trees are merged in class
order so that later classes win.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from .design_system import Candidate
from .design_system.resolver import CSSResolver
from .normalizers.conditions import (
    StyleObject,
    build_condition_tree,
    map_to_shorthands,
    merge_style_objects,
)
from .normalizers.declarations import ResolvedDeclaration, format_token_value, map_declarations
from .registry import TokenRegistry
from .tw_logging import LogCategory, get_category_logger

logger = get_category_logger(LogCategory.MAPPER)


@dataclass
class ClassMatch:
    """Conversion of a single class."""

    class_name: str
    candidate: Candidate | None
    declarations: list[ResolvedDeclaration] = field(default_factory=list)
    styles: StyleObject = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "class_name": self.class_name,
            "modifiers": list(self.candidate.modifiers) if self.candidate else [],
            "declarations": [d.to_dict() for d in self.declarations],
            "styles": self.styles,
        }


@dataclass
class ClassSetConversion:
    """Result of converting one class set.

    ``unconverted`` holds every class the resolver returned None for,
    except marker classes (``group``, ``peer/x``), which are listed in
    ``markers`` and pass through unchanged.
    """

    styles: StyleObject = field(default_factory=dict)
    converted: list[str] = field(default_factory=list)
    unconverted: list[str] = field(default_factory=list)
    markers: list[str] = field(default_factory=list)
    matches: list[ClassMatch] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.styles

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "styles": self.styles,
            "converted": self.converted,
            "unconverted": self.unconverted,
            "markers": self.markers,
            "matches": [m.to_dict() for m in self.matches],
        }


def _ordered_unique(classes: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    ordered = []
    for cls in classes:
        if cls and cls not in seen:
            seen.add(cls)
            ordered.append(cls)
    return ordered


def class_set_to_style_object(
    class_set: Iterable[str],
    resolver: CSSResolver,
    registry: TokenRegistry | None = None,
    shorthands: bool = False,
) -> ClassSetConversion:
    """Convert a class set into one merged style object.

    Args:
        class_set: Class names in authoring order; repeats are ignored.
        resolver: Resolver that turns classes into declaration text.
        registry: Destination conditions and token categories.
        shorthands: Emit Panda shorthands (``p``, ``bgColor``) for the
            merged styles. Per-class ``matches`` stay in longhand.

    Returns:
        ClassSetConversion with merged styles and the class partition.
    """
    registry = registry or TokenRegistry.default()
    classes = _ordered_unique(class_set)
    css_blocks = resolver.candidates_to_css(classes)

    result = ClassSetConversion()
    per_class: list[StyleObject] = []

    for class_name, css in zip(classes, css_blocks, strict=True):
        candidate = resolver.parse_candidate(class_name)
        if candidate is not None and candidate.is_marker:
            result.markers.append(class_name)
            continue
        if css is None:
            result.unconverted.append(class_name)
            continue

        result.converted.append(class_name)
        modifiers = candidate.modifiers if candidate else ()
        important = candidate.important if candidate else False
        declarations = map_declarations(css, resolver)
        trees = [
            build_condition_tree(
                decl.style_property,
                format_token_value(decl, registry, important),
                modifiers,
                registry,
            )
            for decl in declarations
        ]
        styles = merge_style_objects(*trees)
        per_class.append(styles)
        result.matches.append(
            ClassMatch(
                class_name=class_name,
                candidate=candidate,
                declarations=declarations,
                styles=styles,
            )
        )

    # Class order decides precedence
    result.styles = merge_style_objects(*per_class)
    if shorthands:
        result.styles = map_to_shorthands(result.styles, registry)

    if result.unconverted:
        logger.debug(
            f"{len(result.unconverted)} of {len(classes)} classes left unconverted: "
            f"{' '.join(result.unconverted)}",
            extra={"operation": "class_set_to_style_object", "class_count": len(classes)},
        )
    return result
