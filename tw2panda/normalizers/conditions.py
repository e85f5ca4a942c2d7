"""Condition tree building and style-object merging."""

import copy
from collections.abc import Iterable
from typing import Any

from ..registry import TokenRegistry

StyleObject = dict[str, Any]


def build_condition_tree(
    style_property: str,
    value: str,
    modifiers: Iterable[str],
    registry: TokenRegistry,
) -> StyleObject:
    """Wrap ``{style_property: value}`` once per modifier.

    Wrapping follows authoring order, so the first modifier ends up as the
    outermost key: ``["md", "hover"]`` → ``{"md": {"_hover": {...}}}``.
    """
    tree: StyleObject = {style_property: value}
    for modifier in reversed(list(modifiers)):
        tree = {registry.condition_key(modifier): tree}
    return tree


def deep_merge_into(target: StyleObject, source: StyleObject) -> StyleObject:
    """Merge ``source`` into ``target`` in place; source wins per leaf."""
    for key, value in source.items():
        existing = target.get(key)
        if isinstance(value, dict) and isinstance(existing, dict):
            deep_merge_into(existing, value)
        else:
            target[key] = copy.deepcopy(value)
    return target


def merge_style_objects(*objects: StyleObject) -> StyleObject:
    """Deep-merge style objects left to right without touching the inputs.

    At any shared leaf path the later object wins.
    """
    merged: StyleObject = {}
    for obj in objects:
        deep_merge_into(merged, obj)
    return merged


def flatten_style_object(
    obj: StyleObject, prefix: tuple[str, ...] = ()
) -> dict[tuple[str, ...], Any]:
    """Map every leaf path to its value.

    ``{"_hover": {"color": "red"}}`` → ``{("_hover", "color"): "red"}``.
    """
    leaves: dict[tuple[str, ...], Any] = {}
    for key, value in obj.items():
        path = (*prefix, key)
        if isinstance(value, dict) and value:
            leaves.update(flatten_style_object(value, path))
        else:
            leaves[path] = value
    return leaves


def unflatten_style_object(leaves: dict[tuple[str, ...], Any]) -> StyleObject:
    """Inverse of ``flatten_style_object``, preserving leaf order."""
    tree: StyleObject = {}
    for path, value in leaves.items():
        node = tree
        for key in path[:-1]:
            node = node.setdefault(key, {})
        node[path[-1]] = value
    return tree


def map_to_shorthands(obj: StyleObject, registry: TokenRegistry) -> StyleObject:
    """Rename property keys to Panda shorthands, keeping key order.

    Condition keys (the ones holding nested objects) are kept as-is.
    """
    mapped: StyleObject = {}
    for key, value in obj.items():
        if isinstance(value, dict):
            mapped[key] = map_to_shorthands(value, registry)
        else:
            mapped[registry.shorthand_for(key)] = value
    return mapped
