"""Recipe synthesis from clusters of similar patterns.

For each cluster, leaf paths with the same value in every member become
the recipe base. Every other leaf is a per-pattern difference, sorted onto
a variant axis by case-sensitive substring match on its flattened key:

- ``size`` when the key contains a size key (padding, fontSize, ...)
- ``variant`` when it contains a visual key (backgroundColor, color, ...)
- ``style`` otherwise

An axis survives only with at least two distinct values.
"""

from collections import Counter
from collections.abc import Sequence
from typing import Any

from ..config import DEFAULT_SIZE_KEYS, DEFAULT_VISUAL_KEYS
from ..normalizers.conditions import StyleObject, flatten_style_object, unflatten_style_object
from ..similarity.clustering import ClusteringStrategy, GreedyJaccardClustering
from .models import InferredRecipe, Pattern

DEFAULT_RECIPE_NAME = "component"

# axis name, value-name prefix
AXES = (("size", "size"), ("variant", "variant"), ("style", "style"))


def find_common_leaves(styles_list: Sequence[StyleObject]) -> dict[tuple[str, ...], Any]:
    """Leaf paths whose value is deep-equal in every style object."""
    if not styles_list:
        return {}
    flattened = [flatten_style_object(styles) for styles in styles_list]
    first, rest = flattened[0], flattened[1:]
    return {
        path: value
        for path, value in first.items()
        if all(path in other and other[path] == value for other in rest)
    }


def classify_key(key: str, size_keys: Sequence[str], visual_keys: Sequence[str]) -> str:
    """Axis for a flattened style key, by case-sensitive substring match.

    Short keys such as ``p`` match broadly: ``display`` lands on ``size``.
    """
    if any(k in key for k in size_keys):
        return "size"
    if any(k in key for k in visual_keys):
        return "variant"
    return "style"


def infer_variant_axes(
    patterns: Sequence[Pattern],
    base: dict[tuple[str, ...], Any],
    size_keys: Sequence[str] = DEFAULT_SIZE_KEYS,
    visual_keys: Sequence[str] = DEFAULT_VISUAL_KEYS,
) -> dict[str, dict[str, StyleObject]]:
    """Variant axes (axis → value name → diff) for a cluster."""
    axes: dict[str, dict[str, StyleObject]] = {axis: {} for axis, _ in AXES}

    diffs = []
    for pattern in patterns:
        diff = {
            path: value
            for path, value in flatten_style_object(pattern.styles).items()
            if path not in base
        }
        if diff:
            diffs.append(diff)

    for i, diff in enumerate(diffs):
        split: dict[str, dict[tuple[str, ...], Any]] = {axis: {} for axis, _ in AXES}
        for path, value in diff.items():
            split[classify_key(".".join(path), size_keys, visual_keys)][path] = value

        for axis, prefix in AXES:
            if not split[axis]:
                continue
            styles = unflatten_style_object(split[axis])
            # Identical diffs are one value, not two
            if styles in axes[axis].values():
                continue
            axes[axis][f"{prefix}{i + 1}"] = styles

    return {axis: values for axis, values in axes.items() if len(values) >= 2}


def infer_recipe_name(patterns: Sequence[Pattern]) -> str:
    """Most frequent class prefix (over two characters) that recurs.

    ``px-4 py-2 rounded-md text-sm`` style groups usually name themselves
    after a shared prefix such as ``text`` or ``rounded``; without one
    recurring at least twice the name is ``component``.
    """
    prefixes: Counter[str] = Counter()
    for pattern in patterns:
        for cls in pattern.classes:
            utility = cls.rsplit(":", 1)[-1].lstrip("!-")
            prefix = utility.split("-")[0]
            # Arbitrary properties like [mask-type:luminance] leave "luminance]"
            if len(prefix) > 2 and prefix.isidentifier():
                prefixes[prefix] += 1

    if not prefixes:
        return DEFAULT_RECIPE_NAME
    # most_common keeps first-seen order among ties
    prefix, count = prefixes.most_common(1)[0]
    return prefix if count >= 2 else DEFAULT_RECIPE_NAME


def synthesize_recipe(
    patterns: Sequence[Pattern],
    size_keys: Sequence[str] = DEFAULT_SIZE_KEYS,
    visual_keys: Sequence[str] = DEFAULT_VISUAL_KEYS,
) -> InferredRecipe | None:
    """Recipe for one cluster, or None when no axis survives."""
    if len(patterns) < 2:
        return None

    base = find_common_leaves([p.styles for p in patterns])
    variants = infer_variant_axes(patterns, base, size_keys, visual_keys)
    if not variants:
        return None

    return InferredRecipe(
        name=infer_recipe_name(patterns),
        base=unflatten_style_object(base),
        variants=variants,
        source_patterns=[p.id for p in patterns],
    )


def infer_recipes(
    patterns: Sequence[Pattern],
    strategy: ClusteringStrategy | None = None,
    size_keys: Sequence[str] = DEFAULT_SIZE_KEYS,
    visual_keys: Sequence[str] = DEFAULT_VISUAL_KEYS,
) -> list[InferredRecipe]:
    """Cluster patterns and synthesize one recipe per qualifying cluster.

    Recipe names are made unique with numeric suffixes (``text``, ``text2``).
    """
    if len(patterns) < 2:
        return []

    strategy = strategy or GreedyJaccardClustering()
    by_id = {p.id: p for p in patterns}
    clusters = strategy.cluster([p.id for p in patterns], [p.class_set for p in patterns])

    recipes: list[InferredRecipe] = []
    used_names: Counter[str] = Counter()
    for cluster in clusters:
        recipe = synthesize_recipe([by_id[i] for i in cluster.items], size_keys, visual_keys)
        if recipe is None:
            continue
        recipe.similarity = round(cluster.avg_internal_similarity, 3)
        used_names[recipe.name] += 1
        if used_names[recipe.name] > 1:
            recipe.name = f"{recipe.name}{used_names[recipe.name]}"
        recipes.append(recipe)

    return recipes
