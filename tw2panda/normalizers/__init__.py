"""Normalizers for declarations, condition trees and class-set identity."""

from .conditions import (
    StyleObject,
    build_condition_tree,
    deep_merge_into,
    flatten_style_object,
    map_to_shorthands,
    merge_style_objects,
    unflatten_style_object,
)
from .declarations import (
    ResolvedDeclaration,
    expand_variables,
    format_token_value,
    is_usable_fallback,
    map_declarations,
    parse_declarations,
    resolve_declaration,
    var_name_to_token_path,
)
from .hashing import class_set_id, compute_content_hash

__all__ = [
    # Conditions
    "StyleObject",
    "build_condition_tree",
    "deep_merge_into",
    "flatten_style_object",
    "map_to_shorthands",
    "merge_style_objects",
    "unflatten_style_object",
    # Declarations
    "ResolvedDeclaration",
    "expand_variables",
    "format_token_value",
    "is_usable_fallback",
    "map_declarations",
    "parse_declarations",
    "resolve_declaration",
    "var_name_to_token_path",
    # Hashing
    "class_set_id",
    "compute_content_hash",
]
