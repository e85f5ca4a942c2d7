"""Unit tests for condition trees, style merging and the token registry."""

from tw2panda.config import ConditionConfig
from tw2panda.normalizers.conditions import (
    build_condition_tree,
    flatten_style_object,
    map_to_shorthands,
    merge_style_objects,
    unflatten_style_object,
)
from tw2panda.registry import TokenRegistry, kebab_to_camel


class TestTokenRegistry:
    """Tests for modifier → condition key mapping."""

    def test_registered_conditions_are_prefixed(self, registry):
        """Test known conditions map to their underscore form."""
        assert registry.condition_key("hover") == "_hover"
        assert registry.condition_key("focus-visible") == "_focusVisible"
        assert registry.condition_key("group-hover") == "_groupHover"
        assert registry.condition_key("dark") == "_dark"

    def test_breakpoints_are_bare(self, registry):
        """Test breakpoints map to bare keys."""
        assert registry.condition_key("md") == "md"
        assert registry.condition_key("2xl") == "2xl"

    def test_unknown_modifier_passes_through(self, registry):
        """Test unknown modifiers become raw selector keys."""
        assert registry.condition_key("[&>svg]") == "[&>svg]"
        assert registry.condition_key("data-open") == "data-open"

    def test_from_config_adds_conditions(self):
        """Test configured conditions and breakpoints are honored."""
        registry = TokenRegistry.from_config(
            ConditionConfig(conditions=["hocus", "_sidebarOpen"], breakpoints=["tablet"])
        )
        assert registry.condition_key("hocus") == "_hocus"
        assert registry.condition_key("sidebar-open") == "_sidebarOpen"
        assert registry.condition_key("tablet") == "tablet"
        assert registry.condition_key("hover") == "_hover"

    def test_category_lookup(self, registry):
        """Test property → token category."""
        assert registry.category_for("backgroundColor") == "colors"
        assert registry.category_for("padding") == "spacing"
        assert registry.category_for("display") is None

    def test_shorthand_lookup(self, registry):
        """Test longhands map to Panda shorthands and others pass through."""
        assert registry.shorthand_for("backgroundColor") == "bgColor"
        assert registry.shorthand_for("paddingInline") == "px"
        assert registry.shorthand_for("borderRadius") == "rounded"
        assert registry.shorthand_for("display") == "display"

    def test_kebab_to_camel(self):
        """Test CSS property name conversion."""
        assert kebab_to_camel("background-color") == "backgroundColor"
        assert kebab_to_camel("padding") == "padding"


class TestBuildConditionTree:
    """Tests for condition nesting."""

    def test_no_modifiers(self, registry):
        """Test a bare property."""
        assert build_condition_tree("color", "red", [], registry) == {"color": "red"}

    def test_first_modifier_is_outermost(self, registry):
        """Test [m1, m2] nests as {m1: {m2: {...}}}."""
        tree = build_condition_tree("padding", "1rem", ["md", "hover"], registry)
        assert tree == {"md": {"_hover": {"padding": "1rem"}}}

    def test_reversed_modifiers_reverse_nesting(self, registry):
        """Test order of modifiers is significant."""
        tree = build_condition_tree("padding", "1rem", ("hover", "md"), registry)
        assert tree == {"_hover": {"md": {"padding": "1rem"}}}


class TestMergeStyleObjects:
    """Tests for deep merging."""

    def test_later_object_wins(self):
        """Test conflicts resolve to the later object."""
        merged = merge_style_objects({"padding": "a"}, {"padding": "b"})
        assert merged == {"padding": "b"}

    def test_nested_merge(self):
        """Test condition subtrees merge instead of replacing."""
        merged = merge_style_objects(
            {"_hover": {"color": "red"}, "display": "flex"},
            {"_hover": {"backgroundColor": "blue"}},
        )
        assert merged == {
            "_hover": {"color": "red", "backgroundColor": "blue"},
            "display": "flex",
        }

    def test_inputs_not_mutated(self):
        """Test merging leaves inputs untouched."""
        first = {"_hover": {"color": "red"}}
        second = {"_hover": {"color": "blue"}}
        merge_style_objects(first, second)
        assert first == {"_hover": {"color": "red"}}
        assert second == {"_hover": {"color": "blue"}}

    def test_flatten_and_unflatten(self):
        """Test leaf-path flattening and its inverse."""
        styles = {"display": "flex", "md": {"_hover": {"padding": "1rem"}}}
        leaves = flatten_style_object(styles)
        assert leaves == {("display",): "flex", ("md", "_hover", "padding"): "1rem"}
        assert unflatten_style_object(leaves) == styles


class TestMapToShorthands:
    """Tests for shorthand renaming of merged style objects."""

    def test_nested_leaves_renamed(self, registry):
        """Test leaves under conditions are renamed and condition keys kept."""
        styles = {
            "display": "flex",
            "padding": "1rem",
            "md": {"_hover": {"backgroundColor": "red", "width": "10px"}},
        }
        assert map_to_shorthands(styles, registry) == {
            "display": "flex",
            "p": "1rem",
            "md": {"_hover": {"bgColor": "red", "w": "10px"}},
        }

    def test_key_order_and_input_preserved(self, registry):
        """Test renaming keeps key order and leaves the input alone."""
        styles = {"marginTop": "1px", "color": "red", "height": "2px"}
        assert list(map_to_shorthands(styles, registry)) == ["mt", "color", "h"]
        assert list(styles) == ["marginTop", "color", "height"]

    def test_custom_table(self):
        """Test the registry's table decides the mapping."""
        registry = TokenRegistry(property_shorthands={"color": "c"})
        assert map_to_shorthands({"color": "red", "padding": "1px"}, registry) == {
            "c": "red",
            "padding": "1px",
        }
