"""Unit tests for declaration parsing and token mapping."""

import pytest

from tw2panda.design_system import StaticResolver
from tw2panda.normalizers.declarations import (
    expand_variables,
    format_token_value,
    is_usable_fallback,
    map_declarations,
    parse_declarations,
    resolve_declaration,
    var_name_to_token_path,
)


class TestParseDeclarations:
    """Tests for declaration extraction."""

    def test_nested_block(self):
        """Test declarations are found inside nested selectors."""
        css = ".x {\n  &:hover {\n    background-color: #ef4444;\n  }\n}"
        assert parse_declarations(css) == [("background-color", "#ef4444")]

    def test_at_rules_are_not_declarations(self):
        """Test media queries with colons are not mistaken for declarations."""
        css = "@media (prefers-color-scheme: dark) {\n  color: #fff;\n}"
        assert parse_declarations(css) == [("color", "#fff")]

    def test_custom_properties_and_descriptors_skipped(self):
        """Test --vars and @property descriptors are ignored."""
        css = "--tw-shadow: 0 0 #0000; syntax: '*'; inherits: false; box-shadow: none;"
        assert parse_declarations(css) == [("box-shadow", "none")]


class TestTokenPaths:
    """Tests for variable name → token path."""

    @pytest.mark.parametrize(
        "name,path",
        [
            ("--color-gray-500", "gray.500"),
            ("--text-xs", "xs"),
            ("--font-weight-bold", "bold"),
            ("--radius-md", "md"),
            ("--brand-primary", "brand.primary"),
        ],
    )
    def test_prefix_stripping(self, name, path):
        """Test category prefixes are stripped and dashes become dots."""
        assert var_name_to_token_path(name) == path

    @pytest.mark.parametrize(
        "value,usable",
        [
            ("#3b82f6", True),
            ("rgb(0 0 0 / 0.1)", True),
            ("1rem", True),
            ("-0.5rem", True),
            ("700", True),
            ("center", True),
            ("var(--color-x)", False),
            ("ui-sans-serif, system-ui", False),
        ],
    )
    def test_usable_fallbacks(self, value, usable):
        """Test which literals can serve as token fallbacks."""
        assert is_usable_fallback(value) is usable


class TestExpandVariables:
    """Tests for recursive variable expansion."""

    def test_chained_variables(self):
        """Test variables resolving through other variables."""
        resolver = StaticResolver({}, {"--a": "var(--b)", "--b": "#111"})
        assert expand_variables("var(--a)", resolver) == "#111"

    def test_fallback_used_when_undefined(self):
        """Test var() fallbacks fill in undefined variables."""
        resolver = StaticResolver({}, {})
        assert expand_variables("var(--missing, 8px)", resolver) == "8px"

    def test_nested_fallback(self):
        """Test fallbacks that are themselves variables."""
        resolver = StaticResolver({}, {"--b": "2px"})
        assert expand_variables("var(--a, var(--b))", resolver) == "2px"

    def test_undefined_returns_none(self):
        """Test an unresolvable reference yields None."""
        resolver = StaticResolver({}, {"--a": "var(--b)"})
        assert expand_variables("var(--a)", resolver) is None

    def test_cycle_returns_none(self):
        """Test cyclic variables terminate."""
        resolver = StaticResolver({}, {"--a": "var(--b)", "--b": "var(--a)"})
        assert expand_variables("var(--a)", resolver) is None

    def test_surrounding_text_kept(self):
        """Test only the var() references are substituted."""
        resolver = StaticResolver({}, {"--w": "2px"})
        assert expand_variables("0 0 0 var(--w) red", resolver) == "0 0 0 2px red"


class TestResolveDeclaration:
    """Tests for per-declaration token mapping."""

    def test_color_token(self, static_resolver, registry):
        """Test a color variable becomes a token with its hex fallback."""
        decl = resolve_declaration("background-color", "var(--color-blue-500)", static_resolver)
        assert decl.token_path == "blue.500"
        assert decl.literal == "#3b82f6"
        assert format_token_value(decl, registry) == "token(colors.blue.500, #3b82f6)"

    def test_unresolved_variable_passes_through(self, static_resolver, registry):
        """Test a variable bottoming out at another variable stays raw."""
        decl = resolve_declaration("background-color", "var(--color-brand)", static_resolver)
        assert decl.literal == "var(--color-brand)"
        assert format_token_value(decl, registry) == "var(--color-brand)"

    def test_spacing_multiplier(self, static_resolver, registry):
        """Test spacing calc is converted to the base unit."""
        decl = resolve_declaration("padding", "calc(var(--spacing) * 4)", static_resolver)
        assert decl.token_path == "4"
        assert decl.literal == "1rem"
        assert format_token_value(decl, registry) == "token(spacing.4, 1rem)"

    def test_negative_spacing(self, static_resolver):
        """Test negative multipliers keep their sign."""
        decl = resolve_declaration("margin-top", "calc(var(--spacing) * -2)", static_resolver)
        assert decl.literal == "-0.5rem"

    def test_plain_literal_not_wrapped(self, static_resolver, registry):
        """Test literal values are emitted as-is."""
        decl = resolve_declaration("display", "flex", static_resolver)
        assert format_token_value(decl, registry) == "flex"

    def test_property_without_category_not_wrapped(self, registry):
        """Test properties without a token category keep the literal."""
        resolver = StaticResolver({}, {"--custom-x": "1px"})
        decl = resolve_declaration("translate", "var(--custom-x)", resolver)
        assert decl.token_path == "custom.x"
        assert format_token_value(decl, registry) == "1px"

    def test_important_marks_path_and_literal(self, static_resolver, registry):
        """Test !important is carried to both token path and fallback."""
        decl = resolve_declaration(
            "font-weight", "var(--font-weight-bold) !important", static_resolver
        )
        assert decl.important is True
        assert decl.raw_value == "var(--font-weight-bold)"
        assert format_token_value(decl, registry) == "token(fontWeights.bold!, 700 !important)"

    def test_important_on_literal(self, static_resolver, registry):
        """Test important literals get the suffix."""
        decl = resolve_declaration("display", "flex", static_resolver)
        assert format_token_value(decl, registry, important=True) == "flex !important"

    def test_map_declarations_preserves_order(self, static_resolver):
        """Test all declarations of a block are mapped in order."""
        css = ".x {\n  font-size: var(--text-sm);\n  line-height: 1.5;\n}"
        decls = map_declarations(css, static_resolver)
        assert [d.style_property for d in decls] == ["fontSize", "lineHeight"]
        assert decls[0].literal == "0.875rem"
