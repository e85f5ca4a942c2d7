"""
Shared fixtures for the tw2panda test suite.

Provides test fixtures for:
- A static resolver with canned CSS and theme values
- A real design system built from the bundled theme
- The default token registry
- A temporary project tree
"""

from collections.abc import Iterator
from pathlib import Path

import pytest

from tw2panda.design_system import (
    DesignSystem,
    StaticResolver,
    create_resolver,
    reset_resolver_cache,
)
from tw2panda.registry import TokenRegistry

# ---------------------------------------------------------------------------
# Resolvers
# ---------------------------------------------------------------------------

CANNED_CSS = {
    "flex": ".flex {\n  display: flex;\n}",
    "items-center": ".items-center {\n  align-items: center;\n}",
    "justify-between": ".justify-between {\n  justify-content: space-between;\n}",
    "hover:bg-red-500": (
        ".hover\\:bg-red-500 {\n  &:hover {\n    background-color: #ef4444;\n  }\n}"
    ),
    "bg-red-500": ".bg-red-500 {\n  background-color: var(--color-red-500);\n}",
    "bg-blue-500": ".bg-blue-500 {\n  background-color: var(--color-blue-500);\n}",
    "bg-brand": ".bg-brand {\n  background-color: var(--color-brand);\n}",
    "text-white": ".text-white {\n  color: var(--color-white);\n}",
    "text-sm": ".text-sm {\n  font-size: var(--text-sm);\n}",
    "text-lg": ".text-lg {\n  font-size: var(--text-lg);\n}",
    "p-2": ".p-2 {\n  padding: calc(var(--spacing) * 2);\n}",
    "p-4": ".p-4 {\n  padding: calc(var(--spacing) * 4);\n}",
    "px-4": ".px-4 {\n  padding-inline: calc(var(--spacing) * 4);\n}",
    "py-2": ".py-2 {\n  padding-block: calc(var(--spacing) * 2);\n}",
    "rounded-md": ".rounded-md {\n  border-radius: var(--radius-md);\n}",
    "md:p-8": (
        ".md\\:p-8 {\n  @media (width >= 48rem) {\n"
        "    padding: calc(var(--spacing) * 8);\n  }\n}"
    ),
    "!font-bold": ".\\!font-bold {\n  font-weight: var(--font-weight-bold) !important;\n}",
}

CANNED_THEME = {
    "--spacing": "0.25rem",
    "--color-red-500": "#ef4444",
    "--color-blue-500": "#3b82f6",
    "--color-white": "#fff",
    # Bottoms out at an undefined variable
    "--color-brand": "var(--color-brand-base)",
    "--text-sm": "0.875rem",
    "--text-lg": "1.125rem",
    "--radius-md": "0.375rem",
    "--font-weight-bold": "700",
}


@pytest.fixture()
def static_resolver() -> StaticResolver:
    """Resolver with canned declaration blocks and theme values."""
    return StaticResolver(CANNED_CSS, CANNED_THEME)


@pytest.fixture()
def design_system() -> DesignSystem:
    """Fresh design system built from the bundled default theme."""
    return create_resolver()


@pytest.fixture()
def clean_resolver_cache() -> Iterator[None]:
    """Ensure the process-wide resolver cache is empty around a test."""
    reset_resolver_cache()
    yield
    reset_resolver_cache()


@pytest.fixture()
def registry() -> TokenRegistry:
    """Default destination registry."""
    return TokenRegistry.default()


# ---------------------------------------------------------------------------
# Temporary project fixture
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_project(tmp_path) -> Path:
    """Create a small project with repeated class lists and ignored folders."""
    src = tmp_path / "src"
    src.mkdir()

    (src / "Button.tsx").write_text(
        """export function Button() {
  return (
    <button className="flex items-center px-4 py-2 bg-blue-500 text-white rounded-md">
      Save
    </button>
  );
}
"""
    )
    (src / "DangerButton.tsx").write_text(
        """export function DangerButton() {
  return (
    <button className="flex items-center px-4 py-2 bg-red-500 text-white rounded-md">
      Delete
    </button>
  );
}
"""
    )
    (src / "Card.tsx").write_text(
        """export const Card = () => (
  <div className={`flex items-center px-4 py-2 bg-blue-500 text-white rounded-md`}>
    <span className={cn("text-sm animate-spin")}>card</span>
  </div>
);
"""
    )
    (src / "index.html").write_text('<div class="group p-4 hover:bg-red-500 my-custom"></div>\n')
    (src / "empty.ts").write_text("export const answer = 42;\n")
    (src / "notes.md").write_text('class="flex"\n')

    ignored = tmp_path / "node_modules" / "lib"
    ignored.mkdir(parents=True)
    (ignored / "index.js").write_text('el.className = "flex";\n')

    dist = tmp_path / "dist"
    dist.mkdir()
    (dist / "bundle.js").write_text('x.className = "flex";\n')

    return tmp_path
