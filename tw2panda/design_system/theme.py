"""Theme variable extraction from a Tailwind CSS entry stylesheet.

Parses ``@import`` and ``@theme { ... }`` directives into a flat mapping of
CSS custom properties. This uses regex plus a brace scanner rather than a
full CSS parser; it handles the directives a v4 entry file actually uses.
"""

import re
from pathlib import Path

from ..errors import DesignSystemError
from .default_theme import DEFAULT_THEME_CSS

IMPORT_PATTERN = re.compile(r"""@import\s+["']([^"']+)["'][^;]*;""")
THEME_PATTERN = re.compile(r"@theme\b[^{;]*\{")
COMMENT_PATTERN = re.compile(r"/\*.*?\*/", re.DOTALL)
DECLARATION_PATTERN = re.compile(r"^(--[A-Za-z0-9_.-]*?(?:-\*)?|--\*)\s*:\s*(.+)$", re.DOTALL)

THEME_IMPORTS = frozenset(
    ["tailwindcss", "tailwindcss/index.css", "tailwindcss/theme", "tailwindcss/theme.css"]
)
IGNORED_IMPORTS = frozenset(
    [
        "tailwindcss/preflight",
        "tailwindcss/preflight.css",
        "tailwindcss/utilities",
        "tailwindcss/utilities.css",
    ]
)


def extract_balanced_braces(content: str, start: int) -> str | None:
    """Extract content between balanced braces starting at position.

    Returns the text from the opening brace to its matching closing brace
    (inclusive), or None when the braces never balance.
    """
    if start >= len(content) or content[start] != "{":
        return None

    depth = 0
    in_string = False
    string_char = None

    for i in range(start, len(content)):
        char = content[i]

        if char in ('"', "'") and (i == 0 or content[i - 1] != "\\"):
            if not in_string:
                in_string = True
                string_char = char
            elif char == string_char:
                in_string = False
                string_char = None
            continue

        if in_string:
            continue

        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return content[start : i + 1]

    return None


def _check_balanced(content: str, source: str) -> None:
    depth = 0
    for char in content:
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth < 0:
                raise DesignSystemError("Unexpected '}' in stylesheet", source)
    if depth != 0:
        raise DesignSystemError("Unclosed '{' in stylesheet", source)


def _split_statements(body: str) -> list[str]:
    """Split a block body into top-level statements, dropping nested blocks."""
    statements: list[str] = []
    current: list[str] = []
    depth = 0
    i = 0
    while i < len(body):
        char = body[i]
        if char == "{":
            nested = extract_balanced_braces(body, i)
            # Nested rules (e.g. @keyframes) carry no theme variables
            current = []
            i += len(nested) if nested else 1
            continue
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
        if char == ";" and depth == 0:
            statement = "".join(current).strip()
            if statement:
                statements.append(statement)
            current = []
        else:
            current.append(char)
        i += 1

    trailing = "".join(current).strip()
    if trailing:
        statements.append(trailing)
    return statements


class Theme:
    """Flat registry of theme variables (``--color-red-500`` → ``#ef4444``)."""

    def __init__(self, variables: dict[str, str] | None = None):
        self._variables: dict[str, str] = dict(variables or {})

    @classmethod
    def from_css(
        cls, css: str, source: str = "inline", base_dir: Path | str | None = None
    ) -> "Theme":
        """Build a theme from an entry stylesheet.

        Args:
            css: Stylesheet text containing ``@import`` and ``@theme`` rules.
            source: Name used in error details.
            base_dir: Directory local ``@import`` paths are relative to;
                defaults to the working directory.

        Returns:
            Theme with every declared variable.

        Raises:
            DesignSystemError: On unbalanced braces, unreadable imports or
                malformed variable declarations.
        """
        theme = cls()
        theme._apply_stylesheet(css, source, Path(base_dir) if base_dir else Path.cwd(), set())
        return theme

    def _apply_stylesheet(self, css: str, source: str, base_dir: Path, seen: set[Path]) -> None:
        # Imports first, in order, then the sheet's own @theme blocks
        content = COMMENT_PATTERN.sub("", css)
        _check_balanced(content, source)

        for match in IMPORT_PATTERN.finditer(content):
            target = match.group(1).strip()
            if target in THEME_IMPORTS:
                self._apply_theme_blocks(DEFAULT_THEME_CSS, "tailwindcss/theme.css")
            elif target in IGNORED_IMPORTS:
                continue
            else:
                self._apply_import(target, source, base_dir, seen)

        self._apply_theme_blocks(content, source)

    def _apply_import(self, target: str, source: str, base_dir: Path, seen: set[Path]) -> None:
        path = (base_dir / target).resolve()
        if path in seen:
            return
        seen.add(path)
        try:
            imported = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise DesignSystemError(
                f"Cannot load stylesheet: {target} from {base_dir}", source
            ) from e
        self._apply_stylesheet(imported, str(path), path.parent, seen)

    def _apply_theme_blocks(self, content: str, source: str) -> None:
        for match in THEME_PATTERN.finditer(content):
            block = extract_balanced_braces(content, match.end() - 1)
            if block is None:
                raise DesignSystemError("Unclosed @theme block", source)
            for statement in _split_statements(block[1:-1]):
                self._apply_declaration(statement, source)

    def _apply_declaration(self, statement: str, source: str) -> None:
        match = DECLARATION_PATTERN.match(statement)
        if not match:
            raise DesignSystemError(
                f"Malformed theme declaration: {statement!r}", source
            )
        name, value = match.group(1), match.group(2).strip()

        if value == "initial":
            # `--color-*: initial` resets a whole namespace
            if name.endswith("*"):
                prefix = name[:-1]
                for key in [k for k in self._variables if k.startswith(prefix)]:
                    del self._variables[key]
            else:
                self._variables.pop(name, None)
            return

        if name.endswith("*"):
            raise DesignSystemError(
                f"Namespace wildcard only accepts 'initial': {statement!r}", source
            )
        self._variables[name] = value

    def get(self, name: str) -> str | None:
        """Raw (unresolved) value of a variable, e.g. ``get("--spacing")``."""
        return self._variables.get(name)

    def lookup(self, namespace: str, key: str) -> str | None:
        """Variable name for ``key`` within ``namespace`` if the theme defines it.

        ``lookup("--color", "red-500")`` returns ``"--color-red-500"``.
        """
        name = f"{namespace}-{key}"
        return name if name in self._variables else None

    def keys(self, namespace: str) -> list[str]:
        """Keys declared under a namespace, in declaration order."""
        prefix = f"{namespace}-"
        return [name[len(prefix) :] for name in self._variables if name.startswith(prefix)]

    @property
    def variables(self) -> dict[str, str]:
        return dict(self._variables)

    def __contains__(self, name: object) -> bool:
        return name in self._variables

    def __len__(self) -> int:
        return len(self._variables)
