"""Migration reports for mined projects.

Renders a Markdown migration report, a token tree ready to paste into a
Panda config, and ``cva`` recipe code for inferred recipes.
"""

import json
import re
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any

from ..config import OUTPUT_FORMATS
from ..errors import ConfigurationError, ExtractionError
from ..normalizers.conditions import StyleObject
from ..tw_logging import LogCategory, get_category_logger
from .models import InferredRecipe, ProjectAnalysis

logger = get_category_logger(LogCategory.MINER)

ANALYSIS_FILENAME = "analysis.json"
REPORT_FILENAME = "migration-report.md"

COLOR_SHADE_PATTERN = re.compile(r"-(50|100|200|300|400|500|600|700|800|900|950)$")
CUSTOM_COLOR_PATTERN = re.compile(r"^(bg|text|border|ring)-[a-z]+-", re.IGNORECASE)
BARE_KEY_PATTERN = re.compile(r'"([a-zA-Z_][a-zA-Z0-9_]*)"\s*:')


@dataclass
class ReportConfig:
    """Limits for the Markdown report sections."""

    title: str = "Tailwind to Panda CSS Migration Report"
    max_unconverted: int = 20
    max_patterns: int = 10
    max_pattern_classes: int = 5
    max_pattern_files: int = 3
    max_tokens: int = 15
    max_files: int = 50
    progress_width: int = 40


def suggest_for_class(cls: str) -> str:
    """Suggested manual step for a class the resolver could not convert."""
    if cls.startswith("animate-"):
        return "Add to `keyframes` in panda config"
    if CUSTOM_COLOR_PATTERN.match(cls) and not COLOR_SHADE_PATTERN.search(cls):
        return "Add custom color token"
    if "[" in cls and "]" in cls:
        return "Convert to token or inline style"
    if cls.startswith(("prose", "form-")):
        return "Tailwind plugin - needs manual recreation"
    if cls.startswith("@"):
        return "Container query - use Panda conditions"
    if ":" in cls:
        return "Check if condition exists in Panda"
    return "Create custom utility"


def build_token_config(analysis: ProjectAnalysis) -> dict[str, Any]:
    """Nested token tree of every token the project uses.

    ``colors.red.500`` used with fallback ``#ef4444`` becomes
    ``{"colors": {"red": {"500": {"value": "#ef4444"}}}}``.
    """
    tree: dict[str, Any] = {}
    for usage in analysis.tokens_by_usage():
        parts = [p for p in usage.path.split(".") if p]
        if not parts:
            continue
        node = tree.setdefault(usage.category, {})
        for part in parts[:-1]:
            node = node.setdefault(part, {})
        node[parts[-1]] = {"value": usage.value or f"{{{usage.key}}}"}
    return tree


def format_styles(styles: StyleObject, indent: int = 0) -> str:
    """Style object as a JS object literal with bare identifier keys."""
    text = BARE_KEY_PATTERN.sub(r"\1:", json.dumps(styles, indent=2, ensure_ascii=False))
    pad = " " * indent
    return "\n".join(line if i == 0 else pad + line for i, line in enumerate(text.split("\n")))


def render_recipe_code(recipe: InferredRecipe) -> str:
    """``cva`` recipe source for an inferred recipe."""
    axes = []
    for axis, values in recipe.variants.items():
        entries = ",\n".join(
            f"      {name}: {format_styles(styles, indent=6)}" for name, styles in values.items()
        )
        axes.append(f"    {axis}: {{\n{entries}\n    }}")

    axes_text = ",\n".join(axes)
    defaults = ",\n    ".join(f'{axis}: "{value}"' for axis, value in recipe.default_variants.items())

    return f"""import {{ cva }} from "../styled-system/css";

/**
 * {recipe.name} recipe
 * Inferred from {len(recipe.source_patterns)} similar patterns
 */
export const {recipe.name}Recipe = cva({{
  base: {format_styles(recipe.base, indent=2)},
  variants: {{
{axes_text}
  }},
  defaultVariants: {{
    {defaults}
  }},
}});
"""


class MarkdownReporter:
    """Renders a ProjectAnalysis as a Markdown migration report."""

    def __init__(self, config: ReportConfig | None = None):
        self.config = config or ReportConfig()

    def _render_summary(self, analysis: ProjectAnalysis) -> str:
        summary = analysis.summary
        percent = round(summary.conversion_ratio * 100)
        rows = [
            ("Files Scanned", summary.total_files),
            ("Total Class Usages", summary.total_classes),
            ("Unique Classes", summary.unique_classes),
            ("Successfully Converted", f"{summary.converted_classes} ({percent}%)"),
            ("Needs Manual Work", summary.unconverted_classes),
            ("Detected Patterns", summary.detected_patterns),
            ("Inferred Recipes", summary.inferred_recipes),
            ("Files With Errors", summary.errors),
            ("**Estimated Effort**", f"**{summary.estimated_effort_hours} hours**"),
        ]
        table = "\n".join(f"| {name} | {value} |" for name, value in rows)
        return f"## Summary\n\n| Metric | Value |\n|--------|-------|\n{table}\n"

    def _render_progress(self, analysis: ProjectAnalysis) -> str:
        ratio = analysis.summary.conversion_ratio
        width = self.config.progress_width
        filled = round(ratio * width)
        bar = "█" * filled + "░" * (width - filled)
        return f"## Conversion Status\n\n```\n{bar} {round(ratio * 100)}%\n```\n"

    def _render_unconverted(self, analysis: ProjectAnalysis) -> str:
        by_class = analysis.unconverted_by_class()
        if not by_class:
            return "## Unconverted Classes\n\nEvery class was converted.\n"

        shown = list(by_class.items())[: self.config.max_unconverted]
        rows = "\n".join(
            f"| `{cls}` | {len(files)} | {suggest_for_class(cls)} |" for cls, files in shown
        )
        section = (
            "## Unconverted Classes\n\n"
            "These classes need manual conversion or custom utility definitions:\n\n"
            "| Class | Files | Suggestion |\n|-------|-------|------------|\n"
            f"{rows}\n"
        )
        if len(shown) < len(by_class):
            section += f"\n*...and {len(by_class) - len(shown)} more*\n"
        return section

    def _render_patterns(self, analysis: ProjectAnalysis) -> str:
        if not analysis.patterns:
            return "## Detected Patterns\n\nNo repeated class combinations found.\n"

        blocks = []
        for i, pattern in enumerate(analysis.patterns[: self.config.max_patterns], start=1):
            classes = " ".join(pattern.classes[: self.config.max_pattern_classes])
            if len(pattern.classes) > self.config.max_pattern_classes:
                classes += " ..."
            files = ", ".join(pattern.files[: self.config.max_pattern_files])
            extra = len(pattern.files) - self.config.max_pattern_files
            if extra > 0:
                files += f" (+{extra} more)"
            blocks.append(
                f"### Pattern {i}: Used {pattern.count} times\n\n"
                f"**Classes:** `{classes}`\n\n"
                f"**Files:** {files}\n\n"
                f"```ts\nconst pattern{i} = css({format_styles(pattern.styles)});\n```\n"
            )
        return (
            "## Detected Patterns\n\n"
            "These repeated patterns could be converted to Panda recipes:\n\n"
            + "\n".join(blocks)
        )

    def _render_recipes(self, analysis: ProjectAnalysis) -> str:
        if not analysis.recipes:
            return ""
        blocks = [
            f"### {recipe.name}\n\n"
            f"Variant axes: {', '.join(recipe.variants)} "
            f"(pattern similarity {recipe.similarity:.2f})\n\n"
            f"```ts\n{render_recipe_code(recipe)}```\n"
            for recipe in analysis.recipes
        ]
        return "## Inferred Recipes\n\n" + "\n".join(blocks)

    def _render_tokens(self, analysis: ProjectAnalysis) -> str:
        tokens = analysis.tokens_by_usage()[: self.config.max_tokens]
        if not tokens:
            return "## Token Usage\n\nNo design tokens referenced.\n"
        rows = "\n".join(f"| `{t.key}` | {t.category} | {t.count} |" for t in tokens)
        return (
            "## Token Usage\n\nTop tokens used in this project:\n\n"
            "| Token | Category | Usage Count |\n|-------|----------|-------------|\n"
            f"{rows}\n"
        )

    def _render_next_steps(self) -> str:
        return (
            "## Next Steps\n\n"
            "1. **Generate theme**: add the extracted tokens to `theme.extend.tokens`\n"
            "2. **Handle unconverted classes**: Create custom utilities or recipes\n"
            "3. **Extract patterns**: Convert detected patterns to recipes\n"
        )

    def _render_files(self, analysis: ProjectAnalysis) -> str:
        files = analysis.files
        shown = files[: self.config.max_files]
        rows = "\n".join(
            f"| {f.path} | {f.status.value} | {len(f.classes)} | {len(f.converted)} "
            f"| {len(f.unconverted)} |"
            for f in shown
        )
        more = ""
        if len(files) > len(shown):
            more = f"\n*...and {len(files) - len(shown)} more files*\n"
        return (
            "## Files Analyzed\n\n<details>\n"
            f"<summary>Click to expand ({len(files)} files)</summary>\n\n"
            "| File | Status | Classes | Converted | Unconverted |\n"
            "|------|--------|---------|-----------|-------------|\n"
            f"{rows}\n{more}\n</details>\n"
        )

    def render(self, analysis: ProjectAnalysis) -> str:
        """Render the complete report."""
        sections = [
            f"# {self.config.title}\n\n"
            f"Generated by tw2panda on {datetime.now().strftime('%Y-%m-%d')}\n",
            self._render_summary(analysis),
            self._render_progress(analysis),
            self._render_unconverted(analysis),
            self._render_patterns(analysis),
            self._render_recipes(analysis),
            self._render_tokens(analysis),
            self._render_next_steps(),
            self._render_files(analysis),
        ]
        return "\n".join(s for s in sections if s)


def render_migration_report(analysis: ProjectAnalysis, config: ReportConfig | None = None) -> str:
    """Markdown migration report for an analysis."""
    return MarkdownReporter(config).render(analysis)


def analysis_to_json(analysis: ProjectAnalysis) -> str:
    """Analysis plus the derived token tree, as JSON."""
    data = analysis.to_dict()
    data["token_config"] = build_token_config(analysis)
    return json.dumps(data, indent=2, ensure_ascii=False)


def write_analysis(
    analysis: ProjectAnalysis,
    output_dir: Path | str,
    dry_run: bool = False,
    format: str = "both",
) -> list[Path]:
    """Write the analysis JSON and/or the Markdown report.

    Args:
        analysis: Mining result.
        output_dir: Directory for the report files; created if missing.
        dry_run: Return the paths that would be written without writing.
        format: ``json``, ``markdown`` or ``both``.

    Returns:
        Paths written (or, with ``dry_run``, that would have been written).
    """
    if format not in OUTPUT_FORMATS:
        raise ConfigurationError(
            f"format must be one of {', '.join(OUTPUT_FORMATS)}, got {format!r}"
        )

    output_dir = Path(output_dir)
    outputs: list[tuple[Path, str]] = []
    if format in ("json", "both"):
        outputs.append((output_dir / ANALYSIS_FILENAME, "json"))
    if format in ("markdown", "both"):
        outputs.append((output_dir / REPORT_FILENAME, "markdown"))

    if dry_run:
        logger.info(
            f"Dry run: would write {', '.join(str(p) for p, _ in outputs)}",
            extra={"operation": "write_analysis"},
        )
        return [path for path, _ in outputs]

    output_dir.mkdir(parents=True, exist_ok=True)
    for path, kind in outputs:
        content = analysis_to_json(analysis) if kind == "json" else render_migration_report(analysis)
        path.write_text(content, encoding="utf-8")
        logger.info(f"Wrote {path}", extra={"operation": "write_analysis", "file_path": str(path)})

    return [path for path, _ in outputs]


def load_analysis(path: Path | str) -> ProjectAnalysis:
    """Read back an ``analysis.json`` written by ``write_analysis``.

    Raises:
        ExtractionError: If the file is unreadable or not an analysis object.
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        raise ExtractionError(f"Could not read analysis: {e}", file_path=str(path)) from e
    except json.JSONDecodeError as e:
        raise ExtractionError(
            f"Invalid analysis JSON: {e.msg} (line {e.lineno})", file_path=str(path)
        ) from e
    if not isinstance(data, dict):
        raise ExtractionError("Analysis must be a JSON object", file_path=str(path))

    try:
        analysis = ProjectAnalysis.from_dict(data)
    except (KeyError, TypeError, ValueError) as e:
        raise ExtractionError(f"Malformed analysis: {e!r}", file_path=str(path)) from e
    logger.debug(f"Loaded analysis from {path}", extra={"operation": "load_analysis"})
    return analysis
