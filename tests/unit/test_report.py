"""Unit tests for migration report rendering and output files."""

import json

import pytest

from tw2panda.collectors import collect_files
from tw2panda.errors import ConfigurationError, ExtractionError
from tw2panda.mining import (
    InferredRecipe,
    MiningOptions,
    ProjectAnalysis,
    ReportConfig,
    TokenUsage,
    build_token_config,
    load_analysis,
    mine_project,
    render_migration_report,
    render_recipe_code,
    suggest_for_class,
    write_analysis,
)
from tw2panda.mining.report import ANALYSIS_FILENAME, REPORT_FILENAME, format_styles


@pytest.fixture()
def analysis(sample_project, static_resolver):
    """File-scope analysis of the sample project with one recipe."""
    options = MiningOptions(min_pattern_occurrences=1, root=sample_project)
    return mine_project(collect_files(sample_project), static_resolver, options=options)


class TestSuggestForClass:
    """Tests for unconverted-class suggestions."""

    @pytest.mark.parametrize(
        "cls,expected",
        [
            ("animate-wiggle", "Add to `keyframes` in panda config"),
            ("bg-brand-primary", "Add custom color token"),
            ("w-[13px]", "Convert to token or inline style"),
            ("prose-lg", "Tailwind plugin - needs manual recreation"),
            ("form-input", "Tailwind plugin - needs manual recreation"),
            ("@container", "Container query - use Panda conditions"),
            ("aria-busy:opacity-50", "Check if condition exists in Panda"),
            ("my-custom", "Create custom utility"),
        ],
    )
    def test_suggestions(self, cls, expected):
        """Test each suggestion rule."""
        assert suggest_for_class(cls) == expected

    def test_shaded_color_is_not_custom(self):
        """Test palette shades are not flagged as custom colors."""
        assert suggest_for_class("bg-acme-500") != "Add custom color token"


class TestBuildTokenConfig:
    """Tests for the nested token tree."""

    def test_nested_values(self):
        """Test dotted paths nest under their category."""
        analysis = ProjectAnalysis(
            tokens={
                "colors.red.500": TokenUsage("colors", "red.500", "#ef4444", count=3),
                "spacing.4": TokenUsage("spacing", "4", "1rem", count=1),
                "colors.brand": TokenUsage("colors", "brand", "", count=1),
            }
        )
        assert build_token_config(analysis) == {
            "colors": {
                "red": {"500": {"value": "#ef4444"}},
                "brand": {"value": "{colors.brand}"},
            },
            "spacing": {"4": {"value": "1rem"}},
        }

    def test_empty(self):
        """Test no tokens yields an empty tree."""
        assert build_token_config(ProjectAnalysis()) == {}


class TestRecipeCode:
    """Tests for cva code generation."""

    def test_format_styles(self):
        """Test identifier keys are unquoted and others kept quoted."""
        text = format_styles({"_hover": {"color": "red"}, "2xl": {"gap": "1rem"}})
        assert text == (
            "{\n"
            '  _hover: {\n    color: "red"\n  },\n'
            '  "2xl": {\n    gap: "1rem"\n  }\n'
            "}"
        )

    def test_render_recipe_code(self):
        """Test base, axes and defaults appear in the cva call."""
        recipe = InferredRecipe(
            name="button",
            base={"display": "flex"},
            variants={
                "variant": {
                    "variant1": {"backgroundColor": "blue"},
                    "variant2": {"backgroundColor": "red"},
                }
            },
            source_patterns=["a", "b"],
        )
        code = render_recipe_code(recipe)
        assert 'import { cva } from "../styled-system/css";' in code
        assert "Inferred from 2 similar patterns" in code
        assert "export const buttonRecipe = cva({" in code
        assert 'display: "flex"' in code
        assert "    variant: {\n      variant1: {" in code
        assert 'variant: "variant1"' in code


class TestMarkdownReport:
    """Tests for the Markdown migration report."""

    def test_sections(self, analysis):
        """Test every section renders for a mined project."""
        report = render_migration_report(analysis)
        assert report.startswith("# Tailwind to Panda CSS Migration Report")
        assert "Generated by tw2panda on " in report
        for heading in (
            "## Summary",
            "## Conversion Status",
            "## Unconverted Classes",
            "## Detected Patterns",
            "## Inferred Recipes",
            "## Token Usage",
            "## Next Steps",
            "## Files Analyzed",
        ):
            assert heading in report

    def test_recipe_similarity(self, analysis):
        """Test recipes carry the average similarity of their patterns."""
        # Jaccard of Button/Card 7/8, Button/Danger 6/8, Card/Danger 6/9
        assert analysis.recipes[0].similarity == pytest.approx(0.764)
        assert "Variant axes: variant (pattern similarity 0.76)" in render_migration_report(analysis)

    def test_summary_values(self, analysis):
        """Test summary rows reflect the analysis."""
        report = render_migration_report(analysis)
        assert "| Files Scanned | 5 |" in report
        assert "| Successfully Converted | 11 (79%) |" in report
        assert "| **Estimated Effort** | **0.1 hours** |" in report
        assert "| `animate-spin` | 1 | Add to `keyframes` in panda config |" in report
        assert "export const textRecipe = cva({" in report
        assert "| src/empty.ts | skipped | 0 | 0 | 0 |" in report

    def test_empty_analysis(self):
        """Test placeholder text when nothing was found."""
        report = render_migration_report(ProjectAnalysis())
        assert "Every class was converted." in report
        assert "No repeated class combinations found." in report
        assert "No design tokens referenced." in report
        assert "## Inferred Recipes" not in report
        assert "░" * 40 + " 0%" in report

    def test_limits(self, analysis):
        """Test section limits truncate long lists."""
        report = render_migration_report(
            analysis, ReportConfig(title="Audit", max_unconverted=1, max_patterns=1)
        )
        assert report.startswith("# Audit")
        assert "*...and 1 more*" in report
        assert "### Pattern 1:" in report
        assert "### Pattern 2:" not in report


class TestWriteAnalysis:
    """Tests for writing report files."""

    def test_writes_both(self, analysis, tmp_path):
        """Test both files are written into a new directory."""
        out = tmp_path / "reports" / "tw2panda"
        paths = write_analysis(analysis, out)
        assert paths == [out / ANALYSIS_FILENAME, out / REPORT_FILENAME]
        assert all(p.exists() for p in paths)

        data = json.loads((out / ANALYSIS_FILENAME).read_text(encoding="utf-8"))
        assert data["summary"]["total_files"] == 5
        assert data["token_config"]["colors"]["blue"]["500"] == {"value": "#3b82f6"}
        assert data["recipes"][0]["name"] == "text"

    def test_single_format(self, analysis, tmp_path):
        """Test only the requested format is written."""
        assert write_analysis(analysis, tmp_path, format="markdown") == [tmp_path / REPORT_FILENAME]
        assert not (tmp_path / ANALYSIS_FILENAME).exists()

    def test_dry_run_writes_nothing(self, analysis, tmp_path):
        """Test dry runs report paths without touching the disk."""
        out = tmp_path / "out"
        paths = write_analysis(analysis, out, dry_run=True, format="json")
        assert paths == [out / ANALYSIS_FILENAME]
        assert not out.exists()

    def test_invalid_format(self, analysis, tmp_path):
        """Test an unknown format is rejected."""
        with pytest.raises(ConfigurationError):
            write_analysis(analysis, tmp_path, format="pdf")


class TestLoadAnalysis:
    """Tests for reading analysis.json back."""

    def test_reload_matches_written_analysis(self, analysis, tmp_path):
        """Test a written analysis loads back equal to the original."""
        write_analysis(analysis, tmp_path, format="json")
        loaded = load_analysis(tmp_path / ANALYSIS_FILENAME)
        assert loaded == analysis
        assert loaded.tokens["colors.blue.500"].files == ["src/Button.tsx", "src/Card.tsx"]
        assert loaded.patterns[0].locations == ["src/Button.tsx:3"]
        assert loaded.recipes[0].default_variants == {"variant": "variant1"}

    def test_reloaded_analysis_renders(self, analysis, tmp_path):
        """Test a reloaded analysis renders the same report body."""
        write_analysis(analysis, tmp_path, format="json")
        loaded = load_analysis(tmp_path / ANALYSIS_FILENAME)
        assert build_token_config(loaded) == build_token_config(analysis)
        assert render_recipe_code(loaded.recipes[0]) == render_recipe_code(analysis.recipes[0])

    @pytest.mark.parametrize(
        "content",
        [
            "{ not json",
            "[1, 2]",
            '{"files": [{"status": "success"}]}',
            '{"files": [{"path": "a.tsx", "status": "exploded"}]}',
        ],
    )
    def test_malformed_analysis(self, tmp_path, content):
        """Test unreadable or malformed analysis files raise ExtractionError."""
        path = tmp_path / ANALYSIS_FILENAME
        path.write_text(content, encoding="utf-8")
        with pytest.raises(ExtractionError) as exc_info:
            load_analysis(path)
        assert exc_info.value.details == {"file_path": str(path)}

    def test_missing_file(self, tmp_path):
        """Test a missing analysis file raises ExtractionError."""
        with pytest.raises(ExtractionError):
            load_analysis(tmp_path / "nope.json")
