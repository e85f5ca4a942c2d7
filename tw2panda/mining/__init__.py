"""Corpus mining: token usage, repeated patterns and inferred recipes."""

from .miner import MiningOptions, ProjectMiner, estimate_effort_hours, mine_project
from .models import (
    AnalysisSummary,
    FileReport,
    FileStatus,
    InferredRecipe,
    Pattern,
    ProjectAnalysis,
    TokenUsage,
)
from .recipes import infer_recipe_name, infer_recipes, synthesize_recipe
from .report import (
    MarkdownReporter,
    ReportConfig,
    build_token_config,
    load_analysis,
    render_migration_report,
    render_recipe_code,
    suggest_for_class,
    write_analysis,
)

__all__ = [
    # Miner
    "MiningOptions",
    "ProjectMiner",
    "estimate_effort_hours",
    "mine_project",
    # Models
    "AnalysisSummary",
    "FileReport",
    "FileStatus",
    "InferredRecipe",
    "Pattern",
    "ProjectAnalysis",
    "TokenUsage",
    # Recipes
    "infer_recipe_name",
    "infer_recipes",
    "synthesize_recipe",
    # Reports
    "MarkdownReporter",
    "ReportConfig",
    "build_token_config",
    "load_analysis",
    "render_migration_report",
    "render_recipe_code",
    "suggest_for_class",
    "write_analysis",
]
