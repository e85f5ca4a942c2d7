"""Corpus mining: scan files, convert class lists, aggregate usage.

Files are processed in fixed-size batches on a thread pool; a batch is
awaited completely before the next one starts. Results are folded into the
aggregate in submission order, so the outcome does not depend on thread
scheduling. A failure in one file is recorded on that file's report and
never stops the run.
"""

import math
import re
import time
from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..collectors.extractor import ClassListExtractor, ClassListMatch, RegexClassExtractor
from ..config import DEFAULT_SIZE_KEYS, DEFAULT_VISUAL_KEYS, PATTERN_SCOPES, MiningConfig
from ..converter import ClassSetConversion, class_set_to_style_object
from ..design_system.resolver import CSSResolver, get_cached_resolver
from ..errors import ConfigurationError, ExtractionError
from ..normalizers.hashing import class_set_id
from ..registry import TokenRegistry
from ..similarity.clustering import ClusteringStrategy, GreedyJaccardClustering
from ..tw_logging import LogCategory, get_category_logger
from .models import (
    AnalysisSummary,
    FileReport,
    FileStatus,
    Pattern,
    ProjectAnalysis,
    TokenUsage,
)
from .recipes import infer_recipes

logger = get_category_logger(LogCategory.MINER)

TOKEN_PATTERN = re.compile(r"^token\((?P<path>[^,]+),\s*(?P<fallback>.*)\)$")

# Advisory effort model, in minutes
MINUTES_PER_UNCONVERTED_CLASS = 1.0
MINUTES_PER_PATTERN = 0.5


@dataclass
class MiningOptions:
    """Knobs for a mining run."""

    min_pattern_occurrences: int = 2
    min_similarity: float = 0.5
    batch_size: int = 4
    pattern_scope: str = "file"  # "file": one pattern per file, "span": per class list
    size_keys: list[str] = field(default_factory=lambda: list(DEFAULT_SIZE_KEYS))
    visual_keys: list[str] = field(default_factory=lambda: list(DEFAULT_VISUAL_KEYS))
    shorthands: bool = False
    root: Path | None = None  # report paths relative to this
    extractor: ClassListExtractor | None = None
    clustering: ClusteringStrategy | None = None

    @classmethod
    def from_config(cls, config: MiningConfig, root: Path | None = None) -> "MiningOptions":
        return cls(
            min_pattern_occurrences=config.min_pattern_occurrences,
            min_similarity=config.min_similarity,
            batch_size=config.batch_size,
            pattern_scope=config.pattern_scope,
            size_keys=list(config.size_keys),
            visual_keys=list(config.visual_keys),
            shorthands=config.shorthands,
            root=root,
        )


@dataclass
class ConvertedUnit:
    """One converted class set and where it came from."""

    classes: list[str]
    conversion: ClassSetConversion
    location: str


@dataclass
class FileResult:
    """Everything one file contributes to the aggregate."""

    report: FileReport
    units: list[ConvertedUnit] = field(default_factory=list)


def estimate_effort_hours(unconverted_count: int, pattern_count: int) -> float:
    """Hours of manual work, rounded up to one decimal."""
    minutes = (
        unconverted_count * MINUTES_PER_UNCONVERTED_CLASS
        + pattern_count * MINUTES_PER_PATTERN
    )
    return math.ceil(minutes / 60 * 10) / 10


def iter_token_references(styles: Any) -> Iterable[tuple[str, str, str]]:
    """Yield ``(category, path, fallback)`` for every token() leaf."""
    if isinstance(styles, dict):
        for value in styles.values():
            yield from iter_token_references(value)
        return
    if not isinstance(styles, str):
        return
    match = TOKEN_PATTERN.match(styles.strip())
    if not match:
        return
    full_path = match.group("path").strip().removesuffix("!")
    fallback = match.group("fallback").strip().removesuffix("!important").strip()
    category, _, path = full_path.partition(".")
    if category and path:
        yield category, path, fallback


def _ordered_unique(items: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(items))


class ProjectMiner:
    """Mines a file corpus for token usage, repeated patterns and recipes."""

    def __init__(
        self,
        resolver: CSSResolver,
        registry: TokenRegistry | None = None,
        options: MiningOptions | None = None,
    ):
        self.resolver = resolver
        self.registry = registry or TokenRegistry.default()
        self.options = options or MiningOptions()
        if self.options.pattern_scope not in PATTERN_SCOPES:
            raise ConfigurationError(
                f"pattern_scope must be one of {', '.join(PATTERN_SCOPES)}, "
                f"got {self.options.pattern_scope!r}"
            )
        self.extractor = self.options.extractor or RegexClassExtractor()
        self.clustering = self.options.clustering or GreedyJaccardClustering(
            min_similarity=self.options.min_similarity
        )

    def display_path(self, path: Path) -> str:
        root = self.options.root
        if root is not None:
            try:
                return Path(path).resolve().relative_to(Path(root).resolve()).as_posix()
            except ValueError:
                pass
        return str(path)

    def process_file(self, path: Path) -> FileResult:
        """Extract and convert one file.

        Raises:
            ExtractionError: If the file cannot be read as text.
        """
        display = self.display_path(path)
        start = time.perf_counter()
        try:
            content = Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ExtractionError(f"Could not read {display}: {e}", file_path=display) from e

        matches = self.extractor.extract(content)
        report = FileReport(path=display, class_lists=len(matches))
        report.classes = _ordered_unique(cls for m in matches for cls in m.classes)

        if not report.classes:
            report.status = FileStatus.SKIPPED
            report.duration_ms = round((time.perf_counter() - start) * 1000, 2)
            return FileResult(report=report)

        units = self._convert(display, matches, report.classes)
        report.converted = _ordered_unique(c for u in units for c in u.conversion.converted)
        report.unconverted = _ordered_unique(c for u in units for c in u.conversion.unconverted)
        report.markers = _ordered_unique(c for u in units for c in u.conversion.markers)
        report.duration_ms = round((time.perf_counter() - start) * 1000, 2)

        logger.debug(
            f"Processed {display}: {len(report.converted)} converted, "
            f"{len(report.unconverted)} unconverted",
            extra={
                "file_path": display,
                "duration_ms": report.duration_ms,
                "class_count": len(report.classes),
            },
        )
        return FileResult(report=report, units=units)

    def _convert(
        self, display: str, matches: list[ClassListMatch], file_classes: list[str]
    ) -> list[ConvertedUnit]:
        if self.options.pattern_scope == "file":
            groups = [(file_classes, matches[0].line)]
        else:
            groups = [(m.classes, m.line) for m in matches if m.classes]

        return [
            ConvertedUnit(
                classes=classes,
                conversion=class_set_to_style_object(
                    classes, self.resolver, self.registry, self.options.shorthands
                ),
                location=f"{display}:{line}",
            )
            for classes, line in groups
        ]

    def _run_batch(self, batch: Sequence[Path]) -> list[FileResult]:
        with ThreadPoolExecutor(max_workers=len(batch)) as executor:
            futures = [executor.submit(self.process_file, path) for path in batch]

        results = []
        for path, future in zip(batch, futures, strict=True):
            try:
                results.append(future.result())
            except Exception as e:
                display = self.display_path(path)
                logger.warning(
                    f"Could not analyze {display}: {e}", extra={"file_path": display}
                )
                message = e.message if isinstance(e, ExtractionError) else str(e)
                results.append(
                    FileResult(
                        report=FileReport(
                            path=display, status=FileStatus.ERROR, error=message
                        )
                    )
                )
        return results

    def mine(self, files: Iterable[Path | str]) -> ProjectAnalysis:
        """Run the full pipeline over ``files``."""
        paths = [Path(f) for f in files]
        batch_size = max(1, self.options.batch_size)
        start = time.perf_counter()

        analysis = ProjectAnalysis()
        all_patterns: dict[str, Pattern] = {}

        for offset in range(0, len(paths), batch_size):
            for result in self._run_batch(paths[offset : offset + batch_size]):
                self._aggregate(result, analysis, all_patterns)

        detected = [
            p for p in all_patterns.values() if p.count >= self.options.min_pattern_occurrences
        ]
        analysis.patterns = detected
        analysis.recipes = infer_recipes(
            detected,
            self.clustering,
            self.options.size_keys,
            self.options.visual_keys,
        )
        analysis.summary = self._summarize(analysis)

        logger.info(
            f"Mined {len(paths)} files: {len(detected)} patterns, "
            f"{len(analysis.recipes)} recipes, {analysis.summary.errors} errors",
            extra={
                "operation": "mine_project",
                "duration_ms": round((time.perf_counter() - start) * 1000, 2),
            },
        )
        return analysis

    def _aggregate(
        self,
        result: FileResult,
        analysis: ProjectAnalysis,
        all_patterns: dict[str, Pattern],
    ) -> None:
        analysis.files.append(result.report)
        file_path = result.report.path

        for unit in result.units:
            conversion = unit.conversion
            if not conversion.converted or conversion.is_empty:
                continue

            for category, path, fallback in iter_token_references(conversion.styles):
                key = f"{category}.{path}"
                usage = analysis.tokens.get(key)
                if usage is None:
                    usage = TokenUsage(category=category, path=path, value=fallback)
                    analysis.tokens[key] = usage
                usage.record(file_path)

            pattern_id = class_set_id(conversion.converted)
            pattern = all_patterns.get(pattern_id)
            if pattern is None:
                pattern = Pattern(
                    id=pattern_id,
                    classes=sorted(set(conversion.converted)),
                    styles=conversion.styles,
                )
                all_patterns[pattern_id] = pattern
            pattern.record(file_path, unit.location)

    def _summarize(self, analysis: ProjectAnalysis) -> AnalysisSummary:
        reports = analysis.files
        unique_classes = {c for r in reports for c in r.classes}
        converted = {c for r in reports for c in r.converted}
        unconverted = {c for r in reports for c in r.unconverted}

        return AnalysisSummary(
            total_files=len(reports),
            total_classes=sum(len(r.classes) for r in reports),
            unique_classes=len(unique_classes),
            converted_classes=len(converted),
            unconverted_classes=len(unconverted),
            detected_patterns=len(analysis.patterns),
            inferred_recipes=len(analysis.recipes),
            errors=sum(1 for r in reports if r.status is FileStatus.ERROR),
            estimated_effort_hours=estimate_effort_hours(
                len(unconverted), len(analysis.patterns)
            ),
        )


def mine_project(
    files: Iterable[Path | str],
    resolver: CSSResolver | None = None,
    registry: TokenRegistry | None = None,
    options: MiningOptions | None = None,
) -> ProjectAnalysis:
    """Mine a file list for token usage, detected patterns and recipes.

    Args:
        files: Source files to analyze.
        resolver: Resolver to convert with; defaults to the cached design system.
        registry: Destination conditions and token categories.
        options: Thresholds, batch size and pattern scope.

    Returns:
        ProjectAnalysis with per-file reports, token usage, detected
        patterns (discovery order) and inferred recipes.
    """
    miner = ProjectMiner(resolver or get_cached_resolver(), registry, options)
    return miner.mine(files)
