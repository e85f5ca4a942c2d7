"""Data models for corpus mining results."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..normalizers.conditions import StyleObject


class FileStatus(Enum):
    """Outcome of processing one file."""

    SUCCESS = "success"
    ERROR = "error"
    SKIPPED = "skipped"  # no class lists found


@dataclass
class TokenUsage:
    """Usage of one design token across the corpus."""

    category: str
    path: str
    value: str = ""  # example literal fallback
    count: int = 0
    files: list[str] = field(default_factory=list)

    @property
    def key(self) -> str:
        return f"{self.category}.{self.path}"

    def record(self, file_path: str) -> None:
        self.count += 1
        if file_path not in self.files:
            self.files.append(file_path)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "category": self.category,
            "path": self.path,
            "value": self.value,
            "count": self.count,
            "files": self.files,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TokenUsage":
        """Create from dictionary."""
        return cls(
            category=data["category"],
            path=data["path"],
            value=data.get("value", ""),
            count=data.get("count", 0),
            files=data.get("files", []),
        )


@dataclass
class Pattern:
    """A class set seen one or more times across the corpus."""

    id: str  # hash of the sorted class set
    classes: list[str]
    styles: StyleObject = field(default_factory=dict)
    count: int = 0
    files: list[str] = field(default_factory=list)
    locations: list[str] = field(default_factory=list)  # "path:line"

    def record(self, file_path: str, location: str | None = None) -> None:
        self.count += 1
        if file_path not in self.files:
            self.files.append(file_path)
        if location:
            self.locations.append(location)

    @property
    def class_set(self) -> set[str]:
        return set(self.classes)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "classes": self.classes,
            "styles": self.styles,
            "count": self.count,
            "files": self.files,
            "locations": self.locations,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Pattern":
        """Create from dictionary."""
        return cls(
            id=data["id"],
            classes=data.get("classes", []),
            styles=data.get("styles", {}),
            count=data.get("count", 0),
            files=data.get("files", []),
            locations=data.get("locations", []),
        )


@dataclass
class InferredRecipe:
    """A parametrized style inferred from a cluster of similar patterns."""

    name: str
    base: StyleObject = field(default_factory=dict)
    # axis name → value name → diff style object
    variants: dict[str, dict[str, StyleObject]] = field(default_factory=dict)
    source_patterns: list[str] = field(default_factory=list)  # Pattern IDs
    similarity: float = 0.0  # average pairwise Jaccard of the source patterns

    @property
    def default_variants(self) -> dict[str, str]:
        """First value of every axis."""
        return {axis: next(iter(values)) for axis, values in self.variants.items() if values}

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "name": self.name,
            "base": self.base,
            "variants": self.variants,
            "default_variants": self.default_variants,
            "source_patterns": self.source_patterns,
            "similarity": self.similarity,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "InferredRecipe":
        """Create from dictionary; ``default_variants`` is derived, not read."""
        return cls(
            name=data["name"],
            base=data.get("base", {}),
            variants=data.get("variants", {}),
            source_patterns=data.get("source_patterns", []),
            similarity=data.get("similarity", 0.0),
        )


@dataclass
class FileReport:
    """Per-file extraction and conversion outcome."""

    path: str
    status: FileStatus = FileStatus.SUCCESS
    classes: list[str] = field(default_factory=list)  # unique, first-seen order
    converted: list[str] = field(default_factory=list)
    unconverted: list[str] = field(default_factory=list)
    markers: list[str] = field(default_factory=list)
    class_lists: int = 0
    error: str | None = None
    duration_ms: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "path": self.path,
            "status": self.status.value,
            "classes": self.classes,
            "converted": self.converted,
            "unconverted": self.unconverted,
            "markers": self.markers,
            "class_lists": self.class_lists,
            "error": self.error,
            "duration_ms": self.duration_ms,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FileReport":
        """Create from dictionary."""
        return cls(
            path=data["path"],
            status=FileStatus(data.get("status", FileStatus.SUCCESS.value)),
            classes=data.get("classes", []),
            converted=data.get("converted", []),
            unconverted=data.get("unconverted", []),
            markers=data.get("markers", []),
            class_lists=data.get("class_lists", 0),
            error=data.get("error"),
            duration_ms=data.get("duration_ms", 0.0),
        )


@dataclass
class AnalysisSummary:
    """Corpus-wide totals."""

    total_files: int = 0
    total_classes: int = 0  # class usages, summed over files
    unique_classes: int = 0
    converted_classes: int = 0  # unique
    unconverted_classes: int = 0  # unique
    detected_patterns: int = 0
    inferred_recipes: int = 0
    errors: int = 0
    estimated_effort_hours: float = 0.0

    @property
    def conversion_ratio(self) -> float:
        if self.unique_classes == 0:
            return 0.0
        return min(1.0, self.converted_classes / self.unique_classes)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "total_files": self.total_files,
            "total_classes": self.total_classes,
            "unique_classes": self.unique_classes,
            "converted_classes": self.converted_classes,
            "unconverted_classes": self.unconverted_classes,
            "detected_patterns": self.detected_patterns,
            "inferred_recipes": self.inferred_recipes,
            "errors": self.errors,
            "estimated_effort_hours": self.estimated_effort_hours,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AnalysisSummary":
        """Create from dictionary."""
        return cls(
            total_files=data.get("total_files", 0),
            total_classes=data.get("total_classes", 0),
            unique_classes=data.get("unique_classes", 0),
            converted_classes=data.get("converted_classes", 0),
            unconverted_classes=data.get("unconverted_classes", 0),
            detected_patterns=data.get("detected_patterns", 0),
            inferred_recipes=data.get("inferred_recipes", 0),
            errors=data.get("errors", 0),
            estimated_effort_hours=data.get("estimated_effort_hours", 0.0),
        )


@dataclass
class ProjectAnalysis:
    """Everything mining produced for a corpus."""

    files: list[FileReport] = field(default_factory=list)
    tokens: dict[str, TokenUsage] = field(default_factory=dict)  # keyed by category.path
    patterns: list[Pattern] = field(default_factory=list)  # detected, discovery order
    recipes: list[InferredRecipe] = field(default_factory=list)
    summary: AnalysisSummary = field(default_factory=AnalysisSummary)

    def tokens_by_usage(self) -> list[TokenUsage]:
        return sorted(self.tokens.values(), key=lambda t: t.count, reverse=True)

    def patterns_by_count(self) -> list[Pattern]:
        return sorted(self.patterns, key=lambda p: p.count, reverse=True)

    def unconverted_by_class(self) -> dict[str, list[str]]:
        """Unconverted class → files it appears in, most widespread first."""
        by_class: dict[str, list[str]] = {}
        for report in self.files:
            for cls in report.unconverted:
                by_class.setdefault(cls, []).append(report.path)
        return dict(sorted(by_class.items(), key=lambda item: len(item[1]), reverse=True))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "summary": self.summary.to_dict(),
            "files": [f.to_dict() for f in self.files],
            "tokens": [t.to_dict() for t in self.tokens_by_usage()],
            "patterns": [p.to_dict() for p in self.patterns],
            "recipes": [r.to_dict() for r in self.recipes],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ProjectAnalysis":
        """Rebuild an analysis from its JSON form.

        Keys added on write (such as ``token_config``) are ignored.
        """
        tokens = [TokenUsage.from_dict(t) for t in data.get("tokens", [])]
        return cls(
            files=[FileReport.from_dict(f) for f in data.get("files", [])],
            tokens={t.key: t for t in tokens},
            patterns=[Pattern.from_dict(p) for p in data.get("patterns", [])],
            recipes=[InferredRecipe.from_dict(r) for r in data.get("recipes", [])],
            summary=AnalysisSummary.from_dict(data.get("summary", {})),
        )
