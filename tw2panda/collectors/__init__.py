"""Source collection: file scanning and class-list extraction."""

from .extractor import ClassListExtractor, ClassListMatch, RegexClassExtractor, split_classes
from .scanner import SKIP_DIRS, collect_files

__all__ = [
    "ClassListExtractor",
    "ClassListMatch",
    "RegexClassExtractor",
    "split_classes",
    "SKIP_DIRS",
    "collect_files",
]
