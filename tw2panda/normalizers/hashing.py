"""Hashing utilities for class-set identity.

Pattern identity is an exact content hash of the sorted class set.
"""

import hashlib
from collections.abc import Iterable


def compute_content_hash(content: str) -> str:
    """Compute SHA256 hash of content.

    Args:
        content: String content to hash.

    Returns:
        SHA256 hex digest.
    """
    return hashlib.sha256(content.encode()).hexdigest()


def class_set_id(classes: Iterable[str], length: int = 16) -> str:
    """Stable identity for a set of classes, independent of order and repeats.

    Args:
        classes: Class names.
        length: Number of hex characters to keep.

    Returns:
        Truncated SHA256 of the sorted, de-duplicated classes.
    """
    canonical = "|".join(sorted(set(classes)))
    return compute_content_hash(canonical)[:length]

