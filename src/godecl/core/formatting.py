"""Summary formatting utilities for consistent terminal output.

Every summary fits on one line and is grammatically correct (1 type vs 2 types).
"""

from __future__ import annotations


def compress_path(path: str, max_len: int = 30) -> str:
    """Compress path to fit within max_len.

    Examples:
        pkg/internal/server/handler.go -> pkg/.../handler.go
        short/path.go -> short/path.go (unchanged)
    """
    if len(path) <= max_len:
        return path

    parts = path.split("/")
    if len(parts) <= 2:
        return path

    compressed = f"{parts[0]}/.../{parts[-1]}"
    if len(compressed) <= max_len:
        return compressed

    return parts[-1]


def pluralize(count: int, singular: str, plural: str | None = None) -> str:
    """Return "1 type" or "3 types"."""
    if plural is None:
        plural = singular + "s"
    word = singular if count == 1 else plural
    return f"{count} {word}"


def format_counts(counts: dict[str, int]) -> str:
    """Join non-zero counts: {"type": 2, "method": 1, "func": 0} -> "2 types, 1 method"."""
    parts = [pluralize(n, word) for word, n in counts.items() if n]
    return ", ".join(parts) if parts else "nothing"
