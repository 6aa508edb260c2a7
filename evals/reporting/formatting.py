"""Terminal formatting helpers for evaluation reports."""

from __future__ import annotations

from collections.abc import Iterable

SUCCESS_THRESHOLD = 0.8
WARN_THRESHOLD = 0.5

_MEDALS = {1: "\U0001f947", 2: "\U0001f948", 3: "\U0001f949"}


def percent(value: float, digits: int = 1) -> str:
    """Format a fraction as a percentage, e.g. 0.753 -> "75.3%"."""
    return f"{value * 100:.{digits}f}%"


def score_glyph(score: float) -> str:
    """Status glyph for a scenario score."""
    if score > SUCCESS_THRESHOLD:
        return "✅"
    if score > WARN_THRESHOLD:
        return "⚠️"
    return "❌"


def medal(rank: int) -> str:
    """Medal for the top three ranks, blank padding otherwise."""
    return _MEDALS.get(rank, "  ")


def most_common(items: Iterable[str]) -> str:
    """Most frequent item; the first one seen wins ties.

    Returns an empty string when there are no items.
    """
    counts: dict[str, int] = {}
    for item in items:
        counts[item] = counts.get(item, 0) + 1

    best = ""
    best_count = 0
    for item, count in counts.items():
        if count > best_count:
            best, best_count = item, count
    return best


def table_row(cells: list[str], widths: list[int]) -> str:
    """Left-align cells into fixed-width columns; the last cell is not padded."""
    padded = [cell.ljust(width) for cell, width in zip(cells[:-1], widths)]
    return "".join(padded) + (cells[-1] if cells else "")
