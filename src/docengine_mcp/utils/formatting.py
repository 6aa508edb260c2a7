"""Markdown formatting helpers shared by the tool handlers."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from docengine_mcp.utils.errors import DocumentEngineError

logger = logging.getLogger(__name__)

_SIZE_UNITS = ["B", "KB", "MB", "GB", "TB"]


def format_file_size(num_bytes: int | float) -> str:
    """Format a byte count as a human-readable size, e.g. "1.5 KB"."""
    if num_bytes <= 0:
        return "0 B"
    value = float(num_bytes)
    index = 0
    while value >= 1024 and index < len(_SIZE_UNITS) - 1:
        value /= 1024
        index += 1
    precision = 0 if value >= 10 else 1
    return f"{value:.{precision}f} {_SIZE_UNITS[index]}"


def format_bbox(bbox: Sequence[float]) -> str:
    """Format an annotation bounding box [left, top, width, height]."""
    left, top, width, height = bbox[:4]
    return f"(left:{left}, top:{top}, width:{width}, height:{height})"


def layer_suffix(layer: str | None) -> str:
    """Return the " (layer: x)" suffix used in headings, or empty string."""
    return f" (layer: {layer})" if layer else ""


def error_response(title: str, error: Exception | str) -> str:
    """Render a tool failure as a markdown error block.

    Args:
        title: What was being attempted, e.g. "Listing Documents".
        error: The exception or message to report.

    Returns:
        Markdown text starting with an "# Error" heading.
    """
    if isinstance(error, DocumentEngineError):
        message = error.message
        logger.warning(f"{title} failed ({error.code}): {message}")
    elif isinstance(error, Exception):
        message = str(error) or type(error).__name__
        logger.error(f"{title} failed: {message}")
    else:
        message = error
    return f"# Error {title}\n\n{message}"
