"""Tests for markdown formatting helpers."""

import pytest

from docengine_mcp.utils.errors import DocumentEngineError
from docengine_mcp.utils.formatting import (
    error_response,
    format_bbox,
    format_file_size,
    layer_suffix,
)


class TestFormatFileSize:
    """Tests for format_file_size."""

    @pytest.mark.parametrize(
        ("num_bytes", "expected"),
        [
            (0, "0 B"),
            (512, "512 B"),
            (1536, "1.5 KB"),
            (10 * 1024 * 1024, "10 MB"),
            (3 * 1024**3, "3.0 GB"),
        ],
    )
    def test_sizes(self, num_bytes: int, expected: str) -> None:
        """Sizes use binary units with one decimal below ten."""
        assert format_file_size(num_bytes) == expected


class TestSmallHelpers:
    """Tests for bbox and layer helpers."""

    def test_format_bbox(self) -> None:
        """Bounding boxes list all four coordinates."""
        assert format_bbox([10, 20, 100, 50]) == "(left:10, top:20, width:100, height:50)"

    def test_layer_suffix(self) -> None:
        """The suffix only appears for named layers."""
        assert layer_suffix("review") == " (layer: review)"
        assert layer_suffix(None) == ""


class TestErrorResponse:
    """Tests for error_response."""

    def test_document_engine_error(self) -> None:
        """Backend errors show their message."""
        error = DocumentEngineError("Resource not found", code="NOT_FOUND", status_code=404)

        assert error_response("Listing Documents", error) == (
            "# Error Listing Documents\n\nResource not found"
        )

    def test_plain_exception(self) -> None:
        """Unexpected exceptions show their text."""
        assert error_response("Searching", ValueError("bad query")) == (
            "# Error Searching\n\nbad query"
        )

    def test_string_message(self) -> None:
        """Plain strings are used verbatim."""
        assert error_response("Rotating Pages", "Nothing to rotate") == (
            "# Error Rotating Pages\n\nNothing to rotate"
        )
