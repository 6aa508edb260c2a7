"""Tests for document identification models."""

import pytest
from pydantic import ValidationError

from docengine_mcp.models.fingerprint import DocumentFingerprint, PageRange


class TestDocumentFingerprint:
    """Tests for DocumentFingerprint."""

    def test_str_without_layer(self) -> None:
        """The default layer renders as the bare ID."""
        assert str(DocumentFingerprint(document_id="doc-1")) == "doc-1"

    def test_str_with_layer(self) -> None:
        """Named layers are shown after the ID."""
        fp = DocumentFingerprint(document_id="doc-1", layer="review")

        assert str(fp) == "doc-1 (layer: review)"

    def test_empty_id_rejected(self) -> None:
        """An empty document ID is invalid."""
        with pytest.raises(ValidationError):
            DocumentFingerprint(document_id="")


class TestPageRange:
    """Tests for PageRange."""

    def test_resolve_open_range(self) -> None:
        """Missing bounds cover the whole document."""
        assert PageRange().resolve(3) == [0, 1, 2]

    def test_resolve_bounded(self) -> None:
        """Both bounds are inclusive."""
        assert PageRange(start=1, end=2).resolve(5) == [1, 2]

    def test_resolve_out_of_bounds(self) -> None:
        """An end beyond the last page is rejected."""
        with pytest.raises(ValueError, match="end 5 is out of bounds"):
            PageRange(start=0, end=5).resolve(5)

    def test_resolve_start_after_end(self) -> None:
        """Reversed ranges are rejected."""
        with pytest.raises(ValueError, match="Invalid page range"):
            PageRange(start=3, end=1).resolve(5)

    @pytest.mark.parametrize(
        ("page_range", "expected"),
        [
            (PageRange(start=2, end=4), "2-4"),
            (PageRange(start=2), "2-end"),
            (PageRange(end=4), "0-4"),
            (PageRange(), "All pages"),
        ],
    )
    def test_describe(self, page_range: PageRange, expected: str) -> None:
        """Ranges render compactly for reports."""
        assert page_range.describe() == expected

    def test_as_part_pages_omits_missing_bounds(self) -> None:
        """Only set bounds are serialized."""
        assert PageRange(start=1).as_part_pages() == {"start": 1}
