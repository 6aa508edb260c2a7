"""Tests for editing tools."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from docengine_mcp.domains.editing.tools import (
    MergePart,
    group_pages,
    new_page_parts,
    register_tools,
    split_ranges,
)
from docengine_mcp.models.fingerprint import DocumentFingerprint, PageRange
from docengine_mcp.utils.errors import ToolInputError

LAYERS = "docengine_mcp.domains.editing.tools.layers"
DOC = DocumentFingerprint(document_id="doc-1")
SELF = {"id": "#self"}


@pytest.fixture
def tools(capture_tools, mock_server: MagicMock) -> dict:
    """Register editing tools."""
    return capture_tools(register_tools, mock_server)


class TestHelpers:
    """Tests for page arithmetic helpers."""

    def test_split_ranges(self) -> None:
        """Split points start new sections."""
        assert split_ranges([7, 3], 10) == [(0, 2), (3, 6), (7, 9)]

    def test_split_ranges_dedupes(self) -> None:
        """Repeated split points count once."""
        assert split_ranges([2, 2], 4) == [(0, 1), (2, 3)]

    @pytest.mark.parametrize("point", [0, 10, -1])
    def test_split_ranges_out_of_bounds(self, point: int) -> None:
        """Split points must fall strictly inside the document."""
        with pytest.raises(ToolInputError, match="valid split points are 1-9"):
            split_ranges([point], 10)

    def test_group_pages(self) -> None:
        """Consecutive pages collapse into ranges."""
        assert group_pages([5, 0, 1, 2, 7, 8]) == ["Pages 0-2", "Page 5", "Pages 7-8"]

    def test_new_page_parts_positions(self) -> None:
        """New pages are placed at the start, end or in between."""
        layout = {"size": "A4", "orientation": "portrait"}
        new = {"page": "new", "pageCount": 2, "layout": layout}

        assert new_page_parts(0, 5, 2, layout) == [new, {"document": SELF}]
        assert new_page_parts(None, 5, 2, layout) == [{"document": SELF}, new]
        assert new_page_parts(5, 5, 2, layout) == [{"document": SELF}, new]
        assert new_page_parts(2, 5, 2, layout) == [
            {"document": SELF, "pages": {"start": 0, "end": 1}},
            new,
            {"document": SELF, "pages": {"start": 2, "end": -1}},
        ]


class TestSplitDocument:
    """Test split_document tool."""

    async def test_splits_into_copies(self, tools: dict) -> None:
        """The original keeps the first part and copies take the rest."""
        info = {"pageCount": 10, "title": "Report.pdf"}
        with (
            patch(f"{LAYERS}.get_document_info", new=AsyncMock(return_value=info)),
            patch(f"{LAYERS}.copy_document", new=AsyncMock(side_effect=["c1", "c2"])),
            patch(f"{LAYERS}.apply_instructions", new=AsyncMock()) as apply,
        ):
            result = await tools["split_document"](DOC, split_points=[3, 7])

        targets = [call.args[1].document_id for call in apply.await_args_list]
        pages = [call.args[2]["parts"][0]["pages"] for call in apply.await_args_list]
        assert targets == ["doc-1", "c1", "c2"]
        assert pages == [{"start": 0, "end": 2}, {"start": 3, "end": 6}, {"start": 7, "end": 9}]
        assert "✂️ **Split into:** 3 parts" in result
        assert "### 📄 Part 2: Report_part_2.pdf" in result
        assert "- **Pages:** 7-9 (3 pages)" in result
        assert "- **Content:** Final part" in result

    async def test_requires_split_points(self, tools: dict) -> None:
        """An empty split list is rejected."""
        result = await tools["split_document"](DOC, split_points=[])

        assert result == "# Error Splitting Document\n\nAt least one split point is required"


class TestAddWatermark:
    """Test add_watermark tool."""

    async def test_text_watermark(self, tools: dict) -> None:
        """Text watermarks cover the page."""
        with (
            patch(f"{LAYERS}.get_document_info", new=AsyncMock(return_value={"pageCount": 3})),
            patch(f"{LAYERS}.apply_instructions", new=AsyncMock()) as apply,
        ):
            result = await tools["add_watermark"](
                DOC, watermark_type="text", content="CONFIDENTIAL", opacity=0.5, rotation=45
            )

        action = apply.await_args.args[2]["actions"][0]
        assert action["text"] == "CONFIDENTIAL"
        assert action["opacity"] == 0.5
        assert action["width"] == "100%"
        assert '- **Content:** "CONFIDENTIAL"' in result
        assert "- **Rotation:** 45°" in result
        assert "- **Opacity:** 50%" in result
        assert "- **Pages Processed:** 3/3" in result

    async def test_invalid_image_url(self, tools: dict) -> None:
        """Image watermarks need an absolute URL."""
        with (
            patch(f"{LAYERS}.get_document_info", new=AsyncMock(return_value={"pageCount": 1})),
            patch(f"{LAYERS}.apply_instructions", new=AsyncMock()) as apply,
        ):
            result = await tools["add_watermark"](DOC, watermark_type="image", content="logo.png")

        apply.assert_not_awaited()
        assert "Invalid image URL provided" in result

    async def test_opacity_range(self, tools: dict) -> None:
        """Opacity outside 0..1 is rejected."""
        result = await tools["add_watermark"](DOC, watermark_type="text", content="x", opacity=2)

        assert "Opacity must be between 0 and 1" in result


class TestDuplicateDocument:
    """Test duplicate_document tool."""

    async def test_duplicates(self, tools: dict) -> None:
        """The new document ID is reported."""
        with (
            patch(f"{LAYERS}.get_document_info", new=AsyncMock(return_value={"pageCount": 4})),
            patch(f"{LAYERS}.copy_document", new=AsyncMock(return_value="copy-9")),
        ):
            result = await tools["duplicate_document"](DOC)

        assert "📄 **New Document ID:** copy-9" in result
        assert "- ✅ **All Pages:** 4 pages copied" in result

    async def test_missing_id(self, tools: dict) -> None:
        """An empty copy response is an error."""
        with (
            patch(f"{LAYERS}.get_document_info", new=AsyncMock(return_value={})),
            patch(f"{LAYERS}.copy_document", new=AsyncMock(return_value="")),
        ):
            result = await tools["duplicate_document"](DOC)

        assert result.startswith("# Error Duplicating Document")


class TestAddNewPage:
    """Test add_new_page tool."""

    async def test_inserts_pages(self, tools: dict) -> None:
        """Pages are inserted at the requested position."""
        info = AsyncMock(side_effect=[{"pageCount": 4}, {"pageCount": 6, "title": "Deck"}])
        with (
            patch(f"{LAYERS}.get_document_info", new=info),
            patch(f"{LAYERS}.apply_instructions", new=AsyncMock()) as apply,
        ):
            result = await tools["add_new_page"](
                DOC, position=2, page_size="Letter", orientation="landscape", count=2
            )

        parts = apply.await_args.args[2]["parts"]
        assert parts[1]["layout"] == {"size": "Letter", "orientation": "landscape"}
        assert "# New Pages Added Successfully" in result
        assert "📊 **New Page Count:** 6" in result
        assert "- **Position:** at position 2 (0-based index)" in result

    async def test_position_out_of_bounds(self, tools: dict) -> None:
        """Positions past the end are rejected."""
        with patch(f"{LAYERS}.get_document_info", new=AsyncMock(return_value={"pageCount": 2})):
            result = await tools["add_new_page"](DOC, position=5)

        assert "Position 5 is out of bounds (document has 2 pages)" in result


class TestRotatePages:
    """Test rotate_pages tool."""

    async def test_rotates_selected_pages(self, tools: dict) -> None:
        """Only selected pages get a rotate action."""
        with (
            patch(f"{LAYERS}.get_document_info", new=AsyncMock(return_value={"pageCount": 3})),
            patch(f"{LAYERS}.apply_instructions", new=AsyncMock()) as apply,
        ):
            result = await tools["rotate_pages"](DOC, pages=[0, 1], rotation=90)

        parts = apply.await_args.args[2]["parts"]
        assert len(parts) == 3
        assert parts[0]["actions"] == [{"type": "rotate", "rotateBy": 90}]
        assert "actions" not in parts[2]
        assert "📊 **Pages Rotated:** 2 pages" in result
        assert "- **Rotation:** Clockwise (90°)" in result
        assert "- **Detailed Page List:** Pages 0-1" in result

    async def test_page_out_of_bounds(self, tools: dict) -> None:
        """Invalid pages are rejected."""
        with (
            patch(f"{LAYERS}.get_document_info", new=AsyncMock(return_value={"pageCount": 3})),
            patch(f"{LAYERS}.apply_instructions", new=AsyncMock()) as apply,
        ):
            result = await tools["rotate_pages"](DOC, pages=[3], rotation=180)

        apply.assert_not_awaited()
        assert "Page index 3 is out of bounds" in result


class TestMergeDocumentPages:
    """Test merge_document_pages tool."""

    async def test_merges_parts(self, tools: dict) -> None:
        """Parts are merged in order into a new document."""
        infos = {
            "a": {"pageCount": 5, "title": "Alpha"},
            "b": {"pageCount": 2, "title": "Beta"},
        }

        async def document_info(client, fp):
            return infos[fp.document_id]

        parts = [
            MergePart(
                document_fingerprint=DocumentFingerprint(document_id="a"),
                page_range=PageRange(start=1, end=3),
            ),
            MergePart(document_fingerprint=DocumentFingerprint(document_id="b", layer="final")),
        ]
        with (
            patch(f"{LAYERS}.get_document_info", new=AsyncMock(side_effect=document_info)),
            patch(
                f"{LAYERS}.create_document_from_instructions",
                new=AsyncMock(return_value={"document_id": "merged-1"}),
            ) as create,
        ):
            result = await tools["merge_document_pages"](parts, title="Combined")

        instructions, title = create.await_args.args[1:]
        assert instructions == {
            "parts": [
                {"document": {"id": "a"}, "pages": {"start": 1, "end": 3}},
                {"document": {"id": "b", "layer": "final"}},
            ]
        }
        assert title == "Combined"
        assert "📄 **New Document ID:** merged-1" in result
        assert "📊 **Total Pages:** 5" in result
        assert "- **Page Range:** 1-3" in result
        assert "- **Layer Name:** final" in result

    async def test_invalid_range(self, tools: dict) -> None:
        """Ranges beyond the source document are rejected."""
        parts = [
            MergePart(
                document_fingerprint=DocumentFingerprint(document_id="a"),
                page_range=PageRange(start=0, end=9),
            )
        ]
        with (
            patch(f"{LAYERS}.get_document_info", new=AsyncMock(return_value={"pageCount": 2})),
            patch(f"{LAYERS}.create_document_from_instructions", new=AsyncMock()) as create,
        ):
            result = await tools["merge_document_pages"](parts)

        create.assert_not_awaited()
        assert result.startswith("# Error Merging Documents")
