"""Tests for annotation and redaction tools."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from docengine_mcp.domains.annotations.models import (
    AnnotationCoordinates,
    build_annotation_content,
    describe_redaction,
    normalize_annotation_type,
    redaction_payload,
)
from docengine_mcp.domains.annotations.tools import filter_annotations, register_tools
from docengine_mcp.models.fingerprint import DocumentFingerprint
from docengine_mcp.utils.errors import DocumentEngineError

LAYERS = "docengine_mcp.domains.annotations.tools.layers"
DOC = DocumentFingerprint(document_id="doc-1")
COORDS = AnnotationCoordinates(left=10, top=20, width=100, height=50)

ANNOTATIONS = [
    {
        "id": "a1",
        "createdBy": "alice",
        "content": {
            "type": "pspdfkit/note",
            "pageIndex": 0,
            "bbox": [1, 2, 3, 4],
            "createdAt": "2024-05-01",
        },
    },
    {
        "id": "a2",
        "createdBy": "bob",
        "content": {"type": "pspdfkit/markup/highlight", "pageIndex": 2},
    },
    {
        "id": "a3",
        "createdBy": "alice",
        "content": {
            "type": "pspdfkit/text",
            "pageIndex": 2,
            "text": {"format": "plain", "value": "Approved"},
        },
    },
]


@pytest.fixture
def tools(capture_tools, mock_server: MagicMock) -> dict:
    """Register annotation tools."""
    return capture_tools(register_tools, mock_server)


class TestModels:
    """Tests for annotation payload builders."""

    def test_normalize_type(self) -> None:
        """Both namespace prefixes are removed."""
        assert normalize_annotation_type("pspdfkit/markup/highlight") == "highlight"
        assert normalize_annotation_type("pspdfkit/note") == "note"

    def test_highlight_content(self) -> None:
        """Highlights carry rects, color and blend mode."""
        content = build_annotation_content("highlight", 1, COORDS, "check this", "alice")

        assert content["type"] == "pspdfkit/markup/highlight"
        assert content["pageIndex"] == 1
        assert content["bbox"] == [10, 20, 100, 50]
        assert content["rects"] == [[10, 20, 110, 70]]
        assert content["blendMode"] == "multiply"
        assert content["creatorName"] == "alice"

    def test_link_content(self) -> None:
        """Links store the URI as an action."""
        content = build_annotation_content("link", 0, COORDS, "https://example.com")

        assert content["action"] == {"type": "uri", "uri": "https://example.com"}
        assert "creatorName" not in content

    def test_redaction_payload(self) -> None:
        """Each redaction type uses its own strategy."""
        assert redaction_payload("preset", preset="email-address") == {
            "strategy": "preset",
            "strategyOptions": {"preset": "email-address"},
        }
        with pytest.raises(ValueError, match="missing required fields"):
            redaction_payload("regex", text="ignored")

    def test_describe_redaction(self) -> None:
        """Presets are described by their readable name."""
        assert describe_redaction("preset", preset="vin") == "Preset: Vehicle Identification Number"
        assert describe_redaction("regex", pattern=r"\d+") == r"Custom Pattern: \d+"

    def test_filter_annotations(self) -> None:
        """Filters by page, normalized type and author combine."""
        assert [a["id"] for a in filter_annotations(ANNOTATIONS, page_number=2)] == ["a2", "a3"]
        assert [a["id"] for a in filter_annotations(ANNOTATIONS, annotation_type="highlight")] == [
            "a2"
        ]
        assert filter_annotations(ANNOTATIONS, page_number=2, author="alice") == [ANNOTATIONS[2]]


class TestAddAnnotation:
    """Test add_annotation tool."""

    async def test_creates_annotation(self, tools: dict) -> None:
        """The annotation is created and summarized."""
        response = {"data": [{"id": "new-1"}]}
        with (
            patch(f"{LAYERS}.get_document_info", new=AsyncMock(return_value={"title": "Memo"})),
            patch(f"{LAYERS}.create_annotation", new=AsyncMock(return_value=response)) as create,
        ):
            result = await tools["add_annotation"](
                DOC,
                page_number=0,
                annotation_type="note",
                content="Please review",
                coordinates=COORDS,
                author="alice",
            )

        request = create.await_args.args[2]
        assert request["user_id"] == "alice"
        assert request["content"]["type"] == "pspdfkit/note"
        assert "📝 **Annotation ID:** new-1" in result
        assert "- **Type:** Note (Sticky Note)" in result
        assert "- **Page:** 1" in result
        assert "- **Size:** 100.0 × 50.0" in result

    async def test_negative_page(self, tools: dict) -> None:
        """Negative pages are rejected before calling the backend."""
        with patch(f"{LAYERS}.get_document_info", new=AsyncMock()) as info:
            result = await tools["add_annotation"](
                DOC, page_number=-1, annotation_type="note", content="x", coordinates=COORDS
            )

        assert result.startswith("# Error Adding Annotation")
        info.assert_not_awaited()


class TestReadAnnotations:
    """Test read_annotations tool."""

    async def test_groups_by_page(self, tools: dict) -> None:
        """Annotations are grouped per page with summaries."""
        with patch(f"{LAYERS}.get_annotations", new=AsyncMock(return_value=ANNOTATIONS)):
            result = await tools["read_annotations"](DOC)

        assert "📝 **Total Annotations:** 3" in result
        assert "📊 **Pages with Annotations:** 2 (pages 0, 2)" in result
        assert "👥 **Authors:** 2 (alice, bob)" in result
        assert "## Page 2 (2 annotations)" in result
        assert '- **Content:** "Approved"' in result
        assert "- **Location:** (left:1, top:2, width:3, height:4)" in result
        assert "- **alice:** 2 annotations" in result

    async def test_filters_applied(self, tools: dict) -> None:
        """Filters are listed and applied."""
        with patch(f"{LAYERS}.get_annotations", new=AsyncMock(return_value=ANNOTATIONS)):
            result = await tools["read_annotations"](DOC, annotation_type="highlight")

        assert "📝 **Total Annotations:** 1" in result
        assert "- Type: highlight" in result

    async def test_no_match(self, tools: dict) -> None:
        """A filter that matches nothing explains why."""
        with patch(f"{LAYERS}.get_annotations", new=AsyncMock(return_value=ANNOTATIONS)):
            result = await tools["read_annotations"](DOC, author="carol")

        assert "Document has 3 total annotations, but none match" in result
        assert "- Author: carol" in result

    async def test_empty_document(self, tools: dict) -> None:
        """Documents without annotations say so."""
        with patch(f"{LAYERS}.get_annotations", new=AsyncMock(return_value=[])):
            result = await tools["read_annotations"](DOC)

        assert "This document does not contain any annotations." in result


class TestDeleteAnnotations:
    """Test delete_annotations tool."""

    async def test_cancelled(self, tools: dict) -> None:
        """confirm_deletion=False never touches the backend."""
        with patch(f"{LAYERS}.delete_annotation", new=AsyncMock()) as delete:
            result = await tools["delete_annotations"](
                DOC, annotation_ids=["a1"], confirm_deletion=False
            )

        delete.assert_not_awaited()
        assert result.startswith("# Annotation Deletion Cancelled")

    async def test_deletes(self, tools: dict) -> None:
        """Each annotation is looked up then deleted."""
        with (
            patch(f"{LAYERS}.get_annotation", new=AsyncMock(side_effect=ANNOTATIONS[:2])),
            patch(f"{LAYERS}.delete_annotation", new=AsyncMock()) as delete,
        ):
            result = await tools["delete_annotations"](DOC, annotation_ids=["a1", "a2"])

        assert delete.await_count == 2
        assert "✅ **Status:** 2 annotations removed" in result
        assert "### Annotation 2: a2" in result
        assert "- **Type:** pspdfkit/markup/highlight" in result

    async def test_not_found(self, tools: dict) -> None:
        """Missing annotations produce a not-found report."""
        error = DocumentEngineError("Resource not found", code="NOT_FOUND", status_code=404)
        with (
            patch(f"{LAYERS}.get_annotation", new=AsyncMock(side_effect=error)),
            patch(f"{LAYERS}.delete_annotation", new=AsyncMock()) as delete,
        ):
            result = await tools["delete_annotations"](DOC, annotation_ids=["ghost"])

        delete.assert_not_awaited()
        assert result.startswith("# Error: Annotation Not Found")


class TestRedactions:
    """Test create_redaction and apply_redactions tools."""

    async def test_create_redaction(self, tools: dict) -> None:
        """Created redactions are counted per page."""
        created = [{"id": "r1", "pageIndex": 0}, {"id": "r2", "pageIndex": 0}, {"id": "r3"}]
        with patch(f"{LAYERS}.create_redactions", new=AsyncMock(return_value=created)) as create:
            result = await tools["create_redaction"](
                DOC, redaction_type="preset", preset="email-address"
            )

        assert create.await_args.args[2]["strategy"] == "preset"
        assert "🔍 **Redaction IDs:** [r1, r2, r3]" in result
        assert "📊 **Matches Found:** 3 instances" in result
        assert "📄 **Pages Affected:** 1" in result
        assert "### 📋 Pattern: Preset: Email Address" in result
        assert "- **Page 1:** 2 matches detected" in result

    async def test_create_redaction_missing_text(self, tools: dict) -> None:
        """Text redactions need text."""
        result = await tools["create_redaction"](DOC, redaction_type="text")

        assert result.startswith("# Error Creating Redaction")

    async def test_create_redaction_no_matches(self, tools: dict) -> None:
        """No matches yields suggestions."""
        with patch(f"{LAYERS}.create_redactions", new=AsyncMock(return_value=[])):
            result = await tools["create_redaction"](DOC, redaction_type="text", text="secret")

        assert "## No Matches Found" in result
        assert "📄 **Pages Affected:** None" in result

    async def test_apply_redactions(self, tools: dict) -> None:
        """Pending redactions are applied in one call."""
        info = {"title": "Contract", "pageCount": 4}
        with (
            patch(f"{LAYERS}.get_document_info", new=AsyncMock(return_value=info)),
            patch(f"{LAYERS}.apply_redactions", new=AsyncMock()) as apply,
        ):
            result = await tools["apply_redactions"](DOC, redaction_ids=["r1", "r2"])

        apply.assert_awaited_once()
        assert "🔒 **Redactions Applied:** 2 instances" in result
        assert "- **Pages Processed:** 4" in result

    async def test_apply_requires_ids(self, tools: dict) -> None:
        """An empty ID list is rejected."""
        result = await tools["apply_redactions"](DOC, redaction_ids=[])

        assert "At least one non-empty redaction ID is required" in result
