"""MCP Tools for editing documents (split, merge, rotate, pages, watermark)."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Any, Literal
from urllib.parse import urlparse

from mcp.server.fastmcp import FastMCP
from pydantic import BaseModel, Field

from docengine_mcp.clients import layers
from docengine_mcp.models.fingerprint import DocumentFingerprint, PageRange
from docengine_mcp.utils.errors import DocumentEngineError, ToolInputError
from docengine_mcp.utils.formatting import error_response

if TYPE_CHECKING:
    from docengine_mcp.server import DocEngineServer

PageSize = Literal["A0", "A1", "A2", "A3", "A4", "A5", "A6", "A7", "A8", "Letter", "Legal"]

ROTATION_LABELS = {
    90: "Clockwise (90°)",
    180: "Upside down (180°)",
    270: "Counter-clockwise (270°)",
}

SELF = {"id": "#self"}


class MergePart(BaseModel):
    """One source document (or a page range of it) to include in a merge."""

    document_fingerprint: DocumentFingerprint
    page_range: PageRange | None = Field(
        None, description="Range of pages to include with start and end indices (0-based)"
    )


def split_ranges(split_points: list[int], page_count: int) -> list[tuple[int, int]]:
    """Compute the inclusive page ranges produced by splitting at the given pages.

    Each split point is the first page (0-based) of a new section, so
    [3, 7] on a 10-page document yields (0, 2), (3, 6) and (7, 9).

    Raises:
        ToolInputError: If a split point is outside 1..page_count-1.
    """
    points = sorted(set(split_points))
    for point in points:
        if point <= 0 or point >= page_count:
            raise ToolInputError(
                f"Split point {point} is out of bounds (document has {page_count} pages, "
                f"valid split points are 1-{page_count - 1})"
            )
    bounds = [0, *points, page_count]
    return [(bounds[i], bounds[i + 1] - 1) for i in range(len(bounds) - 1)]


def group_pages(pages: list[int]) -> list[str]:
    """Collapse page indices into "Page n" / "Pages a-b" labels."""
    groups: list[list[int]] = []
    for page in sorted(set(pages)):
        if groups and page == groups[-1][-1] + 1:
            groups[-1].append(page)
        else:
            groups.append([page])
    return [f"Page {g[0]}" if len(g) == 1 else f"Pages {g[0]}-{g[-1]}" for g in groups]


def new_page_parts(
    position: int | None, page_count: int, count: int, layout: dict[str, str]
) -> list[dict[str, Any]]:
    """Build instruction parts that insert blank pages at a position."""
    new_pages = {"page": "new", "pageCount": count, "layout": layout}
    if position == 0:
        return [new_pages, {"document": SELF}]
    if position is None or position == page_count:
        return [{"document": SELF}, new_pages]
    return [
        {"document": SELF, "pages": {"start": 0, "end": position - 1}},
        new_pages,
        {"document": SELF, "pages": {"start": position, "end": -1}},
    ]


def _part_description(index: int, total: int) -> str:
    if index == 0:
        return "First part"
    if index == total - 1:
        return "Final part"
    return "Middle part"


def _strip_extension(title: str) -> str:
    stem, dot, _ = title.rpartition(".")
    return stem if dot and stem else title


def _elapsed(started: float) -> str:
    return f"{time.monotonic() - started:.1f} seconds"


def register_tools(mcp: FastMCP, server: DocEngineServer) -> None:
    """Register editing tools with the MCP server."""

    @mcp.tool()
    async def split_document(
        document_fingerprint: DocumentFingerprint,
        split_points: list[int],
        naming_pattern: str = "part_{index}",
    ) -> str:
        """Split a document into separate documents at the given pages.

        Each split point is the first page of a new section (0-based).
        For example [3, 7] creates three documents: pages 0-2, 3-6 and 7-end.

        Args:
            document_fingerprint: Document identifier with optional layer.
            split_points: Page numbers where new sections begin.
            naming_pattern: Title pattern for the parts; {index} is 1-based.
        """
        fp = document_fingerprint
        try:
            if not split_points:
                raise ToolInputError("At least one split point is required")
            info = await layers.get_document_info(server.client, fp)
            page_count = int(info.get("pageCount", 0))
            title = info.get("title") or f"Document {fp.document_id}"
            ranges = split_ranges(split_points, page_count)

            targets = [fp]
            for _ in ranges[1:]:
                copy_id = await layers.copy_document(server.client, fp)
                targets.append(DocumentFingerprint(document_id=copy_id))

            lines = [
                "# Document Split Complete",
                "",
                f"📄 **Original Document:** {title}  ",
                f"✂️ **Split into:** {len(ranges)} parts  ",
                f"📊 **Total Pages Processed:** {page_count}  ",
                "",
                "---",
                "",
                "## Document Parts Created",
                "",
            ]
            for index, ((start, end), target) in enumerate(zip(ranges, targets)):
                await layers.apply_instructions(
                    server.client,
                    target,
                    {"parts": [{"document": SELF, "pages": {"start": start, "end": end}}]},
                )
                part_name = naming_pattern.replace("{index}", str(index + 1))
                lines.append(f"### 📄 Part {index + 1}: {_strip_extension(title)}_{part_name}.pdf")
                lines.append(f"- **Document ID:** {target.document_id}")
                if target.layer:
                    lines.append(f"- **Layer:** {target.layer}")
                lines.append(f"- **Pages:** {start}-{end} ({end - start + 1} pages)")
                lines += [f"- **Content:** {_part_description(index, len(ranges))}", ""]

            lines += [
                "---",
                "",
                "## Processing Summary",
                f"- **Split Points Used:** {', '.join(str(p) for p in sorted(set(split_points)))}",
                f"- **Success:** All {len(ranges)} parts created successfully",
                "",
                "💡 **Tip:** Keep track of the document IDs above for further operations "
                "on individual parts.",
            ]
            return "\n".join(lines)
        except Exception as e:
            return error_response("Splitting Document", e)

    @mcp.tool()
    async def add_watermark(
        document_fingerprint: DocumentFingerprint,
        watermark_type: Literal["text", "image"],
        content: str,
        opacity: float = 0.7,
        rotation: float = 0,
    ) -> str:
        """Add a text or image watermark to every page of a document.

        Args:
            document_fingerprint: Document identifier with optional layer.
            watermark_type: Whether content is watermark text or an image URL.
            content: Watermark text, or the URL of the watermark image.
            opacity: Opacity between 0 and 1.
            rotation: Rotation of the watermark in counterclockwise degrees.
        """
        fp = document_fingerprint
        started = time.monotonic()
        try:
            if not content:
                raise ToolInputError("Content is required (text content or image URL)")
            if not 0 <= opacity <= 1:
                raise ToolInputError("Opacity must be between 0 and 1")
            info = await layers.get_document_info(server.client, fp)
            page_count = info.get("pageCount", 0)

            action: dict[str, Any] = {"type": "watermark", "opacity": opacity, "rotation": rotation}
            if watermark_type == "text":
                action.update(text=content, width="100%", height="100%")
            else:
                url = urlparse(content)
                if not url.scheme or not url.netloc:
                    raise ToolInputError("Invalid image URL provided")
                action.update(image={"url": content}, width="25%", height="15%")

            await layers.apply_instructions(
                server.client, fp, {"parts": [{"document": SELF}], "actions": [action]}
            )

            lines = [
                "# Watermark Applied Successfully",
                "",
                "✅ **Status:** Watermark added to all pages  ",
                f"📄 **Document ID:** {fp.document_id}  ",
            ]
            if fp.layer:
                lines.append(f"🔀 **Layer:** {fp.layer}  ")
            shown = f'"{content}"' if watermark_type == "text" else f"Image from {content}"
            lines += [
                f"📊 **Pages Watermarked:** {page_count}  ",
                "",
                "---",
                "",
                "## Watermark Details",
                f"- **Type:** {watermark_type.capitalize()} watermark",
                f"- **Content:** {shown}",
                f"- **Rotation:** {rotation:g}°",
                f"- **Opacity:** {round(opacity * 100)}%",
                "",
                "---",
                "",
                "## Application Summary",
                f"- **Pages Processed:** {page_count}/{page_count}",
                f"- **Processing Time:** {_elapsed(started)}",
                "- **Status:** Complete",
                "",
            ]
            return "\n".join(lines)
        except Exception as e:
            return error_response("Adding Watermark", e)

    @mcp.tool()
    async def duplicate_document(document_fingerprint: DocumentFingerprint) -> str:
        """Duplicate a document with all its content.

        When a layer is given, that layer is copied into a new document.

        Args:
            document_fingerprint: Document identifier with optional layer.
        """
        fp = document_fingerprint
        try:
            info = await layers.get_document_info(server.client, fp)
            new_id = await layers.copy_document(server.client, fp)
            if not new_id:
                raise DocumentEngineError("Invalid response from Document Engine API")
            lines = [
                "# Document Duplicated Successfully",
                "",
                "✅ **Status:** Document copied successfully  ",
                f"📄 **Original Document ID:** {fp.document_id}  ",
            ]
            if fp.layer:
                lines.append(f"🔀 **Original Layer:** {fp.layer}  ")
            lines += [
                f"📄 **New Document ID:** {new_id}  ",
                "",
                "---",
                "",
                "## What Was Copied",
                f"- ✅ **All Pages:** {info.get('pageCount', 0)} pages copied",
                "- ✅ **Text Content:** All text preserved",
                "- ✅ **Annotations:** Annotations were copied",
                "",
            ]
            return "\n".join(lines)
        except Exception as e:
            return error_response("Duplicating Document", e)

    @mcp.tool()
    async def add_new_page(
        document_fingerprint: DocumentFingerprint,
        position: int | None = None,
        page_size: PageSize = "A4",
        orientation: Literal["portrait", "landscape"] = "portrait",
        count: int = 1,
    ) -> str:
        """Add blank pages to a document.

        Args:
            document_fingerprint: Document identifier with optional layer.
            position: Where to insert (0-based index); defaults to the end.
            page_size: Paper size of the new pages.
            orientation: Page orientation.
            count: Number of new pages to add.
        """
        fp = document_fingerprint
        started = time.monotonic()
        try:
            if count < 1:
                raise ToolInputError("count must be at least 1")
            info = await layers.get_document_info(server.client, fp)
            page_count = int(info.get("pageCount", 0))
            if position is not None and (position < 0 or position > page_count):
                raise ToolInputError(
                    f"Position {position} is out of bounds (document has {page_count} pages)"
                )
            layout = {"size": page_size, "orientation": orientation}
            await layers.apply_instructions(
                server.client, fp, {"parts": new_page_parts(position, page_count, count, layout)}
            )
            updated = await layers.get_document_info(server.client, fp)

            noun = "Pages" if count > 1 else "Page"
            where = (
                f"at position {position} (0-based index)"
                if position is not None
                else f"at the end (position {page_count})"
            )
            lines = [
                f"# New {noun} Added Successfully",
                "",
                f"✅ **Status:** {count} new {noun.lower()} added  ",
                f"📄 **Document Title:** {updated.get('title') or f'Document {fp.document_id}'}  ",
                f"📊 **New Page Count:** {updated.get('pageCount', page_count + count)}  ",
                "",
                "---",
                "",
                "## Page Details",
                f"- **Page Size:** {page_size}",
                f"- **Orientation:** {orientation.capitalize()}",
                f"- **Position:** {where}",
                "",
                "---",
                "",
                "## Operation Summary",
                f"- **Original Page Count:** {page_count}",
                f"- **Pages Added:** {count}",
                f"- **Processing Time:** {_elapsed(started)}",
                "- **Status:** Complete",
                "",
            ]
            return "\n".join(lines)
        except Exception as e:
            return error_response("Adding New Page", e)

    @mcp.tool()
    async def rotate_pages(
        document_fingerprint: DocumentFingerprint,
        pages: list[int],
        rotation: Literal[90, 180, 270],
    ) -> str:
        """Rotate pages in 90 degree increments.

        Args:
            document_fingerprint: Document identifier with optional layer.
            pages: Page indices to rotate (0-based).
            rotation: Rotation angle in degrees (90, 180 or 270).
        """
        fp = document_fingerprint
        started = time.monotonic()
        try:
            if not pages:
                raise ToolInputError("At least one page is required")
            info = await layers.get_document_info(server.client, fp)
            page_count = int(info.get("pageCount", 0))
            for page in pages:
                if page < 0 or page >= page_count:
                    raise ToolInputError(
                        f"Page index {page} is out of bounds (document has {page_count} pages, "
                        f"valid indices are 0-{page_count - 1})"
                    )
            selected = set(pages)
            rotate = [{"type": "rotate", "rotateBy": rotation}]
            parts = []
            for index in range(page_count):
                part: dict[str, Any] = {"document": SELF, "pages": {"start": index, "end": index}}
                if index in selected:
                    part["actions"] = rotate
                parts.append(part)
            await layers.apply_instructions(server.client, fp, {"parts": parts})

            lines = [
                "# Pages Rotated Successfully",
                "",
                "✅ **Status:** Pages rotated  ",
                f"📄 **Document ID:** {fp.document_id}  ",
            ]
            if fp.layer:
                lines.append(f"🏷️ **Layer:** {fp.layer}  ")
            lines += [
                f"📊 **Pages Rotated:** {len(selected)} page{'' if len(selected) == 1 else 's'}  ",
                f"🔄 **Rotation Applied:** {rotation}°  ",
                "",
                "---",
                "",
                "## Rotation Details",
                f"- **Rotation:** {ROTATION_LABELS[rotation]}",
                f"- **Detailed Page List:** {', '.join(group_pages(pages))}",
                "",
                "---",
                "",
                "## Operation Summary",
                f"- **Total Document Pages:** {page_count}",
                f"- **Pages Rotated:** {len(selected)}/{page_count}",
                f"- **Processing Time:** {_elapsed(started)}",
                "- **Status:** Complete",
                "",
            ]
            return "\n".join(lines)
        except Exception as e:
            return error_response("Rotating Pages", e)

    @mcp.tool()
    async def merge_document_pages(
        parts: list[MergePart],
        title: str = "Merged Document",
    ) -> str:
        """Merge documents, or page ranges of them, into a new document.

        The order of parts is the page order of the merged document.

        Args:
            parts: Source documents with optional page ranges.
            title: Title for the merged document.
        """
        started = time.monotonic()
        try:
            if not parts:
                raise ToolInputError("At least one document part is required")
            infos: dict[tuple[str, str | None], dict[str, Any]] = {}
            build_parts = []
            total_pages = 0
            for part in parts:
                fp = part.document_fingerprint
                key = (fp.document_id, fp.layer)
                if key not in infos:
                    infos[key] = await layers.get_document_info(server.client, fp)
                page_count = int(infos[key].get("pageCount", 0))
                document: dict[str, Any] = {"id": fp.document_id}
                if fp.layer:
                    document["layer"] = fp.layer
                build_part: dict[str, Any] = {"document": document}
                if part.page_range:
                    try:
                        selected = part.page_range.resolve(page_count)
                    except ValueError as e:
                        raise ToolInputError(str(e)) from e
                    build_part["pages"] = part.page_range.as_part_pages()
                    total_pages += len(selected)
                else:
                    total_pages += page_count
                build_parts.append(build_part)

            created = await layers.create_document_from_instructions(
                server.client, {"parts": build_parts}, title
            )
            new_id = created.get("document_id")
            if not new_id:
                raise DocumentEngineError("Invalid response from Document Engine API")

            lines = [
                "# Documents Merged Successfully",
                "",
                "✅ **Status:** Documents merged  ",
                f"📄 **New Document ID:** {new_id}  ",
                f"📑 **Document Title:** {title}  ",
                f"📊 **Total Pages:** {total_pages}  ",
                "",
                "---",
                "",
                "## Document Parts",
            ]
            for index, part in enumerate(parts, start=1):
                fp = part.document_fingerprint
                info = infos[(fp.document_id, fp.layer)]
                lines.append(f"### Part {index}: {info.get('title') or f'Document {index}'}")
                lines.append(f"- **Document ID:** {fp.document_id}")
                if fp.layer:
                    lines.append(f"- **Layer Name:** {fp.layer}")
                lines.append(f"- **Total Pages:** {info.get('pageCount', 0)}")
                if part.page_range:
                    lines.append(f"- **Page Range:** {part.page_range.describe()}")
                lines.append("")
            lines += [
                "---",
                "",
                "## Operation Summary",
                f"- **Documents Merged:** {len(parts)}",
                f"- **Processing Time:** {_elapsed(started)}",
                "- **Status:** Complete",
                "",
            ]
            return "\n".join(lines)
        except Exception as e:
            return error_response("Merging Documents", e)
