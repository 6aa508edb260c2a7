"""MCP Tools for extracting content from documents."""

from __future__ import annotations

import asyncio
import json
from collections import defaultdict
from typing import TYPE_CHECKING, Any, Literal

from mcp.server.fastmcp import FastMCP, Image

from docengine_mcp.clients import layers
from docengine_mcp.models.fingerprint import DocumentFingerprint, PageRange
from docengine_mcp.utils.errors import ToolInputError
from docengine_mcp.utils.formatting import error_response, format_bbox

if TYPE_CHECKING:
    from docengine_mcp.server import DocEngineServer

DEFAULT_RENDER_WIDTH = 800


def count_words(text: str) -> int:
    """Count whitespace-separated words."""
    return len(text.split())


def _layer_line(fp: DocumentFingerprint) -> list[str]:
    return [f"🔀 **Layer:** {fp.layer}  "] if fp.layer else []


def _json_content_instructions(
    fp: DocumentFingerprint,
    page_range: PageRange | None,
    tables: bool = False,
    key_value_pairs: bool = False,
) -> dict[str, Any]:
    document: dict[str, Any] = {"id": fp.document_id}
    if fp.layer:
        document["layer"] = fp.layer
    part: dict[str, Any] = {"document": document}
    if page_range is not None:
        part["pages"] = page_range.as_part_pages()
    return {
        "parts": [part],
        "output": {
            "type": "json-content",
            "plainText": False,
            "structuredText": False,
            "keyValuePairs": key_value_pairs,
            "tables": tables,
        },
    }


def render_table(cells: list[dict[str, Any]]) -> list[str]:
    """Render extracted table cells as a markdown table."""
    rows: dict[int, list[dict[str, Any]]] = defaultdict(list)
    for cell in cells:
        rows[cell.get("rowIndex", 0)].append(cell)
    max_col = max(cell.get("columnIndex", 0) for cell in cells)

    header = "| " + " | ".join(f"Column {i + 1}" for i in range(max_col + 1)) + " |"
    separator = "| " + " | ".join("---" for _ in range(max_col + 1)) + " |"
    lines = [header, separator]
    for row_index in sorted(rows):
        by_col = {cell.get("columnIndex", 0): cell.get("text") or "" for cell in rows[row_index]}
        lines.append("| " + " | ".join(by_col.get(i, "") for i in range(max_col + 1)) + " |")
    return lines


def register_tools(mcp: FastMCP, server: DocEngineServer) -> None:
    """Register extraction tools with the MCP server."""

    @mcp.tool()
    async def extract_text(
        document_fingerprint: DocumentFingerprint,
        page_range: PageRange | None = None,
        include_coordinates: bool = False,
        ocr_enabled: bool = False,
    ) -> str:
        """Extract text content from a document, optionally with OCR and coordinates.

        Args:
            document_fingerprint: Document identifier with optional layer.
            page_range: Range of pages to include with start and end indices (0-based).
            include_coordinates: Whether to include text coordinates.
            ocr_enabled: Whether to enable OCR for text extraction.
        """
        fp = document_fingerprint
        try:
            info = await layers.get_document_info(server.client, fp)
            page_count = info.get("pageCount") or 0
            if page_range is not None:
                try:
                    indices = page_range.resolve(page_count)
                except ValueError as e:
                    raise ToolInputError(str(e)) from e
            else:
                indices = list(range(page_count))

            page_lines = await asyncio.gather(
                *(layers.get_page_text(server.client, fp, i, ocr_enabled) for i in indices)
            )
            page_words = [
                sum(count_words(line.get("contents", "")) for line in text_lines)
                for text_lines in page_lines
            ]

            lines = ["# Text Extraction", ""]
            lines.append(f"📄 **Document ID:** {fp.document_id}  ")
            lines += _layer_line(fp)
            lines.append(f"📄 **Total Pages:** {page_count}  ")
            lines.append(f"📝 **Total Words:** {sum(page_words):,}  ")
            lines.append(f"🔍 **OCR Applied:** {'Yes' if ocr_enabled else 'No'}  ")
            processed = page_range.describe() if page_range is not None else "All pages"
            lines.append(f"📖 **Pages Processed:** {processed}  ")
            lines += ["", "---", ""]

            for index, text_lines, words in zip(indices, page_lines, page_words):
                number = index + 1
                lines.append(f"## Page {number} ({words} words)")
                if include_coordinates or ocr_enabled:
                    coords = [
                        {
                            "contents": line.get("contents", ""),
                            "boundingBox": format_bbox(
                                [
                                    line.get("left") or 0,
                                    line.get("top") or 0,
                                    line.get("width") or 0,
                                    line.get("height") or 0,
                                ]
                            ),
                        }
                        for line in text_lines
                    ]
                    lines.append(f"### Coordinates for Page {number}")
                    rendered = json.dumps(coords, indent=2, ensure_ascii=False)
                    lines += ["```json", rendered, "```", ""]
                else:
                    lines += [" ".join(line.get("contents", "") for line in text_lines), ""]

            lines += [
                "---",
                "",
                "💡 **Tip:** Use `extract_form_data` if this document contains fillable forms.",
            ]
            return "\n".join(lines)
        except Exception as e:
            return error_response("Extracting Text", e)

    @mcp.tool()
    async def search(
        document_fingerprint: DocumentFingerprint,
        query: str,
        search_type: Literal["text", "regex", "preset"] = "text",
        start_page: int = 0,
        end_page: int | None = None,
        include_annotations: bool = False,
        case_sensitive: bool | None = None,
    ) -> str:
        """Search a document for text, a regex pattern or a preset (e.g. email-address).

        Args:
            document_fingerprint: Document identifier with optional layer.
            query: The search query: text, regex pattern, or preset name.
            search_type: Type of search to perform.
            start_page: Page index to start search from (0-based).
            end_page: Last page index to include in search (0-based).
            include_annotations: Whether to search inside annotations.
            case_sensitive: Override default case sensitivity (default depends on search_type).
        """
        fp = document_fingerprint
        try:
            if start_page < 0 or (end_page is not None and end_page < 0):
                raise ToolInputError("Page indices must be 0 or greater")
            info = await layers.get_document_info(server.client, fp)
            page_count = info.get("pageCount") or 0
            title = info.get("title") or "Untitled Document"
            last_page = min(end_page, page_count - 1) if end_page is not None else page_count - 1

            results = await layers.search_document(
                server.client,
                fp,
                {
                    "q": query,
                    "type": search_type,
                    "start": start_page,
                    # the API takes the last page + 1 as its limit
                    "limit": last_page + 1,
                    "include_annotations": include_annotations,
                    "case_sensitive": case_sensitive,
                },
            )

            if case_sensitive is None:
                sensitive = "No" if search_type == "text" else "Yes"
            else:
                sensitive = "Yes" if case_sensitive else "No"

            lines = ["# Search Results", ""]
            lines.append(f"📄 **Document:** {title}  ")
            lines.append(f"📄 **Document ID:** {fp.document_id}  ")
            lines += _layer_line(fp)
            lines.append(f'🔍 **Query:** "{query}"  ')
            lines.append(f"🔎 **Search Type:** {search_type}  ")
            lines.append(f"📋 **Results Found:** {len(results)}  ")
            lines.append(
                f"📑 **Pages Searched:** {start_page} to {last_page} (of {page_count} total)  "
            )
            lines.append(f"🔠 **Case Sensitive:** {sensitive}  ")
            lines.append(f"📝 **Include Annotations:** {'Yes' if include_annotations else 'No'}  ")
            lines.append("")

            if not results:
                lines += [
                    "## No Results Found",
                    "",
                    f'No matches were found for "{query}" in the specified page range.',
                    "",
                    "### Suggestions:",
                    "",
                    "- Check for typos in your search query",
                    "- Try a different search type (text, regex, or preset)",
                    "- Expand your search to include more pages",
                    "- Try a more general search term",
                    "",
                ]
            else:
                lines += ["---", "", "## Results", ""]
                by_page: dict[int, list[dict[str, Any]]] = defaultdict(list)
                for result in results:
                    by_page[result.get("pageIndex", 0)].append(result)

                for page_index in sorted(by_page):
                    hits = by_page[page_index]
                    noun = "match" if len(hits) == 1 else "matches"
                    lines += [f"### Page {page_index + 1} ({len(hits)} {noun})", ""]
                    for number, hit in enumerate(hits, 1):
                        preview = hit.get("previewText") or "No preview available"
                        span = hit.get("rangeInPreview")
                        lines += [f"**Match {number}:**", ""]
                        if hit.get("previewText") and span:
                            start, length = span[0], span[1]
                            highlighted = (
                                f"{preview[:start]}**{preview[start:start + length]}**"
                                f"{preview[start + length:]}"
                            )
                            lines += [f'"{highlighted}"', ""]
                        else:
                            lines += [f'"{preview}"', ""]
                        rects = hit.get("rectsOnPage") or []
                        if rects:
                            word = "occurrence" if len(rects) == 1 else "occurrences"
                            lines += [f"Location: {len(rects)} {word} on page", ""]
                    lines += ["---", ""]

            lines += [
                "💡 **Tips:**",
                "",
                "- Use `extract_text` to view the full text content of specific pages",
                "- Use `add_annotation` to highlight or mark important search results",
            ]
            return "\n".join(lines)
        except Exception as e:
            return error_response("Searching Document", e)

    @mcp.tool()
    async def extract_tables(
        document_fingerprint: DocumentFingerprint,
        page_range: PageRange | None = None,
    ) -> str:
        """Extract tables from a document as markdown tables.

        Args:
            document_fingerprint: Document identifier with optional layer.
            page_range: Range of pages to include with start and end indices (0-based).
        """
        fp = document_fingerprint
        try:
            info = await layers.get_document_info(server.client, fp)
            output = await layers.build_document(
                server.client, _json_content_instructions(fp, page_range, tables=True)
            )
            pages = (output or {}).get("pages") or []
            tables = [
                (page_index, table)
                for page_index, page in enumerate(pages)
                for table in page.get("tables") or []
            ]

            lines = ["# Table Extraction", ""]
            lines.append(f"📄 **Document:** {info.get('title') or 'Untitled Document'}  ")
            lines.append(f"📄 **Document ID:** {fp.document_id}  ")
            lines += _layer_line(fp)
            lines.append(f"📑 **Total Pages:** {info.get('pageCount') or 0}  ")
            processed = page_range.describe() if page_range is not None else "All pages"
            lines.append(f"📖 **Pages Processed:** {processed}  ")
            lines.append(f"📋 **Tables Found:** {len(tables)}  ")
            lines += ["", "---", ""]

            if not tables:
                lines += [
                    "## No Tables Found",
                    "",
                    "No tables were detected in the document. This could be because:",
                    "",
                    "- The document doesn't contain any tables",
                    "- The tables are represented as images and not as structured data",
                    "- The table detection algorithm couldn't recognize the tables",
                    "",
                ]
            else:
                lines += ["## Extracted Tables", ""]
                for number, (page_index, table) in enumerate(tables, 1):
                    lines += [f"### Table {number} (Page {page_index + 1})", ""]
                    cells = table.get("cells") or []
                    if cells:
                        lines += render_table(cells)
                    else:
                        lines.append("*Table structure detected but no cells were found*")
                    lines.append("")
            return "\n".join(lines)
        except Exception as e:
            return error_response("Extracting Tables", e)

    @mcp.tool()
    async def extract_key_value_pairs(
        document_fingerprint: DocumentFingerprint,
        page_range: PageRange | None = None,
    ) -> str:
        """Extract key-value pairs (phone numbers, dates, amounts, ...) using document analysis.

        Args:
            document_fingerprint: Document identifier with optional layer.
            page_range: Range of pages to include with start and end indices (0-based).
        """
        fp = document_fingerprint
        try:
            info = await layers.get_document_info(server.client, fp)
            output = await layers.build_document(
                server.client, _json_content_instructions(fp, page_range, key_value_pairs=True)
            )
            pages = (output or {}).get("pages") or []
            total = sum(len(page.get("keyValuePairs") or []) for page in pages)

            lines = ["# Key-Value Pair Extraction", ""]
            lines.append(f"📄 **Document:** {info.get('title') or 'Untitled Document'}  ")
            lines.append(f"📄 **Document ID:** {fp.document_id}  ")
            lines += _layer_line(fp)
            lines.append(f"📑 **Total Pages:** {info.get('pageCount') or 0}  ")
            processed = page_range.describe() if page_range is not None else "All pages"
            lines.append(f"📖 **Pages Processed:** {processed}  ")
            lines.append(f"🔑 **Key-Value Pairs Extracted:** {total}  ")
            lines += ["", "---", "", "## Extracted Key-Value Pairs", ""]

            if total == 0:
                lines += [
                    "No key-value pairs were extracted from the document. This could be because:",
                    "",
                    "- The document doesn't contain structured key-value data",
                    "- The document analysis couldn't recognize any key-value pairs",
                    "- The document pages are blank or contain only unstructured text",
                    "",
                ]
            else:
                lines += ["| Key | Value | Page |", "| --- | ----- | ---- |"]
                for page in pages:
                    for pair in page.get("keyValuePairs") or []:
                        key = ((pair.get("key") or {}).get("content") or "").replace("|", "\\|")
                        value = ((pair.get("value") or {}).get("content") or "").replace(
                            "|", "\\|"
                        )
                        lines.append(f"| {key} | {value} | {page.get('pageIndex') or 0} |")
                lines.append("")
            return "\n".join(lines)
        except Exception as e:
            return error_response("Extracting Key-Value Pairs", e)

    @mcp.tool(structured_output=False)
    async def render_document_page(
        document_fingerprint: DocumentFingerprint,
        pages: list[int],
        width: int | None = None,
        height: int | None = None,
    ) -> list[str | Image] | str:
        """Render one or more pages of a document as PNG images.

        Args:
            document_fingerprint: Document identifier with optional layer.
            pages: Array of page indices to render (0-based).
            width: Width of the rendered image in pixels (default 800 when
                neither width nor height is given).
            height: Height of the rendered image in pixels.
        """
        fp = document_fingerprint
        try:
            info = await layers.get_document_info(server.client, fp)
            page_count = info.get("pageCount") or 0
            for index in pages:
                if index < 0 or index >= page_count:
                    raise ToolInputError(
                        f"Page index {index} is out of bounds (document has {page_count} "
                        f"pages, valid indices are 0-{page_count - 1})"
                    )

            if width is not None:
                render_width, render_height = width, None
                dimensions = f"Width: {width}px"
            elif height is not None:
                render_width, render_height = None, height
                dimensions = f"Height: {height}px"
            else:
                render_width, render_height = DEFAULT_RENDER_WIDTH, None
                dimensions = f"Width: {DEFAULT_RENDER_WIDTH}px (default)"

            images = await asyncio.gather(
                *(
                    layers.render_page(server.client, fp, index, render_width, render_height)
                    for index in pages
                )
            )

            page_infos = info.get("pages") or []
            lines = ["# Document Page Render", ""]
            lines.append(f"📄 **Document ID:** {fp.document_id}")
            if fp.layer:
                lines.append(f"🔀 **Layer:** {fp.layer}")
            lines.append(
                f"📄 **Total Pages Rendered:** {len(pages)} of {page_count} total pages"
            )
            lines.append("🖼️ **Image Format:** image/png")
            lines += [f"📏 **Dimensions:** {dimensions}", "", "## Page Details", ""]
            for position, index in enumerate(pages):
                page_info = page_infos[index] if index < len(page_infos) else {}
                size = (
                    f"{page_info['width']} × {page_info['height']} points"
                    if page_info.get("width") and page_info.get("height")
                    else "Unknown"
                )
                lines.append(f"### Page {index + 1} of {page_count}")
                lines += [f"📐 **Original Page Size:** {size}", ""]
                if position < len(pages) - 1:
                    lines += ["---", ""]

            content: list[str | Image] = ["\n".join(lines)]
            content += [Image(data=png, format="png") for png in images]
            return content
        except Exception as e:
            return error_response("Rendering Pages", e)
