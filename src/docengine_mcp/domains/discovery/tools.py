"""MCP Tools for document discovery."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Literal

from mcp.server.fastmcp import FastMCP

from docengine_mcp.clients import layers
from docengine_mcp.models.fingerprint import DocumentFingerprint
from docengine_mcp.utils.errors import DocumentEngineError
from docengine_mcp.utils.formatting import error_response, format_file_size

if TYPE_CHECKING:
    from docengine_mcp.server import DocEngineServer

logger = logging.getLogger(__name__)

_METADATA_FIELDS = [
    ("title", "Title"),
    ("author", "Author"),
    ("subject", "Subject"),
    ("keywords", "Keywords"),
    ("creator", "Creator"),
    ("producer", "Producer"),
    ("dateCreated", "Creation Date"),
    ("dateModified", "Modification Date"),
]

_PERMISSION_FIELDS = [
    ("annotationAndForms", "Annotation and Forms"),
    ("assemble", "Assemble Document"),
    ("extract", "Extract Content"),
    ("extractAccessibility", "Extract for Accessibility"),
    ("fillForms", "Fill Forms"),
    ("modification", "Modify Document"),
    ("print", "Print"),
    ("printHighQuality", "High Quality Printing"),
]


def register_tools(mcp: FastMCP, server: DocEngineServer) -> None:
    """Register discovery tools with the MCP server."""

    @mcp.tool()
    async def list_documents(
        limit: int = 10,
        offset: int = 0,
        sort_by: Literal["created_at", "title"] = "created_at",
        sort_order: Literal["asc", "desc"] = "desc",
        cursor: str | None = None,
        title: str | None = None,
        count_remaining: bool = False,
    ) -> str:
        """List documents stored in Document Engine with their layers.

        Args:
            limit: Maximum number of documents to return.
            offset: Number of documents to skip.
            sort_by: Field to sort by.
            sort_order: Sort order.
            cursor: Pagination cursor for fetching next/previous page.
            title: Filter documents by title.
            count_remaining: Include count of remaining documents.

        Returns:
            Markdown list of documents with IDs, sizes and available layers.
        """
        try:
            response = await layers.list_documents(
                server.client,
                {
                    "page_size": limit,
                    "order_by": sort_by,
                    "order_direction": sort_order,
                    "count_remaining": count_remaining,
                    "cursor": cursor,
                    "title": title,
                },
            )
            documents: list[dict[str, Any]] = response.get("data") or []
            if offset:
                documents = documents[offset:]

            lines = ["# Document List", ""]
            found = f"Found {response.get('document_count', len(documents))} documents"
            if count_remaining:
                found += (
                    f" ({response.get('prev_document_count', 0)} before, "
                    f"{response.get('next_document_count', 0)} after current page)"
                )
            lines += [found + ":", ""]

            prev_cursor = response.get("prev_cursor")
            next_cursor = response.get("next_cursor")
            if prev_cursor or next_cursor:
                lines.append("## Pagination")
                if prev_cursor:
                    lines.append(f"- **Previous Page Cursor:** `{prev_cursor}`")
                if next_cursor:
                    lines.append(f"- **Next Page Cursor:** `{next_cursor}`")
                lines.append("")

            for doc in documents:
                doc_id = doc.get("id") or doc.get("document_id", "")
                lines.append(f"## Title: {doc.get('title') or 'Untitled Document'}")
                lines.append(f"- **Document ID:** {doc_id}")
                if doc.get("createdAt"):
                    lines.append(f"- **Created:** {doc['createdAt']}")
                if doc.get("byteSize") is not None:
                    lines.append(f"- **Size:** {format_file_size(doc['byteSize'])}")
                try:
                    doc_layers = await layers.list_layers(server.client, doc_id)
                    lines.append(f"- **Available Layers:** {', '.join(doc_layers) or 'None'}")
                except DocumentEngineError as e:
                    logger.debug(f"Could not list layers for {doc_id}: {e}")
                    lines.append("- **Available Layers:** Error fetching layers")
                lines.append("")

            if not documents:
                lines += ["No documents found.", ""]
            lines += [
                "---",
                "",
                "When responding to the user you should refer to the documents with their titles.",
            ]
            return "\n".join(lines)
        except Exception as e:
            return error_response("Listing Documents", e)

    @mcp.tool()
    async def read_document_info(
        document_fingerprint: DocumentFingerprint,
        include_metadata: bool = False,
    ) -> str:
        """Read document information such as page count, metadata and permissions.

        Args:
            document_fingerprint: Document identifier with optional layer.
            include_metadata: Whether to include document metadata.

        Returns:
            Markdown summary of the document.
        """
        fp = document_fingerprint
        try:
            if fp.layer:
                try:
                    available = await layers.list_layers(server.client, fp.document_id)
                except DocumentEngineError as e:
                    # Documents without layer support still answer document_info
                    logger.debug(f"Could not verify layer {fp.layer}: {e}")
                else:
                    if fp.layer not in available:
                        return error_response(
                            "Reading Document Information",
                            f"Layer '{fp.layer}' does not exist for document "
                            f"'{fp.document_id}'.\n\nAvailable layers: "
                            f"{', '.join(available) or 'None'}",
                        )

            info = await layers.get_document_info(server.client, fp)

            lines = ["# Document Information", ""]
            lines.append(f"**Document ID:** {fp.document_id}  ")
            if fp.layer:
                lines.append(f"**Layer:** {fp.layer}  ")
            lines.append(f"**Pages:** {info.get('pageCount') or 0}  ")
            lines.append("**Content Type:** application/pdf  ")

            if include_metadata:
                lines += ["", "## Metadata"]
                metadata = info.get("metadata") or {}
                for key, label in _METADATA_FIELDS:
                    if metadata.get(key):
                        lines.append(f"- **{label}:** {metadata[key]}")
                if info.get("hasXFA"):
                    lines.append("- **Has XFA Forms:** Yes")

                permissions = info.get("permissions") or {}
                if permissions:
                    lines += ["", "### Permissions"]
                    for key, label in _PERMISSION_FIELDS:
                        value = permissions.get(key)
                        if isinstance(value, bool):
                            lines.append(f"- **{label}:** {'Allowed' if value else 'Not Allowed'}")

                pages = info.get("pages") or []
                if pages:
                    lines += ["", "### Pages"]
                    for index, page in enumerate(pages):
                        lines.append(
                            f"- **Page {index + 1}:** Width: {page.get('width')}, "
                            f"Height: {page.get('height')}"
                        )

            return "\n".join(lines) + "\n"
        except Exception as e:
            return error_response("Reading Document Information", e)
