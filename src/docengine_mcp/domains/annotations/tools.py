"""MCP Tools for annotations and redactions."""

from __future__ import annotations

import asyncio
from collections import Counter, defaultdict
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Literal

from mcp.server.fastmcp import FastMCP

from docengine_mcp.clients import layers
from docengine_mcp.domains.annotations.models import (
    ANNOTATION_EMOJI,
    AnnotationCoordinates,
    AnnotationType,
    RedactionPreset,
    annotation_label,
    build_annotation_content,
    describe_redaction,
    normalize_annotation_type,
    redaction_payload,
)
from docengine_mcp.models.fingerprint import DocumentFingerprint
from docengine_mcp.utils.errors import DocumentEngineError
from docengine_mcp.utils.formatting import error_response, format_bbox

if TYPE_CHECKING:
    from docengine_mcp.server import DocEngineServer


def _fingerprint_lines(fp: DocumentFingerprint) -> list[str]:
    lines = [f"📄 **Document ID:** {fp.document_id}  "]
    if fp.layer:
        lines.append(f"🔀 **Layer:** {fp.layer}  ")
    return lines


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" + ("" if count == 1 else "s")


def _created_id(response: Any) -> str:
    data = response.get("data") if isinstance(response, dict) else None
    if isinstance(data, list) and data and isinstance(data[0], dict):
        return str(data[0].get("id") or "Unknown")
    if isinstance(data, dict):
        return str(data.get("annotation_id") or data.get("id") or "Unknown")
    return "Unknown"


def filter_annotations(
    annotations: list[dict[str, Any]],
    page_number: int | None = None,
    annotation_type: str | None = None,
    author: str | None = None,
) -> list[dict[str, Any]]:
    """Filter annotation records by page, normalized type and author."""
    matched = []
    for annotation in annotations:
        content = annotation.get("content") or {}
        if page_number is not None and content.get("pageIndex") != page_number:
            continue
        kind = normalize_annotation_type(content.get("type", ""))
        if annotation_type and kind != annotation_type:
            continue
        if author and annotation.get("createdBy") != author:
            continue
        matched.append(annotation)
    return matched


def _filter_lines(
    page_number: int | None, annotation_type: str | None, author: str | None
) -> list[str]:
    lines = []
    if page_number is not None:
        lines.append(f"- Page: {page_number}")
    if annotation_type:
        lines.append(f"- Type: {annotation_type}")
    if author:
        lines.append(f"- Author: {author}")
    return lines


def _redaction_page(annotation: dict[str, Any]) -> int | None:
    page = annotation.get("pageIndex")
    if page is None:
        page = (annotation.get("content") or {}).get("pageIndex")
    return page


def register_tools(mcp: FastMCP, server: DocEngineServer) -> None:
    """Register annotation tools with the MCP server."""

    @mcp.tool()
    async def add_annotation(
        document_fingerprint: DocumentFingerprint,
        page_number: int,
        annotation_type: AnnotationType,
        content: str,
        coordinates: AnnotationCoordinates,
        author: str | None = None,
    ) -> str:
        """Create markup for review and approval workflows.

        Args:
            document_fingerprint: Document identifier with optional layer.
            page_number: Page number (0-based) where the annotation should be added.
            annotation_type: Type of annotation to create.
            content: Content for the annotation (text, note, URL, etc.).
            coordinates: Position and size of the annotation.
            author: Name of the annotation author.
        """
        fp = document_fingerprint
        try:
            if page_number < 0:
                raise ValueError("page_number must be 0 or greater")
            info = await layers.get_document_info(server.client, fp)
            annotation = build_annotation_content(
                annotation_type, page_number, coordinates, content, author
            )
            request: dict[str, Any] = {"content": annotation}
            if author:
                request["user_id"] = author
            response = await layers.create_annotation(server.client, fp, request)

            lines = [
                "# Annotation Added Successfully",
                "",
                f"📝 **Annotation ID:** {_created_id(response)}  ",
                f"📄 **Document:** {info.get('title') or 'Untitled Document'}  ",
                *_fingerprint_lines(fp),
            ]
            if author:
                lines.append(f"👤 **Author:** {author}  ")
            lines += [
                f"📅 **Created:** {datetime.now(timezone.utc).isoformat()}  ",
                "",
                "---",
                "",
                "## Annotation Details",
                "",
                f"- **Type:** {annotation_label(annotation_type)}",
                f"- **Page:** {page_number + 1}",
                f'- **Content:** "{content}"',
                f"- **Location:** Page {page_number + 1}, coordinates "
                f"({coordinates.left:.1f}, {coordinates.top:.1f})",
                f"- **Size:** {coordinates.width:.1f} × {coordinates.height:.1f}",
            ]
            if annotation.get("color"):
                lines.append(f"- **Color:** {annotation['color']}")
            if annotation.get("blendMode"):
                lines.append(f"- **Blend Mode:** {annotation['blendMode']}")
            if annotation.get("fontSize"):
                lines.append(f"- **Font Size:** {annotation['fontSize']}pt")
            if annotation.get("lineWidth"):
                lines.append(f"- **Line Width:** {annotation['lineWidth']}px")
            if annotation.get("icon"):
                lines.append(f"- **Icon:** {annotation['icon']}")
            lines += ["", "---", ""]
            return "\n".join(lines)
        except Exception as e:
            return error_response("Adding Annotation", e)

    @mcp.tool()
    async def read_annotations(
        document_fingerprint: DocumentFingerprint,
        page_number: int | None = None,
        annotation_type: AnnotationType | None = None,
        author: str | None = None,
    ) -> str:
        """Read annotations from a document, optionally filtered.

        Args:
            document_fingerprint: Document identifier with optional layer.
            page_number: Filter annotations by specific page number (0-based).
            annotation_type: Filter annotations by type.
            author: Filter annotations by author name.
        """
        fp = document_fingerprint
        try:
            everything = await layers.get_annotations(server.client, fp)
            matched = filter_annotations(everything, page_number, annotation_type, author)
            filters = _filter_lines(page_number, annotation_type, author)

            lines = ["# Document Annotations", "", *_fingerprint_lines(fp)]
            if not matched:
                lines += ["📝 **Total Annotations:** 0  ", ""]
                if everything:
                    lines.append(
                        f"**Note:** Document has {len(everything)} total annotations, "
                        "but none match the specified filters."
                    )
                    lines += ["", "**Applied Filters:**", *filters]
                else:
                    lines.append("This document does not contain any annotations.")
                return "\n".join(lines)

            by_page: dict[int, list[dict[str, Any]]] = defaultdict(list)
            for annotation in matched:
                page = (annotation.get("content") or {}).get("pageIndex")
                if page is not None:
                    by_page[page].append(annotation)
            pages = sorted(by_page)
            authors = list(dict.fromkeys(a.get("createdBy") or "Unknown" for a in matched))

            lines += [
                f"📝 **Total Annotations:** {len(matched)}  ",
                f"📊 **Pages with Annotations:** {len(pages)} "
                f"(pages {', '.join(str(p) for p in pages)})  ",
                f"👥 **Authors:** {len(authors)} ({', '.join(authors)})  ",
            ]
            if filters:
                lines += ["", "**Applied Filters:**", *filters]
            lines += ["", "---", ""]

            for page in pages:
                page_annotations = by_page[page]
                lines += [f"## Page {page} ({_plural(len(page_annotations), 'annotation')})", ""]
                for index, annotation in enumerate(page_annotations, start=1):
                    content = annotation.get("content") or {}
                    kind = normalize_annotation_type(content.get("type", "unknown"))
                    lines.append(
                        f"### {ANNOTATION_EMOJI.get(kind, '📄')} Annotation {index}: "
                        f"{annotation.get('id')}"
                    )
                    lines.append(f"- **Type:** {kind[:1].upper() + kind[1:]}")
                    lines.append(f"- **Author:** {annotation.get('createdBy') or 'Unknown'}")
                    lines.append(f"- **Created:** {content.get('createdAt') or 'Unknown'}")
                    if kind == "text":
                        text = (content.get("text") or {}).get("value") or "No content"
                        lines.append(f'- **Content:** "{text}"')
                    bbox = content.get("bbox")
                    location = format_bbox(bbox) if bbox else "Unknown location"
                    lines += [f"- **Location:** {location}", ""]
                if page != pages[-1]:
                    lines += ["---", ""]

            by_type = Counter(
                normalize_annotation_type((a.get("content") or {}).get("type", ""))
                for a in matched
                if (a.get("content") or {}).get("type")
            )
            by_author = Counter(a.get("createdBy") or "Unknown" for a in matched)
            lines += ["---", "", "## Summary by Type"]
            for kind, count in by_type.items():
                label = kind[:1].upper() + kind[1:]
                lines.append(
                    f"- **{ANNOTATION_EMOJI.get(kind, '📄')} {label}s:** "
                    f"{_plural(count, 'annotation')}"
                )
            lines += ["", "## Summary by Author"]
            lines += [
                f"- **{name}:** {_plural(count, 'annotation')}" for name, count in by_author.items()
            ]
            lines += ["", "---", ""]
            return "\n".join(lines)
        except Exception as e:
            return error_response("Reading Annotations", e)

    @mcp.tool()
    async def delete_annotations(
        document_fingerprint: DocumentFingerprint,
        annotation_ids: list[str],
        confirm_deletion: bool = True,
    ) -> str:
        """Delete annotations from a document.

        Args:
            document_fingerprint: Document identifier with optional layer.
            annotation_ids: The IDs of the annotations to delete.
            confirm_deletion: Must be true for the deletion to happen.
        """
        fp = document_fingerprint
        if not confirm_deletion:
            return "\n".join(
                [
                    "# Annotation Deletion Cancelled",
                    "",
                    "🛑 **Status:** Deletion cancelled by user request  ",
                    *_fingerprint_lines(fp),
                    f"🗑️ **Annotation IDs:** {', '.join(annotation_ids)}  ",
                    "",
                    "The annotation deletion was cancelled because `confirm_deletion` "
                    "was set to `false`.",
                    "",
                    "💡 **To proceed with deletion:**",
                    "- Set `confirm_deletion` to `true`",
                ]
            )
        try:
            try:
                details = await asyncio.gather(
                    *(layers.get_annotation(server.client, fp, aid) for aid in annotation_ids)
                )
            except DocumentEngineError as e:
                if e.code != "NOT_FOUND":
                    raise
                return "\n".join(
                    [
                        "# Error: Annotation Not Found",
                        "",
                        "❌ **Status:** Annotation does not exist  ",
                        *_fingerprint_lines(fp),
                        f"🔍 **Annotation IDs:** {', '.join(annotation_ids)}  ",
                        "",
                        "The specified annotation could not be found in the document.",
                    ]
                )
            await asyncio.gather(
                *(layers.delete_annotation(server.client, fp, aid) for aid in annotation_ids)
            )

            lines = [
                "# Annotations Deleted Successfully",
                "",
                f"✅ **Status:** {_plural(len(annotation_ids), 'annotation')} removed  ",
                *_fingerprint_lines(fp),
                f"🗑️ **Deleted Annotation IDs:** {', '.join(annotation_ids)}  ",
                f"⏱️ **Deleted At:** {datetime.now(timezone.utc).isoformat()}  ",
                "",
                "---",
                "",
                "## Deleted Annotation Details",
            ]
            for index, (aid, detail) in enumerate(zip(annotation_ids, details), start=1):
                content = detail.get("content") or {}
                bbox = content.get("bbox")
                lines += [
                    f"### Annotation {index}: {detail.get('id') or aid}",
                    f"- **Type:** {content.get('type') or 'Unknown'}",
                    f"- **Author:** {detail.get('createdBy') or 'Unknown'}",
                    f"- **Page:** {content.get('pageIndex', 'Unknown')}",
                    f"- **Location on page:** {format_bbox(bbox) if bbox else 'Unknown location'}",
                    f"- **Created:** {content.get('createdAt') or 'unknown'}",
                    "",
                ]
            lines += ["---", ""]
            return "\n".join(lines)
        except Exception as e:
            return error_response("Deleting Annotations", e)

    @mcp.tool()
    async def create_redaction(
        document_fingerprint: DocumentFingerprint,
        redaction_type: Literal["regex", "preset", "text"],
        text: str | None = None,
        pattern: str | None = None,
        preset: RedactionPreset | None = None,
    ) -> str:
        """Mark sensitive content for redaction without removing it yet.

        Args:
            document_fingerprint: Document identifier with optional layer.
            redaction_type: How matches are found.
            text: Text to redact. Required for redaction type "text".
            pattern: Regex pattern to redact. Required for redaction type "regex".
            preset: Preset pattern to redact. Required for redaction type "preset".
        """
        fp = document_fingerprint
        try:
            payload = redaction_payload(redaction_type, text, pattern, preset)
            created = await layers.create_redactions(server.client, fp, payload)
            ids = ", ".join(str(a.get("id")) for a in created)
            pages = sorted({p for p in map(_redaction_page, created) if p is not None})
            description = describe_redaction(redaction_type, text, pattern, preset)

            lines = [
                "# Redaction Creation Complete",
                "",
                f"🔍 **Redaction IDs:** [{ids}]  ",
                f"📊 **Matches Found:** {len(created)} instances  ",
                "📄 **Pages Affected:** "
                + (", ".join(str(p + 1) for p in pages) if pages else "None")
                + "  ",
                "👀 **Preview Available:** Yes  ",
                "",
                "---",
                "",
            ]
            if created:
                kind = {"preset": "Preset", "regex": "Custom Regex"}.get(
                    redaction_type, "Text Match"
                )
                value = {"regex": pattern, "preset": preset}.get(redaction_type, text)
                lines += [
                    "## Redaction Summary",
                    "",
                    f"### 📋 Pattern: {description}",
                    f"- **Type:** {kind}",
                    f"- **Pattern:** {value}",
                    f"- **Matches:** {len(created)} instances",
                    "",
                ]
                if pages:
                    per_page = Counter(_redaction_page(a) for a in created)
                    lines.append("### 📍 Locations Found")
                    for page in pages:
                        count = per_page[page]
                        word = "match" if count == 1 else "matches"
                        lines.append(f"- **Page {page + 1}:** {count} {word} detected")
                    lines.append("")
            else:
                lines += [
                    "## No Matches Found",
                    "",
                    f"🔍 **Pattern:** {description}",
                    "💡 **Suggestion:** Try adjusting your pattern or using a different "
                    "redaction type",
                    "",
                ]
            lines += [
                "---",
                "",
                "## ⚠️ Important Notes",
                "- **Preview mode:** No content has been permanently redacted yet",
            ]
            if created:
                lines.append(
                    "- **Backup recommended:** Create document backup before applying "
                    "redactions with `duplicate_document`"
                )
            else:
                lines.append(
                    "- **No action needed:** No sensitive content found with current pattern"
                )
            lines += [
                "",
                "---",
                "",
                "## Processing Summary",
                "- **Status:** Creation complete",
                f"- **Document ID:** {fp.document_id}",
            ]
            if fp.layer:
                lines.append(f"- **Layer:** {fp.layer}")
            lines.append(f"- **Redaction IDs:** [{ids}]")
            return "\n".join(lines)
        except Exception as e:
            return error_response("Creating Redaction", e)

    @mcp.tool()
    async def apply_redactions(
        document_fingerprint: DocumentFingerprint,
        redaction_ids: list[str],
    ) -> str:
        """Apply pending redactions, permanently removing the marked content.

        Args:
            document_fingerprint: Document identifier with optional layer.
            redaction_ids: IDs returned by create_redaction.
        """
        fp = document_fingerprint
        try:
            if not redaction_ids or any(not rid for rid in redaction_ids):
                raise ValueError("At least one non-empty redaction ID is required")
            info = await layers.get_document_info(server.client, fp)
            await layers.apply_redactions(server.client, fp)
            title = info.get("title") or f"Document {fp.document_id}"
            lines = [
                "# Redactions Applied Successfully",
                "",
                "✅ **Status:** All redactions applied permanently  ",
                f"📄 **Original Document ID:** {fp.document_id}  ",
            ]
            if fp.layer:
                lines.append(f"🔀 **Layer:** {fp.layer}  ")
            lines += [
                f"🔒 **Redactions Applied:** {len(redaction_ids)} instances  ",
                "",
                "---",
                "",
                "## Processing Details",
                f"- **Original Document:** {title}",
                f"- **Pages Processed:** {info.get('pageCount', 'Unknown')}",
                f"- **Redactions Performed:** {len(redaction_ids)}",
                "- **Processing Status:** Complete",
                "",
                "---",
                "",
            ]
            return "\n".join(lines)
        except Exception as e:
            return error_response("Applying Redactions", e)
