"""MCP Tools for PDF form fields."""

from __future__ import annotations

import json
from collections import defaultdict
from typing import TYPE_CHECKING, Any

from mcp.server.fastmcp import FastMCP

from docengine_mcp.clients import layers
from docengine_mcp.domains.forms.models import FieldValue
from docengine_mcp.models.fingerprint import DocumentFingerprint
from docengine_mcp.utils.errors import DocumentEngineError
from docengine_mcp.utils.formatting import error_response, format_bbox

if TYPE_CHECKING:
    from docengine_mcp.server import DocEngineServer


def format_field_type(field_type: str) -> str:
    """Turn "pspdfkit/form-field/text" style types into a display label."""
    clean = field_type.removeprefix("pspdfkit/")
    return clean[:1].upper() + clean[1:]


def format_field_value(value: Any) -> str:
    """Render a form field value for a markdown table cell."""
    if value is None or value == "":
        return "Empty"
    if isinstance(value, bool):
        return "✓" if value else "✗"
    if isinstance(value, list):
        return ", ".join(str(v) for v in value)
    if isinstance(value, dict):
        return json.dumps(value)
    if isinstance(value, str) and len(value) > 50:
        return value[:47] + "..."
    return str(value)


def _has_value(value: Any) -> bool:
    if isinstance(value, list):
        return any(v is not None and v != "" for v in value)
    return value is not None and value != ""


def _first_widget(field: dict[str, Any]) -> dict[str, Any]:
    widgets = field.get("widgetAnnotations") or []
    if widgets and isinstance(widgets[0], dict):
        return widgets[0].get("content") or {}
    return {}


def _is_required(content: dict[str, Any]) -> bool:
    flags = content.get("flags")
    return isinstance(flags, list) and "required" in flags


def register_tools(mcp: FastMCP, server: DocEngineServer) -> None:
    """Register form tools with the MCP server."""

    @mcp.tool()
    async def extract_form_data(
        document_fingerprint: DocumentFingerprint,
        field_names: list[str] | None = None,
        include_empty_fields: bool = True,
    ) -> str:
        """Extract structured data from the form fields of a document.

        Args:
            document_fingerprint: Document identifier with optional layer.
            field_names: List of specific form field names to extract.
            include_empty_fields: Whether to include fields with empty values.
        """
        fp = document_fingerprint
        try:
            info = await layers.get_document_info(server.client, fp)
            fields = await layers.get_form_fields(server.client, fp)
            values = await layers.get_form_field_values(server.client, fp)

            fields = [f for f in fields if (f.get("content") or {}).get("name")]
            if field_names:
                fields = [f for f in fields if f["content"]["name"] in field_names]
            if not include_empty_fields:
                fields = [
                    f
                    for f in fields
                    if f["content"]["name"] in values and _has_value(values[f["content"]["name"]])
                ]

            lines = ["# Form Data Extraction", ""]
            lines.append(f"📄 **Document:** {info.get('title') or 'Untitled Document'}")
            lines.append(f"📄 **Document ID:** {fp.document_id}  ")
            if fp.layer:
                lines.append(f"🔖 **Layer:** {fp.layer}  ")
            lines += [f"📝 **Total Form Fields:** {len(fields)}  ", ""]

            if not fields:
                matching = " matching the specified field names" if field_names else ""
                lines.append(f"No form fields found in this document{matching}.")
                return "\n".join(lines)

            by_type: dict[str, list[dict[str, Any]]] = defaultdict(list)
            for field in fields:
                field_type = field["content"].get("type")
                if field_type:
                    by_type[field_type].append(field)

            lines += ["---", ""]
            for field_type, typed_fields in by_type.items():
                lines += [
                    f"## {format_field_type(field_type)} Fields ({len(typed_fields)})",
                    "",
                    "| Field Name | Value | Page | Required |",
                    "|------------|-------|------|----------|",
                ]
                for field in typed_fields:
                    content = field["content"]
                    widget = _first_widget(field)
                    page = widget.get("pageIndex")
                    page_label = str(page + 1) if page is not None else "N/A"
                    value = format_field_value(values.get(content["name"]))
                    required = "✓" if _is_required(content) else ""
                    lines.append(f"| {content['name']} | {value} | {page_label} | {required} |")
                lines.append("")

            lines += [
                "## Detailed Information",
                "",
                "For each form field, the following details are available:",
                "",
            ]
            for field in fields:
                content = field["content"]
                widget = _first_widget(field)
                page = widget.get("pageIndex")
                field_type = content.get("type")
                lines.append(f"### {content['name']}")
                lines.append("")
                lines.append(
                    f"- **Type:** {format_field_type(field_type) if field_type else 'Unknown'}"
                )
                lines.append(f"- **Value:** {format_field_value(values.get(content['name']))}")
                lines.append(f"- **Page:** {page + 1 if page is not None else 'N/A'}")
                if _is_required(content):
                    lines.append("- **Required:** Yes")
                bbox = widget.get("bbox")
                if bbox and len(bbox) == 4 and page is not None:
                    lines.append(
                        f"- **Location:** Page {page + 1}, coordinates {format_bbox(bbox)}"
                    )
                options = field.get("options") or content.get("options")
                if options:
                    rendered = (
                        ", ".join(str(o) for o in options)
                        if isinstance(options, list)
                        else json.dumps(options)
                    )
                    lines.append(f"- **Options:** {rendered}")
                lines.append("")
            return "\n".join(lines)
        except Exception as e:
            return error_response("Extracting Form Data", e)

    @mcp.tool()
    async def fill_form_fields(
        document_fingerprint: DocumentFingerprint,
        field_values: list[FieldValue],
        validate_required: bool = True,
    ) -> str:
        """Populate form fields with values.

        Args:
            document_fingerprint: Document identifier with optional layer.
            field_values: Field name and value pairs to write.
            validate_required: Whether to validate that form fields exist before updating.
        """
        fp = document_fingerprint
        try:
            info = await layers.get_document_info(server.client, fp)
            records = [fv.as_record() for fv in field_values]

            validation_errors: list[str] = []
            if validate_required:
                try:
                    existing = {
                        (f.get("content") or {}).get("name")
                        for f in await layers.get_form_fields(server.client, fp)
                    }
                except DocumentEngineError:
                    existing = None
                if existing is not None:
                    validation_errors = [
                        f'Field "{r["name"]}" does not exist in the document'
                        for r in records
                        if r["name"] not in existing
                    ]

            updated = False
            api_error: str | None = None
            if not validation_errors:
                try:
                    await layers.update_form_field_values(server.client, fp, records)
                    updated = True
                except DocumentEngineError as e:
                    api_error = e.message

            lines = ["# Form Filling Complete", ""]
            lines.append(f"📄 **Document:** {info.get('title') or 'Untitled Document'}  ")
            lines.append(f"📄 **Document ID:** {fp.document_id}  ")
            if fp.layer:
                lines.append(f"🔀 **Layer:** {fp.layer}  ")
            if updated:
                lines.append("✅ **Status:** Successfully updated  ")
                lines.append(f"📋 **Fields Updated:** {len(records)}  ")
            else:
                lines.append("❌ **Status:** Update failed  ")
                lines.append(f"📋 **Fields Attempted:** {len(records)}  ")
                if validation_errors:
                    lines.append(f"⚠️ **Validation Errors:** {len(validation_errors)}  ")
            lines += ["", "---", ""]

            if updated:
                lines += ["## Successfully Updated Fields", ""]
                for record in records:
                    value = record["value"]
                    shown = value[:47] + "..." if len(value) > 50 else value
                    lines.append(f'- ✅ **{record["name"]}:** Updated to "{shown}"')
                lines.append("")

            if validation_errors or api_error:
                lines += ["## Errors (❌ Need Attention)", ""]
                lines += [f"- ❌ **Validation:** {error}" for error in validation_errors]
                if api_error:
                    lines.append(f"- ❌ **API Error:** {api_error}")
                lines.append("")

            lines += ["---", ""]
            return "\n".join(lines)
        except Exception as e:
            return error_response("Filling Form Fields", e)
