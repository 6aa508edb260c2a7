"""Layer-aware wrappers for Document Engine endpoints.

When a fingerprint names a layer, the layer-scoped endpoint
(/api/documents/{id}/layers/{layer}/...) is used; otherwise the
document's default endpoint.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

from docengine_mcp.clients.client import DocumentEngineClient
from docengine_mcp.models.fingerprint import DocumentFingerprint
from docengine_mcp.utils.errors import DocumentEngineError


def document_path(fingerprint: DocumentFingerprint, suffix: str = "") -> str:
    """Build the endpoint path for a document or one of its layers."""
    path = f"/api/documents/{quote(fingerprint.document_id, safe='')}"
    if fingerprint.layer:
        path += f"/layers/{quote(fingerprint.layer, safe='')}"
    return path + suffix


def _data(body: Any) -> Any:
    if isinstance(body, dict) and "data" in body:
        return body["data"]
    return body


async def list_documents(
    client: DocumentEngineClient, params: dict[str, Any]
) -> dict[str, Any]:
    """List documents; returns the raw response with data and cursors."""
    body = await client.get_json("/api/documents", params=params)
    return body if isinstance(body, dict) else {"data": []}


async def get_document_info(
    client: DocumentEngineClient, fingerprint: DocumentFingerprint
) -> dict[str, Any]:
    """Fetch document info (page count, pages, metadata, permissions).

    Raises:
        DocumentEngineError: If the backend returned no document info.
    """
    body = await client.get_json(document_path(fingerprint, "/document_info"))
    info = _data(body)
    if not isinstance(info, dict) or not info:
        layer = f", layer name: {fingerprint.layer}" if fingerprint.layer else ""
        raise DocumentEngineError(
            f"No document info returned for document ID: {fingerprint.document_id}{layer}",
            code="NOT_FOUND",
        )
    return info


async def list_layers(client: DocumentEngineClient, document_id: str) -> list[str]:
    """List layer names of a document."""
    body = await client.get_json(
        document_path(DocumentFingerprint(document_id=document_id), "/layers")
    )
    layers = _data(body)
    return list(layers) if isinstance(layers, list) else []


async def create_layer(
    client: DocumentEngineClient,
    document_id: str,
    layer_name: str,
    source_layer: str | None = None,
) -> Any:
    """Create a named layer, optionally copied from another layer."""
    payload: dict[str, Any] = {"name": layer_name}
    if source_layer:
        payload["source_layer_name"] = source_layer
    return await client.post_json(
        document_path(DocumentFingerprint(document_id=document_id), "/layers"), payload
    )


async def get_page_text(
    client: DocumentEngineClient,
    fingerprint: DocumentFingerprint,
    page_index: int,
    ocr: bool = False,
) -> list[dict[str, Any]]:
    """Get the text lines of one page."""
    params = {"ocr": True} if ocr else None
    body = await client.get_json(
        document_path(fingerprint, f"/pages/{page_index}/text"), params=params
    )
    if isinstance(body, dict):
        return body.get("textLines") or []
    return []


async def get_annotations(
    client: DocumentEngineClient,
    fingerprint: DocumentFingerprint,
    page_index: int | None = None,
) -> list[dict[str, Any]]:
    """List annotations, optionally for a single page."""
    params = {"pageIndex": page_index} if page_index is not None else None
    body = await client.get_json(document_path(fingerprint, "/annotations"), params=params)
    annotations = _data(body)
    if isinstance(annotations, dict):
        annotations = annotations.get("annotations", [])
    return annotations if isinstance(annotations, list) else []


async def get_annotation(
    client: DocumentEngineClient, fingerprint: DocumentFingerprint, annotation_id: str
) -> dict[str, Any]:
    """Fetch a single annotation."""
    body = await client.get_json(
        document_path(fingerprint, f"/annotations/{quote(annotation_id, safe='')}")
    )
    annotation = _data(body)
    return annotation if isinstance(annotation, dict) else {}


async def create_annotation(
    client: DocumentEngineClient,
    fingerprint: DocumentFingerprint,
    annotation: dict[str, Any],
) -> Any:
    """Create one annotation from an Instant JSON payload."""
    return await client.post_json(document_path(fingerprint, "/annotations"), annotation)


async def delete_annotation(
    client: DocumentEngineClient, fingerprint: DocumentFingerprint, annotation_id: str
) -> Any:
    """Delete a single annotation."""
    return await client.delete(
        document_path(fingerprint, f"/annotations/{quote(annotation_id, safe='')}")
    )


async def get_form_fields(
    client: DocumentEngineClient, fingerprint: DocumentFingerprint
) -> list[dict[str, Any]]:
    """List form field definitions."""
    body = await client.get_json(document_path(fingerprint, "/form-fields"))
    fields = _data(body)
    return fields if isinstance(fields, list) else []


async def get_form_field_values(
    client: DocumentEngineClient, fingerprint: DocumentFingerprint
) -> dict[str, Any]:
    """Get current form field values keyed by field name."""
    body = await client.get_json(document_path(fingerprint, "/form-field-values"))
    values = _data(body)
    if isinstance(values, dict) and "formFieldValues" in values:
        values = values["formFieldValues"]
    if isinstance(values, list):
        return {item.get("name"): item.get("value") for item in values if isinstance(item, dict)}
    return values if isinstance(values, dict) else {}


async def update_form_field_values(
    client: DocumentEngineClient,
    fingerprint: DocumentFingerprint,
    values: list[dict[str, Any]],
) -> Any:
    """Update form field values from [{"name": ..., "value": ...}] records."""
    return await client.post_json(
        document_path(fingerprint, "/form-field-values"), {"formFieldValues": values}
    )


async def create_redactions(
    client: DocumentEngineClient,
    fingerprint: DocumentFingerprint,
    payload: dict[str, Any],
) -> list[dict[str, Any]]:
    """Create redaction annotations; returns the created annotations."""
    body = await client.post_json(document_path(fingerprint, "/redactions"), payload)
    created = _data(body)
    if isinstance(created, dict):
        created = created.get("annotations", [])
    return created if isinstance(created, list) else []


async def apply_redactions(
    client: DocumentEngineClient, fingerprint: DocumentFingerprint
) -> Any:
    """Apply all pending redactions, permanently removing the content."""
    return await client.post_json(document_path(fingerprint, "/redactions/apply"), {})


async def apply_instructions(
    client: DocumentEngineClient,
    fingerprint: DocumentFingerprint,
    instructions: dict[str, Any],
) -> Any:
    """Apply build instructions (page edits, watermarks, ...) in place."""
    return await client.post_json(document_path(fingerprint, "/apply_instructions"), instructions)


async def copy_document(
    client: DocumentEngineClient, fingerprint: DocumentFingerprint
) -> str:
    """Copy a document, or a layer into a new document; returns the new ID."""
    if fingerprint.layer:
        body = await client.post_json(document_path(fingerprint, "/copy_with_instant_json"))
        return str(_find_document_id(body))
    body = await client.post_json("/api/copy_document", {"document_id": fingerprint.document_id})
    return str(_find_document_id(body))


def _find_document_id(body: Any) -> Any:
    data = _data(body)
    if isinstance(data, dict):
        return data.get("document_id") or data.get("documentId") or ""
    if isinstance(body, dict):
        return body.get("documentId") or body.get("document_id") or ""
    return ""


async def render_page(
    client: DocumentEngineClient,
    fingerprint: DocumentFingerprint,
    page_index: int,
    width: int | None = None,
    height: int | None = None,
) -> bytes:
    """Render one page to PNG."""
    params = {"width": width, "height": height}
    return await client.get_bytes(
        document_path(fingerprint, f"/pages/{page_index}/image"), params=params
    )


async def search_document(
    client: DocumentEngineClient,
    fingerprint: DocumentFingerprint,
    params: dict[str, Any],
) -> list[dict[str, Any]]:
    """Search a document; returns the list of hits."""
    body = await client.get_json(document_path(fingerprint, "/search"), params=params)
    results = _data(body)
    return results if isinstance(results, list) else []


async def build_document(
    client: DocumentEngineClient, instructions: dict[str, Any]
) -> Any:
    """Run /api/build with the given instructions and return the JSON output."""
    return await client.post_json("/api/build", instructions)


async def create_document_from_instructions(
    client: DocumentEngineClient, instructions: dict[str, Any], title: str | None = None
) -> dict[str, Any]:
    """Create a new document from build instructions; returns its data."""
    payload: dict[str, Any] = {"instructions": instructions}
    if title:
        payload["title"] = title
    body = await client.post_json("/api/documents", payload)
    data = _data(body)
    return data if isinstance(data, dict) else {}
