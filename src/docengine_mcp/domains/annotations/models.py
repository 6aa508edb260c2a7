"""Pydantic models and payload builders for annotations and redactions."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

AnnotationType = Literal[
    "note", "highlight", "strikeout", "underline", "ink", "text", "stamp", "image", "link"
]

RedactionPreset = Literal[
    "social-security-number",
    "credit-card-number",
    "email-address",
    "international-phone-number",
    "north-american-phone-number",
    "date",
    "time",
    "url",
    "us-zip-code",
    "ipv4",
    "ipv6",
    "mac-address",
    "vin",
]

PRESET_DESCRIPTIONS: dict[str, str] = {
    "social-security-number": "Social Security Number",
    "credit-card-number": "Credit Card Number",
    "email-address": "Email Address",
    "international-phone-number": "International Phone Number",
    "north-american-phone-number": "North American Phone Number",
    "date": "Date",
    "time": "Time",
    "url": "URL",
    "us-zip-code": "US ZIP Code",
    "ipv4": "IPv4 Address",
    "ipv6": "IPv6 Address",
    "mac-address": "MAC Address",
    "vin": "Vehicle Identification Number",
}

ANNOTATION_LABELS: dict[str, str] = {
    "note": "Note (Sticky Note)",
    "ink": "Ink (Freehand Drawing)",
}

ANNOTATION_EMOJI: dict[str, str] = {
    "note": "📝",
    "highlight": "🖍️",
    "strikeout": "✏️",
    "underline": "📏",
    "ink": "🖊️",
    "text": "📄",
    "stamp": "📌",
    "image": "🖼️",
    "link": "🔗",
}

_MARKUP_COLORS = {"highlight": "#FFFF00", "strikeout": "#FF0000", "underline": "#0000FF"}


class AnnotationCoordinates(BaseModel):
    """Position and size of an annotation on the page."""

    model_config = ConfigDict(extra="forbid")

    left: float = Field(..., description="Left coordinate for the annotation")
    top: float = Field(..., description="Top coordinate for the annotation")
    width: float = Field(..., ge=0, description="Width of the annotation")
    height: float = Field(..., ge=0, description="Height of the annotation")

    @property
    def bbox(self) -> list[float]:
        return [self.left, self.top, self.width, self.height]

    @property
    def rect(self) -> list[float]:
        return [self.left, self.top, self.left + self.width, self.top + self.height]


def normalize_annotation_type(annotation_type: str) -> str:
    """Strip the "pspdfkit/" and "markup/" prefixes from an annotation type."""
    return annotation_type.removeprefix("pspdfkit/").removeprefix("markup/")


def annotation_label(annotation_type: str) -> str:
    """Human-readable label for an annotation type."""
    return ANNOTATION_LABELS.get(annotation_type, annotation_type[:1].upper() + annotation_type[1:])


def build_annotation_content(
    annotation_type: str,
    page_index: int,
    coordinates: AnnotationCoordinates,
    content: str,
    author: str | None = None,
) -> dict[str, Any]:
    """Build the Instant JSON content for a new annotation.

    Args:
        annotation_type: One of the supported annotation kinds.
        page_index: Zero-based page to place the annotation on.
        coordinates: Position and size of the annotation.
        content: Text, note, stamp title, file name or URL depending on type.
        author: Optional creator name.

    Raises:
        ValueError: If the annotation type is not supported.
    """
    base: dict[str, Any] = {
        "v": 2,
        "pageIndex": page_index,
        "bbox": coordinates.bbox,
        "opacity": 1.0,
    }
    if annotation_type == "note":
        base.update(
            type="pspdfkit/note",
            text={"format": "plain", "value": content},
            icon="comment",
            color="#FFD83F",
        )
    elif annotation_type in _MARKUP_COLORS:
        base.update(
            type=f"pspdfkit/markup/{annotation_type}",
            rects=[coordinates.rect],
            color=_MARKUP_COLORS[annotation_type],
            note=content,
        )
        if annotation_type == "highlight":
            base["blendMode"] = "multiply"
    elif annotation_type == "ink":
        left, top, right, bottom = coordinates.rect
        base.update(
            type="pspdfkit/ink",
            lines={"points": [[[left, top], [right, bottom]]]},
            lineWidth=2,
            color="#000000",
        )
    elif annotation_type == "text":
        base.update(
            type="pspdfkit/text",
            text={"format": "plain", "value": content},
            fontSize=12,
            fontColor="#000000",
            horizontalAlign="left",
            verticalAlign="top",
        )
    elif annotation_type == "stamp":
        base.update(type="pspdfkit/stamp", title=content, stampType="Custom")
    elif annotation_type == "image":
        base.update(type="pspdfkit/image", fileName=content)
    elif annotation_type == "link":
        base.update(type="pspdfkit/link", action={"type": "uri", "uri": content})
    else:
        raise ValueError(f"Unsupported annotation type: {annotation_type}")

    if author:
        base["creatorName"] = author
    return base


def redaction_payload(
    redaction_type: str,
    text: str | None = None,
    pattern: str | None = None,
    preset: str | None = None,
) -> dict[str, Any]:
    """Build the create-redactions request body.

    Raises:
        ValueError: If the field required by the redaction type is missing.
    """
    if redaction_type == "regex" and pattern:
        return {"strategy": "regex", "strategyOptions": {"regex": pattern}}
    if redaction_type == "preset" and preset:
        return {"strategy": "preset", "strategyOptions": {"preset": preset}}
    if redaction_type == "text" and text:
        return {"strategy": "text", "strategyOptions": {"text": text}}
    raise ValueError("Invalid redaction configuration: missing required fields for redaction type")


def describe_redaction(
    redaction_type: str,
    text: str | None = None,
    pattern: str | None = None,
    preset: str | None = None,
) -> str:
    if redaction_type == "regex":
        return f"Custom Pattern: {pattern}"
    if redaction_type == "preset":
        return f"Preset: {PRESET_DESCRIPTIONS.get(preset or '', preset or '')}"
    if redaction_type == "text":
        return f"Text: {text or pattern}"
    return redaction_type
