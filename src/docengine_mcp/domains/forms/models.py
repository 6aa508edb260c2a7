"""Pydantic models for form filling."""

from pydantic import BaseModel, Field


class FieldValue(BaseModel):
    """A value to write into one form field."""

    fieldName: str = Field(..., description="Name of the form field")  # noqa: N815
    value: str | int | float | bool | None = Field(..., description="Value to set")

    def as_record(self) -> dict:
        """Serialize as a Document Engine form field value record."""
        return {
            "name": self.fieldName,
            "value": _stringify(self.value),
            "type": "pspdfkit/form-field-value",
            "v": 1,
            "createdBy": None,
            "updatedBy": None,
        }


def _stringify(value: str | int | float | bool | None) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    return str(value)
