"""Forms domain - reading and filling PDF form fields."""

from docengine_mcp.domains.forms.models import FieldValue

__all__ = ["FieldValue"]
