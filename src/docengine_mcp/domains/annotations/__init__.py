"""Annotations domain - markup, comments and redactions."""

from docengine_mcp.domains.annotations.models import AnnotationCoordinates

__all__ = ["AnnotationCoordinates"]
