"""Pydantic models shared across tool families."""

from docengine_mcp.models.fingerprint import DocumentFingerprint, PageRange

__all__ = ["DocumentFingerprint", "PageRange"]
