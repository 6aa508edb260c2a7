"""Document identification models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class DocumentFingerprint(BaseModel):
    """Document identifier with optional layer."""

    document_id: str = Field(
        ...,
        min_length=1,
        description="The ID on the Document Engine to identify the document",
    )
    layer: str | None = Field(
        None,
        description="Optional layer name. If not specified, operations will use the default layer",
    )

    def __str__(self) -> str:
        if self.layer:
            return f"{self.document_id} (layer: {self.layer})"
        return self.document_id


class PageRange(BaseModel):
    """Zero-based inclusive page range; either bound may be omitted."""

    start: int | None = Field(None, description="First page index (0-based)")
    end: int | None = Field(None, description="Last page index (0-based, inclusive)")

    def describe(self) -> str:
        """Render the range the way reports show it, e.g. "2-end"."""
        if self.start is not None and self.end is not None:
            return f"{self.start}-{self.end}"
        if self.start is not None:
            return f"{self.start}-end"
        if self.end is not None:
            return f"0-{self.end}"
        return "All pages"

    def resolve(self, page_count: int) -> list[int]:
        """Expand to a list of page indices, validated against the page count.

        Raises:
            ValueError: If a bound is out of range or start > end.
        """
        start = self.start if self.start is not None else 0
        end = self.end if self.end is not None else page_count - 1
        valid = f"document has {page_count} pages, valid indices are 0-{page_count - 1}"
        if start < 0 or start >= page_count:
            raise ValueError(f"Page range start {start} is out of bounds ({valid})")
        if end < 0 or end >= page_count:
            raise ValueError(f"Page range end {end} is out of bounds ({valid})")
        if start > end:
            raise ValueError(
                f"Invalid page range: start ({start}) must be less than or equal to end ({end})"
            )
        return list(range(start, end + 1))

    def as_part_pages(self) -> dict[str, int]:
        """Serialize for a build instruction part."""
        return self.model_dump(exclude_none=True)
