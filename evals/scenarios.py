"""Scenario catalog for the tool usage evaluation.

Each scenario pairs a natural-language request with the tools an agent
is expected to call for it, in order. Document IDs and layer names
refer to the fixtures seeded by ``evals.fixtures``.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Scenario:
    """One tool usage test case."""

    id: str
    description: str
    query: str
    expected_tools: tuple[str, ...]
    max_tool_calls: int | None = None
    allow_extra_tools: bool = True


TOOL_USAGE_SCENARIOS: list[Scenario] = [
    # Document discovery tools
    Scenario(
        id="simple-list",
        description="List all documents",
        query="Show me all available documents",
        expected_tools=("list_documents",),
        max_tool_calls=1,
    ),
    Scenario(
        id="list-with-limit",
        description="List documents with limit",
        query="Show me the first 5 documents",
        expected_tools=("list_documents",),
        max_tool_calls=1,
    ),
    Scenario(
        id="list-sorted-by-title",
        description="List documents sorted by title",
        query="Show me all documents sorted alphabetically by title",
        expected_tools=("list_documents",),
        max_tool_calls=1,
    ),
    Scenario(
        id="list-with-title-filter",
        description="List documents filtered by title",
        query='Find documents with "contract" in the title',
        expected_tools=("list_documents",),
        max_tool_calls=1,
    ),
    Scenario(
        id="list-recent-with-count",
        description="List recent documents with remaining count",
        query="Show me the 10 most recently updated documents and tell me how many more there are",
        expected_tools=("list_documents",),
        max_tool_calls=1,
    ),
    Scenario(
        id="simple-info",
        description="Get document information",
        query="Tell me about document doc-12345",
        expected_tools=("read_document_info",),
        max_tool_calls=1,
    ),
    Scenario(
        id="list-then-info",
        description="List documents then read the first one",
        query="List all documents then show info for the first one",
        expected_tools=("list_documents", "read_document_info"),
        max_tool_calls=3,
    ),

    # Text extraction tools
    Scenario(
        id="simple-extract",
        description="Extract text from specific page",
        query="Extract text from page 2 of document doc-12345",
        expected_tools=("extract_text",),
        max_tool_calls=1,
    ),
    Scenario(
        id="extract-with-coordinates",
        description="Extract text with position information",
        query="Extract text from document doc-12345 and include the coordinate positions",
        expected_tools=("extract_text",),
        max_tool_calls=1,
    ),
    Scenario(
        id="extract-page-range-with-ocr",
        description="Extract text from page range with OCR",
        query="Extract text from pages 3 to 4 of document doc-12345 using OCR for scanned content",
        expected_tools=("extract_text",),
        max_tool_calls=1,
    ),
    Scenario(
        id="simple-search",
        description="Search for text in document",
        query='Search for "confidential" in document doc-12345',
        expected_tools=("search",),
        max_tool_calls=1,
    ),
    Scenario(
        id="regex-search-case-sensitive",
        description="Regex search with case sensitivity",
        query="Find all email addresses in document doc-12345 using regex, case sensitive search",
        expected_tools=("search",),
        max_tool_calls=1,
    ),
    Scenario(
        id="search-page-range-with-annotations",
        description="Search in specific pages including annotations",
        query='Search for "important" in pages 2-4 of document doc-12345, including inside annotations',
        expected_tools=("search",),
        max_tool_calls=1,
    ),
    Scenario(
        id="preset-search-phone-numbers",
        description="Search using preset for phone numbers",
        query="Find all North American phone numbers in document doc-12345",
        expected_tools=("search",),
        max_tool_calls=1,
    ),
    Scenario(
        id="render-page-with-width",
        description="Render a document page with width parameter",
        query="Show me page 1 of document doc-12345 as an image with width 800 pixels",
        expected_tools=("render_document_page",),
        max_tool_calls=1,
    ),
    Scenario(
        id="render-page-with-height",
        description="Render a document page with height parameter",
        query="Render page 3 of document doc-12345 with a height of 600 pixels",
        expected_tools=("render_document_page",),
        max_tool_calls=1,
    ),
    Scenario(
        id="render-first-page",
        description="Render the first page of a document",
        query="Show me the first page of document doc-12345 as an image",
        expected_tools=("render_document_page",),
        max_tool_calls=1,
    ),
    Scenario(
        id="render-multiple-pages",
        description="Render multiple pages of a document",
        query="Show me pages 1, 3, and 5 of document doc-12345 as images with width 600 pixels",
        expected_tools=("render_document_page",),
        max_tool_calls=1,
    ),
    Scenario(
        id="render-page-range",
        description="Render a range of document pages",
        query="Show me the first three pages of document doc-12345",
        expected_tools=("render_document_page",),
        max_tool_calls=1,
    ),
    Scenario(
        id="extract-all-tables",
        description="Extract all tables from document",
        query="Extract all tables from document doc-12345",
        expected_tools=("extract_tables",),
        max_tool_calls=1,
    ),
    Scenario(
        id="extract-tables-page-range",
        description="Extract tables from specific pages",
        query="Extract tables from pages 3 to 5 of document doc-12345",
        expected_tools=("extract_tables",),
        max_tool_calls=1,
    ),

    # Form tools
    Scenario(
        id="extract-all-form-data",
        description="Extract all form field data",
        query="Show me all the form fields and their values in document doc-form-123",
        expected_tools=("extract_form_data",),
        max_tool_calls=1,
    ),
    Scenario(
        id="extract-specific-form-fields",
        description="Extract specific form fields",
        query='Get the values for the "name", "email", and "phone" fields from document doc-form-123',
        expected_tools=("extract_form_data",),
        max_tool_calls=1,
    ),
    Scenario(
        id="extract-filled-form-fields-only",
        description="Extract only filled form fields",
        query="Show me only the form fields that have been filled out in document doc-form-123",
        expected_tools=("extract_form_data",),
        max_tool_calls=1,
    ),
    Scenario(
        id="fill-single-form-field",
        description="Fill a single form field",
        query='Fill the "name" field with "John Smith" in document doc-form-123',
        expected_tools=("fill_form_fields",),
        max_tool_calls=1,
    ),
    Scenario(
        id="fill-multiple-form-fields",
        description="Fill multiple form fields with different types",
        query='Fill the form in document doc-form-123: set Name to "Jane Doe", zip code of 00000, and sex of male',
        expected_tools=("fill_form_fields",),
        max_tool_calls=1,
    ),
    Scenario(
        id="fill-form-skip-validation",
        description="Fill form fields without validation",
        query='Fill the "custom_field" with "test value" in document doc-form-123, don\'t validate if the field exists',
        expected_tools=("fill_form_fields",),
        max_tool_calls=1,
    ),

    # Annotation tools
    Scenario(
        id="add-simple-note",
        description="Add a note annotation",
        query='Add a note saying "Review this section" at coordinates (100, 200) with size 150x50 on page 1 of document doc-12345',
        expected_tools=("add_annotation",),
        max_tool_calls=1,
    ),
    Scenario(
        id="add-highlight-with-author",
        description="Add highlight annotation with author",
        query='Highlight the text at position (50, 300) with size 200x20 on page 3 of document doc-12345, authored by "John Smith"',
        expected_tools=("add_annotation",),
        max_tool_calls=1,
    ),
    Scenario(
        id="add-link-annotation",
        description="Add link annotation",
        query='Add a link to "https://example.com" at coordinates (300, 400) with size 100x30 on page 2 of document doc-12345',
        expected_tools=("add_annotation",),
        max_tool_calls=1,
    ),
    Scenario(
        id="read-all-annotations",
        description="Read all annotations from document",
        query="Show me all annotations in document doc-12345",
        expected_tools=("read_annotations",),
        max_tool_calls=1,
    ),
    Scenario(
        id="delete-specific-annotations",
        description="Delete specific annotations",
        query='Delete annotations with IDs "ann-1" and "ann-2" from document doc-12345',
        expected_tools=("delete_annotations",),
        max_tool_calls=1,
    ),

    # Redaction tools
    Scenario(
        id="create-text-redaction",
        description="Create redaction for specific text",
        query='Create a redaction to hide all instances of "confidential information" in document doc-12345',
        expected_tools=("create_redaction",),
        max_tool_calls=1,
    ),
    Scenario(
        id="create-regex-redaction",
        description="Create regex-based redaction",
        query='Create a redaction using regex pattern "\\d{3}-\\d{2}-\\d{4}" to hide SSNs in document doc-12345',
        expected_tools=("create_redaction",),
        max_tool_calls=1,
    ),
    Scenario(
        id="create-preset-redaction-emails",
        description="Create preset redaction for email addresses",
        query="Create a redaction to hide all email addresses in document doc-12345",
        expected_tools=("create_redaction",),
        max_tool_calls=1,
    ),
    Scenario(
        id="create-preset-redaction-credit-cards",
        description="Create preset redaction for credit card numbers",
        query="Create a redaction to hide all credit card numbers in document doc-12345",
        expected_tools=("create_redaction",),
        max_tool_calls=1,
    ),
    Scenario(
        id="apply-redactions",
        description="Apply all redactions to document",
        query="Apply all pending redactions to document doc-12345",
        expected_tools=("apply_redactions",),
        max_tool_calls=1,
    ),

    # Document editing tools
    Scenario(
        id="add-text-watermark-center",
        description="Add centered text watermark",
        query='Add a "DRAFT" watermark in the center of all pages in document doc-12345',
        expected_tools=("add_watermark",),
        max_tool_calls=1,
    ),
    Scenario(
        id="add-watermark-custom-opacity-rotation",
        description="Add watermark with custom opacity and rotation",
        query='Add a "CONFIDENTIAL" watermark at the bottom-right with 50% opacity, rotated 45 degrees, and font size 24 in document doc-12345',
        expected_tools=("add_watermark",),
        max_tool_calls=1,
    ),
    Scenario(
        id="add-image-watermark",
        description="Add image watermark",
        query='Add an image watermark using "https://upload.wikimedia.org/wikipedia/en/a/a9/Example.jpg" at the top-left with 80% opacity in document doc-12345',
        expected_tools=("add_watermark",),
        max_tool_calls=1,
    ),
    Scenario(
        id="split-document-by-pages",
        description="Split document by page ranges",
        query="Split document doc-12345 at pages 3 and 5 to create separate documents",
        expected_tools=("split_document",),
        max_tool_calls=1,
    ),
    Scenario(
        id="duplicate-document",
        description="Create a copy of document",
        query="Make a copy of document doc-12345",
        expected_tools=("duplicate_document",),
        max_tool_calls=1,
    ),

    # Health check tool
    Scenario(
        id="health-check",
        description="Check system health",
        query="Check if the document engine is working properly",
        expected_tools=("health_check",),
        max_tool_calls=1,
    ),

    # Multi-tool workflows
    Scenario(
        id="search-then-extract",
        description="Find document then extract text",
        query='Find documents with "contract" in the title, then extract text from the first page of the first result',
        expected_tools=("list_documents", "extract_text"),
        max_tool_calls=2,
    ),
    Scenario(
        id="info-then-extract-with-coordinates",
        description="Get document info then extract text with coordinates",
        query="First tell me about document doc-12345, then extract text from its first page including coordinate positions",
        expected_tools=("read_document_info", "extract_text"),
        max_tool_calls=2,
    ),
    Scenario(
        id="annotate-workflow-with-author",
        description="Read document then add annotation with author",
        query='Check the details of document doc-12345, then add a note saying "Reviewed" at position (100, 100) with size 200x50 on page 1, authored by "Jane Smith"',
        expected_tools=("read_document_info", "add_annotation"),
        max_tool_calls=2,
    ),
    Scenario(
        id="redaction-workflow-preset",
        description="Create and apply preset redaction",
        query="Redact all email addresses in document doc-12345",
        expected_tools=("create_redaction", "apply_redactions"),
        max_tool_calls=2,
    ),
    Scenario(
        id="complex-redaction-multiple-types",
        description="Multiple redaction types",
        query="Redact both email addresses and phone numbers in document doc-12345",
        expected_tools=("create_redaction", "create_redaction", "apply_redactions"),
        max_tool_calls=3,
        allow_extra_tools=False,
    ),
    Scenario(
        id="redaction-regex-workflow",
        description="Create regex redaction and apply",
        query="Create a redaction for Social Security Numbers (format XXX-XX-XXXX) in document doc-12345 and apply it",
        expected_tools=("create_redaction", "apply_redactions"),
        max_tool_calls=2,
    ),
    Scenario(
        id="form-extract-fill-workflow",
        description="Extract then fill form data",
        query='First show me the form fields in document doc-form-123, then fill the "name" field with "John Smith"',
        expected_tools=("extract_form_data", "fill_form_fields"),
        max_tool_calls=2,
    ),
    Scenario(
        id="form-extract-specific-fill-multiple",
        description="Extract specific fields then fill multiple",
        query='Check the current values of "name" and "email" fields in document doc-form-123, then fill "name" with "Alice Johnson" and "email" with "alice@example.com"',
        expected_tools=("extract_form_data", "fill_form_fields"),
        max_tool_calls=2,
    ),
    Scenario(
        id="duplicate-then-watermark-workflow",
        description="Duplicate then modify document",
        query='Make a copy of document doc-12345, then add a "DRAFT" watermark to the copy',
        expected_tools=("duplicate_document", "add_watermark"),
        max_tool_calls=2,
    ),
    Scenario(
        id="search-extract-annotate-workflow",
        description="Search, extract, then annotate",
        query='Search for "important" in document doc-12345, extract text from pages where it appears, then add a highlight annotation at (200, 300) with size 150x25 on page 1',
        expected_tools=("search", "extract_text", "add_annotation"),
        max_tool_calls=3,
    ),

    # Single-tool requests that must not trigger lookups first
    Scenario(
        id="efficiency-single-extract",
        description="Extract text efficiently",
        query="Get the text content from document doc-12345",
        expected_tools=("extract_text",),
        max_tool_calls=1,
    ),
    Scenario(
        id="efficiency-direct-annotation",
        description="Add annotation directly",
        query="Add a highlight annotation at coordinates (100, 200) with size 150x30 on page 1 of document doc-12345",
        expected_tools=("add_annotation",),
        max_tool_calls=1,
    ),
    Scenario(
        id="efficiency-direct-search",
        description="Search directly without document info",
        query='Find all instances of "contract" in document doc-12345',
        expected_tools=("search",),
        max_tool_calls=1,
    ),

    # Order sensitivity
    Scenario(
        id="order-create-before-apply",
        description="Create redaction before applying",
        query="Apply email redactions to document doc-12345",
        expected_tools=("create_redaction", "apply_redactions"),
        max_tool_calls=2,
        allow_extra_tools=False,
    ),
    Scenario(
        id="order-search-before-extract",
        description="Search before extracting",
        query="Find the contract document and extract its summary section",
        expected_tools=("list_documents", "extract_text"),
        max_tool_calls=2,
        allow_extra_tools=False,
    ),
    Scenario(
        id="order-extract-form-before-fill",
        description="Extract form data before filling",
        query='Update the form in document doc-form-123 by changing the name field to "Bob Wilson"',
        expected_tools=("extract_form_data", "fill_form_fields"),
        max_tool_calls=2,
    ),

    # Parameter edge cases
    Scenario(
        id="edge-case-zero-based-pages",
        description="Test zero-based page indexing understanding",
        query="Extract text from the very first page of document doc-12345",
        expected_tools=("extract_text",),
        max_tool_calls=1,
    ),
    Scenario(
        id="edge-case-page-range-conversion",
        description="Test human-friendly to zero-based page conversion",
        query='Search for "summary" in pages 2 through 5 of document doc-12345',
        expected_tools=("search",),
        max_tool_calls=1,
    ),
    Scenario(
        id="edge-case-boolean-parameters",
        description="Test boolean parameter extraction",
        query="Extract text from document doc-12345 with OCR enabled but without coordinate information",
        expected_tools=("extract_text",),
        max_tool_calls=1,
    ),
    Scenario(
        id="edge-case-numeric-parameters",
        description="Test numeric parameter extraction",
        query='Add a "CONFIDENTIAL" watermark with 25% opacity, rotated 90 degrees counterclockwise, using font size 18 in document doc-12345',
        expected_tools=("add_watermark",),
        max_tool_calls=1,
    ),
    Scenario(
        id="edge-case-array-parameters",
        description="Test array parameter extraction",
        query='Get only the "firstName", "lastName", and "dateOfBirth" fields from document doc-form-123',
        expected_tools=("extract_form_data",),
        max_tool_calls=1,
    ),

    # Key-value extraction
    Scenario(
        id="extract-kvp-full-document",
        description="Extract key-value pairs from entire document",
        query="Extract all key-value pairs from document doc-form-123",
        expected_tools=("extract_key_value_pairs",),
        max_tool_calls=1,
    ),
    Scenario(
        id="extract-kvp-page-range",
        description="Extract key-value pairs from specific pages",
        query="Extract key-value pairs from page 1 of document doc-form-123",
        expected_tools=("extract_key_value_pairs",),
        max_tool_calls=1,
    ),

    # Page manipulation
    Scenario(
        id="add-page-default",
        description="Add page with default settings",
        query="Add a new blank page to document doc-12345",
        expected_tools=("add_new_page",),
        max_tool_calls=1,
    ),
    Scenario(
        id="add-page-with-size-orientation",
        description="Add page with specific size and orientation",
        query="Add a new A3 landscape page to document doc-12345",
        expected_tools=("add_new_page",),
        max_tool_calls=1,
    ),
    Scenario(
        id="add-multiple-pages",
        description="Add multiple pages at once",
        query="Add 3 new Letter size portrait pages to document doc-12345",
        expected_tools=("add_new_page",),
        max_tool_calls=1,
    ),
    Scenario(
        id="add-page-at-position",
        description="Add page at specific position",
        query="Insert a new A4 page at position 0 (beginning) of document doc-12345",
        expected_tools=("add_new_page",),
        max_tool_calls=1,
    ),
    Scenario(
        id="add-page-middle-position",
        description="Add page in middle of document",
        query="Insert 2 Legal size pages at position 5 in document doc-12345",
        expected_tools=("add_new_page",),
        max_tool_calls=1,
    ),
    Scenario(
        id="rotate-single-page",
        description="Rotate single page",
        query="Rotate page 0 of document doc-12345 by 90 degrees clockwise",
        expected_tools=("rotate_pages",),
        max_tool_calls=1,
    ),
    Scenario(
        id="rotate-multiple-pages",
        description="Rotate multiple pages",
        query="Rotate pages 1, 3, and 5 of document doc-12345 by 180 degrees",
        expected_tools=("rotate_pages",),
        max_tool_calls=1,
    ),
    Scenario(
        id="rotate-pages-counterclockwise",
        description="Rotate pages counter-clockwise",
        query="Rotate the first 3 pages of document doc-12345 counter-clockwise by 270 degrees",
        expected_tools=("rotate_pages",),
        max_tool_calls=1,
    ),
    Scenario(
        id="merge-full-documents",
        description="Merge complete documents",
        query="Merge documents doc-111 and doc-222 into a single document",
        expected_tools=("merge_document_pages",),
        max_tool_calls=1,
    ),
    Scenario(
        id="merge-with-page-ranges",
        description="Merge documents with specific page ranges",
        query="Merge pages 0-2 from doc-111 with pages 5-7 from doc-222",
        expected_tools=("merge_document_pages",),
        max_tool_calls=1,
    ),
    Scenario(
        id="merge-with-title",
        description="Merge documents with custom title",
        query='Merge doc-111 and doc-222 into a document titled "Combined Report"',
        expected_tools=("merge_document_pages",),
        max_tool_calls=1,
    ),
    Scenario(
        id="merge-complex-ranges",
        description="Merge with complex page ranges",
        query='Create a document combining the first 5 pages of doc-111, all pages from doc-222 titled "Master Document"',
        expected_tools=("merge_document_pages",),
        max_tool_calls=1,
    ),

    # Parameter coverage
    Scenario(
        id="list-by-created-date",
        description="List documents by creation date",
        query="Show me the 15 most recently created documents",
        expected_tools=("list_documents",),
        max_tool_calls=1,
    ),
    Scenario(
        id="list-with-offset",
        description="List documents with pagination offset",
        query="Show me documents 20-30 sorted by title",
        expected_tools=("list_documents",),
        max_tool_calls=1,
    ),
    Scenario(
        id="list-with-multiple-filters",
        description="List with multiple filters",
        query='Find the first 8 documents with "invoice" in the title, sorted by most recently updated, and tell me how many more exist',
        expected_tools=("list_documents",),
        max_tool_calls=1,
    ),
    Scenario(
        id="search-with-end-page",
        description="Search with page range",
        query='Find "payment" in the first 5 pages of document doc-12345',
        expected_tools=("search",),
        max_tool_calls=1,
    ),
    Scenario(
        id="search-case-insensitive",
        description="Case insensitive search",
        query='Search for "CONTRACT" in document doc-12345, ignoring case',
        expected_tools=("search",),
        max_tool_calls=1,
    ),
    Scenario(
        id="search-preset-ssn",
        description="Search using SSN preset",
        query="Find all Social Security Numbers in document doc-12345",
        expected_tools=("search",),
        max_tool_calls=1,
    ),
    Scenario(
        id="search-preset-credit-card",
        description="Search using credit card preset",
        query="Find all credit card numbers in document doc-12345",
        expected_tools=("search",),
        max_tool_calls=1,
    ),
    Scenario(
        id="extract-text-single-page",
        description="Extract text from single specific page",
        query="Extract text from just page 5 of document doc-12345",
        expected_tools=("extract_text",),
        max_tool_calls=1,
    ),
    Scenario(
        id="extract-text-with-all-options",
        description="Extract text with all advanced options",
        query="Extract text from pages 1-10 of document doc-12345 with OCR enabled and include coordinates",
        expected_tools=("extract_text",),
        max_tool_calls=1,
    ),
    Scenario(
        id="extract-text-from-page-onwards",
        description="Extract text from specific page onwards",
        query="Extract text from page 8 to the end of document doc-12345",
        expected_tools=("extract_text",),
        max_tool_calls=1,
    ),
    Scenario(
        id="watermark-all-positions",
        description="Test watermark positions",
        query='Add a "SAMPLE" watermark at the top-left with 60% opacity in document doc-12345',
        expected_tools=("add_watermark",),
        max_tool_calls=1,
    ),
    Scenario(
        id="watermark-with-font-and-rotation",
        description="Watermark with font and rotation options",
        query='Add an "URGENT" watermark with font size 36, 70% opacity, rotated 315 degrees at the center of document doc-12345',
        expected_tools=("add_watermark",),
        max_tool_calls=1,
    ),
    Scenario(
        id="add-annotation-highlight-type",
        description="Add highlight annotation",
        query="Add a highlight annotation at (100, 100) with size 200x150 on page 2 of document doc-12345",
        expected_tools=("add_annotation",),
        max_tool_calls=1,
    ),
    Scenario(
        id="add-annotation-with-metadata",
        description="Add annotation with author",
        query='Add a note saying "Check this calculation" at (50, 400) with size 180x60 on page 1 of document doc-12345, authored by "Alice Smith"',
        expected_tools=("add_annotation",),
        max_tool_calls=1,
    ),
    Scenario(
        id="fill-form-mixed-types",
        description="Fill form with mixed field types",
        query='Fill the form in document doc-form-123: set "fullName" to "Robert Johnson", "isEmployed" to true, "salary" to 75000, and "startDate" to "2024-01-15"',
        expected_tools=("fill_form_fields",),
        max_tool_calls=1,
    ),
    Scenario(
        id="extract-form-with-empty",
        description="Extract form data including empty fields",
        query="Get all form fields from document doc-form-123 including empty ones",
        expected_tools=("extract_form_data",),
        max_tool_calls=1,
    ),

    # Long workflows
    Scenario(
        id="complex-document-processing",
        description="Complex multi-step document processing",
        query='Find documents with "financial" in the title, extract text from the first result, then create redactions for all SSNs and apply them',
        expected_tools=("list_documents", "extract_text", "create_redaction", "apply_redactions"),
        max_tool_calls=4,
    ),
    Scenario(
        id="document-analysis-workflow",
        description="Comprehensive document analysis",
        query='Analyze document doc-report-456: extract key-value pairs, search for "revenue", extract all tables, then add a summary annotation',
        expected_tools=("extract_key_value_pairs", "search", "extract_tables", "add_annotation"),
        max_tool_calls=4,
    ),
    Scenario(
        id="document-restructuring-workflow",
        description="Document restructuring with page operations",
        query='Duplicate document doc-12345, add 2 new pages at the beginning, rotate the last 3 pages 180 degrees, then add a "MODIFIED" watermark',
        expected_tools=("duplicate_document", "add_new_page", "rotate_pages", "add_watermark"),
        max_tool_calls=4,
    ),

    # Layer-scoped single tools
    Scenario(
        id="layer-read-document-info",
        description="Read document info from specific layer",
        query='Get information about document doc-12345 from the "review-layer" layer',
        expected_tools=("read_document_info",),
        max_tool_calls=1,
    ),
    Scenario(
        id="layer-extract-text-basic",
        description="Extract text from specific layer",
        query='Extract text from document doc-12345 in the "annotation-layer" layer',
        expected_tools=("extract_text",),
        max_tool_calls=1,
    ),
    Scenario(
        id="layer-extract-text-with-coordinates",
        description="Extract text from layer with coordinates",
        query='Extract text from document doc-12345 layer "edit-layer" with coordinate information included',
        expected_tools=("extract_text",),
        max_tool_calls=1,
    ),
    Scenario(
        id="layer-extract-text-page-range-ocr",
        description="Extract text from layer with page range and OCR",
        query='Extract text from pages 2-4 of document doc-12345 in layer "ocr-layer" using OCR',
        expected_tools=("extract_text",),
        max_tool_calls=1,
    ),
    Scenario(
        id="layer-extract-form-data",
        description="Extract form data from specific layer",
        query='Get form field values from document doc-form-123 in the "completed-layer" layer',
        expected_tools=("extract_form_data",),
        max_tool_calls=1,
    ),
    Scenario(
        id="layer-extract-specific-form-fields",
        description="Extract specific form fields from layer",
        query='Get the "name", "email", and "signature" fields from document doc-form-123 in layer "final-layer"',
        expected_tools=("extract_form_data",),
        max_tool_calls=1,
    ),
    Scenario(
        id="layer-fill-form-fields",
        description="Fill form fields in specific layer",
        query='Fill the "approvedBy" field with "John Manager" in document doc-form-123 layer "approval-layer"',
        expected_tools=("fill_form_fields",),
        max_tool_calls=1,
    ),
    Scenario(
        id="layer-add-annotation",
        description="Add annotation to specific layer",
        query='Add a note saying "Reviewed and approved" at coordinates (200, 300) with size 180x50 on page 1 of document doc-12345 in layer "review-layer"',
        expected_tools=("add_annotation",),
        max_tool_calls=1,
    ),
    Scenario(
        id="layer-add-highlight-with-author",
        description="Add highlight annotation to layer with author",
        query='Highlight text at position (100, 150) with size 250x25 on page 2 of document doc-12345 in layer "markup-layer", authored by "Jane Reviewer"',
        expected_tools=("add_annotation",),
        max_tool_calls=1,
    ),
    Scenario(
        id="layer-read-annotations",
        description="Read annotations from specific layer",
        query='Show me all annotations in document doc-12345 from the "comments-layer" layer',
        expected_tools=("read_annotations",),
        max_tool_calls=1,
    ),
    Scenario(
        id="layer-delete-annotations",
        description="Delete annotations from specific layer",
        query='Delete annotations with IDs "ann-layer-1" and "ann-layer-2" from document doc-12345 in layer "temp-layer"',
        expected_tools=("delete_annotations",),
        max_tool_calls=1,
    ),
    Scenario(
        id="layer-create-redaction",
        description="Create redaction in specific layer",
        query='Create a redaction to hide all email addresses in document doc-12345 layer "redaction-layer"',
        expected_tools=("create_redaction",),
        max_tool_calls=1,
    ),
    Scenario(
        id="layer-create-regex-redaction",
        description="Create regex redaction in layer",
        query='Create a redaction using pattern "\\d{3}-\\d{2}-\\d{4}" for SSNs in document doc-12345 layer "privacy-layer"',
        expected_tools=("create_redaction",),
        max_tool_calls=1,
    ),
    Scenario(
        id="layer-apply-redactions",
        description="Apply redactions in specific layer",
        query='Apply all pending redactions in document doc-12345 layer "final-redaction-layer"',
        expected_tools=("apply_redactions",),
        max_tool_calls=1,
    ),
    Scenario(
        id="layer-add-watermark",
        description="Add watermark to specific layer",
        query='Add a "REVIEWED" watermark with 50% opacity in document doc-12345 layer "watermark-layer"',
        expected_tools=("add_watermark",),
        max_tool_calls=1,
    ),
    Scenario(
        id="layer-rotate-pages",
        description="Rotate pages in specific layer",
        query='Rotate pages 1 and 3 by 90 degrees in document doc-12345 layer "rotation-layer"',
        expected_tools=("rotate_pages",),
        max_tool_calls=1,
    ),
    Scenario(
        id="layer-add-new-page",
        description="Add new page to specific layer",
        query='Add a new A4 page at position 2 in document doc-12345 layer "additional-pages-layer"',
        expected_tools=("add_new_page",),
        max_tool_calls=1,
    ),
    Scenario(
        id="layer-split-document",
        description="Split document in specific layer",
        query='Split document doc-12345 at page 5 in layer "split-layer"',
        expected_tools=("split_document",),
        max_tool_calls=1,
    ),
    Scenario(
        id="layer-duplicate-document",
        description="Duplicate document from specific layer",
        query='Create a copy of document doc-12345 from layer "approved-layer"',
        expected_tools=("duplicate_document",),
        max_tool_calls=1,
    ),
    Scenario(
        id="layer-extract-tables",
        description="Extract tables from specific layer",
        query='Extract all tables from document doc-12345 in layer "data-layer"',
        expected_tools=("extract_tables",),
        max_tool_calls=1,
    ),
    Scenario(
        id="layer-extract-tables-page-range",
        description="Extract tables from layer with page range",
        query='Extract tables from pages 2-4 of document doc-12345 in layer "analysis-layer"',
        expected_tools=("extract_tables",),
        max_tool_calls=1,
    ),
    Scenario(
        id="layer-extract-key-value-pairs",
        description="Extract key-value pairs from specific layer",
        query='Extract key-value pairs from document doc-12345 in layer "metadata-layer"',
        expected_tools=("extract_key_value_pairs",),
        max_tool_calls=1,
    ),
    Scenario(
        id="layer-search-document",
        description="Search document in specific layer",
        query='Search for "confidential" in document doc-12345 layer "search-layer"',
        expected_tools=("search",),
        max_tool_calls=1,
    ),
    Scenario(
        id="layer-search-with-options",
        description="Search layer with advanced options",
        query='Search for "payment" in pages 3-5 of document doc-12345 layer "finance-layer" including annotations',
        expected_tools=("search",),
        max_tool_calls=1,
    ),
    Scenario(
        id="layer-render-document-page",
        description="Render document page from specific layer",
        query='Show me page 1 of document doc-12345 from layer "final-layer" as an image with width 800 pixels',
        expected_tools=("render_document_page",),
        max_tool_calls=1,
    ),
    Scenario(
        id="layer-merge-document-pages",
        description="Merge documents with layer sources",
        query='Merge pages 1-3 from doc-111 layer "review-layer" with pages 5-7 from doc-222 layer "final-layer"',
        expected_tools=("merge_document_pages",),
        max_tool_calls=1,
    ),

    # Layer workflows
    Scenario(
        id="layer-workflow-review-process",
        description="Complete layer-based review workflow",
        query='Read document info from doc-12345 layer "draft-layer", extract text from page 1, then add a review note at (100, 200) saying "Looks good" in layer "review-layer"',
        expected_tools=("read_document_info", "extract_text", "add_annotation"),
        max_tool_calls=3,
    ),
    Scenario(
        id="layer-workflow-redaction-process",
        description="Layer-based redaction workflow",
        query='Search for email addresses in doc-12345 layer "original-layer", create redactions for them in layer "redaction-layer", then apply the redactions',
        expected_tools=("search", "create_redaction", "apply_redactions"),
        max_tool_calls=3,
    ),
    Scenario(
        id="layer-workflow-form-completion",
        description="Layer-based form completion workflow",
        query='Extract form data from doc-form-123 layer "template-layer", then fill the "signature" field with "Digital Signature" and "date" with "2024-01-15" in layer "completed-layer"',
        expected_tools=("extract_form_data", "fill_form_fields"),
        max_tool_calls=2,
    ),
    Scenario(
        id="layer-workflow-document-preparation",
        description="Complex layer-based document preparation",
        query='Duplicate document doc-12345 from layer "draft-layer", add a watermark saying "FINAL" in the copy, then extract key-value pairs from the watermarked version',
        expected_tools=("duplicate_document", "add_watermark", "extract_key_value_pairs"),
        max_tool_calls=3,
    ),

    # Layer comparison
    Scenario(
        id="layer-comparison-annotations",
        description="Compare annotations between layers",
        query='Show me annotations from both "reviewer-1-layer" and "reviewer-2-layer" in document doc-12345',
        expected_tools=("read_annotations", "read_annotations"),
        max_tool_calls=2,
    ),
    Scenario(
        id="layer-comparison-text-extraction",
        description="Compare text between base document and layer",
        query='Extract text from page 1 of document doc-12345 from both the base document and the "edited-layer" layer',
        expected_tools=("extract_text", "extract_text"),
        max_tool_calls=2,
    ),

    # Layer errors
    Scenario(
        id="layer-error-invalid-layer-name",
        description="Handle invalid layer name gracefully",
        query='Extract text from document doc-12345 in layer "non-existent-layer"',
        expected_tools=("extract_text",),
        max_tool_calls=1,
    ),
    Scenario(
        id="layer-error-invalid-document-with-layer",
        description="Handle invalid document ID with layer",
        query='Read document info from invalid-doc-id in layer "test-layer"',
        expected_tools=("read_document_info",),
        max_tool_calls=1,
    ),
]


def get_scenario(scenario_id: str) -> Scenario:
    """Look up a scenario by ID.

    Raises:
        KeyError: If no scenario has that ID.
    """
    for scenario in TOOL_USAGE_SCENARIOS:
        if scenario.id == scenario_id:
            return scenario
    raise KeyError(scenario_id)
