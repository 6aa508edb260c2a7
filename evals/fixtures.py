"""Backend fixtures for the tool usage evaluation.

Scenarios refer to fixed document IDs and layer names, so before each
model is evaluated the fixture documents are uploaded again (replacing
whatever the previous model's run did to them) and their layers are
created.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from docengine_mcp.clients import layers
from docengine_mcp.clients.client import DocumentEngineClient
from docengine_mcp.utils.errors import DocumentEngineError

logger = logging.getLogger(__name__)


class FixtureError(Exception):
    """A fixture document could not be uploaded."""


@dataclass(frozen=True)
class FixtureDocument:
    """A PDF from the assets directory uploaded under a fixed ID."""

    file_name: str
    document_id: str
    title: str


FIXTURE_DOCUMENTS: list[FixtureDocument] = [
    FixtureDocument("contract.pdf", "doc-12345", "Sample Contract Document"),
    FixtureDocument("form.pdf", "doc-form-123", "Sample Form Document"),
    FixtureDocument("ocr.pdf", "doc-scan-123", "Sample Scanned Document"),
    FixtureDocument("report.pdf", "doc-report-456", "Sample Report Document"),
    FixtureDocument("A.pdf", "doc-111", "Sample A Document"),
    FixtureDocument("B.pdf", "doc-222", "Sample B Document"),
]

# "non-existent-layer" is deliberately absent; scenarios use it for error handling.
FIXTURE_LAYERS: list[str] = [
    "additional-pages-layer",
    "analysis-layer",
    "annotation-layer",
    "approval-layer",
    "approved-layer",
    "comments-layer",
    "completed-layer",
    "data-layer",
    "draft-layer",
    "edit-layer",
    "edited-layer",
    "final-layer",
    "final-redaction-layer",
    "finance-layer",
    "markup-layer",
    "metadata-layer",
    "ocr-layer",
    "original-layer",
    "privacy-layer",
    "redaction-layer",
    "review-layer",
    "reviewer-1-layer",
    "reviewer-2-layer",
    "rotation-layer",
    "search-layer",
    "split-layer",
    "temp-layer",
    "template-layer",
    "test-layer",
    "watermark-layer",
]


class FixtureSeeder:
    """Uploads the fixture documents and their layers.

    Seeding is idempotent: documents are uploaded with overwrite, and a
    layer that cannot be created is assumed to exist already.
    """

    def __init__(
        self,
        client: DocumentEngineClient,
        assets_dir: Path,
        documents: list[FixtureDocument] | None = None,
        layer_names: list[str] | None = None,
    ) -> None:
        self._client = client
        self._assets_dir = assets_dir
        self._documents = FIXTURE_DOCUMENTS if documents is None else documents
        self._layer_names = FIXTURE_LAYERS if layer_names is None else layer_names

    async def seed(self) -> None:
        """Upload every fixture document, then create its layers.

        Raises:
            FixtureError: If a document cannot be uploaded.
        """
        logger.info(f"Uploading {len(self._documents)} fixture documents")
        for document in self._documents:
            await self._upload(document)
            await self._create_layers(document.document_id)
        logger.info("All fixture documents and layers uploaded")

    async def _upload(self, document: FixtureDocument) -> None:
        path = self._assets_dir / document.file_name
        logger.info(f"Uploading {document.document_id} ({document.title})")
        try:
            await self._client.upload_document(
                path, document.document_id, document.title, overwrite=True
            )
        except (DocumentEngineError, OSError) as e:
            raise FixtureError(
                f"Failed to upload test document {document.document_id}: {e}"
            ) from e

    async def _create_layers(self, document_id: str) -> None:
        logger.debug(f"Creating {len(self._layer_names)} layers for {document_id}")
        for name in self._layer_names:
            try:
                await layers.create_layer(self._client, document_id, name)
            except DocumentEngineError as e:
                logger.warning(f"Layer {name} may already exist: {e}")
