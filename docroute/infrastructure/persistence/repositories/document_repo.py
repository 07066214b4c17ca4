"""Document repository. Returns application DTOs."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from docroute.application.dtos.document import DocumentResult
from docroute.domain.enums import DocumentStatus
from docroute.domain.exceptions import ResourceNotFoundException
from docroute.infrastructure.persistence.models.document import Document
from docroute.infrastructure.persistence.repositories.base import BaseRepository
from docroute.shared.utils import utc_now


def _document_to_result(d: Document) -> DocumentResult:
    """Map ORM Document to application DocumentResult."""
    return DocumentResult(
        id=d.id,
        created_by=d.created_by,
        status=DocumentStatus(d.status),
        updated_by=d.updated_by,
        updated_at=d.updated_at,
    )


class DocumentRepository(BaseRepository[Document]):
    """Document repository. Reads, row lock and status writes for the workflow."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Document)

    async def get_by_id(self, document_id: str) -> DocumentResult | None:
        row = await self.get(document_id)
        return _document_to_result(row) if row else None

    async def get_for_update(self, document_id: str) -> DocumentResult | None:
        """Return the document and hold its row lock until the transaction ends.

        Serializes concurrent workflow mutations on the same document.
        """
        result = await self.db.execute(
            select(Document)
            .where(Document.id == document_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        row = result.scalar_one_or_none()
        return _document_to_result(row) if row else None

    async def set_status(
        self, document_id: str, status: DocumentStatus, updated_by: str | None
    ) -> DocumentResult:
        """Write status and updated_by/updated_at; raises ResourceNotFoundException if missing."""
        row = await self.get(document_id)
        if row is None:
            raise ResourceNotFoundException("document", document_id)
        row.status = status.value
        row.updated_by = updated_by
        row.updated_at = utc_now()
        await self.db.flush()
        return _document_to_result(row)
