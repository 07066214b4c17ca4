"""DTOs for registry documents as seen by the workflow (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import datetime

from docroute.domain.enums import DocumentStatus


@dataclass(frozen=True)
class DocumentResult:
    """Document read-model. Only the fields the workflow needs; metadata lives elsewhere."""

    id: str
    created_by: str | None
    status: DocumentStatus
    updated_by: str | None = None
    updated_at: datetime | None = None

    def is_created_by(self, user_id: str) -> bool:
        """Return whether user_id authored the document."""
        return self.created_by is not None and self.created_by == user_id
