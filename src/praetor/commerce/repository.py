from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import Document, LineItem


class DocumentRepository(Protocol):
    """Storage for one document kind (quotes or sales)."""

    def list_all(self) -> Sequence[Document]:
        raise NotImplementedError

    def get(self, doc_id: str) -> Optional[Document]:
        raise NotImplementedError

    def create(self, doc: Document) -> None:
        """Insert the header and its items, in order, as one transaction."""
        raise NotImplementedError

    def update(
        self,
        doc_id: str,
        changes: Mapping[str, Any],
        *,
        items: Optional[Sequence[LineItem]] = None,
    ) -> bool:
        """Patch the header columns in ``changes`` and, when given, swap the item set.

        Both happen in one transaction. Returns False when the document does
        not exist.
        """
        raise NotImplementedError

    def delete(self, doc_id: str) -> bool:
        raise NotImplementedError
