from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from ..common.ids import new_id
from ..common.validators import (
    optional_iso_date,
    optional_non_empty,
    optional_non_negative_number,
    optional_text,
    parse_non_negative_number,
    parse_positive_number,
    require_iso_date,
    require_non_empty,
)
from ..core.constants import DEFAULT_PAYMENT_TERMS
from ..core.exceptions import NotFoundError, ReferentialError, ValidationError
from .model import Document, DocumentKind, LineItem
from .repository import DocumentRepository


def parse_items(value: Any, kind: DocumentKind) -> List[LineItem]:
    """Validate a non-empty item list, keeping input order.

    Errors name the offending path, e.g. ``items[2].quantity``.
    """
    if not isinstance(value, list) or not value:
        raise ValidationError("items must be a non-empty array", "items")
    items: List[LineItem] = []
    for i, raw in enumerate(value):
        path = f"items[{i}]"
        if not isinstance(raw, dict):
            raise ValidationError(f"{path} must be an object", path)
        discount = optional_non_negative_number(raw.get("discount"), f"{path}.discount")
        items.append(
            LineItem(
                item_id=new_id(kind.item_prefix),
                product_id=optional_non_empty(raw.get("productId"), f"{path}.productId"),
                product_name=require_non_empty(raw.get("productName"), f"{path}.productName"),
                quantity=parse_positive_number(raw.get("quantity"), f"{path}.quantity"),
                unit_price=parse_non_negative_number(raw.get("unitPrice"), f"{path}.unitPrice"),
                discount=discount if discount is not None else 0.0,
            )
        )
    return items


class CompositeWriter:
    """Create, patch and delete a header together with its ordered items.

    Every payload is fully validated before the repository is touched.
    """

    def __init__(self, documents: DocumentRepository, kind: DocumentKind):
        self._documents = documents
        self._kind = kind

    def _not_found(self) -> NotFoundError:
        return NotFoundError(f"{self._kind.label} not found")

    def _parse_extra(self, extra, value, *, creating: bool):
        if extra.is_date:
            if creating and extra.required_on_create:
                return require_iso_date(value, extra.key)
            return optional_iso_date(value, extra.key)
        if creating and extra.required_on_create:
            return require_non_empty(value, extra.key)
        return optional_non_empty(value, extra.key)

    def list_all(self) -> Sequence[Document]:
        return self._documents.list_all()

    def create(self, payload: dict) -> Document:
        client_id = require_non_empty(payload.get("clientId"), "clientId")
        client_name = require_non_empty(payload.get("clientName"), "clientName")
        items = parse_items(payload.get("items"), self._kind)
        discount = optional_non_negative_number(payload.get("discount"), "discount")
        extras = {e.key: self._parse_extra(e, payload.get(e.key), creating=True) for e in self._kind.extras}

        doc = Document(
            kind=self._kind,
            doc_id=new_id(self._kind.id_prefix),
            client_id=client_id,
            client_name=client_name,
            payment_terms=optional_non_empty(payload.get("paymentTerms"), "paymentTerms") or DEFAULT_PAYMENT_TERMS,
            discount=discount if discount is not None else 0.0,
            status=optional_non_empty(payload.get("status"), "status") or self._kind.default_status,
            notes=optional_text(payload.get("notes"), "notes"),
            extras=extras,
            items=tuple(items),
        )
        try:
            self._documents.create(doc)
        except ReferentialError:
            raise ReferentialError("Linked quote not found")
        return self._documents.get(doc.doc_id) or doc

    def update(self, doc_id: str, payload: dict) -> Document:
        client_id = optional_non_empty(payload.get("clientId"), "clientId")
        client_name = optional_non_empty(payload.get("clientName"), "clientName")
        payment_terms = optional_non_empty(payload.get("paymentTerms"), "paymentTerms")
        discount = optional_non_negative_number(payload.get("discount"), "discount")
        status = optional_non_empty(payload.get("status"), "status")
        notes = optional_text(payload.get("notes"), "notes")
        items: Optional[List[LineItem]] = None
        if payload.get("items") is not None:
            items = parse_items(payload.get("items"), self._kind)
        changes: Dict[str, Any] = {
            "client_id": client_id,
            "client_name": client_name,
            "payment_terms": payment_terms,
            "discount": discount,
            "status": status,
            "notes": notes,
        }
        for extra in self._kind.extras:
            if extra.updatable:
                changes[extra.column] = self._parse_extra(extra, payload.get(extra.key), creating=False)

        # Only supplied columns are written; the rest keep whatever is stored.
        patch = {column: value for column, value in changes.items() if value is not None}
        if not self._documents.update(doc_id, patch, items=items):
            raise self._not_found()
        updated = self._documents.get(doc_id)
        if updated is None:
            raise self._not_found()
        return updated

    def delete(self, doc_id: str) -> None:
        if not self._documents.delete(doc_id):
            raise self._not_found()
