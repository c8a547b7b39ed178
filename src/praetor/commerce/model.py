"""Quotes and sales.

Both are a header owning an ordered list of line items. They differ only in
table names, defaults and one extra header field each, which
:class:`DocumentKind` captures so one writer serves both.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, Optional, Tuple

from ..common.datetime_utils import format_date
from ..core.constants import DEFAULT_QUOTE_STATUS, DEFAULT_SALE_STATUS


@dataclass(frozen=True)
class ExtraField:
    key: str
    column: str
    is_date: bool = False
    required_on_create: bool = False
    updatable: bool = True


@dataclass(frozen=True)
class DocumentKind:
    label: str
    table: str
    item_table: str
    parent_column: str
    parent_key: str
    id_prefix: str
    item_prefix: str
    default_status: str
    extras: Tuple[ExtraField, ...] = ()


QUOTE = DocumentKind(
    label="Quote",
    table="quotes",
    item_table="quote_items",
    parent_column="quote_id",
    parent_key="quoteId",
    id_prefix="q",
    item_prefix="qi",
    default_status=DEFAULT_QUOTE_STATUS,
    extras=(ExtraField("expirationDate", "expiration_date", is_date=True, required_on_create=True),),
)

SALE = DocumentKind(
    label="Sale",
    table="sales",
    item_table="sale_items",
    parent_column="sale_id",
    parent_key="saleId",
    id_prefix="s",
    item_prefix="si",
    default_status=DEFAULT_SALE_STATUS,
    extras=(ExtraField("linkedQuoteId", "linked_quote_id", updatable=False),),
)


@dataclass(frozen=True)
class LineItem:
    item_id: str
    product_name: str
    quantity: float
    unit_price: float
    discount: float = 0.0
    product_id: Optional[str] = None

    def to_dict(self, parent_key: str, parent_id: str) -> dict:
        return {
            "id": self.item_id,
            parent_key: parent_id,
            "productId": self.product_id,
            "productName": self.product_name,
            "quantity": self.quantity,
            "unitPrice": self.unit_price,
            "discount": self.discount,
        }


@dataclass(frozen=True)
class Document:
    kind: DocumentKind
    doc_id: str
    client_id: str
    client_name: str
    payment_terms: str
    discount: float
    status: str
    notes: Optional[str] = None
    extras: Dict[str, Any] = field(default_factory=dict)
    items: Tuple[LineItem, ...] = ()
    created_at: Optional[int] = None
    updated_at: Optional[int] = None

    def to_dict(self) -> dict:
        out = {
            "id": self.doc_id,
            "clientId": self.client_id,
            "clientName": self.client_name,
            "paymentTerms": self.payment_terms,
            "discount": self.discount,
            "status": self.status,
            "notes": self.notes,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }
        for extra in self.kind.extras:
            value = self.extras.get(extra.key)
            out[extra.key] = format_date(value) if extra.is_date and isinstance(value, date) else value
        out["items"] = [item.to_dict(self.kind.parent_key, self.doc_id) for item in self.items]
        return out
