from __future__ import annotations

from collections import defaultdict
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import (
    db_cursor,
    fetchall,
    fetchone,
    patch_assignments,
    placeholders,
    to_epoch_ms,
    to_float,
)
from .model import Document, DocumentKind, LineItem
from .repository import DocumentRepository


def _row_to_item(r: dict) -> LineItem:
    return LineItem(
        item_id=r["id"],
        product_id=r.get("product_id"),
        product_name=r["product_name"],
        quantity=to_float(r["quantity"]),
        unit_price=to_float(r["unit_price"]),
        discount=to_float(r.get("discount")) or 0.0,
    )


class MySQLDocumentRepository(DocumentRepository):
    def __init__(self, conn_factory: DatabaseConnection, kind: DocumentKind):
        self._conn_factory = conn_factory
        self._kind = kind

    def _header_columns(self) -> List[str]:
        return [
            "client_id",
            "client_name",
            "payment_terms",
            "discount",
            "status",
            "notes",
            *[e.column for e in self._kind.extras],
        ]

    def _header_values(self, doc: Document) -> list:
        return [
            doc.client_id,
            doc.client_name,
            doc.payment_terms,
            doc.discount,
            doc.status,
            doc.notes,
            *[doc.extras.get(e.key) for e in self._kind.extras],
        ]

    def _select_header_sql(self) -> str:
        cols = ", ".join(["id", *self._header_columns(), "created_at", "updated_at"])
        return f"SELECT {cols} FROM {self._kind.table}"

    def _select_items_sql(self) -> str:
        k = self._kind
        return (
            f"SELECT id, {k.parent_column} AS parent_id, product_id, product_name, quantity, unit_price, discount "
            f"FROM {k.item_table}"
        )

    def _row_to_doc(self, r: dict, items: Sequence[LineItem]) -> Document:
        return Document(
            kind=self._kind,
            doc_id=r["id"],
            client_id=r["client_id"],
            client_name=r["client_name"],
            payment_terms=r["payment_terms"],
            discount=to_float(r.get("discount")) or 0.0,
            status=r["status"],
            notes=r.get("notes"),
            extras={e.key: r.get(e.column) for e in self._kind.extras},
            items=tuple(items),
            created_at=to_epoch_ms(r.get("created_at")),
            updated_at=to_epoch_ms(r.get("updated_at")),
        )

    def _insert_items(self, cur, doc_id: str, items: Sequence[LineItem]) -> None:
        k = self._kind
        for position, item in enumerate(items):
            cur.execute(
                f"""
                INSERT INTO {k.item_table}(id, {k.parent_column}, position, product_id, product_name,
                                          quantity, unit_price, discount)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    item.item_id,
                    doc_id,
                    position,
                    item.product_id,
                    item.product_name,
                    item.quantity,
                    item.unit_price,
                    item.discount,
                ),
            )

    def list_all(self) -> Sequence[Document]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{self._select_header_sql()} ORDER BY created_at DESC, id")
            headers = fetchall(cur)
            cur.execute(f"{self._select_items_sql()} ORDER BY parent_id, position")
            item_rows = fetchall(cur)

        by_parent: Dict[str, List[LineItem]] = defaultdict(list)
        for r in item_rows:
            by_parent[r["parent_id"]].append(_row_to_item(r))
        return [self._row_to_doc(h, by_parent.get(h["id"], [])) for h in headers]

    def get(self, doc_id: str) -> Optional[Document]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{self._select_header_sql()} WHERE id=%s", (doc_id,))
            header = fetchone(cur)
            if not header:
                return None
            cur.execute(
                f"{self._select_items_sql()} WHERE {self._kind.parent_column}=%s ORDER BY position",
                (doc_id,),
            )
            items = [_row_to_item(r) for r in fetchall(cur)]
        return self._row_to_doc(header, items)

    def create(self, doc: Document) -> None:
        cols = ["id", *self._header_columns()]
        with db_cursor(self._conn_factory, transaction=True) as (_, cur):
            cur.execute(
                f"INSERT INTO {self._kind.table}({', '.join(cols)}) VALUES({placeholders(cols)})",
                (doc.doc_id, *self._header_values(doc)),
            )
            self._insert_items(cur, doc.doc_id, doc.items)

    def update(
        self,
        doc_id: str,
        changes: Mapping[str, Any],
        *,
        items: Optional[Sequence[LineItem]] = None,
    ) -> bool:
        k = self._kind
        sets, params = patch_assignments(changes, self._header_columns())
        sets.append("updated_at=CURRENT_TIMESTAMP(3)")
        with db_cursor(self._conn_factory, transaction=True) as (_, cur):
            cur.execute(f"SELECT id FROM {k.table} WHERE id=%s FOR UPDATE", (doc_id,))
            if not fetchone(cur):
                return False
            cur.execute(f"UPDATE {k.table} SET {', '.join(sets)} WHERE id=%s", (*params, doc_id))
            if items is not None:
                cur.execute(f"DELETE FROM {k.item_table} WHERE {k.parent_column}=%s", (doc_id,))
                self._insert_items(cur, doc_id, items)
            return True

    def delete(self, doc_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"DELETE FROM {self._kind.table} WHERE id=%s", (doc_id,))
            return cur.rowcount > 0
