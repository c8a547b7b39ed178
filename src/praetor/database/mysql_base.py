from __future__ import annotations

import json
from contextlib import contextmanager
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

import mysql.connector
from mysql.connector import errorcode

from ..core.exceptions import ConflictError, ReferentialError
from .connection import DatabaseConnection

_MISSING_REFERENCE = {
    errorcode.ER_NO_REFERENCED_ROW,
    errorcode.ER_NO_REFERENCED_ROW_2,
}
_STILL_REFERENCED = {
    errorcode.ER_ROW_IS_REFERENCED,
    errorcode.ER_ROW_IS_REFERENCED_2,
}


def translate_integrity_error(exc: mysql.connector.IntegrityError) -> Exception:
    """Map a MySQL integrity failure onto the domain error taxonomy."""
    if exc.errno == errorcode.ER_DUP_ENTRY:
        return ConflictError("Record already exists")
    if exc.errno in _MISSING_REFERENCE:
        return ReferentialError("Referenced record does not exist")
    if exc.errno in _STILL_REFERENCED:
        return ConflictError("Record is still referenced by other records")
    return exc


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True, transaction: bool = False):
    """Open a connection and cursor; commit on success, roll back on any error.

    With ``transaction=True`` the transaction is started explicitly so that
    every statement run on the cursor commits or rolls back as one unit.
    """
    conn = conn_factory.connect()
    try:
        if transaction:
            conn.start_transaction()
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.IntegrityError as exc:
        conn.rollback()
        translated = translate_integrity_error(exc)
        if translated is exc:
            raise
        raise translated from exc
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def placeholders(values: Sequence[Any]) -> str:
    """``%s,%s,%s`` for an IN clause of ``len(values)`` items."""
    return ",".join(["%s"] * len(values))


def patch_assignments(changes: Mapping[str, Any], columns: Sequence[str]) -> Tuple[List[str], list]:
    """``col=%s`` pairs and parameters for the columns present in ``changes``.

    Columns are rendered in ``columns`` order; keys outside it are ignored.
    """
    present = [c for c in columns if c in changes]
    return [f"{c}=%s" for c in present], [changes[c] for c in present]


def to_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, Decimal):
        return float(value)
    return float(value)


def to_epoch_ms(value: Any) -> Optional[int]:
    """Normalize a DATETIME/TIMESTAMP column to epoch milliseconds."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return int(value.timestamp() * 1000)
    return int(float(value) * 1000)


def load_json(value: Any, default: Any) -> Any:
    """Decode a JSON column; mysql-connector may hand back str, bytes or parsed data."""
    if value is None:
        return default
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    if isinstance(value, str):
        return json.loads(value) if value.strip() else default
    return value
