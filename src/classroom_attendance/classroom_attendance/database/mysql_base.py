from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

import mysql.connector

from ..core.exceptions import PersistenceError
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


def _rollback(conn) -> None:
    # A failed rollback must not mask the error that triggered it.
    try:
        conn.rollback()
    except mysql.connector.Error:
        logger.warning("Rollback failed", exc_info=True)


def _release(conn) -> None:
    # Returning a connection to the pool happens after commit; its failure is only logged.
    try:
        conn.close()
    except mysql.connector.Error:
        logger.warning("Releasing connection failed", exc_info=True)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True) -> Iterator[Tuple[Any, Any]]:
    """One transaction on one pooled connection.

    Commits when the block exits normally, rolls back on any exception and always
    releases the connection. Driver errors surface as ``PersistenceError``.
    """
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as exc:
        _rollback(conn)
        raise PersistenceError("Database operation failed") from exc
    except Exception:
        _rollback(conn)
        raise
    finally:
        _release(conn)


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def as_float(value: Any) -> Optional[float]:
    """DECIMAL columns come back as ``Decimal``; services work with floats."""
    return None if value is None else float(value)


class Store:
    """Transactional access to the relational store."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def transaction(self):
        return db_cursor(self._conn_factory)

    def execute(self, query: str, params: Sequence[Any] = ()) -> List[Dict[str, Any]]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(query, tuple(params))
            if not cur.with_rows:
                return []
            return fetchall(cur)
