from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

import mysql.connector
from mysql.connector import errorcode

from ..core.exceptions import ConflictError, DomainError, NotFoundError, StorageError
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield ``(conn, cursor)`` and commit on success, roll back on error.

    Integrity errors are re-raised untouched so the calling repository can
    interpret them; any other driver error becomes a StorageError.
    """
    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as exc:
        logger.error("Database connection failed: %s", exc)
        raise StorageError("Database unavailable") from exc

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.IntegrityError:
        conn.rollback()
        raise
    except mysql.connector.Error as exc:
        conn.rollback()
        logger.exception("Database operation failed")
        raise StorageError("Database error") from exc
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


def integrity_to_domain(
    exc: mysql.connector.IntegrityError,
    *,
    duplicate: str = "Resource already exists",
    missing_parent: str = "Referenced resource not found",
    referenced: str = "Resource is still referenced",
) -> DomainError:
    """Map a constraint violation to the domain error callers expect."""
    if exc.errno == errorcode.ER_DUP_ENTRY:
        return ConflictError(duplicate)
    if exc.errno == errorcode.ER_NO_REFERENCED_ROW_2:
        return NotFoundError(missing_parent)
    if exc.errno == errorcode.ER_ROW_IS_REFERENCED_2:
        return ConflictError(referenced)
    logger.error("Unexpected integrity error errno=%s: %s", exc.errno, exc)
    return StorageError("Database error")


@contextmanager
def constraint_guard(**messages: str) -> Iterator[None]:
    """Translate IntegrityError raised inside the block via integrity_to_domain."""
    try:
        yield
    except mysql.connector.IntegrityError as exc:
        err = integrity_to_domain(exc, **messages)
        logger.info("Write rejected by constraint: %s", err)
        raise err from exc


def like_escape(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
