from __future__ import annotations

import mysql.connector
import pytest

from staffdesk.core.exceptions import ConflictError, NotFoundError, StorageError, ValidationError
from staffdesk.database.mysql_base import constraint_guard, db_cursor, integrity_to_domain, like_escape


class FakeCursor:
    def __init__(self):
        self.closed = False

    def close(self):
        self.closed = True


class FakeConnection:
    def __init__(self):
        self.cursor_obj = FakeCursor()
        self.committed = self.rolled_back = self.closed = False

    def cursor(self, dictionary=True):
        return self.cursor_obj

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class FakeFactory:
    def __init__(self, conn=None, error=None):
        self.conn = conn or FakeConnection()
        self.error = error

    def connect(self, *, with_database=True):
        if self.error:
            raise self.error
        return self.conn


def _integrity(errno: int) -> mysql.connector.IntegrityError:
    return mysql.connector.IntegrityError(msg="constraint", errno=errno)


@pytest.mark.parametrize(
    "errno, expected",
    [(1062, ConflictError), (1452, NotFoundError), (1451, ConflictError), (1048, StorageError)],
)
def test_integrity_errors_map_by_errno(errno, expected):
    assert isinstance(integrity_to_domain(_integrity(errno)), expected)


def test_constraint_guard_uses_caller_messages():
    with pytest.raises(ConflictError, match="Identity number already exists"):
        with constraint_guard(duplicate="Identity number already exists"):
            raise _integrity(1062)


def test_cursor_commits_and_closes():
    factory = FakeFactory()
    with db_cursor(factory) as (conn, cur):
        assert cur is factory.conn.cursor_obj

    assert factory.conn.committed and factory.conn.closed and cur.closed
    assert not factory.conn.rolled_back


def test_cursor_rolls_back_integrity_errors_untouched():
    factory = FakeFactory()
    with pytest.raises(mysql.connector.IntegrityError):
        with db_cursor(factory):
            raise _integrity(1062)

    assert factory.conn.rolled_back and not factory.conn.committed and factory.conn.closed


def test_cursor_wraps_other_driver_errors():
    factory = FakeFactory()
    with pytest.raises(StorageError):
        with db_cursor(factory):
            raise mysql.connector.ProgrammingError(msg="bad sql", errno=1064)
    assert factory.conn.rolled_back


def test_cursor_lets_domain_errors_through():
    factory = FakeFactory()
    with pytest.raises(ValidationError):
        with db_cursor(factory):
            raise ValidationError("nope")
    assert factory.conn.rolled_back


def test_connection_failure_is_storage_error():
    factory = FakeFactory(error=mysql.connector.InterfaceError(msg="cannot connect", errno=2003))
    with pytest.raises(StorageError, match="unavailable"):
        with db_cursor(factory):
            pass


def test_like_escape():
    assert like_escape("50%_off\\") == "50\\%\\_off\\\\"
