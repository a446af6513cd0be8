from __future__ import annotations

import logging
import sqlite3

from .db import Database
from .errors import AliasExists, AliasNotFound, StorageError, ValidationFailed, WrongUser

log = logging.getLogger(__name__)


def _require(**fields: str) -> None:
    missing = [name for name, value in fields.items() if not value]
    if missing:
        raise ValidationFailed([f"field {name} is a required field" for name in missing])


def _is_unique_violation(exc: sqlite3.IntegrityError) -> bool:
    return "UNIQUE constraint failed" in str(exc)


def save_url(db: Database, alias: str, url: str, user: str) -> int:
    """Insert a new mapping and return its row id.

    Raises AliasExists when the alias is taken and StorageError for any
    other database failure.
    """
    _require(alias=alias, url=url, user=user)
    try:
        with db.connect() as conn:
            cur = conn.execute(
                "INSERT INTO url (url, alias, user) VALUES (?, ?, ?)",
                (url, alias, user),
            )
            return cur.lastrowid
    except sqlite3.IntegrityError as exc:
        if _is_unique_violation(exc):
            raise AliasExists(alias) from exc
        raise StorageError(f"save_url: {exc}") from exc
    except sqlite3.Error as exc:
        raise StorageError(f"save_url: {exc}") from exc


def get_url(db: Database, alias: str) -> str:
    try:
        with db.connect() as conn:
            row = conn.execute("SELECT url FROM url WHERE alias = ?", (alias,)).fetchone()
    except sqlite3.Error as exc:
        raise StorageError(f"get_url: {exc}") from exc

    if row is None:
        raise AliasNotFound(alias)
    return row["url"]


def delete_alias(db: Database, alias: str, user: str) -> None:
    """Delete the mapping for ``alias`` if ``user`` owns it.

    The conditional DELETE runs first. Only when it affects no rows is the
    stored owner read back, in the same transaction, to tell a foreign alias
    (WrongUser) from a missing one. Deleting a missing alias succeeds.
    """
    _require(alias=alias, user=user)
    try:
        with db.connect() as conn:
            cur = conn.execute("DELETE FROM url WHERE alias = ? AND user = ?", (alias, user))
            if cur.rowcount > 0:
                return
            row = conn.execute("SELECT user FROM url WHERE alias = ?", (alias,)).fetchone()
    except sqlite3.Error as exc:
        raise StorageError(f"delete_alias: {exc}") from exc

    if row is not None:
        raise WrongUser(alias)
    log.debug("delete of missing alias %s treated as done", alias)
