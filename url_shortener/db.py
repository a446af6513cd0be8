import logging
import os
import sqlite3
from contextlib import contextmanager
from typing import Iterator

log = logging.getLogger(__name__)

DEFAULT_DB = os.path.expanduser(r"~/.url-shortener/storage.db")
DEFAULT_TIMEOUT = 4.0

SCHEMA = """
CREATE TABLE IF NOT EXISTS url(
    id    INTEGER PRIMARY KEY AUTOINCREMENT,
    alias TEXT NOT NULL UNIQUE,
    url   TEXT NOT NULL,
    user  TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_alias ON url(alias);
"""


class Database:
    """Handle to the sqlite file holding the alias table.

    One handle is created per process and passed to whoever needs storage.
    Each operation opens its own connection, so the handle is safe to share
    between request threads.
    """

    def __init__(self, path: str = DEFAULT_DB, timeout: float = DEFAULT_TIMEOUT):
        # Each connection to ":memory:" is a separate empty database.
        if path == ":memory:" or str(path).startswith("file::memory:"):
            raise ValueError("Database needs a file path, in-memory sqlite is not supported")
        self.path = path
        self.timeout = timeout

    def __repr__(self) -> str:
        return f"Database(path={self.path!r})"

    @contextmanager
    def connect(self) -> Iterator[sqlite3.Connection]:
        """Yield a connection; commit on success, roll back on error, always close."""
        conn = sqlite3.connect(self.path, timeout=self.timeout)
        try:
            conn.row_factory = sqlite3.Row
            with conn:
                yield conn
        finally:
            conn.close()

    def init_db(self) -> None:
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)

        with self.connect() as conn:
            # Better concurrent behavior
            conn.execute("PRAGMA journal_mode=WAL;")
            conn.execute("PRAGMA synchronous=NORMAL;")
            conn.executescript(SCHEMA)
        log.debug("schema ready at %s", self.path)
