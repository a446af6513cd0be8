import sqlite3

import pytest

from url_shortener.db import Database
from url_shortener.errors import (
    AliasExists,
    AliasNotFound,
    StorageError,
    ValidationFailed,
    WrongUser,
)
from url_shortener.models import delete_alias, get_url, save_url


def test_save_then_get(db):
    save_url(db, "abc", "https://example.com", "alice")
    assert get_url(db, "abc") == "https://example.com"


def test_ids_increase(db):
    first = save_url(db, "one", "https://example.com/1", "alice")
    second = save_url(db, "two", "https://example.com/2", "alice")
    assert second > first

    delete_alias(db, "two", "alice")
    third = save_url(db, "three", "https://example.com/3", "alice")
    assert third > second


def test_in_memory_database_is_rejected():
    with pytest.raises(ValueError):
        Database(":memory:")


def test_duplicate_alias_keeps_original(db):
    save_url(db, "abc", "https://example.com", "alice")
    with pytest.raises(AliasExists):
        save_url(db, "abc", "https://other.example.com", "bob")
    assert get_url(db, "abc") == "https://example.com"


def test_get_missing_alias(db):
    with pytest.raises(AliasNotFound):
        get_url(db, "never-saved")


def test_aliases_are_case_sensitive(db):
    save_url(db, "Abc", "https://example.com/upper", "alice")
    save_url(db, "abc", "https://example.com/lower", "alice")
    assert get_url(db, "Abc") == "https://example.com/upper"
    assert get_url(db, "abc") == "https://example.com/lower"


@pytest.mark.parametrize(
    "alias, url, user",
    [("", "https://example.com", "alice"), ("abc", "", "alice"), ("abc", "https://example.com", "")],
)
def test_save_requires_all_fields(db, alias, url, user):
    with pytest.raises(ValidationFailed):
        save_url(db, alias, url, user)


def test_delete_by_other_user_is_refused(db):
    save_url(db, "abc", "https://example.com", "alice")
    with pytest.raises(WrongUser):
        delete_alias(db, "abc", "bob")
    assert get_url(db, "abc") == "https://example.com"


def test_delete_by_owner(db):
    save_url(db, "abc", "https://example.com", "alice")
    delete_alias(db, "abc", "alice")
    with pytest.raises(AliasNotFound):
        get_url(db, "abc")


def test_delete_missing_alias_succeeds(db):
    delete_alias(db, "ghost", "alice")


def test_alias_can_be_reused_after_delete(db):
    save_url(db, "abc", "https://example.com", "alice")
    delete_alias(db, "abc", "alice")
    save_url(db, "abc", "https://example.org", "bob")
    assert get_url(db, "abc") == "https://example.org"


def test_scenario(db):
    save_url(db, "abc", "https://example.com", "alice")
    assert get_url(db, "abc") == "https://example.com"
    with pytest.raises(WrongUser):
        delete_alias(db, "abc", "bob")
    delete_alias(db, "abc", "alice")
    with pytest.raises(AliasNotFound):
        get_url(db, "abc")


def test_init_db_is_idempotent(db):
    save_url(db, "abc", "https://example.com", "alice")
    db.init_db()
    assert get_url(db, "abc") == "https://example.com"


def test_schema_has_alias_index(db):
    with db.connect() as conn:
        names = {row["name"] for row in conn.execute("SELECT name FROM sqlite_master WHERE type = 'index'")}
    assert "idx_alias" in names


def test_storage_errors_are_translated(db):
    with db.connect() as conn:
        conn.execute("DROP TABLE url")

    with pytest.raises(StorageError) as excinfo:
        get_url(db, "abc")
    assert isinstance(excinfo.value.__cause__, sqlite3.Error)

    with pytest.raises(StorageError):
        save_url(db, "abc", "https://example.com", "alice")
    with pytest.raises(StorageError):
        delete_alias(db, "abc", "alice")


def test_unreachable_database(tmp_path):
    db = Database(str(tmp_path / "missing-dir" / "storage.db"))
    with pytest.raises(StorageError):
        get_url(db, "abc")
