import re
from urllib.parse import urlparse

ALIAS_RE = re.compile(r"^[A-Za-z0-9_-]{1,64}$")
RESERVED = {"del", "healthz"}


def is_valid_alias(alias: str) -> bool:
    return bool(ALIAS_RE.match(alias)) and alias not in RESERVED


def is_valid_url(url: str) -> bool:
    try:
        p = urlparse(url)
        return p.scheme in ("http", "https") and bool(p.netloc)
    except ValueError:
        return False


def _text(payload: dict, key: str) -> str:
    value = payload.get(key)
    return value.strip() if isinstance(value, str) else ""


def validate_save(payload: dict):
    errors = []
    url = _text(payload, "url")
    if not url:
        errors.append("field url is a required field")
    elif not is_valid_url(url):
        errors.append("field url is not a valid URL")

    alias = payload.get("alias")
    if alias not in (None, "") and not (isinstance(alias, str) and is_valid_alias(alias)):
        errors.append("field alias must be 1-64 letters, digits, '-' or '_'")

    if not _text(payload, "user"):
        errors.append("field user is a required field")
    return errors


def validate_delete(payload: dict):
    errors = []
    if not _text(payload, "alias"):
        errors.append("field alias is a required field")
    if not _text(payload, "user"):
        errors.append("field user is a required field")
    return errors
