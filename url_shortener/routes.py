import logging

from flask import Blueprint, current_app, g, jsonify, redirect, request

from .errors import AliasExists, AliasNotFound, ShortenerError, WrongUser
from .models import delete_alias, get_url
from .service import shorten
from .validation import validate_delete, validate_save

log = logging.getLogger(__name__)

bp = Blueprint("main", __name__)

DB_EXTENSION = "url_shortener.db"


def get_storage():
    return current_app.extensions[DB_EXTENSION]


def ok(status=200, **fields):
    return jsonify({"status": "OK", **fields}), status


def error(message, status):
    return jsonify({"status": "Error", "error": message}), status


def _extra():
    return {"request_id": g.get("request_id")}


def _read_body():
    """Return (payload, error_response)."""
    if not request.get_data():
        log.error("request body is empty", extra=_extra())
        return None, error("request body is empty", 400)
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        log.error("fail while decoding request body", extra=_extra())
        return None, error("fail while decoding request body", 400)
    return payload, None


@bp.route("/healthz")
def healthz():
    return "ok"


# --- Save ---


@bp.route("/", methods=["POST"])
def save():
    payload, failed = _read_body()
    if failed:
        return failed

    errors = validate_save(payload)
    if errors:
        log.error("invalid request: %s", "; ".join(errors), extra=_extra())
        return error(", ".join(errors), 400)

    url = payload["url"].strip()
    user = payload["user"].strip()
    alias = payload.get("alias") or None

    try:
        alias = shorten(get_storage(), url, user, alias=alias)
    except AliasExists as exc:
        log.info("alias already exists: %s", exc, extra=_extra())
        return error("alias already exists", 409)
    except ShortenerError:
        log.exception("failed to save url", extra=_extra())
        return error("failed to save url", 500)

    return ok(201, alias=alias)


# --- Delete ---


@bp.route("/del", methods=["POST"])
def delete():
    payload, failed = _read_body()
    if failed:
        return failed

    errors = validate_delete(payload)
    if errors:
        log.error("invalid request: %s", "; ".join(errors), extra=_extra())
        return error(", ".join(errors), 400)

    alias = payload["alias"].strip()
    user = payload["user"].strip()

    try:
        delete_alias(get_storage(), alias, user)
    except WrongUser:
        log.error("wrong user for alias %s", alias, extra=_extra())
        return error("wrong user", 403)
    except ShortenerError:
        log.exception("failed to delete alias", extra=_extra())
        return error("failed to delete alias", 500)

    log.info("alias deleted: %s", alias, extra=_extra())
    return ok(alias=alias)


# --- Redirect (catch-all, must be last) ---


@bp.route("/<alias>")
def redirect_alias(alias):
    try:
        url = get_url(get_storage(), alias)
    except AliasNotFound:
        log.info("url not found: %s", alias, extra=_extra())
        return error("not found", 404)
    except ShortenerError:
        log.exception("failed to get url", extra=_extra())
        return error("internal error", 500)

    log.debug("redirecting %s -> %s", alias, url, extra=_extra())
    return redirect(url, code=302)
