import json
import logging
import time
import uuid

from flask import Flask, g, jsonify, request
from werkzeug.exceptions import HTTPException

log = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-Id"


def init_app(app: Flask) -> None:
    """Attach request ids, access logging and the catch-all error handler."""

    @app.before_request
    def assign_request_id():
        g.request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        g.started = time.perf_counter()

    @app.after_request
    def log_response(response):
        request_id = g.get("request_id")
        if request_id:
            response.headers[REQUEST_ID_HEADER] = request_id
        duration_ms = (time.perf_counter() - g.get("started", time.perf_counter())) * 1000
        log.info(
            "%s %s -> %s (%.2fms)",
            request.method,
            request.path,
            response.status_code,
            duration_ms,
            extra={"request_id": request_id},
        )
        return response

    @app.errorhandler(Exception)
    def recover(exc):
        if isinstance(exc, HTTPException):
            if exc.code is None or exc.code < 400:
                return exc
            response = exc.get_response()
            response.set_data(json.dumps({"status": "Error", "error": exc.description}))
            response.content_type = "application/json"
            return response
        log.exception("unhandled error", extra={"request_id": g.get("request_id")})
        return jsonify({"status": "Error", "error": "internal error"}), 500
