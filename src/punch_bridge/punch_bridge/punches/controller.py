from __future__ import annotations

import hmac
import logging
from functools import wraps

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_iso
from ..core.exceptions import AuthenticationError, StorageError, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def check_token() -> None:
        expected = f"Bearer {app.config['API_TOKEN']}"
        header = request.headers.get("Authorization", "")
        if not app.config["API_TOKEN"] or not hmac.compare_digest(header.encode(), expected.encode()):
            raise AuthenticationError("Unauthorized")

    def token_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            check_token()
            return view(*args, **kwargs)

        return wrapper

    @app.errorhandler(AuthenticationError)
    def handle_unauthorized(e):
        return jsonify({"error": "Unauthorized"}), 401

    @app.errorhandler(ValidationError)
    def handle_invalid(e):
        return jsonify({"error": str(e)}), 400

    @app.errorhandler(StorageError)
    def handle_storage(e):
        logger.error("storage error on %s: %s", request.path, e)
        return jsonify({"error": "Storage unavailable"}), 500

    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        subscriber = container.subscriber
        return jsonify(
            {
                "ok": True,
                "mqtt": {
                    "url": subscriber.broker.public_url if subscriber else None,
                    "topic": subscriber.topic if subscriber else None,
                    "connected": subscriber.connected if subscriber else False,
                },
                "db": {"engine": container.conn.engine.value, "target": container.conn.describe()},
                "time": now_iso(),
            }
        )

    @app.route("/logs/latest", methods=["GET"], endpoint="logs_latest")
    @token_required
    def logs_latest():
        page = container.query_service.latest(request.args.get("limit"))
        return jsonify(page.to_dict())

    @app.route("/logs", methods=["GET"], endpoint="logs")
    @token_required
    def logs():
        page = container.query_service.logs(
            since=request.args.get("since"),
            limit=request.args.get("limit"),
            offset=request.args.get("offset"),
        )
        return jsonify(page.to_dict())

    @app.route("/logs/employee/<enrollid>", methods=["GET"], endpoint="logs_by_employee")
    @token_required
    def logs_by_employee(enrollid: str):
        page = container.query_service.by_employee(
            enrollid,
            limit=request.args.get("limit"),
            offset=request.args.get("offset"),
        )
        return jsonify(page.to_dict())
