"""Liveness of the API and the stores authentication depends on."""

from __future__ import annotations

import logging

from flask import Blueprint, current_app
from redis.exceptions import RedisError
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from authapi.api.deps import json_response, timing
from authapi.core.extensions import db

bp = Blueprint("health", __name__)
logger = logging.getLogger(__name__)


def _database_status() -> str:
    try:
        db.session.execute(text("SELECT 1"))
    except SQLAlchemyError:  # pragma: no cover - depends on DB backend
        logger.exception("Database ping failed", extra={"event": "health.db.failed"})
        return "fail"
    return "ok"


def _blacklist_status() -> str:
    """``memory`` when revocations stay in-process, else the Redis ping result."""
    client = current_app.extensions.get("redis_client")
    if client is None:
        return "memory"
    try:
        client.ping()
    except RedisError:  # pragma: no cover - needs a live Redis
        logger.exception("Redis ping failed", extra={"event": "health.blacklist.failed"})
        return "fail"
    return "ok"


@bp.get("/health")
@timing
def healthcheck():
    checks = {"db": _database_status(), "blacklist": _blacklist_status()}
    healthy = "fail" not in checks.values()
    payload = {
        "status": "ok" if healthy else "degraded",
        **checks,
        "version": current_app.config.get("APP_VERSION", "dev"),
    }
    return json_response(payload, status=200 if healthy else 503)
