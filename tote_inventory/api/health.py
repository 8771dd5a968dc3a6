"""Health check endpoints for container orchestration probes."""

import logging

from flask import Blueprint, jsonify
from spectree import Response as SpectreeResponse

from tote_inventory.database import check_db_connection
from tote_inventory.schemas.health_schema import HealthResponse
from tote_inventory.utils.spectree_config import api

logger = logging.getLogger(__name__)

health_bp = Blueprint("health", __name__, url_prefix="/health")


@health_bp.route("/readyz", methods=["GET"])
@api.validate(resp=SpectreeResponse(HTTP_200=HealthResponse, HTTP_503=HealthResponse))
def readyz():
    """Readiness probe.

    Returns 503 while the database cannot be reached so traffic is routed
    elsewhere until it recovers.
    """
    if not check_db_connection():
        logger.warning("Readiness check failed: database is unreachable")
        return jsonify({"status": "database unavailable", "ready": False}), 503

    return jsonify({"status": "ready", "ready": True}), 200


@health_bp.route("/healthz", methods=["GET"])
@api.validate(resp=SpectreeResponse(HTTP_200=HealthResponse))
def healthz():
    """Liveness probe; always 200 while the process is serving."""
    return jsonify({"status": "alive", "ready": True}), 200
