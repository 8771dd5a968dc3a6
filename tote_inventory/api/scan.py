"""QR code deep links.

Labels printed on containers encode ``/c/<code>``; scanning one redirects to
the container resource.
"""

import logging

from dependency_injector.wiring import Provide, inject
from flask import Blueprint, redirect

from tote_inventory.services.container import ServiceContainer
from tote_inventory.utils.error_handling import handle_api_errors

logger = logging.getLogger(__name__)

scan_bp = Blueprint("scan", __name__, url_prefix="/c")


@scan_bp.route("/<string:code>", methods=["GET"])
@handle_api_errors
@inject
def scan_container(
    code: str,
    container_service=Provide[ServiceContainer.container_service],
    settings=Provide[ServiceContainer.config],
):
    container = container_service.get_container_by_code(code)
    target = settings.QR_REDIRECT_TEMPLATE.format(id=container.id, code=container.code)
    logger.debug(f"QR scan {code} -> {target}")
    return redirect(target, code=302)
