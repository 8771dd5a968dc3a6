"""Slot lookup API endpoint."""

from dependency_injector.wiring import Provide, inject
from flask import Blueprint
from spectree import Response as SpectreeResponse

from tote_inventory.schemas.common import ErrorResponseSchema
from tote_inventory.schemas.rack import GridSlotSchema
from tote_inventory.services.container import ServiceContainer
from tote_inventory.utils.error_handling import handle_api_errors
from tote_inventory.utils.spectree_config import api

slots_bp = Blueprint("slots", __name__, url_prefix="/slots")


@slots_bp.route("/<int:slot_id>", methods=["GET"])
@api.validate(resp=SpectreeResponse(HTTP_200=GridSlotSchema, HTTP_404=ErrorResponseSchema))
@handle_api_errors
@inject
def get_slot(slot_id: int, rack_service=Provide[ServiceContainer.rack_service]):
    """Get a slot with its occupant."""
    slot = rack_service.get_slot(slot_id)
    return GridSlotSchema.model_validate(slot).model_dump()
