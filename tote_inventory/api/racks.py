"""Rack management API endpoints."""

from dependency_injector.wiring import Provide, inject
from flask import Blueprint, request
from spectree import Response as SpectreeResponse

from tote_inventory.schemas.common import ErrorResponseSchema
from tote_inventory.schemas.rack import (
    RackCreateSchema,
    RackGridSchema,
    RackListQuerySchema,
    RackResponseSchema,
    RackUpdateSchema,
)
from tote_inventory.services.container import ServiceContainer
from tote_inventory.utils.error_handling import handle_api_errors
from tote_inventory.utils.spectree_config import api

racks_bp = Blueprint("racks", __name__, url_prefix="/racks")


@racks_bp.route("", methods=["POST"])
@api.validate(json=RackCreateSchema, resp=SpectreeResponse(HTTP_201=RackResponseSchema, HTTP_400=ErrorResponseSchema, HTTP_404=ErrorResponseSchema, HTTP_409=ErrorResponseSchema))
@handle_api_errors
@inject
def create_rack(rack_service=Provide[ServiceContainer.rack_service]):
    """Create a rack and all of its rows x cols slots."""
    data = RackCreateSchema.model_validate(request.get_json())
    rack = rack_service.create_rack(data.name, data.rows, data.cols, data.location_id)
    return RackResponseSchema.model_validate(rack).model_dump(), 201


@racks_bp.route("", methods=["GET"])
@api.validate(query=RackListQuerySchema, resp=SpectreeResponse(HTTP_200=list[RackResponseSchema], HTTP_400=ErrorResponseSchema))
@handle_api_errors
@inject
def list_racks(rack_service=Provide[ServiceContainer.rack_service]):
    query = RackListQuerySchema.model_validate(request.args.to_dict())
    racks = rack_service.get_all_racks(location_id=query.location_id)
    return [RackResponseSchema.model_validate(rack).model_dump() for rack in racks]


@racks_bp.route("/<int:rack_id>", methods=["GET"])
@api.validate(resp=SpectreeResponse(HTTP_200=RackResponseSchema, HTTP_404=ErrorResponseSchema))
@handle_api_errors
@inject
def get_rack(rack_id: int, rack_service=Provide[ServiceContainer.rack_service]):
    rack = rack_service.get_rack(rack_id)
    return RackResponseSchema.model_validate(rack).model_dump()


@racks_bp.route("/<int:rack_id>", methods=["PUT"])
@api.validate(json=RackUpdateSchema, resp=SpectreeResponse(HTTP_200=RackResponseSchema, HTTP_400=ErrorResponseSchema, HTTP_404=ErrorResponseSchema, HTTP_409=ErrorResponseSchema))
@handle_api_errors
@inject
def update_rack(rack_id: int, rack_service=Provide[ServiceContainer.rack_service]):
    """Rename or relocate a rack."""
    data = RackUpdateSchema.model_validate(request.get_json())
    rack = rack_service.update_rack(rack_id, name=data.name, location_id=data.location_id)
    return RackResponseSchema.model_validate(rack).model_dump()


@racks_bp.route("/<int:rack_id>", methods=["DELETE"])
@api.validate(resp=SpectreeResponse(HTTP_204=None, HTTP_404=ErrorResponseSchema, HTTP_409=ErrorResponseSchema))
@handle_api_errors
@inject
def delete_rack(rack_id: int, rack_service=Provide[ServiceContainer.rack_service]):
    """Delete a rack whose slots are all empty."""
    rack_service.delete_rack(rack_id)
    return "", 204


@racks_bp.route("/<int:rack_id>/grid", methods=["GET"])
@api.validate(resp=SpectreeResponse(HTTP_200=RackGridSchema, HTTP_404=ErrorResponseSchema))
@handle_api_errors
@inject
def get_rack_grid(rack_id: int, rack_service=Provide[ServiceContainer.rack_service]):
    """Rack map with occupants plus unplaced containers and container-items."""
    grid = rack_service.get_rack_grid(rack_id)
    return RackGridSchema.model_validate(grid).model_dump()
