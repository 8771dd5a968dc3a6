"""Location management API endpoints."""

from dependency_injector.wiring import Provide, inject
from flask import Blueprint, request
from spectree import Response as SpectreeResponse

from tote_inventory.schemas.common import ErrorResponseSchema
from tote_inventory.schemas.location import (
    LocationCreateSchema,
    LocationResponseSchema,
    LocationUpdateSchema,
    LocationWithRackCountSchema,
)
from tote_inventory.services.container import ServiceContainer
from tote_inventory.utils.error_handling import handle_api_errors
from tote_inventory.utils.spectree_config import api

locations_bp = Blueprint("locations", __name__, url_prefix="/locations")


@locations_bp.route("", methods=["POST"])
@api.validate(json=LocationCreateSchema, resp=SpectreeResponse(HTTP_201=LocationResponseSchema, HTTP_400=ErrorResponseSchema, HTTP_409=ErrorResponseSchema))
@handle_api_errors
@inject
def create_location(location_service=Provide[ServiceContainer.location_service]):
    """Create a new location."""
    data = LocationCreateSchema.model_validate(request.get_json())
    location = location_service.create_location(data.name, data.notes)
    return LocationResponseSchema.model_validate(location).model_dump(), 201


@locations_bp.route("", methods=["GET"])
@api.validate(resp=SpectreeResponse(HTTP_200=list[LocationWithRackCountSchema]))
@handle_api_errors
@inject
def list_locations(location_service=Provide[ServiceContainer.location_service]):
    """List locations with their rack counts."""
    result = []
    for location, rack_count in location_service.get_all_locations_with_rack_counts():
        location_data = LocationWithRackCountSchema(
            id=location.id,
            name=location.name,
            notes=location.notes,
            created_at=location.created_at,
            updated_at=location.updated_at,
            rack_count=rack_count,
        )
        result.append(location_data.model_dump())
    return result


@locations_bp.route("/<int:location_id>", methods=["GET"])
@api.validate(resp=SpectreeResponse(HTTP_200=LocationResponseSchema, HTTP_404=ErrorResponseSchema))
@handle_api_errors
@inject
def get_location(location_id: int, location_service=Provide[ServiceContainer.location_service]):
    location = location_service.get_location(location_id)
    return LocationResponseSchema.model_validate(location).model_dump()


@locations_bp.route("/<int:location_id>", methods=["PUT"])
@api.validate(json=LocationUpdateSchema, resp=SpectreeResponse(HTTP_200=LocationResponseSchema, HTTP_400=ErrorResponseSchema, HTTP_404=ErrorResponseSchema, HTTP_409=ErrorResponseSchema))
@handle_api_errors
@inject
def update_location(location_id: int, location_service=Provide[ServiceContainer.location_service]):
    data = LocationUpdateSchema.model_validate(request.get_json())
    location = location_service.update_location(location_id, name=data.name, notes=data.notes)
    return LocationResponseSchema.model_validate(location).model_dump()


@locations_bp.route("/<int:location_id>", methods=["DELETE"])
@api.validate(resp=SpectreeResponse(HTTP_204=None, HTTP_404=ErrorResponseSchema, HTTP_409=ErrorResponseSchema))
@handle_api_errors
@inject
def delete_location(location_id: int, location_service=Provide[ServiceContainer.location_service]):
    """Delete a location that has no racks."""
    location_service.delete_location(location_id)
    return "", 204
