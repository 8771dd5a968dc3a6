"""Container type management API endpoints."""

from dependency_injector.wiring import Provide, inject
from flask import Blueprint, request
from spectree import Response as SpectreeResponse

from tote_inventory.schemas.common import ConfirmQuerySchema, ErrorResponseSchema
from tote_inventory.schemas.container_type import (
    ContainerTypeCreateSchema,
    ContainerTypeResponseSchema,
    ContainerTypeUpdateSchema,
    ContainerTypeWithUsageSchema,
    RecalculateCapacitiesResponseSchema,
)
from tote_inventory.services.container import ServiceContainer
from tote_inventory.services.container_type_service import DIMENSION_FIELDS
from tote_inventory.utils.error_handling import handle_api_errors
from tote_inventory.utils.spectree_config import api

container_types_bp = Blueprint("container_types", __name__, url_prefix="/container-types")


@container_types_bp.route("", methods=["POST"])
@api.validate(json=ContainerTypeCreateSchema, resp=SpectreeResponse(HTTP_201=ContainerTypeResponseSchema, HTTP_400=ErrorResponseSchema, HTTP_409=ErrorResponseSchema))
@handle_api_errors
@inject
def create_container_type(container_type_service=Provide[ServiceContainer.container_type_service]):
    """Create a container type; capacity is computed from the dimensions."""
    data = ContainerTypeCreateSchema.model_validate(request.get_json())
    container_type = container_type_service.create_type(
        name=data.name,
        code_prefix=data.code_prefix,
        icon_key=data.icon_key,
        description=data.description,
        **{field: getattr(data, field) for field in DIMENSION_FIELDS},
    )
    return ContainerTypeResponseSchema.model_validate(container_type).model_dump(), 201


@container_types_bp.route("", methods=["GET"])
@api.validate(resp=SpectreeResponse(HTTP_200=list[ContainerTypeWithUsageSchema]))
@handle_api_errors
@inject
def list_container_types(container_type_service=Provide[ServiceContainer.container_type_service]):
    """List container types with how many containers use each."""
    result = []
    for container_type, container_count in container_type_service.get_all_types_with_usage():
        data = ContainerTypeResponseSchema.model_validate(container_type).model_dump(exclude={"capacity_display"})
        result.append(ContainerTypeWithUsageSchema(**data, container_count=container_count).model_dump())
    return result


@container_types_bp.route("/<int:type_id>", methods=["GET"])
@api.validate(resp=SpectreeResponse(HTTP_200=ContainerTypeResponseSchema, HTTP_404=ErrorResponseSchema))
@handle_api_errors
@inject
def get_container_type(type_id: int, container_type_service=Provide[ServiceContainer.container_type_service]):
    container_type = container_type_service.get_type(type_id)
    return ContainerTypeResponseSchema.model_validate(container_type).model_dump()


@container_types_bp.route("/<int:type_id>", methods=["PUT"])
@api.validate(json=ContainerTypeUpdateSchema, resp=SpectreeResponse(HTTP_200=ContainerTypeResponseSchema, HTTP_400=ErrorResponseSchema, HTTP_404=ErrorResponseSchema, HTTP_409=ErrorResponseSchema))
@handle_api_errors
@inject
def update_container_type(type_id: int, container_type_service=Provide[ServiceContainer.container_type_service]):
    data = ContainerTypeUpdateSchema.model_validate(request.get_json())
    container_type = container_type_service.update_type(
        type_id,
        name=data.name,
        code_prefix=data.code_prefix,
        icon_key=data.icon_key,
        description=data.description,
        **{field: getattr(data, field) for field in DIMENSION_FIELDS},
    )
    return ContainerTypeResponseSchema.model_validate(container_type).model_dump()


@container_types_bp.route("/<int:type_id>", methods=["DELETE"])
@api.validate(query=ConfirmQuerySchema, resp=SpectreeResponse(HTTP_204=None, HTTP_400=ErrorResponseSchema, HTTP_404=ErrorResponseSchema, HTTP_409=ErrorResponseSchema))
@handle_api_errors
@inject
def delete_container_type(type_id: int, container_type_service=Provide[ServiceContainer.container_type_service]):
    """Delete an unused container type; requires ?confirm=true."""
    query = ConfirmQuerySchema.model_validate(request.args.to_dict())
    container_type_service.delete_type(type_id, confirm=query.confirm)
    return "", 204


@container_types_bp.route("/recalculate-capacities", methods=["POST"])
@api.validate(resp=SpectreeResponse(HTTP_200=RecalculateCapacitiesResponseSchema))
@handle_api_errors
@inject
def recalculate_capacities(container_type_service=Provide[ServiceContainer.container_type_service]):
    """Recompute every type's capacity from its stored dimensions."""
    updated = container_type_service.recalculate_capacities()
    return RecalculateCapacitiesResponseSchema(updated=updated).model_dump()
