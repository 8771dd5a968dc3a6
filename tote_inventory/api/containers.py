"""Container management and placement API endpoints."""

from dependency_injector.wiring import Provide, inject
from flask import Blueprint, request
from spectree import Response as SpectreeResponse

from tote_inventory.schemas.common import ErrorResponseSchema
from tote_inventory.schemas.container import (
    ContainerCapacitySchema,
    ContainerCreateSchema,
    ContainerListQuerySchema,
    ContainerResponseSchema,
    ContainerUpdateSchema,
    ParentAssignmentSchema,
    SlotAssignmentSchema,
)
from tote_inventory.services.container import ServiceContainer
from tote_inventory.utils.error_handling import handle_api_errors
from tote_inventory.utils.spectree_config import api

containers_bp = Blueprint("containers", __name__, url_prefix="/containers")


@containers_bp.route("", methods=["POST"])
@api.validate(json=ContainerCreateSchema, resp=SpectreeResponse(HTTP_201=ContainerResponseSchema, HTTP_400=ErrorResponseSchema, HTTP_404=ErrorResponseSchema, HTTP_409=ErrorResponseSchema))
@handle_api_errors
@inject
def create_container(container_service=Provide[ServiceContainer.container_service]):
    """Create a container; the code is derived from the label when omitted."""
    data = ContainerCreateSchema.model_validate(request.get_json())
    container = container_service.create_container(
        label=data.label,
        code=data.code,
        description=data.description,
        status=data.status,
        tags=data.tags,
        container_type_id=data.container_type_id,
    )
    return ContainerResponseSchema.model_validate(container).model_dump(), 201


@containers_bp.route("", methods=["GET"])
@api.validate(query=ContainerListQuerySchema, resp=SpectreeResponse(HTTP_200=list[ContainerResponseSchema], HTTP_400=ErrorResponseSchema))
@handle_api_errors
@inject
def list_containers(container_service=Provide[ServiceContainer.container_service]):
    query = ContainerListQuerySchema.model_validate(request.args.to_dict())
    containers = container_service.get_containers(
        status=query.status,
        container_type_id=query.container_type_id,
        placement=query.placement,
    )
    return [ContainerResponseSchema.model_validate(container).model_dump() for container in containers]


@containers_bp.route("/<int:container_id>", methods=["GET"])
@api.validate(resp=SpectreeResponse(HTTP_200=ContainerResponseSchema, HTTP_404=ErrorResponseSchema))
@handle_api_errors
@inject
def get_container(container_id: int, container_service=Provide[ServiceContainer.container_service]):
    container = container_service.get_container(container_id)
    return ContainerResponseSchema.model_validate(container).model_dump()


@containers_bp.route("/by-code/<string:code>", methods=["GET"])
@api.validate(resp=SpectreeResponse(HTTP_200=ContainerResponseSchema, HTTP_404=ErrorResponseSchema))
@handle_api_errors
@inject
def get_container_by_code(code: str, container_service=Provide[ServiceContainer.container_service]):
    """Exact lookup by the code printed on the container's QR label."""
    container = container_service.get_container_by_code(code)
    return ContainerResponseSchema.model_validate(container).model_dump()


@containers_bp.route("/<int:container_id>", methods=["PUT"])
@api.validate(json=ContainerUpdateSchema, resp=SpectreeResponse(HTTP_200=ContainerResponseSchema, HTTP_400=ErrorResponseSchema, HTTP_404=ErrorResponseSchema))
@handle_api_errors
@inject
def update_container(container_id: int, container_service=Provide[ServiceContainer.container_service]):
    data = ContainerUpdateSchema.model_validate(request.get_json())
    container = container_service.update_container(
        container_id,
        label=data.label,
        description=data.description,
        status=data.status,
        tags=data.tags,
        container_type_id=data.container_type_id,
    )
    return ContainerResponseSchema.model_validate(container).model_dump()


@containers_bp.route("/<int:container_id>", methods=["DELETE"])
@api.validate(resp=SpectreeResponse(HTTP_204=None, HTTP_404=ErrorResponseSchema, HTTP_409=ErrorResponseSchema))
@handle_api_errors
@inject
def delete_container(container_id: int, container_service=Provide[ServiceContainer.container_service]):
    """Delete an empty container and free its slot."""
    container_service.delete_container(container_id)
    return "", 204


@containers_bp.route("/<int:container_id>/slot", methods=["PUT"])
@api.validate(json=SlotAssignmentSchema, resp=SpectreeResponse(HTTP_200=ContainerResponseSchema, HTTP_400=ErrorResponseSchema, HTTP_404=ErrorResponseSchema, HTTP_409=ErrorResponseSchema))
@handle_api_errors
@inject
def assign_container_slot(
    container_id: int,
    placement_service=Provide[ServiceContainer.placement_service],
    container_service=Provide[ServiceContainer.container_service],
):
    """Put the container into a slot; 409 when the slot holds something else."""
    data = SlotAssignmentSchema.model_validate(request.get_json())
    placement_service.assign_container_to_slot(container_id, data.slot_id)
    container = container_service.get_container(container_id)
    return ContainerResponseSchema.model_validate(container).model_dump()


@containers_bp.route("/<int:container_id>/slot", methods=["DELETE"])
@api.validate(resp=SpectreeResponse(HTTP_200=ContainerResponseSchema, HTTP_404=ErrorResponseSchema))
@handle_api_errors
@inject
def unassign_container(container_id: int, placement_service=Provide[ServiceContainer.placement_service]):
    """Take the container out of its slot and its parent."""
    container = placement_service.unassign_container(container_id)
    return ContainerResponseSchema.model_validate(container).model_dump()


@containers_bp.route("/<int:container_id>/parent", methods=["PUT"])
@api.validate(json=ParentAssignmentSchema, resp=SpectreeResponse(HTTP_200=ContainerResponseSchema, HTTP_400=ErrorResponseSchema, HTTP_404=ErrorResponseSchema, HTTP_409=ErrorResponseSchema))
@handle_api_errors
@inject
def assign_container_parent(container_id: int, placement_service=Provide[ServiceContainer.placement_service]):
    """Nest the container inside another one, or un-nest it with a null parent."""
    data = ParentAssignmentSchema.model_validate(request.get_json())
    container = placement_service.assign_container_to_parent(container_id, data.parent_id)
    return ContainerResponseSchema.model_validate(container).model_dump()


@containers_bp.route("/<int:container_id>/capacity", methods=["GET"])
@api.validate(resp=SpectreeResponse(HTTP_200=ContainerCapacitySchema, HTTP_404=ErrorResponseSchema))
@handle_api_errors
@inject
def get_container_capacity(container_id: int, container_service=Provide[ServiceContainer.container_service]):
    """Fill level of the container against its type's capacity."""
    capacity = container_service.get_capacity(container_id)
    return ContainerCapacitySchema.model_validate(capacity).model_dump()
