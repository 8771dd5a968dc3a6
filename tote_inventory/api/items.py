"""Item management and movement API endpoints."""

from dependency_injector.wiring import Provide, inject
from flask import Blueprint, request
from spectree import Response as SpectreeResponse

from tote_inventory.schemas.common import ConfirmQuerySchema, ErrorResponseSchema
from tote_inventory.schemas.container import SlotAssignmentSchema
from tote_inventory.schemas.item import (
    ItemCreateSchema,
    ItemListQuerySchema,
    ItemPhotoCreateSchema,
    ItemPhotoResponseSchema,
    ItemResponseSchema,
    ItemUpdateSchema,
)
from tote_inventory.schemas.movement import (
    CheckInRequestSchema,
    MovementRequestSchema,
    MovementResponseSchema,
    MoveRequestSchema,
)
from tote_inventory.services.container import ServiceContainer
from tote_inventory.utils.error_handling import handle_api_errors
from tote_inventory.utils.spectree_config import api

items_bp = Blueprint("items", __name__, url_prefix="/items")


def _movement_request(schema):
    # Movement bodies are optional; an empty request means no actor and no notes.
    return schema.model_validate(request.get_json(silent=True) or {})


@items_bp.route("", methods=["POST"])
@api.validate(json=ItemCreateSchema, resp=SpectreeResponse(HTTP_201=ItemResponseSchema, HTTP_400=ErrorResponseSchema, HTTP_404=ErrorResponseSchema, HTTP_409=ErrorResponseSchema))
@handle_api_errors
@inject
def create_item(item_service=Provide[ServiceContainer.item_service]):
    data = ItemCreateSchema.model_validate(request.get_json())
    item = item_service.create_item(**data.model_dump())
    return ItemResponseSchema.model_validate(item).model_dump(), 201


@items_bp.route("", methods=["GET"])
@api.validate(query=ItemListQuerySchema, resp=SpectreeResponse(HTTP_200=list[ItemResponseSchema], HTTP_400=ErrorResponseSchema))
@handle_api_errors
@inject
def list_items(item_service=Provide[ServiceContainer.item_service]):
    """List items, optionally filtered by status, category or container."""
    query = ItemListQuerySchema.model_validate(request.args.to_dict())
    items = item_service.get_items(
        status=query.status,
        category=query.category,
        container_id=query.container_id,
        limit=query.limit,
        offset=query.offset,
    )
    return [ItemResponseSchema.model_validate(item).model_dump() for item in items]


@items_bp.route("/<int:item_id>", methods=["GET"])
@api.validate(resp=SpectreeResponse(HTTP_200=ItemResponseSchema, HTTP_404=ErrorResponseSchema))
@handle_api_errors
@inject
def get_item(item_id: int, item_service=Provide[ServiceContainer.item_service]):
    item = item_service.get_item(item_id)
    return ItemResponseSchema.model_validate(item).model_dump()


@items_bp.route("/<int:item_id>", methods=["PUT"])
@api.validate(json=ItemUpdateSchema, resp=SpectreeResponse(HTTP_200=ItemResponseSchema, HTTP_400=ErrorResponseSchema, HTTP_404=ErrorResponseSchema, HTTP_409=ErrorResponseSchema))
@handle_api_errors
@inject
def update_item(item_id: int, item_service=Provide[ServiceContainer.item_service]):
    """Update descriptive fields; use the movement endpoints to relocate an item."""
    data = ItemUpdateSchema.model_validate(request.get_json())
    item = item_service.update_item_details(item_id, **data.model_dump())
    return ItemResponseSchema.model_validate(item).model_dump()


@items_bp.route("/<int:item_id>", methods=["DELETE"])
@api.validate(query=ConfirmQuerySchema, resp=SpectreeResponse(HTTP_204=None, HTTP_400=ErrorResponseSchema, HTTP_404=ErrorResponseSchema, HTTP_409=ErrorResponseSchema))
@handle_api_errors
@inject
def delete_item(item_id: int, item_service=Provide[ServiceContainer.item_service]):
    """Permanently delete an item; requires ?confirm=true."""
    query = ConfirmQuerySchema.model_validate(request.args.to_dict())
    item_service.delete_item(item_id, confirm=query.confirm)
    return "", 204


@items_bp.route("/<int:item_id>/check-out", methods=["POST"])
@api.validate(resp=SpectreeResponse(HTTP_201=MovementResponseSchema, HTTP_404=ErrorResponseSchema, HTTP_409=ErrorResponseSchema))
@handle_api_errors
@inject
def check_out_item(item_id: int, item_service=Provide[ServiceContainer.item_service]):
    data = _movement_request(MovementRequestSchema)
    movement = item_service.check_out(item_id, actor_id=data.actor_id, notes=data.notes)
    return MovementResponseSchema.model_validate(movement).model_dump(), 201


@items_bp.route("/<int:item_id>/check-in", methods=["POST"])
@api.validate(resp=SpectreeResponse(HTTP_201=MovementResponseSchema, HTTP_404=ErrorResponseSchema, HTTP_409=ErrorResponseSchema))
@handle_api_errors
@inject
def check_in_item(item_id: int, item_service=Provide[ServiceContainer.item_service]):
    data = _movement_request(CheckInRequestSchema)
    movement = item_service.check_in(
        item_id, container_id=data.container_id, actor_id=data.actor_id, notes=data.notes
    )
    return MovementResponseSchema.model_validate(movement).model_dump(), 201


@items_bp.route("/<int:item_id>/move", methods=["POST"])
@api.validate(json=MoveRequestSchema, resp=SpectreeResponse(HTTP_201=MovementResponseSchema, HTTP_400=ErrorResponseSchema, HTTP_404=ErrorResponseSchema, HTTP_409=ErrorResponseSchema))
@handle_api_errors
@inject
def move_item(item_id: int, item_service=Provide[ServiceContainer.item_service]):
    data = MoveRequestSchema.model_validate(request.get_json())
    movement = item_service.move(
        item_id, data.to_container_id, actor_id=data.actor_id, notes=data.notes
    )
    return MovementResponseSchema.model_validate(movement).model_dump(), 201


@items_bp.route("/<int:item_id>/remove", methods=["POST"])
@api.validate(resp=SpectreeResponse(HTTP_201=MovementResponseSchema, HTTP_404=ErrorResponseSchema, HTTP_409=ErrorResponseSchema))
@handle_api_errors
@inject
def remove_item(item_id: int, item_service=Provide[ServiceContainer.item_service]):
    """Take the item out of the inventory; its history is kept."""
    data = _movement_request(MovementRequestSchema)
    movement = item_service.remove(item_id, actor_id=data.actor_id, notes=data.notes)
    return MovementResponseSchema.model_validate(movement).model_dump(), 201


@items_bp.route("/<int:item_id>/movements", methods=["GET"])
@api.validate(resp=SpectreeResponse(HTTP_200=list[MovementResponseSchema], HTTP_404=ErrorResponseSchema))
@handle_api_errors
@inject
def list_item_movements(item_id: int, item_service=Provide[ServiceContainer.item_service]):
    movements = item_service.list_movements(item_id)
    return [MovementResponseSchema.model_validate(movement).model_dump() for movement in movements]


@items_bp.route("/<int:item_id>/photos", methods=["POST"])
@api.validate(json=ItemPhotoCreateSchema, resp=SpectreeResponse(HTTP_201=ItemPhotoResponseSchema, HTTP_404=ErrorResponseSchema, HTTP_409=ErrorResponseSchema))
@handle_api_errors
@inject
def add_item_photo(item_id: int, item_service=Provide[ServiceContainer.item_service]):
    data = ItemPhotoCreateSchema.model_validate(request.get_json())
    photo = item_service.add_photo(item_id, data.url, caption=data.caption)
    return ItemPhotoResponseSchema.model_validate(photo).model_dump(), 201


@items_bp.route("/<int:item_id>/photos/<int:photo_id>", methods=["DELETE"])
@api.validate(resp=SpectreeResponse(HTTP_204=None, HTTP_404=ErrorResponseSchema))
@handle_api_errors
@inject
def delete_item_photo(item_id: int, photo_id: int, item_service=Provide[ServiceContainer.item_service]):
    item_service.delete_photo(item_id, photo_id)
    return "", 204


@items_bp.route("/<int:item_id>/slot", methods=["PUT"])
@api.validate(json=SlotAssignmentSchema, resp=SpectreeResponse(HTTP_200=ItemResponseSchema, HTTP_400=ErrorResponseSchema, HTTP_404=ErrorResponseSchema, HTTP_409=ErrorResponseSchema))
@handle_api_errors
@inject
def assign_item_slot(
    item_id: int,
    placement_service=Provide[ServiceContainer.placement_service],
    item_service=Provide[ServiceContainer.item_service],
):
    """Rack a container-item (cooler, suitcase) directly in a slot."""
    data = SlotAssignmentSchema.model_validate(request.get_json())
    placement_service.assign_item_to_slot(item_id, data.slot_id)
    item = item_service.get_item(item_id)
    return ItemResponseSchema.model_validate(item).model_dump()


@items_bp.route("/<int:item_id>/slot", methods=["DELETE"])
@api.validate(resp=SpectreeResponse(HTTP_200=ItemResponseSchema, HTTP_404=ErrorResponseSchema))
@handle_api_errors
@inject
def unassign_item_slot(item_id: int, placement_service=Provide[ServiceContainer.placement_service]):
    item = placement_service.unassign_item(item_id)
    return ItemResponseSchema.model_validate(item).model_dump()
