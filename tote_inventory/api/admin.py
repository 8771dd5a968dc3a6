"""Administrative endpoints: catalog seeding, type migration, CSV import and accounts."""

from dependency_injector.wiring import Provide, inject
from flask import Blueprint, request
from spectree import Response as SpectreeResponse

from tote_inventory.exceptions import InvalidOperationException
from tote_inventory.schemas.admin import (
    ConsistencyReportSchema,
    ImportResultSchema,
    MigrationQuerySchema,
    MigrationResultSchema,
    PendingUserCreateSchema,
    PendingUserResponseSchema,
    SeededAccountsSchema,
    SeedResultSchema,
    UserResponseSchema,
)
from tote_inventory.schemas.common import ErrorResponseSchema
from tote_inventory.services.container import ServiceContainer
from tote_inventory.utils.error_handling import handle_api_errors
from tote_inventory.utils.spectree_config import api

admin_bp = Blueprint("admin", __name__, url_prefix="/admin")


@admin_bp.route("/seed-container-types", methods=["POST"])
@api.validate(resp=SpectreeResponse(HTTP_200=SeedResultSchema, HTTP_400=ErrorResponseSchema))
@handle_api_errors
@inject
def seed_container_types(setup_service=Provide[ServiceContainer.setup_service]):
    """Upsert the built-in container type catalog by name."""
    result = setup_service.sync_container_types_from_setup()
    return SeedResultSchema.model_validate(result).model_dump()


@admin_bp.route("/migrate-container-types", methods=["POST"])
@api.validate(query=MigrationQuerySchema, resp=SpectreeResponse(HTTP_200=MigrationResultSchema, HTTP_400=ErrorResponseSchema))
@handle_api_errors
@inject
def migrate_container_types(
    container_migration_service=Provide[ServiceContainer.container_migration_service],
):
    """Match untyped containers to container types.

    Runs as a dry run unless ``?apply=true`` is passed.
    """
    query = MigrationQuerySchema.model_validate(request.args.to_dict())
    result = container_migration_service.migrate_container_types(dry_run=not query.apply)
    return MigrationResultSchema.model_validate(result).model_dump()


@admin_bp.route("/import-csv", methods=["POST"])
@api.validate(resp=SpectreeResponse(HTTP_200=ImportResultSchema, HTTP_400=ErrorResponseSchema, HTTP_409=ErrorResponseSchema))
@handle_api_errors
@inject
def import_csv(csv_import_service=Provide[ServiceContainer.csv_import_service]):
    """Import intake form rows, sent as a multipart ``file`` or as the raw body."""
    upload = request.files.get("file")
    if upload is not None:
        content = upload.read().decode("utf-8-sig")
    else:
        content = request.get_data(as_text=True)

    if not content.strip():
        raise InvalidOperationException("import CSV", "no CSV content was provided")

    result = csv_import_service.import_csv(content.splitlines())
    return ImportResultSchema.model_validate(result).model_dump()


@admin_bp.route("/consistency", methods=["GET"])
@api.validate(resp=SpectreeResponse(HTTP_200=ConsistencyReportSchema))
@handle_api_errors
@inject
def check_consistency(placement_service=Provide[ServiceContainer.placement_service]):
    """Report every slot, container or item whose placement links disagree."""
    issues = placement_service.check_consistency()
    return ConsistencyReportSchema.model_validate(
        {"consistent": not issues, "issues": issues}, from_attributes=True
    ).model_dump()


@admin_bp.route("/seed-accounts", methods=["POST"])
@api.validate(resp=SpectreeResponse(HTTP_200=SeededAccountsSchema, HTTP_409=ErrorResponseSchema))
@handle_api_errors
@inject
def seed_accounts(account_service=Provide[ServiceContainer.account_service]):
    """Create the fixed admin and user test accounts; refused in production."""
    accounts = account_service.seed_test_accounts()
    return SeededAccountsSchema.model_validate(accounts).model_dump()


@admin_bp.route("/pending-users", methods=["POST"])
@api.validate(json=PendingUserCreateSchema, resp=SpectreeResponse(HTTP_201=PendingUserResponseSchema, HTTP_400=ErrorResponseSchema, HTTP_409=ErrorResponseSchema))
@handle_api_errors
@inject
def create_pending_user(account_service=Provide[ServiceContainer.account_service]):
    data = PendingUserCreateSchema.model_validate(request.get_json())
    pending_user = account_service.create_registration_request(
        email=data.email, name=data.name, reason=data.reason
    )
    return PendingUserResponseSchema.model_validate(pending_user).model_dump(), 201


@admin_bp.route("/pending-users", methods=["GET"])
@api.validate(resp=SpectreeResponse(HTTP_200=list[PendingUserResponseSchema]))
@handle_api_errors
@inject
def list_pending_users(account_service=Provide[ServiceContainer.account_service]):
    pending_users = account_service.get_pending_requests()
    return [PendingUserResponseSchema.model_validate(pending).model_dump() for pending in pending_users]


@admin_bp.route("/pending-users/<int:request_id>/approve", methods=["POST"])
@api.validate(resp=SpectreeResponse(HTTP_201=UserResponseSchema, HTTP_404=ErrorResponseSchema, HTTP_409=ErrorResponseSchema))
@handle_api_errors
@inject
def approve_pending_user(request_id: int, account_service=Provide[ServiceContainer.account_service]):
    user = account_service.approve_request(request_id)
    return UserResponseSchema.model_validate(user).model_dump(), 201


@admin_bp.route("/pending-users/<int:request_id>/reject", methods=["POST"])
@api.validate(resp=SpectreeResponse(HTTP_200=PendingUserResponseSchema, HTTP_404=ErrorResponseSchema, HTTP_409=ErrorResponseSchema))
@handle_api_errors
@inject
def reject_pending_user(request_id: int, account_service=Provide[ServiceContainer.account_service]):
    pending_user = account_service.reject_request(request_id)
    return PendingUserResponseSchema.model_validate(pending_user).model_dump()
