"""Global search API endpoint."""

from dependency_injector.wiring import Provide, inject
from flask import Blueprint, request
from spectree import Response as SpectreeResponse

from tote_inventory.schemas.common import ErrorResponseSchema
from tote_inventory.schemas.search import SearchQuerySchema, SearchResultsSchema
from tote_inventory.services.container import ServiceContainer
from tote_inventory.utils.error_handling import handle_api_errors
from tote_inventory.utils.spectree_config import api

search_bp = Blueprint("search", __name__, url_prefix="/search")


@search_bp.route("", methods=["GET"])
@api.validate(query=SearchQuerySchema, resp=SpectreeResponse(HTTP_200=SearchResultsSchema, HTTP_400=ErrorResponseSchema))
@handle_api_errors
@inject
def search(search_service=Provide[ServiceContainer.search_service]):
    """Search containers, items and locations by case-insensitive substring.

    Queries shorter than the configured minimum return empty lists.
    """
    query = SearchQuerySchema.model_validate(request.args.to_dict())
    results = search_service.search(query.q)
    return SearchResultsSchema.model_validate(results).model_dump()
