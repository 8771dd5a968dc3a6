"""Centralized error handling utilities."""

import functools
import logging
from collections.abc import Callable
from typing import Any

from flask import current_app, has_app_context, jsonify
from flask.wrappers import Response
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError
from werkzeug.exceptions import BadRequest

from tote_inventory.exceptions import (
    BusinessLogicException,
    ConcurrentUpdateException,
    ConfirmationRequiredException,
    DependencyException,
    InvalidOperationException,
    RecordNotFoundException,
    ResourceConflictException,
    SlotOccupiedException,
)
from tote_inventory.utils import get_current_correlation_id

logger = logging.getLogger(__name__)


def _mark_request_failed() -> None:
    """Flag the request session so the teardown rolls back instead of committing."""
    if not has_app_context():
        return
    container = getattr(current_app, "container", None)
    if container is None:
        return
    container.db_session().info["needs_rollback"] = True


def _error_response(error: str, details: Any, status: int) -> tuple[Response, int]:
    _mark_request_failed()
    return jsonify({"error": error, "details": details}), status


def _business_error_details(e: BusinessLogicException, message: str) -> dict[str, str]:
    return {"message": message, "code": e.error_code}


def handle_api_errors(func: Callable[..., Any]) -> Callable[..., Response | tuple[Response | str, int]]:
    """Decorator to handle common API errors consistently.

    Domain exceptions become JSON ``{"error", "details"}`` responses with
    their HTTP status. Anything unexpected is logged with its stack trace and
    answered with a generic 500. Every error path flags the request session
    for rollback.
    """
    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except BadRequest:
            # JSON parsing errors from request.get_json()
            return _error_response(
                "Invalid JSON", {"message": "Request body must be valid JSON"}, 400
            )
        except ValidationError as e:
            error_details = []
            for error in e.errors():
                field = ".".join(str(x) for x in error["loc"])
                error_details.append({"message": error["msg"], "field": field})
            return _error_response("Validation failed", error_details, 400)

        except RecordNotFoundException as e:
            return _error_response(
                e.message,
                _business_error_details(e, "The requested resource could not be found"),
                404,
            )

        except ConfirmationRequiredException as e:
            return _error_response(
                e.message,
                _business_error_details(e, "This action is destructive and must be confirmed"),
                400,
            )

        except SlotOccupiedException as e:
            logger.warning(f"Slot conflict: {e.message}")
            return _error_response(
                e.message,
                _business_error_details(e, "The slot already holds something else"),
                409,
            )

        except ConcurrentUpdateException as e:
            logger.warning(f"Concurrent update: {e.message}")
            return _error_response(
                e.message,
                _business_error_details(e, "Another request changed this record first"),
                409,
            )

        except ResourceConflictException as e:
            return _error_response(
                e.message,
                _business_error_details(e, "A resource with those details already exists"),
                409,
            )

        except DependencyException as e:
            return _error_response(
                e.message,
                _business_error_details(e, "The resource is still in use"),
                409,
            )

        except InvalidOperationException as e:
            return _error_response(
                e.message,
                _business_error_details(e, "The requested operation cannot be performed"),
                409,
            )

        except BusinessLogicException as e:
            return _error_response(
                e.message,
                _business_error_details(e, "The request could not be completed"),
                400,
            )

        except IntegrityError as e:
            error_msg = str(e.orig) if e.orig is not None else str(e)
            logger.warning(f"Integrity error: {error_msg}")

            if "UNIQUE constraint failed" in error_msg or "duplicate key" in error_msg.lower():
                return _error_response(
                    "Resource already exists",
                    {"message": "A record with these values already exists"},
                    409,
                )
            elif "FOREIGN KEY constraint failed" in error_msg or "foreign key" in error_msg.lower():
                return _error_response(
                    "Invalid reference",
                    {"message": "Referenced resource does not exist"},
                    400,
                )
            elif "NOT NULL constraint failed" in error_msg or "null value" in error_msg.lower():
                return _error_response(
                    "Missing required field",
                    {"message": "Required field cannot be empty"},
                    400,
                )
            elif "CHECK constraint failed" in error_msg or "check constraint" in error_msg.lower():
                return _error_response(
                    "Invalid state",
                    {"message": "The change would break a consistency rule"},
                    409,
                )
            else:
                return _error_response(
                    "Database constraint violation",
                    {"message": "The operation violates a database constraint"},
                    400,
                )

        except Exception:
            logger.exception(
                f"Unhandled error in {func.__name__} "
                f"(request id {get_current_correlation_id()})"
            )
            return _error_response(
                "Internal server error",
                {"message": "An unexpected error occurred"},
                500,
            )

    return wrapper
