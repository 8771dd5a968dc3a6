"""Domain-specific exceptions with user-ready messages for the inventory system."""


class BusinessLogicException(Exception):
    """Base exception class for business logic errors.

    All business logic exceptions include user-ready messages that can be
    displayed directly in the UI without client-side message construction.
    """

    def __init__(self, message: str, error_code: str) -> None:
        self.message = message
        self.error_code = error_code
        super().__init__(message)


class RecordNotFoundException(BusinessLogicException):
    """Exception raised when a requested record is not found."""

    def __init__(self, resource_type: str, identifier: str | int) -> None:
        message = f"{resource_type} {identifier} was not found"
        super().__init__(message, error_code="RECORD_NOT_FOUND")


class ResourceConflictException(BusinessLogicException):
    """Exception raised when attempting to create a resource that already exists."""

    def __init__(self, resource_type: str, identifier: str | int) -> None:
        message = f"A {resource_type.lower()} with {identifier} already exists"
        super().__init__(message, error_code="RESOURCE_CONFLICT")


class SlotOccupiedException(BusinessLogicException):
    """Exception raised when a slot already holds a different occupant."""

    def __init__(self, slot_label: str, occupant: str) -> None:
        self.slot_label = slot_label
        self.occupant = occupant
        message = f"Slot {slot_label} is already occupied by {occupant}"
        super().__init__(message, error_code="SLOT_OCCUPIED")


class ConcurrentUpdateException(BusinessLogicException):
    """Exception raised when another request changed a row first."""

    def __init__(self, resource_type: str, identifier: str | int) -> None:
        message = (
            f"{resource_type} {identifier} was changed by another request; "
            "refresh and try again"
        )
        super().__init__(message, error_code="CONCURRENT_UPDATE")


class InvalidOperationException(BusinessLogicException):
    """Exception raised when an operation cannot be performed due to business rules."""

    def __init__(self, operation: str, cause: str) -> None:
        self.operation = operation
        self.cause = cause
        message = f"Cannot {operation} because {cause}"
        super().__init__(message, error_code="INVALID_OPERATION")


class DependencyException(BusinessLogicException):
    """Exception raised when a resource cannot be deleted due to dependencies."""

    def __init__(self, resource_type: str, identifier: str | int, dependency_desc: str) -> None:
        message = f"Cannot delete {resource_type} {identifier} because {dependency_desc}"
        super().__init__(message, error_code="RESOURCE_IN_USE")


class ConfirmationRequiredException(BusinessLogicException):
    """Exception raised when a destructive action was invoked without confirmation."""

    def __init__(self, operation: str) -> None:
        message = f"Confirm that you want to {operation} by passing confirm=true"
        super().__init__(message, error_code="CONFIRMATION_REQUIRED")
