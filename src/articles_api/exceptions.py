"""Domain exceptions raised by services and caught by the app's handlers.

Each exception carries the HTTP status and error category it maps to, so the
handlers in main.py can build the error envelope without a lookup table.
"""

from dataclasses import dataclass

from articles_api.schemas.error import ErrorType


@dataclass(frozen=True)
class FieldError:
    """One rejected field: its name, the value received and why it failed."""

    field: str
    rejected_value: object
    message: str


class DomainError(Exception):
    """Base class for all domain exceptions.

    Used directly for business-rule violations that have no dedicated subclass.
    """

    status_code = 400
    error_type = ErrorType.BUSINESS_LOGIC_ERROR
    details = "Article operation failed due to business logic constraints"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class NotFoundError(DomainError):
    """Raised when a requested entity does not exist."""

    status_code = 404
    error_type = ErrorType.RESOURCE_NOT_FOUND
    details = "The requested operation could not be completed"

    def __init__(self, entity: str, identifier: object) -> None:
        self.entity = entity
        self.identifier = identifier
        super().__init__(f"{entity} not found with id: {identifier}")


class ValidationError(DomainError):
    """Raised when client-supplied fields break one or more constraints.

    Carries every violation found, not only the first.
    """

    status_code = 400
    error_type = ErrorType.VALIDATION_ERROR
    details = "Please check the provided data and try again"

    def __init__(self, errors: list[FieldError]) -> None:
        self.errors = errors
        super().__init__("Validation failed for one or more fields")
