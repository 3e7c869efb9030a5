"""Persistence and business-rule exceptions raised by the services."""

from app.exceptions.base import AppException


class NotFoundError(AppException):
    def __init__(self, resource: str, identifier: int | str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} {identifier} not found")


class AlreadyExistsError(AppException):
    """
    A unique pair or value is already taken.

    Covers duplicate e-mails, favorites, and volunteer/partner relations whatever their
    status. `field` names the unique key so clients can point at it.
    """

    def __init__(self, resource: str, field: str, value: int | str):
        self.resource = resource
        self.field = field
        self.value = value
        super().__init__(f"{resource} with {field} '{value}' already exists")


class ValidationError(AppException):
    """Input refused by a business rule; `field` names the offending input when there is one."""

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        super().__init__(message)


class InvalidStateError(ValidationError):
    """A lifecycle action was attempted from a status that does not allow it."""

    def __init__(self, resource: str, action: str, current_status: str):
        self.resource = resource
        self.action = action
        self.current_status = current_status
        super().__init__(
            f"Cannot {action} {resource.lower()} in status '{current_status}'",
            field="status",
        )
