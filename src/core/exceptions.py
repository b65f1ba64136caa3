from typing import List, Optional

from src.core.response.schemas import ErrorDetail


class ServiceException(Exception):
    """Base exception raised by the service layer."""

    def __init__(
        self,
        detail: str = "Service error",
        error_details: Optional[List[ErrorDetail]] = None,
    ):
        super().__init__(detail)
        self.detail = detail
        self.error_details = error_details or []


class NotFoundException(ServiceException):
    """Requested item does not exist."""

    def __init__(self, detail: str = "Item not found"):
        super().__init__(detail)


class ValidationException(ServiceException):
    """Input failed a business rule."""

    def __init__(
        self,
        detail: str = "Validation error",
        error_details: Optional[List[ErrorDetail]] = None,
    ):
        super().__init__(detail, error_details)


class BadRequestException(ServiceException):
    """Request is missing something the operation needs."""

    def __init__(self, detail: str = "Bad request"):
        super().__init__(detail)
