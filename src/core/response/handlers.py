from typing import Any, Dict, List, Optional

from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from src.core.logger import get_logger
from src.core.response.schemas import (
    BaseResponse,
    ErrorDetail,
    ErrorResponse,
    PaginatedResponse,
)

logger = get_logger(__name__)


def _encode(data: Any) -> Any:
    """Serialize response payloads, using field aliases for pydantic models."""
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json", by_alias=True)
    if isinstance(data, list):
        return [_encode(item) for item in data]
    return jsonable_encoder(data)


def success_response(
    data: Any = None,
    message: Optional[str] = None,
    status_code: int = status.HTTP_200_OK,
) -> JSONResponse:
    body = BaseResponse[Any](success=True, message=message)
    content = body.model_dump()
    content["data"] = _encode(data)
    return JSONResponse(status_code=status_code, content=content)


def paginated_response(
    items: List[Any],
    total: int,
    page: int,
    per_page: int,
    pages: int,
    message: Optional[str] = None,
) -> JSONResponse:
    body = PaginatedResponse[Any](
        success=True,
        message=message,
        total=total,
        page=page,
        per_page=per_page,
        pages=pages,
    )
    content = body.model_dump()
    content["data"] = _encode(items)
    return JSONResponse(status_code=status.HTTP_200_OK, content=content)


def error_response(
    error_code: str,
    message: str,
    status_code: int = status.HTTP_400_BAD_REQUEST,
    details: Optional[List[Dict[str, Any]]] = None,
) -> JSONResponse:
    body = ErrorResponse(
        message=message,
        error_code=error_code,
        error_details=[ErrorDetail(**detail) for detail in details or []],
    )
    return JSONResponse(status_code=status_code, content=body.model_dump())


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Render request validation failures in the error envelope."""
    details = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part != "body"]
        details.append(
            {
                "field": ".".join(location),
                "code": str(error.get("type", "invalid")).upper(),
                "message": error.get("msg", "Invalid value"),
            }
        )
    return error_response(
        error_code="VALIDATION_ERROR",
        message="Request validation failed",
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        details=details,
    )


async def global_exception_handler(request: Request, exc: Exception):
    """Last-resort handler for errors nothing else caught."""
    logger.exception(f"🔥 Unhandled error on {request.method} {request.url.path}: {exc}")
    return error_response(
        error_code="INTERNAL_SERVER_ERROR",
        message="An unexpected error occurred",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
