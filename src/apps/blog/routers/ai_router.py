"""AI generation router."""

from fastapi import APIRouter, Depends

from src.core import exceptions
from src.core.bases.base_router import BaseRouter
from src.core.response.handlers import success_response
from src.apps.blog.dependencies import get_ai_service
from src.apps.blog.schemas.ai import ContentResponse, DescriptionResponse, GenerateRequest
from src.apps.blog.services.ai_service import AIService

router = APIRouter(prefix="/api", tags=["AI"])


def _require_title(payload: GenerateRequest) -> str:
    title = (payload.title or "").strip()
    if not title:
        raise exceptions.BadRequestException("Title is required")
    return title


@router.post("/generate-description", summary="Generate a post description")
async def generate_description(
    payload: GenerateRequest,
    ai_service: AIService = Depends(get_ai_service)
):
    try:
        title = _require_title(payload)
    except exceptions.ServiceException as e:
        return BaseRouter.handle_service_error(e)

    description = await ai_service.generate_description(title)
    return success_response(
        data=DescriptionResponse(description=description),
        message="Description generated"
    )


@router.post("/generate-content", summary="Generate a Markdown post body")
async def generate_content(
    payload: GenerateRequest,
    ai_service: AIService = Depends(get_ai_service)
):
    try:
        title = _require_title(payload)
    except exceptions.ServiceException as e:
        return BaseRouter.handle_service_error(e)

    content = await ai_service.generate_content(title)
    return success_response(
        data=ContentResponse(content=content),
        message="Content generated"
    )
