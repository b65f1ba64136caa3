"""Request-scoped access to the collaborators built in the app factory."""

from fastapi import Request

from src.apps.blog.services.ai_service import AIService
from src.apps.blog.services.post_service import PostService


def get_post_service(request: Request) -> PostService:
    """Get the post service attached to the running app."""
    return request.app.state.post_service


def get_ai_service(request: Request) -> AIService:
    """Get the AI service attached to the running app."""
    return request.app.state.ai_service
