"""Blog app."""

from .routers.post_router import router as post_router
from .routers.ai_router import router as ai_router
