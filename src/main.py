from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

from src.core.config import Settings, settings as default_settings
from src.core.database import Database
from src.core.logger import get_logger, setup_logging
from src.core.response.handlers import global_exception_handler, validation_exception_handler

# Import routers from apps
from src.apps.blog import ai_router, post_router
from src.apps.blog.repositories.post_repository import PostRepository
from src.apps.blog.services.ai_service import AIService
from src.apps.blog.services.post_service import PostService

logger = get_logger(__name__)

FEATURES = ["markdown-support", "rich-content-generation"]


def create_app(
    settings: Optional[Settings] = None,
    ai_service: Optional[AIService] = None,
) -> FastAPI:
    """Build the application with its own database and AI client."""
    settings = settings or default_settings
    setup_logging(settings.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        database = Database(settings.ASYNC_DATABASE_URL)
        await database.create_tables()
        await database.connect()
        logger.info("✅ Database connection successful")

        app.state.database = database
        app.state.post_service = PostService(
            PostRepository(database.get_session), now=settings.get_now
        )
        app.state.ai_service = ai_service or AIService(
            api_key=settings.OPENROUTER_API_KEY,
            base_url=settings.OPENROUTER_BASE_URL,
            model=settings.AI_MODEL,
            timeout=settings.AI_TIMEOUT,
        )
        logger.info(f"🤖 AI generation configured: {app.state.ai_service.configured}")
        yield
        logger.info("🔄 Shutting down...")
        await app.state.ai_service.close()
        await database.disconnect()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description=settings.PROJECT_INFO,
        version=settings.PROJECT_VERSION,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore
    app.add_exception_handler(Exception, global_exception_handler)

    @app.get("/", tags=["Health"])
    async def root():
        """Root endpoint with health check."""
        return {
            "message": "🚀 Server is running!",
            "status": "healthy",
            "version": settings.PROJECT_VERSION,
            "aiConfigured": app.state.ai_service.configured,
            "features": FEATURES,
        }

    @app.get("/api/health", tags=["Health"])
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "OK",
            "timestamp": settings.get_now().isoformat(),
            "aiConfigured": app.state.ai_service.configured,
            "features": FEATURES,
        }

    app.include_router(post_router)
    app.include_router(ai_router)

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "src.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,  # Enable auto-reload in development
        log_level="info",
    )
