"""FastAPI application."""

from fastapi import FastAPI

from commentarea.interface.api.routes import comments, health
from commentarea.util.di.container import create_container, setup_di
from commentarea.util.observability import instrument_fastapi


def create_app() -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.
    """
    app_instance = FastAPI(
        title="StudentQuiz Comment Area API",
        description="Threaded comments, replies and moderation for StudentQuiz questions",
        version="0.1.0",
    )

    # Instrument FastAPI for automatic tracing of HTTP requests
    instrument_fastapi(app_instance)

    # Settings are loaded from environment automatically
    container = create_container()
    setup_di(app_instance, container)

    app_instance.include_router(health.router)
    app_instance.include_router(comments.router)

    return app_instance
