"""FastAPI application."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from kopiena.config import Settings
from kopiena.interface.api.routes import admin, auth, health, tags
from kopiena.interface.error import register_error_handlers
from kopiena.util.di.container import create_container, setup_di
from kopiena.util.observability import instrument_fastapi


def create_app() -> FastAPI:
    """Create the Kopiena taxonomy API.

    Logfire must already be configured; scripts/start_app.py does this in
    production.
    """
    settings = Settings()

    app_instance = FastAPI(
        title="Kopiena API",
        description=(
            "Hobby and interest tag taxonomy for community groups and events, "
            "with moderated tag suggestions"
        ),
        version="0.1.0",
        debug=settings.debug,
    )

    instrument_fastapi(app_instance)

    # Session cookie travels cross-origin from the web client
    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "OPTIONS"],
        allow_headers=["Content-Type", "Accept", "Origin", "X-Requested-With"],
        max_age=600,
    )

    setup_di(app_instance, create_container())
    register_error_handlers(app_instance)

    app_instance.include_router(health.router)
    app_instance.include_router(auth.router)
    app_instance.include_router(tags.router)
    app_instance.include_router(admin.router)

    return app_instance


# Imported by uvicorn from scripts/start_app.py
app = create_app()
