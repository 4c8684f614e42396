"""Logfire setup.

Services log through the ``logfire`` module directly::

    with logfire.span("suggestion_service.approve", suggestion_id=str(id)):
        logfire.info("Suggestion approved", tag_id=str(tag.id))

This module only decides where those records go and which libraries get
auto-instrumented.
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from kopiena.config import Settings

SERVICE_NAME = "kopiena-api"

# Probes hit these constantly and add nothing to traces
UNTRACED_URLS = "/health"


def _should_send(settings: Settings) -> bool:
    # Explicit flag wins, otherwise ship only when a token is configured
    if settings.observability.send_to_logfire is not None:
        return settings.observability.send_to_logfire
    return bool(settings.observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for the process.

    Without OBSERVABILITY__LOGFIRE_TOKEN everything stays on the console.

    Args:
        settings: Application settings
    """
    send = _should_send(settings)
    logfire.configure(
        service_name=SERVICE_NAME,
        service_version=settings.git_sha,
        environment=settings.environment,
        send_to_logfire=send,
        token=settings.observability.logfire_token,
        console=logfire.ConsoleOptions(
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    )
    logfire.info(
        "Observability configured",
        environment=settings.environment,
        send_to_logfire=send,
    )


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every HTTP request except health probes.

    Query parameters are recorded so search traces show the typed query.
    """

    def _request_attributes(request, attributes):
        return {
            **attributes,
            "path": request.url.path,
            "query": str(request.url.query) or None,
        }

    logfire.instrument_fastapi(
        app,
        excluded_urls=UNTRACED_URLS,
        request_attributes_mapper=_request_attributes,
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace SQL statements, including unit-of-work savepoints."""
    logfire.instrument_sqlalchemy(engine=engine.sync_engine, enable_commenter=True)
