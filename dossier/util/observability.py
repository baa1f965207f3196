"""Observability configuration using Logfire.

Usage:
    import logfire

    logfire.info("Profile inserted", profile_id=doc.id, email=doc.email)

    with logfire.span("profile_service.save", user_id=identity.user_id):
        ...
"""

import logfire
from sqlalchemy.ext.asyncio import AsyncEngine

from dossier.config import Settings


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for observability.

    Cloud sending is enabled explicitly via OBSERVABILITY__SEND_TO_LOGFIRE,
    or implicitly when OBSERVABILITY__LOGFIRE_TOKEN is set. Otherwise logs
    only go to the console.

    Args:
        settings: Application settings
    """
    if settings.observability.send_to_logfire is not None:
        send_to_logfire = settings.observability.send_to_logfire
    elif settings.observability.logfire_token:
        send_to_logfire = True
    else:
        send_to_logfire = False

    config_kwargs = {
        "service_name": "dossier",
        "service_version": "0.1.0",
        "environment": settings.environment,
        "send_to_logfire": send_to_logfire,
        "console": logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    }

    if settings.observability.logfire_token:
        config_kwargs["token"] = settings.observability.logfire_token

    logfire.configure(**config_kwargs)

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        debug=settings.debug,
        send_to_logfire=send_to_logfire,
        has_token=bool(settings.observability.logfire_token),
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Instrument SQLAlchemy engine with Logfire.

    Args:
        engine: SQLAlchemy async engine
    """
    logfire.instrument_sqlalchemy(
        engine=engine.sync_engine,
        enable_commenter=True,  # Add SQL comments with span context
    )
    logfire.info("SQLAlchemy instrumented")


def instrument_redis() -> None:
    """Instrument redis clients with Logfire.

    Traces every cache command with its key (values are not captured).
    """
    logfire.instrument_redis()
    logfire.info("Redis instrumented")
