"""Process-level setup for hosts embedding the profile core."""

from dishka import AsyncContainer

from dossier.config import Settings
from dossier.util.di.container import create_container
from dossier.util.logging import setup_logging
from dossier.util.observability import configure_logfire


def bootstrap(settings: Settings | None = None) -> AsyncContainer:
    """Configure logging and observability, then build the DI container.

    Call once at process start. The container reads its own Settings from
    the environment; `settings` here only drives logging setup.

    Args:
        settings: Settings for logging setup (loaded from environment if omitted)

    Returns:
        Production DI container
    """
    settings = settings or Settings()
    setup_logging(settings)
    configure_logfire(settings)
    return create_container()
