"""Dependency injection container."""

from dishka import AsyncContainer, make_async_container

from dossier.util.di import PROVIDERS, get_provider


def create_container() -> AsyncContainer:
    """Build production container (all prod implementations).

    Settings are loaded from environment variables automatically.

    Returns:
        Configured DI container with production providers

    Usage:
        container = create_container()
        async with container() as request_container:
            use_case = await request_container.get(CompleteLoginUseCase)
            response = await use_case.execute(request)
        await container.close()
    """
    provider_instances = [get_provider(base, use_mock=False)() for base in PROVIDERS]
    return make_async_container(*provider_instances)
