"""Production container wiring."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from onboard.util.di import PROVIDERS, get_provider


def create_container() -> AsyncContainer:
    """Build the container with the real identity, login and email adapters.

    Settings come from the environment when the config provider resolves them.
    """
    providers = [get_provider(base, use_mock=False)() for base in PROVIDERS]
    return make_async_container(*providers, FastapiProvider())


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Attach the container to the app so routes can use FromDishka."""
    setup_dishka(container, app)
