"""Fixtures for HTTP-level tests."""

import pytest
from dishka import AsyncContainer
from fastapi.testclient import TestClient

from onboard.adapter.auth0.management import MockManagementClient
from onboard.adapter.email.smtp import MockEmailSender
from onboard.domain.service import EmailSender, IdentityProviderClient
from onboard.interface.api.app import create_app
from tests.di import build_test_container


@pytest.fixture
def container() -> AsyncContainer:
    """All-mock container shared by the app and the test."""
    return build_test_container()


@pytest.fixture
def client(container: AsyncContainer):
    """Test client over an app wired to the test container."""
    with TestClient(create_app(container)) as test_client:
        yield test_client


@pytest.fixture
def identity(client: TestClient, container: AsyncContainer) -> MockManagementClient:
    """The in-memory tenant behind the app."""
    return client.portal.call(container.get, IdentityProviderClient)


@pytest.fixture
def mailer(client: TestClient, container: AsyncContainer) -> MockEmailSender:
    """The mock email sender behind the app."""
    return client.portal.call(container.get, EmailSender)
