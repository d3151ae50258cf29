"""Unit tests for CreateInvitesUseCase."""

import json
from urllib.parse import parse_qs, urlparse

import httpx
import pytest
from dishka import AsyncContainer

from onboard.adapter.auth0.management import MockManagementClient
from onboard.adapter.email.smtp import MockEmailSender
from onboard.adapter.error import ProviderError
from onboard.application.usecase.invite import CreateInvitesUseCase
from onboard.application.usecase.invite.create_invites import (
    CreateInvitesRequest,
    FailureStage,
    InviteeInfo,
)
from onboard.domain.error import ValidationError
from onboard.domain.service import EmailSender, IdentityProviderClient, TokenService
from onboard.domain.value import ActivationToken
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()

# Real Management API client over a fake tenant
real_identity_env = create_env_fixture(unmock={"identity"})


async def _mocks(
    env: AsyncContainer,
) -> tuple[CreateInvitesUseCase, MockManagementClient, MockEmailSender]:
    use_case = await env.get(CreateInvitesUseCase)
    client = await env.get(IdentityProviderClient)
    sender = await env.get(EmailSender)
    return use_case, client, sender


class TestCreateInvitesUseCase:
    """Tests for CreateInvitesUseCase."""

    @pytest.mark.asyncio
    async def test_each_entry_gets_one_pending_user_and_one_email(
        self, unit_env: AsyncContainer
    ):
        """Every entry with an email produces one pending user and one email."""
        # Arrange
        use_case, client, sender = await _mocks(unit_env)
        request = CreateInvitesRequest(
            invitees=[
                InviteeInfo(given_name="Ada", family_name="Lovelace", email="ada@example.com"),
                InviteeInfo(given_name="Grace", family_name="Hopper", email="grace@example.com"),
            ]
        )

        # Act
        response = await use_case.execute(request)

        # Assert
        assert [item.email for item in response.invited] == [
            "ada@example.com",
            "grace@example.com",
        ]
        assert response.failed == []
        assert response.skipped == 0
        assert len(client.users) == 2
        assert all(
            u["app_metadata"] == {"activation_pending": True} for u in client.users.values()
        )
        assert sorted(e.to for e in sender.outbox) == ["ada@example.com", "grace@example.com"]

    @pytest.mark.asyncio
    async def test_email_link_leads_to_activation_with_token(
        self, unit_env: AsyncContainer
    ):
        """The emailed ticket redirects to the activation endpoint with a valid token."""
        # Arrange
        use_case, client, sender = await _mocks(unit_env)
        token_service = await unit_env.get(TokenService)

        # Act
        response = await use_case.execute(
            CreateInvitesRequest(
                invitees=[
                    InviteeInfo(given_name="Ada", family_name="Lovelace", email="ada@example.com")
                ]
            )
        )

        # Assert
        [email] = sender.outbox
        [ticket_id] = client.tickets
        assert f"ticket={ticket_id}" in email.text_body

        result_url = urlparse(client.tickets[ticket_id])
        assert result_url.path == "/account/activate"
        token = parse_qs(result_url.query)["userToken"][0]
        payload = token_service.verify_activation_token(ActivationToken(root=token))
        assert payload.user_id == response.invited[0].user_id
        assert payload.email == "ada@example.com"

    @pytest.mark.asyncio
    async def test_entries_without_email_are_skipped(self, unit_env: AsyncContainer):
        """Blank emails are counted as skipped and produce no side effects."""
        # Arrange
        use_case, client, sender = await _mocks(unit_env)
        request = CreateInvitesRequest(
            invitees=[
                InviteeInfo(given_name="Nobody", family_name="", email=""),
                InviteeInfo(given_name="Blank", family_name="", email="   "),
                InviteeInfo(given_name="Ada", family_name="Lovelace", email="ada@example.com"),
            ]
        )

        # Act
        response = await use_case.execute(request)

        # Assert
        assert response.skipped == 2
        assert len(response.invited) == 1
        assert len(client.users) == 1
        assert len(sender.outbox) == 1

    @pytest.mark.asyncio
    async def test_email_is_normalized(self, unit_env: AsyncContainer):
        """Emails are trimmed and lowercased before the user is created."""
        use_case, client, _ = await _mocks(unit_env)

        response = await use_case.execute(
            CreateInvitesRequest(
                invitees=[InviteeInfo(given_name="Ada", email="  Ada@Example.COM ")]
            )
        )

        assert response.invited[0].email == "ada@example.com"

    @pytest.mark.asyncio
    async def test_invalid_email_fails_validation(self, unit_env: AsyncContainer):
        """Malformed emails fail at validation without touching the provider."""
        use_case, client, sender = await _mocks(unit_env)

        response = await use_case.execute(
            CreateInvitesRequest(invitees=[InviteeInfo(email="not-an-email")])
        )

        assert response.invited == []
        assert response.failed[0].stage == FailureStage.VALIDATION
        assert client.users == {}
        assert sender.outbox == []

    @pytest.mark.asyncio
    async def test_duplicate_user_fails_and_batch_continues(
        self, unit_env: AsyncContainer
    ):
        """A provider conflict is reported for that entry only."""
        # Arrange
        use_case, client, sender = await _mocks(unit_env)
        await use_case.execute(
            CreateInvitesRequest(invitees=[InviteeInfo(email="ada@example.com")])
        )
        sender.outbox.clear()

        # Act
        response = await use_case.execute(
            CreateInvitesRequest(
                invitees=[
                    InviteeInfo(email="ada@example.com"),
                    InviteeInfo(email="grace@example.com"),
                ]
            )
        )

        # Assert
        assert [f.email for f in response.failed] == ["ada@example.com"]
        assert response.failed[0].stage == FailureStage.PROVIDER
        assert response.failed[0].message == "User already exists"
        assert response.failed[0].user_id is None
        assert [i.email for i in response.invited] == ["grace@example.com"]
        assert [e.to for e in sender.outbox] == ["grace@example.com"]

    @pytest.mark.asyncio
    async def test_ticket_failure_is_a_provider_failure(self, unit_env: AsyncContainer):
        """Ticket errors are reported with the already created user ID."""
        # Arrange
        use_case, client, sender = await _mocks(unit_env)
        client.failures["create_email_verification_ticket"] = ProviderError(
            "Too many requests", status_code=429
        )

        # Act
        response = await use_case.execute(
            CreateInvitesRequest(invitees=[InviteeInfo(email="ada@example.com")])
        )

        # Assert
        [failure] = response.failed
        assert failure.stage == FailureStage.PROVIDER
        assert failure.user_id in client.users
        assert sender.outbox == []

    @pytest.mark.asyncio
    async def test_delivery_failure_is_reported_separately(
        self, unit_env: AsyncContainer
    ):
        """Email failures are distinguished from provider failures."""
        # Arrange
        use_case, client, sender = await _mocks(unit_env)
        sender.undeliverable.add("ada@example.com")

        # Act
        response = await use_case.execute(
            CreateInvitesRequest(
                invitees=[
                    InviteeInfo(email="ada@example.com"),
                    InviteeInfo(email="grace@example.com"),
                ]
            )
        )

        # Assert
        [failure] = response.failed
        assert failure.stage == FailureStage.DELIVERY
        assert failure.email == "ada@example.com"
        assert failure.user_id in client.users
        assert [i.email for i in response.invited] == ["grace@example.com"]

    @pytest.mark.asyncio
    async def test_batch_size_is_capped(self, unit_env: AsyncContainer):
        """Batches over the limit are rejected before anything is created."""
        use_case, client, _ = await _mocks(unit_env)
        request = CreateInvitesRequest(
            invitees=[InviteeInfo(email=f"user{i}@example.com") for i in range(51)]
        )

        with pytest.raises(ValidationError):
            await use_case.execute(request)
        assert client.users == {}


class TenantWithBrokenTickets:
    """Creates users normally but answers ticket requests with a useless body."""

    def __init__(self) -> None:
        self.created: list[str] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        if request.url.path == "/oauth/token":
            return httpx.Response(200, json={"access_token": "mgmt-token", "expires_in": 86400})
        if request.url.path == "/api/v2/users" and request.method == "POST":
            body = json.loads(request.content)
            user_id = f"auth0|{len(self.created) + 1:024d}"
            self.created.append(user_id)
            return httpx.Response(
                201,
                json={
                    "user_id": user_id,
                    "email": body["email"],
                    "email_verified": True,
                    "app_metadata": body["app_metadata"],
                },
            )
        if request.url.path == "/api/v2/tickets/email-verification":
            return httpx.Response(200, json={"unexpected": True})
        return httpx.Response(404, json={"message": "Not found"})


class TestCreateInvitesWithUnexpectedReplies:
    """Provider replies that parse badly stay within their entry."""

    @pytest.mark.asyncio
    async def test_malformed_ticket_reply_is_reported_and_batch_continues(
        self, real_identity_env: AsyncContainer, monkeypatch
    ):
        """Each entry is reported as a provider failure with its created user."""
        # Arrange
        tenant = TenantWithBrokenTickets()
        real_client = httpx.AsyncClient
        transport = httpx.MockTransport(tenant.handler)
        monkeypatch.setattr(
            httpx, "AsyncClient", lambda **kwargs: real_client(transport=transport, **kwargs)
        )
        use_case = await real_identity_env.get(CreateInvitesUseCase)
        sender = await real_identity_env.get(EmailSender)

        # Act
        response = await use_case.execute(
            CreateInvitesRequest(
                invitees=[
                    InviteeInfo(email="ada@example.com"),
                    InviteeInfo(email="grace@example.com"),
                ]
            )
        )

        # Assert
        assert response.invited == []
        assert [f.email for f in response.failed] == [
            "ada@example.com",
            "grace@example.com",
        ]
        assert all(f.stage == FailureStage.PROVIDER for f in response.failed)
        assert [f.user_id for f in response.failed] == tenant.created
        assert sender.outbox == []
