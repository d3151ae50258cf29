"""Auth0 Management API client implementation.

Implements the IdentityProviderClient port on top of the Management API v2.
Access tokens are obtained with the client-credentials grant and cached on
the client instance until shortly before they expire.
"""

from datetime import datetime, timedelta, timezone
from typing import Any
from urllib.parse import quote
from uuid import uuid4

import httpx
import logfire

from onboard.adapter.auth0.reply import reading_reply
from onboard.adapter.error import ProviderError
from onboard.config import ProviderSettings
from onboard.domain.model import InvitedUser, UserPage
from onboard.domain.service.identity_provider import IdentityProviderClient
from onboard.domain.value import UserId, VerificationTicket

# Refresh the cached access token this long before it expires
TOKEN_EXPIRY_BUFFER = timedelta(minutes=5)


def _parse_datetime(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


def user_from_auth0(data: dict[str, Any]) -> InvitedUser:
    """Map an Auth0 user object to an InvitedUser.

    Only the activation_pending key of app_metadata is read; anything else
    the tenant stores there is ignored.
    """
    app_metadata = data.get("app_metadata") or {}
    pending = app_metadata.get("activation_pending")
    return InvitedUser(
        user_id=UserId(data["user_id"]),
        email=data.get("email", ""),
        given_name=data.get("given_name"),
        family_name=data.get("family_name"),
        email_verified=bool(data.get("email_verified", False)),
        activation_pending=pending if isinstance(pending, bool) else None,
        created_at=_parse_datetime(data.get("created_at")),
        last_login=_parse_datetime(data.get("last_login")),
    )


class ManagementClient(IdentityProviderClient):
    """Base class for Auth0 Management API clients.

    Provides type distinction for dependency injection.
    """

    pass


class RealManagementClient(ManagementClient):
    """Auth0 Management API v2 client over httpx."""

    def __init__(self, settings: ProviderSettings) -> None:
        """Initialize Management API client.

        Args:
            settings: Identity provider settings
        """
        self.settings = settings
        self.api_url = f"{settings.base_url}/api/v2"
        self.token_url = f"{settings.base_url}/oauth/token"

        self._access_token: str | None = None
        self._token_expires_at: datetime | None = None

    async def _get_access_token(self) -> str:
        """Get a valid Management API access token.

        Returns:
            Cached token if still valid, otherwise a freshly requested one

        Raises:
            ProviderError: If the token request fails
        """
        now = datetime.now(timezone.utc)
        if (
            self._access_token
            and self._token_expires_at
            and now < self._token_expires_at
        ):
            return self._access_token

        payload = {
            "client_id": self.settings.client_id,
            "client_secret": self.settings.client_secret,
            "audience": self.settings.management_audience,
            "grant_type": "client_credentials",
        }

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    self.token_url,
                    json=payload,
                    timeout=self.settings.timeout_seconds,
                )
        except httpx.HTTPError as e:
            logfire.error("Management token request HTTP error", error=str(e))
            raise ProviderError(f"HTTP error requesting management token: {e}")

        if response.status_code != 200:
            logfire.error(
                "Management token request failed",
                status_code=response.status_code,
                error=response.text,
            )
            raise ProviderError(
                f"Management token request failed: {response.status_code}",
                status_code=response.status_code,
            )

        with reading_reply(response, "management token"):
            token_data = response.json()
            access_token = str(token_data["access_token"])
            expires_in = int(token_data.get("expires_in", 3600))
        self._access_token = access_token
        self._token_expires_at = (
            now + timedelta(seconds=expires_in) - TOKEN_EXPIRY_BUFFER
        )
        logfire.info(
            "Management access token refreshed",
            domain=self.settings.domain,
            expires_in_seconds=expires_in,
        )
        return access_token

    async def _request(
        self,
        method: str,
        path: str,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """Make an authenticated Management API request.

        Raises:
            ProviderError: On transport errors and non-2xx responses
        """
        access_token = await self._get_access_token()

        try:
            async with httpx.AsyncClient() as client:
                response = await client.request(
                    method,
                    f"{self.api_url}{path}",
                    json=json,
                    params=params,
                    headers={"Authorization": f"Bearer {access_token}"},
                    timeout=self.settings.timeout_seconds,
                )
        except httpx.HTTPError as e:
            logfire.error(
                "Management API HTTP error", method=method, path=path, error=str(e)
            )
            raise ProviderError(f"HTTP error calling {method} {path}: {e}")

        if response.is_error:
            error_code = None
            message = response.text
            try:
                body = response.json()
                error_code = body.get("errorCode")
                message = body.get("message", message)
            except (ValueError, AttributeError):
                pass
            logfire.error(
                "Management API request failed",
                method=method,
                path=path,
                status_code=response.status_code,
                error_code=error_code,
                error=message,
            )
            raise ProviderError(
                f"{method} {path} failed: {response.status_code} {message}",
                status_code=response.status_code,
                error_code=error_code,
            )

        return response

    @staticmethod
    def _user_path(user_id: UserId) -> str:
        return f"/users/{quote(user_id, safe='')}"

    async def create_user(
        self,
        email: str,
        password: str,
        given_name: str,
        family_name: str,
        email_verified: bool,
        app_metadata: dict[str, Any],
    ) -> InvitedUser:
        """Create a user in the configured database connection."""
        body: dict[str, Any] = {
            "connection": self.settings.connection,
            "email": email,
            "password": password,
            "email_verified": email_verified,
            "verify_email": False,
            "app_metadata": app_metadata,
        }
        if given_name:
            body["given_name"] = given_name
        if family_name:
            body["family_name"] = family_name

        response = await self._request("POST", "/users", json=body)
        with reading_reply(response, "create user"):
            return user_from_auth0(response.json())

    async def get_user(self, user_id: UserId) -> InvitedUser | None:
        """Fetch a user by ID, None on 404."""
        try:
            response = await self._request("GET", self._user_path(user_id))
        except ProviderError as e:
            if e.status_code == 404:
                return None
            raise
        with reading_reply(response, "get user"):
            return user_from_auth0(response.json())

    async def list_users(
        self, page: int = 0, per_page: int = 50, pending_only: bool = False
    ) -> UserPage:
        """List users of the configured connection.

        Users without the flag count as pending, hence the negated clause.
        """
        query = f'identities.connection:"{self.settings.connection}"'
        if pending_only:
            query += " AND NOT app_metadata.activation_pending:false"

        response = await self._request(
            "GET",
            "/users",
            params={
                "q": query,
                "search_engine": "v3",
                "page": page,
                "per_page": per_page,
                "include_totals": "true",
            },
        )
        with reading_reply(response, "list users"):
            body = response.json()
            return UserPage(
                users=[user_from_auth0(item) for item in body["users"]],
                total=int(body["total"]),
            )

    async def delete_user(self, user_id: UserId) -> None:
        """Delete a user by ID."""
        await self._request("DELETE", self._user_path(user_id))

    async def update_password(self, user_id: UserId, password: str) -> None:
        """Overwrite a user's password.

        Auth0 rejects password changes combined with other attributes, so
        this call carries only the password and its connection.
        """
        await self._request(
            "PATCH",
            self._user_path(user_id),
            json={"password": password, "connection": self.settings.connection},
        )

    async def update_app_metadata(
        self, user_id: UserId, app_metadata: dict[str, Any]
    ) -> InvitedUser:
        """Merge attributes into app_metadata (Auth0 merges top-level keys)."""
        response = await self._request(
            "PATCH", self._user_path(user_id), json={"app_metadata": app_metadata}
        )
        with reading_reply(response, "update app_metadata"):
            return user_from_auth0(response.json())

    async def create_email_verification_ticket(
        self, user_id: UserId, result_url: str, ttl_seconds: int
    ) -> VerificationTicket:
        """Create an email verification ticket."""
        response = await self._request(
            "POST",
            "/tickets/email-verification",
            json={
                "user_id": user_id,
                "result_url": result_url,
                "ttl_sec": ttl_seconds,
            },
        )
        with reading_reply(response, "email verification ticket"):
            return VerificationTicket(ticket_url=response.json()["ticket"])


class MockManagementClient(ManagementClient):
    """In-memory Management API for testing.

    Behaves like a tenant with a single database connection: emails are
    unique, unknown IDs are 404s. Every write is recorded in ``writes`` and
    individual operations can be made to fail through ``failures``.
    """

    def __init__(self) -> None:
        """Initialize empty in-memory tenant."""
        self.users: dict[str, dict[str, Any]] = {}
        self.passwords: dict[str, str] = {}
        self.tickets: dict[str, str] = {}
        self.writes: list[tuple[str, str]] = []
        # operation name -> error raised on every call
        self.failures: dict[str, ProviderError] = {}

    def _maybe_fail(self, operation: str) -> None:
        error = self.failures.get(operation)
        if error is not None:
            raise error

    def _require(self, user_id: UserId) -> dict[str, Any]:
        data = self.users.get(user_id)
        if data is None:
            raise ProviderError("The user does not exist.", status_code=404)
        return data

    async def create_user(
        self,
        email: str,
        password: str,
        given_name: str,
        family_name: str,
        email_verified: bool,
        app_metadata: dict[str, Any],
    ) -> InvitedUser:
        """Create an in-memory user."""
        self._maybe_fail("create_user")
        if any(u["email"] == email.lower() for u in self.users.values()):
            raise ProviderError("The user already exists.", status_code=409)

        user_id = f"auth0|{uuid4().hex[:24]}"
        self.users[user_id] = {
            "user_id": user_id,
            "email": email.lower(),
            "given_name": given_name or None,
            "family_name": family_name or None,
            "email_verified": email_verified,
            "app_metadata": dict(app_metadata),
            "created_at": datetime.now(timezone.utc).isoformat(),
        }
        self.passwords[user_id] = password
        self.writes.append(("create_user", user_id))
        return user_from_auth0(self.users[user_id])

    async def get_user(self, user_id: UserId) -> InvitedUser | None:
        """Fetch an in-memory user."""
        self._maybe_fail("get_user")
        data = self.users.get(user_id)
        return user_from_auth0(data) if data else None

    async def list_users(
        self, page: int = 0, per_page: int = 50, pending_only: bool = False
    ) -> UserPage:
        """List in-memory users in creation order."""
        self._maybe_fail("list_users")
        users = [user_from_auth0(item) for item in self.users.values()]
        if pending_only:
            users = [u for u in users if not u.is_active]
        return UserPage(
            users=users[page * per_page : (page + 1) * per_page], total=len(users)
        )

    async def delete_user(self, user_id: UserId) -> None:
        """Delete an in-memory user."""
        self._maybe_fail("delete_user")
        self._require(user_id)
        del self.users[user_id]
        self.passwords.pop(user_id, None)
        self.writes.append(("delete_user", user_id))

    async def update_password(self, user_id: UserId, password: str) -> None:
        """Overwrite an in-memory password."""
        self._maybe_fail("update_password")
        self._require(user_id)
        self.passwords[user_id] = password
        self.writes.append(("update_password", user_id))

    async def update_app_metadata(
        self, user_id: UserId, app_metadata: dict[str, Any]
    ) -> InvitedUser:
        """Merge into in-memory app_metadata."""
        self._maybe_fail("update_app_metadata")
        data = self._require(user_id)
        data["app_metadata"] = {**data.get("app_metadata", {}), **app_metadata}
        self.writes.append(("update_app_metadata", user_id))
        return user_from_auth0(data)

    async def create_email_verification_ticket(
        self, user_id: UserId, result_url: str, ttl_seconds: int
    ) -> VerificationTicket:
        """Issue a fake ticket whose URL remembers the result URL."""
        self._maybe_fail("create_email_verification_ticket")
        self._require(user_id)
        ticket_id = uuid4().hex
        self.tickets[ticket_id] = result_url
        return VerificationTicket(
            ticket_url=f"https://mock.auth0.test/u/email-verification?ticket={ticket_id}"
        )
