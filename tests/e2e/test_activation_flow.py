"""End-to-end tests for invitation and activation over HTTP."""

from fastapi.testclient import TestClient

from onboard.adapter.auth0.management import MockManagementClient
from onboard.adapter.email.smtp import MockEmailSender
from tests.e2e.flow import activation_token_from_email, log_in

PASSWORD = "correct horse battery"


def _invite_ada(client: TestClient, admin_headers: dict[str, str]) -> str:
    response = client.post(
        "/admin/users/invite",
        json={
            "invitees": [
                {"given_name": "Ada", "family_name": "Lovelace", "email": "ada@example.com"}
            ]
        },
        headers=admin_headers,
    )
    assert response.status_code == 201
    [invited] = response.json()["invited"]
    return invited["user_id"]


class TestActivationFlow:
    """Invite, activate and log in through the HTTP surface."""

    def test_ada_lovelace_becomes_member(
        self,
        client: TestClient,
        identity: MockManagementClient,
        mailer: MockEmailSender,
        admin_headers: dict[str, str],
    ):
        """Invite -> email -> form -> password -> login grants Member."""
        # Invite
        user_id = _invite_ada(client, admin_headers)
        assert identity.users[user_id]["app_metadata"]["activation_pending"] is True

        # Email with ticket link carrying the token
        [email] = mailer.outbox
        assert email.to == "ada@example.com"
        token = activation_token_from_email(email.text_body, identity)

        # Before activation the session gate grants nothing
        log_in(client, user_id)
        assert client.get("/auth/me").json()["capabilities"] == []
        assert client.get("/members", follow_redirects=False).status_code == 403

        # Form
        form = client.get("/account/activate", params={"userToken": token})
        assert form.status_code == 200
        assert "ada@example.com" in form.text
        assert 'name="userToken"' in form.text

        # Apply
        done = client.post(
            "/account/activate",
            data={"userToken": token, "password": PASSWORD, "confirm_password": PASSWORD},
        )
        assert done.status_code == 200
        assert "Sign in" in done.text
        assert identity.passwords[user_id] == PASSWORD
        assert identity.users[user_id]["app_metadata"]["activation_pending"] is False

        # Next login grants Member
        callback = log_in(client, user_id)
        assert callback.status_code == 303
        assert callback.headers["location"].endswith("/members")
        me = client.get("/auth/me").json()
        assert me["authenticated"] is True
        assert me["capabilities"] == ["Member"]
        members = client.get("/members")
        assert members.status_code == 200
        assert "Members area" in members.text

    def test_mismatched_confirmation_writes_nothing(
        self,
        client: TestClient,
        identity: MockManagementClient,
        mailer: MockEmailSender,
        admin_headers: dict[str, str],
    ):
        """The form is re-rendered with an error and the store is untouched."""
        user_id = _invite_ada(client, admin_headers)
        token = activation_token_from_email(mailer.outbox[0].text_body, identity)
        writes_before = list(identity.writes)
        password_before = identity.passwords[user_id]

        response = client.post(
            "/account/activate",
            data={
                "userToken": token,
                "password": PASSWORD,
                "confirm_password": "something else entirely",
            },
        )

        assert response.status_code == 422
        assert "do not match" in response.text
        assert 'name="userToken"' in response.text
        assert identity.writes == writes_before
        assert identity.passwords[user_id] == password_before
        assert identity.users[user_id]["app_metadata"]["activation_pending"] is True

    def test_second_activation_is_refused(
        self,
        client: TestClient,
        identity: MockManagementClient,
        mailer: MockEmailSender,
        admin_headers: dict[str, str],
    ):
        """Reusing the link after activation reports an active account."""
        user_id = _invite_ada(client, admin_headers)
        token = activation_token_from_email(mailer.outbox[0].text_body, identity)
        form = {"userToken": token, "password": PASSWORD, "confirm_password": PASSWORD}
        assert client.post("/account/activate", data=form).status_code == 200

        again = client.post(
            "/account/activate",
            data={**form, "password": "other password", "confirm_password": "other password"},
        )
        link = client.get("/account/activate", params={"userToken": token})

        assert again.status_code == 409
        assert "already been activated" in again.text
        assert link.status_code == 409
        assert identity.passwords[user_id] == PASSWORD

    def test_invalid_token_never_renders_form(self, client: TestClient):
        """Bad or missing tokens show the error page without a form."""
        for params in ({"userToken": "garbage"}, {}):
            response = client.get("/account/activate", params=params)

            assert response.status_code == 400
            assert "token not found or invalid" in response.text
            assert "<form" not in response.text
