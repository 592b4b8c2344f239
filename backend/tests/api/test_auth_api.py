"""HTTP tests for the OAuth login flow and the session cookie."""

from __future__ import annotations

from datetime import timedelta

from freezegun import freeze_time

from tests.factories.user import UserFactory
from tests.helpers.utils import API, GUILD_ID
from tripreg.models.user import User
from tripreg.services._shared.ports import ExternalProfile


def _profile(external_id: str = "42", groups=(GUILD_ID,)) -> ExternalProfile:
    return ExternalProfile(
        external_id=external_id, username="alice", email="a@example.com", group_ids=frozenset(groups)
    )


def _set_state(client, state: str = "abc") -> None:
    with client.session_transaction() as flask_session:
        flask_session["oauth_state"] = state


def _session_cookie(resp, services) -> str | None:
    prefix = f"{services.settings.cookie_name}="
    return next((c for c in resp.headers.getlist("Set-Cookie") if c.startswith(prefix)), None)


class TestDiscordLogin:
    def test_login_redirects_with_state(self, client):
        resp = client.get(f"{API}/auth/discord/login")

        assert resp.status_code == 307
        with client.session_transaction() as flask_session:
            state = flask_session["oauth_state"]
        assert resp.headers["Location"].endswith(f"state={state}")

    def test_callback_creates_identity_and_sets_cookie(
        self, client, identity_provider, services, session
    ):
        identity_provider.profiles["good"] = _profile()
        _set_state(client)

        resp = client.get(f"{API}/auth/discord/callback?code=good&state=abc")

        assert resp.status_code == 201
        body = resp.get_json()["data"]
        assert body["message"] == "Welcome alice! You are logged in."
        cookie = _session_cookie(resp, services)
        assert cookie is not None
        assert "HttpOnly" in cookie
        assert session.query(User).filter_by(discord_id="42").count() == 1

    def test_repeat_login_returns_200(self, client, identity_provider, session):
        UserFactory(discord_id="42")
        session.commit()
        identity_provider.profiles["good"] = _profile()
        _set_state(client)

        resp = client.get(f"{API}/auth/discord/callback?code=good&state=abc")

        assert resp.status_code == 200

    def test_state_mismatch(self, client, identity_provider):
        identity_provider.profiles["good"] = _profile()
        _set_state(client, "expected")

        resp = client.get(f"{API}/auth/discord/callback?code=good&state=forged")

        assert resp.status_code == 400
        assert resp.get_json()["detail"] == "Invalid OAuth state"

    def test_missing_state_in_session(self, client, identity_provider):
        identity_provider.profiles["good"] = _profile()

        resp = client.get(f"{API}/auth/discord/callback?code=good&state=abc")

        assert resp.status_code == 400

    def test_missing_code(self, client):
        _set_state(client)

        resp = client.get(f"{API}/auth/discord/callback?state=abc")

        assert resp.status_code == 400
        assert resp.get_json()["detail"] == "Code not found"

    def test_state_is_single_use(self, client, identity_provider):
        identity_provider.profiles["good"] = _profile()
        _set_state(client)
        client.get(f"{API}/auth/discord/callback?code=good&state=abc")

        resp = client.get(f"{API}/auth/discord/callback?code=good&state=abc")

        assert resp.status_code == 400

    def test_not_in_community_is_forbidden(self, client, identity_provider, session):
        identity_provider.profiles["outsider"] = _profile("99", groups=("elsewhere",))
        _set_state(client)

        resp = client.get(f"{API}/auth/discord/callback?code=outsider&state=abc")

        assert resp.status_code == 403
        assert session.query(User).filter_by(discord_id="99").count() == 0

    def test_provider_failure_is_bad_gateway(self, client):
        _set_state(client)

        resp = client.get(f"{API}/auth/discord/callback?code=unknown&state=abc")

        assert resp.status_code == 502
        assert resp.mimetype == "application/problem+json"


class TestSessionCookie:
    def test_logout_clears_cookie(self, client, services):
        resp = client.post(f"{API}/auth/logout")

        assert resp.status_code == 200
        cookie = _session_cookie(resp, services)
        assert cookie.startswith(f"{services.settings.cookie_name}=;")

    def test_missing_credentials(self, client):
        resp = client.get(f"{API}/me")

        assert resp.status_code == 401
        assert resp.mimetype == "application/problem+json"

    def test_invalid_cookie(self, client, services):
        client.set_cookie(services.settings.cookie_name, "garbage")

        assert client.get(f"{API}/me").status_code == 401

    def test_fresh_session_is_not_reissued(self, client, sign_in, services):
        sign_in(UserFactory())

        resp = client.get(f"{API}/me")

        assert resp.status_code == 200
        assert _session_cookie(resp, services) is None

    def test_old_session_is_renewed_on_use(self, client, services, session):
        """
        GIVEN a session issued 13 hours ago with a 24 hour window
        WHEN it is used
        THEN the response carries a fresh session cookie.
        """
        user = UserFactory()
        session.commit()
        user_id = user.id
        with freeze_time("2025-06-01 00:00:00"):
            token = services.issuer.issue(user_id).token
        client.set_cookie(services.settings.cookie_name, token)

        with freeze_time("2025-06-01 13:00:00"):
            resp = client.get(f"{API}/me")

        assert resp.status_code == 200
        assert _session_cookie(resp, services) is not None

    def test_renewal_does_not_carry_into_next_request(self, client, services, session):
        """
        GIVEN a request whose session was renewed
        WHEN a later request presents no credential
        THEN that response sets no session cookie.
        """
        user = UserFactory()
        session.commit()
        user_id = user.id
        with freeze_time("2025-06-01 00:00:00"):
            token = services.issuer.issue(user_id).token
        client.set_cookie(services.settings.cookie_name, token)

        with freeze_time("2025-06-01 13:00:00"):
            renewed = client.get(f"{API}/me")
            client.delete_cookie(services.settings.cookie_name)
            anonymous = client.get(f"{API}/health")

        assert _session_cookie(renewed, services) is not None
        assert anonymous.status_code == 200
        assert _session_cookie(anonymous, services) is None

    def test_expired_session(self, client, services, session):
        user = UserFactory()
        session.commit()
        user_id = user.id
        with freeze_time("2025-06-01 00:00:00"):
            token = services.issuer.issue(user_id).token
        client.set_cookie(services.settings.cookie_name, token)

        with freeze_time("2025-06-02 00:00:01"):
            resp = client.get(f"{API}/me")

        assert resp.status_code == 401

    def test_api_key_wins_over_cookie(self, client, sign_in, services):
        """An invalid key is rejected even when a valid cookie is present."""
        sign_in(UserFactory())

        resp = client.get(f"{API}/me", headers={services.settings.api_key_header: "bogus"})

        assert resp.status_code == 401

    def test_api_key_authenticates(self, client, api_key_headers):
        user = UserFactory(username="keyholder")

        resp = client.get(f"{API}/me", headers=api_key_headers(user))

        assert resp.status_code == 200
        assert resp.get_json()["data"]["username"] == "keyholder"
