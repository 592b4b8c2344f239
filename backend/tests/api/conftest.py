"""Helpers for driving the HTTP API through the Flask test client."""

from __future__ import annotations

import pytest

from tests.factories.api_key import ApiKeyFactory


@pytest.fixture()
def sign_in(client, services, session):
    """Return a callable that gives ``client`` a session cookie for ``user``.

    Factory data is committed first because every request closes the scoped
    session on teardown.
    """

    def _sign_in(user) -> int:
        session.commit()
        user_id = user.id
        issued = services.issuer.issue(user_id)
        client.set_cookie(services.settings.cookie_name, issued.token)
        return user_id

    return _sign_in


@pytest.fixture()
def api_key_headers(services, session):
    """Return a callable building the API-key header for ``user``."""

    def _headers(user) -> dict[str, str]:
        key = ApiKeyFactory(user=user)
        session.commit()
        return {services.settings.api_key_header: key.key}

    return _headers
