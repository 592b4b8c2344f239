"""HTTP tests for /register, /history, /registrations and /me."""

from __future__ import annotations

from tests.factories.registration import RegistrationFactory
from tests.factories.user import UserFactory
from tests.helpers.utils import API, ORGANIZER_ROLE, PRIMARY_EVENT, SECONDARY_EVENT

PAYLOAD = {
    "arrival_date": "2025-07-10",
    "departure_date": "2025-07-13",
    "food_restrictions": "none",
    "children_count": 1,
}


class TestRegisterEndpoint:
    def test_first_submit_is_201_then_200(self, client, sign_in):
        sign_in(UserFactory())

        first = client.post(f"{API}/register", json=PAYLOAD)
        second = client.post(f"{API}/register", json={**PAYLOAD, "children_count": 2})

        assert first.status_code == 201
        assert second.status_code == 200
        data = second.get_json()["data"]
        assert data["id"] == first.get_json()["data"]["id"]
        assert data["event"] == PRIMARY_EVENT
        assert data["children_count"] == 2
        assert data["arrival_date"] == "2025-07-10"

    def test_arrival_after_departure_is_400(self, client, sign_in):
        sign_in(UserFactory())

        resp = client.post(
            f"{API}/register", json={**PAYLOAD, "arrival_date": "2025-07-20"}
        )

        assert resp.status_code == 400
        assert resp.mimetype == "application/problem+json"

    def test_missing_dates_is_422(self, client, sign_in):
        sign_in(UserFactory())

        resp = client.post(f"{API}/register", json={"food_restrictions": "x"})

        assert resp.status_code == 422
        assert "arrival_date" in resp.get_json()["details"]["errors"]

    def test_disabled_event_is_400(self, client, sign_in):
        sign_in(UserFactory())

        resp = client.post(f"{API}/register", json={**PAYLOAD, "event": "g::t::1.0.0"})

        assert resp.status_code == 400

    def test_requires_credentials(self, client):
        assert client.post(f"{API}/register", json=PAYLOAD).status_code == 401


class TestHistoryEndpoint:
    def test_history_diffs_and_full_snapshots(self, client, sign_in):
        sign_in(UserFactory())
        client.post(f"{API}/register", json=PAYLOAD)
        client.post(f"{API}/register", json={**PAYLOAD, "note": "arriving late"})

        diffed = client.get(f"{API}/history").get_json()["data"]
        full = client.get(f"{API}/history?diff=false").get_json()["data"]

        assert [e["fields"] for e in diffed][0] == {"note": "arriving late"}
        assert diffed[1]["fields"]["arrival_date"] == "2025-07-10"
        assert all(len(e["fields"]) == 6 for e in full)

    def test_history_event_filter(self, client, sign_in):
        sign_in(UserFactory())
        client.post(f"{API}/register", json=PAYLOAD)
        client.post(f"{API}/register", json={**PAYLOAD, "event": SECONDARY_EVENT})

        entries = client.get(f"{API}/history?event={SECONDARY_EVENT}").get_json()["data"]

        assert [e["event"] for e in entries] == [SECONDARY_EVENT]


class TestRegistrationsListing:
    def test_non_organizer_is_forbidden(self, client, sign_in):
        sign_in(UserFactory())

        resp = client.get(f"{API}/registrations")

        assert resp.status_code == 403

    def test_organizer_sees_everyone(self, client, sign_in, authority):
        organizer = UserFactory()
        authority.assign(organizer.discord_id, [ORGANIZER_ROLE])
        RegistrationFactory(event=PRIMARY_EVENT)
        RegistrationFactory(event=SECONDARY_EVENT)
        sign_in(organizer)

        everything = client.get(f"{API}/registrations").get_json()["data"]
        primary = client.get(f"{API}/registrations?event={PRIMARY_EVENT}").get_json()["data"]

        assert len(everything) == 2
        assert [row["registration"]["event"] for row in primary] == [PRIMARY_EVENT]
        assert primary[0]["username"]

    def test_role_authority_outage_is_502(self, client, sign_in, authority):
        from tripreg.services._shared.ports import RoleAuthorityError

        sign_in(UserFactory())
        authority.error = RoleAuthorityError("down")

        assert client.get(f"{API}/registrations").status_code == 502


class TestMeEndpoint:
    def test_me_lists_registrations_and_paid_flag(self, client, sign_in, authority):
        user = UserFactory(username="carol")
        authority.assign(user.discord_id, [f"{PRIMARY_EVENT}::paid"])
        RegistrationFactory(user=user)
        sign_in(user)

        data = client.get(f"{API}/me").get_json()["data"]

        assert data["username"] == "carol"
        assert data["paid"] is True
        assert len(data["registrations"]) == 1
