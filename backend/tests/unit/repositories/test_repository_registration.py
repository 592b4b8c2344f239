"""Unit tests for the registration repositories."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from tests.factories.registration import RegistrationFactory, RegistrationHistoryFactory
from tests.factories.user import UserFactory
from tripreg.repositories.registration import (
    RegistrationHistoryRepository,
    RegistrationRepository,
)


class TestRegistrationRepository:
    """Ensure lookups by natural key and listings behave."""

    @pytest.fixture()
    def repo(self, session):
        return RegistrationRepository(session=session)

    def test_get_for_user_event(self, repo):
        reg = RegistrationFactory(event="g::t::7.0.0")
        RegistrationFactory(user=reg.user, event="g::t::8.0.0")

        found = repo.get_for_user_event(reg.user_id, "g::t::7.0.0", lock=True)

        assert found is not None
        assert found.id == reg.id
        assert repo.get_for_user_event(reg.user_id, "g::t::9.9.9") is None

    def test_list_all_filters_by_event(self, repo):
        a = RegistrationFactory(event="g::t::7.0.0")
        RegistrationFactory(event="g::t::8.0.0")

        only_seven = repo.list_all("g::t::7.0.0")

        assert [r.id for r in only_seven] == [a.id]
        assert len(repo.list_all()) == 2

    def test_list_for_user_is_scoped(self, repo):
        mine = RegistrationFactory()
        RegistrationFactory()

        assert [r.id for r in repo.list_for_user(mine.user_id)] == [mine.id]


class TestRegistrationHistoryRepository:
    """History is listed newest first with the id as tiebreaker."""

    @pytest.fixture()
    def repo(self, session):
        return RegistrationHistoryRepository(session=session)

    def test_newest_first(self, repo):
        reg = RegistrationFactory()
        base = datetime(2025, 6, 1, tzinfo=UTC)
        old = RegistrationHistoryFactory(registration=reg, created_at=base)
        new = RegistrationHistoryFactory(registration=reg, created_at=base + timedelta(hours=1))

        assert [e.id for e in repo.list_for_user(reg.user_id)] == [new.id, old.id]

    def test_same_timestamp_falls_back_to_id_desc(self, repo):
        reg = RegistrationFactory()
        ts = datetime(2025, 6, 1, tzinfo=UTC)
        first = RegistrationHistoryFactory(registration=reg, created_at=ts)
        second = RegistrationHistoryFactory(registration=reg, created_at=ts)

        assert [e.id for e in repo.list_for_user(reg.user_id)] == [second.id, first.id]

    def test_event_filter(self, repo):
        user = UserFactory()
        seven = RegistrationFactory(user=user, event="g::t::7.0.0")
        eight = RegistrationFactory(user=user, event="g::t::8.0.0")
        RegistrationHistoryFactory(registration=seven)
        kept = RegistrationHistoryFactory(registration=eight)

        entries = repo.list_for_user(user.id, "g::t::8.0.0")

        assert [e.id for e in entries] == [kept.id]
