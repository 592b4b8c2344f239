"""Tests for registrations, the shared field set and history snapshots."""

from __future__ import annotations

from dataclasses import FrozenInstanceError, replace
from datetime import date

import pytest
from sqlalchemy.exc import IntegrityError

from tests.factories.registration import RegistrationFactory, RegistrationHistoryFactory
from tests.factories.user import UserFactory
from tripreg.models.registration import (
    FIELD_NAMES,
    Registration,
    RegistrationFields,
    RegistrationHistory,
)


class TestRegistrationFields:
    def test_is_immutable(self):
        fields = RegistrationFields(date(2025, 7, 1), date(2025, 7, 3))
        with pytest.raises(FrozenInstanceError):
            fields.note = "changed"  # type: ignore[misc]

    def test_as_dict_carries_every_field(self):
        fields = RegistrationFields(date(2025, 7, 1), date(2025, 7, 3), children_count=2)
        assert tuple(fields.as_dict()) == FIELD_NAMES
        assert fields.as_dict()["children_count"] == 2

    def test_changed_from_only_lists_differences(self):
        before = RegistrationFields(date(2025, 7, 1), date(2025, 7, 3))
        after = replace(before, departure_date=date(2025, 7, 4), note="late")

        assert after.changed_from(before) == {
            "departure_date": date(2025, 7, 4),
            "note": "late",
        }
        assert before.changed_from(before) == {}

    def test_changes_follow_field_order(self):
        before = RegistrationFields(date(2025, 7, 1), date(2025, 7, 3))
        after = replace(before, note="late", cancelled=True, arrival_date=date(2025, 6, 30))

        changed = tuple(after.changed_from(before))

        assert changed == tuple(name for name in FIELD_NAMES if name in changed)
        assert changed == ("arrival_date", "cancelled", "note")


class TestRegistration:
    def test_fields_round_trip_through_columns(self, session):
        user = UserFactory()
        fields = RegistrationFields(
            arrival_date=date(2025, 7, 10),
            departure_date=date(2025, 7, 12),
            food_restrictions="vegan",
            children_count=1,
            cancelled=False,
            note="tent",
        )
        reg = Registration(user_id=user.id, event="g::t::7.0.0", fields=fields)
        session.add(reg)
        session.commit()
        session.expire_all()

        stored = session.get(Registration, reg.id)
        assert stored.fields == fields

    def test_one_row_per_user_and_event(self, session):
        existing = RegistrationFactory()
        session.commit()
        user_id, event = existing.user_id, existing.event

        session.add(
            Registration(
                user_id=user_id,
                event=event,
                fields=RegistrationFields(date(2025, 7, 1), date(2025, 7, 2)),
            )
        )
        with pytest.raises(IntegrityError):
            session.commit()

    def test_same_user_may_register_for_another_event(self, session):
        existing = RegistrationFactory()
        session.add(
            Registration(
                user_id=existing.user_id,
                event="g::t::8.0.0",
                fields=RegistrationFields(date(2025, 7, 1), date(2025, 7, 2)),
            )
        )
        session.commit()

        assert session.query(Registration).filter_by(user_id=existing.user_id).count() == 2

    def test_database_rejects_arrival_after_departure(self, session):
        user = UserFactory()
        session.add(
            Registration(
                user_id=user.id,
                event="g::t::7.0.0",
                fields=RegistrationFields(date(2025, 7, 5), date(2025, 7, 1)),
            )
        )
        with pytest.raises(IntegrityError):
            session.commit()


class TestRegistrationHistory:
    def test_snapshot_keeps_its_own_copy_of_fields(self, session):
        entry = RegistrationHistoryFactory()
        session.commit()
        registration = entry.registration

        registration.fields = replace(registration.fields, cancelled=True)
        session.commit()
        session.expire_all()

        stored = session.get(RegistrationHistory, entry.id)
        assert stored.fields.cancelled is False
        assert session.get(Registration, registration.id).fields.cancelled is True
