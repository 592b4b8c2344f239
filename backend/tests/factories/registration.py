"""Factories for registrations and their history snapshots."""

from __future__ import annotations

from datetime import date

import factory

from tests.factories import BaseFactory
from tests.factories.user import UserFactory
from tripreg.models.base import utcnow
from tripreg.models.registration import Registration, RegistrationFields, RegistrationHistory


class RegistrationFieldsFactory(factory.Factory):
    """Plain value factory; not persisted on its own."""

    class Meta:
        model = RegistrationFields

    arrival_date = date(2025, 7, 10)
    departure_date = date(2025, 7, 13)
    food_restrictions = ""
    children_count = 0
    cancelled = False
    note = ""


class RegistrationFactory(BaseFactory):
    """
    Build persisted :class:`Registration` rows.

    Notes
    -----
    - ``event`` defaults to the primary event enabled in the test config.
    """

    class Meta:
        model = Registration

    id = None
    user = factory.SubFactory(UserFactory)
    user_id = factory.SelfAttribute("user.id")
    event = "g::t::7.0.0"
    fields = factory.SubFactory(RegistrationFieldsFactory)


class RegistrationHistoryFactory(BaseFactory):
    class Meta:
        model = RegistrationHistory

    id = None
    registration = factory.SubFactory(RegistrationFactory)
    registration_id = factory.SelfAttribute("registration.id")
    user_id = factory.SelfAttribute("registration.user_id")
    event = factory.SelfAttribute("registration.event")
    fields = factory.SelfAttribute("registration.fields")
    created_at = factory.LazyFunction(utcnow)
