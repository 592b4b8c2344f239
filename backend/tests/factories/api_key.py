"""Factory Boy definition for :class:`tripreg.models.api_key.ApiKey`."""

from __future__ import annotations

import secrets

import factory

from tests.factories import BaseFactory
from tests.factories.user import UserFactory
from tripreg.models.api_key import ApiKey


class ApiKeyFactory(BaseFactory):
    class Meta:
        model = ApiKey

    id = None
    user = factory.SubFactory(UserFactory)
    user_id = factory.SelfAttribute("user.id")
    key = factory.LazyFunction(lambda: secrets.token_hex(32))
    name = factory.Sequence(lambda n: f"key-{n}")
    expires_at = None
    last_used_at = None
