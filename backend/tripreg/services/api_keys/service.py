"""
ApiKeyService
=============

Owner-scoped management of static API keys. A key belongs to the identity
that created it and is only visible, in masked form, to that identity.
"""

from __future__ import annotations

import logging
import secrets

from tripreg.models.api_key import ApiKey
from tripreg.models.base import as_utc
from tripreg.services._shared.base import BaseService
from tripreg.services._shared.errors import NotFoundError, ValidationError
from tripreg.services.api_keys.dto import ApiKeyCreateIn, ApiKeyOut, mask_key
from tripreg.services.auth.dto import AuthenticatedIdentity

logger = logging.getLogger(__name__)

KEY_BYTES = 32


def generate_key() -> str:
    return secrets.token_hex(KEY_BYTES)


class ApiKeyService(BaseService):
    """Create, list and revoke API keys for the acting identity."""

    def create(self, identity: AuthenticatedIdentity, dto: ApiKeyCreateIn) -> ApiKeyOut:
        """
        Mint a new key. The returned DTO is the only place the full key is shown.

        :raises ValidationError: Blank name or an expiry in the past.
        :raises NotFoundError: If the acting identity no longer exists.
        """
        name = (dto.name or "").strip()
        if not name:
            raise ValidationError("API key name is required")
        expires_at = as_utc(dto.expires_at)
        if expires_at is not None and expires_at <= self.now():
            raise ValidationError("API key expiry must be in the future")

        with self.rw_uow() as uow:
            if uow.users.get(identity.user_id) is None:
                raise NotFoundError("User", identity.user_id)
            api_key = uow.api_keys.add(
                ApiKey(
                    user_id=identity.user_id,
                    key=generate_key(),
                    name=name,
                    expires_at=expires_at,
                )
            )
            out = self._to_out(api_key, reveal=True)
        logger.info("api_key.created", extra={"user_id": identity.user_id})
        return out

    def list(self, identity: AuthenticatedIdentity) -> list[ApiKeyOut]:
        with self.ro_uow() as uow:
            return [self._to_out(k) for k in uow.api_keys.list_for_user(identity.user_id)]

    def delete(self, identity: AuthenticatedIdentity, key_id: int) -> None:
        """
        Hard-delete one of the actor's keys.

        :raises NotFoundError: Unknown id or a key owned by someone else.
        """
        with self.rw_uow() as uow:
            api_key = uow.api_keys.get_owned(key_id, identity.user_id)
            if api_key is None:
                raise NotFoundError("ApiKey", key_id)
            uow.api_keys.delete(api_key)
        logger.info("api_key.deleted", extra={"user_id": identity.user_id})

    @staticmethod
    def _to_out(api_key: ApiKey, *, reveal: bool = False) -> ApiKeyOut:
        return ApiKeyOut(
            id=api_key.id,
            name=api_key.name,
            key=api_key.key if reveal else mask_key(api_key.key),
            created_at=as_utc(api_key.created_at),
            expires_at=as_utc(api_key.expires_at),
            last_used_at=as_utc(api_key.last_used_at),
        )
