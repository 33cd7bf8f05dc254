"""Key resolution facade: active keys, keys by id, listings, and metadata."""

import logging
from collections.abc import Iterable, Iterator
from typing import Any

from realm_keys.crypto.types import (
    ActiveAesKey,
    ActiveHmacKey,
    ActiveRsaKey,
    Algorithm,
    KeyDescriptor,
    KeyUse,
    PublicKeyMetadata,
    SecretKeyMetadata,
)
from realm_keys.keys.provider_cache import ProviderCache
from realm_keys.keys.rules import find_active_key, matches
from realm_keys.keys.source import KeySource

logger = logging.getLogger(__name__)


def _iter_keys(providers: Iterable[KeySource]) -> Iterator[KeyDescriptor]:
    for provider in providers:
        yield from provider.get_keys()


class KeyManager:
    """Resolves a realm's keys across its ordered key sources."""

    def __init__(self, cache: ProviderCache) -> None:
        self._cache = cache

    async def get_active_key(
        self, realm_id: str, use: KeyUse, algorithm: str
    ) -> KeyDescriptor:
        """Return the key to use for new operations.

        Raises NoActiveKeyError when no source has an active match.
        """
        providers = await self._cache.get_sources(realm_id)
        key = find_active_key(providers, realm_id, use, algorithm)
        logger.debug(
            "Active key found: realm=%s kid=%s algorithm=%s",
            realm_id,
            key.kid,
            algorithm,
        )
        return key

    async def get_key(
        self, realm_id: str, kid: str | None, use: KeyUse, algorithm: str
    ) -> KeyDescriptor | None:
        """Return the enabled key with the given kid, or None."""
        if not kid:
            logger.warning("kid is empty, can't find key: realm=%s", realm_id)
            return None

        providers = await self._cache.get_sources(realm_id)
        for key in _iter_keys(providers):
            if key.kid != kid or not key.status.is_enabled:
                continue
            if matches(key, use, algorithm):
                logger.debug(
                    "Key found: realm=%s kid=%s algorithm=%s", realm_id, kid, algorithm
                )
                return key

        logger.debug(
            "Failed to find key: realm=%s kid=%s algorithm=%s", realm_id, kid, algorithm
        )
        return None

    async def get_keys(
        self, realm_id: str, use: KeyUse, algorithm: str
    ) -> list[KeyDescriptor]:
        """Return every enabled matching key, in source then key order."""
        providers = await self._cache.get_sources(realm_id)
        return [
            key
            for key in _iter_keys(providers)
            if key.status.is_enabled and matches(key, use, algorithm)
        ]

    async def get_all_keys(self, realm_id: str) -> list[KeyDescriptor]:
        """Return every key of the realm regardless of status, use, or algorithm."""
        providers = await self._cache.get_sources(realm_id)
        return list(_iter_keys(providers))

    async def get_public_key_metadata(
        self, realm_id: str, use: KeyUse, algorithm: str
    ) -> list[PublicKeyMetadata]:
        """Return enabled asymmetric keys without their private material."""
        return [
            PublicKeyMetadata(
                kid=key.kid,
                provider_id=key.provider_id,
                provider_priority=key.provider_priority,
                status=key.status,
                public_key=key.public_key,
                certificate=key.certificate,
            )
            for key in await self.get_keys(realm_id, use, algorithm)
        ]

    async def get_secret_key_metadata(
        self, realm_id: str, use: KeyUse, algorithm: str
    ) -> list[SecretKeyMetadata]:
        """Return enabled symmetric keys without their secrets."""
        return [
            SecretKeyMetadata(
                kid=key.kid,
                provider_id=key.provider_id,
                provider_priority=key.provider_priority,
                status=key.status,
            )
            for key in await self.get_keys(realm_id, use, algorithm)
        ]

    # Single-algorithm shortcuts over the generic lookups.

    async def get_active_rsa_key(self, realm_id: str) -> ActiveRsaKey:
        key = await self.get_active_key(realm_id, KeyUse.SIG, Algorithm.RS256)
        return ActiveRsaKey(
            kid=key.kid,
            private_key=key.private_key,
            public_key=key.public_key,
            certificate=key.certificate,
        )

    async def get_active_hmac_key(self, realm_id: str) -> ActiveHmacKey:
        key = await self.get_active_key(realm_id, KeyUse.SIG, Algorithm.HS256)
        return ActiveHmacKey(kid=key.kid, secret_key=key.secret_key)

    async def get_active_aes_key(self, realm_id: str) -> ActiveAesKey:
        key = await self.get_active_key(realm_id, KeyUse.ENC, Algorithm.AES)
        return ActiveAesKey(kid=key.kid, secret_key=key.secret_key)

    async def get_rsa_public_key(self, realm_id: str, kid: str | None) -> Any:
        key = await self.get_key(realm_id, kid, KeyUse.SIG, Algorithm.RS256)
        return key.public_key if key is not None else None

    async def get_rsa_certificate(self, realm_id: str, kid: str | None) -> Any:
        key = await self.get_key(realm_id, kid, KeyUse.SIG, Algorithm.RS256)
        return key.certificate if key is not None else None

    async def get_hmac_secret_key(
        self, realm_id: str, kid: str | None
    ) -> bytes | None:
        key = await self.get_key(realm_id, kid, KeyUse.SIG, Algorithm.HS256)
        return key.secret_key if key is not None else None

    async def get_aes_secret_key(self, realm_id: str, kid: str | None) -> bytes | None:
        key = await self.get_key(realm_id, kid, KeyUse.ENC, Algorithm.AES)
        return key.secret_key if key is not None else None

    async def get_rsa_keys(self, realm_id: str) -> list[PublicKeyMetadata]:
        return await self.get_public_key_metadata(
            realm_id, KeyUse.SIG, Algorithm.RS256
        )

    async def get_hmac_keys(self, realm_id: str) -> list[SecretKeyMetadata]:
        return await self.get_secret_key_metadata(
            realm_id, KeyUse.SIG, Algorithm.HS256
        )

    async def get_aes_keys(self, realm_id: str) -> list[SecretKeyMetadata]:
        return await self.get_secret_key_metadata(realm_id, KeyUse.ENC, Algorithm.AES)
