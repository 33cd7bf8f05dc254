"""Built-in key sources that guarantee baseline algorithm coverage.

A realm whose configured sources yield no active key for one of the
baseline capabilities gets the matching failsafe source appended to its
provider list. Key material is generated once per source, on first use,
even when several threads enumerate the source at the same time.
"""

import threading
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import NamedTuple

from realm_keys.core.settings import KeySettings
from realm_keys.crypto.keys import (
    generate_ec_private_key,
    generate_kid,
    generate_rsa_private_key,
    generate_secret,
)
from realm_keys.crypto.types import Algorithm, KeyDescriptor, KeyStatus, KeyUse
from realm_keys.keys.source import KeySource


class _FailsafeKeySource(ABC):
    """Single active key, generated lazily and kept for the source's lifetime."""

    use: KeyUse
    algorithm: str

    def __init__(self) -> None:
        self._key: KeyDescriptor | None = None
        self._lock = threading.Lock()

    @abstractmethod
    def _generate(self) -> KeyDescriptor:
        """Create the source's key material."""

    def _descriptor(self, **material: object) -> KeyDescriptor:
        return KeyDescriptor(
            kid=generate_kid(),
            use=self.use,
            algorithms=frozenset({self.algorithm}),
            status=KeyStatus.ACTIVE,
            **material,
        )

    def get_keys(self) -> list[KeyDescriptor]:
        key = self._key
        if key is None:
            with self._lock:
                if self._key is None:
                    self._key = self._generate()
                key = self._key
        return [key]


class FailsafeRsaKeySource(_FailsafeKeySource):
    """RS256 signing keypair."""

    use = KeyUse.SIG
    algorithm = Algorithm.RS256

    def __init__(self, key_size: int) -> None:
        super().__init__()
        self._key_size = key_size

    def _generate(self) -> KeyDescriptor:
        private_key = generate_rsa_private_key(self._key_size)
        return self._descriptor(
            private_key=private_key, public_key=private_key.public_key()
        )


class FailsafeHmacKeySource(_FailsafeKeySource):
    """HS256 signing secret."""

    use = KeyUse.SIG
    algorithm = Algorithm.HS256

    def __init__(self, secret_size: int) -> None:
        super().__init__()
        self._secret_size = secret_size

    def _generate(self) -> KeyDescriptor:
        return self._descriptor(secret_key=generate_secret(self._secret_size))


class FailsafeAesKeySource(_FailsafeKeySource):
    """AES encryption secret."""

    use = KeyUse.ENC
    algorithm = Algorithm.AES

    def __init__(self, secret_size: int) -> None:
        super().__init__()
        self._secret_size = secret_size

    def _generate(self) -> KeyDescriptor:
        return self._descriptor(secret_key=generate_secret(self._secret_size))


class FailsafeEcdsaKeySource(_FailsafeKeySource):
    """ES256 keypair registered for encryption use."""

    use = KeyUse.ENC
    algorithm = Algorithm.ES256

    def _generate(self) -> KeyDescriptor:
        private_key = generate_ec_private_key()
        return self._descriptor(
            private_key=private_key, public_key=private_key.public_key()
        )


class Fallback(NamedTuple):
    """A baseline capability and how to build the source that covers it."""

    use: KeyUse
    algorithm: str
    create: Callable[[], KeySource]


def default_fallbacks(settings: KeySettings | None = None) -> list[Fallback]:
    """Return the baseline capabilities every realm must be able to serve."""
    settings = settings or KeySettings()
    return [
        Fallback(
            KeyUse.SIG,
            Algorithm.RS256,
            lambda: FailsafeRsaKeySource(settings.fallback_rsa_key_size),
        ),
        Fallback(
            KeyUse.SIG,
            Algorithm.HS256,
            lambda: FailsafeHmacKeySource(settings.fallback_hmac_secret_size),
        ),
        Fallback(
            KeyUse.ENC,
            Algorithm.AES,
            lambda: FailsafeAesKeySource(settings.fallback_aes_secret_size),
        ),
        Fallback(KeyUse.ENC, Algorithm.ES256, FailsafeEcdsaKeySource),
    ]
