"""Type definitions for key descriptors, key metadata, and JWKS."""

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict


class KeyUse(StrEnum):
    """What a key may be used for."""

    SIG = "sig"
    ENC = "enc"


class KeyStatus(StrEnum):
    """Lifecycle status of a key, owned by its key source."""

    ACTIVE = "ACTIVE"
    PASSIVE = "PASSIVE"
    DISABLED = "DISABLED"

    @property
    def is_active(self) -> bool:
        """Usable for new signing/encryption operations."""
        return self is KeyStatus.ACTIVE

    @property
    def is_enabled(self) -> bool:
        """Usable for verification/decryption of existing material."""
        return self is not KeyStatus.DISABLED


class Algorithm:
    """Algorithm names understood by the resolver."""

    RS256 = "RS256"
    HS256 = "HS256"
    ES256 = "ES256"
    AES = "AES"


class KeyDescriptor(BaseModel):
    """Read-only snapshot of one key produced by a key source."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    kid: str
    use: KeyUse
    algorithms: frozenset[str]
    status: KeyStatus = KeyStatus.ACTIVE
    provider_id: str | None = None
    provider_priority: int = 0
    private_key: Any = None
    public_key: Any = None
    secret_key: bytes | None = None
    certificate: Any = None


class PublicKeyMetadata(BaseModel):
    """Asymmetric key metadata with private material stripped."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    kid: str
    provider_id: str | None
    provider_priority: int
    status: KeyStatus
    public_key: Any = None
    certificate: Any = None


class SecretKeyMetadata(BaseModel):
    """Symmetric key metadata with the secret stripped."""

    model_config = ConfigDict(frozen=True)

    kid: str
    provider_id: str | None
    provider_priority: int
    status: KeyStatus


class ActiveRsaKey(BaseModel):
    """The active RS256 signing key of a realm."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    kid: str
    private_key: Any
    public_key: Any
    certificate: Any = None


class ActiveHmacKey(BaseModel):
    """The active HS256 signing secret of a realm."""

    model_config = ConfigDict(frozen=True)

    kid: str
    secret_key: bytes | None


class ActiveAesKey(BaseModel):
    """The active AES encryption secret of a realm."""

    model_config = ConfigDict(frozen=True)

    kid: str
    secret_key: bytes | None


class JWKEntry(BaseModel):
    """Single JWK entry in a JWKS response."""

    kty: str
    use: str
    alg: str | None = None
    kid: str
    n: str | None = None
    e: str | None = None
    crv: str | None = None
    x: str | None = None
    y: str | None = None


class JWKSResponse(BaseModel):
    """JSON Web Key Set response."""

    keys: list[JWKEntry]
