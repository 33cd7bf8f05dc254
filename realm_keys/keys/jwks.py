"""JSON Web Key Set projection of a realm's public keys."""

from realm_keys.crypto.keys import public_key_to_jwk_entry
from realm_keys.crypto.types import JWKEntry, JWKSResponse
from realm_keys.keys.manager import KeyManager


async def build_jwks(manager: KeyManager, realm_id: str) -> JWKSResponse:
    """Publish every enabled asymmetric public key of the realm."""
    entries: list[JWKEntry] = []
    for key in await manager.get_all_keys(realm_id):
        if not key.status.is_enabled or key.public_key is None:
            continue
        alg = next(iter(key.algorithms)) if len(key.algorithms) == 1 else None
        entry = public_key_to_jwk_entry(key.public_key, key.kid, key.use.value, alg)
        if entry is not None:
            entries.append(entry)
    return JWKSResponse(keys=entries)
