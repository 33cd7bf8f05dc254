"""Key material generation and JWK conversion."""

import base64
import secrets

import uuid_utils
from cryptography.hazmat.primitives.asymmetric import ec, rsa
from cryptography.hazmat.primitives.asymmetric.ec import EllipticCurvePublicKey
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPublicKey

from realm_keys.crypto.types import JWKEntry

RSA_KEY_SIZE = 2048
RSA_PUBLIC_EXPONENT = 65537

_CURVE_NAMES = {
    "secp256r1": "P-256",
    "secp384r1": "P-384",
    "secp521r1": "P-521",
}


def generate_kid() -> str:
    """Generate a new, time-ordered key identifier."""
    return str(uuid_utils.uuid7())


def generate_rsa_private_key(key_size: int = RSA_KEY_SIZE) -> rsa.RSAPrivateKey:
    """Generate a new RSA private key."""
    return rsa.generate_private_key(
        public_exponent=RSA_PUBLIC_EXPONENT,
        key_size=key_size,
    )


def generate_ec_private_key() -> ec.EllipticCurvePrivateKey:
    """Generate a new P-256 private key."""
    return ec.generate_private_key(ec.SECP256R1())


def generate_secret(size: int) -> bytes:
    """Generate a random symmetric secret of ``size`` bytes."""
    return secrets.token_bytes(size)


def _int_to_base64url(value: int, byte_length: int | None = None) -> str:
    """Encode an integer as base64url without padding."""
    if byte_length is None:
        byte_length = (value.bit_length() + 7) // 8
    raw = value.to_bytes(byte_length, byteorder="big")
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode()


def public_key_to_jwk_entry(
    public_key: object, kid: str, use: str, alg: str | None = None
) -> JWKEntry | None:
    """Convert an RSA or EC public key to JWK format.

    Returns None for key types that have no public JWK representation.
    """
    if isinstance(public_key, RSAPublicKey):
        numbers = public_key.public_numbers()
        return JWKEntry(
            kty="RSA",
            use=use,
            alg=alg,
            kid=kid,
            n=_int_to_base64url(numbers.n),
            e=_int_to_base64url(numbers.e),
        )
    if isinstance(public_key, EllipticCurvePublicKey):
        crv = _CURVE_NAMES.get(public_key.curve.name)
        if crv is None:
            return None
        size = (public_key.curve.key_size + 7) // 8
        ec_numbers = public_key.public_numbers()
        return JWKEntry(
            kty="EC",
            use=use,
            alg=alg,
            kid=kid,
            crv=crv,
            x=_int_to_base64url(ec_numbers.x, size),
            y=_int_to_base64url(ec_numbers.y, size),
        )
    return None
