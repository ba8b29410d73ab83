"""
sigtoken key management.

Generates and loads P-256 key material. Keys travel as JWK JSON (via
jwcrypto) or PEM; signing and verification operate on the underlying
``cryptography`` key objects.
"""

import logging
from dataclasses import dataclass
from typing import Union

from cryptography.hazmat.primitives.asymmetric import ec
from jwcrypto import jwk

logger = logging.getLogger(__name__)

CURVE_NAME = "P-256"

KeyMaterial = Union[str, bytes, jwk.JWK, ec.EllipticCurvePrivateKey, ec.EllipticCurvePublicKey]


@dataclass
class KeyPair:
    """
    A freshly generated P-256 key pair.

    Attributes:
        private_key_jwk: JWK JSON string including the private component ``d``.
        public_key_jwk: JWK JSON string with the public coordinates only.
        key_id: RFC 7638 thumbprint of the public key.
    """

    private_key_jwk: str
    public_key_jwk: str
    key_id: str


def generate_keypair() -> KeyPair:
    """
    Generate a new P-256 key pair for ES256 signing.

    Returns:
        KeyPair with both halves exported as JWK JSON.
    """
    key = jwk.JWK.generate(kty="EC", crv=CURVE_NAME)
    key_id = key.thumbprint()
    logger.debug(f"Generated {CURVE_NAME} key {key_id}")
    return KeyPair(
        private_key_jwk=key.export_private(),
        public_key_jwk=key.export_public(),
        key_id=key_id,
    )


def _to_jwk(material: Union[str, bytes, jwk.JWK]) -> jwk.JWK:
    if isinstance(material, jwk.JWK):
        return material
    if isinstance(material, bytes):
        return jwk.JWK.from_pem(material)
    if isinstance(material, str):
        if material.lstrip().startswith("-----BEGIN"):
            return jwk.JWK.from_pem(material.encode("utf-8"))
        return jwk.JWK.from_json(material)
    raise TypeError(f"Unsupported key material type: {type(material).__name__}")


def _check_p256(key: jwk.JWK) -> None:
    if key.get("kty") != "EC" or key.get("crv") != CURVE_NAME:
        raise ValueError(f"Key must be an EC key on {CURVE_NAME} (kty=EC, crv={CURVE_NAME})")


def load_private_key(material: KeyMaterial) -> ec.EllipticCurvePrivateKey:
    """
    Load a P-256 private key.

    Args:
        material: JWK JSON string, PEM text or bytes, a jwcrypto JWK, or a
            ``cryptography`` private key object.

    Returns:
        The ``cryptography`` private key.

    Raises:
        ValueError: If the material cannot be parsed, is public-only, or is
            not on P-256.
    """
    if isinstance(material, ec.EllipticCurvePrivateKey):
        if not isinstance(material.curve, ec.SECP256R1):
            raise ValueError(f"Key must be on {CURVE_NAME}, got {material.curve.name}")
        return material
    if isinstance(material, ec.EllipticCurvePublicKey):
        raise ValueError("A private key is required, got a public key")

    try:
        key = _to_jwk(material)
    except Exception as e:
        raise ValueError(f"Invalid private key: {e}") from e

    _check_p256(key)
    if not key.has_private:
        raise ValueError("A private key is required, got a public key")

    return key.get_op_key("sign")


def load_public_key(material: KeyMaterial) -> ec.EllipticCurvePublicKey:
    """
    Load a P-256 public key.

    Private key material is accepted and reduced to its public half.

    Raises:
        ValueError: If the material cannot be parsed or is not on P-256.
    """
    if isinstance(material, ec.EllipticCurvePrivateKey):
        material = material.public_key()
    if isinstance(material, ec.EllipticCurvePublicKey):
        if not isinstance(material.curve, ec.SECP256R1):
            raise ValueError(f"Key must be on {CURVE_NAME}, got {material.curve.name}")
        return material

    try:
        key = _to_jwk(material)
    except Exception as e:
        raise ValueError(f"Invalid public key: {e}") from e

    _check_p256(key)
    return key.get_op_key("verify")
