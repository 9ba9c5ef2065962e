"""ES256 token construction for MapKit JS."""

from __future__ import annotations

from typing import Any, Literal

import jwt
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec
from pydantic import BaseModel, ConfigDict, Field, field_validator

from mapkit_token.errors import SigningError


class TokenHeader(BaseModel):
    """JOSE header of a MapKit token. All three fields are required."""

    model_config = ConfigDict(frozen=True)

    alg: Literal["ES256"]
    kid: str = Field(min_length=1)
    typ: str = Field(min_length=1)


class TokenClaims(BaseModel):
    """Typed representation of the MapKit token payload.

    ``sub`` and ``origin`` are optional.  Empty values are treated as absent
    and never reach the serialized payload, neither as ``null`` nor as ``""``.
    Ordering of ``iat`` and ``exp`` is left to the caller.
    """

    model_config = ConfigDict(frozen=True)

    iss: str = Field(min_length=1)
    iat: int
    exp: int
    sub: str | None = None
    origin: str | None = None

    @field_validator("sub", "origin", mode="before")
    @classmethod
    def _empty_is_absent(cls, value: Any) -> Any:
        return value or None

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


def _load_signing_key(signing_key: str) -> ec.EllipticCurvePrivateKey:
    try:
        key = serialization.load_pem_private_key(signing_key.encode("utf-8"), password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise SigningError(f"Could not load private key: {exc}") from exc
    if not isinstance(key, ec.EllipticCurvePrivateKey):
        raise SigningError("ES256 requires an elliptic-curve private key")
    if not isinstance(key.curve, ec.SECP256R1):
        raise SigningError(f"ES256 requires a P-256 key, got {key.curve.name}")
    return key


def build_token(header: TokenHeader, claims: TokenClaims, signing_key: str) -> str:
    """Sign ``claims`` with a PEM-encoded P-256 private key.

    Returns the compact ``header.payload.signature`` form.  ECDSA signatures
    are randomized, so only the first two segments repeat across calls.
    """
    key = _load_signing_key(signing_key)
    try:
        return jwt.encode(
            claims.to_payload(),
            key,
            algorithm=header.alg,
            headers=header.model_dump(),
        )
    except jwt.PyJWTError as exc:
        raise SigningError(f"Could not sign token: {exc}") from exc


def decode_unverified(token: str) -> tuple[dict[str, Any], dict[str, Any]]:
    """Decode header and payload without checking the signature."""
    header = jwt.get_unverified_header(token)
    payload = jwt.decode(token, options={"verify_signature": False})
    return header, payload
