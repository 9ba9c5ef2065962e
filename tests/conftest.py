"""Shared fixtures: throwaway keys generated once per test session."""

from __future__ import annotations

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa


def _private_pem(key) -> str:
    return key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("utf-8")


@pytest.fixture(scope="session")
def ec_private_key():
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture(scope="session")
def ec_key_pem(ec_private_key) -> str:
    return _private_pem(ec_private_key)


@pytest.fixture(scope="session")
def ec_public_key_pem(ec_private_key) -> str:
    return (
        ec_private_key.public_key()
        .public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )
        .decode("utf-8")
    )


@pytest.fixture(scope="session")
def p384_key_pem() -> str:
    return _private_pem(ec.generate_private_key(ec.SECP384R1()))


@pytest.fixture(scope="session")
def rsa_key_pem() -> str:
    return _private_pem(rsa.generate_private_key(public_exponent=65537, key_size=2048))


@pytest.fixture
def key_file(tmp_path, ec_key_pem):
    path = tmp_path / "AuthKey_ABCDEF1234.p8"
    path.write_text(ec_key_pem, encoding="utf-8")
    return path


SETTING_NAMES = (
    "ALG", "TYP", "KID", "ISS", "SUB", "ORIGIN", "IAT", "EXP", "KEY_FILE",
    "VERIFY", "MKJS_VERSION", "BOOTSTRAP_URL", "VERIFY_TIMEOUT", "LOG_LEVEL",
)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every ``MAPKIT_TOKEN_*`` setting from the environment."""
    for name in SETTING_NAMES:
        monkeypatch.delenv(f"MAPKIT_TOKEN_{name}", raising=False)
    return monkeypatch
