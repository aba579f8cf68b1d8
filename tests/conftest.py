"""Shared test fixtures for jwtbearer.

Provides signing keys, provider configuration factories, isolated config
environments, output state management, and a CLI runner. These fixtures are
automatically discovered by pytest and available to all test modules
without explicit imports.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa

from jwtbearer.models import ProviderConfig
from jwtbearer.output import OutputFormat, OutputManager, reset_output, set_output


TOKEN_ENDPOINT = "https://localhost/oauth/token"


def _to_pem(key: Any) -> str:
    return key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("ascii")


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time.  When Typer's CliRunner redirects those streams during
    a test and the test finishes, the cached references become stale
    ("I/O operation on closed file").  Resetting forces a fresh manager
    to be created on next use.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Signing keys (generated once per session)
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def rsa_key() -> rsa.RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def rsa_pem(rsa_key: rsa.RSAPrivateKey) -> str:
    """PKCS#8 PEM text of the session RSA key."""
    return _to_pem(rsa_key)


@pytest.fixture(scope="session")
def ec_keys() -> dict[str, ec.EllipticCurvePrivateKey]:
    """One EC key per ES* curve, keyed by header algorithm."""
    return {
        "ES256": ec.generate_private_key(ec.SECP256R1()),
        "ES384": ec.generate_private_key(ec.SECP384R1()),
        "ES512": ec.generate_private_key(ec.SECP521R1()),
    }


@pytest.fixture(scope="session")
def ec_pems(ec_keys: dict[str, ec.EllipticCurvePrivateKey]) -> dict[str, str]:
    return {alg: _to_pem(key) for alg, key in ec_keys.items()}


@pytest.fixture
def rsa_key_file(tmp_path: Path, rsa_pem: str) -> Path:
    """The session RSA key written to a temporary PEM file."""
    path = tmp_path / "signing.pem"
    path.write_text(rsa_pem, encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Provider configuration
# ---------------------------------------------------------------------------


@pytest.fixture
def make_config(rsa_pem: str) -> Callable[..., ProviderConfig]:
    """Factory for a complete RS256 provider config.

    Keyword arguments override individual fields, e.g.
    ``make_config(jws_algorithm="RS512", signing_algorithm="RSA-SHA512")``.
    """

    def _make(**overrides: Any) -> ProviderConfig:
        values: dict[str, Any] = {
            "provider_name": "test-provider",
            "token_endpoint": TOKEN_ENDPOINT,
            "jws_algorithm": "RS256",
            "signing_algorithm": "RSA-SHA256",
            "key_id": "key-1",
            "issuer": "test-client",
            "subject": "test-client",
            "audience": "https://localhost/oauth",
            "certificate": rsa_pem,
        }
        values.update(overrides)
        return ProviderConfig(**values)

    return _make


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Sets XDG_CONFIG_HOME and XDG_DATA_HOME to subdirectories of tmp_path so
    that tests never touch real user config. Clears ``JWTBEARER_PROVIDER``
    and changes the working directory to tmp_path.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.setattr("jwtbearer.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.delenv("JWTBEARER_PROVIDER", raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a PLAIN-format, quiet OutputManager as the global output."""
    output = OutputManager(format=OutputFormat.PLAIN, quiet=True)
    set_output(output)
    yield output
    reset_output()


@pytest.fixture
def json_output() -> OutputManager:
    """Install a JSON-format OutputManager as the global output."""
    output = OutputManager(format=OutputFormat.JSON)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
