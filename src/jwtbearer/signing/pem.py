"""PEM private key signer.

This module provides :class:`PEMSigner`, the built-in
:class:`~jwtbearer.signing.base.Signer`. The certificate reference is either
an inline PEM block or a credential source descriptor (``env:VAR``,
``file:/path``) resolved through :func:`~jwtbearer.config.resolve_credential`.

RSA keys sign with PKCS#1 v1.5 padding (``RS*``); EC keys sign with ECDSA
and the DER signature is converted to the fixed-width ``r || s`` form that
JWS requires (``ES*``).
"""

from __future__ import annotations

import logging
from typing import Optional

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec, padding, rsa
from cryptography.hazmat.primitives.asymmetric.utils import decode_dss_signature

from jwtbearer.config import resolve_credential
from jwtbearer.exceptions import ConfigError, SigningError
from jwtbearer.jose.algorithms import SigningAlgorithm
from jwtbearer.signing.base import Signer

logger = logging.getLogger(__name__)

_PEM_MARKER = "-----BEGIN"

_HASHES: dict[int, type[hashes.HashAlgorithm]] = {
    256: hashes.SHA256,
    384: hashes.SHA384,
    512: hashes.SHA512,
}

# RFC 7518 section 3.4
_CURVES: dict[SigningAlgorithm, type[ec.EllipticCurve]] = {
    SigningAlgorithm.ECDSA_SHA256: ec.SECP256R1,
    SigningAlgorithm.ECDSA_SHA384: ec.SECP384R1,
    SigningAlgorithm.ECDSA_SHA512: ec.SECP521R1,
}


class PEMSigner(Signer):
    """Sign with an RSA or EC private key held in PEM format.

    The key is loaded on every call, so rotating the file or environment
    variable takes effect on the next token request.

    Args:
        password_source: Optional credential source for an encrypted key.

    Example::

        signer = PEMSigner()
        signature = signer.sign(
            SigningAlgorithm.RSA_SHA256, b"header.claims", "file:~/.keys/svc.pem"
        )
    """

    def __init__(self, password_source: Optional[str] = None) -> None:
        self._password_source = password_source

    def sign(
        self,
        algorithm: SigningAlgorithm,
        signing_input: bytes,
        certificate: str,
    ) -> bytes:
        key = self._load_key(certificate)
        hash_algorithm = _HASHES[algorithm.digest_bits]()

        if algorithm.is_ecdsa:
            if not isinstance(key, ec.EllipticCurvePrivateKey):
                raise SigningError(
                    f"Algorithm {algorithm.value} requires an EC key, "
                    f"got {type(key).__name__}"
                )
            curve = _CURVES[algorithm]
            if not isinstance(key.curve, curve):
                raise SigningError(
                    f"Algorithm {algorithm.value} requires curve {curve.name}, "
                    f"got {key.curve.name}"
                )
            try:
                der = key.sign(signing_input, ec.ECDSA(hash_algorithm))
            except ValueError as exc:
                raise SigningError(f"Signing with {algorithm.value} failed: {exc}") from exc
            r, s = decode_dss_signature(der)
            size = (key.curve.key_size + 7) // 8
            signature = r.to_bytes(size, "big") + s.to_bytes(size, "big")
        else:
            if not isinstance(key, rsa.RSAPrivateKey):
                raise SigningError(
                    f"Algorithm {algorithm.value} requires an RSA key, "
                    f"got {type(key).__name__}"
                )
            try:
                signature = key.sign(signing_input, padding.PKCS1v15(), hash_algorithm)
            except ValueError as exc:
                raise SigningError(f"Signing with {algorithm.value} failed: {exc}") from exc

        logger.debug("Signed %d bytes with %s", len(signing_input), algorithm.value)
        return signature

    def _load_key(
        self, certificate: str
    ) -> rsa.RSAPrivateKey | ec.EllipticCurvePrivateKey:
        """Resolve *certificate* and parse the private key it names."""
        reference = certificate.strip()
        if not reference:
            raise SigningError("No signing certificate configured")

        try:
            pem = reference if reference.startswith(_PEM_MARKER) else resolve_credential(reference)
            password = (
                resolve_credential(self._password_source).encode("utf-8")
                if self._password_source
                else None
            )
        except ConfigError as exc:
            raise SigningError(f"Signing key unavailable: {exc}") from exc

        try:
            key = serialization.load_pem_private_key(pem.encode("utf-8"), password=password)
        except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
            raise SigningError(f"Cannot load signing key: {exc}") from exc

        if not isinstance(key, (rsa.RSAPrivateKey, ec.EllipticCurvePrivateKey)):
            raise SigningError(f"Unsupported signing key type: {type(key).__name__}")
        return key
