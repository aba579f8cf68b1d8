"""JOSE building blocks for client assertions.

This package turns a :class:`~jwtbearer.models.ProviderConfig` into a signed
compact JWS:

- :mod:`~jwtbearer.jose.algorithms` -- the supported header and signing
  algorithm sets and their validation.
- :mod:`~jwtbearer.jose.claims` -- JOSE header and claims set construction,
  including expiry and the per-assertion ``jti``.
- :mod:`~jwtbearer.jose.encoder` -- Base64URL framing and JWS Compact
  Serialization around a caller-supplied signing function.
"""

from jwtbearer.jose.algorithms import (
    AlgorithmKind,
    HeaderAlgorithm,
    SigningAlgorithm,
    check_algorithm_pair,
    validate,
    validate_header_algorithm,
    validate_signing_algorithm,
)
from jwtbearer.jose.claims import (
    ASSERTION_LIFETIME_SECONDS,
    build_claims,
    build_header,
    generate_jti,
)
from jwtbearer.jose.encoder import (
    base64url_decode,
    base64url_encode,
    decode_jws,
    encode_jws,
)

__all__ = [
    "ASSERTION_LIFETIME_SECONDS",
    "AlgorithmKind",
    "HeaderAlgorithm",
    "SigningAlgorithm",
    "base64url_decode",
    "base64url_encode",
    "build_claims",
    "build_header",
    "check_algorithm_pair",
    "decode_jws",
    "encode_jws",
    "generate_jti",
    "validate",
    "validate_header_algorithm",
    "validate_signing_algorithm",
]
