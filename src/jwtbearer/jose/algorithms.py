"""Supported JOSE header and signing algorithms.

Two parallel sets are accepted: the ``alg`` values written into the JOSE
header (``RS256`` ... ``ES512``) and the names passed to the signing
capability (``RSA-SHA256`` ... ``ECDSA-SHA512``). Each header algorithm has
exactly one signing counterpart; :func:`check_algorithm_pair` enforces that
correspondence.

Symmetric algorithms such as ``HS256`` are not accepted; a client assertion
is signed with an asymmetric key.
"""

from __future__ import annotations

import enum

from jwtbearer.exceptions import InvalidAlgorithmError


class AlgorithmKind(str, enum.Enum):
    """Which algorithm set a candidate name is checked against."""

    HEADER = "header"
    SIGNING = "signing"


class HeaderAlgorithm(str, enum.Enum):
    """JOSE ``alg`` header values (RFC 7518 section 3.1)."""

    RS256 = "RS256"
    RS384 = "RS384"
    RS512 = "RS512"
    ES256 = "ES256"
    ES384 = "ES384"
    ES512 = "ES512"


class SigningAlgorithm(str, enum.Enum):
    """Algorithm names understood by the signing capability."""

    RSA_SHA256 = "RSA-SHA256"
    RSA_SHA384 = "RSA-SHA384"
    RSA_SHA512 = "RSA-SHA512"
    ECDSA_SHA256 = "ECDSA-SHA256"
    ECDSA_SHA384 = "ECDSA-SHA384"
    ECDSA_SHA512 = "ECDSA-SHA512"

    @property
    def is_ecdsa(self) -> bool:
        return self.value.startswith("ECDSA-")

    @property
    def digest_bits(self) -> int:
        return int(self.value.rsplit("SHA", 1)[1])


_ALGORITHM_SETS: dict[AlgorithmKind, frozenset[str]] = {
    AlgorithmKind.HEADER: frozenset(a.value for a in HeaderAlgorithm),
    AlgorithmKind.SIGNING: frozenset(a.value for a in SigningAlgorithm),
}

_PAIRS: dict[HeaderAlgorithm, SigningAlgorithm] = {
    HeaderAlgorithm.RS256: SigningAlgorithm.RSA_SHA256,
    HeaderAlgorithm.RS384: SigningAlgorithm.RSA_SHA384,
    HeaderAlgorithm.RS512: SigningAlgorithm.RSA_SHA512,
    HeaderAlgorithm.ES256: SigningAlgorithm.ECDSA_SHA256,
    HeaderAlgorithm.ES384: SigningAlgorithm.ECDSA_SHA384,
    HeaderAlgorithm.ES512: SigningAlgorithm.ECDSA_SHA512,
}


def validate(kind: AlgorithmKind, candidate: str | None) -> str:
    """Return *candidate* if it belongs to the algorithm set for *kind*.

    Surrounding whitespace is ignored; matching is case-sensitive.

    Args:
        kind: The algorithm set to check against.
        candidate: The configured algorithm name.

    Returns:
        The validated algorithm name.

    Raises:
        InvalidAlgorithmError: If *candidate* is blank or not supported.
    """
    name = (candidate or "").strip()
    if not name:
        raise InvalidAlgorithmError(f"No {kind.value} algorithm configured")
    allowed = _ALGORITHM_SETS[kind]
    if name not in allowed:
        raise InvalidAlgorithmError(
            f"Unsupported {kind.value} algorithm '{name}'. "
            f"Expected one of: {', '.join(sorted(allowed))}"
        )
    return name


def validate_header_algorithm(candidate: str | None) -> HeaderAlgorithm:
    """Validate a JOSE ``alg`` value and return it as a :class:`HeaderAlgorithm`."""
    return HeaderAlgorithm(validate(AlgorithmKind.HEADER, candidate))


def validate_signing_algorithm(candidate: str | None) -> SigningAlgorithm:
    """Validate a signer algorithm name and return it as a :class:`SigningAlgorithm`."""
    return SigningAlgorithm(validate(AlgorithmKind.SIGNING, candidate))


def check_algorithm_pair(
    header: HeaderAlgorithm, signing: SigningAlgorithm
) -> None:
    """Reject a header/signing pair that would produce an unverifiable token.

    ``RS256`` must be signed with ``RSA-SHA256``, ``ES384`` with
    ``ECDSA-SHA384``, and so on.

    Raises:
        InvalidAlgorithmError: If the two algorithms do not correspond.
    """
    expected = _PAIRS[header]
    if signing is not expected:
        raise InvalidAlgorithmError(
            f"Header algorithm '{header.value}' requires signing algorithm "
            f"'{expected.value}', got '{signing.value}'"
        )
