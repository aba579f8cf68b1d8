"""Abstract base class for signing capabilities.

The token pipeline never touches private key material. It hands the JWS
signing input and a validated :class:`~jwtbearer.jose.SigningAlgorithm`
to a :class:`Signer`, together with the configured certificate reference,
and receives raw signature bytes back.

To plug in a different key store (an HSM, a cloud KMS, a platform
certificate store), subclass :class:`Signer` and implement :meth:`sign`.
Implementations must be safe to call from several threads at once.

See Also:
    :class:`~jwtbearer.signing.pem.PEMSigner` for the built-in implementation.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from jwtbearer.jose.algorithms import SigningAlgorithm


class Signer(ABC):
    """A certificate-backed signing capability."""

    @abstractmethod
    def sign(
        self,
        algorithm: SigningAlgorithm,
        signing_input: bytes,
        certificate: str,
    ) -> bytes:
        """Sign *signing_input* with the key identified by *certificate*.

        ECDSA signatures must be returned in the JWS form (``r || s``, each
        left-padded to the curve size), not DER.

        Args:
            algorithm: The validated signing algorithm.
            signing_input: ``b64url(header).b64url(claims)`` as ASCII bytes.
            certificate: Reference to the signing key, as configured.

        Returns:
            The raw signature bytes.

        Raises:
            SigningError: If the key cannot be found or used with
                *algorithm*.
        """
        ...
