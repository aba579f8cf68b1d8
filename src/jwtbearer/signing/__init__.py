"""Signing capabilities for client assertions.

- :class:`Signer` -- abstract base class every key store adapter extends.
- :class:`PEMSigner` -- signs with RSA or EC private keys in PEM format.
"""

from jwtbearer.signing.base import Signer
from jwtbearer.signing.pem import PEMSigner

__all__ = ["PEMSigner", "Signer"]
