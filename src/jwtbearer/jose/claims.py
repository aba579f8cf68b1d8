"""JOSE header and claims set construction.

Both documents are built fresh for every assertion. The claims set carries
an expiry :data:`ASSERTION_LIFETIME_SECONDS` after the build time and a
random ``jti`` so that an intercepted assertion cannot be replayed.
"""

from __future__ import annotations

import secrets
import time
import uuid
from typing import Optional

from jwtbearer.models import ClaimsSet, JOSEHeader, ProviderConfig

ASSERTION_LIFETIME_SECONDS = 300


def generate_jti() -> str:
    """Return 128 random bits as 8-4-4-4-12 lowercase hex."""
    return str(uuid.UUID(bytes=secrets.token_bytes(16)))


def build_header(config: ProviderConfig, alg: Optional[str] = None) -> JOSEHeader:
    """Build the JOSE header for *config*.

    Args:
        config: Provider configuration supplying ``typ`` and ``kid``.
        alg: The validated header algorithm. Defaults to the trimmed
            ``jws_algorithm`` from *config*.
    """
    return JOSEHeader(
        alg=(alg or config.jws_algorithm).strip(),
        typ=config.jws_type.strip(),
        kid=config.key_id.strip(),
    )


def build_claims(
    config: ProviderConfig,
    subject: Optional[str] = None,
    now: Optional[float] = None,
) -> ClaimsSet:
    """Build the claims set for one assertion.

    Args:
        config: Provider configuration supplying ``iss``, ``aud`` and ``sub``.
        subject: Overrides the configured ``sub`` (per-user mode).
        now: Unix time to build from. Defaults to the current time.

    Returns:
        A :class:`~jwtbearer.models.ClaimsSet` with
        ``exp = int(now) + ASSERTION_LIFETIME_SECONDS`` and a fresh ``jti``.
    """
    if now is None:
        now = time.time()
    return ClaimsSet(
        iss=config.issuer.strip(),
        aud=config.audience.strip(),
        sub=(subject if subject is not None else config.subject).strip(),
        exp=int(now) + ASSERTION_LIFETIME_SECONDS,
        jti=generate_jti(),
    )
