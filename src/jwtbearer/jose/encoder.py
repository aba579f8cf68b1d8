"""JWS Compact Serialization (RFC 7515 section 7.1).

:func:`encode_jws` frames a header and claims set as
``b64url(header).b64url(claims)``, hands that signing input to a
caller-supplied signing function and appends the Base64URL signature.
Segments use the URL-safe alphabet with ``=`` padding stripped, as required
by RFC 7515 section 2.

JSON is written compactly in model field order, so the same header and
claims always produce the same signing input.
"""

from __future__ import annotations

import base64
import binascii
import json
from collections.abc import Callable
from typing import Any

from pydantic import BaseModel

from jwtbearer.exceptions import JWTBearerError, SigningError
from jwtbearer.models import ClaimsSet, JOSEHeader

SignFunction = Callable[[bytes], bytes]


def base64url_encode(data: bytes) -> str:
    """Encode *data* as unpadded Base64URL text."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def base64url_decode(segment: str) -> bytes:
    """Decode unpadded (or padded) Base64URL text.

    Raises:
        ValueError: If *segment* is not valid Base64URL.
    """
    padding = "=" * (-len(segment) % 4)
    try:
        return base64.urlsafe_b64decode(segment + padding)
    except (binascii.Error, ValueError) as exc:
        raise ValueError(f"Invalid base64url segment: {exc}") from exc


def _serialize(model: BaseModel) -> bytes:
    return json.dumps(
        model.model_dump(), separators=(",", ":"), ensure_ascii=False
    ).encode("utf-8")


def encode_jws(header: JOSEHeader, claims: ClaimsSet, sign: SignFunction) -> str:
    """Sign *header* and *claims* into a compact JWS string.

    Args:
        header: The JOSE header.
        claims: The claims set.
        sign: Called once with the ASCII signing input; returns the raw
            signature bytes.

    Returns:
        ``b64url(header).b64url(claims).b64url(signature)``.

    Raises:
        SigningError: If *sign* fails or returns an empty signature. Other
            :class:`~jwtbearer.exceptions.JWTBearerError` subclasses raised by
            *sign* pass through unchanged.
    """
    signing_input = f"{base64url_encode(_serialize(header))}.{base64url_encode(_serialize(claims))}"
    try:
        signature = sign(signing_input.encode("ascii"))
    except JWTBearerError:
        raise
    except Exception as exc:
        raise SigningError(f"Signer failed: {exc}") from exc
    if not signature:
        raise SigningError("Signer returned an empty signature")
    return f"{signing_input}.{base64url_encode(signature)}"


def decode_jws(token: str) -> tuple[dict[str, Any], dict[str, Any]]:
    """Split a compact JWS and decode its header and payload.

    The signature is not verified; this is for inspecting assertions.

    Returns:
        A ``(header, claims)`` tuple of plain dicts.

    Raises:
        ValueError: If *token* is not three Base64URL segments of JSON objects.
    """
    parts = token.strip().split(".")
    if len(parts) != 3:
        raise ValueError(f"Expected 3 JWS segments, got {len(parts)}")
    decoded: list[dict[str, Any]] = []
    for segment in parts[:2]:
        try:
            value = json.loads(base64url_decode(segment))
        except json.JSONDecodeError as exc:
            raise ValueError(f"JWS segment is not JSON: {exc}") from exc
        if not isinstance(value, dict):
            raise ValueError("JWS segment is not a JSON object")
        decoded.append(value)
    return decoded[0], decoded[1]
