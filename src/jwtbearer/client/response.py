"""Token response parsing."""

from __future__ import annotations

import json

from pydantic import ValidationError

from jwtbearer.exceptions import ResponseParseError
from jwtbearer.models import TokenResponse


def parse_token_response(raw: str) -> TokenResponse:
    """Deserialize a token endpoint body into a :class:`~jwtbearer.models.TokenResponse`.

    Missing fields default to empty values and unknown fields are ignored;
    checking that a token was actually issued is up to the caller.

    Raises:
        ResponseParseError: If *raw* is not JSON, not a JSON object, or a
            field has the wrong type.
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ResponseParseError(f"Token response is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise ResponseParseError(
            f"Token response must be a JSON object, got {type(data).__name__}"
        )
    try:
        return TokenResponse.model_validate(data)
    except ValidationError as exc:
        raise ResponseParseError(f"Unexpected token response shape: {exc}") from exc
