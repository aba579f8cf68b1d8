"""Token endpoint request construction.

:func:`build_token_request` produces the exact form body and headers sent to
the token endpoint for a signed client assertion (RFC 7523 section 2.2):

.. code-block:: text

    grant_type=<grant>
    &client_assertion_type=urn:ietf:params:oauth:client-assertion-type:jwt-bearer
    &client_assertion=<jws>
    [&scope=<scope>]
    [&<extra>=<value> ...]

Extra headers and form fields come from configuration strings written as
``key : value, key : value``. Parsing is lenient: a segment that does not
split into exactly one key and one value is skipped, and so is a header
whose name or value is not ASCII.
"""

from __future__ import annotations

import logging
from urllib.parse import urlencode

from jwtbearer.models import ProviderConfig, TokenRequest

logger = logging.getLogger(__name__)

CLIENT_ASSERTION_TYPE = "urn:ietf:params:oauth:client-assertion-type:jwt-bearer"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def parse_key_value_pairs(raw: str | None) -> list[tuple[str, str]]:
    """Parse a ``key : value, key : value`` configuration string.

    Args:
        raw: The configuration value. ``None`` and blank strings yield no pairs.

    Returns:
        ``(key, value)`` tuples, trimmed, in input order.

    Example::

        >>> parse_key_value_pairs("apiKey : X, bad, apiId : Y")
        [('apiKey', 'X'), ('apiId', 'Y')]
    """
    if not raw or not raw.strip():
        return []
    pairs: list[tuple[str, str]] = []
    for segment in raw.split(","):
        parts = segment.split(":")
        if len(parts) != 2:
            if segment.strip():
                logger.debug("Skipping malformed key/value segment %r", segment.strip())
            continue
        key, value = parts[0].strip(), parts[1].strip()
        if not key or not value:
            logger.debug("Skipping incomplete key/value segment %r", segment.strip())
            continue
        pairs.append((key, value))
    return pairs


def build_token_request(config: ProviderConfig, assertion: str) -> TokenRequest:
    """Build the token endpoint request carrying *assertion*.

    Args:
        config: Provider configuration (endpoint, grant type, scope and
            extension strings).
        assertion: The signed compact JWS.

    Returns:
        A :class:`~jwtbearer.models.TokenRequest` whose ``body`` is the
        UTF-8 form encoding of the parameters above.
    """
    fields: list[tuple[str, str]] = [
        ("grant_type", config.grant_type.strip()),
        ("client_assertion_type", CLIENT_ASSERTION_TYPE),
        ("client_assertion", assertion),
    ]
    if config.use_scope and config.scope.strip():
        fields.append(("scope", config.scope.strip()))
    fields.extend(parse_key_value_pairs(config.additional_body_params))

    headers = {
        "Content-Type": FORM_CONTENT_TYPE,
        "Accept": "application/json",
    }
    for key, value in parse_key_value_pairs(config.additional_headers):
        # Header names and values go on the wire as ASCII.
        if not (key.isascii() and value.isascii()):
            logger.debug("Skipping non-ASCII header %r", key)
            continue
        headers[key] = value

    return TokenRequest(
        method="POST",
        url=config.token_endpoint.strip(),
        headers=headers,
        body=urlencode(fields, encoding="utf-8"),
    )
