"""Token endpoint client for jwtbearer.

Three steps sit between a signed assertion and an access token:

- :func:`build_token_request` -- form body and headers for the endpoint.
- :class:`TokenExchangeClient` -- one HTTP POST via :mod:`httpx`, failing on
  any status other than 200.
- :func:`parse_token_response` -- JSON body to
  :class:`~jwtbearer.models.TokenResponse`.

Example::

    from jwtbearer.client import TokenExchangeClient, build_token_request, parse_token_response

    request = build_token_request(config, assertion)
    token = parse_token_response(TokenExchangeClient().send(request))
"""

from jwtbearer.client.exchange import TokenExchangeClient
from jwtbearer.client.response import parse_token_response
from jwtbearer.client.token_request import (
    CLIENT_ASSERTION_TYPE,
    build_token_request,
    parse_key_value_pairs,
)

__all__ = [
    "CLIENT_ASSERTION_TYPE",
    "TokenExchangeClient",
    "build_token_request",
    "parse_key_value_pairs",
    "parse_token_response",
]
