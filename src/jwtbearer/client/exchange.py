"""Single-shot HTTP exchange with the token endpoint.

:class:`TokenExchangeClient` posts a :class:`~jwtbearer.models.TokenRequest`
and returns the raw response body. It makes exactly one attempt: an
assertion is only valid for a few minutes and carries a one-time ``jti``,
so retries belong to the caller, who will mint a new assertion.
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from jwtbearer.exceptions import ConnectionError_, UnexpectedTokenResponseError
from jwtbearer.models import TokenRequest

logger = logging.getLogger(__name__)

_REDACTED = "[redacted]"


def _redact_body(body: str) -> str:
    """Hide the client_assertion value in a form body for logging."""
    parts = []
    for field in body.split("&"):
        name, sep, _ = field.partition("=")
        parts.append(f"{name}={_REDACTED}" if sep and name == "client_assertion" else field)
    return "&".join(parts)


class TokenExchangeClient:
    """POST token requests and surface non-200 answers as errors.

    Args:
        timeout: Request timeout in seconds.
        verify_ssl: Verify the token endpoint's TLS certificate.
        client: Optional :class:`httpx.Client` to send through (for
            connection reuse or a mock transport). When ``None``, each call
            uses :func:`httpx.post`.
        log_request: Log the outgoing request (assertion redacted) at INFO.
        log_response: Log the raw response body at INFO.
    """

    def __init__(
        self,
        timeout: float = 30.0,
        verify_ssl: bool = True,
        client: Optional[httpx.Client] = None,
        log_request: bool = False,
        log_response: bool = False,
    ) -> None:
        self._timeout = timeout
        self._verify_ssl = verify_ssl
        self._client = client
        self._log_request = log_request
        self._log_response = log_response

    def send(self, request: TokenRequest) -> str:
        """Send *request* and return the response body text.

        Raises:
            UnexpectedTokenResponseError: If the status is not 200. The
                exception carries the status code and raw body.
            ConnectionError_: If the request could not be completed.
        """
        if self._log_request:
            logger.info(
                "Token request: %s %s headers=%s body=%s",
                request.method,
                request.url,
                request.headers,
                _redact_body(request.body),
            )

        try:
            if self._client is not None:
                response = self._client.post(
                    request.url,
                    content=request.body,
                    headers=request.headers,
                    timeout=self._timeout,
                )
            else:
                response = httpx.post(
                    request.url,
                    content=request.body,
                    headers=request.headers,
                    timeout=self._timeout,
                    verify=self._verify_ssl,
                )
        except httpx.HTTPError as exc:
            raise ConnectionError_(f"Token request to {request.url} failed: {exc}") from exc

        body = response.text
        logger.debug("Token endpoint answered HTTP %d", response.status_code)
        if self._log_response:
            logger.info("Token response: HTTP %d %s", response.status_code, body)

        if response.status_code != 200:
            raise UnexpectedTokenResponseError(
                f"Token request failed with status {response.status_code}: {body}",
                status_code=response.status_code,
                body=body,
            )
        return body
