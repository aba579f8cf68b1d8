"""JWT bearer client credentials provider.

This module provides :class:`JWTBearerProvider`, which implements the
``jwt_bearer`` auth type: the OAuth2 client credentials grant authenticated
with a self-signed JWT assertion (:rfc:`7523` section 2.2) instead of a
client secret.

Every token request runs the full pipeline::

    validate algorithms -> validate config -> build claims -> sign
        -> build request -> exchange -> parse response -> check token

The first failing stage raises its own
:class:`~jwtbearer.exceptions.JWTBearerError` subclass and nothing is
returned. There is no token cache and no refresh token: each call signs a
new assertion with a fresh ``exp`` and ``jti``.

See Also:
    :class:`jwtbearer.auth.base.AuthProviderPlugin` for the host contract.
"""

from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import httpx

from jwtbearer.auth.base import AuthProviderPlugin
from jwtbearer.client import TokenExchangeClient, build_token_request, parse_token_response
from jwtbearer.exceptions import ConfigError, InvalidUsageError, UnexpectedTokenResponseError
from jwtbearer.jose import (
    build_claims,
    build_header,
    check_algorithm_pair,
    encode_jws,
    validate_header_algorithm,
    validate_signing_algorithm,
)
from jwtbearer.models import (
    LoginResult,
    ProviderConfig,
    RefreshResult,
    TokenResponse,
    UserIdentity,
)
from jwtbearer.signing import PEMSigner, Signer

logger = logging.getLogger(__name__)

REFRESH_MARKER = "jwt-bearer-no-refresh-token"
"""Placeholder handed to the host where a refresh token would normally go."""


class JWTBearerProvider(AuthProviderPlugin):
    """Obtain access tokens with signed JWT client assertions.

    The provider holds only read-only configuration and its collaborators,
    so one instance can serve concurrent callers.

    Args:
        config: The provider configuration.
        signer: Signing capability. Defaults to :class:`~jwtbearer.signing.PEMSigner`.
        exchange_client: Sends the token request. Defaults to a
            :class:`~jwtbearer.client.TokenExchangeClient` built from *config*.
        http_client: Optional :class:`httpx.Client` for the default exchange
            client. Ignored when *exchange_client* is given.
    """

    def __init__(
        self,
        config: ProviderConfig,
        signer: Optional[Signer] = None,
        exchange_client: Optional[TokenExchangeClient] = None,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        self._config = config
        self._signer = signer or PEMSigner()
        self._exchange = exchange_client or TokenExchangeClient(
            timeout=config.timeout,
            verify_ssl=config.verify_ssl,
            client=http_client,
            log_request=config.log_request,
            log_response=config.log_response,
        )

    @property
    def auth_type(self) -> str:
        return "jwt_bearer"

    @property
    def config(self) -> ProviderConfig:
        return self._config

    # ------------------------------------------------------------------ #
    # Pipeline
    # ------------------------------------------------------------------ #

    def mint_assertion(self, subject: Optional[str] = None) -> str:
        """Validate, build and sign a client assertion without sending it.

        Args:
            subject: The ``sub`` claim in per-user mode.

        Returns:
            The compact JWS.

        Raises:
            InvalidAlgorithmError: If an algorithm is blank, unsupported, or
                the header and signing algorithms do not correspond.
            ConfigError: If a required configuration value is missing.
            InvalidUsageError: If *subject* does not fit the per-user mode.
            SigningError: If the signer cannot sign.
        """
        config = self._config
        header_alg = validate_header_algorithm(config.jws_algorithm)
        signing_alg = validate_signing_algorithm(config.signing_algorithm)
        check_algorithm_pair(header_alg, signing_alg)

        errors = config.validate_config()
        if errors:
            raise ConfigError("; ".join(errors))

        header = build_header(config, header_alg.value)
        claims = build_claims(config, subject=self._resolve_subject(subject))
        logger.debug(
            "Signing assertion alg=%s kid=%s jti=%s exp=%d",
            header.alg,
            header.kid,
            claims.jti,
            claims.exp,
        )
        return encode_jws(
            header,
            claims,
            lambda data: self._signer.sign(signing_alg, data, config.certificate),
        )

    def retrieve_token(self, subject: Optional[str] = None) -> TokenResponse:
        """Run the full pipeline and return the parsed token response.

        Args:
            subject: The ``sub`` claim in per-user mode.

        Returns:
            The :class:`~jwtbearer.models.TokenResponse` from the endpoint.

        Raises:
            UnexpectedTokenResponseError: On a non-200 status, or a 200
                response without an ``access_token``.
            ResponseParseError: If the body is not a JSON token object.
            ConnectionError_: If the endpoint cannot be reached.
            InvalidAlgorithmError, ConfigError, InvalidUsageError, SigningError:
                As raised by :meth:`mint_assertion`.
        """
        assertion = self.mint_assertion(subject)
        request = build_token_request(self._config, assertion)
        logger.debug("Requesting token from %s", request.url)
        raw = self._exchange.send(request)
        token = parse_token_response(raw)
        if not token.access_token.strip():
            raise UnexpectedTokenResponseError(
                "Token response missing 'access_token' field",
                status_code=200,
                body=raw,
            )
        return token

    def _resolve_subject(self, subject: Optional[str]) -> Optional[str]:
        """Return the ``sub`` override for this request, if any."""
        if self._config.per_user_mode:
            if subject is None or not subject.strip():
                raise InvalidUsageError("per_user_mode requires a subject for each token request")
            return subject
        if subject is not None:
            raise InvalidUsageError("A subject override requires per_user_mode")
        return None

    # ------------------------------------------------------------------ #
    # Host-facing surfaces
    # ------------------------------------------------------------------ #

    def initiate(self, state: str) -> str:
        """Return the callback URL with *state* appended.

        There is no authorization page in this flow, so the host is sent
        straight to its own callback.

        Raises:
            ConfigError: If ``callback_url`` is not configured.
        """
        callback = self._config.callback_url.strip()
        if not callback:
            raise ConfigError("JWT bearer provider requires 'callback_url' to initiate a login")
        parts = urlsplit(callback)
        query = parse_qsl(parts.query, keep_blank_values=True)
        query.append(("state", state))
        return urlunsplit(parts._replace(query=urlencode(query)))

    def handle_callback(self, state: str, subject: Optional[str] = None) -> LoginResult:
        """Obtain a token and echo *state* unchanged."""
        token = self.retrieve_token(subject)
        return LoginResult(
            provider=self._config.provider_name,
            access_token=token.access_token,
            refresh_token=REFRESH_MARKER,
            state=state,
        )

    def refresh(self, subject: Optional[str] = None) -> RefreshResult:
        """Obtain a brand-new token by signing a new assertion."""
        token = self.retrieve_token(subject)
        return RefreshResult(access_token=token.access_token, token_type=token.token_type)

    def get_user_info(self) -> UserIdentity:
        """Return the static identity of the configured system principal."""
        subject = self._config.subject.strip()
        provider = self._config.provider_name.strip()
        return UserIdentity(
            identifier=subject,
            username=subject,
            full_name=provider or subject,
            provider=provider,
        )
