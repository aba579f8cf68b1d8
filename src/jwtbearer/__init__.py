"""jwtbearer -- OAuth 2.0 JWT Bearer client credentials (RFC 7523).

This package authenticates a service identity to an authorization server by
minting a self-signed JWS client assertion, exchanging it at a token
endpoint and handing the resulting access token to the caller. There is no
end-user interaction and no refresh token: every token request signs a
fresh assertion.

Typical usage::

    from jwtbearer import JWTBearerProvider, ProviderConfig

    config = ProviderConfig(
        provider_name="billing",
        token_endpoint="https://auth.example.com/oauth/token",
        jws_algorithm="RS256",
        signing_algorithm="RSA-SHA256",
        certificate="file:~/.keys/billing.pem",
        issuer="billing-svc",
        subject="billing-svc",
        audience="https://auth.example.com",
    )
    token = JWTBearerProvider(config).retrieve_token()

Modules:
    jose: Algorithm validation, claims construction and JWS encoding.
    signing: The signing capability and its PEM-key implementation.
    client: Token request building, HTTP exchange and response parsing.
    provider: The pipeline orchestrator and host-facing result shapes.
    models: Pydantic models shared across the package.
    config: XDG-aware configuration and provider management.
    exceptions: Exception hierarchy with exit-code mapping.
    app: Typer application and CLI entry point.
"""

__version__ = "0.1.0"

from jwtbearer.models import ProviderConfig  # noqa: E402
from jwtbearer.provider import JWTBearerProvider  # noqa: E402

__all__ = ["JWTBearerProvider", "ProviderConfig", "__version__"]
