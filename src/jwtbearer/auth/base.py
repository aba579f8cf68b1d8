"""Host-facing auth provider contract.

This module defines the two types a host application sees:

- :class:`AuthResult` -- a plain container for the HTTP headers an auth
  provider produces for outgoing API calls.
- :class:`AuthProviderPlugin` -- the abstract base class describing the
  lifecycle a host plugin framework drives: ``initiate`` the login,
  ``handle_callback``, ``refresh`` and ``get_user_info``.

See Also:
    :class:`~jwtbearer.provider.JWTBearerProvider` for the JWT bearer
    implementation.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from jwtbearer.models import LoginResult, RefreshResult, UserIdentity


class AuthResult:
    """Container for authentication artifacts to inject into HTTP requests.

    Args:
        headers: HTTP headers to add (e.g. ``{"Authorization": "Bearer ..."}``).

    Example::

        result = AuthResult(headers={"Authorization": "Bearer tok123"})
        assert result.headers["Authorization"] == "Bearer tok123"
    """

    def __init__(self, headers: dict[str, str] | None = None):
        self.headers = headers or {}


class AuthProviderPlugin(ABC):
    """Abstract base class for auth providers driven by a host framework.

    Subclasses provide a :attr:`auth_type` identifier and the four lifecycle
    steps. :meth:`authenticate` is a convenience for plain HTTP clients that
    only need a header.
    """

    @property
    @abstractmethod
    def auth_type(self) -> str:
        """Return the unique auth type identifier, e.g. ``"jwt_bearer"``."""
        ...

    @abstractmethod
    def initiate(self, state: str) -> str:
        """Return the URL the host should send the login to, carrying *state*."""
        ...

    @abstractmethod
    def handle_callback(self, state: str, subject: Optional[str] = None) -> LoginResult:
        """Obtain a token after the host's callback and echo *state*."""
        ...

    @abstractmethod
    def refresh(self, subject: Optional[str] = None) -> RefreshResult:
        """Obtain a replacement access token."""
        ...

    @abstractmethod
    def get_user_info(self) -> UserIdentity:
        """Describe the authenticated principal."""
        ...

    def authenticate(self, subject: Optional[str] = None) -> AuthResult:
        """Return an ``Authorization`` header built from :meth:`refresh`.

        Args:
            subject: Passed through to :meth:`refresh`.
        """
        result = self.refresh(subject)
        token_type = result.token_type or "Bearer"
        return AuthResult(headers={"Authorization": f"{token_type} {result.access_token}"})
