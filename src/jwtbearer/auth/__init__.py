"""Host plugin contract for jwtbearer.

- :class:`AuthProviderPlugin` -- abstract lifecycle a host framework drives.
- :class:`AuthResult` -- headers ready to inject into outgoing requests.

Typical usage::

    from jwtbearer import JWTBearerProvider

    auth_result = JWTBearerProvider(config).authenticate()
    httpx.get(url, headers=auth_result.headers)
"""

from jwtbearer.auth.base import AuthProviderPlugin, AuthResult

__all__ = ["AuthProviderPlugin", "AuthResult"]
