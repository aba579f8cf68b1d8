"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific failure category and is referenced by the
corresponding :class:`~jwtbearer.exceptions.JWTBearerError` subclass.
Shell wrappers and CI jobs can inspect the exit code to tell a rejected
assertion from an unreachable token endpoint without parsing stderr.

Example::

    $ jwtbearer token
    $ echo $?
    3   # EXIT_AUTH_FAILURE -- the token endpoint rejected the assertion
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or an invalid algorithm."""

EXIT_AUTH_FAILURE = 3
"""The token endpoint answered with something other than HTTP 200."""

EXIT_CONNECTION_ERROR = 6
"""A network-level error occurred (timeout, DNS failure, connection refused)."""

EXIT_SIGNING_FAILURE = 7
"""The signing capability rejected the key, algorithm, or signing input."""

EXIT_RESPONSE_PARSE_ERROR = 8
"""The token endpoint returned a body that is not a valid token response."""
