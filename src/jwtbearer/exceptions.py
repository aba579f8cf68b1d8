"""Exception hierarchy for jwtbearer.

All exceptions inherit from :class:`JWTBearerError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`jwtbearer.exit_codes`.
The top-level error handler in :func:`jwtbearer.app.main` catches
``JWTBearerError`` and exits with the appropriate code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

Every stage of the token pipeline raises exactly one of these types and
none of them is retried internally; retry policy belongs to the caller.

Subclass hierarchy::

    JWTBearerError (exit 1)
    +-- InvalidUsageError              (exit 2)
    +-- ConfigError                    (exit 1)
    +-- InvalidAlgorithmError          (exit 2)
    +-- SigningError                   (exit 7)
    +-- UnexpectedTokenResponseError   (exit 3)
    +-- ResponseParseError             (exit 8)
    +-- ConnectionError_               (exit 6)
"""

from __future__ import annotations

from jwtbearer.exit_codes import (
    EXIT_AUTH_FAILURE,
    EXIT_CONNECTION_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_RESPONSE_PARSE_ERROR,
    EXIT_SIGNING_FAILURE,
)


class JWTBearerError(Exception):
    """Base exception for all jwtbearer errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`jwtbearer.exit_codes`. The entry point catches
    this exception type and calls ``sys.exit(exc.exit_code)``.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(JWTBearerError):
    """Raised for invalid CLI arguments or missing caller-supplied values."""

    exit_code = EXIT_INVALID_USAGE


class ConfigError(JWTBearerError):
    """Raised for configuration problems (missing providers, invalid JSON, bad credential sources)."""

    exit_code = EXIT_GENERIC_FAILURE


class InvalidAlgorithmError(JWTBearerError):
    """Raised when a header or signing algorithm is blank, unsupported, or mismatched."""

    exit_code = EXIT_INVALID_USAGE


class SigningError(JWTBearerError):
    """Raised when the signing capability cannot produce a signature."""

    exit_code = EXIT_SIGNING_FAILURE


class UnexpectedTokenResponseError(JWTBearerError):
    """Raised when the token endpoint does not answer with a usable token.

    The raw response body is kept on the exception for diagnosis.

    Args:
        message: Human-readable error description.
        status_code: HTTP status returned by the token endpoint.
        body: Raw response body text.
    """

    exit_code = EXIT_AUTH_FAILURE

    def __init__(self, message: str, status_code: int | None = None, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class ResponseParseError(JWTBearerError):
    """Raised when the token response body is not a JSON token object."""

    exit_code = EXIT_RESPONSE_PARSE_ERROR


class ConnectionError_(JWTBearerError):
    """Raised on network-level failures (timeout, DNS resolution, connection refused).

    Named with a trailing underscore to avoid shadowing the built-in
    ``ConnectionError``.
    """

    exit_code = EXIT_CONNECTION_ERROR
