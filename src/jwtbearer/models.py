"""Canonical Pydantic models shared across all jwtbearer modules.

This is the single source of truth for data shapes in the project. Every other
module imports from here rather than defining its own models. The models fall
into three groups:

**Configuration models** -- serialised as JSON in the user's config directory:
    :class:`ConfigKey`, :class:`ProviderConfig`, :class:`OutputConfig`, and
    :class:`GlobalConfig`.

**JOSE models** -- the two JSON documents that are signed into an assertion:
    :class:`JOSEHeader` and :class:`ClaimsSet`. Field declaration order is the
    serialisation order, so it is part of the signed byte sequence.

**Exchange models** -- produced and consumed by the token pipeline:
    :class:`TokenRequest`, :class:`TokenResponse`, :class:`LoginResult`,
    :class:`RefreshResult`, and :class:`UserIdentity`.
"""

from __future__ import annotations

import enum
from collections.abc import Mapping
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

_TRUE_VALUES = frozenset({"true", "1", "yes", "on"})


# --- Provider Config ---


class ConfigKey(str, enum.Enum):
    """Raw configuration key names understood by :meth:`ProviderConfig.from_mapping`.

    The value of each member is the key looked up in the raw mapping and
    also the name of the matching :class:`ProviderConfig` field.
    """

    GRANT_TYPE = "grant_type"
    TOKEN_ENDPOINT = "token_endpoint"
    ADDITIONAL_HEADERS = "additional_headers"
    ADDITIONAL_BODY_PARAMS = "additional_body_params"
    JWS_ALGORITHM = "jws_algorithm"
    JWS_TYPE = "jws_type"
    KEY_ID = "key_id"
    SUBJECT = "subject"
    ISSUER = "issuer"
    AUDIENCE = "audience"
    CERTIFICATE = "certificate"
    SIGNING_ALGORITHM = "signing_algorithm"
    PROVIDER_NAME = "provider_name"
    CALLBACK_URL = "callback_url"
    SCOPE = "scope"
    USE_SCOPE = "use_scope"
    PER_USER_MODE = "per_user_mode"
    LOG_REQUEST = "log_request"
    LOG_RESPONSE = "log_response"
    TIMEOUT = "timeout"
    VERIFY_SSL = "verify_ssl"


_BOOLEAN_KEYS = frozenset(
    {
        ConfigKey.USE_SCOPE,
        ConfigKey.PER_USER_MODE,
        ConfigKey.LOG_REQUEST,
        ConfigKey.LOG_RESPONSE,
        ConfigKey.VERIFY_SSL,
    }
)

_REQUIRED_KEYS = (
    ConfigKey.TOKEN_ENDPOINT,
    ConfigKey.CERTIFICATE,
    ConfigKey.ISSUER,
    ConfigKey.SUBJECT,
    ConfigKey.AUDIENCE,
)


class ProviderConfig(BaseModel):
    """Configuration for one JWT bearer auth provider.

    Holds everything needed to mint an assertion and exchange it: the token
    endpoint, the JOSE header fields, the claim values, the signing
    certificate reference and the optional request extensions.

    Algorithm fields are kept as plain strings; they are checked by
    :mod:`jwtbearer.jose.algorithms` when a token is requested so that an
    unsupported value fails with
    :class:`~jwtbearer.exceptions.InvalidAlgorithmError` rather than a
    validation error at load time.

    Example::

        ProviderConfig(
            provider_name="billing",
            token_endpoint="https://auth.example.com/oauth/token",
            jws_algorithm="RS256",
            signing_algorithm="RSA-SHA256",
            certificate="env:BILLING_KEY_PEM",
            issuer="billing-svc",
            subject="billing-svc",
            audience="https://auth.example.com",
        )
    """

    model_config = ConfigDict(frozen=True)

    provider_name: str = Field(default="", description="Label reported to the host")
    grant_type: str = Field(default="client_credentials", description="OAuth2 grant_type value")
    token_endpoint: str = Field(default="", description="Token endpoint URL")
    additional_headers: str = Field(
        default="", description="Extra headers as 'key : value, key : value'"
    )
    additional_body_params: str = Field(
        default="", description="Extra form fields as 'key : value, key : value'"
    )
    jws_algorithm: str = Field(default="", description="JOSE header alg, e.g. RS256")
    jws_type: str = Field(default="JWT", description="JOSE header typ")
    key_id: str = Field(default="", description="JOSE header kid")
    subject: str = Field(default="", description="sub claim")
    issuer: str = Field(default="", description="iss claim")
    audience: str = Field(default="", description="aud claim")
    certificate: str = Field(
        default="",
        description="Signing key source: env:VAR or file:/path",
    )
    signing_algorithm: str = Field(default="", description="Signer algorithm, e.g. RSA-SHA256")
    callback_url: str = Field(default="", description="Host callback URL used by initiate()")
    scope: str = Field(default="", description="Scope sent when use_scope is enabled")
    use_scope: bool = False
    per_user_mode: bool = Field(
        default=False, description="Take the sub claim from the caller instead of config"
    )
    log_request: bool = False
    log_response: bool = False
    timeout: float = Field(default=30.0, description="Token request timeout in seconds")
    verify_ssl: bool = True

    @classmethod
    def from_mapping(cls, raw: Mapping[str, object]) -> ProviderConfig:
        """Build a config from a raw string-keyed mapping.

        Only the names declared in :class:`ConfigKey` are read. Values are
        converted to strings and trimmed of surrounding whitespace; absent or
        ``None`` values fall back to the field default. Boolean flags accept
        ``true``, ``1``, ``yes`` and ``on`` (case-insensitive).

        Args:
            raw: Mapping from configuration key name to value, as supplied
                by a configuration store.

        Returns:
            The populated :class:`ProviderConfig`.
        """
        values: dict[str, object] = {}
        for key in ConfigKey:
            value = raw.get(key.value)
            if value is None:
                continue
            if isinstance(value, bool):
                text = "true" if value else "false"
            else:
                text = str(value).strip()
            if key in _BOOLEAN_KEYS:
                values[key.value] = text.lower() in _TRUE_VALUES
            elif key is ConfigKey.TIMEOUT:
                if text:
                    values[key.value] = text
            else:
                values[key.value] = text
        return cls.model_validate(values)

    def validate_config(self) -> list[str]:
        """Check that every value the pipeline needs is present.

        ``subject`` is not required in per-user mode, where the caller
        supplies it with each request.

        Returns:
            A list of human-readable error strings. Empty if valid.
        """
        errors: list[str] = []
        for key in _REQUIRED_KEYS:
            if key is ConfigKey.SUBJECT and self.per_user_mode:
                continue
            if not str(getattr(self, key.value)).strip():
                errors.append(f"JWT bearer provider requires '{key.value}'")
        return errors


class OutputConfig(BaseModel):
    """Default output format preferences stored in :class:`GlobalConfig`."""

    format: str = Field(
        default="auto", description="Output format: auto, json, plain, rich"
    )


class GlobalConfig(BaseModel):
    """User-wide configuration persisted at ``~/.config/jwtbearer/config.json``.

    Fields here have the lowest precedence and can be overridden by project
    config, environment variables, or CLI flags. See
    :func:`~jwtbearer.config.resolve_config` for the full precedence chain.
    """

    default_provider: Optional[str] = None
    auto_select_single_provider: bool = True
    output: OutputConfig = Field(default_factory=OutputConfig)


# --- JOSE Models ---


class JOSEHeader(BaseModel):
    """The first segment of a compact JWS."""

    model_config = ConfigDict(frozen=True)

    alg: str
    typ: str
    kid: str


class ClaimsSet(BaseModel):
    """The JWT payload of a client assertion.

    ``exp`` is an integer Unix timestamp and ``jti`` is unique per assertion.
    """

    model_config = ConfigDict(frozen=True)

    iss: str
    aud: str
    sub: str
    exp: int
    jti: str


# --- Exchange Models ---


class TokenRequest(BaseModel):
    """A fully built token endpoint request.

    ``body`` is the exact URL-encoded form string put on the wire.
    """

    method: str = "POST"
    url: str
    headers: dict[str, str] = Field(default_factory=dict)
    body: str


class TokenResponse(BaseModel):
    """The JSON body returned by the token endpoint.

    Absent or ``null`` fields default to empty values and unknown fields are
    ignored. ``expires_in`` accepts numbers or numeric strings.
    """

    model_config = ConfigDict(extra="ignore")

    access_token: str = ""
    token_type: str = ""
    expires_in: Optional[int] = None
    scope: Optional[str] = None
    state: Optional[str] = None

    @field_validator("access_token", "token_type", mode="before")
    @classmethod
    def _null_as_empty(cls, value: object) -> object:
        return "" if value is None else value


class LoginResult(BaseModel):
    """Token response handed to the host after the login callback."""

    provider: str
    access_token: str
    refresh_token: str
    state: str


class RefreshResult(BaseModel):
    """Result of a refresh, which in this flow is a brand-new token."""

    access_token: str
    token_type: str


class UserIdentity(BaseModel):
    """Static identity record for the system principal.

    The flow authenticates a service, not a person, so the personal fields
    are fixed placeholders.
    """

    identifier: str
    username: str
    full_name: str
    first_name: str = "System"
    last_name: str = "User"
    email: str = ""
    locale: str = "en_US"
    provider: str
