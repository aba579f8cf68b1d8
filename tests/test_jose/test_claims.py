"""Tests for jwtbearer.jose.claims -- header and claims set construction."""

from __future__ import annotations

import re
import time
from typing import Callable

from jwtbearer.jose.claims import (
    ASSERTION_LIFETIME_SECONDS,
    build_claims,
    build_header,
    generate_jti,
)
from jwtbearer.models import ProviderConfig

_UUID_RE = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$")


class TestGenerateJti:
    def test_format(self) -> None:
        assert _UUID_RE.match(generate_jti())

    def test_unique(self) -> None:
        assert len({generate_jti() for _ in range(200)}) == 200


class TestBuildHeader:
    def test_from_config(self, make_config: Callable[..., ProviderConfig]) -> None:
        header = build_header(make_config(jws_algorithm="RS512", key_id="k-9"))
        assert header.alg == "RS512"
        assert header.typ == "JWT"
        assert header.kid == "k-9"

    def test_explicit_alg_wins(self, make_config: Callable[..., ProviderConfig]) -> None:
        assert build_header(make_config(), "ES256").alg == "ES256"

    def test_values_trimmed(self, make_config: Callable[..., ProviderConfig]) -> None:
        header = build_header(make_config(jws_type=" JWT ", key_id=" kid "))
        assert header.typ == "JWT"
        assert header.kid == "kid"

    def test_field_order(self, make_config: Callable[..., ProviderConfig]) -> None:
        assert list(build_header(make_config()).model_dump()) == ["alg", "typ", "kid"]


class TestBuildClaims:
    def test_from_config(self, make_config: Callable[..., ProviderConfig]) -> None:
        claims = build_claims(
            make_config(issuer="iss-1", subject="sub-1", audience="aud-1"), now=1_000.0
        )
        assert claims.iss == "iss-1"
        assert claims.sub == "sub-1"
        assert claims.aud == "aud-1"
        assert claims.exp == 1_000 + ASSERTION_LIFETIME_SECONDS

    def test_exp_is_five_minutes_from_now(self, make_config: Callable[..., ProviderConfig]) -> None:
        before = int(time.time())
        claims = build_claims(make_config())
        after = int(time.time())
        assert before + 300 <= claims.exp <= after + 300

    def test_fractional_now_truncated(self, make_config: Callable[..., ProviderConfig]) -> None:
        assert build_claims(make_config(), now=1_000.9).exp == 1_300

    def test_subject_override(self, make_config: Callable[..., ProviderConfig]) -> None:
        claims = build_claims(make_config(subject="configured"), subject="alice")
        assert claims.sub == "alice"

    def test_fresh_jti_per_call(self, make_config: Callable[..., ProviderConfig]) -> None:
        config = make_config()
        assert build_claims(config, now=0).jti != build_claims(config, now=0).jti

    def test_field_order(self, make_config: Callable[..., ProviderConfig]) -> None:
        assert list(build_claims(make_config()).model_dump()) == ["iss", "aud", "sub", "exp", "jti"]
