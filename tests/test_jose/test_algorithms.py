"""Tests for jwtbearer.jose.algorithms -- algorithm set validation and pairing."""

from __future__ import annotations

import pytest

from jwtbearer.exceptions import InvalidAlgorithmError
from jwtbearer.exit_codes import EXIT_INVALID_USAGE
from jwtbearer.jose.algorithms import (
    AlgorithmKind,
    HeaderAlgorithm,
    SigningAlgorithm,
    check_algorithm_pair,
    validate,
    validate_header_algorithm,
    validate_signing_algorithm,
)


class TestValidate:
    @pytest.mark.parametrize("alg", ["RS256", "RS384", "RS512", "ES256", "ES384", "ES512"])
    def test_header_algorithms_accepted(self, alg: str) -> None:
        assert validate(AlgorithmKind.HEADER, alg) == alg

    @pytest.mark.parametrize(
        "alg",
        ["RSA-SHA256", "RSA-SHA384", "RSA-SHA512", "ECDSA-SHA256", "ECDSA-SHA384", "ECDSA-SHA512"],
    )
    def test_signing_algorithms_accepted(self, alg: str) -> None:
        assert validate(AlgorithmKind.SIGNING, alg) == alg

    def test_surrounding_whitespace_ignored(self) -> None:
        assert validate(AlgorithmKind.HEADER, "  ES384 ") == "ES384"

    @pytest.mark.parametrize("alg", ["HS256", "none", "PS256", "rs256"])
    def test_unsupported_header_algorithm_rejected(self, alg: str) -> None:
        with pytest.raises(InvalidAlgorithmError, match="Unsupported header algorithm"):
            validate(AlgorithmKind.HEADER, alg)

    def test_header_name_rejected_as_signing_algorithm(self) -> None:
        with pytest.raises(InvalidAlgorithmError, match="Unsupported signing algorithm 'RS256'"):
            validate(AlgorithmKind.SIGNING, "RS256")

    @pytest.mark.parametrize("alg", [None, "", "   "])
    def test_blank_rejected(self, alg: str | None) -> None:
        with pytest.raises(InvalidAlgorithmError, match="No header algorithm configured"):
            validate(AlgorithmKind.HEADER, alg)

    def test_error_lists_supported_values(self) -> None:
        with pytest.raises(InvalidAlgorithmError) as exc_info:
            validate(AlgorithmKind.HEADER, "HS256")
        assert "RS256" in str(exc_info.value)
        assert "ES512" in str(exc_info.value)

    def test_exit_code_is_invalid_usage(self) -> None:
        with pytest.raises(InvalidAlgorithmError) as exc_info:
            validate(AlgorithmKind.SIGNING, "HMAC-SHA256")
        assert exc_info.value.exit_code == EXIT_INVALID_USAGE


class TestTypedValidators:
    def test_header_returns_enum(self) -> None:
        assert validate_header_algorithm("RS512") is HeaderAlgorithm.RS512

    def test_signing_returns_enum(self) -> None:
        assert validate_signing_algorithm("ECDSA-SHA384") is SigningAlgorithm.ECDSA_SHA384


class TestSigningAlgorithm:
    def test_is_ecdsa(self) -> None:
        assert SigningAlgorithm.ECDSA_SHA256.is_ecdsa
        assert not SigningAlgorithm.RSA_SHA256.is_ecdsa

    @pytest.mark.parametrize(
        "alg, bits",
        [
            (SigningAlgorithm.RSA_SHA256, 256),
            (SigningAlgorithm.RSA_SHA384, 384),
            (SigningAlgorithm.ECDSA_SHA512, 512),
        ],
    )
    def test_digest_bits(self, alg: SigningAlgorithm, bits: int) -> None:
        assert alg.digest_bits == bits


class TestCheckAlgorithmPair:
    @pytest.mark.parametrize(
        "header, signing",
        [
            ("RS256", "RSA-SHA256"),
            ("RS384", "RSA-SHA384"),
            ("RS512", "RSA-SHA512"),
            ("ES256", "ECDSA-SHA256"),
            ("ES384", "ECDSA-SHA384"),
            ("ES512", "ECDSA-SHA512"),
        ],
    )
    def test_matching_pairs_accepted(self, header: str, signing: str) -> None:
        check_algorithm_pair(HeaderAlgorithm(header), SigningAlgorithm(signing))

    def test_digest_mismatch_rejected(self) -> None:
        with pytest.raises(InvalidAlgorithmError, match="requires signing algorithm 'RSA-SHA256'"):
            check_algorithm_pair(HeaderAlgorithm.RS256, SigningAlgorithm.RSA_SHA512)

    def test_family_mismatch_rejected(self) -> None:
        with pytest.raises(InvalidAlgorithmError, match="got 'RSA-SHA256'"):
            check_algorithm_pair(HeaderAlgorithm.ES256, SigningAlgorithm.RSA_SHA256)
