"""
Tests for random token generation.
"""

import random
import re
from unittest.mock import patch

import pytest

from focusguard.core.security import TokenGenerator, TokenStrength, generate_token

ALNUM = re.compile(r"^[A-Za-z0-9]+$")


class TestSecureTokens:

    def test_default_length(self):
        assert len(generate_token()) == 32

    def test_custom_length_and_alphabet(self):
        token = generate_token(64)
        assert len(token) == 64
        assert ALNUM.match(token)

    def test_tokens_differ(self):
        assert len({generate_token() for _ in range(50)}) == 50

    def test_default_generator_is_cryptographic(self):
        generator = TokenGenerator()
        token = generator.generate(16)
        assert generator.is_cryptographic is True
        assert token.strength is TokenStrength.CRYPTOGRAPHIC

    @pytest.mark.parametrize("length", [0, -1, 2.5, "32", True])
    def test_rejects_invalid_length(self, length):
        with pytest.raises(ValueError):
            TokenGenerator().generate(length)


class TestFallbackTokens:
    """Without an OS entropy source tokens are labelled pseudo-random."""

    def test_falls_back_when_urandom_unavailable(self):
        with patch("focusguard.core.security.tokens.os.urandom", side_effect=NotImplementedError):
            generator = TokenGenerator()

        token = generator.generate(20)

        assert generator.is_cryptographic is False
        assert token.strength is TokenStrength.PSEUDO_RANDOM
        assert len(token.value) == 20
        assert ALNUM.match(token.value)

    def test_injected_source_is_used(self):
        generator = TokenGenerator(secure_random=random.Random(7))
        first = generator.generate(12).value
        again = TokenGenerator(secure_random=random.Random(7)).generate(12).value
        assert first == again
