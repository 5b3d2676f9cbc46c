"""
Random token generation.

Tokens come from the operating system's entropy source. If the platform has
none, a seeded ``random.Random`` is used instead and the token is labelled
``TokenStrength.PSEUDO_RANDOM``: those tokens are fine as opaque nonces but
must not be used as CSRF tokens or secrets.
"""

import os
import random
from typing import Optional

from focusguard.config import logger
from focusguard.core.security.constants import DEFAULT_TOKEN_LENGTH, TOKEN_ALPHABET
from focusguard.core.security.models import GeneratedToken, TokenStrength


def _system_random() -> Optional[random.Random]:
    """Return an OS-backed generator, or None when no entropy source exists."""
    try:
        os.urandom(1)
    except NotImplementedError:
        return None
    return random.SystemRandom()


class TokenGenerator:
    """Generates alphanumeric tokens, preferring a cryptographic source."""

    def __init__(self, secure_random: Optional[random.Random] = None, alphabet: str = TOKEN_ALPHABET):
        self._secure = secure_random if secure_random is not None else _system_random()
        self._fallback: Optional[random.Random] = None
        self._alphabet = alphabet

    @property
    def is_cryptographic(self) -> bool:
        return self._secure is not None

    def _fallback_random(self) -> random.Random:
        # NOT cryptographic strength
        if self._fallback is None:
            logger.warning(
                "No secure random source available; falling back to a pseudo-random generator"
            )
            self._fallback = random.Random()
        return self._fallback

    def generate(self, length: int = DEFAULT_TOKEN_LENGTH) -> GeneratedToken:
        if not isinstance(length, int) or isinstance(length, bool) or length < 1:
            raise ValueError("Token length must be a positive integer")

        if self._secure is not None:
            rng, strength = self._secure, TokenStrength.CRYPTOGRAPHIC
        else:
            rng, strength = self._fallback_random(), TokenStrength.PSEUDO_RANDOM

        value = "".join(rng.choice(self._alphabet) for _ in range(length))
        return GeneratedToken(value=value, strength=strength)


_default_generator = TokenGenerator()


def generate_token(length: int = DEFAULT_TOKEN_LENGTH) -> str:
    """Generate a random ``[A-Za-z0-9]`` token of ``length`` characters."""
    return _default_generator.generate(length).value
