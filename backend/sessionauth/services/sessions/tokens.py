from __future__ import annotations

import hashlib
import secrets

from sessionauth.services._shared.errors import EntropySourceUnavailableError

# URL-safe base64 alphabet: every character carries 6 bits.
TOKEN_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_"
BITS_PER_CHAR = 6


class TokenGenerator:
    """
    Produce opaque, unguessable session tokens from the OS CSPRNG.

    Tokens are exactly ``length`` characters of :data:`TOKEN_ALPHABET`. No
    timestamp, counter or principal data goes into them.
    """

    def generate(self, length: int) -> str:
        """
        Return a fresh token of ``length`` characters.

        :param length: Number of characters (``>= 1``).
        :raises ValueError: If ``length`` is not positive.
        :raises EntropySourceUnavailableError: If the secure source cannot be read.
        """
        if length < 1:
            raise ValueError("Token length must be positive.")
        # 3 random bytes encode to 4 characters; slicing keeps a uniform alphabet
        nbytes = (length * 3 + 3) // 4
        try:
            raw = secrets.token_urlsafe(nbytes)
        except (OSError, NotImplementedError) as exc:
            raise EntropySourceUnavailableError() from exc
        return raw[:length]

    @staticmethod
    def entropy_bits(length: int) -> int:
        return length * BITS_PER_CHAR


def token_fingerprint(token: str) -> str:
    """Short, non-reversible handle for a token, safe to put in logs."""
    return hashlib.sha256(token.encode()).hexdigest()[:12]
