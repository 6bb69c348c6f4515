from __future__ import annotations

import base64
import secrets

# base64url alphabet: A-Z a-z 0-9 - _
TOKEN_ALPHABET = frozenset(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_"
)


class TokenGenerationError(RuntimeError):
    """The OS random source could not supply bytes for a token."""


def generate_token(num_bytes: int = 4, length: int = 6) -> str:
    """
    Read random bytes from the OS CSPRNG, base64url-encode them
    and keep the first `length` characters.
    4 bytes encode to 8 chars ("xxxxxx=="), so 6 drops the padding.
    """
    try:
        raw = secrets.token_bytes(num_bytes)
    except OSError as e:
        raise TokenGenerationError("random source unavailable") from e
    return base64.urlsafe_b64encode(raw).decode("ascii")[:length]
