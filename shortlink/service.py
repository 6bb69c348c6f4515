from __future__ import annotations

import logging

from fastapi import HTTPException

from shortlink.config import Settings
from shortlink.schemas import ShortLinkEntry
from shortlink.store import URLStore
from shortlink.tokens import TokenGenerationError, generate_token

logger = logging.getLogger("shortlink.service")

SCHEMES = ("http://", "https://")


def normalize_url(long_url: str) -> str:
    """
    Prefix http:// unless the value already starts with http:// or https://.
    No other validation is done.
    """
    if long_url.startswith(SCHEMES):
        return long_url
    return "http://" + long_url


def _new_token(config: Settings) -> str:
    try:
        return generate_token(config.token_bytes, config.token_length)
    except TokenGenerationError as e:
        logger.exception("Token generation failed")
        raise HTTPException(status_code=500, detail="Failed to generate short URL") from e


def shorten_url(store: URLStore, long_url: str, config: Settings) -> ShortLinkEntry:
    """
    Mints a token for `long_url` and records it.

    By default a colliding token overwrites the existing entry.
    With config.unique_tokens, regenerates up to max_token_retries times.
    """
    if not long_url:
        raise HTTPException(status_code=400, detail="URL is required")

    long_url = normalize_url(long_url)

    if not config.unique_tokens:
        token = _new_token(config)
        store.put(token, long_url)
        logger.info("Shortened %s -> %s", long_url, token)
        return ShortLinkEntry(token=token, long_url=long_url)

    for _ in range(config.max_token_retries):
        token = _new_token(config)
        if token in store:
            logger.warning("Token collision on %s, regenerating", token)
            continue
        store.put(token, long_url)
        logger.info("Shortened %s -> %s", long_url, token)
        return ShortLinkEntry(token=token, long_url=long_url)

    raise HTTPException(status_code=500, detail="Failed to generate unique code. Try again.")


def get_long_url_for_redirect(store: URLStore, token: str) -> str:
    long_url, found = store.get(token)
    if not found:
        logger.debug("Unknown token %s", token)
        raise HTTPException(status_code=404, detail="404 page not found")
    logger.debug("Resolved %s -> %s", token, long_url)
    return long_url
