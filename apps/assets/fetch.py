"""Default content fetcher used by the pipeline builder."""

from __future__ import annotations

import logging
from pathlib import Path

import requests

from .entries import is_remote_link
from .exceptions import AssetFetchError

log = logging.getLogger("assets.fetch")

DEFAULT_TIMEOUT = 10


def default_fetch(link: str, *, timeout: int = DEFAULT_TIMEOUT) -> str:
    """
    Return the text content of ``link``.

    Remote links are fetched with a GET (protocol-relative ``//`` links are
    fetched over ``http:``); anything else is read from disk as UTF-8, a
    leading BOM dropped.
    """
    if is_remote_link(link):
        url = "http:" + link if link.startswith("//") else link
        try:
            resp = requests.get(url, timeout=timeout)
            resp.raise_for_status()
        except requests.RequestException as exc:
            raise AssetFetchError(link, str(exc)) from exc
        log.debug("Fetched remote asset %s (%d bytes)", url, len(resp.content))
        return resp.text

    try:
        return Path(link).read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        raise AssetFetchError(link, str(exc)) from exc
