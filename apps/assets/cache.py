"""
Clé de cache-busting ajoutée en query-string aux URLs des bundles.

- Clé fixe si ``ASSETS["CACHE_KEY"]`` est défini.
- Sinon clé courte aléatoire, persistée sans expiration dans le cache Django
  et partagée par tous les workers; ``bump_cache_key`` la fait tourner.
"""

from __future__ import annotations

import uuid

from django.core.cache import cache as djcache

_KEY = "assets:cache-key"


def _new_key() -> str:
    return uuid.uuid4().hex[:8]


def cache_key(fixed: str | None = None) -> str:
    if fixed:
        return str(fixed)
    current = djcache.get(_KEY)
    if current:
        return str(current)
    # add() évite d'écraser une clé posée entre-temps par un autre worker
    djcache.add(_KEY, _new_key(), None)
    return str(djcache.get(_KEY) or "")


def bump_cache_key() -> str:
    key = _new_key()
    djcache.set(_KEY, key, None)
    return key
