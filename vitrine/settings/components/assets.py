"""Asset registry / pipeline configuration knobs.

This module is imported from base settings so all environments share a
single source of truth for pipelining toggles and minifier choices.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Final

_TRUE_VALUES: Final[set[str]] = {"1", "true", "yes", "y", "on"}

_BASE_DIR: Final[Path] = Path(__file__).resolve().parents[3]


def _env_flag(name: str, *, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return str(value).strip().lower() in _TRUE_VALUES


ASSETS: dict[str, Any] = {
    # URL publique sous laquelle ROOT_DIR est servi
    "BASE_URL": os.getenv("ASSETS_BASE_URL", "/static/"),
    "ROOT_DIR": Path(os.getenv("ASSETS_ROOT_DIR", str(_BASE_DIR / "static"))),
    # Dossier (absolu) des bundles générés; doit exister si un pipeline est actif
    "PIPELINE_DIR": Path(os.getenv("ASSETS_PIPELINE_DIR", str(_BASE_DIR / "static" / "assets"))),
    "PIPELINE_URL": os.getenv("ASSETS_PIPELINE_URL") or None,
    # Toggles pipeline
    "CSS_PIPELINE": _env_flag("ASSETS_CSS_PIPELINE", default=False),
    "JS_PIPELINE": _env_flag("ASSETS_JS_PIPELINE", default=False),
    "CSS_MINIFY": _env_flag("ASSETS_CSS_MINIFY", default=True),
    "CSS_MINIFY_WINDOWS": _env_flag("ASSETS_CSS_MINIFY_WINDOWS", default=False),
    "CSS_REWRITE": _env_flag("ASSETS_CSS_REWRITE", default=True),
    "JS_MINIFY": _env_flag("ASSETS_JS_MINIFY", default=True),
    # Implémentations interchangeables (dotted paths)
    "CSS_MINIFIER": "apps.assets.minifiers.minify_css",
    "JS_MINIFIER": "apps.assets.minifiers.minify_js",
    "FETCH_COMMAND": None,
    "FETCH_TIMEOUT": int(os.getenv("ASSETS_FETCH_TIMEOUT", "10")),
    # scheme:// -> chemin relatif à ROOT_DIR
    "STREAMS": {
        "theme": "themes/default",
        "vendor": "vendor",
    },
    "COLLECTIONS": {
        "jquery": ["vendor://jquery/jquery-3.7.1.min.js"],
    },
    "COLLECTIONS_FILE": os.getenv("ASSETS_COLLECTIONS_FILE") or None,
    "AUTOLOAD": [],
    # Fixe la clé de cache-busting (sinon: clé aléatoire persistée dans le cache Django)
    "CACHE_KEY": os.getenv("ASSETS_CACHE_KEY") or None,
}
