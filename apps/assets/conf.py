"""Runtime view of the ``ASSETS`` settings dict."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml
from django.conf import settings

from .exceptions import AssetsConfigurationError

log = logging.getLogger("assets.conf")

DEFAULT_CSS_MINIFIER = "apps.assets.minifiers.minify_css"
DEFAULT_JS_MINIFIER = "apps.assets.minifiers.minify_js"
DEFAULT_FETCH_COMMAND = "apps.assets.fetch.default_fetch"


@dataclass(frozen=True)
class AssetsSettings:
    base_url: str = "/"
    root_dir: Optional[Path] = None
    pipeline_dir: Optional[Path] = None
    pipeline_url: Optional[str] = None
    css_pipeline: bool = False
    js_pipeline: bool = False
    css_minify: bool = True
    css_minify_windows: bool = False
    css_rewrite: bool = True
    js_minify: bool = True
    css_minifier: str = DEFAULT_CSS_MINIFIER
    js_minifier: str = DEFAULT_JS_MINIFIER
    fetch_command: str = DEFAULT_FETCH_COMMAND
    fetch_timeout: int = 10
    streams: Dict[str, str] = field(default_factory=dict)
    collections: Dict[str, List[str]] = field(default_factory=dict)
    autoload: List[Any] = field(default_factory=list)
    cache_key: Optional[str] = None

    @property
    def any_pipeline(self) -> bool:
        return bool(self.css_pipeline or self.js_pipeline)


def _as_bool(value: Any, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "y", "on"}
    return bool(value)


def _as_path(value: Any) -> Optional[Path]:
    if value in (None, ""):
        return None
    return Path(value)


def _normalize_base_url(value: Any) -> str:
    base = str(value or "/").strip() or "/"
    return base if base.endswith("/") else base + "/"


def _coerce_int(value: Any, fallback: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return fallback


def _normalize_collections(raw: Any) -> Dict[str, List[str]]:
    if not raw:
        return {}
    if not isinstance(raw, Mapping):
        raise AssetsConfigurationError(
            f"ASSETS collections must be a mapping, got {type(raw).__name__}."
        )
    out: Dict[str, List[str]] = {}
    for name, items in raw.items():
        if items is None:
            out[str(name)] = []
        elif isinstance(items, (list, tuple)):
            out[str(name)] = [str(x) for x in items]
        else:
            out[str(name)] = [str(items)]
    return out


def load_collections_file(path: Path | str) -> Dict[str, List[str]]:
    """
    Lit un fichier YAML ``collections: {name: [assets...]}``.
    Un mapping nu (sans clé ``collections``) est accepté aussi.
    """
    p = Path(path)
    if not p.exists():
        raise AssetsConfigurationError(f"Collections file not found: {p}")
    with p.open("r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}
    if isinstance(data, dict) and "collections" in data:
        data = data.get("collections") or {}
    return _normalize_collections(data)


def build_settings(raw: Mapping[str, Any] | None) -> AssetsSettings:
    raw = dict(raw or {})
    collections = _normalize_collections(raw.get("COLLECTIONS"))
    collections_file = raw.get("COLLECTIONS_FILE")
    if collections_file:
        from_file = load_collections_file(collections_file)
        log.debug("Loaded %d collection(s) from %s", len(from_file), collections_file)
        # Les collections déclarées en settings priment sur le fichier
        collections = {**from_file, **collections}

    autoload = raw.get("AUTOLOAD") or []
    if not isinstance(autoload, (list, tuple)):
        autoload = [autoload]

    return AssetsSettings(
        base_url=_normalize_base_url(raw.get("BASE_URL", getattr(settings, "STATIC_URL", "/"))),
        root_dir=_as_path(raw.get("ROOT_DIR")),
        pipeline_dir=_as_path(raw.get("PIPELINE_DIR")),
        pipeline_url=(str(raw["PIPELINE_URL"]) if raw.get("PIPELINE_URL") else None),
        css_pipeline=_as_bool(raw.get("CSS_PIPELINE"), False),
        js_pipeline=_as_bool(raw.get("JS_PIPELINE"), False),
        css_minify=_as_bool(raw.get("CSS_MINIFY"), True),
        css_minify_windows=_as_bool(raw.get("CSS_MINIFY_WINDOWS"), False),
        css_rewrite=_as_bool(raw.get("CSS_REWRITE"), True),
        js_minify=_as_bool(raw.get("JS_MINIFY"), True),
        css_minifier=str(raw.get("CSS_MINIFIER") or DEFAULT_CSS_MINIFIER),
        js_minifier=str(raw.get("JS_MINIFIER") or DEFAULT_JS_MINIFIER),
        fetch_command=str(raw.get("FETCH_COMMAND") or DEFAULT_FETCH_COMMAND),
        fetch_timeout=max(1, _coerce_int(raw.get("FETCH_TIMEOUT"), 10)),
        streams={str(k): str(v) for k, v in (raw.get("STREAMS") or {}).items()},
        collections=collections,
        autoload=list(autoload),
        cache_key=(str(raw["CACHE_KEY"]) if raw.get("CACHE_KEY") else None),
    )


def get_settings() -> AssetsSettings:
    """Relit ``settings.ASSETS`` à chaque appel (compatible override_settings)."""
    return build_settings(getattr(settings, "ASSETS", {}))
