# apps/assets/registry.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Pattern, Union

from django.utils.safestring import SafeString, mark_safe

from . import html
from .cache import cache_key as default_cache_key
from .collections import CollectionSet
from .conf import AssetsSettings, build_settings, get_settings
from .entries import (
    CSS,
    DEFAULT_PRIORITY,
    JS,
    AssetEntry,
    is_remote_link,
    kind_for,
    partition,
    sort_entries,
)
from .exceptions import AssetsConfigurationError, ResourceNotFound
from .locator import ResourceLocator
from .pipeline import PipelineBuilder, ensure_pipeline_dir
from .scanner import CSS_REGEX, DEFAULT_REGEX, JS_REGEX, rglob

log = logging.getLogger("assets.registry")

# Options acceptées par configure(), nom du champ AssetsSettings -> clé ASSETS
_OPTION_KEYS = {
    "css_pipeline": "CSS_PIPELINE",
    "js_pipeline": "JS_PIPELINE",
    "css_minify": "CSS_MINIFY",
    "css_minify_windows": "CSS_MINIFY_WINDOWS",
    "css_rewrite": "CSS_REWRITE",
    "js_minify": "JS_MINIFY",
    "fetch_command": "FETCH_COMMAND",
}


class AssetRegistry:
    """
    Registre CSS/JS d'une page: ajout (avec collections), dédoublonnage,
    ordre par priorité, rendu HTML et pipelining optionnel.

    Un registre par requête; rien n'est partagé entre requêtes.
    """

    def __init__(
        self,
        config: Optional[AssetsSettings] = None,
        *,
        locator: Optional[ResourceLocator] = None,
        cache_key: Optional[Callable[[], str]] = None,
        fetch: Optional[Callable[[str], str]] = None,
        css_minifier: Optional[Callable[[str], str]] = None,
        js_minifier: Optional[Callable[[str], str]] = None,
    ) -> None:
        self.config = config or AssetsSettings()
        self.locator = locator or ResourceLocator(self.config.streams, self.config.root_dir)
        self._cache_key = cache_key or (lambda: default_cache_key(self.config.cache_key))
        self._fetch = fetch
        self._css_minifier = css_minifier
        self._js_minifier = js_minifier

        self.collections = CollectionSet(self.config.collections)
        self._entries: Dict[str, Dict[str, AssetEntry]] = {CSS: {}, JS: {}}
        self._inline: Dict[str, List[str]] = {CSS: [], JS: []}

        ensure_pipeline_dir(self.config)
        for asset in self.config.autoload:
            self.add(asset)

    @classmethod
    def from_settings(cls, **kwargs: Any) -> "AssetRegistry":
        return cls(get_settings(), **kwargs)

    # ------------- Configuration -----------------

    def configure(self, options: Mapping[str, Any]) -> "AssetRegistry":
        """
        Applique des options à chaud (toggles, collections, autoload).
        Accepte les clés du dict ``ASSETS`` (``CSS_PIPELINE``) ou leur forme
        minuscule (``css_pipeline``).
        """
        opts = {str(k).upper(): v for k, v in (options or {}).items()}
        changes: Dict[str, Any] = {}
        for field_name, key in _OPTION_KEYS.items():
            if key in opts and opts[key] is not None:
                changes[field_name] = opts[key]
        if changes:
            # passe par build_settings pour la coercition des types
            current = self._as_raw()
            current.update({_OPTION_KEYS[k]: v for k, v in changes.items()})
            self.config = build_settings(current)
            ensure_pipeline_dir(self.config)

        collections = opts.get("COLLECTIONS")
        if isinstance(collections, Mapping):
            self.collections = CollectionSet(collections)

        autoload = opts.get("AUTOLOAD")
        if isinstance(autoload, (list, tuple)):
            for asset in autoload:
                self.add(asset)
        return self

    def _as_raw(self) -> Dict[str, Any]:
        c = self.config
        return {
            "BASE_URL": c.base_url,
            "ROOT_DIR": c.root_dir,
            "PIPELINE_DIR": c.pipeline_dir,
            "PIPELINE_URL": c.pipeline_url,
            "CSS_PIPELINE": c.css_pipeline,
            "JS_PIPELINE": c.js_pipeline,
            "CSS_MINIFY": c.css_minify,
            "CSS_MINIFY_WINDOWS": c.css_minify_windows,
            "CSS_REWRITE": c.css_rewrite,
            "JS_MINIFY": c.js_minify,
            "CSS_MINIFIER": c.css_minifier,
            "JS_MINIFIER": c.js_minifier,
            "FETCH_COMMAND": c.fetch_command,
            "FETCH_TIMEOUT": c.fetch_timeout,
            "STREAMS": dict(c.streams),
            "CACHE_KEY": c.cache_key,
        }

    # ------------- Ajout -----------------

    def add(self, asset: Any, priority: int = DEFAULT_PRIORITY, pipeline: bool = True) -> "AssetRegistry":
        """Ajoute un asset, une liste d'assets ou une collection (détection auto)."""
        if isinstance(asset, (list, tuple)):
            for item in asset:
                self.add(item, priority, pipeline)
            return self

        asset = str(asset)
        if asset in self.collections:
            for item in self.collections.expand(asset):
                self.add(item, priority, pipeline)
            return self

        kind = kind_for(asset)
        if kind == CSS:
            self.add_css(asset, priority, pipeline)
        elif kind == JS:
            self.add_js(asset, priority, pipeline)
        else:
            log.warning("Asset ignored (unknown type, not a collection): %s", asset)
        return self

    def add_css(self, asset: Any, priority: int = DEFAULT_PRIORITY, pipeline: bool = True) -> "AssetRegistry":
        return self._add(CSS, asset, priority, pipeline)

    def add_js(self, asset: Any, priority: int = DEFAULT_PRIORITY, pipeline: bool = True) -> "AssetRegistry":
        return self._add(JS, asset, priority, pipeline)

    def _add(self, kind: str, asset: Any, priority: int, pipeline: bool) -> "AssetRegistry":
        if isinstance(asset, (list, tuple)):
            for item in asset:
                self._add(kind, item, priority, pipeline)
            return self

        link = str(asset)
        if not is_remote_link(link):
            link = self.build_local_link(link)

        bucket = self._entries[kind]
        if link not in bucket:
            bucket[link] = AssetEntry(
                asset=link,
                priority=int(priority),
                order=len(bucket),
                pipeline=bool(pipeline),
            )
        return self

    def add_inline_css(self, code: Any) -> "AssetRegistry":
        return self._add_inline(CSS, code)

    def add_inline_js(self, code: Any) -> "AssetRegistry":
        return self._add_inline(JS, code)

    def _add_inline(self, kind: str, code: Any) -> "AssetRegistry":
        if isinstance(code, str) and code not in self._inline[kind]:
            self._inline[kind].append(code)
        return self

    def register_collection(self, name: str, assets: List[str]) -> "AssetRegistry":
        self.collections.register(name, assets)
        return self

    def build_local_link(self, asset: str) -> str:
        try:
            asset = self.locator.find_resource(asset)
        except ResourceNotFound as exc:
            log.debug("Locator fallback for %s: %s", asset, exc)
        return self.config.base_url + asset.lstrip("/")

    # ------------- Reset / accès -----------------

    def reset(self) -> "AssetRegistry":
        return self.reset_css().reset_js()

    def reset_css(self) -> "AssetRegistry":
        self._entries[CSS] = {}
        self._inline[CSS] = []
        return self

    def reset_js(self) -> "AssetRegistry":
        self._entries[JS] = {}
        self._inline[JS] = []
        return self

    def get_css(self) -> Dict[str, AssetEntry]:
        return dict(self._entries[CSS])

    def get_js(self) -> Dict[str, AssetEntry]:
        return dict(self._entries[JS])

    def get_inline_css(self) -> List[str]:
        return list(self._inline[CSS])

    def get_inline_js(self) -> List[str]:
        return list(self._inline[JS])

    def sorted_entries(self, kind: str) -> List[AssetEntry]:
        return sort_entries(self._entries[kind].values())

    # ------------- Rendu -----------------

    def css(self, attributes: Optional[Mapping[Any, Any]] = None) -> Optional[SafeString]:
        return self._render(CSS, attributes)

    def js(self, attributes: Optional[Mapping[Any, Any]] = None) -> Optional[SafeString]:
        return self._render(JS, attributes)

    def _render(self, kind: str, attributes: Optional[Mapping[Any, Any]]) -> Optional[SafeString]:
        if not self._entries[kind]:
            return None

        entries = self.sorted_entries(kind)
        if kind == CSS:
            attrs = html.build_attributes(html.merge_attributes(html.CSS_DEFAULT_ATTRS, attributes))
            tag, pipelined, inline_tag = html.link_tag, self.config.css_pipeline, "style"
        else:
            attrs = html.build_attributes(html.merge_attributes(html.JS_DEFAULT_ATTRS, attributes))
            tag, pipelined, inline_tag = html.script_tag, self.config.js_pipeline, "script"

        parts: List[str] = []
        if pipelined:
            included, excluded = partition(entries)
            if included:
                parts.append(tag(self.pipeline_builder().build(entries, kind), attrs))
            parts.extend(tag(e.asset, attrs) for e in excluded)
        else:
            parts.extend(tag(e.asset, attrs) for e in entries)

        parts.append(html.inline_block(inline_tag, self._inline[kind]))
        return mark_safe("".join(parts))

    def pipeline_builder(self) -> PipelineBuilder:
        return PipelineBuilder(
            self.config,
            cache_key=self._cache_key,
            fetch=self._fetch,
            css_minifier=self._css_minifier,
            js_minifier=self._js_minifier,
        )

    # ------------- Dossiers -----------------

    def add_dir(self, directory: Union[str, Path], pattern: Union[str, Pattern[str]] = DEFAULT_REGEX) -> "AssetRegistry":
        """Ajoute tous les assets sous ``ROOT_DIR/directory`` dont le chemin matche ``pattern``."""
        root = self.config.root_dir
        if root is None or not root.is_dir():
            raise AssetsConfigurationError(f"Assets: root directory not found ({root})")

        # les bundles générés ne doivent jamais être ré-enregistrés comme sources
        exclude = [self.config.pipeline_dir] if self.config.pipeline_dir is not None else []
        files = rglob(root / str(directory).strip("/"), pattern, ltrim=root, exclude=exclude)
        if not files:
            return self

        if pattern is CSS_REGEX:
            return self.add_css(files)
        if pattern is JS_REGEX:
            return self.add_js(files)

        for path in files:
            kind = kind_for(path)
            if kind == CSS:
                self.add_css(path)
            elif kind == JS:
                self.add_js(path)
        return self

    def add_dir_css(self, directory: Union[str, Path]) -> "AssetRegistry":
        return self.add_dir(directory, CSS_REGEX)

    def add_dir_js(self, directory: Union[str, Path]) -> "AssetRegistry":
        return self.add_dir(directory, JS_REGEX)
