# apps/assets/pipeline.py
from __future__ import annotations

import functools
import json
import logging
import os
import re
import tempfile
from hashlib import sha256
from pathlib import Path
from typing import Callable, Iterable, List, Optional

from . import css as css_tools
from .conf import AssetsSettings
from .entries import CSS, JS, AssetEntry, is_remote_link, partition
from .exceptions import AssetsConfigurationError
from .fetch import default_fetch
from .minifiers import css_minify_enabled, load_callable

log = logging.getLogger("assets.pipeline")

Fetcher = Callable[[str], str]

# Nom d'un bundle généré: hash court + extension
BUNDLE_RE = re.compile(r"^[0-9a-f]{32}\.(css|js)$")


def _json_stable(obj) -> str:
    return json.dumps(obj, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def _short_hex(h: str, n: int = 32) -> str:
    return h[:n]


def _flag(value: bool) -> str:
    return "1" if value else "0"


def _atomic_write(dst: Path, data: bytes) -> None:
    dst.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile(dir=dst.parent, delete=False) as tmp:
        tmp.write(data)
        tmp.flush()
        os.fsync(tmp.fileno())
        tmp_path = Path(tmp.name)
    tmp_path.replace(dst)


def resolve_fetch(config: AssetsSettings) -> Fetcher:
    func = load_callable(config.fetch_command)
    if func is default_fetch:
        return functools.partial(default_fetch, timeout=config.fetch_timeout)
    return func


def ensure_pipeline_dir(config: AssetsSettings) -> None:
    """Un pipeline actif exige un dossier de sortie existant."""
    if not config.any_pipeline:
        return
    if config.pipeline_dir is None or not config.pipeline_dir.is_dir():
        raise AssetsConfigurationError(
            f"Assets: pipeline directory not found ({config.pipeline_dir})"
        )


class PipelineBuilder:
    """
    Concatène + minifie les assets d'un type dans un fichier unique dont le nom
    est le hash du jeu d'entrées et des options; un fichier déjà présent n'est
    jamais régénéré.
    """

    def __init__(
        self,
        config: AssetsSettings,
        *,
        cache_key: Callable[[], str],
        fetch: Optional[Fetcher] = None,
        css_minifier: Optional[Callable[[str], str]] = None,
        js_minifier: Optional[Callable[[str], str]] = None,
    ) -> None:
        self.config = config
        self.cache_key = cache_key
        self.fetch = fetch or resolve_fetch(config)
        self.css_minifier = css_minifier or load_callable(config.css_minifier)
        self.js_minifier = js_minifier or load_callable(config.js_minifier)

    # ------------- Nommage -----------------

    def filename(self, entries: Iterable[AssetEntry], kind: str) -> str:
        payload = _json_stable([e.as_dict() for e in entries])
        c = self.config
        raw = payload + _flag(c.js_minify) + _flag(c.css_minify) + _flag(c.css_rewrite)
        return f"{_short_hex(sha256(raw.encode('utf-8')).hexdigest())}.{kind}"

    def output_path(self, filename: str) -> Path:
        if self.config.pipeline_dir is None:
            raise AssetsConfigurationError("Assets: PIPELINE_DIR is not configured")
        return self.config.pipeline_dir / filename

    def output_url(self, filename: str) -> str:
        base = self.config.pipeline_url
        if not base:
            dirname = self.config.pipeline_dir.name if self.config.pipeline_dir else ""
            base = f"{self.config.base_url}{dirname}/" if dirname else self.config.base_url
        if not base.endswith("/"):
            base += "/"
        return f"{base}{filename}"

    # ------------- Build -----------------

    def build(self, entries: List[AssetEntry], kind: str) -> str:
        """
        ``entries``: liste complète, déjà triée (exclus compris, ils comptent
        dans le hash). Retourne l'URL du bundle avec la clé de cache-busting.
        """
        filename = self.filename(entries, kind)
        target = self.output_path(filename)
        url = f"{self.output_url(filename)}?{self.cache_key()}"

        if target.exists():
            log.debug("Pipeline %s cache hit: %s", kind, filename)
            return url

        if not target.parent.is_dir():
            raise AssetsConfigurationError(f"Assets: pipeline directory not found ({target.parent})")

        included, _excluded = partition(entries)
        if kind == CSS:
            buffer = self.gather(included, CSS)
            if css_minify_enabled(self.config.css_minify, self.config.css_minify_windows):
                buffer = self.css_minifier(buffer)
        else:
            buffer = self.gather(included, JS)
            if self.config.js_minify:
                buffer = self.js_minifier(buffer)

        _atomic_write(target, buffer.encode("utf-8"))
        log.info("Pipeline %s generated: %s (%d assets, %d bytes)", kind, filename, len(included), len(buffer))
        return url

    def _local_relative_path(self, link: str) -> str:
        base = self.config.base_url
        path = link.split("?", 1)[0].split("#", 1)[0]
        if base != "/" and path.startswith(base):
            return "/" + path[len(base):]
        return "/" + path.lstrip("/")

    def gather(self, entries: Iterable[AssetEntry], kind: str) -> str:
        """Concatène le contenu des assets, dans l'ordre reçu."""
        chunks: List[str] = []
        for entry in entries:
            link = entry.asset
            local = not is_remote_link(link)
            relative_dir = "/"
            if local:
                relative_path = self._local_relative_path(link)
                relative_dir = os.path.dirname(relative_path) or "/"
                root = self.config.root_dir or Path(".")
                source = str(root / relative_path.lstrip("/"))
            else:
                source = link

            content = self.fetch(source)

            if kind == JS:
                content = content.rstrip(" ;") + ";"
            elif local and self.config.css_rewrite:
                content = css_tools.rewrite(content, relative_dir, self.config.base_url)
            chunks.append(content)

        buffer = "".join(chunks)
        if kind == CSS:
            buffer = css_tools.hoist_imports(buffer)
        return buffer
