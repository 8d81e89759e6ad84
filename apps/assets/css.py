# apps/assets/css.py
from __future__ import annotations

import posixpath
import re
from typing import List, Tuple

# url(...) relatifs: ni http(s), ni protocol-relative
# forme quotée (espaces permis) ou nue
CSS_URL_RE = re.compile(
    r"""url\(\s*(?:(['"])((?!http|//)[^'"]*)\1|((?!http|//)[^'")\s]*))\s*\)"""
)
CSS_SOURCEMAP_RE = re.compile(r"/\*#\s*source(?:Mapping)?URL=[^*]*\*/")
CSS_IMPORT_RE = re.compile(r"@import(.*?);")


def strip_sourcemaps(content: str) -> str:
    return CSS_SOURCEMAP_RE.sub("", content)


def _absolute_url(old_url: str, relative_dir: str, base_url: str) -> str:
    directory = relative_dir or "/"
    kept: List[str] = []
    for segment in old_url.split("/"):
        if segment == "..":
            directory = posixpath.dirname(directory.rstrip("/")) or "/"
        else:
            kept.append(segment)
    return f"{base_url.rstrip('/')}{directory.rstrip('/')}/{'/'.join(kept)}"


def rewrite_urls(content: str, relative_dir: str, base_url: str) -> str:
    """
    Réécrit les ``url(...)`` relatifs d'une feuille locale en chemins absolus
    préfixés par ``base_url``. ``relative_dir`` est le dossier de la feuille
    relatif à la racine des assets (ex. ``/css``); chaque ``..`` remonte d'un
    niveau.
    """

    def _sub(match: re.Match) -> str:
        group = 2 if match.group(2) is not None else 3
        old_url = match.group(group)
        if not old_url or old_url.startswith(("data:", "/", "#")):
            return match.group(0)
        whole, offset = match.group(0), match.start()
        start, end = match.start(group) - offset, match.end(group) - offset
        return whole[:start] + _absolute_url(old_url, relative_dir, base_url) + whole[end:]

    return CSS_URL_RE.sub(_sub, content)


def rewrite(content: str, relative_dir: str, base_url: str) -> str:
    return rewrite_urls(strip_sourcemaps(content), relative_dir, base_url)


def extract_imports(content: str) -> Tuple[List[str], str]:
    imports: List[str] = []

    def _grab(match: re.Match) -> str:
        imports.append(match.group(0))
        return ""

    rest = CSS_IMPORT_RE.sub(_grab, content)
    return imports, rest


def hoist_imports(content: str) -> str:
    """Les ``@import`` doivent précéder toute autre règle: on les remonte, ordre conservé."""
    imports, rest = extract_imports(content)
    if not imports:
        return content
    return "\n".join(imports) + "\n\n" + rest
