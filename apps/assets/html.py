# apps/assets/html.py
from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional

from django.utils.html import escape, format_html
from django.utils.safestring import SafeString, mark_safe

CSS_DEFAULT_ATTRS = {"type": "text/css", "rel": "stylesheet"}
JS_DEFAULT_ATTRS = {"type": "text/javascript"}


def merge_attributes(defaults: Mapping[Any, Any], attributes: Optional[Mapping[Any, Any]]) -> dict:
    merged = dict(defaults)
    for key, value in (attributes or {}).items():
        merged[key] = value
    return merged


def build_attributes(attributes: Mapping[Any, Any]) -> SafeString:
    """
    Sérialise un dict en attributs HTML (préfixés d'un espace).

    - clé entière: la valeur est un attribut booléen (``async="async"``)
    - valeur list/tuple: jointe par des espaces
    - toutes les valeurs sont échappées
    """
    parts = []
    for key, value in attributes.items():
        if isinstance(key, int):
            key = value
        if isinstance(value, (list, tuple)):
            value = " ".join(str(v) for v in value)
        if value is None:
            value = ""
        parts.append(f' {escape(key)}="{escape(value)}"')
    return mark_safe("".join(parts))


def link_tag(href: str, attrs: SafeString) -> SafeString:
    return format_html('<link href="{}"{} />\n', href, attrs)


def script_tag(src: str, attrs: SafeString) -> SafeString:
    return format_html('<script src="{}"{} ></script>\n', src, attrs)


def inline_block(tag: str, chunks: Iterable[str]) -> SafeString:
    """Bloc inline brut (non échappé): le code vient du serveur, pas de l'utilisateur."""
    chunks = list(chunks)
    if not chunks:
        return mark_safe("")
    body = "".join(f"{chunk}\n" for chunk in chunks)
    return mark_safe(f"<{tag}>\n{body}</{tag}>\n")
