# apps/assets/entries.py
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict, Iterable, List, Tuple

CSS = "css"
JS = "js"
KINDS: Tuple[str, str] = (CSS, JS)

DEFAULT_PRIORITY = 10

_REMOTE_PREFIXES = ("http://", "https://", "//")


@dataclass(frozen=True)
class AssetEntry:
    asset: str
    priority: int = DEFAULT_PRIORITY
    order: int = 0
    pipeline: bool = True

    def as_dict(self) -> Dict[str, object]:
        return asdict(self)


def is_remote_link(link: str) -> bool:
    """``http://``, ``https://`` et les liens protocol-relative ``//``."""
    return str(link).startswith(_REMOTE_PREFIXES)


def kind_for(asset: str) -> str | None:
    """Type d'asset d'après l'extension (insensible à la casse), None sinon."""
    path = str(asset).split("?", 1)[0].split("#", 1)[0]
    name = path.rsplit("/", 1)[-1]
    if "." not in name:
        return None
    ext = name.rsplit(".", 1)[-1].lower()
    if ext == CSS:
        return CSS
    if ext == JS:
        return JS
    return None


def sort_entries(entries: Iterable[AssetEntry]) -> List[AssetEntry]:
    """
    Ordre de rendu: priorité la plus haute d'abord, puis ordre d'insertion
    croissant à priorité égale.
    """
    return sorted(entries, key=lambda e: (-e.priority, e.order))


def partition(entries: Iterable[AssetEntry]) -> Tuple[List[AssetEntry], List[AssetEntry]]:
    """Sépare (pipelinables, exclus) en conservant l'ordre reçu."""
    included: List[AssetEntry] = []
    excluded: List[AssetEntry] = []
    for entry in entries:
        (included if entry.pipeline else excluded).append(entry)
    return included, excluded
