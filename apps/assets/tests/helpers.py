from __future__ import annotations

from pathlib import Path
from typing import Dict

from apps.assets.conf import AssetsSettings


def write_tree(root: Path, files: Dict[str, str]) -> Path:
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


def make_settings(root: Path | None = None, **overrides) -> AssetsSettings:
    """Config de test: clé de cache fixe, pas de pipeline sauf demande explicite."""
    base = dict(
        base_url="/static/",
        root_dir=root,
        pipeline_dir=(root / "assets") if root is not None else None,
        cache_key="k1",
        streams={"theme": "themes/default"},
    )
    base.update(overrides)
    return AssetsSettings(**base)
