# apps/assets/scanner.py
from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Iterable, List, Optional, Pattern, Union

DEFAULT_REGEX = re.compile(r".\.(css|js)$", re.IGNORECASE)
CSS_REGEX = re.compile(r".\.css$", re.IGNORECASE)
JS_REGEX = re.compile(r".\.js$", re.IGNORECASE)


def _compile(pattern: Union[str, Pattern[str]]) -> Pattern[str]:
    if isinstance(pattern, str):
        return re.compile(pattern)
    return pattern


def _is_under(path: Path, parents: List[Path]) -> bool:
    return any(path.is_relative_to(p) for p in parents)


def rglob(
    directory: Union[str, Path],
    pattern: Union[str, Pattern[str]] = DEFAULT_REGEX,
    ltrim: Optional[Union[str, Path]] = None,
    exclude: Iterable[Union[str, Path]] = (),
) -> List[str]:
    """
    Fichiers sous ``directory`` (récursif, ordre trié) dont le chemin complet
    matche ``pattern``; ``ltrim`` est retiré du début de chaque chemin et les
    séparateurs sont normalisés en ``/``. Les dossiers de ``exclude`` (et leur
    contenu) ne sont pas parcourus.
    """
    regex = _compile(pattern)
    root = Path(directory)
    if not root.is_dir():
        return []

    skipped = [Path(p).resolve() for p in exclude if p]
    prefix = str(ltrim) if ltrim is not None else ""
    files: List[str] = []
    for dirpath, dirnames, filenames in os.walk(root):
        if skipped and _is_under(Path(dirpath).resolve(), skipped):
            dirnames[:] = []
            continue
        dirnames.sort()
        for name in sorted(filenames):
            full = os.path.join(dirpath, name)
            if not regex.search(full):
                continue
            rel = full[len(prefix):] if prefix and full.startswith(prefix) else full
            files.append(rel.replace(os.sep, "/"))
    return files
