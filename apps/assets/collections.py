# apps/assets/collections.py
from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Sequence

from .exceptions import CollectionCycleError


class CollectionSet:
    """
    Collections nommées d'assets. Une collection peut citer d'autres
    collections par leur nom; l'expansion est récursive et refuse les cycles.
    """

    def __init__(self, collections: Optional[Mapping[str, Sequence[str]]] = None) -> None:
        self._collections: Dict[str, List[str]] = {}
        for name, assets in (collections or {}).items():
            self.register(name, assets)

    def register(self, name: str, assets: Iterable[str]) -> None:
        if isinstance(assets, str):
            assets = [assets]
        self._collections[str(name)] = [str(a) for a in assets]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name in self._collections

    def __len__(self) -> int:
        return len(self._collections)

    def names(self) -> List[str]:
        return list(self._collections.keys())

    def get(self, name: str) -> List[str]:
        return list(self._collections.get(name, []))

    def as_dict(self) -> Dict[str, List[str]]:
        return {k: list(v) for k, v in self._collections.items()}

    def expand(self, name: str) -> List[str]:
        """Liste plate des assets d'une collection, dans l'ordre déclaré."""
        return list(self._walk(name, []))

    def _walk(self, name: str, stack: List[str]) -> Iterator[str]:
        if name in stack:
            raise CollectionCycleError(stack[stack.index(name):] + [name])
        stack.append(name)
        for item in self._collections.get(name, []):
            if item in self._collections:
                yield from self._walk(item, stack)
            else:
                yield item
        stack.pop()

    def find_cycles(self) -> List[List[str]]:
        """Tous les cycles détectés (utilisé par les system checks)."""
        cycles: List[List[str]] = []
        for name in self._collections:
            try:
                for _ in self._walk(name, []):
                    pass
            except CollectionCycleError as exc:
                if sorted(exc.path[:-1]) not in [sorted(c[:-1]) for c in cycles]:
                    cycles.append(exc.path)
        return cycles
