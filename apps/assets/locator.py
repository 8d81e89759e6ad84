# apps/assets/locator.py
from __future__ import annotations

import re
from pathlib import Path, PurePosixPath
from typing import Mapping, Optional

from .exceptions import ResourceNotFound

_STREAM_RE = re.compile(r"^(?P<scheme>[a-zA-Z][a-zA-Z0-9+.-]*)://(?P<path>.*)$")


class ResourceLocator:
    """
    Résout les URIs de flux (``theme://css/site.css``) en chemins relatifs à
    ``root_dir``. Les chemins simples sont rendus tels quels.

    ``strict=True`` exige en plus que le fichier existe sous ``root_dir``.
    """

    def __init__(
        self,
        streams: Optional[Mapping[str, str]] = None,
        root_dir: Optional[Path] = None,
        *,
        strict: bool = False,
    ) -> None:
        self.streams = {k: str(v).strip("/") for k, v in (streams or {}).items()}
        self.root_dir = Path(root_dir) if root_dir else None
        self.strict = strict

    def find_resource(self, uri: str) -> str:
        match = _STREAM_RE.match(uri)
        if not match:
            rel = uri
        else:
            scheme = match.group("scheme")
            if scheme not in self.streams:
                raise ResourceNotFound(f"Unknown stream '{scheme}://' for {uri}")
            prefix = self.streams[scheme]
            tail = match.group("path").lstrip("/")
            rel = str(PurePosixPath(prefix) / tail) if prefix else tail

        if self.strict:
            if self.root_dir is None:
                raise ResourceNotFound(f"No root directory to look up {uri}")
            if not (self.root_dir / rel.lstrip("/")).is_file():
                raise ResourceNotFound(f"Resource {uri} not found under {self.root_dir}")
        return rel
