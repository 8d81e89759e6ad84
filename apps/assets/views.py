from __future__ import annotations

from django.http import FileResponse, Http404

from .conf import get_settings
from .pipeline import BUNDLE_RE


def bundle_view(_request, name: str) -> FileResponse:
    """
    Sert un bundle de ``ASSETS["PIPELINE_DIR"]``. Utile quand les bundles sont
    écrits après le démarrage: WhiteNoise ne les a pas indexés.
    """
    if not BUNDLE_RE.match(name):
        raise Http404("Unknown bundle")
    target = get_settings().pipeline_dir
    path = target / name if target is not None else None
    if path is None or not path.is_file():
        raise Http404("Unknown bundle")
    response = FileResponse(open(path, "rb"))
    # l'URL porte la clé de cache-busting en query-string
    response["Cache-Control"] = "public, max-age=31536000"
    return response
