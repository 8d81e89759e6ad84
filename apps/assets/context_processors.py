# apps/assets/context_processors.py
from __future__ import annotations


def assets(request):
    """Expose le registre de la requête sous ``{{ assets }}`` dans les templates."""
    registry = getattr(request, "assets", None)
    if registry is None:
        return {}
    return {"assets": registry}
