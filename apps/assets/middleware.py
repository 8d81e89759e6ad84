from __future__ import annotations

from .registry import AssetRegistry


class AssetsMiddleware:
    """Attache un registre d'assets neuf à chaque requête (``request.assets``)."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request.assets = AssetRegistry.from_settings()
        return self.get_response(request)
