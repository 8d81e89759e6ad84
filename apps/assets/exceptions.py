"""Custom exceptions for the assets domain."""
from __future__ import annotations


class AssetsError(Exception):
    """Base class for asset registry and pipeline errors."""


class AssetsConfigurationError(AssetsError):
    """Raised when a required directory or dotted path is misconfigured."""


class ResourceNotFound(AssetsError):
    """Raised by the locator when a resource URI cannot be resolved."""


class CollectionCycleError(AssetsError):
    """Raised when a collection references itself, directly or transitively."""

    def __init__(self, path: list[str]) -> None:
        self.path = list(path)
        super().__init__("Collection cycle: " + " -> ".join(self.path))


class AssetFetchError(AssetsError):
    """Raised when the content of an asset cannot be fetched for pipelining."""

    def __init__(self, link: str, reason: str) -> None:
        self.link = link
        super().__init__(f"Cannot fetch asset {link}: {reason}")
