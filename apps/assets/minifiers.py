"""Pluggable CSS/JS minifiers.

Any callable ``(str) -> str`` referenced by ``ASSETS["CSS_MINIFIER"]`` /
``ASSETS["JS_MINIFIER"]`` can replace these defaults.
"""

from __future__ import annotations

import platform
from typing import Callable

from django.utils.module_loading import import_string
from rcssmin import cssmin
from rjsmin import jsmin

from .exceptions import AssetsConfigurationError

Minifier = Callable[[str], str]


def minify_css(content: str) -> str:
    return cssmin(content)


def minify_js(content: str) -> str:
    return jsmin(content)


def load_callable(dotted: str) -> Callable:
    try:
        func = import_string(dotted)
    except ImportError as exc:
        raise AssetsConfigurationError(f"Cannot import {dotted!r}: {exc}") from exc
    if not callable(func):
        raise AssetsConfigurationError(f"{dotted!r} is not callable")
    return func


def is_windows_host() -> bool:
    return platform.system().lower().startswith("win")


def css_minify_enabled(css_minify: bool, css_minify_windows: bool) -> bool:
    """
    La minification CSS est coupée sur un hôte Windows sauf si
    ``CSS_MINIFY_WINDOWS`` l'autorise explicitement.
    """
    if not css_minify:
        return False
    if is_windows_host() and not css_minify_windows:
        return False
    return True
