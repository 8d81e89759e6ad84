from __future__ import annotations

import tempfile
from pathlib import Path

from django.core.cache import cache
from django.test import SimpleTestCase

from apps.assets.cache import bump_cache_key, cache_key
from apps.assets.exceptions import ResourceNotFound
from apps.assets.locator import ResourceLocator


class ResourceLocatorTest(SimpleTestCase):
    def test_plain_paths_pass_through(self) -> None:
        self.assertEqual(ResourceLocator().find_resource("/css/a.css"), "/css/a.css")

    def test_stream_resolution(self) -> None:
        loc = ResourceLocator({"theme": "/themes/default/"})
        self.assertEqual(loc.find_resource("theme://css/a.css"), "themes/default/css/a.css")

    def test_unknown_stream(self) -> None:
        with self.assertRaises(ResourceNotFound):
            ResourceLocator({"theme": "themes/default"}).find_resource("plugin://a.css")

    def test_strict_mode_checks_existence(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "themes" / "default" / "css").mkdir(parents=True)
            (root / "themes" / "default" / "css" / "a.css").write_text("", encoding="utf-8")
            loc = ResourceLocator({"theme": "themes/default"}, root, strict=True)
            self.assertEqual(loc.find_resource("theme://css/a.css"), "themes/default/css/a.css")
            with self.assertRaises(ResourceNotFound):
                loc.find_resource("theme://css/b.css")


class CacheKeyTest(SimpleTestCase):
    def setUp(self) -> None:
        cache.clear()

    def test_fixed_key_wins(self) -> None:
        self.assertEqual(cache_key("v42"), "v42")

    def test_key_is_stable_until_bumped(self) -> None:
        first = cache_key()
        self.assertTrue(first)
        self.assertEqual(cache_key(), first)
        bumped = bump_cache_key()
        self.assertNotEqual(bumped, first)
        self.assertEqual(cache_key(), bumped)
