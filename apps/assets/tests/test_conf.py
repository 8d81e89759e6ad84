from __future__ import annotations

import tempfile
from pathlib import Path

from django.test import SimpleTestCase, override_settings

from apps.assets.conf import build_settings, get_settings, load_collections_file
from apps.assets.exceptions import AssetsConfigurationError

COLLECTIONS_YAML = """
collections:
  forms:
    - css/forms.css
    - js/forms.js
  base: css/base.css
"""


class ConfTest(SimpleTestCase):
    def test_defaults(self) -> None:
        cfg = build_settings({})
        self.assertFalse(cfg.css_pipeline)
        self.assertTrue(cfg.css_minify)
        self.assertTrue(cfg.css_rewrite)
        self.assertFalse(cfg.css_minify_windows)
        self.assertEqual(cfg.fetch_command, "apps.assets.fetch.default_fetch")

    def test_base_url_gets_trailing_slash(self) -> None:
        self.assertEqual(build_settings({"BASE_URL": "/static"}).base_url, "/static/")

    def test_string_flags_are_parsed(self) -> None:
        cfg = build_settings({"JS_MINIFY": "off", "CSS_PIPELINE": "yes"})
        self.assertFalse(cfg.js_minify)
        self.assertTrue(cfg.css_pipeline)

    def test_collections_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "collections.yml"
            path.write_text(COLLECTIONS_YAML, encoding="utf-8")
            self.assertEqual(
                load_collections_file(path),
                {"forms": ["css/forms.css", "js/forms.js"], "base": ["css/base.css"]},
            )
            cfg = build_settings({"COLLECTIONS_FILE": str(path), "COLLECTIONS": {"base": ["css/override.css"]}})
            self.assertEqual(cfg.collections["base"], ["css/override.css"])
            self.assertIn("forms", cfg.collections)

    def test_missing_collections_file(self) -> None:
        with self.assertRaises(AssetsConfigurationError):
            build_settings({"COLLECTIONS_FILE": "/definitely/not/here.yml"})

    @override_settings(ASSETS={"CACHE_KEY": "abc", "AUTOLOAD": "css/one.css"})
    def test_get_settings_reads_django_settings(self) -> None:
        cfg = get_settings()
        self.assertEqual(cfg.cache_key, "abc")
        self.assertEqual(cfg.autoload, ["css/one.css"])
