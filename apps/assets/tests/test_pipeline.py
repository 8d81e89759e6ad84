from __future__ import annotations

import tempfile
from pathlib import Path
from unittest.mock import patch

from django.test import SimpleTestCase

from apps.assets.exceptions import AssetFetchError
from apps.assets.fetch import default_fetch
from apps.assets.pipeline import PipelineBuilder
from apps.assets.registry import AssetRegistry

from .helpers import make_settings, write_tree

SITE_CSS = (
    "@import url(\"fonts.css\");\n"
    "body{background:url(../img/bg.png)}\n"
    "/*# sourceMappingURL=site.css.map */\n"
)
PRINT_CSS = "@import 'print-extra.css';\n.p{color:red}\n"


class PipelineTestCase(SimpleTestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        write_tree(self.root, {
            "css/site.css": SITE_CSS,
            "css/print.css": PRINT_CSS,
            "js/a.js": "var a = 1;;  ",
            "js/b.js": "var b = 2",
        })
        (self.root / "assets").mkdir()

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def registry(self, **overrides) -> AssetRegistry:
        opts = dict(css_pipeline=True, js_pipeline=True, css_minify=False, js_minify=False)
        opts.update(overrides)
        return AssetRegistry(make_settings(self.root, **opts))

    def bundle_path(self, html: str) -> Path:
        href = html.split('"', 2)[1]
        name = href.split("?", 1)[0].rsplit("/", 1)[-1]
        return self.root / "assets" / name


class CssPipelineTest(PipelineTestCase):
    def test_bundle_url_and_content(self) -> None:
        reg = self.registry()
        reg.add_css(["css/site.css", "css/print.css"])
        html = reg.css()

        self.assertRegex(html, r'^<link href="/static/assets/[0-9a-f]{32}\.css\?k1" type="text/css" rel="stylesheet" />\n$')
        content = self.bundle_path(html).read_text(encoding="utf-8")
        self.assertTrue(content.startswith(
            "@import url(\"/static/css/fonts.css\");\n@import 'print-extra.css';\n\n"
        ))
        self.assertIn("body{background:url(/static/img/bg.png)}", content)
        self.assertNotIn("sourceMappingURL", content)
        self.assertIn(".p{color:red}", content)
        self.assertLess(content.index("body{"), content.index(".p{"))

    def test_rewrite_disabled(self) -> None:
        reg = self.registry(css_rewrite=False)
        reg.add_css("css/site.css")
        content = self.bundle_path(reg.css()).read_text(encoding="utf-8")
        self.assertIn("url(../img/bg.png)", content)

    def test_same_list_same_file_and_no_regeneration(self) -> None:
        first = self.registry()
        first.add_css(["css/site.css", "css/print.css"])
        html_first = first.css()
        bundle = self.bundle_path(html_first)
        bundle.write_text("cached", encoding="utf-8")

        second = self.registry()
        second.add_css(["css/site.css", "css/print.css"])
        self.assertEqual(second.css(), html_first)
        self.assertEqual(bundle.read_text(encoding="utf-8"), "cached")

    def test_flags_change_filename(self) -> None:
        a = self.registry()
        a.add_css("css/site.css")
        b = self.registry(js_minify=True)
        b.add_css("css/site.css")
        self.assertNotEqual(self.bundle_path(a.css()).name, self.bundle_path(b.css()).name)

    def test_excluded_and_remote_assets_rendered_separately(self) -> None:
        fetched = []

        def fake_fetch(link: str) -> str:
            fetched.append(link)
            if link.startswith("https://"):
                return "r{background:url(img/remote.png)}"
            return default_fetch(link)

        reg = AssetRegistry(
            make_settings(self.root, css_pipeline=True, css_minify=False),
            fetch=fake_fetch,
        )
        reg.add_css("css/site.css")
        reg.add_css("css/print.css", pipeline=False)
        reg.add_css("https://cdn.example.com/lib.css")
        reg.add_css("//cdn.example.com/skip.css", pipeline=False)
        html = reg.css()

        lines = html.strip().split("\n")
        self.assertEqual(len(lines), 3)
        self.assertIn("/static/assets/", lines[0])
        self.assertIn('href="/static/css/print.css"', lines[1])
        self.assertIn('href="//cdn.example.com/skip.css"', lines[2])

        content = self.bundle_path(html).read_text(encoding="utf-8")
        self.assertIn("r{background:url(img/remote.png)}", content)
        self.assertIn("https://cdn.example.com/lib.css", fetched)
        self.assertNotIn("//cdn.example.com/skip.css", fetched)
        self.assertEqual(len(reg.get_css()), 4)

    def test_css_minifier_applied(self) -> None:
        reg = AssetRegistry(
            make_settings(self.root, css_pipeline=True),
            css_minifier=lambda s: "/*min*/" + s,
        )
        reg.add_css("css/print.css")
        self.assertTrue(self.bundle_path(reg.css()).read_text(encoding="utf-8").startswith("/*min*/"))

    def test_css_minify_skipped_on_windows_unless_allowed(self) -> None:
        with patch("apps.assets.minifiers.platform.system", return_value="Windows"):
            reg = AssetRegistry(
                make_settings(self.root, css_pipeline=True),
                css_minifier=lambda s: "/*min*/" + s,
            )
            reg.add_css("css/print.css")
            self.assertFalse(self.bundle_path(reg.css()).read_text(encoding="utf-8").startswith("/*min*/"))

            allowed = AssetRegistry(
                make_settings(self.root, css_pipeline=True, css_minify_windows=True, css_rewrite=False),
                css_minifier=lambda s: "/*min*/" + s,
            )
            allowed.add_css("css/print.css")
            self.assertTrue(self.bundle_path(allowed.css()).read_text(encoding="utf-8").startswith("/*min*/"))

    def test_fetch_failure_raises_and_writes_nothing(self) -> None:
        reg = self.registry()
        reg.add_css("css/missing.css")
        with self.assertRaises(AssetFetchError):
            reg.css()
        self.assertEqual(list((self.root / "assets").iterdir()), [])

    def test_byte_order_mark_dropped_from_each_file(self) -> None:
        write_tree(self.root, {"css/a.css": "a{color:red}", "css/bom.css": "﻿b{color:blue}"})
        reg = self.registry()
        reg.add_css(["css/a.css", "css/bom.css"])
        content = self.bundle_path(reg.css()).read_text(encoding="utf-8")
        self.assertEqual(content, "a{color:red}b{color:blue}")

    def test_pipeline_url_override(self) -> None:
        reg = self.registry(pipeline_url="https://static.example.com/bundles")
        reg.add_css("css/print.css")
        self.assertIn('href="https://static.example.com/bundles/', reg.css())


class JsPipelineTest(PipelineTestCase):
    def test_chunks_end_with_semicolon(self) -> None:
        reg = self.registry()
        reg.add_js(["js/a.js", "js/b.js"])
        html = reg.js()
        self.assertRegex(html, r'^<script src="/static/assets/[0-9a-f]{32}\.js\?k1" type="text/javascript" ></script>\n$')
        self.assertEqual(self.bundle_path(html).read_text(encoding="utf-8"), "var a = 1;var b = 2;")

    def test_default_minifier(self) -> None:
        reg = self.registry(js_minify=True)
        reg.add_js("js/b.js")
        self.assertEqual(self.bundle_path(reg.js()).read_text(encoding="utf-8"), "var b=2;")

    def test_inline_js_rendered_after_bundle(self) -> None:
        reg = self.registry()
        reg.add_js("js/a.js").add_inline_js("boot();")
        self.assertTrue(reg.js().endswith("</script>\n<script>\nboot();\n</script>\n"))

    def test_all_excluded_renders_no_bundle(self) -> None:
        reg = self.registry()
        reg.add_js("js/a.js", pipeline=False)
        self.assertEqual(reg.js(), '<script src="/static/js/a.js" type="text/javascript" ></script>\n')
        self.assertEqual(list((self.root / "assets").iterdir()), [])


class BuilderNamingTest(SimpleTestCase):
    def test_filename_is_pure_function_of_entries_and_flags(self) -> None:
        cfg = make_settings()
        a = AssetRegistry(cfg).add_css(["css/a.css", "css/b.css"])
        b = AssetRegistry(cfg).add_css(["css/a.css", "css/b.css"])
        builder = PipelineBuilder(cfg, cache_key=lambda: "x")
        name_a = builder.filename(a.sorted_entries("css"), "css")
        self.assertEqual(name_a, builder.filename(b.sorted_entries("css"), "css"))
        self.assertTrue(name_a.endswith(".css"))

        other = AssetRegistry(cfg).add_css(["css/b.css", "css/a.css"])
        self.assertNotEqual(name_a, builder.filename(other.sorted_entries("css"), "css"))


class DefaultFetchTest(SimpleTestCase):
    def test_protocol_relative_fetched_over_http(self) -> None:
        with patch("apps.assets.fetch.requests.get") as get:
            get.return_value.text = "x();"
            get.return_value.content = b"x();"
            self.assertEqual(default_fetch("//cdn.example.com/a.js", timeout=3), "x();")
        get.assert_called_once_with("http://cdn.example.com/a.js", timeout=3)

    def test_missing_local_file(self) -> None:
        with self.assertRaises(AssetFetchError):
            default_fetch("/nonexistent/path/a.js")
