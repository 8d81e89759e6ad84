from __future__ import annotations

from django.test import SimpleTestCase

from apps.assets.html import build_attributes, inline_block
from apps.assets.registry import AssetRegistry

from .helpers import make_settings


class BuildAttributesTest(SimpleTestCase):
    def test_numeric_keys_become_boolean_attributes(self) -> None:
        self.assertEqual(build_attributes({0: "async"}), ' async="async"')

    def test_list_values_joined_and_escaped(self) -> None:
        out = build_attributes({"class": ["a", "b"], "data-x": 'say "hi" & <go>'})
        self.assertEqual(out, ' class="a b" data-x="say &quot;hi&quot; &amp; &lt;go&gt;"')


class RenderTest(SimpleTestCase):
    def setUp(self) -> None:
        self.reg = AssetRegistry(make_settings())

    def test_empty_registry_renders_none(self) -> None:
        self.assertIsNone(self.reg.css())
        self.assertIsNone(self.reg.js())

    def test_inline_only_still_renders_none(self) -> None:
        self.reg.add_inline_css("a{}")
        self.assertIsNone(self.reg.css())

    def test_css_tags(self) -> None:
        self.reg.add_css("css/a.css").add_css("https://cdn.example.com/b.css", priority=20)
        self.assertEqual(
            self.reg.css(),
            '<link href="https://cdn.example.com/b.css" type="text/css" rel="stylesheet" />\n'
            '<link href="/static/css/a.css" type="text/css" rel="stylesheet" />\n',
        )

    def test_css_attributes_override_defaults(self) -> None:
        self.reg.add_css("css/a.css")
        self.assertEqual(
            self.reg.css({"rel": "preload", "media": "print"}),
            '<link href="/static/css/a.css" type="text/css" rel="preload" media="print" />\n',
        )

    def test_js_tags_with_inline_block(self) -> None:
        self.reg.add_js("js/a.js").add_inline_js("a();").add_inline_js("b();")
        self.assertEqual(
            self.reg.js({0: "defer"}),
            '<script src="/static/js/a.js" type="text/javascript" defer="defer" ></script>\n'
            "<script>\na();\nb();\n</script>\n",
        )

    def test_inline_css_block(self) -> None:
        self.reg.add_css("css/a.css").add_inline_css("body{margin:0}")
        self.assertTrue(self.reg.css().endswith("<style>\nbody{margin:0}\n</style>\n"))

    def test_inline_block_empty(self) -> None:
        self.assertEqual(inline_block("style", []), "")
