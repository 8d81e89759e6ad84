from __future__ import annotations

from django import template

from apps.assets.entries import CSS, JS
from apps.assets.registry import AssetRegistry

register = template.Library()


def _registry(context) -> AssetRegistry:
    """
    Registre de la requête si le middleware est actif, sinon un registre
    rattaché au contexte de rendu (premier niveau) pour la durée du rendu.
    """
    request = context.get("request")
    registry = getattr(request, "assets", None) if request is not None else None
    if registry is None:
        registry = context.get("assets")
    if registry is None:
        registry = AssetRegistry.from_settings()
        context.dicts[0]["assets"] = registry
    return registry


def _attributes(flags, attrs) -> dict:
    out = dict(attrs)
    for i, flag in enumerate(flags):
        out[i] = flag
    return out


@register.simple_tag(takes_context=True)
def add_asset(context, asset, priority=10, pipeline=True):
    """
    Usage : {% add_asset "theme://css/site.css" priority=20 %}
    Accepte aussi un nom de collection.
    """
    _registry(context).add(asset, priority=priority, pipeline=pipeline)
    return ""


@register.simple_tag(takes_context=True)
def add_css(context, asset, priority=10, pipeline=True):
    _registry(context).add_css(asset, priority=priority, pipeline=pipeline)
    return ""


@register.simple_tag(takes_context=True)
def add_js(context, asset, priority=10, pipeline=True):
    _registry(context).add_js(asset, priority=priority, pipeline=pipeline)
    return ""


class InlineCodeNode(template.Node):
    """Code inline: argument unique, ou contenu du bloc rendu avec le contexte."""

    def __init__(self, kind: str, code=None, nodelist=None):
        self.kind = kind
        self.code = code
        self.nodelist = nodelist

    def render(self, context) -> str:
        if self.code is not None:
            code = self.code.resolve(context)
        else:
            code = self.nodelist.render(context).strip()
        if code:
            registry = _registry(context)
            if self.kind == CSS:
                registry.add_inline_css(str(code))
            else:
                registry.add_inline_js(str(code))
        return ""


def _inline_tag(kind: str):
    def compile_tag(parser, token):
        """
        Usage : {% add_inline_js "boot();" %}
        ou     : {% add_inline_js %}...{% end_add_inline_js %}
        """
        bits = token.split_contents()
        if len(bits) > 2:
            raise template.TemplateSyntaxError(f"'{bits[0]}' takes at most one argument")
        if len(bits) == 2:
            return InlineCodeNode(kind, code=parser.compile_filter(bits[1]))
        nodelist = parser.parse((f"end_{bits[0]}",))
        parser.delete_first_token()
        return InlineCodeNode(kind, nodelist=nodelist)

    return compile_tag


register.tag("add_inline_css", _inline_tag(CSS))
register.tag("add_inline_js", _inline_tag(JS))


@register.simple_tag(takes_context=True)
def assets_css(context, *flags, **attrs):
    """
    Usage : {% assets_css media="screen" %}
    Les arguments positionnels deviennent des attributs booléens.
    """
    return _registry(context).css(_attributes(flags, attrs)) or ""


@register.simple_tag(takes_context=True)
def assets_js(context, *flags, **attrs):
    """Usage : {% assets_js "defer" %} -> ``defer="defer"`` sur chaque balise."""
    return _registry(context).js(_attributes(flags, attrs)) or ""
