"""
Template tags for the HTML client templates.

All tags work on the View of the current render pass, which every client
template receives as "view".

    {% load htmlclient_tags %}
    {% capture "catalog/filter/supplier" uid %}...{% endcapture %}
    {% getblock "catalog/filter/supplier" uid %}
    {% client_link "client/html/catalog/lists/url" params %}
    {% client_config "client/html/catalog/filter/button" True as show_button %}
    {% formparam "f_supid" "" %}
    {% partial "htmlclient/common/partials/media.html" item=media %}
    {{ supplier.name|trusted }}
"""

from django import template
from django.utils.safestring import mark_safe

from htmlclient.view import Encoder

register = template.Library()


def _view(context):
    view = context.get('view')
    if view is None:
        raise template.TemplateSyntaxError("HTML client tags require a 'view' in the template context")
    return view


def _block_name(parts) -> str:
    return '/'.join(str(part) for part in parts if part not in (None, ''))


class CaptureNode(template.Node):
    def __init__(self, name_parts, nodelist):
        self.name_parts = name_parts
        self.nodelist = nodelist

    def render(self, context):
        blocks = _view(context).block()
        name = _block_name(part.resolve(context) for part in self.name_parts)

        with blocks.capture(name):
            blocks.write(self.nodelist.render(context))

        return ''


@register.tag
def capture(parser, token):
    """
    Capture the enclosed output into a named block instead of printing it.

    All arguments are joined by "/" to the block name, empty ones are skipped.
    """
    bits = token.split_contents()
    if len(bits) < 2:
        raise template.TemplateSyntaxError(f"'{bits[0]}' tag requires a block name")

    nodelist = parser.parse(('endcapture',))
    parser.delete_first_token()

    return CaptureNode([parser.compile_filter(bit) for bit in bits[1:]], nodelist)


@register.simple_tag(takes_context=True)
def getblock(context, *name_parts):
    """Print the content captured for a block (empty if nothing was captured)."""
    return mark_safe(_view(context).block().get(_block_name(name_parts)))


@register.simple_tag(takes_context=True)
def client_link(context, route_key, params=None):
    return _view(context).link(route_key, params)


@register.simple_tag(takes_context=True)
def client_config(context, key, default=None):
    return _view(context).config(key, default)


@register.simple_tag(takes_context=True)
def formparam(context, *names):
    return _view(context).formparam(names)


@register.simple_tag(takes_context=True)
def partial(context, template_name, **values):
    return mark_safe(_view(context).partial(template_name, values))


@register.filter
def trusted(value):
    """Print editor maintained HTML, keeping only the allowed markup."""
    return Encoder().html(value, Encoder.TRUST)
