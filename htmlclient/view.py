"""
View context shared by all clients of one request.

The View is the single data carrier of a render pass. Clients write values
in add_data() that their templates (and the templates of their sub-clients)
read later, and it gives access to the request scoped collaborators:
configuration, translation, links, escaping, blocks and the outgoing mail.
"""

import logging
from typing import Any, Iterable, Optional
from urllib.parse import quote

import bleach
from bleach.css_sanitizer import CSSSanitizer
from django.template.loader import render_to_string
from django.urls import reverse
from django.utils.html import escape
from django.utils.http import urlencode
from django.utils.safestring import SafeString, mark_safe
from django.utils.translation import npgettext, pgettext

from .blocks import BlockRegistry
from .config import ClientConfig, get_config
from .exceptions import ConfigurationError


logger = logging.getLogger(__name__)


# Allowed HTML tags and attributes for trusted content (e.g. product texts
# maintained by shop editors)
ALLOWED_TAGS = [
    'h1', 'h2', 'h3', 'h4', 'h5', 'h6',
    'p', 'br', 'strong', 'em', 'u', 's', 'strike',
    'ul', 'ol', 'li',
    'blockquote', 'code', 'pre',
    'a', 'img', 'hr',
    'table', 'thead', 'tbody', 'tr', 'th', 'td',
    'div', 'span'
]

ALLOWED_ATTRIBUTES = {
    '*': ['class', 'style'],
    'a': ['href', 'title', 'target', 'rel'],
    'img': ['src', 'alt', 'title', 'width', 'height'],
}

ALLOWED_CSS_PROPERTIES = [
    'color', 'background-color', 'font-size', 'font-weight', 'font-style',
    'text-align', 'text-decoration', 'margin', 'padding',
]

css_sanitizer = CSSSanitizer(allowed_css_properties=ALLOWED_CSS_PROPERTIES)


def sanitize_html(html: str) -> str:
    """
    Strip everything from trusted HTML that isn't on the allow list.

    Args:
        html: HTML string to sanitize

    Returns:
        Sanitized HTML string
    """
    if not html:
        return ""

    return bleach.clean(
        html,
        tags=ALLOWED_TAGS,
        attributes=ALLOWED_ATTRIBUTES,
        css_sanitizer=css_sanitizer,
        strip=True
    )


class Encoder:
    """
    Escaping helper for values written into markup.

    TAINT values (user input, request parameters) are always escaped,
    TRUST values (editor maintained texts) keep their allowed markup.
    """

    TAINT = 0
    TRUST = 1

    def html(self, text: Any, trust: int = TAINT) -> SafeString:
        """Encode a value for use as HTML text content."""
        if text is None:
            return mark_safe('')

        if trust == self.TRUST:
            return mark_safe(sanitize_html(str(text)))

        return escape(str(text))

    def attr(self, text: Any, replace: str = '') -> SafeString:
        """Encode a value for use inside an HTML attribute (new lines are replaced)."""
        if text is None:
            return mark_safe('')

        value = str(text).replace('\r', replace).replace('\n', replace)
        return escape(value)

    def url(self, text: Any) -> str:
        """Encode a value for use as a URL path segment."""
        return quote(str(text if text is not None else ''), safe='')


def parse_params(query) -> dict:
    """
    Convert a Django QueryDict into the parameter dictionary of a View.

    Parameters named "name[]" become lists under "name", repeated
    parameters become lists and single parameters stay scalar values.
    """
    params = {}

    for key, values in query.lists():
        if key.endswith('[]'):
            params[key[:-2]] = list(values)
        elif len(values) > 1:
            params[key] = list(values)
        else:
            params[key] = values[-1]

    return params


class View:
    """
    Request-scoped key/value store and capability carrier for clients and templates.

    One View instance is created per request (or per rendered e-mail) and
    passed by reference through the whole client tree.

    Example:
        >>> view = View(request, controllers={'supplier': SupplierController()})
        >>> view.set('supplierList', {...})
        >>> view.param('f_supid', [])
        ['1', '3']
    """

    def __init__(
        self,
        request=None,
        *,
        config: Optional[ClientConfig] = None,
        params: Optional[dict] = None,
        controllers: Optional[dict] = None,
        mail=None,
    ):
        """
        Initialize the view.

        Args:
            request: Current Django request (None when rendering e-mails)
            config: Client configuration, defaults to the process-wide configuration
            params: Request parameters, defaults to the parsed GET parameters of the request
            controllers: Domain collaborators available to the clients by name
            mail: Outgoing message for clients that add attachments
        """
        if params is None:
            params = parse_params(request.GET) if request is not None else {}

        self.request = request
        self._config = config or get_config()
        self._params = params
        self._controllers = dict(controllers or {})
        self._mail = mail
        self._values: dict[str, Any] = {}
        self._blocks = BlockRegistry()
        self._encoder = Encoder()

    def get(self, name: str, default: Any = None) -> Any:
        return self._values.get(name, default)

    def set(self, name: str, value: Any) -> "View":
        self._values[name] = value
        return self

    def has(self, name: str) -> bool:
        return name in self._values

    def values(self) -> dict:
        return dict(self._values)

    def param(self, name: str, default: Any = None) -> Any:
        """Return a request parameter, e.g. a list for "f_supid[]" parameters."""
        return self._params.get(name, default)

    def params(self) -> dict:
        return dict(self._params)

    def config(self, key: str, default: Any = None) -> Any:
        return self._config.get(key, default)

    def translate(self, domain: str, text: str, plural: Optional[str] = None, count: int = 1) -> str:
        """
        Translate a text from the given domain.

        Args:
            domain: Translation domain, e.g. "client" (used as message context)
            text: Singular text
            plural: Optional plural text
            count: Number deciding between singular and plural

        Returns:
            The translated text
        """
        if plural is not None:
            return npgettext(domain, text, plural, count)
        return pgettext(domain, text)

    def link(self, route_key: str, params: Optional[dict] = None) -> str:
        """
        Build the URL for a configured route.

        The route key points to a configuration section containing the Django
        URL name ("target") and an optional mapping of URL arguments to
        parameter names ("args"), e.g.
        "client/html/catalog/tree/url/target" = "catalog-tree" and
        "client/html/catalog/tree/url/args" = {"catid": "f_catid"}.
        Parameters used as URL arguments aren't added to the query string.

        Args:
            route_key: Configuration path of the route
            params: Query parameters appended to the URL

        Returns:
            URL string

        Raises:
            ConfigurationError: If no target is configured for the route
        """
        target = self.config(f"{route_key}/target")
        if not target:
            raise ConfigurationError(f"No URL target configured for '{route_key}'")

        query = {key: value for key, value in (params or {}).items() if value not in (None, '', [])}
        kwargs = {
            argument: query.pop(param_name, None)
            for argument, param_name in (self.config(f"{route_key}/args") or {}).items()
        }

        url = reverse(target, kwargs=kwargs or None)

        if query:
            url = f"{url}?{urlencode(query, doseq=True)}"

        return url

    def formparam(self, names: Iterable[str]) -> str:
        """
        Build the name of a form parameter.

        Example:
            >>> view.formparam(['f_supid', ''])
            'f_supid[]'
            >>> view.formparam(['supplier', 'search'])
            'supplier[search]'
        """
        names = [str(name) for name in names]
        if not names:
            raise ValueError("At least one parameter name is required")

        return names[0] + ''.join(f"[{name}]" for name in names[1:])

    def encoder(self) -> Encoder:
        return self._encoder

    def block(self) -> BlockRegistry:
        return self._blocks

    def mail(self):
        """
        Return the outgoing message of the current e-mail render pass.

        Raises:
            ConfigurationError: If the view doesn't render an e-mail
        """
        if self._mail is None:
            raise ConfigurationError("No outgoing message available in this view")
        return self._mail

    def controller(self, name: str):
        """
        Return a domain collaborator by name.

        Raises:
            ConfigurationError: If no controller with that name was injected
        """
        try:
            return self._controllers[name]
        except KeyError:
            raise ConfigurationError(f"Controller '{name}' is not available") from None

    def template_context(self, values: Optional[dict] = None) -> dict:
        context = dict(self._values)
        context.update(values or {})
        context['view'] = self
        return context

    def render(self, template_name, values: Optional[dict] = None) -> str:
        """
        Render a template with the view values.

        Args:
            template_name: Template path or a list of paths (first existing one is used)
            values: Additional values only visible to this template

        Returns:
            Rendered HTML
        """
        logger.debug(f"Rendering template: {template_name}")
        return render_to_string(template_name, self.template_context(values))

    def partial(self, template_name, values: Optional[dict] = None) -> str:
        """Render a partial template that only sees the given values and the view."""
        context = dict(values or {})
        context['view'] = self
        return render_to_string(template_name, context)
