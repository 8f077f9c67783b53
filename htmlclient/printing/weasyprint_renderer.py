"""
WeasyPrint adapter for the printing package.

WeasyPrint is loaded when the first renderer is created, so the project
still starts on hosts where its system libraries (Pango) are missing and
another renderer is configured in HTML_CLIENT_PDF_RENDERER.
"""

from functools import lru_cache
from typing import Iterable, Optional
import logging

from django.core.exceptions import ImproperlyConfigured

from .interfaces import IPdfRenderer


logger = logging.getLogger(__name__)


@lru_cache(maxsize=None)
def load_weasyprint():
    """Return the weasyprint module, None if it can't be loaded on this host."""
    try:
        import weasyprint
    except (ImportError, OSError) as e:
        logger.warning(f"WeasyPrint can't be loaded: {e}")
        return None
    return weasyprint


class WeasyPrintRenderer(IPdfRenderer):
    """
    Renders the client HTML with WeasyPrint.

    The shop stylesheets from HTML_CLIENT_PDF_STYLESHEETS are applied after
    the styles of the document, fonts declared with @font-face in either of
    them are embedded.
    """

    def __init__(self, stylesheets: Optional[Iterable[str]] = None, presentational_hints: bool = True):
        self.engine = load_weasyprint()
        if self.engine is None:
            raise ImproperlyConfigured(
                "HTML_CLIENT_PDF_RENDERER uses WeasyPrint, but it can't be loaded. "
                "Install weasyprint and its system libraries or configure another renderer."
            )

        self.stylesheets = list(stylesheets or [])
        self.presentational_hints = presentational_hints

    def render_html_to_pdf(self, html: str, base_url: str) -> bytes:
        from weasyprint.text.fonts import FontConfiguration

        font_config = FontConfiguration()
        stylesheets = [self.engine.CSS(filename=path, font_config=font_config) for path in self.stylesheets]

        document = self.engine.HTML(string=html, base_url=base_url or None)
        data = document.write_pdf(
            stylesheets=stylesheets,
            font_config=font_config,
            presentational_hints=self.presentational_hints,
        )

        logger.debug(f"WeasyPrint rendered {len(data)} bytes with {len(stylesheets)} stylesheet(s)")
        return data
