"""
PDF Render Service

Converts HTML produced by the client tree to PDF attachments.
"""

from dataclasses import dataclass
from typing import Optional
import logging

from django.conf import settings
from django.utils.module_loading import import_string

from .interfaces import IPdfRenderer


logger = logging.getLogger(__name__)

DEFAULT_RENDERER = 'htmlclient.printing.weasyprint_renderer.WeasyPrintRenderer'
PDF_CONTENT_TYPE = 'application/pdf'


@dataclass
class PdfAttachment:
    """
    Rendered PDF document ready to be attached to an outgoing message.
    """

    data: bytes
    filename: str
    content_type: str = PDF_CONTENT_TYPE

    def attach_to(self, message) -> None:
        """Add the document to a message providing add_attachment(data, mime_type, filename)."""
        message.add_attachment(self.data, self.content_type, self.filename)


class PdfRenderService:
    """
    Service for the HTML to PDF pipeline.

    The renderer is created from the HTML_CLIENT_PDF_RENDERER setting
    unless one is passed in, so tests and deployments can swap the engine.

    Usage:
        service = PdfRenderService()
        attachment = service.render(html, base_url='file:///srv/shop/static/', filename='order_42.pdf')
        attachment.attach_to(view.mail())
    """

    def __init__(self, renderer: Optional[IPdfRenderer] = None):
        self.renderer = renderer or self._get_default_renderer()

    def render(
        self,
        html: str,
        *,
        base_url: str = '',
        filename: Optional[str] = None
    ) -> PdfAttachment:
        """
        Render an HTML document to a PDF attachment.

        Args:
            html: Complete HTML document
            base_url: Base URL for resolving images and stylesheets
            filename: Attachment name, "document.pdf" if empty

        Returns:
            PdfAttachment with the PDF content

        Raises:
            Exception: If the renderer fails
        """
        filename = filename or 'document.pdf'

        try:
            data = self.renderer.render_html_to_pdf(html, base_url)
        except Exception as e:
            logger.error(f"Failed to render PDF {filename}: {e}", exc_info=True)
            raise

        logger.info(f"Rendered PDF {filename} ({len(data)} bytes)")
        return PdfAttachment(data=data, filename=filename)

    def _get_default_renderer(self) -> IPdfRenderer:
        renderer_cls = import_string(getattr(settings, 'HTML_CLIENT_PDF_RENDERER', DEFAULT_RENDERER))
        return renderer_cls(stylesheets=getattr(settings, 'HTML_CLIENT_PDF_STYLESHEETS', []))
