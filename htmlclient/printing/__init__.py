"""
Printing for the HTML clients

Converts HTML rendered by the client tree to PDF documents using WeasyPrint,
e.g. the order confirmation attached to payment e-mails.
"""

from .service import PdfAttachment, PdfRenderService
from .interfaces import IPdfRenderer

__all__ = [
    'PdfAttachment',
    'PdfRenderService',
    'IPdfRenderer',
]
