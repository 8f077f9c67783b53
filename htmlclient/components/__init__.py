"""
Built-in HTML clients.

Importing this package registers the clients in the client registry.
"""

from .catalog import CatalogFilterClient, SupplierFilterClient
from .basket import RelatedClient, RelatedBoughtClient
from .email import PaymentEmailClient, PaymentPdfClient

__all__ = [
    'CatalogFilterClient',
    'SupplierFilterClient',
    'RelatedClient',
    'RelatedBoughtClient',
    'PaymentEmailClient',
    'PaymentPdfClient',
]
