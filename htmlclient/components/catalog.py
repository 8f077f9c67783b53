"""
Catalog filter clients

The filter client renders the filter form; its sub-clients render the
individual filter sections, e.g. the supplier list.

Controllers used:
    supplier: search(limit) -> iterable of suppliers with "id", "name",
              "media" (items with "url" and "label") and optional "date_end"
"""

import logging

from ..base import BaseClient
from ..factory import register_client
from ..metadata import CacheMetadata
from ..view import View


logger = logging.getLogger(__name__)

# Parameters the filter keeps when the form is submitted
FILTER_PARAMS = ['f_catid', 'f_search', 'f_sort', 'f_supid']


def as_list(value) -> list:
    if value is None or value == '':
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def list_link_key(view: View) -> str:
    """Link to the category tree page if a category is selected, to the list page otherwise."""
    if view.param('f_catid'):
        return 'client/html/catalog/tree/url'
    return 'client/html/catalog/lists/url'


class CatalogFilterClient(BaseClient):
    """Filter form around the configured filter sections."""

    path = 'catalog/filter'
    subparts = ['supplier']

    def data(self, view: View, metadata: CacheMetadata) -> None:
        params = {name: view.param(name) for name in FILTER_PARAMS if view.param(name) not in (None, '', [])}

        view.set('filterParams', params)
        view.set('filterLinkKey', list_link_key(view))


class SupplierFilterClient(BaseClient):
    """Supplier section of the catalog filter."""

    path = 'catalog/filter/supplier'

    def data(self, view: View, metadata: CacheMetadata) -> None:
        limit = view.config(f"{self.config_path}/limit", 100)
        suppliers = list(view.controller('supplier').search(limit))

        selected = [str(value) for value in as_list(view.param('f_supid'))]
        reset_params = dict(view.get('filterParams', {}))
        reset_params.pop('f_supid', None)

        view.set('supplierList', {str(supplier.id): supplier for supplier in suppliers})
        view.set('supplierSelected', selected)
        view.set('supplierResetParams', reset_params)
        view.set('supplierLinkKey', list_link_key(view))

        metadata.add_items('supplier', suppliers)
        logger.debug(f"Supplier filter: {len(suppliers)} suppliers, {len(selected)} selected")


register_client('catalog/filter', CatalogFilterClient)
register_client('catalog/filter/supplier', SupplierFilterClient)
