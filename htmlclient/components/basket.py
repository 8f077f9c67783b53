"""
Basket related clients

Shows products related to the basket content, e.g. products that were
bought together with the ones in the basket.

Controllers used:
    basket: get() -> basket with "products" (items with "product_id")
    product: bought_together(product_ids, limit) -> iterable of products
             with "id", "name" and optional "date_end"
"""

from ..base import BaseClient
from ..factory import register_client
from ..metadata import CacheMetadata
from ..view import View


class RelatedClient(BaseClient):
    """Container for the related product sections."""

    path = 'basket/related'
    subparts = ['bought']


class RelatedBoughtClient(BaseClient):
    """
    Products bought together with the basket products.

    The template only captures the "basket/related/bought" block, the
    container template decides where it's shown.
    """

    path = 'basket/related/bought'

    def data(self, view: View, metadata: CacheMetadata) -> None:
        basket = view.controller('basket').get()
        product_ids = [product.product_id for product in basket.products]

        items = []
        if product_ids:
            limit = view.config(f"{self.config_path}/limit", 6)
            items = [
                item for item in view.controller('product').bought_together(product_ids, limit)
                if item.id not in product_ids
            ]

        view.set('boughtItems', items)
        metadata.add_items('product', items)


register_client('basket/related', RelatedClient)
register_client('basket/related/bought', RelatedBoughtClient)
