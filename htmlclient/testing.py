"""
Test doubles for the HTML client tests.

Simple domain objects and controllers standing in for the shop backend,
and a PDF renderer that doesn't need WeasyPrint.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from .printing.interfaces import IPdfRenderer


@dataclass
class Media:
    url: str
    label: str = ''


@dataclass
class Supplier:
    id: int
    name: str
    media: list = field(default_factory=list)
    date_end: Optional[datetime] = None


@dataclass
class Product:
    id: int
    name: str
    date_end: Optional[datetime] = None


@dataclass
class Attribute:
    type: str
    name: str
    value: str = ''


@dataclass
class OrderProduct:
    product_id: int
    name: str
    quantity: int = 1
    attributes: list = field(default_factory=list)


@dataclass
class Basket:
    products: list = field(default_factory=list)


@dataclass
class Order:
    id: int
    payment_status: int


class SupplierController:
    def __init__(self, suppliers=None):
        self.suppliers = list(suppliers or [])
        self.calls = 0

    def search(self, limit):
        self.calls += 1
        return self.suppliers[:limit]


class BasketController:
    def __init__(self, basket=None):
        self.basket = basket or Basket()

    def get(self):
        return self.basket


class ProductController:
    def __init__(self, products=None):
        self.products = list(products or [])

    def bought_together(self, product_ids, limit):
        return self.products[:limit]


class FakePdfRenderer(IPdfRenderer):
    """Returns the rendered HTML wrapped in a minimal PDF header."""

    def __init__(self, stylesheets=None):
        self.stylesheets = stylesheets or []
        self.rendered = []

    def render_html_to_pdf(self, html: str, base_url: str) -> bytes:
        self.rendered.append(html)
        return b'%PDF-1.4\n' + html.encode('utf-8')


def default_suppliers():
    return [
        Supplier(1, 'Acme', media=[Media('/media/acme.png', 'Acme logo')]),
        Supplier(2, 'Globex'),
        Supplier(3, 'Initech'),
    ]


def supplier_controller(request):
    return SupplierController(default_suppliers())


def nested_config(flat: dict) -> dict:
    """
    Convert {"client/html/a/b": value} into the nested configuration format.

    Example:
        >>> nested_config({'client/html/catalog/filter/subparts': []})
        {'client': {'html': {'catalog': {'filter': {'subparts': []}}}}}
    """
    result = {}

    for key, value in flat.items():
        node = result
        parts = key.split('/')
        for part in parts[:-1]:
            node = node.setdefault(part, {})
        node[parts[-1]] = value

    return result


def basket_controller(request):
    return BasketController(Basket(products=[OrderProduct(product_id=1, name='Shoe')]))


def product_controller(request):
    return ProductController([Product(2, 'Socks'), Product(3, 'Laces')])
