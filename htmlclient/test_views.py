"""
Tests for the HTTP entry points
"""

from django.test import SimpleTestCase, override_settings
from django.urls import reverse

from htmlclient.exceptions import ConfigurationError


CONTROLLERS = {
    'supplier': 'htmlclient.testing.supplier_controller',
    'basket': 'htmlclient.testing.basket_controller',
    'product': 'htmlclient.testing.product_controller',
}


@override_settings(HTML_CLIENT_CONTROLLERS=CONTROLLERS)
class CatalogViewTestCase(SimpleTestCase):
    """Test cases for the catalog pages"""

    def test_catalog_list(self):
        """Test that the catalog list page contains the supplier filter"""
        response = self.client.get(reverse('catalog-list'))

        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'catalog-filter-supplier', count=1)
        self.assertContains(response, '<li class="attr-item" data-id="', count=3)
        self.assertContains(response, 'class="attr-item prototype"', count=1)
        self.assertContains(response, '<form method="GET" action="/catalog/">')

    def test_cache_tags_header(self):
        """Test that the cache tags of the output are sent to the caches"""
        response = self.client.get(reverse('catalog-list'))

        self.assertEqual(response['Cache-Tag'], 'supplier,supplier:1,supplier:2,supplier:3')
        self.assertFalse(response.has_header('Expires'))

    def test_selected_suppliers(self):
        """Test that the selected suppliers are checked"""
        response = self.client.get(reverse('catalog-list'), {'f_supid[]': ['2']})

        self.assertContains(response, 'checked="checked"', count=1)
        self.assertContains(response, 'supplier-selected')

    def test_catalog_tree(self):
        """Test that the category of the URL is kept in the filter links"""
        response = self.client.get(reverse('catalog-tree', kwargs={'catid': 5}), {'f_supid[]': ['1']})

        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'action="/catalog/5/?f_supid=1"')
        self.assertContains(response, 'href="/catalog/5/"')

    def test_uid_parameter(self):
        """Test that the uid request parameter is used for the element IDs"""
        response = self.client.get(reverse('catalog-list'), {'uid': 'top'})

        self.assertContains(response, 'id="sup-top-1"')

    @override_settings(HTML_CLIENT_CONTROLLERS={})
    def test_missing_controller(self):
        """Test that a missing controller is a configuration error"""
        with self.assertRaises(ConfigurationError):
            self.client.get(reverse('catalog-list'))


@override_settings(HTML_CLIENT_CONTROLLERS=CONTROLLERS)
class BasketRelatedViewTestCase(SimpleTestCase):
    """Test cases for the basket related page"""

    def test_basket_related(self):
        """Test that products bought together are shown"""
        response = self.client.get(reverse('basket-related'))

        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'basket-related-bought', count=1)
        self.assertContains(response, 'Socks')
        self.assertNotContains(response, 'Shoe')
        self.assertEqual(response['Cache-Tag'], 'product,product:2,product:3')
