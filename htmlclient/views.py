"""
HTTP entry points rendering HTML client trees.
"""

import logging
from typing import Optional

from django.conf import settings
from django.shortcuts import render
from django.utils.http import http_date
from django.utils.module_loading import import_string

from .factory import create_client
from .metadata import CacheMetadata
from .view import View, parse_params


logger = logging.getLogger(__name__)


def get_controllers(request) -> dict:
    """
    Create the domain collaborators for a request.

    HTML_CLIENT_CONTROLLERS maps controller names to dotted paths of
    factories accepting the request, e.g.
    {'supplier': 'shop.controllers.SupplierController'}.
    """
    return {
        name: import_string(factory_path)(request)
        for name, factory_path in getattr(settings, 'HTML_CLIENT_CONTROLLERS', {}).items()
    }


def apply_cache_metadata(response, metadata: CacheMetadata):
    """
    Hand the collected cache metadata to the caches in front of the shop.

    Tags are sent in the "Cache-Tag" header for tag based purging,
    the expiry date in the "Expires" header.
    """
    if metadata.tags:
        response['Cache-Tag'] = ','.join(sorted(metadata.tags))
    if metadata.expire is not None:
        response['Expires'] = http_date(metadata.expire.timestamp())
    return response


def render_client(request, path: str, name: Optional[str] = None, params: Optional[dict] = None):
    """
    Render the client tree for a path as a complete page.

    Args:
        request: Django request
        path: Path of the root client, e.g. "catalog/filter"
        name: Implementation name, configured or "Standard" if None
        params: Parameters added to the GET parameters, e.g. from the URL

    Returns:
        HttpResponse with the page and the cache headers of the output
    """
    uid = request.GET.get('uid', '')
    view_params = parse_params(request.GET)
    view_params.update(params or {})

    view = View(request, params=view_params, controllers=get_controllers(request))
    metadata = CacheMetadata()

    try:
        client = create_client(view, path, name)
        client.init()
        client.add_data(view, metadata)

        header = client.get_header(uid)
        body = client.get_body(uid)
    except Exception as e:
        logger.error(f"Failed to render client '{path}': {e}", exc_info=True)
        raise

    response = render(request, 'htmlclient/page.html', {'header': header, 'body': body})
    return apply_cache_metadata(response, metadata)


def catalog_list(request):
    """Catalog list page with the filter."""
    return render_client(request, 'catalog/filter')


def catalog_tree(request, catid):
    """Category page with the filter."""
    return render_client(request, 'catalog/filter', params={'f_catid': str(catid)})


def basket_related(request):
    """Products related to the current basket."""
    return render_client(request, 'basket/related')
