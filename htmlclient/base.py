"""
Base implementation of the HTML clients.

Concrete clients derive from BaseClient and implement the data() hook for
their view values. Recursion into the sub-clients, merging of the cache
metadata, sub-client creation and template rendering are done here, so they
can't be skipped by a concrete client.
"""

import logging
from typing import Optional

from django.utils.safestring import mark_safe

from . import factory
from .exceptions import ClientError, ConfigurationError
from .interfaces import Client
from .metadata import CacheMetadata
from .view import View


logger = logging.getLogger(__name__)


class BaseClient(Client):
    """
    Common behaviour of all HTML clients.

    Class attributes:
        path: Logical path of the client, e.g. "catalog/filter/supplier"
        subparts: Default sub-client names if "client/html/<path>/subparts" isn't configured
        template_body: Default body template, "htmlclient/<path>/body.html" if empty
        template_header: Default header template, no header output if empty
    """

    path = ''
    subparts: list = []
    template_body = ''
    template_header = ''

    def __init__(self, view: View, path: Optional[str] = None):
        if path:
            self.path = path

        if not self.path:
            raise ConfigurationError(f"No path set for client {type(self).__name__}")

        self.view = view
        self._sub_clients: dict[tuple[str, str], Client] = {}
        self._sub_client_list: Optional[list[Client]] = None
        self._data_added = False

    @property
    def config_path(self) -> str:
        return f"client/html/{self.path}"

    def init(self) -> None:
        for client in self.get_sub_clients():
            client.init()

    def add_data(self, view: View, metadata: Optional[CacheMetadata] = None) -> View:
        if metadata is None:
            metadata = CacheMetadata()

        self.view = view
        self.data(view, metadata)

        for client in self.get_sub_clients():
            child_metadata = CacheMetadata()
            view = client.add_data(view, child_metadata)
            metadata.merge(child_metadata)

        self._data_added = True
        return view

    def data(self, view: View, metadata: CacheMetadata) -> None:
        """
        Add the values of this client to the view.

        Runs before the sub-clients add their data, so they can read what
        this client sets.
        """
        pass

    def is_enabled(self) -> bool:
        """Return False to suppress the output of this client and its sub-clients."""
        return True

    def get_body(self, uid: str = '') -> str:
        self._check_data_added()

        if not self.is_enabled():
            return ''

        content = ''.join(client.get_body(uid) for client in self.get_sub_clients())
        self.view.set('body', mark_safe(content))

        return self.view.render(self.get_template_body(), {'uid': uid})

    def get_header(self, uid: str = '') -> str:
        self._check_data_added()

        if not self.is_enabled():
            return ''

        content = ''.join(client.get_header(uid) for client in self.get_sub_clients())
        template = self.view.config(f"{self.config_path}/template-header", self.template_header)

        if not template:
            return content

        self.view.set('header', mark_safe(content))
        return self.view.render(template, {'uid': uid})

    def get_template_body(self):
        default = self.template_body or f"htmlclient/{self.path}/body.html"
        return self.view.config(f"{self.config_path}/template-body", default)

    def get_sub_client(self, type: str, name: Optional[str] = None) -> Client:
        return self.create_sub_client(f"{self.path}/{type}", name)

    def get_sub_clients(self) -> list:
        if self._sub_client_list is None:
            self._sub_client_list = [self.get_sub_client(name) for name in self.get_sub_client_names()]
        return self._sub_client_list

    def get_sub_client_names(self) -> list:
        """
        Return the configured sub-client names in render order.

        Raises:
            ConfigurationError: If the configured value isn't a list of names
        """
        key = f"{self.config_path}/subparts"
        names = self.view.config(key, list(self.subparts))

        if not isinstance(names, (list, tuple)) or not all(isinstance(name, str) and name for name in names):
            raise ConfigurationError(f"Configuration '{key}' must be a list of names, got {names!r}")

        return list(names)

    def create_sub_client(self, path: str, name: Optional[str] = None) -> Client:
        """
        Create the decorated sub-client for a path or return the existing one.

        The instance is kept for the lifetime of this client, so add_data()
        and get_body() work on the same object.

        Args:
            path: Full client path, e.g. "catalog/filter/supplier"
            name: Implementation name, configured or "Standard" if empty

        Returns:
            Decorated sub-client
        """
        name = factory.resolve_name(self.view, path, name)
        key = (path, name)

        if key not in self._sub_clients:
            logger.debug(f"Creating sub-client '{path}' ({name}) for '{self.path}'")
            self._sub_clients[key] = factory.build_client(self.view, path, name)

        return self._sub_clients[key]

    def _check_data_added(self) -> None:
        if not self._data_added:
            raise ClientError(f"Output requested before add_data() for client '{self.path}'")
