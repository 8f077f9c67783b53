"""
Client decorators

Decorators wrap exactly one client and forward every call to it. They add
cross-cutting behaviour before or after delegating, e.g. logging or debug
markers in the output.

Configuration:
    client/html/common/decorators/default = ['Logger']
    client/html/<path>/decorators/excludes = ['Logger']
    client/html/<path>/decorators/global = ['Comment']
    client/html/<path>/decorators/local = ['<registered local decorator>']
"""

import logging
import time
from typing import Optional

from .exceptions import ConfigurationError
from .factory import register_decorator
from .interfaces import Client
from .metadata import CacheMetadata
from .view import View


logger = logging.getLogger(__name__)


class BaseDecorator(Client):
    """
    Decorator forwarding all calls to the wrapped client.

    Subclasses override the methods they want to extend and call the
    implementation here to delegate.
    """

    def __init__(self, client: Client, view: View, path: str):
        if not isinstance(client, Client):
            raise ConfigurationError(f"Decorator {type(self).__name__} must wrap a client, got {type(client).__name__}")

        self.client = client
        self.view = view
        self.path = path

    def init(self) -> None:
        self.client.init()

    def add_data(self, view: View, metadata: Optional[CacheMetadata] = None) -> View:
        self.view = view
        return self.client.add_data(view, metadata)

    def get_body(self, uid: str = '') -> str:
        return self.client.get_body(uid)

    def get_header(self, uid: str = '') -> str:
        return self.client.get_header(uid)

    def get_sub_client(self, type: str, name: Optional[str] = None) -> Client:
        return self.client.get_sub_client(type, name)

    def get_sub_clients(self) -> list:
        return self.client.get_sub_clients()

    def __getattr__(self, name):
        # Only called for attributes not found on the decorator itself
        if name == 'client':
            raise AttributeError(name)
        return getattr(self.client, name)


class Logger(BaseDecorator):
    """Logs how long the wrapped client needs to add its data and render its output."""

    def add_data(self, view: View, metadata: Optional[CacheMetadata] = None) -> View:
        start = time.perf_counter()
        view = super().add_data(view, metadata)
        logger.debug(f"Client '{self.path}' added data in {(time.perf_counter() - start) * 1000:.1f} ms")
        return view

    def get_body(self, uid: str = '') -> str:
        start = time.perf_counter()
        body = super().get_body(uid)
        logger.debug(
            f"Client '{self.path}' rendered body{f' for {uid}' if uid else ''} "
            f"({len(body)} chars) in {(time.perf_counter() - start) * 1000:.1f} ms"
        )
        return body


class Comment(BaseDecorator):
    """Surrounds the body of the wrapped client with HTML comments naming the client path."""

    def get_body(self, uid: str = '') -> str:
        body = super().get_body(uid)

        if not body:
            return body

        # "--" isn't allowed within HTML comments
        name = self.path.replace('--', '-')
        return f"<!-- {name} -->{body}<!-- /{name} -->"


register_decorator('Logger', Logger)
register_decorator('Comment', Comment)
