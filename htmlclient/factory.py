"""
Client and decorator factory

Central registries for resolving client paths and decorator names to their
implementations, and the builder that wraps clients with the configured
decorators.

Registries are filled once at startup (htmlclient.apps.HtmlClientConfig.ready)
and only read afterwards.
"""

import logging
from typing import Any, Callable, Hashable, Iterable, Optional

from .exceptions import ConfigurationError
from .interfaces import Client


logger = logging.getLogger(__name__)

DEFAULT_NAME = 'Standard'

GLOBAL = 'global'
LOCAL = 'local'


class Registry:
    """Registry mapping keys to client or decorator classes"""

    def __init__(self, kind: str):
        self.kind = kind
        self._entries: dict[Hashable, Callable[..., Client]] = {}

    def register(self, key: Hashable, factory: Callable[..., Client]) -> None:
        """
        Register an implementation.

        Args:
            key: Unique identifier, e.g. ('catalog/filter', 'Standard') or 'Logger'
            factory: Class (or factory function) creating the client

        Raises:
            ValueError: If the key is already registered
        """
        if key in self._entries:
            raise ValueError(f"{self.kind} '{key}' is already registered")
        self._entries[key] = factory

    def unregister(self, key: Hashable) -> None:
        self._entries.pop(key, None)

    def get(self, key: Hashable) -> Callable[..., Client]:
        """
        Get an implementation by its key.

        Raises:
            ConfigurationError: If the key is not registered
        """
        if key not in self._entries:
            raise ConfigurationError(f"{self.kind} '{key}' not found")
        return self._entries[key]

    def is_registered(self, key: Hashable) -> bool:
        """Check if a key is registered"""
        return key in self._entries

    def list(self) -> list:
        """List all registered keys"""
        return list(self._entries.keys())


# Global registry instances
clients = Registry('Client')
global_decorators = Registry('Decorator')
local_decorators = Registry('Local decorator')


def register_client(path: str, client_cls: Callable[..., Client], name: str = DEFAULT_NAME) -> None:
    """Register a client implementation for a path, e.g. "catalog/filter/supplier"."""
    clients.register((path, name), client_cls)


def register_decorator(name: str, decorator_cls: Callable[..., Client], path: Optional[str] = None) -> None:
    """
    Register a decorator.

    Args:
        name: Decorator name used in the configuration, e.g. "Logger"
        decorator_cls: Decorator class
        path: Client path for local decorators, None for global ones
    """
    if path is None:
        global_decorators.register(name, decorator_cls)
    else:
        local_decorators.register((path, name), decorator_cls)


def decorator_chain(
    defaults: Iterable[str],
    global_names: Iterable[str],
    excludes: Iterable[str],
    local_names: Iterable[str],
) -> list[tuple[str, str]]:
    """
    Compute the decorators to wrap around a client, innermost first.

    The common default decorators and the client's global decorators are
    merged (first occurrence wins), the excluded names are removed and the
    local decorators follow, so they end up outermost.

    Example:
        >>> decorator_chain(['Logger'], ['Comment', 'Logger'], ['Logger'], ['Home'])
        [('global', 'Comment'), ('local', 'Home')]

    Returns:
        List of (scope, name) tuples in wrapping order
    """
    excluded = set(excludes)
    seen = set()
    chain = []

    for name in list(defaults) + list(global_names):
        if name in excluded or name in seen:
            continue
        seen.add(name)
        chain.append((GLOBAL, name))

    chain.extend((LOCAL, name) for name in local_names)
    return chain


def _names(view, key: str) -> list[str]:
    names = view.config(key, [])

    if not isinstance(names, (list, tuple)) or not all(isinstance(name, str) and name for name in names):
        raise ConfigurationError(f"Configuration '{key}' must be a list of names, got {names!r}")

    return list(names)


def add_decorators(client: Client, view, path: str) -> Client:
    """
    Wrap a client with its configured decorators.

    Reads "client/html/common/decorators/default" and
    "client/html/<path>/decorators/excludes|global|local".

    Args:
        client: Client to decorate
        view: View providing the configuration
        path: Client path, e.g. "email/payment/pdf"

    Returns:
        The outermost decorator or the client itself if none is configured

    Raises:
        ConfigurationError: If a decorator name is unknown
    """
    prefix = f"client/html/{path}/decorators"
    chain = decorator_chain(
        _names(view, 'client/html/common/decorators/default'),
        _names(view, f"{prefix}/global"),
        _names(view, f"{prefix}/excludes"),
        _names(view, f"{prefix}/local"),
    )

    for scope, name in chain:
        if scope == GLOBAL:
            decorator_cls = global_decorators.get(name)
        else:
            decorator_cls = local_decorators.get((path, name))

        client = decorator_cls(client, view, path)
        logger.debug(f"Wrapped client '{path}' with {scope} decorator '{name}'")

    return client


def build_client(view, path: str, name: str) -> Client:
    """
    Instantiate a registered client and wrap it with its decorators.

    Raises:
        ConfigurationError: If no client is registered for path and name
    """
    client_cls = clients.get((path, name))
    client = client_cls(view, path)

    if not isinstance(client, Client):
        raise ConfigurationError(f"Class registered for '{path}' ({name}) doesn't implement Client")

    return add_decorators(client, view, path)


def resolve_name(view, path: str, name: Optional[str] = None) -> str:
    """Return the given implementation name or the configured one ("Standard" by default)."""
    return name or view.config(f"client/html/{path}/name", DEFAULT_NAME) or DEFAULT_NAME


def create_client(view, path: str, name: Optional[str] = None) -> Client:
    """
    Create the decorated root client for a path.

    Usage:
        view = View(request, controllers=controllers)
        client = create_client(view, 'catalog/filter')
        client.init()
        client.add_data(view, metadata)
        html = client.get_body()
    """
    name = resolve_name(view, path, name)
    logger.debug(f"Creating client '{path}' ({name})")
    return build_client(view, path, name)


def describe(client: Any) -> str:
    """Return a readable chain description like "Comment(Logger(CatalogFilterClient))"."""
    inner = getattr(client, 'client', None)
    if isinstance(inner, Client):
        return f"{type(client).__name__}({describe(inner)})"
    return type(client).__name__
