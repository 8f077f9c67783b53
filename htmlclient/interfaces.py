"""
Interfaces of the HTML client tree.

Every node of the tree, concrete clients as well as the decorators wrapped
around them, implements the Client interface.
"""

from abc import ABC, abstractmethod
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .metadata import CacheMetadata
    from .view import View


class Client(ABC):
    """
    Interface for renderable HTML clients.

    A request is rendered in two passes over the tree: add_data() on the root
    (recursing into all sub-clients) and afterwards get_body() on the root.
    """

    @abstractmethod
    def init(self) -> None:
        """Process the request input (e.g. form data) before any data is added."""
        pass

    @abstractmethod
    def add_data(self, view: "View", metadata: Optional["CacheMetadata"] = None) -> "View":
        """
        Add the values required by the templates to the view.

        Args:
            view: View shared by all clients of the request
            metadata: Collects the cache tags and the expiry date of the output

        Returns:
            The view, modified by this client and its sub-clients
        """
        pass

    @abstractmethod
    def get_body(self, uid: str = '') -> str:
        """
        Render the HTML code for insertion into the page body.

        Args:
            uid: Unique identifier if the output is placed more than once on the same page

        Returns:
            HTML code
        """
        pass

    @abstractmethod
    def get_header(self, uid: str = '') -> str:
        """Render the HTML code for insertion into the page header."""
        pass

    @abstractmethod
    def get_sub_client(self, type: str, name: Optional[str] = None) -> "Client":
        """
        Return the sub-client of the given type.

        Args:
            type: Name of the sub-client type, e.g. "supplier"
            name: Implementation name, None for the configured default

        Returns:
            Decorated sub-client
        """
        pass

    @abstractmethod
    def get_sub_clients(self) -> list:
        """Return the configured sub-clients in render order."""
        pass
