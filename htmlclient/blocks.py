"""
Block Registry

Named markup buffers that let a client (or its template) capture output in
one place and echo it somewhere else in the same render pass.

Usage:
    blocks = BlockRegistry()
    blocks.start('catalog/filter/supplier')
    blocks.write('<section>...</section>')
    blocks.stop()

    blocks.get('catalog/filter/supplier')  # '<section>...</section>'

Templates use the {% capture %} and {% getblock %} tags from
htmlclient.templatetags.htmlclient_tags instead of calling the registry directly.
"""

import logging
import threading
from contextlib import contextmanager
from typing import Iterator

from .exceptions import BlockError


logger = logging.getLogger(__name__)


class BlockRegistry:
    """
    Request-scoped, ordered-append map of named markup blocks.

    A registry belongs to exactly one View and therefore to one request.
    Open blocks form a stack; stop() always closes the innermost one.
    """

    def __init__(self):
        self._committed: dict[str, str] = {}
        self._frames: list[tuple[str, list[str]]] = []
        self._owner = threading.get_ident()

    def start(self, name: str) -> None:
        """
        Open a new capture frame for the given block name.

        Raises:
            BlockError: If a block with the same name is already open
        """
        self._check_owner()

        if any(open_name == name for open_name, _ in self._frames):
            raise BlockError(f"Block '{name}' is already open")

        self._frames.append((name, []))

    def write(self, text: str) -> None:
        """
        Append markup to the innermost open block.

        Raises:
            BlockError: If no block is open
        """
        self._check_owner()

        if not self._frames:
            raise BlockError("No block is open for writing")

        self._frames[-1][1].append(str(text))

    def stop(self) -> str:
        """
        Close the innermost block and commit its content.

        Content is appended to text committed earlier under the same name,
        so several clients can contribute to one block in call order.

        Returns:
            The name of the closed block

        Raises:
            BlockError: If no block is open
        """
        self._check_owner()

        if not self._frames:
            raise BlockError("stop() called without a matching start()")

        name, parts = self._frames.pop()
        self._committed[name] = self._committed.get(name, '') + ''.join(parts)
        return name

    def get(self, name: str) -> str:
        """Return the committed content of a block, or an empty string."""
        self._check_owner()
        return self._committed.get(name, '')

    def has(self, name: str) -> bool:
        return name in self._committed

    def is_open(self, name: str = None) -> bool:
        if name is None:
            return bool(self._frames)
        return any(open_name == name for open_name, _ in self._frames)

    @contextmanager
    def capture(self, name: str) -> Iterator["BlockRegistry"]:
        """
        Open a block for the duration of a with statement.

        The block is only committed if the body finishes without an error;
        on errors the open frame is discarded and the error propagates.
        """
        self.start(name)
        try:
            yield self
        except Exception:
            self._frames.pop()
            raise
        self.stop()

    def _check_owner(self) -> None:
        if threading.get_ident() != self._owner:
            raise BlockError("Block registry used outside of the request thread that created it")
