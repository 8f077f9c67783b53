"""
Client-layer exceptions for consistent error handling across the HTML clients.

Configuration problems are deployment defects and must surface immediately;
block misuse is a caller contract violation. Neither is recovered from inside
the rendering core.
"""


class ClientError(Exception):
    """Base exception for all HTML client errors."""
    pass


class ConfigurationError(ClientError):
    """
    Raised when the client tree cannot be composed from the configuration.
    
    Example:
        An unknown decorator name in "client/html/catalog/filter/decorators/local"
        or a subparts value that is not a list of names.
    """
    pass


class BlockError(ClientError):
    """
    Raised when the block registry is used against its contract.
    
    Example:
        Calling stop() without a matching start(), or opening a block
        that is already open.
    """
    pass
