"""
Configuration layer for the HTML clients.

This module provides the process-wide, read-only configuration that every
client reads through the view:
- Loads the nested HTML_CLIENT_CONFIG setting once per process
- Resolves slash separated keys like "client/html/catalog/filter/subparts"
- Invalidates itself when Django settings change (override_settings in tests)

Clients never access the settings module directly; the configuration is
injected into each request's View.
"""

import copy
import logging
from typing import Any, Optional

from django.conf import settings
from django.core.signals import setting_changed
from django.dispatch import receiver

from .exceptions import ConfigurationError


logger = logging.getLogger(__name__)

SETTINGS_NAME = "HTML_CLIENT_CONFIG"
KEY_SEPARATOR = "/"


class ClientConfig:
    """
    Read-only view on a nested configuration dictionary.

    Keys are slash separated paths into the nested dictionary, so
    "client/html/email/payment/pdf/subparts" looks up
    config['client']['html']['email']['payment']['pdf']['subparts'].

    Example:
        >>> config = ClientConfig({'client': {'html': {'catalog': {'filter': {'button': False}}}}})
        >>> config.get('client/html/catalog/filter/button', True)
        False
        >>> config.get('client/html/catalog/filter/subparts', [])
        []
    """

    def __init__(self, values: Optional[dict] = None):
        self._values = copy.deepcopy(values or {})

    def get(self, key: str, default: Any = None) -> Any:
        """
        Return the configured value for a slash separated key.

        Args:
            key: Configuration path, e.g. "client/html/common/decorators/default"
            default: Value returned if the key is not configured

        Returns:
            A copy of the configured value or the default
        """
        node = self._values

        for part in key.strip(KEY_SEPARATOR).split(KEY_SEPARATOR):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]

        # Callers may modify returned lists, the shared configuration must not change
        return copy.deepcopy(node)

    def has(self, key: str) -> bool:
        """Check if a key is configured"""
        marker = object()
        return self.get(key, marker) is not marker


_config: Optional[ClientConfig] = None


def get_config() -> ClientConfig:
    """
    Get the process-wide client configuration.

    The configuration is built from settings.HTML_CLIENT_CONFIG on first
    access and reused afterwards.

    Returns:
        ClientConfig instance
    """
    global _config

    if _config is None:
        values = getattr(settings, SETTINGS_NAME, {})
        if not isinstance(values, dict):
            raise ConfigurationError(f"{SETTINGS_NAME} must be a dictionary, got {type(values).__name__}")
        _config = ClientConfig(values)
        logger.debug("HTML client configuration loaded")

    return _config


def invalidate_config() -> None:
    """Drop the cached configuration so it is rebuilt from the settings."""
    global _config
    _config = None


@receiver(setting_changed)
def _reset_on_setting_changed(sender, setting, **kwargs):
    if setting == SETTINGS_NAME:
        invalidate_config()
