"""
Shared choices for the HTML clients.

The clients don't persist anything; the order, basket and catalog objects
they display are owned by the shop backend.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class PaymentStatus(models.IntegerChoices):
    """Payment status of an order, ordered by progress."""
    UNFINISHED = -1, _('Unfinished')
    DELETED = 0, _('Deleted')
    CANCELED = 1, _('Canceled')
    REFUSED = 2, _('Refused')
    REFUND = 3, _('Refund')
    PENDING = 4, _('Pending')
    AUTHORIZED = 5, _('Authorized')
    RECEIVED = 6, _('Received')
    TRANSFERRED = 7, _('Transferred')
