"""
Outgoing e-mails rendered by the HTML clients.

This module provides the message object clients add attachments to and the
sending of the payment e-mail via Django's mail framework.
"""

import logging
from typing import Any, Iterable, Optional

from django.core.mail import EmailMultiAlternatives
from django.utils.html import strip_tags
from django.utils.translation import pgettext

from .factory import create_client
from .metadata import CacheMetadata
from .view import View


logger = logging.getLogger(__name__)


class OutgoingMessage:
    """
    E-mail composed while the client tree renders.

    Wraps a Django EmailMultiAlternatives message so clients only see the
    small interface they need (body and attachments).
    """

    def __init__(
        self,
        subject: str = '',
        to: Optional[Iterable[str]] = None,
        from_email: Optional[str] = None,
    ):
        self.message = EmailMultiAlternatives(
            subject=subject,
            body='',
            from_email=from_email,
            to=list(to or []),
        )

    def add_attachment(self, data: bytes, mime_type: str, filename: str) -> "OutgoingMessage":
        """
        Attach a file to the message.

        Args:
            data: File content
            mime_type: MIME type, e.g. "application/pdf"
            filename: Name of the attachment shown in the mail client
        """
        self.message.attach(filename, data, mime_type)
        logger.debug(f"Added attachment {filename} ({mime_type}, {len(data)} bytes)")
        return self

    def set_subject(self, subject: str) -> "OutgoingMessage":
        self.message.subject = subject
        return self

    def set_body_html(self, html: str) -> "OutgoingMessage":
        """Set the HTML body and derive the plain text body from it."""
        self.message.body = strip_tags(html).strip()
        self.message.attach_alternative(html, 'text/html')
        return self

    @property
    def attachments(self) -> list:
        return self.message.attachments

    def send(self) -> int:
        return self.message.send()


def send_payment_email(
    order: Any,
    basket: Any,
    to: Iterable[str],
    *,
    from_email: Optional[str] = None,
    controllers: Optional[dict] = None,
) -> OutgoingMessage:
    """
    Render and send the payment e-mail for an order.

    Args:
        order: Order with "id" and "payment_status"
        basket: Basket of the order (products shown in the summary)
        to: Recipient addresses
        from_email: Sender, DEFAULT_FROM_EMAIL if None
        controllers: Domain collaborators for the clients

    Returns:
        The sent message

    Raises:
        ConfigurationError: If the client tree can't be composed
        Exception: If rendering or sending fails
    """
    message = OutgoingMessage(to=to, from_email=from_email)
    subject = pgettext('client', 'Your order %(id)s') % {'id': order.id}
    message.set_subject(subject)

    view = View(params={}, controllers=controllers, mail=message)
    view.set('extOrderItem', order)
    view.set('extOrderBaseItem', basket)

    try:
        client = create_client(view, 'email/payment')
        client.add_data(view, CacheMetadata())
        message.set_body_html(client.get_body())

        sent = message.send()
        logger.info(
            f"Sent payment e-mail for order {order.id} to {len(message.message.to)} recipient(s) "
            f"with {len(message.attachments)} attachment(s), sent={sent}"
        )
    except Exception as e:
        logger.error(f"Failed to send payment e-mail for order {order.id}: {e}", exc_info=True)
        raise

    return message
