"""
Payment e-mail clients

Render the e-mail sent when the payment status of an order changes. The
PDF sub-client attaches the order as PDF document to the outgoing message
once the payment is authorized.

View values set by the caller (see htmlclient.mail.send_payment_email):
    extOrderItem: order with "id" and "payment_status"
    extOrderBaseItem: basket with "products" (items with "name", "quantity"
                      and "attributes" having "type", "name" and "value")
"""

import logging
import posixpath
from typing import Any

from django.utils.safestring import mark_safe

from ..base import BaseClient
from ..exceptions import ClientError
from ..factory import register_client
from ..metadata import CacheMetadata
from ..models import PaymentStatus
from ..printing import PdfRenderService
from ..view import View


logger = logging.getLogger(__name__)


def get_order(view: View) -> Any:
    order = view.get('extOrderItem')
    if order is None:
        raise ClientError("No order available in view (extOrderItem)")
    return order


def status_label(status) -> str:
    """Return the label of a payment status, the raw value for unknown ones."""
    if status in PaymentStatus.values:
        return PaymentStatus(status).label
    return str(status)


def add_summary(view: View) -> None:
    """
    Add the order summary values shared by the e-mail and the PDF document.

    Download attributes are only shown if the payment status allows
    downloading the files.
    """
    order = get_order(view)
    basket = view.get('extOrderBaseItem')
    if basket is None:
        raise ClientError("No basket available in view (extOrderBaseItem)")

    download_status = view.config(
        'client/html/common/summary/detail/download/payment-status', PaymentStatus.RECEIVED
    )

    view.set('summaryBasket', basket)
    view.set('summaryProducts', list(basket.products))
    view.set('summaryShowDownloadAttributes', order.payment_status >= download_status)


class PaymentEmailClient(BaseClient):
    """Body of the payment e-mail."""

    path = 'email/payment'
    subparts = ['pdf']

    def data(self, view: View, metadata: CacheMetadata) -> None:
        order = get_order(view)

        view.set('paymentOrder', order)
        view.set('paymentStatusLabel', status_label(order.payment_status))
        add_summary(view)


class PaymentPdfClient(BaseClient):
    """
    Order confirmation attached as PDF document to the payment e-mail.

    Nothing is rendered before the payment status reaches
    "client/html/email/payment/pdf/payment-status" (authorized by default).
    Otherwise the PDF is added to the outgoing message and the body is
    always empty.
    """

    path = 'email/payment/pdf'

    def data(self, view: View, metadata: CacheMetadata) -> None:
        # Same client object is used for all e-mails, nothing is cached in the instance
        add_summary(view)

    def is_enabled(self) -> bool:
        threshold = self.view.config(f"{self.config_path}/payment-status", PaymentStatus.AUTHORIZED)
        return get_order(self.view).payment_status >= threshold

    def get_template_body(self):
        template = super().get_template_body()
        if not isinstance(template, str):
            return template

        # Template for the payment status next to the configured one, e.g. ".../pdf/6/body.html"
        directory, filename = posixpath.split(template)
        status = get_order(self.view).payment_status
        return [posixpath.join(directory, str(int(status)), filename), template]

    def get_body(self, uid: str = '') -> str:
        self._check_data_added()

        if not self.is_enabled():
            return ''

        view = self.view
        order = get_order(view)

        content = ''.join(client.get_body(uid) for client in self.get_sub_clients())
        view.set('pdfBody', mark_safe(content))

        html = view.render(self.get_template_body(), {'uid': uid})
        attachment = PdfRenderService().render(
            html,
            base_url=view.config(f"{self.config_path}/base-url", ''),
            filename=f"order_{order.id}.pdf",
        )

        attachment.attach_to(view.mail())
        logger.info(f"Attached {attachment.filename} to payment e-mail for order {order.id}")

        return ''


register_client('email/payment', PaymentEmailClient)
register_client('email/payment/pdf', PaymentPdfClient)
