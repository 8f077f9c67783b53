"""
Tests for the payment e-mail clients and the PDF attachment
"""

from unittest.mock import Mock, patch

from django.core import mail
from django.test import SimpleTestCase, override_settings

from htmlclient.config import ClientConfig
from htmlclient.exceptions import ClientError, ConfigurationError
from htmlclient.factory import create_client
from htmlclient.mail import OutgoingMessage, send_payment_email
from htmlclient.models import PaymentStatus
from htmlclient.testing import Attribute, Basket, Order, OrderProduct, nested_config
from htmlclient.view import View


def make_basket():
    return Basket(products=[
        OrderProduct(
            product_id=1,
            name='E-Book',
            quantity=2,
            attributes=[
                Attribute('config', 'Format', 'EPUB'),
                Attribute('download', 'ebook.epub'),
            ],
        ),
    ])


class PaymentPdfTestCase(SimpleTestCase):
    """Test cases for the payment PDF client"""

    def make_view(self, status, flat=None, mail_message=None):
        view = View(config=ClientConfig(nested_config(flat or {})), mail=mail_message or Mock())
        view.set('extOrderItem', Order(id=42, payment_status=status))
        view.set('extOrderBaseItem', make_basket())
        return view

    def render_pdf(self, view):
        client = create_client(view, 'email/payment/pdf')
        client.add_data(view)
        return client.get_body()

    def test_below_threshold_renders_nothing(self):
        """Test that no PDF is attached before the payment is authorized"""
        view = self.make_view(PaymentStatus.PENDING)

        self.assertEqual(self.render_pdf(view), '')
        view.mail().add_attachment.assert_not_called()

    def test_at_threshold_attaches_pdf_once(self):
        """Test that exactly one PDF is attached once the payment is authorized"""
        view = self.make_view(PaymentStatus.AUTHORIZED)

        self.assertEqual(self.render_pdf(view), '')

        view.mail().add_attachment.assert_called_once()
        data, mime_type, filename = view.mail().add_attachment.call_args[0]
        self.assertTrue(data.startswith(b'%PDF'))
        self.assertEqual(mime_type, 'application/pdf')
        self.assertEqual(filename, 'order_42.pdf')

    def test_above_threshold_attaches_pdf(self):
        """Test that later payment states attach the PDF too"""
        view = self.make_view(PaymentStatus.RECEIVED)
        self.render_pdf(view)

        view.mail().add_attachment.assert_called_once()

    def test_configured_threshold(self):
        """Test that the payment status threshold is configurable"""
        view = self.make_view(
            PaymentStatus.AUTHORIZED,
            {'client/html/email/payment/pdf/payment-status': PaymentStatus.RECEIVED}
        )
        self.render_pdf(view)

        view.mail().add_attachment.assert_not_called()

    def test_pdf_contains_order_summary(self):
        """Test that the PDF is rendered from the order summary"""
        view = self.make_view(PaymentStatus.AUTHORIZED)
        self.render_pdf(view)

        data = view.mail().add_attachment.call_args[0][0].decode('utf-8')
        self.assertIn('Order 42', data)
        self.assertIn('E-Book', data)
        self.assertIn('EPUB', data)

    def test_download_attributes_hidden_until_received(self):
        """Test that download attributes are only shown if the payment is received"""
        authorized = self.make_view(PaymentStatus.AUTHORIZED)
        received = self.make_view(PaymentStatus.RECEIVED)
        self.render_pdf(authorized)
        self.render_pdf(received)

        self.assertFalse(authorized.get('summaryShowDownloadAttributes'))
        self.assertTrue(received.get('summaryShowDownloadAttributes'))
        self.assertNotIn(b'ebook.epub', authorized.mail().add_attachment.call_args[0][0])
        self.assertIn(b'ebook.epub', received.mail().add_attachment.call_args[0][0])

    def test_status_specific_template(self):
        """Test that a template for the payment status is preferred"""
        view = self.make_view(PaymentStatus.RECEIVED)
        client = create_client(view, 'email/payment/pdf')
        client.add_data(view)

        self.assertEqual(client.get_template_body(), [
            f'htmlclient/email/payment/pdf/{PaymentStatus.RECEIVED.value}/body.html',
            'htmlclient/email/payment/pdf/body.html',
        ])

    def test_status_template_next_to_configured_template(self):
        """Test that the template for the payment status is looked up beside a configured template"""
        view = self.make_view(
            PaymentStatus.RECEIVED,
            {'client/html/email/payment/pdf/template-body': 'shop/email/order-pdf.html'}
        )
        client = create_client(view, 'email/payment/pdf')
        client.add_data(view)

        self.assertEqual(client.get_template_body(), ['shop/email/6/order-pdf.html', 'shop/email/order-pdf.html'])

    def test_missing_order_raises_error(self):
        """Test that the order is required"""
        view = View(config=ClientConfig({}), mail=Mock())
        client = create_client(view, 'email/payment/pdf')

        with self.assertRaises(ClientError):
            client.add_data(view)

    def test_missing_mail_raises_error(self):
        """Test that the PDF can't be rendered without an outgoing message"""
        view = View(config=ClientConfig({}))
        view.set('extOrderItem', Order(id=42, payment_status=PaymentStatus.AUTHORIZED))
        view.set('extOrderBaseItem', make_basket())

        with self.assertRaises(ConfigurationError):
            self.render_pdf(view)

    def test_renderer_failure_propagates(self):
        """Test that PDF rendering errors are not swallowed"""
        view = self.make_view(PaymentStatus.AUTHORIZED)

        with patch('htmlclient.printing.service.PdfRenderService.render', side_effect=RuntimeError('broken')):
            with self.assertRaises(RuntimeError):
                self.render_pdf(view)

        view.mail().add_attachment.assert_not_called()


class PaymentEmailTestCase(SimpleTestCase):
    """Test cases for sending the payment e-mail"""

    def test_send_with_pdf_attachment(self):
        """Test that the e-mail is sent with the order PDF"""
        order = Order(id=7, payment_status=PaymentStatus.AUTHORIZED)

        message = send_payment_email(order, make_basket(), ['customer@example.com'])

        self.assertEqual(len(mail.outbox), 1)
        sent = mail.outbox[0]
        self.assertEqual(sent.to, ['customer@example.com'])
        self.assertEqual(sent.subject, 'Your order 7')
        self.assertEqual(len(sent.attachments), 1)
        self.assertEqual(sent.attachments[0][0], 'order_7.pdf')
        self.assertEqual(sent.attachments[0][2], 'application/pdf')
        self.assertEqual(message.attachments[0][0], 'order_7.pdf')

    def test_send_without_pdf_before_authorization(self):
        """Test that pending payments are confirmed without PDF"""
        order = Order(id=8, payment_status=PaymentStatus.PENDING)

        send_payment_email(order, make_basket(), ['customer@example.com'])

        sent = mail.outbox[0]
        self.assertEqual(sent.attachments, [])
        html, mime_type = sent.alternatives[0]
        self.assertEqual(mime_type, 'text/html')
        self.assertIn('The payment status of your order 8 is: Pending', html)
        self.assertIn('E-Book', sent.body)

    def test_unknown_payment_status(self):
        """Test that a payment status without label is shown with its value"""
        order = Order(id=10, payment_status=8)

        send_payment_email(order, make_basket(), ['customer@example.com'])

        html = mail.outbox[0].alternatives[0][0]
        self.assertIn('The payment status of your order 10 is: 8', html)
        self.assertEqual(len(mail.outbox[0].attachments), 1)

    @override_settings(HTML_CLIENT_CONFIG=nested_config({'client/html/email/payment/subparts': []}))
    def test_pdf_subpart_can_be_removed(self):
        """Test that the configuration decides about the PDF sub-client"""
        order = Order(id=9, payment_status=PaymentStatus.RECEIVED)

        send_payment_email(order, make_basket(), ['customer@example.com'])

        self.assertEqual(mail.outbox[0].attachments, [])


class OutgoingMessageTestCase(SimpleTestCase):
    """Test cases for OutgoingMessage"""

    def test_add_attachment(self):
        """Test that attachments are added to the Django message"""
        message = OutgoingMessage(subject='Test', to=['a@example.com'])
        message.add_attachment(b'%PDF-1.4', 'application/pdf', 'test.pdf')

        self.assertEqual(message.attachments, [('test.pdf', b'%PDF-1.4', 'application/pdf')])

    def test_html_body_with_text_alternative(self):
        """Test that the plain text body is derived from the HTML body"""
        message = OutgoingMessage(subject='Test', to=['a@example.com'])
        message.set_body_html('<p>Hello <strong>World</strong></p>')

        self.assertEqual(message.message.body, 'Hello World')
        self.assertEqual(message.message.alternatives[0][1], 'text/html')
