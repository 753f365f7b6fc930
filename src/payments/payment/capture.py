"""Payment capture: command and handler.

After a successful capture that completes an issued invoice, the host marks
the invoice paid.
"""

import structlog
from protean import handle
from protean.fields import Float, Identifier, Text
from protean.utils.globals import current_domain

from payments.domain import payments
from payments.gateway import gateway_method_for
from payments.gateway.provider_service import GatewayProviderService
from payments.invoice.invoice import Invoice, InvoiceStatus
from payments.payment.authorization import load_args
from payments.payment.payment import Payment
from payments.utils.logging import add_context, clear_context

logger = structlog.get_logger(__name__)


@payments.command(part_of="Payment")
class CapturePayment:
    """Capture previously authorized funds against an invoice."""

    invoice_id = Identifier(required=True)
    payment_id = Identifier(required=True)
    amount = Float(required=True)
    args = Text()


@payments.command_handler(part_of=Payment)
class CapturePaymentHandler:
    @handle(CapturePayment)
    def capture_payment(self, command):
        service = GatewayProviderService()
        add_context(invoice_id=str(command.invoice_id), payment_id=str(command.payment_id))
        try:
            invoice = service.get_invoice(command.invoice_id)
            payment = service.get_payment(command.payment_id)
            method = gateway_method_for(str(payment.payment_method_key), service)
            result = method.capture_payment(invoice, payment, command.amount, load_args(command.args))

            if result.success and payment.collected and InvoiceStatus(invoice.status) == InvoiceStatus.ISSUED:
                invoice.mark_paid()
                current_domain.repository_for(Invoice).add(invoice)
                logger.info("Invoice settled by capture", invoice_id=str(invoice.id))
            return result
        finally:
            clear_context()
