"""Payment refund: command and handler."""

from protean import handle
from protean.fields import Float, Identifier, Text

from payments.domain import payments
from payments.gateway import gateway_method_for
from payments.gateway.provider_service import GatewayProviderService
from payments.payment.authorization import load_args
from payments.payment.payment import Payment


@payments.command(part_of="Payment")
class RefundPayment:
    """Return previously captured funds."""

    invoice_id = Identifier(required=True)
    payment_id = Identifier(required=True)
    amount = Float(required=True)
    args = Text()


@payments.command_handler(part_of=Payment)
class RefundPaymentHandler:
    @handle(RefundPayment)
    def refund_payment(self, command):
        service = GatewayProviderService()
        invoice = service.get_invoice(command.invoice_id)
        payment = service.get_payment(command.payment_id)
        method = gateway_method_for(str(payment.payment_method_key), service)
        return method.refund_payment(invoice, payment, command.amount, load_args(command.args))
