"""Payment voiding: command and handler."""

from protean import handle
from protean.fields import Identifier, Text

from payments.domain import payments
from payments.gateway import gateway_method_for
from payments.gateway.provider_service import GatewayProviderService
from payments.payment.authorization import load_args
from payments.payment.payment import Payment


@payments.command(part_of="Payment")
class VoidPayment:
    """Cancel an authorization before capture."""

    invoice_id = Identifier(required=True)
    payment_id = Identifier(required=True)
    args = Text()


@payments.command_handler(part_of=Payment)
class VoidPaymentHandler:
    @handle(VoidPayment)
    def void_payment(self, command):
        service = GatewayProviderService()
        invoice = service.get_invoice(command.invoice_id)
        payment = service.get_payment(command.payment_id)
        method = gateway_method_for(str(payment.payment_method_key), service)
        return method.void_payment(invoice, payment, load_args(command.args))
