"""Payment authorization: commands and handler.

Resolves the gateway method for the requested payment method and runs the
authorization against the invoice. Processor failures come back inside the
returned PaymentResult; only precondition violations raise.
"""

import json

from protean import handle
from protean.fields import Float, Identifier, Text

from payments.domain import payments
from payments.gateway import gateway_method_for
from payments.gateway.provider_service import GatewayProviderService
from payments.payment.payment import Payment
from payments.utils.logging import add_context, clear_context


def load_args(raw: str | None) -> dict[str, str]:
    """Decode processor arguments sent as a JSON object."""
    if not raw:
        return {}
    return {str(key): str(value) for key, value in json.loads(raw).items()}


@payments.command(part_of="Payment")
class AuthorizePayment:
    """Authorize a payment for the full invoice total."""

    invoice_id = Identifier(required=True)
    payment_method_id = Identifier(required=True)
    args = Text()  # JSON object of processor arguments


@payments.command(part_of="Payment")
class AuthorizeCapturePayment:
    """Authorize and capture in a single server-side call."""

    invoice_id = Identifier(required=True)
    payment_method_id = Identifier(required=True)
    amount = Float(required=True)
    args = Text()


@payments.command_handler(part_of=Payment)
class AuthorizePaymentHandler:
    @handle(AuthorizePayment)
    def authorize_payment(self, command):
        service = GatewayProviderService()
        add_context(invoice_id=str(command.invoice_id))
        try:
            invoice = service.get_invoice(command.invoice_id)
            method = gateway_method_for(command.payment_method_id, service)
            return method.authorize_payment(invoice, load_args(command.args))
        finally:
            clear_context()

    @handle(AuthorizeCapturePayment)
    def authorize_capture_payment(self, command):
        service = GatewayProviderService()
        invoice = service.get_invoice(command.invoice_id)
        method = gateway_method_for(command.payment_method_id, service)
        return method.authorize_capture_payment(invoice, command.amount, load_args(command.args))
