"""Domain events for the invoice ledger."""

from protean.fields import DateTime, Float, Identifier, String

from payments.domain import payments


@payments.event(part_of="AppliedPayment")
class PaymentAppliedToInvoice:
    """A payment attempt was recorded against an invoice."""

    __version__ = 1

    applied_payment_id = Identifier(required=True)
    payment_id = Identifier(required=True)
    invoice_id = Identifier(required=True)
    applied_type = String(required=True)
    description = String(max_length=1000)
    amount = Float(required=True)
    applied_at = DateTime(required=True)
