"""Domain events for the Payment aggregate."""

from protean.fields import Boolean, DateTime, Float, Identifier, String

from payments.domain import payments


@payments.event(part_of="Payment")
class PaymentCreated:
    """A payment record was created ahead of a processor call."""

    __version__ = 1

    payment_id = Identifier(required=True)
    payment_method_key = Identifier()
    payment_method_type = String(required=True)
    amount = Float(required=True)
    created_at = DateTime(required=True)


@payments.event(part_of="Payment")
class PaymentAuthorized:
    """The gateway reserved funds for the payment."""

    __version__ = 1

    payment_id = Identifier(required=True)
    amount = Float(required=True)
    authorized_at = DateTime(required=True)


@payments.event(part_of="Payment")
class PaymentCaptured:
    """The gateway moved previously authorized funds, fully or partially."""

    __version__ = 1

    payment_id = Identifier(required=True)
    amount = Float(required=True)
    captured_total = Float(required=True)
    is_partial = Boolean(required=True)
    captured_at = DateTime(required=True)
