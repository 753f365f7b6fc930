"""Domain events for the Invoice aggregate."""

from protean.fields import DateTime, Float, Identifier, String

from payments.domain import payments


@payments.event(part_of="Invoice")
class InvoiceGenerated:
    """A new draft invoice was generated."""

    __version__ = 1

    invoice_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    invoice_number = String(required=True)
    currency = String(required=True)
    total = Float(required=True)
    generated_at = DateTime(required=True)


@payments.event(part_of="Invoice")
class InvoiceIssued:
    """An invoice was issued to the customer and its total fixed."""

    __version__ = 1

    invoice_id = Identifier(required=True)
    invoice_number = String(required=True)
    total = Float(required=True)
    issued_at = DateTime(required=True)


@payments.event(part_of="Invoice")
class InvoicePaid:
    __version__ = 1

    invoice_id = Identifier(required=True)
    paid_at = DateTime(required=True)


@payments.event(part_of="Invoice")
class InvoiceVoided:
    __version__ = 1

    invoice_id = Identifier(required=True)
    reason = String(required=True)
    voided_at = DateTime(required=True)
