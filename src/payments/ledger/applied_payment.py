"""AppliedPayment aggregate: the append-only invoice ledger.

Every payment lifecycle attempt that reaches a processor leaves exactly one
record here, linking the payment to the invoice with a type, a note and an
amount. Records are never updated or deleted: each attempt is a new
aggregate with its own identity, so concurrent or retried attempts are
individually auditable.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, String

from payments.domain import payments
from payments.ledger.events import PaymentAppliedToInvoice


class AppliedPaymentType(Enum):
    DEBIT = "Debit"
    CREDIT = "Credit"
    DENIED = "Denied"
    VOID = "Void"
    REFUND = "Refund"


@payments.aggregate(limit=None)
class AppliedPayment:
    payment_id = Identifier(required=True)
    invoice_id = Identifier(required=True)
    applied_type = String(
        max_length=20,
        choices=AppliedPaymentType,
        required=True,
    )
    description = String(max_length=1000)
    amount = Float(default=0.0)
    created_at = DateTime()

    @classmethod
    def record(
        cls,
        payment_id: str,
        invoice_id: str,
        applied_type: AppliedPaymentType | str,
        description: str,
        amount: float,
    ):
        """Create a new ledger record for a payment attempt."""
        if amount is None or amount < 0:
            raise ValidationError({"amount": ["Applied amount cannot be negative"]})

        now = datetime.now(UTC)
        applied_type = AppliedPaymentType(applied_type).value
        record = cls(
            payment_id=payment_id,
            invoice_id=invoice_id,
            applied_type=applied_type,
            description=description,
            amount=amount,
            created_at=now,
        )
        record.raise_(
            PaymentAppliedToInvoice(
                applied_payment_id=str(record.id),
                payment_id=str(payment_id),
                invoice_id=str(invoice_id),
                applied_type=applied_type,
                description=description,
                amount=amount,
                applied_at=now,
            )
        )
        return record
