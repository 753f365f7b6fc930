"""Invoice aggregate: the host-owned billable total that payments settle.

Invoices are generated by the order system and are read-only to gateway
methods: a gateway only reads the total and the customer reference, and
records payment attempts against the invoice through the applied-payment
ledger.

State Machine:
    DRAFT → ISSUED → PAID
    DRAFT → VOIDED
    ISSUED → VOIDED
"""

from datetime import UTC, datetime
from enum import Enum
from uuid import uuid4

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, String

from payments.domain import payments
from payments.invoice.events import (
    InvoiceGenerated,
    InvoiceIssued,
    InvoicePaid,
    InvoiceVoided,
)


class InvoiceStatus(Enum):
    DRAFT = "Draft"
    ISSUED = "Issued"
    PAID = "Paid"
    VOIDED = "Voided"


_VALID_TRANSITIONS = {
    InvoiceStatus.DRAFT: {InvoiceStatus.ISSUED, InvoiceStatus.VOIDED},
    InvoiceStatus.ISSUED: {InvoiceStatus.PAID, InvoiceStatus.VOIDED},
    InvoiceStatus.PAID: set(),  # Terminal
    InvoiceStatus.VOIDED: set(),  # Terminal
}


@payments.entity(part_of="Invoice")
class InvoiceLineItem:
    """A line item on an invoice."""

    description = String(required=True, max_length=500)
    quantity = Float(required=True)
    unit_price = Float(required=True)
    total = Float(required=True)


@payments.aggregate
class Invoice:
    customer_id = Identifier(required=True)
    invoice_number = String(required=True, max_length=50)
    currency = String(max_length=3, default="GBP")
    line_items = HasMany(InvoiceLineItem)
    subtotal = Float(default=0.0)
    tax = Float(default=0.0)
    total = Float(default=0.0)
    status = String(
        choices=InvoiceStatus,
        default=InvoiceStatus.DRAFT.value,
    )
    issued_at = DateTime()
    paid_at = DateTime()
    created_at = DateTime()
    updated_at = DateTime()

    def _assert_can_transition(self, target_status: InvoiceStatus) -> None:
        current = InvoiceStatus(self.status)
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target_status.value}"]})

    @classmethod
    def create(
        cls,
        customer_id: str,
        line_items_data: list[dict],
        tax: float = 0.0,
        currency: str = "GBP",
    ):
        """Create a new draft invoice from line item data."""
        if not line_items_data:
            raise ValidationError({"line_items": ["An invoice needs at least one line item"]})

        now = datetime.now(UTC)
        invoice_number = f"INV-{uuid4().hex[:8].upper()}"

        items = []
        subtotal = 0.0
        for item_data in line_items_data:
            item_total = round(item_data["quantity"] * item_data["unit_price"], 2)
            items.append(
                InvoiceLineItem(
                    description=item_data["description"],
                    quantity=item_data["quantity"],
                    unit_price=item_data["unit_price"],
                    total=item_total,
                )
            )
            subtotal += item_total

        subtotal = round(subtotal, 2)
        total = round(subtotal + tax, 2)

        invoice = cls(
            customer_id=customer_id,
            invoice_number=invoice_number,
            currency=currency,
            subtotal=subtotal,
            tax=tax,
            total=total,
            created_at=now,
            updated_at=now,
        )
        for item in items:
            invoice.add_line_items(item)

        invoice.raise_(
            InvoiceGenerated(
                invoice_id=str(invoice.id),
                customer_id=customer_id,
                invoice_number=invoice_number,
                currency=currency,
                total=total,
                generated_at=now,
            )
        )
        return invoice

    @property
    def is_voided(self) -> bool:
        return InvoiceStatus(self.status) == InvoiceStatus.VOIDED

    def issue(self) -> None:
        """Issue the invoice to the customer. The total is fixed from here on."""
        self._assert_can_transition(InvoiceStatus.ISSUED)
        now = datetime.now(UTC)
        self.status = InvoiceStatus.ISSUED.value
        self.issued_at = now
        self.updated_at = now
        self.raise_(
            InvoiceIssued(
                invoice_id=str(self.id),
                invoice_number=self.invoice_number,
                total=self.total,
                issued_at=now,
            )
        )

    def mark_paid(self) -> None:
        """Mark the invoice as paid."""
        self._assert_can_transition(InvoiceStatus.PAID)
        now = datetime.now(UTC)
        self.status = InvoiceStatus.PAID.value
        self.paid_at = now
        self.updated_at = now
        self.raise_(
            InvoicePaid(
                invoice_id=str(self.id),
                paid_at=now,
            )
        )

    def void(self, reason: str) -> None:
        """Void the invoice."""
        self._assert_can_transition(InvoiceStatus.VOIDED)
        now = datetime.now(UTC)
        self.status = InvoiceStatus.VOIDED.value
        self.updated_at = now
        self.raise_(
            InvoiceVoided(
                invoice_id=str(self.id),
                reason=reason,
                voided_at=now,
            )
        )
