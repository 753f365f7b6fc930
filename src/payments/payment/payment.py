"""Payment aggregate: one attempt to collect funds against an invoice.

A Payment is created by a gateway method before the processor is called,
persisted by the gateway provider service, and mutated after each processor
response. The authorized and collected flags carry the lifecycle; the
extended-data map carries processor metadata (transaction tokens, capture
amounts) as strings.

State Machine (per invoice):
    NEW → AUTHORIZED → COLLECTED
    NEW → AUTHORIZED → PARTIALLY_COLLECTED → ... → COLLECTED
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Identifier, String, Text

from payments.domain import payments
from payments.payment.events import PaymentAuthorized, PaymentCaptured, PaymentCreated
from payments.utils.extended_data import dump_extended_data, load_extended_data

# Sentinel stored under CAPTURE_AMOUNT_KEY until the first capture
NOT_CAPTURED = -1

CAPTURE_AMOUNT_KEY = "captureAmount"
CAPTURED_TOTAL_KEY = "capturedTotal"


class PaymentMethodType(Enum):
    CREDIT_CARD = "CreditCard"
    CASH = "Cash"
    PURCHASE_ORDER = "PurchaseOrder"
    OTHER = "Other"


class PaymentState(Enum):
    NEW = "New"
    AUTHORIZED = "Authorized"
    PARTIALLY_COLLECTED = "PartiallyCollected"
    COLLECTED = "Collected"


@payments.aggregate
class Payment:
    customer_id = Identifier()
    payment_method_key = Identifier()
    payment_method_type = String(
        max_length=50,
        choices=PaymentMethodType,
        default=PaymentMethodType.CREDIT_CARD.value,
    )
    payment_method_name = String(max_length=255)
    amount = Float(default=0.0)
    authorized = Boolean(default=False)
    collected = Boolean(default=False)
    extended_data = Text(default="{}")  # JSON object of string -> string
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(
        cls,
        payment_method_type: PaymentMethodType | str,
        amount: float,
        payment_method_key: str | None = None,
    ):
        """Create a new, unauthorized payment."""
        if amount is None or amount < 0:
            raise ValidationError({"amount": ["Payment amount cannot be negative"]})

        now = datetime.now(UTC)
        payment = cls(
            payment_method_key=payment_method_key,
            payment_method_type=PaymentMethodType(payment_method_type).value,
            amount=amount,
            authorized=False,
            collected=False,
            created_at=now,
            updated_at=now,
        )
        payment.raise_(
            PaymentCreated(
                payment_id=str(payment.id),
                payment_method_key=payment_method_key,
                payment_method_type=payment.payment_method_type,
                amount=amount,
                created_at=now,
            )
        )
        return payment

    # -------------------------------------------------------------------
    # Extended data
    # -------------------------------------------------------------------
    def get_extended_value(self, key: str, default: str | None = None) -> str | None:
        return load_extended_data(self.extended_data).get(key, default)

    def set_extended_value(self, key: str, value) -> None:
        data = load_extended_data(self.extended_data)
        data[key] = str(value)
        self.extended_data = dump_extended_data(data)

    def extended_values(self) -> dict[str, str]:
        return load_extended_data(self.extended_data)

    # -------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------
    @property
    def captured_total(self) -> float:
        return float(self.get_extended_value(CAPTURED_TOTAL_KEY, "0"))

    @property
    def state(self) -> PaymentState:
        if not self.authorized:
            return PaymentState.NEW
        if self.collected:
            return PaymentState.COLLECTED
        if self.captured_total > 0:
            return PaymentState.PARTIALLY_COLLECTED
        return PaymentState.AUTHORIZED

    def authorize(self) -> None:
        """Record that the gateway reserved the funds."""
        if self.authorized:
            raise ValidationError({"authorized": ["Payment is already authorized"]})

        now = datetime.now(UTC)
        self.authorized = True
        self.updated_at = now
        self.raise_(
            PaymentAuthorized(
                payment_id=str(self.id),
                amount=self.amount,
                authorized_at=now,
            )
        )

    def record_capture(self, amount: float, is_partial: bool) -> None:
        """Record funds moved by the gateway.

        The payment stays uncollected while captures are partial; the capture
        that completes the invoice marks it collected.
        """
        if not self.authorized:
            raise ValidationError({"authorized": ["Payment must be authorized before capture"]})
        if self.collected:
            raise ValidationError({"collected": ["Payment has already been collected"]})

        now = datetime.now(UTC)
        captured_total = round(self.captured_total + amount, 2)
        self.set_extended_value(CAPTURE_AMOUNT_KEY, amount)
        self.set_extended_value(CAPTURED_TOTAL_KEY, captured_total)
        self.collected = not is_partial
        self.updated_at = now
        self.raise_(
            PaymentCaptured(
                payment_id=str(self.id),
                amount=amount,
                captured_total=captured_total,
                is_partial=is_partial,
                captured_at=now,
            )
        )
