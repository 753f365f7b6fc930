"""Configurable fake SagePay processor for development and testing.

This processor simulates the gateway without any external calls. It can be
configured at runtime to succeed or fail, making it useful for:
- Manual API testing via /payments/processor/configure
- Automated tests with predictable outcomes
- Development without real vendor credentials

Successful calls stamp the same extended-data keys the real gateway flow
would: a transaction token on initialization and a capture result on
capture.
"""

from uuid import uuid4

from payments.gateway.exceptions import ProcessorError
from payments.gateway.port import PaymentProcessor, PaymentResult
from payments.gateway.settings import ProcessorSettings
from payments.invoice.invoice import Invoice
from payments.payment.payment import Payment

TRANSACTION_TOKEN_KEY = "vpsTxId"
CAPTURE_RESULT_KEY = "captureTransactionResult"


class FakeProcessor(PaymentProcessor):
    """Configurable fake payment processor."""

    def __init__(self, settings: ProcessorSettings | None = None) -> None:
        self.settings = settings or ProcessorSettings()
        self.should_succeed: bool = True
        self.failure_reason: str = "Card declined"
        self.calls: list[dict] = []

    def configure(self, should_succeed: bool, failure_reason: str = "Card declined") -> None:
        """Configure processor behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def initialize_payment(self, invoice: Invoice, payment: Payment, args: dict[str, str]) -> PaymentResult:
        call = {
            "method": "initialize_payment",
            "invoice_id": str(invoice.id),
            "payment_id": str(payment.id),
            "amount": payment.amount,
            "vendor_name": self.settings.vendor_name,
            "args": dict(args or {}),
        }
        self.calls.append(call)

        if self.should_succeed:
            payment.set_extended_value(TRANSACTION_TOKEN_KEY, f"fake_vps_{uuid4().hex[:12]}")
            return PaymentResult.succeeded(payment)
        return PaymentResult.failed(payment, ProcessorError(self.failure_reason, gateway="SagePay"))

    def capture_payment(self, invoice: Invoice, payment: Payment, amount: float, is_partial: bool) -> PaymentResult:
        call = {
            "method": "capture_payment",
            "invoice_id": str(invoice.id),
            "payment_id": str(payment.id),
            "amount": amount,
            "is_partial": is_partial,
        }
        self.calls.append(call)

        if self.should_succeed:
            payment.set_extended_value(CAPTURE_RESULT_KEY, f"fake_cap_{uuid4().hex[:12]}")
            return PaymentResult.succeeded(payment)
        return PaymentResult.failed(payment, ProcessorError(self.failure_reason, gateway="SagePay"))
