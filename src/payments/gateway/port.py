"""Gateway ports: the processor contract and the gateway method capability.

A PaymentProcessor performs the network calls for one gateway. A
GatewayMethod is what the order-processing engine talks to: it builds the
payment, delegates to its processor and reconciles the outcome against the
invoice ledger. Every gateway variant implements the full GatewayMethod
interface, answering lifecycle operations it cannot perform with an
unsupported PaymentResult.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from payments.gateway.exceptions import UnsupportedOperationError
from payments.invoice.invoice import Invoice
from payments.payment.payment import Payment


@dataclass(frozen=True)
class PaymentResult:
    """Result of a single processor call."""

    success: bool
    payment: Payment | None = None
    error: Exception | None = None

    @classmethod
    def succeeded(cls, payment: Payment) -> "PaymentResult":
        return cls(success=True, payment=payment)

    @classmethod
    def failed(cls, payment: Payment | None, error: Exception) -> "PaymentResult":
        return cls(success=False, payment=payment, error=error)

    @classmethod
    def unsupported(cls, gateway: str, operation: str, payment: Payment | None = None) -> "PaymentResult":
        return cls(success=False, payment=payment, error=UnsupportedOperationError(gateway, operation))

    @property
    def is_unsupported(self) -> bool:
        return isinstance(self.error, UnsupportedOperationError)

    @property
    def failure_reason(self) -> str | None:
        if self.success:
            return None
        return str(self.error) if self.error is not None else "Unknown failure"

    def raise_for_error(self) -> None:
        """Raise the carried error, if any."""
        if self.error is not None:
            raise self.error


class PaymentProcessor(ABC):
    """Abstract gateway processor interface."""

    @abstractmethod
    def initialize_payment(self, invoice: Invoice, payment: Payment, args: dict[str, str]) -> PaymentResult:
        """Register the payment with the gateway ahead of the hosted card form."""
        ...

    @abstractmethod
    def capture_payment(self, invoice: Invoice, payment: Payment, amount: float, is_partial: bool) -> PaymentResult:
        """Move previously authorized funds."""
        ...


class GatewayMethod(ABC):
    """Lifecycle capability every gateway method exposes to the host."""

    name: str

    @abstractmethod
    def authorize_payment(self, invoice: Invoice, args: dict[str, str]) -> PaymentResult: ...

    @abstractmethod
    def capture_payment(
        self, invoice: Invoice, payment: Payment, amount: float, args: dict[str, str]
    ) -> PaymentResult: ...

    @abstractmethod
    def authorize_capture_payment(self, invoice: Invoice, amount: float, args: dict[str, str]) -> PaymentResult: ...

    @abstractmethod
    def refund_payment(
        self, invoice: Invoice, payment: Payment, amount: float, args: dict[str, str]
    ) -> PaymentResult: ...

    @abstractmethod
    def void_payment(self, invoice: Invoice, payment: Payment, args: dict[str, str]) -> PaymentResult: ...
