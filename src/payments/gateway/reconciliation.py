"""Ledger reconciliation shared by all gateway methods.

Gateway methods compose a LedgerReconciler rather than inheriting lifecycle
templates. The reconciler owns the three things every variant must get
right in the same way:

- precondition checks, raised as ValidationError before any processor call
  or persistence write
- absorbing processor failures into failed PaymentResults
- appending exactly one terminal ledger record per processor call
  (Debit on success, Denied with a zero amount on failure)
"""

from collections.abc import Callable

import structlog
from protean.exceptions import ValidationError

from payments.gateway.exceptions import ProcessorError
from payments.gateway.port import PaymentResult
from payments.gateway.provider_service import GatewayProviderService
from payments.invoice.invoice import Invoice
from payments.ledger.applied_payment import AppliedPaymentType
from payments.payment.payment import Payment

logger = structlog.get_logger(__name__)


class LedgerReconciler:
    def __init__(self, provider_service: GatewayProviderService, gateway_name: str) -> None:
        self.provider_service = provider_service
        self.gateway_name = gateway_name

    # -------------------------------------------------------------------
    # Ledger reads
    # -------------------------------------------------------------------
    def paid_total(self, invoice: Invoice) -> float:
        """Sum of every amount already applied to the invoice."""
        applied = self.provider_service.applied_payments_for(str(invoice.id))
        return round(sum(record.amount or 0.0 for record in applied), 2)

    # -------------------------------------------------------------------
    # Preconditions
    # -------------------------------------------------------------------
    def ensure_authorizable(self, invoice: Invoice | None) -> None:
        if invoice is None:
            raise ValidationError({"invoice": ["An invoice is required"]})
        if invoice.total is None or invoice.total <= 0:
            raise ValidationError({"invoice": ["Invoice total must be positive"]})
        if invoice.is_voided:
            raise ValidationError({"invoice": ["Cannot take payment against a voided invoice"]})

    def ensure_capturable(self, invoice: Invoice | None, payment: Payment | None, amount: float | None) -> float:
        """Validate a capture request and return the amount already paid."""
        if invoice is None:
            raise ValidationError({"invoice": ["An invoice is required"]})
        if payment is None:
            raise ValidationError({"payment": ["A payment is required"]})
        if amount is None or amount <= 0:
            raise ValidationError({"amount": ["Capture amount must be positive"]})
        if not payment.authorized:
            raise ValidationError({"payment": ["Payment must be authorized before capture"]})
        if payment.collected:
            raise ValidationError({"payment": ["Payment has already been collected"]})

        applied = self.provider_service.applied_payments_for(str(invoice.id))
        if not any(str(record.payment_id) == str(payment.id) for record in applied):
            raise ValidationError({"payment": ["Payment was not authorized against this invoice"]})

        paid_total = round(sum(record.amount or 0.0 for record in applied), 2)
        remaining = round(invoice.total - paid_total, 2)
        if round(amount, 2) > remaining:
            raise ValidationError({"amount": [f"Capture amount ({amount}) exceeds remaining balance ({remaining})"]})
        return paid_total

    # -------------------------------------------------------------------
    # Processor calls and reconciliation
    # -------------------------------------------------------------------
    def execute(self, payment: Payment, call: Callable[[], PaymentResult]) -> PaymentResult:
        """Run a processor call, turning anything it raises into a failed result.

        Transport failures (connection resets, timeouts) are wrapped in a
        ProcessorError so the attempt still gets its Denied record.
        """
        try:
            return call()
        except Exception as exc:
            error = exc
            if not isinstance(exc, ProcessorError):
                error = ProcessorError(str(exc) or type(exc).__name__, gateway=self.gateway_name)
            logger.warning(
                "Processor raised instead of returning a failed result",
                gateway=self.gateway_name,
                payment_id=str(payment.id),
                reason=str(error),
                error_type=type(exc).__name__,
            )
            return PaymentResult.failed(payment, error)

    def reconcile(
        self,
        invoice: Invoice,
        payment: Payment,
        result: PaymentResult,
        success_note: str,
        failure_note: str,
        amount: float,
    ) -> PaymentResult:
        """Append the terminal ledger record for a processor call.

        On success the payment is saved before the Debit is applied. On
        failure the payment is left as persisted and a zero-amount Denied
        record carries the cause.
        """
        if not result.success:
            self.provider_service.apply_payment_to_invoice(
                payment_id=str(payment.id),
                invoice_id=str(invoice.id),
                applied_type=AppliedPaymentType.DENIED,
                description=f"{self.gateway_name}: {failure_note}: {result.failure_reason}",
                amount=0,
            )
            logger.warning(
                "Payment denied by gateway",
                gateway=self.gateway_name,
                invoice_id=str(invoice.id),
                payment_id=str(payment.id),
                reason=result.failure_reason,
            )
            return result

        self.provider_service.save(payment)
        self.provider_service.apply_payment_to_invoice(
            payment_id=str(payment.id),
            invoice_id=str(invoice.id),
            applied_type=AppliedPaymentType.DEBIT,
            description=f"{self.gateway_name}: {success_note}",
            amount=amount,
        )
        logger.info(
            "Payment applied to invoice",
            gateway=self.gateway_name,
            invoice_id=str(invoice.id),
            payment_id=str(payment.id),
            amount=amount,
        )
        return result
