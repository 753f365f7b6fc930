"""SagePay iframe gateway method.

The customer enters card details in SagePay's hosted iframe, so
authorization happens out-of-band: authorize_payment only registers the
payment with the gateway, and funds are moved later by capture_payment.
Server-side authorize-and-capture, refunds and voids are not offered by
this method and come back as unsupported results.
"""

import structlog

from payments.gateway.fake_adapter import FakeProcessor
from payments.gateway.port import GatewayMethod, PaymentProcessor, PaymentResult
from payments.gateway.provider_service import GatewayProviderService
from payments.gateway.reconciliation import LedgerReconciler
from payments.gateway.settings import ProcessorSettings
from payments.invoice.invoice import Invoice
from payments.payment.payment import (
    CAPTURE_AMOUNT_KEY,
    NOT_CAPTURED,
    Payment,
    PaymentMethodType,
)
from payments.provider.provider import PaymentMethod

logger = structlog.get_logger(__name__)

GATEWAY_NAME = "SagePay"


class SagePayGatewayMethod(GatewayMethod):
    name = GATEWAY_NAME

    def __init__(
        self,
        provider_service: GatewayProviderService,
        payment_method: PaymentMethod,
        extended_data: dict[str, str],
        processor: PaymentProcessor | None = None,
    ) -> None:
        self.provider_service = provider_service
        self.payment_method = payment_method
        self.settings = ProcessorSettings.from_extended_data(extended_data)
        self.processor = processor or FakeProcessor(self.settings)
        self.reconciler = LedgerReconciler(provider_service, gateway_name=self.name)

    def authorize_payment(self, invoice: Invoice, args: dict[str, str]) -> PaymentResult:
        """Register a payment for the invoice total with the gateway.

        Authorization reserves funds without moving money, so the ledger
        records it as a zero-amount Debit.
        """
        self.reconciler.ensure_authorizable(invoice)

        payment = self.provider_service.create_payment(
            PaymentMethodType.CREDIT_CARD,
            invoice.total,
            str(self.payment_method.id),
        )
        payment.customer_id = invoice.customer_id
        payment.authorized = False
        payment.collected = False
        payment.payment_method_name = self.name
        payment.set_extended_value(CAPTURE_AMOUNT_KEY, NOT_CAPTURED)
        self.provider_service.save(payment)

        result = self.reconciler.execute(
            payment,
            lambda: self.processor.initialize_payment(invoice, payment, args or {}),
        )
        if result.success:
            payment.authorize()

        return self.reconciler.reconcile(
            invoice,
            payment,
            result,
            success_note="initialized",
            failure_note="request initialization error",
            amount=0,
        )

    def capture_payment(
        self, invoice: Invoice, payment: Payment, amount: float, args: dict[str, str]
    ) -> PaymentResult:
        """Capture previously authorized funds, fully or partially."""
        paid_total = self.reconciler.ensure_capturable(invoice, payment, amount)
        is_partial = round(amount + paid_total, 2) < round(invoice.total, 2)

        result = self.reconciler.execute(
            payment,
            lambda: self.processor.capture_payment(invoice, payment, amount, is_partial),
        )
        if result.success:
            payment.record_capture(amount, is_partial=is_partial)

        return self.reconciler.reconcile(
            invoice,
            payment,
            result,
            success_note="captured",
            failure_note="request capture error",
            amount=amount,
        )

    def authorize_capture_payment(self, invoice: Invoice, amount: float, args: dict[str, str]) -> PaymentResult:
        return self._unsupported("authorize and capture", invoice)

    def refund_payment(
        self, invoice: Invoice, payment: Payment, amount: float, args: dict[str, str]
    ) -> PaymentResult:
        return self._unsupported("refund", invoice, payment)

    def void_payment(self, invoice: Invoice, payment: Payment, args: dict[str, str]) -> PaymentResult:
        return self._unsupported("void", invoice, payment)

    def _unsupported(self, operation: str, invoice: Invoice, payment: Payment | None = None) -> PaymentResult:
        logger.warning(
            "Unsupported gateway operation requested",
            gateway=self.name,
            operation=operation,
            invoice_id=str(invoice.id) if invoice is not None else None,
            payment_id=str(payment.id) if payment is not None else None,
        )
        return PaymentResult.unsupported(self.name, operation, payment)
