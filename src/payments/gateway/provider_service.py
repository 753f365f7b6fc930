"""Gateway provider service: the host's persistence contract for gateways.

Gateway methods never touch repositories directly. They create and save
payments and append ledger records through this service, which keeps the
host free to change how payments and the ledger are stored.
"""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from payments.invoice.invoice import Invoice
from payments.ledger.applied_payment import AppliedPayment, AppliedPaymentType
from payments.payment.payment import Payment, PaymentMethodType
from payments.provider.provider import GatewayProvider


class GatewayProviderService:
    def create_payment(
        self,
        payment_method_type: PaymentMethodType | str,
        amount: float,
        payment_method_key: str | None,
    ) -> Payment:
        return Payment.create(
            payment_method_type=payment_method_type,
            amount=amount,
            payment_method_key=payment_method_key,
        )

    def save(self, payment: Payment) -> None:
        current_domain.repository_for(Payment).add(payment)

    def apply_payment_to_invoice(
        self,
        payment_id: str,
        invoice_id: str,
        applied_type: AppliedPaymentType | str,
        description: str,
        amount: float,
    ) -> AppliedPayment:
        """Append a ledger record linking the payment to the invoice."""
        record = AppliedPayment.record(
            payment_id=str(payment_id),
            invoice_id=str(invoice_id),
            applied_type=applied_type,
            description=description,
            amount=amount,
        )
        current_domain.repository_for(AppliedPayment).add(record)
        return record

    def applied_payments_for(self, invoice_id: str) -> list[AppliedPayment]:
        """Return the invoice's ledger in the order records were applied."""
        records = (
            current_domain.repository_for(AppliedPayment)
            ._dao.query.filter(invoice_id=str(invoice_id))
            .all()
            .items
        )
        return sorted(records, key=lambda r: r.created_at)

    def get_invoice(self, invoice_id: str) -> Invoice:
        return current_domain.repository_for(Invoice).get(invoice_id)

    def get_payment(self, payment_id: str) -> Payment:
        return current_domain.repository_for(Payment).get(payment_id)

    def find_provider_for_method(self, payment_method_id: str) -> GatewayProvider:
        """Find the provider offering the given payment method."""
        repo = current_domain.repository_for(GatewayProvider)
        for record in repo._dao.query.all().items:
            provider = repo.get(record.id)
            if provider.find_method(payment_method_id) is not None:
                return provider
        raise ObjectNotFoundError(f"No gateway provider offers payment method `{payment_method_id}`")
