"""GatewayProvider aggregate: a configured payment gateway and its methods.

The provider's extended data holds the processor settings document for the
gateway; each PaymentMethod entity is one way of paying through it (for
SagePay, the iframe card method).
"""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, String, Text

from payments.domain import payments
from payments.provider.events import GatewayProviderRegistered, PaymentMethodAdded
from payments.utils.extended_data import dump_extended_data, load_extended_data


@payments.entity(part_of="GatewayProvider")
class PaymentMethod:
    """A payment method offered by a gateway provider."""

    name = String(required=True, max_length=255)
    payment_code = String(required=True, max_length=50)
    description = String(max_length=500)


@payments.aggregate(limit=None)
class GatewayProvider:
    name = String(required=True, max_length=100)
    extended_data = Text(default="{}")  # JSON object of string -> string
    payment_methods = HasMany(PaymentMethod)
    created_at = DateTime()

    @classmethod
    def register(cls, name: str, extended_data: dict[str, str] | None = None):
        now = datetime.now(UTC)
        provider = cls(
            name=name,
            extended_data=dump_extended_data(extended_data or {}),
            created_at=now,
        )
        provider.raise_(
            GatewayProviderRegistered(
                provider_id=str(provider.id),
                name=name,
                registered_at=now,
            )
        )
        return provider

    def extended_values(self) -> dict[str, str]:
        return load_extended_data(self.extended_data)

    def add_method(self, name: str, payment_code: str, description: str | None = None) -> PaymentMethod:
        """Offer a new payment method through this provider."""
        if any(m.payment_code == payment_code for m in (self.payment_methods or [])):
            raise ValidationError({"payment_code": [f"Payment code '{payment_code}' is already registered"]})

        method = PaymentMethod(name=name, payment_code=payment_code, description=description)
        self.add_payment_methods(method)
        self.raise_(
            PaymentMethodAdded(
                provider_id=str(self.id),
                payment_method_id=str(method.id),
                name=name,
                payment_code=payment_code,
            )
        )
        return method

    def find_method(self, payment_method_id: str) -> PaymentMethod | None:
        return next(
            (m for m in (self.payment_methods or []) if str(m.id) == str(payment_method_id)),
            None,
        )
