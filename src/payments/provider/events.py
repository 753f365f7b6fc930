"""Domain events for the GatewayProvider aggregate."""

from protean.fields import DateTime, Identifier, String

from payments.domain import payments


@payments.event(part_of="GatewayProvider")
class GatewayProviderRegistered:
    __version__ = 1

    provider_id = Identifier(required=True)
    name = String(required=True)
    registered_at = DateTime(required=True)


@payments.event(part_of="GatewayProvider")
class PaymentMethodAdded:
    __version__ = 1

    provider_id = Identifier(required=True)
    payment_method_id = Identifier(required=True)
    name = String(required=True)
    payment_code = String(required=True)
