"""Payment gateway composition root.

Resolves a payment method to its gateway method, wiring in explicit
dependencies: the provider service, the provider's extended data and a
processor built from the provider's processor settings.

get_processor() / set_processor() swap the processor implementation:
- FakeProcessor for development and testing (default)
- any PaymentProcessor the host installs for live traffic
"""

from protean.exceptions import ValidationError

from payments.gateway.fake_adapter import FakeProcessor
from payments.gateway.port import GatewayMethod, PaymentProcessor
from payments.gateway.provider_service import GatewayProviderService
from payments.gateway.sagepay import GATEWAY_NAME as SAGEPAY, SagePayGatewayMethod
from payments.gateway.settings import ProcessorSettings

_GATEWAY_METHODS = {
    SAGEPAY: SagePayGatewayMethod,
}

_current_processor: PaymentProcessor | None = None
_default_processor: FakeProcessor | None = None


def get_processor(settings: ProcessorSettings | None = None) -> PaymentProcessor:
    """Return the active processor. Defaults to a FakeProcessor for the settings.

    The default FakeProcessor is shared so runtime configuration survives
    between requests; settings passed here replace its settings on every
    call. A processor installed with set_processor keeps its own settings.
    """
    global _current_processor, _default_processor
    if _current_processor is None:
        _current_processor = _default_processor = FakeProcessor(settings)
    elif settings is not None and _current_processor is _default_processor:
        _default_processor.settings = settings
    return _current_processor


def set_processor(processor: PaymentProcessor) -> None:
    """Override the active processor (useful for tests)."""
    global _current_processor
    _current_processor = processor


def reset_processor() -> None:
    """Reset to default processor."""
    global _current_processor, _default_processor
    _current_processor = None
    _default_processor = None


def supported_gateways() -> list[str]:
    return sorted(_GATEWAY_METHODS)


def gateway_method_for(
    payment_method_id: str,
    provider_service: GatewayProviderService | None = None,
) -> GatewayMethod:
    """Build the gateway method that handles the given payment method."""
    service = provider_service or GatewayProviderService()
    provider = service.find_provider_for_method(payment_method_id)

    method_cls = _GATEWAY_METHODS.get(provider.name)
    if method_cls is None:
        raise ValidationError({"provider": [f"Unsupported gateway provider: {provider.name}"]})

    extended_data = provider.extended_values()
    return method_cls(
        service,
        provider.find_method(payment_method_id),
        extended_data,
        processor=get_processor(ProcessorSettings.from_extended_data(extended_data)),
    )
