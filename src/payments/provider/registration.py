"""Gateway provider registration: commands and handler."""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain
from pydantic import ValidationError as SettingsValidationError

from payments.domain import payments
from payments.gateway import supported_gateways
from payments.gateway.settings import ProcessorSettings
from payments.provider.provider import GatewayProvider

logger = structlog.get_logger(__name__)


@payments.command(part_of="GatewayProvider")
class RegisterGatewayProvider:
    """Register a gateway provider with its processor settings."""

    name = String(required=True, max_length=100)
    processor_settings = Text()  # JSON: {vendor_name, mode, return_url, abort_url}


@payments.command(part_of="GatewayProvider")
class AddPaymentMethod:
    """Offer a payment method through a registered provider."""

    provider_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    payment_code = String(required=True, max_length=50)
    description = String(max_length=500)


@payments.command_handler(part_of=GatewayProvider)
class GatewayProviderHandler:
    @handle(RegisterGatewayProvider)
    def register_provider(self, command):
        if command.name not in supported_gateways():
            raise ValidationError({"name": [f"Unsupported gateway provider: {command.name}"]})

        try:
            settings = (
                ProcessorSettings.model_validate_json(command.processor_settings)
                if command.processor_settings
                else ProcessorSettings()
            )
        except SettingsValidationError as exc:
            raise ValidationError({"processor_settings": [str(error["msg"]) for error in exc.errors()]}) from exc

        provider = GatewayProvider.register(
            name=command.name,
            extended_data=settings.to_extended_data(),
        )
        current_domain.repository_for(GatewayProvider).add(provider)
        logger.info("Gateway provider registered", provider_id=str(provider.id), name=command.name)
        return str(provider.id)

    @handle(AddPaymentMethod)
    def add_payment_method(self, command):
        repo = current_domain.repository_for(GatewayProvider)
        provider = repo.get(command.provider_id)
        method = provider.add_method(
            name=command.name,
            payment_code=command.payment_code,
            description=command.description,
        )
        repo.add(provider)
        return str(method.id)
