import pytest
from payments.gateway import reset_processor
from payments.gateway.fake_adapter import FakeProcessor
from payments.gateway.provider_service import GatewayProviderService
from payments.gateway.sagepay import SagePayGatewayMethod
from payments.gateway.settings import ProcessorSettings
from payments.invoice.invoice import Invoice
from payments.provider.provider import GatewayProvider
from protean import current_domain
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def payments_bed():
    from payments.domain import payments

    bed = DomainFixture(payments)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(payments_bed):
    with payments_bed.domain_context():
        yield

        # Clear all databases
        for _, provider in current_domain.providers.items():
            provider._data_reset()

        # Drain event stores
        current_domain.event_store.store._data_reset()


@pytest.fixture(autouse=True)
def _processor():
    reset_processor()
    yield
    reset_processor()


# ---------------------------------------------------------------------------
# Shared gateway fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def invoice():
    """A persisted, issued invoice totalling 100.00."""
    invoice = Invoice.create(
        customer_id="cust-001",
        line_items_data=[
            {"description": "Espresso Machine", "quantity": 1, "unit_price": 79.99},
            {"description": "Coffee Beans", "quantity": 2, "unit_price": 6.50},
        ],
        tax=7.01,
    )
    invoice.issue()
    current_domain.repository_for(Invoice).add(invoice)
    return current_domain.repository_for(Invoice).get(invoice.id)


@pytest.fixture
def provider_service():
    return GatewayProviderService()


@pytest.fixture
def payment_method():
    """A SagePay iframe payment method offered by a persisted provider."""
    provider = GatewayProvider.register(
        name="SagePay",
        extended_data=ProcessorSettings(vendor_name="acme", mode="simulator").to_extended_data(),
    )
    method = provider.add_method(name="SagePay IFrame", payment_code="SagePayIFrame")
    current_domain.repository_for(GatewayProvider).add(provider)
    return method


@pytest.fixture
def processor():
    return FakeProcessor(ProcessorSettings(vendor_name="acme"))


@pytest.fixture
def sagepay(provider_service, payment_method, processor):
    return SagePayGatewayMethod(
        provider_service,
        payment_method,
        ProcessorSettings(vendor_name="acme").to_extended_data(),
        processor=processor,
    )
