"""FastAPI routes for the Payments domain: invoices, providers and payments."""

import json
import os

from fastapi import APIRouter, HTTPException
from protean.utils.globals import current_domain

from payments.api.schemas import (
    AddPaymentMethodRequest,
    AppliedPaymentResponse,
    AuthorizeCapturePaymentRequest,
    AuthorizePaymentRequest,
    CapturePaymentRequest,
    ConfigureProcessorRequest,
    GenerateInvoiceRequest,
    InvoiceIdResponse,
    LedgerResponse,
    PaymentMethodIdResponse,
    PaymentResultResponse,
    ProcessorConfigResponse,
    ProviderIdResponse,
    RefundPaymentRequest,
    RegisterGatewayProviderRequest,
    StatusResponse,
    VoidInvoiceRequest,
    VoidPaymentRequest,
)
from payments.gateway import get_processor
from payments.gateway.fake_adapter import FakeProcessor
from payments.gateway.port import PaymentResult
from payments.gateway.provider_service import GatewayProviderService
from payments.invoice.generation import GenerateInvoice
from payments.invoice.issuing import IssueInvoice
from payments.invoice.voiding import VoidInvoice
from payments.payment.authorization import AuthorizeCapturePayment, AuthorizePayment
from payments.payment.capture import CapturePayment
from payments.payment.refund import RefundPayment
from payments.payment.voiding import VoidPayment
from payments.provider.registration import AddPaymentMethod, RegisterGatewayProvider


def _result_response(result: PaymentResult) -> PaymentResultResponse:
    """Map a PaymentResult to the API contract. Unsupported operations are 501s."""
    if result.is_unsupported:
        raise HTTPException(status_code=501, detail=result.failure_reason)

    payment = result.payment
    return PaymentResultResponse(
        success=result.success,
        payment_id=str(payment.id) if payment is not None else None,
        authorized=bool(payment.authorized) if payment is not None else False,
        collected=bool(payment.collected) if payment is not None else False,
        failure_reason=result.failure_reason,
    )


# ---------------------------------------------------------------------------
# Invoice Router
# ---------------------------------------------------------------------------
invoice_router = APIRouter(prefix="/invoices", tags=["invoices"])


@invoice_router.post("", status_code=201, response_model=InvoiceIdResponse)
async def generate_invoice(body: GenerateInvoiceRequest) -> InvoiceIdResponse:
    """Generate a new draft invoice."""
    line_items_json = json.dumps([item.model_dump() for item in body.line_items])
    command = GenerateInvoice(
        customer_id=body.customer_id,
        line_items=line_items_json,
        tax=body.tax,
        currency=body.currency,
    )
    result = current_domain.process(command, asynchronous=False)
    return InvoiceIdResponse(invoice_id=result)


@invoice_router.put("/{invoice_id}/issue", response_model=StatusResponse)
async def issue_invoice(invoice_id: str) -> StatusResponse:
    """Issue a draft invoice."""
    current_domain.process(IssueInvoice(invoice_id=invoice_id), asynchronous=False)
    return StatusResponse(status="issued")


@invoice_router.put("/{invoice_id}/void", response_model=StatusResponse)
async def void_invoice(invoice_id: str, body: VoidInvoiceRequest) -> StatusResponse:
    """Void an existing invoice."""
    command = VoidInvoice(
        invoice_id=invoice_id,
        reason=body.reason,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse(status="voided")


@invoice_router.get("/{invoice_id}/ledger", response_model=LedgerResponse)
async def invoice_ledger(invoice_id: str) -> LedgerResponse:
    """Return every payment attempt recorded against the invoice."""
    service = GatewayProviderService()
    invoice = service.get_invoice(invoice_id)
    records = service.applied_payments_for(invoice_id)
    return LedgerResponse(
        invoice_id=str(invoice.id),
        total=invoice.total,
        paid_total=round(sum(r.amount or 0.0 for r in records), 2),
        entries=[
            AppliedPaymentResponse(
                applied_payment_id=str(r.id),
                payment_id=str(r.payment_id),
                applied_type=r.applied_type,
                description=r.description,
                amount=r.amount,
            )
            for r in records
        ],
    )


# ---------------------------------------------------------------------------
# Invoice Payment Routes
# ---------------------------------------------------------------------------
@invoice_router.post("/{invoice_id}/payments/authorize", response_model=PaymentResultResponse)
async def authorize_payment(invoice_id: str, body: AuthorizePaymentRequest) -> PaymentResultResponse:
    """Authorize a payment for the invoice total."""
    command = AuthorizePayment(
        invoice_id=invoice_id,
        payment_method_id=body.payment_method_id,
        args=json.dumps(body.args),
    )
    return _result_response(current_domain.process(command, asynchronous=False))


@invoice_router.post("/{invoice_id}/payments/authorize-capture", response_model=PaymentResultResponse)
async def authorize_capture_payment(
    invoice_id: str, body: AuthorizeCapturePaymentRequest
) -> PaymentResultResponse:
    """Authorize and capture in one call."""
    command = AuthorizeCapturePayment(
        invoice_id=invoice_id,
        payment_method_id=body.payment_method_id,
        amount=body.amount,
        args=json.dumps(body.args),
    )
    return _result_response(current_domain.process(command, asynchronous=False))


@invoice_router.post("/{invoice_id}/payments/{payment_id}/capture", response_model=PaymentResultResponse)
async def capture_payment(invoice_id: str, payment_id: str, body: CapturePaymentRequest) -> PaymentResultResponse:
    """Capture previously authorized funds."""
    command = CapturePayment(
        invoice_id=invoice_id,
        payment_id=payment_id,
        amount=body.amount,
        args=json.dumps(body.args),
    )
    return _result_response(current_domain.process(command, asynchronous=False))


@invoice_router.post("/{invoice_id}/payments/{payment_id}/refund", response_model=PaymentResultResponse)
async def refund_payment(invoice_id: str, payment_id: str, body: RefundPaymentRequest) -> PaymentResultResponse:
    """Refund previously captured funds."""
    command = RefundPayment(
        invoice_id=invoice_id,
        payment_id=payment_id,
        amount=body.amount,
        args=json.dumps(body.args),
    )
    return _result_response(current_domain.process(command, asynchronous=False))


@invoice_router.post("/{invoice_id}/payments/{payment_id}/void", response_model=PaymentResultResponse)
async def void_payment(invoice_id: str, payment_id: str, body: VoidPaymentRequest) -> PaymentResultResponse:
    """Void an authorization before capture."""
    command = VoidPayment(
        invoice_id=invoice_id,
        payment_id=payment_id,
        args=json.dumps(body.args),
    )
    return _result_response(current_domain.process(command, asynchronous=False))


# ---------------------------------------------------------------------------
# Gateway Provider Router
# ---------------------------------------------------------------------------
provider_router = APIRouter(prefix="/gateway-providers", tags=["gateway-providers"])


@provider_router.post("", status_code=201, response_model=ProviderIdResponse)
async def register_provider(body: RegisterGatewayProviderRequest) -> ProviderIdResponse:
    """Register a gateway provider and its processor settings."""
    command = RegisterGatewayProvider(
        name=body.name,
        processor_settings=body.processor_settings.model_dump_json(),
    )
    result = current_domain.process(command, asynchronous=False)
    return ProviderIdResponse(provider_id=result)


@provider_router.post("/{provider_id}/methods", status_code=201, response_model=PaymentMethodIdResponse)
async def add_payment_method(provider_id: str, body: AddPaymentMethodRequest) -> PaymentMethodIdResponse:
    """Offer a payment method through the provider."""
    command = AddPaymentMethod(
        provider_id=provider_id,
        name=body.name,
        payment_code=body.payment_code,
        description=body.description,
    )
    result = current_domain.process(command, asynchronous=False)
    return PaymentMethodIdResponse(payment_method_id=result)


# ---------------------------------------------------------------------------
# Processor Router
# ---------------------------------------------------------------------------
processor_router = APIRouter(prefix="/payments/processor", tags=["payments"])


@processor_router.post("/configure", response_model=ProcessorConfigResponse)
async def configure_processor(body: ConfigureProcessorRequest) -> ProcessorConfigResponse:
    """Configure the FakeProcessor behavior (non-production only).

    This endpoint is only available when PROTEAN_ENV is not 'production'.
    It allows toggling success/failure behavior for manual API testing.
    """
    if os.environ.get("PROTEAN_ENV") == "production":
        raise HTTPException(status_code=403, detail="Processor configuration not available in production")

    processor = get_processor()
    if not isinstance(processor, FakeProcessor):
        raise HTTPException(status_code=400, detail="Processor configuration only available for FakeProcessor")

    processor.configure(
        should_succeed=body.should_succeed,
        failure_reason=body.failure_reason,
    )
    return ProcessorConfigResponse(
        processor=type(processor).__name__,
        should_succeed=processor.should_succeed,
        failure_reason=processor.failure_reason,
    )
