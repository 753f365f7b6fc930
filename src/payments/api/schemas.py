"""Pydantic request/response schemas for the Payments API.

These are external contracts (anti-corruption layer), separate from
internal Protean commands.
"""

from pydantic import BaseModel, Field

from payments.gateway.settings import ProcessorSettings


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class InvoiceLineItemSchema(BaseModel):
    description: str
    quantity: float = Field(ge=0)
    unit_price: float = Field(ge=0)


# ---------------------------------------------------------------------------
# Invoice Request Schemas
# ---------------------------------------------------------------------------
class GenerateInvoiceRequest(BaseModel):
    customer_id: str
    line_items: list[InvoiceLineItemSchema]
    tax: float = 0.0
    currency: str = "GBP"

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "customer_id": "cust-001",
                    "line_items": [{"description": "Walking boots", "quantity": 1, "unit_price": 100.00}],
                    "tax": 0.0,
                    "currency": "GBP",
                }
            ]
        }
    }


class VoidInvoiceRequest(BaseModel):
    reason: str


# ---------------------------------------------------------------------------
# Gateway Provider Request Schemas
# ---------------------------------------------------------------------------
class RegisterGatewayProviderRequest(BaseModel):
    name: str = "SagePay"
    processor_settings: ProcessorSettings = Field(default_factory=ProcessorSettings)


class AddPaymentMethodRequest(BaseModel):
    name: str
    payment_code: str
    description: str | None = None


class ConfigureProcessorRequest(BaseModel):
    should_succeed: bool = True
    failure_reason: str = "Card declined"


# ---------------------------------------------------------------------------
# Payment Request Schemas
# ---------------------------------------------------------------------------
class AuthorizePaymentRequest(BaseModel):
    payment_method_id: str
    args: dict[str, str] = Field(default_factory=dict)


class AuthorizeCapturePaymentRequest(BaseModel):
    payment_method_id: str
    amount: float = Field(gt=0)
    args: dict[str, str] = Field(default_factory=dict)


class CapturePaymentRequest(BaseModel):
    amount: float = Field(gt=0)
    args: dict[str, str] = Field(default_factory=dict)


class RefundPaymentRequest(BaseModel):
    amount: float = Field(gt=0)
    args: dict[str, str] = Field(default_factory=dict)


class VoidPaymentRequest(BaseModel):
    args: dict[str, str] = Field(default_factory=dict)


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class InvoiceIdResponse(BaseModel):
    invoice_id: str


class ProviderIdResponse(BaseModel):
    provider_id: str


class PaymentMethodIdResponse(BaseModel):
    payment_method_id: str


class StatusResponse(BaseModel):
    status: str


class PaymentResultResponse(BaseModel):
    success: bool
    payment_id: str | None = None
    authorized: bool = False
    collected: bool = False
    failure_reason: str | None = None


class AppliedPaymentResponse(BaseModel):
    applied_payment_id: str
    payment_id: str
    applied_type: str
    description: str | None = None
    amount: float


class LedgerResponse(BaseModel):
    invoice_id: str
    total: float
    paid_total: float
    entries: list[AppliedPaymentResponse]


class ProcessorConfigResponse(BaseModel):
    processor: str
    should_succeed: bool
    failure_reason: str
