"""Shared BDD fixtures and step definitions for SagePay gateway scenarios."""

import pytest
from payments.invoice.invoice import Invoice
from payments.ledger.applied_payment import AppliedPaymentType
from payments.payment.payment import Payment
from protean import current_domain
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


@pytest.fixture()
def outcome():
    """Container for the latest PaymentResult."""
    return {"result": None}


def _ledger(provider_service, invoice):
    return provider_service.applied_payments_for(str(invoice.id))


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse("an issued invoice totalling {total:f}"), target_fixture="invoice")
def issued_invoice(total):
    invoice = Invoice.create(
        customer_id="cust-bdd-001",
        line_items_data=[{"description": "Order total", "quantity": 1, "unit_price": total}],
    )
    invoice.issue()
    current_domain.repository_for(Invoice).add(invoice)
    return current_domain.repository_for(Invoice).get(invoice.id)


@given("a SagePay payment method")
def sagepay_payment_method(sagepay):
    assert sagepay.name == "SagePay"


@given(parsers.cfparse('the processor declines with reason "{reason}"'))
def processor_declines(processor, reason):
    processor.configure(should_succeed=False, failure_reason=reason)


@given("the invoice was voided")
def invoice_voided(invoice):
    invoice.void(reason="Order cancelled")
    current_domain.repository_for(Invoice).add(invoice)


@given("a payment was authorized for the invoice", target_fixture="payment")
def authorized_payment(sagepay, invoice):
    result = sagepay.authorize_payment(invoice, {})
    assert result.success is True
    return current_domain.repository_for(Payment).get(result.payment.id)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then("the result is successful")
def result_successful(outcome):
    assert outcome["result"].success is True


@then("the result is a failure")
def result_failed(outcome):
    assert outcome["result"].success is False
    assert outcome["result"].is_unsupported is False


@then(parsers.cfparse('the result is unsupported for "{operation}"'))
def result_unsupported(outcome, operation):
    result = outcome["result"]
    assert result.is_unsupported is True
    assert result.error.operation == operation


@then("the operation is rejected with a validation error")
def validation_error_raised(error):
    assert isinstance(error["exc"], ValidationError)


@then(parsers.cfparse("the ledger size is {count:d}"))
def ledger_size(provider_service, invoice, count):
    assert len(_ledger(provider_service, invoice)) == count


@then(parsers.cfparse("the number of {applied_type} entries is {count:d}"))
def ledger_entries_of_type(provider_service, invoice, count, applied_type):
    entries = [r for r in _ledger(provider_service, invoice) if r.applied_type == applied_type]
    assert len(entries) == count


@then(parsers.cfparse("the last ledger entry is a {applied_type} of {amount:f}"))
def last_ledger_entry(provider_service, invoice, applied_type, amount):
    last = _ledger(provider_service, invoice)[-1]
    assert last.applied_type == AppliedPaymentType(applied_type).value
    assert last.amount == pytest.approx(amount)


@then(parsers.cfparse('the last ledger note contains "{text}"'))
def last_ledger_note(provider_service, invoice, text):
    assert text in _ledger(provider_service, invoice)[-1].description


@then(parsers.cfparse("the debits applied to the invoice total {amount:f}"))
def debit_total(provider_service, invoice, amount):
    debits = [r for r in _ledger(provider_service, invoice) if r.applied_type == AppliedPaymentType.DEBIT.value]
    assert sum(r.amount for r in debits) == pytest.approx(amount)


@then("the processor was not called")
def processor_not_called(processor):
    assert processor.calls == []


def _stored_payment(outcome):
    return current_domain.repository_for(Payment).get(outcome["result"].payment.id)


@then("the payment is authorized")
def payment_authorized(outcome):
    assert _stored_payment(outcome).authorized is True


@then("the payment is collected")
def payment_collected(outcome):
    assert _stored_payment(outcome).collected is True


@then("the payment is not collected")
def payment_not_collected(outcome):
    assert _stored_payment(outcome).collected is False
