"""BDD tests for lifecycle operations SagePay does not offer."""

from pytest_bdd import parsers, scenarios, when

scenarios("features/sagepay_unsupported.feature")


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse("authorize and capture is requested for {amount:f}"))
def authorize_capture(sagepay, invoice, amount, outcome):
    outcome["result"] = sagepay.authorize_capture_payment(invoice, amount, {})


@when(parsers.cfparse("a refund of {amount:f} is requested"))
def refund(sagepay, invoice, payment, amount, outcome):
    outcome["result"] = sagepay.refund_payment(invoice, payment, amount, {})


@when("the payment is voided")
def void(sagepay, invoice, payment, outcome):
    outcome["result"] = sagepay.void_payment(invoice, payment, {})
