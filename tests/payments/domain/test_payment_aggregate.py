"""Tests for the Payment aggregate: creation, extended data and state machine."""

import pytest
from payments.payment.events import PaymentAuthorized, PaymentCaptured, PaymentCreated
from payments.payment.payment import (
    CAPTURE_AMOUNT_KEY,
    CAPTURED_TOTAL_KEY,
    Payment,
    PaymentMethodType,
    PaymentState,
)
from protean.exceptions import ValidationError


def _make_payment(**overrides):
    defaults = {
        "payment_method_type": PaymentMethodType.CREDIT_CARD,
        "amount": 100.00,
        "payment_method_key": "pm-001",
    }
    defaults.update(overrides)
    return Payment.create(**defaults)


def _authorized_payment():
    payment = _make_payment()
    payment.authorize()
    payment._events.clear()
    return payment


class TestPaymentCreation:
    def test_create_sets_amount(self):
        payment = _make_payment(amount=59.99)
        assert payment.amount == 59.99

    def test_create_accepts_type_value(self):
        payment = _make_payment(payment_method_type="Cash")
        assert payment.payment_method_type == PaymentMethodType.CASH.value

    def test_create_starts_unauthorized_and_uncollected(self):
        payment = _make_payment()
        assert payment.authorized is False
        assert payment.collected is False
        assert payment.state == PaymentState.NEW

    def test_create_rejects_negative_amount(self):
        with pytest.raises(ValidationError):
            _make_payment(amount=-1.0)

    def test_create_raises_event(self):
        payment = _make_payment()
        assert len(payment._events) == 1
        assert isinstance(payment._events[0], PaymentCreated)


class TestPaymentExtendedData:
    def test_missing_key_returns_default(self):
        payment = _make_payment()
        assert payment.get_extended_value("vpsTxId") is None
        assert payment.get_extended_value("vpsTxId", "none") == "none"

    def test_values_are_stored_as_strings(self):
        payment = _make_payment()
        payment.set_extended_value(CAPTURE_AMOUNT_KEY, -1)
        assert payment.get_extended_value(CAPTURE_AMOUNT_KEY) == "-1"

    def test_setting_a_key_keeps_the_others(self):
        payment = _make_payment()
        payment.set_extended_value("a", "1")
        payment.set_extended_value("b", "2")
        assert payment.extended_values() == {"a": "1", "b": "2"}


class TestPaymentAuthorize:
    def test_authorize_sets_flag(self):
        payment = _make_payment()
        payment.authorize()
        assert payment.authorized is True
        assert payment.state == PaymentState.AUTHORIZED

    def test_authorize_raises_event(self):
        payment = _make_payment()
        payment._events.clear()
        payment.authorize()
        assert isinstance(payment._events[0], PaymentAuthorized)

    def test_cannot_authorize_twice(self):
        payment = _authorized_payment()
        with pytest.raises(ValidationError):
            payment.authorize()


class TestPaymentCapture:
    def test_full_capture_collects(self):
        payment = _authorized_payment()
        payment.record_capture(100.00, is_partial=False)
        assert payment.collected is True
        assert payment.state == PaymentState.COLLECTED

    def test_partial_capture_leaves_payment_uncollected(self):
        payment = _authorized_payment()
        payment.record_capture(60.00, is_partial=True)
        assert payment.collected is False
        assert payment.state == PaymentState.PARTIALLY_COLLECTED

    def test_captures_accumulate(self):
        payment = _authorized_payment()
        payment.record_capture(60.00, is_partial=True)
        payment.record_capture(40.00, is_partial=False)
        assert payment.captured_total == pytest.approx(100.00)
        assert payment.get_extended_value(CAPTURED_TOTAL_KEY) == "100.0"
        assert payment.get_extended_value(CAPTURE_AMOUNT_KEY) == "40.0"
        assert payment.state == PaymentState.COLLECTED

    def test_capture_raises_event(self):
        payment = _authorized_payment()
        payment.record_capture(60.00, is_partial=True)
        event = payment._events[0]
        assert isinstance(event, PaymentCaptured)
        assert event.is_partial is True
        assert event.captured_total == pytest.approx(60.00)

    def test_cannot_capture_unauthorized_payment(self):
        payment = _make_payment()
        with pytest.raises(ValidationError):
            payment.record_capture(10.00, is_partial=True)

    def test_cannot_capture_collected_payment(self):
        payment = _authorized_payment()
        payment.record_capture(100.00, is_partial=False)
        with pytest.raises(ValidationError):
            payment.record_capture(1.00, is_partial=True)
