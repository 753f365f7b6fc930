"""Payments bounded context: SagePay gateway integration and invoice ledger.

Hosts the invoice, payment and applied-payment ledger aggregates that a
commerce platform exposes to its payment gateway plugins, plus the SagePay
gateway method that reconciles processor outcomes against that ledger.
"""

from protean.domain import Domain

from payments.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

payments = Domain(name="payments")
