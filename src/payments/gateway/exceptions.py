"""Exceptions raised across the gateway boundary."""


class GatewayError(Exception):
    """Base class for gateway errors."""

    def __init__(self, message: str, *, gateway: str | None = None) -> None:
        self.gateway = gateway
        super().__init__(message)


class ProcessorError(GatewayError):
    """The gateway rejected or could not process the request.

    Processors report these inside a failed PaymentResult; the ledger
    reconciler wraps anything else a processor raises (timeouts, connection
    resets) in one, so callers never see processor failures as exceptions.
    """


class UnsupportedOperationError(GatewayError):
    """A lifecycle operation the gateway method does not implement."""

    def __init__(self, gateway: str, operation: str) -> None:
        self.operation = operation
        super().__init__(f"{gateway} does not support {operation}", gateway=gateway)
