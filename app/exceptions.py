# app/exceptions.py


class LedgerError(Exception):
    """Base class for errors raised by the ledger core."""


class ValidationFailure(LedgerError):
    """Input rejected before any mutation took place."""


class NotFound(LedgerError):
    pass


class GatewayError(LedgerError):
    """Storage failed; distinct from an empty result."""
