"""Error taxonomy shared by the stock ledger services.

Views translate these into HTTP status codes (see ``core.api``); storage
errors are always wrapped so callers never see driver detail.
"""


class LedgerError(Exception):
    """Base class for every error raised by the ledger services."""

    status_code = 500
    public_message = "Request failed"


class ValidationError(LedgerError):
    """Caller input failed a precondition. Raised before anything is written."""

    status_code = 400

    def __init__(self, message, fields=None):
        super().__init__(message)
        self.fields = fields or {}

    @property
    def public_message(self):
        return str(self)


class DeltaInvalid(ValidationError):
    """A stock mutation was requested with a zero or non-numeric delta."""


class InsufficientStock(ValidationError):
    """A sale would drive stock below zero while negative stock is disabled."""


class NotFoundError(LedgerError):
    status_code = 404
    public_message = "Referenced record not found"


class ItemNotFound(NotFoundError):
    public_message = "Inventory item not found"

    def __init__(self, item_id):
        super().__init__(f"Inventory item {item_id} does not exist")
        self.item_id = item_id


class TransactionFailed(LedgerError):
    """The atomic write step failed and was rolled back."""

    public_message = "Transaction failed"


class PersistenceFailure(TransactionFailed):
    """The database rejected a write (lock timeout, constraint, I/O)."""


class ReadFailure(LedgerError):
    public_message = "Failed to read ledger"


class QueryFailed(ReadFailure):
    pass
