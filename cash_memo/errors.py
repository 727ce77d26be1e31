# cash_memo/errors.py
from __future__ import annotations


class CashMemoError(Exception):
    """Base class for recoverable cash memo errors."""


class MinimumItemsViolation(CashMemoError):
    """Raised when deleting the last remaining line item."""


class ClearNotConfirmed(CashMemoError):
    """Raised when clearing the memo without the user's confirmation."""


class ValidationFailed(CashMemoError):
    def __init__(self, errors):
        super().__init__(", ".join(errors))
        self.errors = list(errors)


class PermissionDenied(CashMemoError):
    pass


class CaptureFailed(CashMemoError):
    pass


class ExportFailed(CashMemoError):
    pass
