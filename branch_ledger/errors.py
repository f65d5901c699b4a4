"""
Ledger Error Module

Typed errors for every failure the ledger can report. All of them derive
from ValueError so callers that only care about "bad request" can catch
that, while callers that care about the kind catch the subclass.
"""

from decimal import Decimal
from typing import Optional


class LedgerError(ValueError):
    """Base class for all ledger errors"""
    pass


class InvalidArgumentError(LedgerError):
    """Malformed or missing input: blank name, invalid CPF, bad amount, self-transfer"""
    pass


class DuplicateOwnerError(LedgerError):
    """An account already exists for this tax ID"""

    def __init__(self, tax_id: str, message: Optional[str] = None):
        self.tax_id = tax_id
        super().__init__(message or "An account already exists for this CPF")


class DuplicateKeyError(LedgerError):
    """Store-level identifier collision"""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"An account with ID {key} already exists")


class AccountNotFoundError(LedgerError):
    """Referenced account does not exist"""

    def __init__(self, account_id: Optional[str], message: Optional[str] = None):
        self.account_id = account_id
        super().__init__(message or f"Account not found with ID: {account_id}")


class InsufficientFundsError(LedgerError):
    """Withdrawal or transfer exceeds the available balance"""

    def __init__(
        self,
        account_id: str,
        requested: Decimal,
        available: Decimal,
        message: Optional[str] = None
    ):
        self.account_id = account_id
        self.requested = requested
        self.available = available
        super().__init__(
            message or
            f"Insufficient funds in account {account_id}: "
            f"available {available}, requested {requested}"
        )
