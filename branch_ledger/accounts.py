"""
Account Module

A single-owner deposit account. The balance is an exact Decimal that can
only change through deposit() and withdraw(), and never goes negative.
"""

from decimal import Decimal
from datetime import datetime, timezone
from typing import Optional

from .currency import ZERO, AmountLike, to_amount, is_positive, exact_add, exact_subtract
from .customers import Client
from .errors import InvalidArgumentError, InsufficientFundsError
from .identifiers import AccountIdGenerator


class Account:
    """
    Bank account owned by exactly one client

    Identity is the account id: two Account objects with the same id are equal.
    """

    def __init__(self, owner: Client, id_generator: Optional[AccountIdGenerator] = None):
        if owner is None:
            raise InvalidArgumentError("Client cannot be None")
        if not isinstance(owner, Client):
            raise InvalidArgumentError(f"Owner must be a Client, not {type(owner).__name__}")

        if id_generator is None:
            id_generator = AccountIdGenerator()

        now = datetime.now(timezone.utc)
        self._id = id_generator.next()
        self._owner = owner
        self._balance = ZERO
        self.created_at = now
        self.updated_at = now

    @property
    def id(self) -> str:
        return self._id

    @property
    def owner(self) -> Client:
        return self._owner

    @property
    def balance(self) -> Decimal:
        return self._balance

    def deposit(self, amount: AmountLike) -> None:
        """
        Credit the account

        Raises:
            InvalidArgumentError: If amount is missing or not positive
        """
        if amount is None:
            raise InvalidArgumentError("Deposit amount must be positive")
        value = to_amount(amount)
        if not is_positive(value):
            raise InvalidArgumentError("Deposit amount must be positive")

        self._balance = exact_add(self._balance, value)
        self.updated_at = datetime.now(timezone.utc)

    def withdraw(self, amount: AmountLike) -> None:
        """
        Debit the account

        Raises:
            InvalidArgumentError: If amount is missing or not positive
            InsufficientFundsError: If amount exceeds the balance
        """
        if amount is None:
            raise InvalidArgumentError("Withdrawal amount must be positive")
        value = to_amount(amount)
        if not is_positive(value):
            raise InvalidArgumentError("Withdrawal amount must be positive")

        if value > self._balance:
            raise InsufficientFundsError(
                account_id=self._id,
                requested=value,
                available=self._balance,
                message="Insufficient balance for withdrawal"
            )

        self._balance = exact_subtract(self._balance, value)
        self.updated_at = datetime.now(timezone.utc)

    def has_sufficient_funds(self, amount: Optional[AmountLike]) -> bool:
        """Check if balance covers amount; False for a missing or unusable amount"""
        if amount is None:
            return False
        try:
            value = to_amount(amount)
        except InvalidArgumentError:
            return False
        return self._balance >= value

    def __eq__(self, other) -> bool:
        if not isinstance(other, Account):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return f"Account(id={self._id!r}, owner={self._owner.name!r}, balance={self._balance})"
