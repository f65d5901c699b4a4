"""
Account Service Module

Orchestrates account creation, deposits, withdrawals, transfers and
lookups. This is the only layer that combines store lookups with account
mutation, so every cross-account rule lives here: one account per CPF,
no self-transfers, and transfers that never create or lose money.
"""

from decimal import Decimal
from typing import List, Optional
import logging

from .accounts import Account
from .config import LedgerConfig, get_config
from .currency import AmountLike, to_amount, is_positive
from .customers import Client
from .errors import (
    InvalidArgumentError, DuplicateOwnerError, DuplicateKeyError,
    AccountNotFoundError, InsufficientFundsError
)
from .identifiers import AccountIdGenerator
from .logging_config import log_action
from .storage import AccountRepository

logger = logging.getLogger(__name__)


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not isinstance(value, str) or not value.strip()


class AccountService:
    """
    Entry point for all ledger operations

    Mutations run inside repository.atomic(), so concurrent callers sharing
    one repository see each operation as a single step.
    """

    def __init__(
        self,
        repository: AccountRepository,
        id_generator: Optional[AccountIdGenerator] = None,
        config: Optional[LedgerConfig] = None
    ):
        if repository is None:
            raise InvalidArgumentError("AccountRepository cannot be None")

        self.repository = repository
        self.id_generator = id_generator or AccountIdGenerator()
        self.config = config or get_config()

    def create_account(self, name: str, tax_id: str) -> Account:
        """
        Open an account for a new client

        Args:
            name: Client's full name
            tax_id: Client's CPF, with or without punctuation

        Returns:
            Created Account with zero balance

        Raises:
            InvalidArgumentError: Blank name/CPF or invalid CPF
            DuplicateOwnerError: The CPF already owns an account
            DuplicateKeyError: Every generated ID collided with a stored one
        """
        if _is_blank(name):
            raise InvalidArgumentError("Name is required")
        if _is_blank(tax_id):
            raise InvalidArgumentError("CPF is required")

        with self.repository.atomic():
            if self.repository.exists_by_tax_id(tax_id):
                logger.warning("Rejected account creation for existing CPF")
                raise DuplicateOwnerError(tax_id)

            try:
                client = Client(name=name, tax_id=tax_id)
            except InvalidArgumentError as exc:
                raise InvalidArgumentError(f"Error creating account: {exc}") from exc

            account = self._save_new_account(client)

        log_action(
            logger, "info", "Account created",
            action="create_account", account_id=account.id,
            owner=client.name
        )
        return account

    def _save_new_account(self, client: Client) -> Account:
        """Build and store an account, drawing a fresh ID on each collision"""
        attempts = max(1, self.config.max_id_attempts)
        last_error: Optional[DuplicateKeyError] = None

        for attempt in range(1, attempts + 1):
            try:
                account = Account(client, id_generator=self.id_generator)
            except InvalidArgumentError as exc:
                raise InvalidArgumentError(f"Error creating account: {exc}") from exc

            try:
                self.repository.save(account)
                return account
            except DuplicateKeyError as exc:
                last_error = exc
                logger.warning(
                    "Generated account ID %s already in use (attempt %d of %d)",
                    exc.key, attempt, attempts
                )

        raise last_error

    def deposit(self, account_id: str, amount: AmountLike) -> Account:
        """
        Deposit into an account

        Returns:
            The updated Account

        Raises:
            InvalidArgumentError: Blank id or non-positive amount
            AccountNotFoundError: No account with that id
        """
        self._require_id(account_id, "Account ID is required")
        value = self._require_positive(amount, "Deposit amount must be positive")

        with self.repository.atomic():
            account = self._get_account(account_id)
            account.deposit(value)
            self.repository.update(account)
            balance = account.balance

        log_action(
            logger, "info", "Deposit completed",
            action="deposit", account_id=account.id,
            amount=value, balance=balance
        )
        return account

    def withdraw(self, account_id: str, amount: AmountLike) -> Account:
        """
        Withdraw from an account

        Returns:
            The updated Account

        Raises:
            InvalidArgumentError: Blank id or non-positive amount
            AccountNotFoundError: No account with that id
            InsufficientFundsError: Amount exceeds the balance
        """
        self._require_id(account_id, "Account ID is required")
        value = self._require_positive(amount, "Withdrawal amount must be positive")

        with self.repository.atomic():
            account = self._get_account(account_id)
            try:
                account.withdraw(value)
            except InsufficientFundsError:
                logger.warning("Withdrawal from %s rejected: insufficient funds", account.id)
                raise
            self.repository.update(account)
            balance = account.balance

        log_action(
            logger, "info", "Withdrawal completed",
            action="withdraw", account_id=account.id,
            amount=value, balance=balance
        )
        return account

    def transfer(self, from_account_id: str, to_account_id: str, amount: AmountLike) -> None:
        """
        Move money between two accounts

        Funds are checked before anything is touched, then the source is
        debited before the destination is credited. A failed transfer leaves
        both balances unchanged.

        Raises:
            InvalidArgumentError: Blank ids, non-positive amount or same account
            AccountNotFoundError: Either account is missing
            InsufficientFundsError: Source balance below amount
        """
        self._require_id(from_account_id, "Source account ID is required")
        self._require_id(to_account_id, "Destination account ID is required")
        value = self._require_positive(amount, "Transfer amount must be positive")

        if from_account_id.strip() == to_account_id.strip():
            raise InvalidArgumentError("Source and destination accounts must be different")

        with self.repository.atomic():
            source = self._get_account(
                from_account_id,
                f"Source account not found with ID: {from_account_id}"
            )
            destination = self._get_account(
                to_account_id,
                f"Destination account not found with ID: {to_account_id}"
            )

            if not source.has_sufficient_funds(value):
                logger.warning("Transfer from %s rejected: insufficient funds", source.id)
                raise InsufficientFundsError(
                    account_id=source.id,
                    requested=value,
                    available=source.balance,
                    message="Insufficient balance in source account"
                )

            source.withdraw(value)
            destination.deposit(value)

            self.repository.update(source)
            self.repository.update(destination)

        log_action(
            logger, "info", "Transfer completed",
            action="transfer", account_id=source.id,
            counterparty_id=destination.id, amount=value
        )

    def find_account_by_id(self, account_id: Optional[str]) -> Optional[Account]:
        """Get account by ID, None for blank or unknown ids"""
        if _is_blank(account_id):
            return None
        return self.repository.find_by_id(account_id)

    def find_accounts_by_name(self, name: Optional[str]) -> List[Account]:
        """Case-insensitive partial match on owner name"""
        return self.repository.find_by_name(name)

    def list_all_accounts(self) -> List[Account]:
        """All accounts sorted by owner name"""
        return self.repository.list_all_sorted_by_owner_name()

    def account_exists(self, account_id: Optional[str]) -> bool:
        return self.repository.exists_by_id(account_id)

    def total_accounts(self) -> int:
        return self.repository.count()

    def balance_of(self, account_id: Optional[str]) -> Decimal:
        """
        Current balance of an account

        Raises:
            AccountNotFoundError: If the account does not exist
        """
        account = self.find_account_by_id(account_id)
        if account is None:
            raise AccountNotFoundError(account_id)
        return account.balance

    def _get_account(self, account_id: str, message: Optional[str] = None) -> Account:
        account = self.repository.find_by_id(account_id)
        if account is None:
            logger.warning("Account %s not found", account_id)
            raise AccountNotFoundError(account_id, message)
        return account

    @staticmethod
    def _require_id(account_id: Optional[str], message: str) -> None:
        if _is_blank(account_id):
            raise InvalidArgumentError(message)

    @staticmethod
    def _require_positive(amount: AmountLike, message: str) -> Decimal:
        if amount is None:
            raise InvalidArgumentError(message)
        value = to_amount(amount)
        if not is_positive(value):
            raise InvalidArgumentError(message)
        return value
