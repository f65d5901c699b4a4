"""
Account Storage Module

Provides the abstract account repository interface and the in-memory
implementation. The service depends only on AccountRepository, so other
backing stores can be substituted without touching it.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional
import threading
from contextlib import contextmanager

from .accounts import Account
from .cpf import normalize_cpf
from .errors import InvalidArgumentError, DuplicateKeyError, AccountNotFoundError


def _clean_id(account_id: Optional[str]) -> Optional[str]:
    """Trimmed id, or None when blank/missing"""
    if account_id is None or not isinstance(account_id, str):
        return None
    cleaned = account_id.strip()
    return cleaned or None


class AccountRepository(ABC):
    """Abstract interface for account stores"""

    @abstractmethod
    def save(self, account: Account) -> None:
        """Insert a new account; raises DuplicateKeyError if the id is taken"""
        pass

    @abstractmethod
    def update(self, account: Account) -> None:
        """Persist changes to a stored account; raises AccountNotFoundError if absent"""
        pass

    @abstractmethod
    def find_by_id(self, account_id: Optional[str]) -> Optional[Account]:
        """Exact id lookup; None for blank ids"""
        pass

    @abstractmethod
    def find_by_name(self, name: Optional[str]) -> List[Account]:
        """Case-insensitive substring match on owner name; [] for blank input"""
        pass

    @abstractmethod
    def find_by_tax_id(self, tax_id: Optional[str]) -> Optional[Account]:
        """Lookup by owner CPF, punctuation ignored"""
        pass

    @abstractmethod
    def list_all(self) -> List[Account]:
        """All accounts, no ordering guarantee"""
        pass

    @abstractmethod
    def remove(self, account_id: Optional[str]) -> bool:
        """Remove an account; True if something was removed"""
        pass

    @abstractmethod
    def count(self) -> int:
        """Number of stored accounts"""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Remove every account (test utility)"""
        pass

    def list_all_sorted_by_owner_name(self) -> List[Account]:
        """All accounts sorted by owner name, ties broken by id"""
        return sorted(self.list_all(), key=lambda account: (account.owner.name, account.id))

    def exists_by_id(self, account_id: Optional[str]) -> bool:
        """Check if an account with this id exists"""
        return self.find_by_id(account_id) is not None

    def exists_by_tax_id(self, tax_id: Optional[str]) -> bool:
        """Check if an account exists for this CPF"""
        return self.find_by_tax_id(tax_id) is not None

    @contextmanager
    def atomic(self):
        """Context manager for atomic multi-account operations (default no-op)"""
        yield


class InMemoryAccountRepository(AccountRepository):
    """In-memory account store keyed by account id"""

    def __init__(self):
        self._accounts: Dict[str, Account] = {}
        self._lock = threading.RLock()

    def save(self, account: Account) -> None:
        """Save a new account to memory"""
        if account is None:
            raise InvalidArgumentError("Account cannot be None")

        with self._lock:
            if account.id in self._accounts:
                raise DuplicateKeyError(account.id)
            self._accounts[account.id] = account

    def update(self, account: Account) -> None:
        """Replace the stored account with the same id"""
        if account is None:
            raise InvalidArgumentError("Account cannot be None")

        with self._lock:
            if account.id not in self._accounts:
                raise AccountNotFoundError(account.id)
            self._accounts[account.id] = account

    def find_by_id(self, account_id: Optional[str]) -> Optional[Account]:
        """Load an account from memory"""
        key = _clean_id(account_id)
        if key is None:
            return None
        with self._lock:
            return self._accounts.get(key)

    def find_by_name(self, name: Optional[str]) -> List[Account]:
        """Find accounts whose owner name contains name, ignoring case"""
        if not name or not isinstance(name, str) or not name.strip():
            return []

        needle = name.strip().lower()
        with self._lock:
            return [
                account for account in self._accounts.values()
                if needle in account.owner.name.lower()
            ]

    def find_by_tax_id(self, tax_id: Optional[str]) -> Optional[Account]:
        """Find the account owned by this CPF"""
        if not tax_id or not isinstance(tax_id, str):
            return None

        digits = normalize_cpf(tax_id)
        if not digits:
            return None

        with self._lock:
            for account in self._accounts.values():
                if account.owner.tax_id == digits:
                    return account
            return None

    def list_all(self) -> List[Account]:
        """All accounts in insertion order"""
        with self._lock:
            return list(self._accounts.values())

    def remove(self, account_id: Optional[str]) -> bool:
        """Delete an account from memory"""
        key = _clean_id(account_id)
        if key is None:
            return False
        with self._lock:
            return self._accounts.pop(key, None) is not None

    def exists_by_id(self, account_id: Optional[str]) -> bool:
        key = _clean_id(account_id)
        if key is None:
            return False
        with self._lock:
            return key in self._accounts

    def count(self) -> int:
        """Count stored accounts"""
        with self._lock:
            return len(self._accounts)

    def clear(self) -> None:
        """Clear all accounts"""
        with self._lock:
            self._accounts.clear()

    @contextmanager
    def atomic(self):
        """Hold the store lock for the duration of the block"""
        with self._lock:
            yield
