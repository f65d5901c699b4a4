"""
End-to-end ledger scenario

Runs the full branch workflow through the service: open accounts,
deposit, transfer, withdraw, search and render views.
"""

import random
import pytest
from decimal import Decimal

from branch_ledger.errors import DuplicateOwnerError, InsufficientFundsError
from branch_ledger.identifiers import AccountIdGenerator
from branch_ledger.services import AccountService
from branch_ledger.storage import InMemoryAccountRepository
from branch_ledger.views import AccountView


class TestBranchScenario:
    """Test a day at the branch"""

    def setup_method(self):
        """Set up test fixtures"""
        self.service = AccountService(
            InMemoryAccountRepository(),
            id_generator=AccountIdGenerator(random.Random(31337))
        )

    def test_full_scenario(self):
        joao = self.service.create_account("João Silva", "11144477735")
        maria = self.service.create_account("Maria Santos", "11122233396")
        assert joao.balance == Decimal("0")
        assert joao.id != maria.id

        self.service.deposit(joao.id, Decimal("1000.00"))
        self.service.transfer(joao.id, maria.id, Decimal("300.00"))
        self.service.withdraw(joao.id, Decimal("200.00"))

        assert self.service.balance_of(joao.id) == Decimal("500.00")
        assert self.service.balance_of(maria.id) == Decimal("300.00")

        with pytest.raises(DuplicateOwnerError):
            self.service.create_account("João da Silva", "111.444.777-35")

        with pytest.raises(InsufficientFundsError):
            self.service.transfer(maria.id, joao.id, Decimal("300.01"))

        assert self.service.balance_of(joao.id) + self.service.balance_of(maria.id) == Decimal("800.00")

        assert self.service.find_accounts_by_name("joão") == [joao]
        assert self.service.find_accounts_by_name("xyz") == []
        assert [a.owner.name for a in self.service.list_all_accounts()] == ["João Silva", "Maria Santos"]

        view = AccountView.from_account(self.service.find_account_by_id(joao.id))
        assert view.owner_name == "João Silva"
        assert view.tax_id == "111.444.777-35"
        assert view.balance == "500.00"
        assert view.formatted_balance == "R$ 500,00"

    def test_many_accounts_get_unique_ids(self):
        """Test bulk creation never produces duplicate ids"""
        cpfs = ["11144477735", "11122233396", "52998224725", "12345678909"]
        accounts = [
            self.service.create_account(f"Client {i}", cpf)
            for i, cpf in enumerate(cpfs)
        ]
        assert len({account.id for account in accounts}) == len(cpfs)
        assert self.service.total_accounts() == len(cpfs)
