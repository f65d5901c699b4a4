"""
Test suite for account presentation views
"""

import random
from decimal import Decimal

from branch_ledger.accounts import Account
from branch_ledger.customers import Client
from branch_ledger.identifiers import AccountIdGenerator
from branch_ledger.views import AccountView


class TestAccountView:
    """Test AccountView rendering"""

    def test_from_account(self):
        account = Account(
            Client(name="Maria Santos", tax_id="11122233396"),
            id_generator=AccountIdGenerator(random.Random(5))
        )
        account.deposit(Decimal("1234.5"))

        view = AccountView.from_account(account)

        assert view.id == account.id
        assert view.owner_name == "Maria Santos"
        assert view.tax_id == "111.222.333-96"
        assert view.balance == "1234.5"
        assert view.formatted_balance == "R$ 1.234,50"

    def test_view_serializes(self):
        account = Account(
            Client(name="João Silva", tax_id="11144477735"),
            id_generator=AccountIdGenerator(random.Random(5))
        )
        data = AccountView.from_account(account).model_dump()

        assert data["balance"] == "0"
        assert data["formatted_balance"] == "R$ 0,00"
        assert set(data) == {"id", "owner_name", "tax_id", "balance", "formatted_balance"}
