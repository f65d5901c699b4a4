"""
Account presentation views

Display-ready snapshots of accounts for whatever front end consumes the
ledger. The core modules never import this one.
"""

from pydantic import BaseModel, Field

from .accounts import Account
from .config import get_config
from .currency import format_brl


class AccountView(BaseModel):
    id: str = Field(..., description="6-digit account ID")
    owner_name: str
    tax_id: str = Field(..., description="CPF formatted as XXX.XXX.XXX-XX")
    balance: str = Field(..., description="Decimal balance as string")
    formatted_balance: str

    @classmethod
    def from_account(cls, account: Account) -> 'AccountView':
        return cls(
            id=account.id,
            owner_name=account.owner.name,
            tax_id=account.owner.formatted_tax_id,
            balance=str(account.balance),
            formatted_balance=format_brl(account.balance, get_config().currency_symbol)
        )
