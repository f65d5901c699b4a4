"""
Customer Module

The account owner: an immutable name plus a validated, normalized CPF.
Two clients with the same CPF are the same customer, whatever their names.
"""

from dataclasses import dataclass, field

from .cpf import is_valid_cpf, normalize_cpf, format_cpf
from .errors import InvalidArgumentError


@dataclass(frozen=True)
class Client:
    """
    Account owner

    Equality and hashing use tax_id only; name is excluded from comparison.
    """
    name: str = field(compare=False)
    tax_id: str

    def __post_init__(self):
        if not isinstance(self.name, str) or not self.name.strip():
            raise InvalidArgumentError("Name cannot be empty")

        if not is_valid_cpf(self.tax_id):
            raise InvalidArgumentError("Invalid CPF")

        object.__setattr__(self, 'name', self.name.strip())
        object.__setattr__(self, 'tax_id', normalize_cpf(self.tax_id))

    @property
    def formatted_tax_id(self) -> str:
        """CPF formatted as XXX.XXX.XXX-XX"""
        return format_cpf(self.tax_id)

    def __repr__(self) -> str:
        return f"Client(name={self.name!r}, tax_id={self.formatted_tax_id!r})"
