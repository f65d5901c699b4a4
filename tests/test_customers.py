"""
Test suite for the Client model
"""

import pytest
from dataclasses import FrozenInstanceError

from branch_ledger.customers import Client
from branch_ledger.errors import InvalidArgumentError


class TestClient:
    """Test Client construction and identity"""

    def test_valid_client(self):
        client = Client(name="  João Silva ", tax_id="111.444.777-35")

        assert client.name == "João Silva"
        assert client.tax_id == "11144477735"
        assert client.formatted_tax_id == "111.444.777-35"

    @pytest.mark.parametrize("name", ["", "   ", None])
    def test_blank_name_rejected(self, name):
        with pytest.raises(InvalidArgumentError, match="Name cannot be empty"):
            Client(name=name, tax_id="11144477735")

    @pytest.mark.parametrize("tax_id", ["12345678900", "11111111111", "123", "", None])
    def test_invalid_cpf_rejected(self, tax_id):
        with pytest.raises(InvalidArgumentError, match="Invalid CPF"):
            Client(name="Maria Santos", tax_id=tax_id)

    def test_client_is_immutable(self):
        client = Client(name="Maria Santos", tax_id="11122233396")
        with pytest.raises(FrozenInstanceError):
            client.name = "Other"

    def test_equality_uses_tax_id_only(self):
        """Test two differently named clients with the same CPF are equal"""
        first = Client(name="João Silva", tax_id="11144477735")
        second = Client(name="J. Silva", tax_id="111.444.777-35")

        assert first == second
        assert hash(first) == hash(second)
        assert len({first, second}) == 1

    def test_different_cpf_not_equal(self):
        first = Client(name="João Silva", tax_id="11144477735")
        second = Client(name="João Silva", tax_id="11122233396")
        assert first != second

    def test_repr_shows_formatted_cpf(self):
        client = Client(name="Maria Santos", tax_id="11122233396")
        assert "111.222.333-96" in repr(client)
