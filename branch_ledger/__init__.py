"""
Branch Ledger

A single-branch banking ledger: account creation, deposits, withdrawals and
transfers with exact Decimal money handling and CPF-validated owners.
"""

__version__ = "1.0.0"
