"""
CPF Validation Module

Implements the Brazilian taxpayer ID (CPF) checksum algorithm plus the
normalization and display helpers used by the customer model.
"""

import re
from typing import Optional

CPF_LENGTH = 11

_NON_DIGITS = re.compile(r'[^0-9]')


def normalize_cpf(cpf: Optional[str]) -> str:
    """Strip everything except digits ("111.444.777-35" -> "11144477735")"""
    if not cpf:
        return ""
    return _NON_DIGITS.sub('', cpf)


def _check_digit(digits: str, first_weight: int) -> int:
    """Weighted mod-11 check digit; weights run from first_weight down to 2"""
    total = sum(int(digit) * (first_weight - i) for i, digit in enumerate(digits))
    result = 11 - (total % 11)
    return 0 if result >= 10 else result


def is_valid_cpf(cpf: Optional[str]) -> bool:
    """
    Validate a CPF using the official checksum algorithm

    Punctuation is ignored. Never raises: malformed input returns False.

    Args:
        cpf: CPF with or without grouping punctuation

    Returns:
        True if the CPF is valid, False otherwise
    """
    if not isinstance(cpf, str):
        return False

    digits = normalize_cpf(cpf)

    if len(digits) != CPF_LENGTH:
        return False

    # All-equal digits pass the checksum but are not real CPFs
    if len(set(digits)) == 1:
        return False

    first = _check_digit(digits[:9], 10)
    second = _check_digit(digits[:10], 11)

    return int(digits[9]) == first and int(digits[10]) == second


def format_cpf(cpf: str) -> str:
    """Format an 11-digit CPF as XXX.XXX.XXX-XX"""
    digits = normalize_cpf(cpf)
    if len(digits) != CPF_LENGTH:
        raise ValueError(f"CPF must have {CPF_LENGTH} digits")
    return f"{digits[:3]}.{digits[3:6]}.{digits[6:9]}-{digits[9:]}"
