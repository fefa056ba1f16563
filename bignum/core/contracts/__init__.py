"""
Contract Validation Module

Валидация JSON payload'ов bignum (BigNumber, пользовательские системы счисления).
"""

from .validators import (
    BigNumberValidator,
    ContractValidator,
    NumeralSystemsValidator,
    SchemaLoader,
    validate_big_number,
    validate_numeral_systems,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "BigNumberValidator",
    "NumeralSystemsValidator",
    # Functions
    "validate_big_number",
    "validate_numeral_systems",
]
