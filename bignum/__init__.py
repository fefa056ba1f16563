"""
bignum — arbitrary-precision decimals and numeral-system conversion.

    >>> from bignum import BigNumber, convert
    >>> BigNumber("9223372036854775807").convert_to_base(36)
    '1y2p0ij32e8e7'
    >>> convert("1000000000", 10, 36)
    'gjdgxs'
"""

from bignum.core.config import MathSettings
from bignum.core.errors import (
    ConstructError,
    DivisionByZero,
    DomainError,
    FractionNotSupported,
    InvalidAlphabet,
    InvalidDigit,
    MathError,
    NegativeNotSupported,
    UnknownSystem,
)
from bignum.core.logging import configure_logging
from bignum.runtime import (
    MathRuntime,
    configure,
    convert,
    convert_from,
    convert_to,
    get_default_scale,
    get_runtime,
    set_default_scale,
    set_system,
)
from bignum.core.domain import (
    ROUND_CUT,
    ROUND_HALF_DOWN,
    ROUND_HALF_UP,
    BigNumber,
    RoundingMode,
)

__version__ = "1.0.0"

__all__ = [
    # Values
    "BigNumber",
    "RoundingMode",
    "ROUND_HALF_UP",
    "ROUND_HALF_DOWN",
    "ROUND_CUT",
    # Conversion
    "convert",
    "convert_to",
    "convert_from",
    "set_system",
    # Runtime & configuration
    "MathRuntime",
    "MathSettings",
    "configure",
    "configure_logging",
    "get_runtime",
    "get_default_scale",
    "set_default_scale",
    # Errors
    "MathError",
    "UnknownSystem",
    "InvalidAlphabet",
    "NegativeNotSupported",
    "FractionNotSupported",
    "InvalidDigit",
    "DomainError",
    "DivisionByZero",
    "ConstructError",
]
