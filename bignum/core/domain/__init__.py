"""
Domain value objects: BigNumber и режимы округления.
"""

from bignum.core.domain.big_number import (
    ROUND_CUT,
    ROUND_HALF_DOWN,
    ROUND_HALF_UP,
    BigNumber,
    RoundingMode,
    sanitize_number,
)

__all__ = [
    "BigNumber",
    "RoundingMode",
    "ROUND_HALF_UP",
    "ROUND_HALF_DOWN",
    "ROUND_CUT",
    "sanitize_number",
]
