"""
Core math для bignum

Decimal backend (bc-семантика усечения), gmpy2 bindings и стратегии BigMath.
"""

# Decimal backend
from bignum.core.math.decimal_backend import (
    GUARD_DIGITS,
    DecimalBackend,
    bootstrap_default_scale,
)

# gmpy2
from bignum.core.math.gmp import (
    Gmpy2Accelerator,
    gmpy2_available,
)

# Strategy selector
from bignum.core.math.big_math import (
    BigMath,
    DecimalMath,
    Gmpy2Math,
    PurePythonMath,
    create_big_math,
)

__all__ = [
    # Decimal backend
    "GUARD_DIGITS",
    "DecimalBackend",
    "bootstrap_default_scale",
    # gmpy2
    "Gmpy2Accelerator",
    "gmpy2_available",
    # BigMath
    "BigMath",
    "DecimalMath",
    "Gmpy2Math",
    "PurePythonMath",
    "create_big_math",
]
