"""
Numeral systems: реестр алфавитов и конвертация между системами.
"""

from bignum.core.numeral.alphabets import (
    # Tables
    ALPHABET_36,
    ALPHABET_62,
    BASE32_RFC,
    BASE64_RFC,
    BASE64_URL,
    BINARY,
    NATIVE_MAX_BASE,
    POSITIONAL_MAX_BASE,
    POSITIONAL_MIN_BASE,
    # Models
    Alphabet,
    AlphabetRegistry,
    BaseId,
    # Helpers
    is_positional,
    normalize_base_id,
)
from bignum.core.numeral.conversion import (
    MAX_LENGTH_FOR_SPEEDUP_32,
    MAX_LENGTH_FOR_SPEEDUP_64,
    NumeralConverter,
    format_native,
    max_length_table,
)

__all__ = [
    # Alphabets
    "ALPHABET_36",
    "ALPHABET_62",
    "BASE32_RFC",
    "BASE64_RFC",
    "BASE64_URL",
    "BINARY",
    "NATIVE_MAX_BASE",
    "POSITIONAL_MAX_BASE",
    "POSITIONAL_MIN_BASE",
    "Alphabet",
    "AlphabetRegistry",
    "BaseId",
    "is_positional",
    "normalize_base_id",
    # Conversion
    "MAX_LENGTH_FOR_SPEEDUP_32",
    "MAX_LENGTH_FOR_SPEEDUP_64",
    "NumeralConverter",
    "format_native",
    "max_length_table",
]
