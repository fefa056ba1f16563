"""
gmpy2 bindings — опциональная big-integer библиотека

gmpy2 (GMP) поддерживает базы 2..62 с теми же таблицами символов, что и
позиционные алфавиты реестра. Наличие библиотеки определяется один раз
через importlib.util.find_spec; импорт выполняется лениво.
"""

import importlib
import importlib.util
from functools import lru_cache
from typing import Any

from bignum.core.errors import InvalidDigit
from bignum.core.numeral.alphabets import Alphabet

# Префиксы, которые gmpy2 может добавлять для баз 2/8/16
_RADIX_PREFIXES = ("0b", "0o", "0x")


@lru_cache(maxsize=None)
def gmpy2_available() -> bool:
    """True, если gmpy2 установлен в окружении."""
    return importlib.util.find_spec("gmpy2") is not None


def load_gmpy2() -> Any:
    """Импорт модуля gmpy2 (вызывать только при gmpy2_available())."""
    return importlib.import_module("gmpy2")


def strip_radix_prefix(digits: str) -> str:
    sign = ""
    if digits.startswith("-"):
        sign, digits = "-", digits[1:]
    if digits[:2] in _RADIX_PREFIXES:
        digits = digits[2:]
    return sign + digits


class Gmpy2Accelerator:
    """
    Accelerated путь конвертации позиционных баз 2..62.

    Строгий: недопустимая цифра → InvalidDigit (в отличие от fast/raw путей,
    которые такие символы пропускают).
    """

    name = "gmpy2"

    def __init__(self):
        self._gmpy2 = load_gmpy2()

    def convert(self, number: str, from_base: int, to_base: int) -> str:
        """
        Конвертация знаковой строки цифр между базами 2..62.

        Raises:
            InvalidDigit: Строка содержит символы вне алфавита from_base
        """
        self._check_digits(number, from_base)
        try:
            value = self._gmpy2.mpz(number, from_base)
        except ValueError as e:
            raise InvalidDigit(f"Invalid digits for base {from_base}: {number!r}") from e
        return strip_radix_prefix(value.digits(to_base))

    @staticmethod
    def _check_digits(number: str, base: int) -> None:
        # mpz() принимает "_" и пробелы как в литералах Python
        alphabet = Alphabet.positional_base(base)
        digits = number[1:] if number.startswith("-") else number
        if alphabet.case_insensitive:
            digits = digits.lower()
        if not digits or any(symbol not in alphabet.reverse for symbol in digits):
            raise InvalidDigit(f"Invalid digits for base {base}: {number!r}")
