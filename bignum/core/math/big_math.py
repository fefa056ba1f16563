"""
BigMath — стратегии целочисленного сложения и вычитания

Один контракт, три реализации:
- DecimalMath: decimal backend на масштабе 0
- Gmpy2Math: gmpy2.mpz
- PurePythonMath: base-256 арифметика над алфавитом binary

Выбор стратегии (create_big_math) выполняется один раз при сборке runtime
и зависит только от того, какие backend'ы доступны.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Все стратегии дают одинаковый результат на целых десятичных строках
2. "-0" никогда не возвращается (нормализуется в "0")
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Literal, Optional

from bignum.core.errors import ConstructError
from bignum.core.math.decimal_backend import DecimalBackend
from bignum.core.math.gmp import gmpy2_available, load_gmpy2
from bignum.core.numeral.alphabets import BINARY
from bignum.core.numeral.conversion import NumeralConverter

logger = logging.getLogger(__name__)

Strategy = Literal["auto", "decimal", "gmpy2", "pure"]

# =============================================================================
# CONTRACT
# =============================================================================


class BigMath(ABC):
    """Целочисленные add/subtract над десятичными строками."""

    name: str = "abstract"

    @abstractmethod
    def add(self, left: str, right: str) -> str:
        ...

    @abstractmethod
    def subtract(self, left: str, right: str) -> str:
        ...


# =============================================================================
# STRATEGIES
# =============================================================================


class DecimalMath(BigMath):
    name = "decimal"

    def __init__(self, backend: DecimalBackend):
        self.backend = backend

    def add(self, left: str, right: str) -> str:
        return self.backend.add(left, right, 0)

    def subtract(self, left: str, right: str) -> str:
        return self.backend.sub(left, right, 0)


class Gmpy2Math(BigMath):
    name = "gmpy2"

    def __init__(self):
        self._gmpy2 = load_gmpy2()

    def add(self, left: str, right: str) -> str:
        return str(self._gmpy2.mpz(left) + self._gmpy2.mpz(right))

    def subtract(self, left: str, right: str) -> str:
        return str(self._gmpy2.mpz(left) - self._gmpy2.mpz(right))


class PurePythonMath(BigMath):
    """
    Арифметика без big-number backend'ов.

    Операнды переводятся в алфавит binary (байт = цифра base-256),
    складываются с переносом; вычитание — сложение с дополнением до 255
    (ones' complement) и циклическим переносом. Знаки обрабатываются на
    десятичных строках до перевода.
    """

    name = "pure"

    def __init__(self, converter: NumeralConverter):
        self.converter = converter

    def add(self, left: str, right: str) -> str:
        if left.startswith("-") and right.startswith("-"):
            return self._signed("-" + self.add(left[1:], right[1:]))
        if left.startswith("-"):
            return self.subtract(right, left[1:])
        if right.startswith("-"):
            return self.subtract(left, right[1:])

        total = self._add_bytes(self._to_bytes(left), self._to_bytes(right))
        return self._signed(self._from_bytes(total))

    def subtract(self, left: str, right: str) -> str:
        if right.startswith("-"):
            return self.add(left, right[1:])
        if left.startswith("-"):
            return self._signed("-" + self.add(left[1:], right))

        sign, difference = self._subtract_bytes(self._to_bytes(left), self._to_bytes(right))
        return self._signed(sign + self._from_bytes(difference))

    # -------------------------------------------------------------------------
    # Base-256
    # -------------------------------------------------------------------------

    def _to_bytes(self, number: str) -> List[int]:
        return [ord(symbol) for symbol in self.converter.convert(number, 10, BINARY)]

    def _from_bytes(self, digits: List[int]) -> str:
        return self.converter.convert("".join(chr(digit) for digit in digits), BINARY, 10) or "0"

    @staticmethod
    def _add_bytes(left: List[int], right: List[int]) -> List[int]:
        """Сложение старшим байтом вперёд; результат может стать на байт длиннее."""
        width = max(len(left), len(right))
        left = [0] * (width - len(left)) + left
        right = [0] * (width - len(right)) + right

        result: List[int] = []
        carry = 0
        for i in range(width - 1, -1, -1):
            total = left[i] + right[i] + carry
            result.append(total % 256)
            carry = total >> 8
        if carry:
            result.append(carry)
        result.reverse()
        return result

    def _subtract_bytes(self, left: List[int], right: List[int]):
        width = max(len(left), len(right))
        left = [0] * (width - len(left)) + left
        right = [0] * (width - len(right)) + right

        total = self._add_bytes(left, [255 - digit for digit in right])
        if len(total) > width:
            # Переполнение: результат положителен, перенос возвращается в младший байт
            return "", self._add_bytes(total[1:], total[:1])
        return "-", [255 - digit for digit in total]

    @staticmethod
    def _signed(number: str) -> str:
        return "0" if number == "-0" else number


# =============================================================================
# SELECTOR
# =============================================================================


def create_big_math(
    strategy: Strategy = "auto",
    backend: Optional[DecimalBackend] = None,
    converter: Optional[NumeralConverter] = None,
) -> BigMath:
    """
    Выбор стратегии BigMath.

    auto: decimal backend → gmpy2 → pure Python (первая доступная).

    Raises:
        ConstructError: Явно запрошенная стратегия недоступна
    """
    if strategy == "auto":
        if backend is not None:
            strategy = "decimal"
        elif gmpy2_available():
            strategy = "gmpy2"
        else:
            strategy = "pure"

    if strategy == "decimal":
        if backend is None:
            raise ConstructError("BigMath strategy 'decimal' requires a decimal backend")
        big_math: BigMath = DecimalMath(backend)
    elif strategy == "gmpy2":
        if not gmpy2_available():
            raise ConstructError("BigMath strategy 'gmpy2' requires gmpy2 to be installed")
        big_math = Gmpy2Math()
    elif strategy == "pure":
        big_math = PurePythonMath(converter if converter is not None else NumeralConverter())
    else:
        raise ConstructError(f"Unknown BigMath strategy [{strategy}]")

    logger.debug("Selected BigMath strategy %s", big_math.name)
    return big_math
