"""
BigNumber — десятичное число произвольной точности

Изменяемое значение: строка "[-]digits[.digits]" плюс рабочий масштаб
(scale), определяющий число дробных цифр, сохраняемых арифметикой.
Арифметические методы меняют экземпляр на месте и возвращают его же
(цепочки вызовов). Для независимой копии — clone().

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Значение всегда валидная десятичная запись с фиксированной точкой
   (никогда не экспоненциальная)
2. Результаты усекаются к нулю до scale, округление только через round()
3. Мусорный ввод → "0", ошибки нет
4. Ненулевое отрицательное значение, усечённое до нуля, сохраняет знак
   ("-0"); точный ноль без знака, поэтому add(0) нормализует "-0" в "0"
5. Сравнение выполняется на масштабе вызывающего экземпляра

Examples:
    >>> BigNumber("1180591620717411303425", 10).divide("12345678910").get_value()
    '95627922070.8657895449'
    >>> BigNumber(2).shift_left(64).get_value()
    '36893488147419103232'
"""

import copy
import re
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Final, Mapping, Optional, Union

from bignum.core.errors import ConstructError, DivisionByZero
from bignum.core.numeral.alphabets import BaseId
from bignum.runtime import MathRuntime, get_runtime

# =============================================================================
# ENUMS
# =============================================================================


class RoundingMode(int, Enum):
    """Режим округления round()"""

    HALF_UP = 1
    HALF_DOWN = 2
    CUT = 8


ROUND_HALF_UP: Final[RoundingMode] = RoundingMode.HALF_UP
ROUND_HALF_DOWN: Final[RoundingMode] = RoundingMode.HALF_DOWN
ROUND_CUT: Final[RoundingMode] = RoundingMode.CUT

_HALF_MODE_NAMES: Final[Dict[RoundingMode, str]] = {
    RoundingMode.HALF_UP: "half_up",
    RoundingMode.HALF_DOWN: "half_down",
}

# Всё, кроме цифр, знаков и десятичной точки, отбрасывается
_SANITIZE_PATTERN: Final[re.Pattern] = re.compile(r"[^0-9+\-.]")

NumberInput = Union["BigNumber", str, int, float, Decimal, bool, None]


def sanitize_number(text: str) -> str:
    """Удаление всех символов, кроме цифр, '+', '-' и '.'."""
    return _SANITIZE_PATTERN.sub("", text)


# =============================================================================
# BIG NUMBER
# =============================================================================


class BigNumber:
    """
    Десятичное число произвольной точности.

    Args:
        number: Начальное значение (str, int, float, Decimal, bool, None, BigNumber)
        scale: Рабочий масштаб; None → масштаб по умолчанию runtime
        runtime: Runtime с decimal backend (по умолчанию процессный)

    Raises:
        ConstructError: В runtime нет decimal backend или тип number не поддерживается
    """

    def __init__(
        self,
        number: NumberInput = 0,
        scale: Optional[int] = None,
        *,
        runtime: Optional[MathRuntime] = None,
    ):
        self._runtime = runtime if runtime is not None else get_runtime()
        if self._runtime.backend is None:
            raise ConstructError("BigNumber requires an arbitrary-precision decimal backend")
        self._backend = self._runtime.backend
        self._settings = self._runtime.settings

        self._scale = 0
        self._value = "0"
        self.set_calc_scale(scale if scale is not None else self._runtime.get_default_scale())
        self.set_value(number)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any], runtime: Optional[MathRuntime] = None) -> "BigNumber":
        """
        Создание из payload {"value": "...", "scale": N}.

        Raises:
            jsonschema.ValidationError: Payload не соответствует схеме big_number
        """
        from bignum.core.contracts.validators import validate_big_number

        validate_big_number(payload)
        return cls(payload["value"], payload.get("scale"), runtime=runtime)

    def to_payload(self) -> Dict[str, Any]:
        return {"value": self.get_value(), "scale": self._scale}

    # -------------------------------------------------------------------------
    # Value & scale
    # -------------------------------------------------------------------------

    def get_value(self) -> str:
        """Каноническая запись: без хвостовых дробных нулей и точки."""
        return self._trim(self._value)

    def set_value(self, number: NumberInput) -> "BigNumber":
        self._value = self._backend.sub(self.filter_number(number), "0", self._scale)
        return self

    def get_scale(self) -> int:
        """Число дробных цифр канонической записи; -1 для целого."""
        value = self.get_value()
        if "." not in value:
            return -1
        return len(value) - value.index(".") - 1

    def get_calc_scale(self) -> int:
        return self._scale

    def set_calc_scale(self, scale: int) -> "BigNumber":
        """Рабочий масштаб (отрицательный → 0). Текущее значение не усекается."""
        self._scale = int(scale) if scale > 0 else 0
        return self

    def clone(self) -> "BigNumber":
        return copy.copy(self)

    def filter_number(self, number: NumberInput) -> str:
        """
        Приведение входа к десятичной строке.

        - BigNumber → его каноническое значение
        - None / False → "" (позже нормализуется в "0"), True → "1"
        - float → 16 значащих цифр (без артефактов двоичного представления)
        - Экспоненциальная запись раскрывается через backend:
          мантисса × 10^exp или мантисса / 10^exp
        - Иначе остаются только цифры, '+', '-', '.'

        Raises:
            ConstructError: Тип вне поддерживаемого набора
        """
        if isinstance(number, BigNumber):
            text = number.get_value()
        elif number is None or number is False:
            text = ""
        elif number is True:
            text = "1"
        elif isinstance(number, float):
            text = format(number, f".{self._settings.float_significant_digits}G")
        elif isinstance(number, (str, int, Decimal)):
            text = str(number)
        else:
            raise ConstructError(f"Unsupported number type: {type(number).__name__}")

        position = text.find("E")
        if position < 0:
            position = text.find("e")
        if position < 0:
            return sanitize_number(text)

        mantissa = sanitize_number(text[:position])
        exponent = text[position + 1 :]
        expansion_scale = self._settings.exponent_expansion_scale
        if exponent.startswith("-"):
            power = self._backend.pow("10", sanitize_number(exponent[1:]), 0)
            return self._backend.div(mantissa, power, expansion_scale)
        power = self._backend.pow("10", sanitize_number(exponent), 0)
        return self._backend.mul(mantissa, power, expansion_scale)

    # -------------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------------

    def add(self, number: NumberInput) -> "BigNumber":
        self._value = self._backend.add(self._value, self.filter_number(number), self._scale)
        return self

    def subtract(self, number: NumberInput) -> "BigNumber":
        self._value = self._backend.sub(self._value, self.filter_number(number), self._scale)
        return self

    def multiply(self, number: NumberInput) -> "BigNumber":
        self._value = self._backend.mul(self._value, self.filter_number(number), self._scale)
        return self

    def divide(self, number: NumberInput) -> "BigNumber":
        """
        Raises:
            DivisionByZero: number == 0
        """
        divisor = self._nonzero(number)
        self._value = self._backend.div(self._value, divisor, self._scale)
        return self

    def mod(self, number: NumberInput) -> "BigNumber":
        """
        Остаток на целом масштабе (операнды усекаются до целых).

        Raises:
            DivisionByZero: number == 0
        """
        divisor = self._nonzero(number)
        self._value = self._backend.mod(self._value, divisor)
        return self

    def pow(self, number: NumberInput) -> "BigNumber":
        """Целая степень; дробная часть показателя отбрасывается."""
        self._value = self._backend.pow(self._value, self.filter_number(number), self._scale)
        return self

    def pow_mod(self, power: NumberInput, modulus: NumberInput) -> "BigNumber":
        """
        Raises:
            DivisionByZero: modulus == 0
            DomainError: power < 0
        """
        divisor = self._nonzero(modulus)
        self._value = self._backend.powmod(self.get_value(), self.filter_number(power), divisor)
        return self

    def sqrt(self) -> "BigNumber":
        """
        Raises:
            DomainError: Значение отрицательное
        """
        self._value = self._backend.sqrt(self._value, self._scale)
        return self

    def shift_left(self, bits: NumberInput) -> "BigNumber":
        """Умножение на 2^bits (целочисленный масштаб)."""
        factor = self._backend.pow("2", self.filter_number(bits), 0)
        self._value = self._backend.mul(self._value, factor, 0)
        return self

    def shift_right(self, bits: NumberInput) -> "BigNumber":
        """Деление на 2^bits (целочисленный масштаб)."""
        factor = self._backend.pow("2", self.filter_number(bits), 0)
        self._value = self._backend.div(self._value, factor, 0)
        return self

    def increment(self) -> "BigNumber":
        return self.add(1)

    def decrement(self) -> "BigNumber":
        return self.subtract(1)

    def negate(self) -> "BigNumber":
        return self.multiply(-1)

    def abs(self) -> "BigNumber":
        if self._value.startswith("-"):
            self._value = self._value[1:]
        return self

    # -------------------------------------------------------------------------
    # Rounding
    # -------------------------------------------------------------------------

    def round(self, precision: int = 0, mode: RoundingMode = RoundingMode.HALF_UP) -> "BigNumber":
        """
        Округление до precision дробных цифр.

        No-op, если precision >= get_scale(). Для HALF_UP / HALF_DOWN
        округляется только неотрицательная дробная часть над floor(),
        поэтому -3.5 → -3 (HALF_UP) и -4 (HALF_DOWN).

        Args:
            precision: Число дробных цифр (усекается до int; может быть < 0)
            mode: RoundingMode.HALF_UP / HALF_DOWN / CUT
        """
        precision = int(precision)
        if precision >= self.get_scale():
            return self

        mode = RoundingMode(mode)
        if mode is RoundingMode.CUT:
            self._value = self._backend.add(self._value, "0", precision)
            return self

        floored = self._floor_value(self._value)
        fraction = self._backend.sub(self._value, floored, self._scale)
        rounded = self._backend.round_half(fraction, precision, _HALF_MODE_NAMES[mode])
        self._value = self._backend.add(floored, rounded, max(precision, 0))
        return self

    def floor(self) -> "BigNumber":
        self._value = self._floor_value(self._value)
        return self

    def ceil(self) -> "BigNumber":
        value = self._value
        if self.is_positive() and not self._probe_is_integral(value):
            value = self._backend.add(value, "1", 0)
        self._value = self._backend.add(value, "0", 0)
        return self

    # -------------------------------------------------------------------------
    # Comparison
    # -------------------------------------------------------------------------

    def compare_to(self, number: NumberInput) -> int:
        """-1 / 0 / 1 на масштабе этого экземпляра (обе стороны усечены)."""
        return self._backend.comp(self._value, self.filter_number(number), self._scale)

    def is_equal_to(self, number: NumberInput) -> bool:
        return self.compare_to(number) == 0

    def is_greater_than(self, number: NumberInput) -> bool:
        return self.compare_to(number) == 1

    def is_greater_than_or_equal_to(self, number: NumberInput) -> bool:
        return self.compare_to(number) >= 0

    def is_less_than(self, number: NumberInput) -> bool:
        return self.compare_to(number) == -1

    def is_less_than_or_equal_to(self, number: NumberInput) -> bool:
        return self.compare_to(number) <= 0

    def signum(self) -> int:
        return self.compare_to(0)

    def is_negative(self) -> bool:
        # Синтаксическая проверка: "-0" считается отрицательным
        return self._value.startswith("-")

    def is_positive(self) -> bool:
        return not self.is_negative()

    # -------------------------------------------------------------------------
    # Conversion
    # -------------------------------------------------------------------------

    def convert_to_base(self, base: BaseId) -> str:
        """
        Конвертация канонического значения из базы 10.

        Raises:
            FractionNotSupported: Значение дробное
            NegativeNotSupported: Отрицательное значение в систему без '-'
        """
        return self._runtime.converter.convert(self.get_value(), 10, base)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _nonzero(self, number: NumberInput) -> str:
        filtered = self.filter_number(number)
        if self._backend.is_zero(filtered):
            raise DivisionByZero("Division by zero")
        return filtered

    def _probe_is_integral(self, value: str) -> bool:
        digits = self._settings.floor_probe_digits
        return self._backend.add(value, "0", digits).endswith("." + "0" * digits)

    def _floor_value(self, value: str) -> str:
        if value.startswith("-") and not self._probe_is_integral(value):
            value = self._backend.sub(value, "1", 0)
        return self._backend.add(value, "0", 0)

    @staticmethod
    def _trim(value: str) -> str:
        if "." not in value:
            return value
        integer, _, fraction = value.partition(".")
        fraction = fraction.rstrip("0")
        return f"{integer}.{fraction}" if fraction else integer

    def __str__(self) -> str:
        return self.get_value()

    def __repr__(self) -> str:
        return f"BigNumber({self.get_value()!r}, scale={self._scale})"
