"""
Decimal Backend — доверенная арифметика произвольной точности

Обёртка над стандартным модулем decimal с семантикой bc:
- операнды — десятичные строки "[-]digits[.digits]"
- результат усекается к нулю (ROUND_DOWN) до запрошенного scale
- результат — строка с фиксированной точкой и ровно scale дробными цифрами

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Все промежуточные вычисления точные; округление только финальное усечение
2. Нераспознанная строка трактуется как 0 (не ошибка)
3. Точный ноль всегда без знака; ненулевое отрицательное значение,
   усечённое до нуля, сохраняет знак ("-0.000")
4. Деление / остаток / powmod на ноль → DivisionByZero
"""

import re
from decimal import (
    MAX_EMAX,
    MAX_PREC,
    MIN_EMIN,
    ROUND_DOWN,
    ROUND_HALF_DOWN,
    ROUND_HALF_UP,
    Context,
    Decimal,
    DivisionByZero as DecimalDivisionByZero,
    InvalidOperation,
    Overflow,
    getcontext,
)
from typing import Final

from bignum.core.errors import DivisionByZero, DomainError

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Допустимая запись числа: знак, целая часть, необязательная дробная
NUMERIC_PATTERN: Final[re.Pattern] = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)$")

# Дополнительные цифры точности при делении и извлечении корня
GUARD_DIGITS: Final[int] = 3

_ZERO: Final[Decimal] = Decimal(0)
_ONE: Final[Decimal] = Decimal(1)

# Контекст точной арифметики: add/sub/mul не теряют цифр
_EXACT: Final[Context] = Context(
    prec=MAX_PREC,
    rounding=ROUND_DOWN,
    Emax=MAX_EMAX,
    Emin=MIN_EMIN,
    traps=[InvalidOperation, DecimalDivisionByZero, Overflow],
)

_HALF_MODES: Final[dict] = {
    "half_up": ROUND_HALF_UP,
    "half_down": ROUND_HALF_DOWN,
}


def _quantum(scale: int) -> Decimal:
    """10^-scale (scale может быть отрицательным)."""
    return Decimal((0, (1,), -scale))


class DecimalBackend:
    """
    bc-совместимые операции над десятичными строками.

    Экземпляр не хранит состояния; один экземпляр разделяется runtime.
    """

    name = "decimal"

    @staticmethod
    def native_scale() -> int:
        """Точность контекста decimal по умолчанию."""
        return getcontext().prec

    # -------------------------------------------------------------------------
    # Parsing / formatting
    # -------------------------------------------------------------------------

    def parse(self, number: str) -> Decimal:
        """Строка → Decimal; нераспознанная строка → 0."""
        number = number.strip()
        if not NUMERIC_PATTERN.match(number):
            return _ZERO
        return Decimal(number)

    def truncate(self, value: Decimal, scale: int) -> Decimal:
        """Усечение к нулю до scale дробных цифр."""
        if value.is_zero():
            value = _ZERO
        return value.quantize(_quantum(scale), rounding=ROUND_DOWN, context=_EXACT)

    def format(self, value: Decimal, scale: int) -> str:
        """Decimal → строка с ровно scale дробными цифрами."""
        return format(self.truncate(value, max(scale, 0)), "f")

    def is_zero(self, number: str) -> bool:
        return self.parse(number).is_zero()

    # -------------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------------

    def add(self, left: str, right: str, scale: int) -> str:
        return self.format(_EXACT.add(self.parse(left), self.parse(right)), scale)

    def sub(self, left: str, right: str, scale: int) -> str:
        return self.format(_EXACT.subtract(self.parse(left), self.parse(right)), scale)

    def mul(self, left: str, right: str, scale: int) -> str:
        return self.format(_EXACT.multiply(self.parse(left), self.parse(right)), scale)

    def div(self, left: str, right: str, scale: int) -> str:
        """
        Деление с усечением до scale.

        Raises:
            DivisionByZero: right == 0
        """
        return self.format(self._divide(self.parse(left), self.parse(right), scale), scale)

    def mod(self, left: str, right: str) -> str:
        """
        Остаток на целочисленном масштабе.

        Операнды усекаются до целых; знак остатка совпадает со знаком делимого.

        Raises:
            DivisionByZero: Целая часть right == 0
        """
        dividend = self.truncate(self.parse(left), 0)
        divisor = self.truncate(self.parse(right), 0)
        if divisor.is_zero():
            raise DivisionByZero("Division by zero")
        return self.format(_EXACT.remainder(dividend, divisor), 0)

    def pow(self, base: str, exponent: str, scale: int) -> str:
        """
        Возведение в целую степень (дробная часть показателя отбрасывается).

        Отрицательный показатель: 1 / base^|n| с усечением до scale.

        Raises:
            DivisionByZero: 0 в отрицательной степени
        """
        value = self.parse(base)
        power = int(self.truncate(self.parse(exponent), 0))
        result = self._integer_power(value, abs(power))
        if power < 0:
            result = self._divide(_ONE, result, scale)
        return self.format(result, scale)

    def powmod(self, base: str, exponent: str, modulus: str) -> str:
        """
        (base ^ exponent) mod modulus на целых.

        Raises:
            DivisionByZero: modulus == 0
            DomainError: exponent < 0
        """
        value = self.truncate(self.parse(base), 0)
        power = self.truncate(self.parse(exponent), 0)
        divisor = self.truncate(self.parse(modulus), 0)
        if divisor.is_zero():
            raise DivisionByZero("Division by zero")
        if power.is_signed() and not power.is_zero():
            raise DomainError("Negative exponent is not supported by powmod")
        if value.is_zero() and power.is_zero():
            return self.format(_EXACT.remainder(_ONE, divisor), 0)

        context = Context(prec=len(divisor.as_tuple().digits) + GUARD_DIGITS, Emax=MAX_EMAX, Emin=MIN_EMIN)
        return self.format(context.power(value, power, divisor), 0)

    def sqrt(self, number: str, scale: int) -> str:
        """
        Квадратный корень с усечением до scale.

        Raises:
            DomainError: number < 0
        """
        value = self.parse(number)
        if value.is_zero():
            return self.format(_ZERO, scale)
        if value < 0:
            raise DomainError("Square root of negative number")

        precision = max(value.adjusted() // 2 + 1, 1) + scale + GUARD_DIGITS
        root = self.truncate(Context(prec=precision, Emax=MAX_EMAX, Emin=MIN_EMIN).sqrt(value), scale)

        # Коррекция последней цифры: root^2 <= value < (root + ulp)^2
        ulp = _quantum(scale)
        while _EXACT.multiply(root, root) > value:
            root = _EXACT.subtract(root, ulp)
        upper = _EXACT.add(root, ulp)
        while _EXACT.multiply(upper, upper) <= value:
            root, upper = upper, _EXACT.add(upper, ulp)
        return self.format(root, scale)

    def comp(self, left: str, right: str, scale: int) -> int:
        """Трёхзначное сравнение (-1/0/1) после усечения обеих сторон до scale."""
        first = self.truncate(self.parse(left), scale)
        second = self.truncate(self.parse(right), scale)
        if first == second:
            return 0
        return 1 if first > second else -1

    def round_half(self, number: str, precision: int, mode: str) -> str:
        """
        Точное округление HALF_UP / HALF_DOWN до precision цифр.

        Отрицательный precision округляет до десятков, сотен и т.д.;
        результат форматируется на масштабе max(precision, 0).
        """
        rounded = self.parse(number).quantize(_quantum(precision), rounding=_HALF_MODES[mode], context=_EXACT)
        return self.format(rounded, max(precision, 0))

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _divide(self, left: Decimal, right: Decimal, scale: int) -> Decimal:
        if right.is_zero():
            raise DivisionByZero("Division by zero")
        if left.is_zero():
            return _ZERO
        # Цифр достаточно, чтобы последняя сохранённая была не правее 10^-scale
        precision = max(left.adjusted() - right.adjusted() + 2, 1) + max(scale, 0) + GUARD_DIGITS
        context = Context(prec=precision, rounding=ROUND_DOWN, Emax=MAX_EMAX, Emin=MIN_EMIN)
        return context.divide(left, right)

    def _integer_power(self, value: Decimal, power: int) -> Decimal:
        """Точное value^power (power ≥ 0), square-and-multiply."""
        result = _ONE
        while power:
            if power & 1:
                result = _EXACT.multiply(result, value)
            power >>= 1
            if power:
                value = _EXACT.multiply(value, value)
        return result


def bootstrap_default_scale() -> int:
    """Масштаб по умолчанию: max(точность decimal по умолчанию, 100)."""
    return max(DecimalBackend.native_scale(), 100)

