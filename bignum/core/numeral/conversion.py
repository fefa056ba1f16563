"""
Conversion Engine — конвертация строк цифр между системами счисления

Три пути конвертации, выбираемые по порядку:
1. Fast path: обе базы 2..36 и длина входа не превышает max-safe-length
   для нативного целого → int()/format(); мусорные символы игнорируются
2. Accelerated path: обе базы 2..62 и доступен gmpy2 → строгий,
   недопустимая цифра → InvalidDigit
3. Raw path: повторное деление списка "nibbles" исходной системы;
   работает для любых алфавитов, мусорные символы пропускаются

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. from_base == to_base или пустой вход → вход без изменений (без lookup)
2. "0" / "-0" между позиционными базами → "0"
3. Знак переносится только если обе системы допускают '-'
4. Дробные значения никогда не конвертируются (FractionNotSupported)
5. Допуск к мусору различается по путям и зафиксирован тестами
"""

from typing import Dict, Final, List, Optional, Protocol, Union

from bignum.core.errors import FractionNotSupported, NegativeNotSupported
from bignum.core.numeral.alphabets import (
    ALPHABET_36,
    NATIVE_MAX_BASE,
    Alphabet,
    AlphabetRegistry,
    BaseId,
    is_positional,
    normalize_base_id,
)

NumberLike = Union[str, int, float, None]

# =============================================================================
# MAX-SAFE-LENGTH TABLES
# =============================================================================

# Максимальная длина строки цифр в базе b, значение которой гарантированно
# помещается в нативное знаковое целое. Длиннее → fast path не используется.
MAX_LENGTH_FOR_SPEEDUP_32: Final[Dict[int, int]] = {
    2: 30, 3: 19, 4: 15, 5: 13, 6: 11, 7: 11, 8: 10, 9: 9, 10: 9,
    11: 8, 12: 8, 13: 8, 14: 8,
    **{base: 7 for base in range(15, 22)},
    **{base: 6 for base in range(22, 36)},
    36: 5,
}

MAX_LENGTH_FOR_SPEEDUP_64: Final[Dict[int, int]] = {
    2: 62, 3: 39, 4: 31, 5: 27, 6: 24, 7: 22, 8: 20, 9: 19, 10: 18, 11: 18,
    12: 17, 13: 17, 14: 16, 15: 16,
    **{base: 15 for base in range(16, 19)},
    **{base: 14 for base in range(19, 23)},
    **{base: 13 for base in range(23, 29)},
    **{base: 12 for base in range(29, 37)},
}

# Нативное форматирование для баз с собственным спецификатором format()
_NATIVE_FORMATS: Final[Dict[int, str]] = {2: "b", 8: "o", 10: "d", 16: "x"}


def max_length_table(native_int_bits: int) -> Dict[int, int]:
    """Таблица max-safe-length для разрядности платформы (32 или 64)."""
    return MAX_LENGTH_FOR_SPEEDUP_32 if native_int_bits == 32 else MAX_LENGTH_FOR_SPEEDUP_64


class Accelerator(Protocol):
    """Строгий конвертер позиционных баз 2..62 (например, gmpy2)."""

    name: str

    def convert(self, number: str, from_base: int, to_base: int) -> str:
        ...


def _stringify(number: NumberLike) -> str:
    # None и False ведут себя как пустая строка, True как "1"
    if number is None or number is False:
        return ""
    if number is True:
        return "1"
    return str(number)


def format_native(value: int, base: int) -> str:
    """Неотрицательное int → строка цифр базы 2..36 (нижний регистр)."""
    spec = _NATIVE_FORMATS.get(base)
    if spec is not None:
        return format(value, spec)
    if value == 0:
        return "0"
    digits: List[str] = []
    while value:
        value, remainder = divmod(value, base)
        digits.append(ALPHABET_36[remainder])
    return "".join(reversed(digits))


# =============================================================================
# CONVERTER
# =============================================================================


class NumeralConverter:
    """
    Конвертер строк цифр между системами счисления.

    Args:
        registry: Реестр алфавитов
        accelerator: Строгий конвертер 2..62 (gmpy2) или None
        native_int_bits: 32 или 64 — выбор таблицы fast path
    """

    def __init__(
        self,
        registry: Optional[AlphabetRegistry] = None,
        accelerator: Optional[Accelerator] = None,
        native_int_bits: int = 64,
    ):
        self.registry = registry if registry is not None else AlphabetRegistry()
        self.accelerator = accelerator
        self.native_int_bits = native_int_bits
        self._max_length = max_length_table(native_int_bits)

    def convert(self, number: NumberLike, from_base: BaseId, to_base: BaseId) -> str:
        """
        Конвертация числа из системы from_base в систему to_base.

        Args:
            number: Строка цифр (int/float приводятся к строке)
            from_base: Исходная система (2..62, "16" или имя)
            to_base: Целевая система

        Returns:
            Строка цифр в целевой системе (со знаком, если он был)

        Raises:
            UnknownSystem: Неизвестная система
            NegativeNotSupported: Отрицательное число в систему без '-'
            FractionNotSupported: Вход содержит дробную часть
            InvalidDigit: Недопустимая цифра на accelerated пути

        Examples:
            >>> NumeralConverter().convert("1000000000", 10, 36)
            'gjdgxs'
        """
        number = _stringify(number)
        from_base = normalize_base_id(from_base)
        to_base = normalize_base_id(to_base)

        if from_base == to_base or number == "":
            return number

        positional = is_positional(from_base) and is_positional(to_base)
        if positional and number.strip() in ("0", "-0"):
            return "0"

        source = self.registry.lookup(from_base)
        target = self.registry.lookup(to_base)

        prefix = ""
        if number.startswith("-") and not source.no_negative:
            if target.no_negative:
                raise NegativeNotSupported(
                    f"Target numeral system [{to_base}] does not support negative numbers"
                )
            prefix = "-"
            number = number[1:]

        if "." in number and not source.no_fraction:
            if target.no_fraction:
                raise FractionNotSupported(f"Target numeral system [{to_base}] does not support fractions")
            raise FractionNotSupported("Fractions conversion is not supported")

        if positional:
            if (
                from_base <= NATIVE_MAX_BASE
                and to_base <= NATIVE_MAX_BASE
                and len(number) <= self._max_length[from_base]
            ):
                return prefix + self._native_convert(number, source, to_base)
            if self.accelerator is not None:
                return self.accelerator.convert(prefix + (number.lstrip("0") or "0"), from_base, to_base)

        return prefix + self._raw_convert(number, source, target)

    def convert_to(self, number: NumberLike, to_base: BaseId) -> str:
        """Конвертация из десятичной системы."""
        return self.convert(number, 10, to_base)

    def convert_from(self, number: NumberLike, from_base: BaseId) -> str:
        """Конвертация в десятичную систему."""
        return self.convert(number, from_base, 10)

    def raw_convert(self, number: str, from_base: BaseId, to_base: BaseId) -> str:
        """
        Универсальный путь без знака и дробей: повторное деление.

        Символы вне алфавита from_base пропускаются.

        Raises:
            UnknownSystem: Неизвестная система
        """
        source = self.registry.lookup(from_base)
        target = self.registry.lookup(to_base)
        return self._raw_convert(number, source, target)

    # -------------------------------------------------------------------------
    # Paths
    # -------------------------------------------------------------------------

    def _native_convert(self, number: str, source: Alphabet, to_base: int) -> str:
        digits = "".join(symbol for symbol in number.lower() if symbol in source.reverse)
        value = int(digits, source.size) if digits else 0
        return format_native(value, to_base)

    def _raw_convert(self, number: str, source: Alphabet, target: Alphabet) -> str:
        from_size = source.size
        to_size = target.size
        if source.case_insensitive:
            number = number.lower()

        nibbles = [source.reverse[symbol] for symbol in number if symbol in source.reverse]
        length = len(nibbles)
        result: List[str] = []

        # Каждый проход делит число (в nibbles) на to_size:
        # частное остаётся в nibbles, остаток: очередная цифра результата
        while True:
            value = 0
            new_length = 0
            for i in range(length):
                value = value * from_size + nibbles[i]
                if value >= to_size:
                    nibbles[new_length] = value // to_size
                    new_length += 1
                    value %= to_size
                elif new_length > 0:
                    nibbles[new_length] = 0
                    new_length += 1
            length = new_length
            result.append(target.characters[value])
            if new_length == 0:
                break

        return "".join(reversed(result))
