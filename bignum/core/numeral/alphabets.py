"""
NumeralAlphabet Registry — реестр алфавитов систем счисления

Модуль хранит отображение base-id → алфавит:
- Позиционные базы 2..62 — срезы двух общих таблиц (GMP-совместимых),
  отдельного хранения на каждую базу нет
- Именованные системы: base32rfc, base64rfc, base64url, binary
- Пользовательские системы регистрируются через register() и живут
  столько же, сколько реестр

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Символы алфавита не повторяются, длина ≥ 2
2. Каждый символ занимает один байт (code point ≤ 255)
3. no_negative ⇔ '-' входит в алфавит; no_fraction ⇔ '.' входит в алфавит
4. Базы ≤ 36 регистронезависимы (вход приводится к нижнему регистру)
"""

import logging
import threading
from typing import Any, Dict, Final, List, Mapping, Union

from pydantic import BaseModel, Field

from bignum.core.errors import InvalidAlphabet, UnknownSystem

logger = logging.getLogger(__name__)

BaseId = Union[int, str]

# =============================================================================
# ТАБЛИЦЫ СИМВОЛОВ
# =============================================================================

POSITIONAL_MIN_BASE: Final[int] = 2
POSITIONAL_MAX_BASE: Final[int] = 62

# Базы ≤ NATIVE_MAX_BASE обслуживаются нативными средствами и регистронезависимы
NATIVE_MAX_BASE: Final[int] = 36

ALPHABET_36: Final[str] = "0123456789abcdefghijklmnopqrstuvwxyz"
ALPHABET_62: Final[str] = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"

# Именованные системы
BASE32_RFC: Final[str] = "base32rfc"
BASE64_RFC: Final[str] = "base64rfc"
BASE64_URL: Final[str] = "base64url"
BINARY: Final[str] = "binary"

BUILTIN_SYSTEMS: Final[Dict[str, str]] = {
    BASE32_RFC: "abcdefghijklmnopqrstuvwxyz234567",
    BASE64_RFC: "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/",
    BASE64_URL: "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_",
    # Порядковый номер символа равен значению байта
    BINARY: "".join(chr(code) for code in range(256)),
}

MAX_SYMBOL_CODE: Final[int] = 255


# =============================================================================
# BASE-ID
# =============================================================================


def normalize_base_id(base: BaseId) -> BaseId:
    """
    Приведение base-id к каноническому виду.

    Строка из десятичных цифр ("16") становится int; прочие строки
    остаются именами систем.

    Raises:
        UnknownSystem: Если base не int и не str (в т.ч. bool)
    """
    if isinstance(base, bool) or not isinstance(base, (int, str)):
        raise UnknownSystem(f"Unknown number system [{base!r}]")
    if isinstance(base, str) and base.isdigit() and base.isascii():
        return int(base)
    return base


def is_positional(base: BaseId) -> bool:
    """True для стандартной позиционной базы 2..62."""
    return (
        isinstance(base, int)
        and not isinstance(base, bool)
        and POSITIONAL_MIN_BASE <= base <= POSITIONAL_MAX_BASE
    )


# =============================================================================
# ALPHABET MODEL
# =============================================================================


class Alphabet(BaseModel):
    """
    Алфавит системы счисления.

    Immutable модель (frozen=True). Для позиционных баз создаётся на лету
    срезом общей таблицы через model_construct (без повторной валидации).
    """

    model_config = {"frozen": True}

    name: str = Field(..., min_length=1, description="base-id в строковом виде ('16', 'base64url')")
    characters: str = Field(..., min_length=2, description="Символы в порядке возрастания значения")
    reverse: Dict[str, int] = Field(..., description="Символ → порядковое значение")
    no_negative: bool = Field(default=False, description="'-' является цифрой алфавита")
    no_fraction: bool = Field(default=False, description="'.' является цифрой алфавита")
    positional: bool = Field(default=False, description="Стандартная база 2..62")
    case_insensitive: bool = Field(default=False, description="База ≤ 36, вход в нижнем регистре")

    @property
    def size(self) -> int:
        """Основание системы (число символов)."""
        return len(self.characters)

    @classmethod
    def from_characters(cls, name: str, characters: str) -> "Alphabet":
        """
        Построение пользовательского алфавита с проверкой инвариантов.

        Raises:
            InvalidAlphabet: Меньше 2 символов, повтор или символ шире байта
        """
        if not isinstance(characters, str) or len(characters) < 2:
            raise InvalidAlphabet("Alphabet must contain at least 2 symbols")

        reverse: Dict[str, int] = {}
        for ordinal, symbol in enumerate(characters):
            if ord(symbol) > MAX_SYMBOL_CODE:
                raise InvalidAlphabet(f"Symbol {symbol!r} is wider than one byte")
            if symbol in reverse:
                raise InvalidAlphabet(f"Symbol {symbol!r} repeats in alphabet")
            reverse[symbol] = ordinal

        return cls(
            name=name,
            characters=characters,
            reverse=reverse,
            no_negative="-" in reverse,
            no_fraction="." in reverse,
        )

    @classmethod
    def positional_base(cls, base: int) -> "Alphabet":
        """Алфавит позиционной базы 2..62 (срез общей таблицы)."""
        table = ALPHABET_36 if base <= NATIVE_MAX_BASE else ALPHABET_62
        characters = table[:base]
        return cls.model_construct(
            name=str(base),
            characters=characters,
            reverse={symbol: ordinal for ordinal, symbol in enumerate(characters)},
            no_negative=False,
            no_fraction=False,
            positional=True,
            case_insensitive=base <= NATIVE_MAX_BASE,
        )


# =============================================================================
# REGISTRY
# =============================================================================


class AlphabetRegistry:
    """
    Реестр систем счисления.

    Встроенные именованные системы заполняются при создании. Запись
    (register) защищена lock; удаления нет.
    """

    def __init__(self):
        self._systems: Dict[str, Alphabet] = {}
        self._lock = threading.Lock()
        for name, characters in BUILTIN_SYSTEMS.items():
            self._systems[name] = Alphabet.from_characters(name, characters)

    def register(self, name: str, characters: str) -> Alphabet:
        """
        Регистрация (или перерегистрация) пользовательской системы.

        Args:
            name: Имя системы (не пустое, не десятичное число)
            characters: Символы алфавита в порядке возрастания значения

        Returns:
            Зарегистрированный Alphabet

        Raises:
            InvalidAlphabet: Некорректное имя или алфавит

        Examples:
            >>> registry = AlphabetRegistry()
            >>> registry.register("symbols", "!@#$%^&*()_+=-").no_negative
            True
        """
        if not isinstance(name, str) or not name:
            raise InvalidAlphabet("Numeral system name must be a non-empty string")
        if isinstance(normalize_base_id(name), int):
            raise InvalidAlphabet(f"Numeral system name [{name}] clashes with a positional base")

        alphabet = Alphabet.from_characters(name, characters)
        with self._lock:
            self._systems[name] = alphabet
        logger.debug("Registered numeral system %s (%d symbols)", name, alphabet.size)
        return alphabet

    def load_definitions(self, payload: Mapping[str, Any]) -> List[Alphabet]:
        """
        Регистрация нескольких систем из JSON-подобного payload.

        Payload валидируется по схеме numeral_systems:
            {"systems": [{"name": "...", "alphabet": "..."}]}

        Raises:
            jsonschema.ValidationError: Payload не соответствует схеме
            InvalidAlphabet: Один из алфавитов некорректен
        """
        from bignum.core.contracts.validators import validate_numeral_systems

        validate_numeral_systems(payload)
        return [self.register(entry["name"], entry["alphabet"]) for entry in payload["systems"]]

    def lookup(self, base: BaseId) -> Alphabet:
        """
        Поиск алфавита по base-id.

        Raises:
            UnknownSystem: base не 2..62 и не зарегистрированное имя
        """
        base = normalize_base_id(base)
        if isinstance(base, int):
            if not is_positional(base):
                raise UnknownSystem(f"Unknown number system [{base}]")
            return Alphabet.positional_base(base)

        alphabet = self._systems.get(base)
        if alphabet is None:
            raise UnknownSystem(f"Unknown number system [{base}]")
        return alphabet

    def names(self) -> List[str]:
        """Имена всех именованных систем (встроенных и пользовательских)."""
        return sorted(self._systems)

    def __contains__(self, base: object) -> bool:
        try:
            self.lookup(base)  # type: ignore[arg-type]
        except UnknownSystem:
            return False
        return True
