"""
Configuration — MathSettings

Настройки runtime читаются из переменных окружения с префиксом BIGNUM_
(pydantic-settings). Экземпляр неизменяемый: смена настроек означает
сборку нового runtime через bignum.runtime.configure().

Пример:
    BIGNUM_DEFAULT_SCALE=20 BIGNUM_BIG_MATH_STRATEGY=pure python app.py
"""

import sys
from typing import Final, Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# =============================================================================
# DEFAULTS
# =============================================================================

# Точность (значащие цифры) при переводе float в строку
FLOAT_SIGNIFICANT_DIGITS_DEFAULT: Final[int] = 16

# Масштаб, на котором раскрывается экспоненциальная запись (1.2E-99)
EXPONENT_EXPANSION_SCALE_DEFAULT: Final[int] = 100

# Ширина пробы floor/ceil: эмпирический допуск, не выводится из scale
FLOOR_PROBE_DIGITS_DEFAULT: Final[int] = 14


def detect_native_int_bits() -> int:
    """Разрядность нативного целого платформы (32 или 64)."""
    return 64 if sys.maxsize > 2**32 else 32


class MathSettings(BaseSettings):
    """
    Настройки арифметики и конвертации.

    Все поля имеют значения по умолчанию; переопределяются через
    переменные окружения BIGNUM_<FIELD> или аргументы конструктора.
    """

    model_config = SettingsConfigDict(env_prefix="BIGNUM_", frozen=True)

    default_scale: Optional[int] = Field(
        default=None,
        ge=0,
        description="Масштаб по умолчанию; None → max(decimal precision, 100)",
    )
    arithmetic_backend: Optional[Literal["decimal"]] = Field(
        default="decimal",
        description="Decimal backend для BigNumber; None отключает его",
    )
    big_math_strategy: Literal["auto", "decimal", "gmpy2", "pure"] = Field(
        default="auto",
        description="Стратегия целочисленного add/subtract",
    )
    use_accelerator: bool = Field(
        default=True,
        description="Использовать gmpy2 для конвертации, если установлен",
    )
    native_int_bits: Literal[32, 64] = Field(
        default_factory=detect_native_int_bits,
        description="Выбор таблицы max-safe-length для fast path",
    )
    floor_probe_digits: int = Field(default=FLOOR_PROBE_DIGITS_DEFAULT, ge=1)
    float_significant_digits: int = Field(default=FLOAT_SIGNIFICANT_DIGITS_DEFAULT, ge=1, le=17)
    exponent_expansion_scale: int = Field(default=EXPONENT_EXPANSION_SCALE_DEFAULT, ge=0)
