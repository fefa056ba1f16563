"""
Runtime — единый сервисный экземпляр bignum

MathRuntime собирает из MathSettings все компоненты процесса:
- decimal backend (или None, если отключён)
- реестр алфавитов
- конвертер (с gmpy2 accelerator, если разрешён и установлен)
- стратегию BigMath
- масштаб по умолчанию для новых BigNumber

Запись в общее состояние (set_system, set_default_scale) защищена lock.
Процессный runtime создаётся лениво; configure() заменяет его новым.
"""

import logging
import threading
from typing import Optional

from bignum.core.config import MathSettings
from bignum.core.math.big_math import BigMath, create_big_math
from bignum.core.math.decimal_backend import DecimalBackend, bootstrap_default_scale
from bignum.core.math.gmp import Gmpy2Accelerator, gmpy2_available
from bignum.core.numeral.alphabets import Alphabet, AlphabetRegistry, BaseId
from bignum.core.numeral.conversion import NumberLike, NumeralConverter

logger = logging.getLogger(__name__)


class MathRuntime:
    """
    Контейнер компонентов bignum.

    Args:
        settings: Настройки (по умолчанию читаются из окружения)
    """

    def __init__(self, settings: Optional[MathSettings] = None):
        self.settings = settings if settings is not None else MathSettings()
        self.backend: Optional[DecimalBackend] = (
            DecimalBackend() if self.settings.arithmetic_backend == "decimal" else None
        )
        self.registry = AlphabetRegistry()

        accelerator = None
        if self.settings.use_accelerator and gmpy2_available():
            accelerator = Gmpy2Accelerator()
        self.converter = NumeralConverter(self.registry, accelerator, self.settings.native_int_bits)
        self.big_math: BigMath = create_big_math(self.settings.big_math_strategy, self.backend, self.converter)

        default_scale = self.settings.default_scale
        self._default_scale = default_scale if default_scale is not None else bootstrap_default_scale()
        self._lock = threading.Lock()

        logger.debug(
            "Math runtime ready: backend=%s big_math=%s accelerator=%s default_scale=%d",
            self.backend.name if self.backend is not None else None,
            self.big_math.name,
            accelerator.name if accelerator is not None else None,
            self._default_scale,
        )

    def get_default_scale(self) -> int:
        return self._default_scale

    def set_default_scale(self, scale: int) -> int:
        """Установка масштаба по умолчанию (отрицательный → 0)."""
        scale = int(scale) if scale > 0 else 0
        with self._lock:
            self._default_scale = scale
        logger.debug("Default scale set to %d", scale)
        return scale

    def set_system(self, name: str, alphabet: str) -> Alphabet:
        with self._lock:
            return self.registry.register(name, alphabet)

    def convert(self, number: NumberLike, from_base: BaseId, to_base: BaseId) -> str:
        return self.converter.convert(number, from_base, to_base)


# =============================================================================
# PROCESS RUNTIME
# =============================================================================

_runtime: Optional[MathRuntime] = None
_runtime_lock = threading.Lock()


def get_runtime() -> MathRuntime:
    """Процессный runtime (создаётся при первом обращении)."""
    global _runtime
    if _runtime is None:
        with _runtime_lock:
            if _runtime is None:
                _runtime = MathRuntime()
    return _runtime


def configure(settings: Optional[MathSettings] = None) -> MathRuntime:
    """
    Замена процессного runtime новым, собранным из settings.

    Ранее зарегистрированные пользовательские системы и изменённый
    масштаб по умолчанию не переносятся.
    """
    global _runtime
    runtime = MathRuntime(settings)
    with _runtime_lock:
        _runtime = runtime
    return runtime


# =============================================================================
# FACADE
# =============================================================================


def convert(number: NumberLike, from_base: BaseId, to_base: BaseId) -> str:
    """
    Конвертация числа между системами счисления.

    Examples:
        >>> convert("WIKIPEDIA", 36, 10)
        '91730738691298'
    """
    return get_runtime().convert(number, from_base, to_base)


def convert_to(number: NumberLike, to_base: BaseId) -> str:
    return get_runtime().converter.convert_to(number, to_base)


def convert_from(number: NumberLike, from_base: BaseId) -> str:
    return get_runtime().converter.convert_from(number, from_base)


def set_system(name: str, alphabet: str) -> Alphabet:
    """Регистрация пользовательской системы счисления в процессном runtime."""
    return get_runtime().set_system(name, alphabet)


def get_default_scale() -> int:
    return get_runtime().get_default_scale()


def set_default_scale(scale: int) -> int:
    return get_runtime().set_default_scale(scale)
