"""
Errors — Таксономия исключений bignum

Все ошибки библиотеки наследуются от MathError и дополнительно от
соответствующего встроенного исключения Python, чтобы вызывающий код мог
ловить их как LookupError / ValueError / ZeroDivisionError.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Ошибки пробрасываются немедленно, повторов и восстановления нет
2. Мусорный числовой ввод НЕ является ошибкой (нормализуется в "0")
3. Нераспознанные символы на fast/raw путях конвертации пропускаются молча
"""


class MathError(Exception):
    """Базовое исключение для всех ошибок bignum."""

    pass


class UnknownSystem(MathError, LookupError):
    """Система счисления не является базой 2..62 и не зарегистрирована."""

    pass


class InvalidAlphabet(MathError, ValueError):
    """
    Алфавит нельзя зарегистрировать.

    Причины:
    - меньше 2 символов
    - повторяющийся символ
    - символ шире одного байта (code point > 255)
    - имя пустое или совпадает с позиционной базой
    """

    pass


class NegativeNotSupported(MathError, ValueError):
    """Целевая система не умеет представлять отрицательные числа."""

    pass


class FractionNotSupported(MathError, ValueError):
    """Конвертация дробных значений между системами не поддерживается."""

    pass


class InvalidDigit(MathError, ValueError):
    """Строгий (accelerated) путь конвертации встретил недопустимую цифру."""

    pass


class DomainError(MathError, ValueError):
    """Операция не определена для аргумента (sqrt(-x), отрицательный показатель powmod)."""

    pass


class DivisionByZero(MathError, ZeroDivisionError):
    """Деление / остаток / powmod по нулевому делителю."""

    pass


class ConstructError(MathError, RuntimeError):
    """
    BigNumber не может быть создан.

    Причины:
    - в runtime нет decimal backend
    - тип входного значения вне закрытого набора
    - запрошенная стратегия BigMath недоступна
    """

    pass
