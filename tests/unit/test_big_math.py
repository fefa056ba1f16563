"""
Тесты для BigMath — стратегии целочисленного add/subtract

Проверяемые инварианты:
1. Все стратегии дают одинаковые результаты (decimal, gmpy2, pure)
2. Переполнение нативных целых не влияет на результат
3. Знаки обрабатываются корректно, "-0" не возвращается
4. Выбор стратегии зависит только от доступных backend'ов
"""

import pytest

from bignum.core.errors import ConstructError
from bignum.core.math.big_math import (
    DecimalMath,
    Gmpy2Math,
    PurePythonMath,
    create_big_math,
)
from bignum.core.math.decimal_backend import DecimalBackend
from bignum.core.math.gmp import gmpy2_available
from bignum.core.numeral.conversion import NumeralConverter


@pytest.fixture(params=["decimal", "gmpy2", "pure"])
def big_math(request):
    if request.param == "gmpy2":
        pytest.importorskip("gmpy2")
        return Gmpy2Math()
    if request.param == "pure":
        return PurePythonMath(NumeralConverter(accelerator=None))
    return DecimalMath(DecimalBackend())


class TestAdd:
    @pytest.mark.parametrize(
        "left,right,expected",
        [
            ("2147483647", "9223372036854775808", "9223372039002259455"),
            ("18446744073709551615", "100000000000", "18446744173709551615"),
            ("-5", "6", "1"),
            ("5", "-6", "-1"),
            ("-5", "-6", "-11"),
            ("0", "7", "7"),
            ("7", "0", "7"),
            ("255", "1", "256"),
            ("65535", "65535", "131070"),
            ("-10", "10", "0"),
            ("0", "-0", "0"),
            ("-0", "0", "0"),
            ("-0", "-0", "0"),
            ("0", "007", "7"),
            ("007", "0", "7"),
            ("-007", "0", "-7"),
        ],
    )
    def test_add(self, big_math, left, right, expected):
        assert big_math.add(left, right) == expected

    def test_add_is_commutative(self, big_math):
        left = "340282366920938463463374607431768211455"
        right = "-18446744073709551616"
        assert big_math.add(left, right) == big_math.add(right, left)
        assert big_math.add(left, right) == str(int(left) + int(right))


class TestSubtract:
    @pytest.mark.parametrize(
        "left,right,expected",
        [
            ("0", "6", "-6"),
            ("200", "250", "-50"),
            ("-5", "5", "-10"),
            ("5", "-5", "10"),
            ("-5", "-5", "0"),
            ("6", "3", "3"),
            ("10", "300", "-290"),
            ("256", "1", "255"),
            ("2147483647", "9223372036854775808", "-9223372034707292161"),
            ("18446744073709551618", "4000000000000", "18446740073709551618"),
            ("1", "1", "0"),
            ("-0", "0", "0"),
            ("0", "-0", "0"),
            ("007", "0", "7"),
            ("0", "007", "-7"),
            ("0", "0", "0"),
        ],
    )
    def test_subtract(self, big_math, left, right, expected):
        assert big_math.subtract(left, right) == expected

    def test_subtract_inverts_add(self, big_math):
        left = "98765432109876543210987654321"
        right = "12345678901234567890123456789"
        assert big_math.subtract(big_math.add(left, right), right) == left


class TestPurePythonMath:
    """Base-256 детали чистой стратегии."""

    @pytest.fixture
    def pure(self):
        return PurePythonMath(NumeralConverter(accelerator=None))

    def test_add_bytes_carries(self):
        assert PurePythonMath._add_bytes([255, 255], [1]) == [1, 0, 0]
        assert PurePythonMath._add_bytes([1], [2]) == [3]

    def test_subtract_bytes_end_around_carry(self, pure):
        assert pure._subtract_bytes([6], [3]) == ("", [3])

    def test_subtract_bytes_negative(self, pure):
        assert pure._subtract_bytes([200], [250]) == ("-", [50])

    def test_no_negative_zero(self, pure):
        assert pure.subtract("12345", "12345") == "0"
        assert pure.add("-12345", "12345") == "0"


class TestCreateBigMath:
    def test_auto_prefers_decimal(self):
        assert isinstance(create_big_math("auto", DecimalBackend(), NumeralConverter()), DecimalMath)

    def test_auto_without_decimal(self):
        big_math = create_big_math("auto", None, NumeralConverter())
        expected = Gmpy2Math if gmpy2_available() else PurePythonMath
        assert isinstance(big_math, expected)

    def test_forced_pure(self):
        assert isinstance(create_big_math("pure", DecimalBackend(), NumeralConverter()), PurePythonMath)

    def test_forced_decimal_without_backend(self):
        with pytest.raises(ConstructError, match="decimal backend"):
            create_big_math("decimal", None, NumeralConverter())

    def test_unknown_strategy(self):
        with pytest.raises(ConstructError, match="Unknown BigMath strategy"):
            create_big_math("quantum", DecimalBackend(), NumeralConverter())
