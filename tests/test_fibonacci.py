"""
Fibonacci computation and index parsing
"""
import os
import sys

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'src')))

from fib_repl.errors import FibonacciOverflowError, StackExhaustedError
from fib_repl.fibonacci import NATIVE_BITS, max_value, nth_fibonacci, parse_index


class TestNthFibonacci:
    """Values, recurrence and failure modes of nth_fibonacci"""

    @pytest.mark.parametrize("n,expected", [(0, 0), (1, 1), (2, 1), (10, 55), (20, 6765)])
    def test_known_values(self, n, expected):
        assert nth_fibonacci(n) == expected

    def test_recurrence_holds(self):
        for n in range(2, 21):
            assert nth_fibonacci(n) == nth_fibonacci(n - 1) + nth_fibonacci(n - 2)

    def test_repeated_calls_are_identical(self):
        first = nth_fibonacci(15)
        assert all(nth_fibonacci(15) == first for _ in range(5))

    def test_largest_value_within_width(self):
        # F(13) = 233 is the last term that fits in 8 bits
        assert nth_fibonacci(13, bits=8) == 233

    def test_overflow_past_width(self):
        with pytest.raises(FibonacciOverflowError) as exc_info:
            nth_fibonacci(14, bits=8)
        assert exc_info.value.bits == 8
        assert "attempt to add with overflow" in str(exc_info.value)

    def test_overflow_reports_requested_index(self):
        with pytest.raises(FibonacciOverflowError) as exc_info:
            nth_fibonacci(20, bits=8)
        assert exc_info.value.n == 20
        assert exc_info.value.overflow_at == 14

    def test_deep_index_exhausts_stack(self):
        with pytest.raises(StackExhaustedError) as exc_info:
            nth_fibonacci(5000)
        assert exc_info.value.n == 5000
        assert isinstance(exc_info.value, RecursionError)

    def test_overflow_is_an_overflow_error(self):
        with pytest.raises(OverflowError):
            nth_fibonacci(25, bits=16)

    def test_base_cases_never_overflow(self):
        assert nth_fibonacci(1, bits=1) == 1
        assert nth_fibonacci(0, bits=1) == 0

    @pytest.mark.parametrize("n", [-1, 1.5, "3", True, None])
    def test_rejects_invalid_index(self, n):
        with pytest.raises(ValueError):
            nth_fibonacci(n)

    def test_rejects_index_wider_than_type(self):
        with pytest.raises(ValueError):
            nth_fibonacci(256, bits=8)


class TestMaxValue:
    def test_widths(self):
        assert max_value(8) == 255
        assert max_value(64) == 2 ** 64 - 1

    def test_native_width_is_pointer_size(self):
        assert NATIVE_BITS in (32, 64)

    @pytest.mark.parametrize("bits", [0, -8, 8.0, True])
    def test_rejects_bad_width(self, bits):
        with pytest.raises(ValueError):
            max_value(bits)


class TestParseIndex:
    """Console line parsing"""

    @pytest.mark.parametrize("text,expected", [
        ("5\n", 5),
        ("  42  \n", 42),
        ("+7", 7),
        ("0", 0),
        ("007", 7),
        ("\t10\r\n", 10),
    ])
    def test_accepts(self, text, expected):
        assert parse_index(text) == expected

    @pytest.mark.parametrize("text", [
        "", "\n", "abc", "x", "-1", "1.5", "1_000", "1 2", "++1", "+", "٣",
    ])
    def test_rejects(self, text):
        assert parse_index(text) is None

    def test_rejects_value_wider_than_type(self):
        assert parse_index("255", bits=8) == 255
        assert parse_index("256", bits=8) is None
