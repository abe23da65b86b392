"""Naive recursive Fibonacci over a fixed-width unsigned integer.

The sequence is defined as::

    F(0) = 0
    F(1) = 1
    F(n) = F(n-1) + F(n-2) for n >= 2

:func:`nth_fibonacci` follows that definition literally: both sub-terms
are recomputed on every call, so the running time is O(2^n). Results are
bounded by ``2**bits - 1`` and a sum past that bound raises
:class:`~fib_repl.errors.FibonacciOverflowError` rather than silently
promoting to a big integer.
"""

import re
import struct
from typing import Optional

from .errors import FibonacciOverflowError, StackExhaustedError

# Width of the host's native unsigned integer (pointer size).
NATIVE_BITS = struct.calcsize("P") * 8

_INDEX_RE = re.compile(r"\+?[0-9]+")


def max_value(bits: int) -> int:
    """Largest value representable by an unsigned integer of ``bits`` bits."""
    if not isinstance(bits, int) or isinstance(bits, bool) or bits <= 0:
        raise ValueError(f"bits must be a positive integer, got {bits!r}")
    return (1 << bits) - 1


def nth_fibonacci(n: int, bits: int = NATIVE_BITS) -> int:
    """Return the ``n``-th Fibonacci number.

    Parameters
    ----------
    n : int
        Zero-based index. Must be non-negative and fit in ``bits`` bits.
    bits : int
        Width of the emulated unsigned integer type.

    Returns
    -------
    int
        The value of ``F(n)``.

    Raises
    ------
    ValueError
        If ``n`` is negative, not an int, or wider than ``bits``.
    FibonacciOverflowError
        If an intermediate sum does not fit in ``bits`` bits.
    StackExhaustedError
        If the recursion for ``n`` is deeper than the interpreter allows.
    """
    limit = max_value(bits)
    if not isinstance(n, int) or isinstance(n, bool):
        raise ValueError(f"n must be an integer, got {n!r}")
    if n < 0 or n > limit:
        raise ValueError(f"n must be between 0 and {limit}, got {n}")
    try:
        return _fib(n, n, limit, bits)
    except RecursionError:
        raise StackExhaustedError(n) from None


def _fib(k: int, n: int, limit: int, bits: int) -> int:
    if k <= 1:
        return k
    total = _fib(k - 1, n, limit, bits) + _fib(k - 2, n, limit, bits)
    if total > limit:
        raise FibonacciOverflowError(n, bits, overflow_at=k)
    return total


def parse_index(text: str, bits: int = NATIVE_BITS) -> Optional[int]:
    """Parse a console line as an index, or return ``None``.

    Surrounding whitespace is ignored. Only an optional ``+`` followed by
    ASCII digits is accepted, and the value must fit in ``bits`` bits.
    """
    candidate = text.strip()
    if not _INDEX_RE.fullmatch(candidate):
        return None
    value = int(candidate)
    if value > max_value(bits):
        return None
    return value


__all__ = ["NATIVE_BITS", "max_value", "nth_fibonacci", "parse_index"]
