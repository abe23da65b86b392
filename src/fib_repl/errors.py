"""Exceptions raised by fib_repl.

Library code raises these; the command-line entry point catches them,
logs the failure and exits with a non-zero status.
"""


class FibReplError(Exception):
    """Base class for all fib_repl errors."""


class ReadLineError(FibReplError):
    """Reading a line from the console failed or hit end-of-stream."""

    def __init__(self, reason: str = "end of stream"):
        self.reason = reason
        super().__init__(f"Failed to read line: {reason}")


class FibonacciOverflowError(FibReplError, OverflowError):
    """A Fibonacci sum exceeded the emulated unsigned integer width.

    ``n`` is the requested index; ``overflow_at`` is the term whose sum
    first went past the limit.
    """

    def __init__(self, n: int, bits: int, overflow_at: int):
        self.n = n
        self.bits = bits
        self.overflow_at = overflow_at
        super().__init__(
            f"attempt to add with overflow (n={n}, at F({overflow_at}), width={bits} bits)"
        )


class StackExhaustedError(FibReplError, RecursionError):
    """The recursion for an index ran out of call stack."""

    def __init__(self, n: int):
        self.n = n
        super().__init__(f"stack overflow while computing F({n})")


class ConfigError(FibReplError):
    """Configuration file or value is invalid."""
