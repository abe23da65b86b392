from .errors import ConfigError, FibReplError, FibonacciOverflowError, ReadLineError, StackExhaustedError
from .fibonacci import NATIVE_BITS, max_value, nth_fibonacci, parse_index
from .repl import FibonacciSession, State, run_session

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "FibReplError",
    "FibonacciOverflowError",
    "ReadLineError",
    "StackExhaustedError",
    "NATIVE_BITS",
    "max_value",
    "nth_fibonacci",
    "parse_index",
    "FibonacciSession",
    "State",
    "run_session",
]
