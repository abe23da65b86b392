"""Interactive Fibonacci session.

The session is a small state machine driven by console input::

    PROMPTING -> AWAITING_INDEX -> COMPUTING -> AWAITING_CONTINUATION
        ^             |                              |        |
        +-------------+ (bad index)                  | "y"    | other
        +--------------------------------------------+        v
                                                          TERMINATED

Malformed indices are dropped without a message; the only visible
effect is the prompt being shown again.
"""

import logging
import sys
import time
from enum import Enum
from typing import List, Optional, TextIO

from .errors import ReadLineError
from .fibonacci import NATIVE_BITS, nth_fibonacci, parse_index

logger = logging.getLogger(__name__)

INDEX_PROMPT = "Please enter n: "
RESULT_TEMPLATE = "nth fibonacci: {value}"
CONTINUE_PROMPT = "Keep going? (y/n)[n]:"


class State(Enum):
    PROMPTING = "prompting"
    AWAITING_INDEX = "awaiting_index"
    COMPUTING = "computing"
    AWAITING_CONTINUATION = "awaiting_continuation"
    TERMINATED = "terminated"


class FibonacciSession:
    """
    Runs the prompt / compute / continue loop over a pair of text streams.

    Streams default to ``sys.stdin`` and ``sys.stdout`` looked up when the
    session is created, so pytest's capture and monkeypatching work.
    """

    def __init__(self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None,
                 bits: int = NATIVE_BITS):
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout
        self.bits = bits
        self.state = State.PROMPTING
        self.history: List[State] = [State.PROMPTING]
        self.computed = 0
        self._index: Optional[int] = None

    def _transition(self, state: State) -> None:
        self.state = state
        self.history.append(state)

    def _write_line(self, text: str) -> None:
        self.stdout.write(text + "\n")
        self.stdout.flush()

    def _read_line(self) -> str:
        try:
            line = self.stdin.readline()
        except OSError as e:
            raise ReadLineError(str(e)) from e
        if line == "":
            raise ReadLineError()
        return line

    def step(self) -> State:
        """Advance the machine by one transition and return the new state."""
        if self.state is State.PROMPTING:
            self._write_line(INDEX_PROMPT)
            self._transition(State.AWAITING_INDEX)

        elif self.state is State.AWAITING_INDEX:
            line = self._read_line()
            index = parse_index(line, self.bits)
            if index is None:
                logger.debug({"event": "index_rejected", "input": line.strip()})
                self._transition(State.PROMPTING)
            else:
                self._index = index
                self._transition(State.COMPUTING)

        elif self.state is State.COMPUTING:
            n = self._index
            start_time = time.time()
            value = nth_fibonacci(n, self.bits)
            duration = time.time() - start_time
            self.computed += 1
            logger.info({
                "event": "fib_computed",
                "n": n,
                "value": value,
                "duration_seconds": round(duration, 3),
            })
            self._write_line(RESULT_TEMPLATE.format(value=value))
            self._write_line(CONTINUE_PROMPT)
            self._transition(State.AWAITING_CONTINUATION)

        elif self.state is State.AWAITING_CONTINUATION:
            answer = self._read_line().strip().lower()
            if answer == "y":
                self._transition(State.PROMPTING)
            else:
                self._transition(State.TERMINATED)

        return self.state

    def run(self) -> int:
        """
        Run until the user declines to continue.

        Returns:
            0 on normal termination.

        Raises:
            ReadLineError: If the console is closed or unreadable.
            FibonacciOverflowError: If a result exceeds the integer width.
        """
        logger.info({"event": "session_start", "bits": self.bits})
        while self.state is not State.TERMINATED:
            self.step()
        logger.info({"event": "session_end", "computed": self.computed})
        return 0


def run_session(stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None,
                bits: int = NATIVE_BITS) -> int:
    """Build a :class:`FibonacciSession` and run it to completion."""
    return FibonacciSession(stdin=stdin, stdout=stdout, bits=bits).run()


__all__ = [
    "CONTINUE_PROMPT",
    "INDEX_PROMPT",
    "RESULT_TEMPLATE",
    "FibonacciSession",
    "State",
    "run_session",
]
