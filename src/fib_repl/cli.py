import argparse
import logging
import sys
import time
from dataclasses import replace

from fib_repl.config import LOG_FORMATS, load_config
from fib_repl.errors import ConfigError, FibonacciOverflowError, ReadLineError, StackExhaustedError
from fib_repl.logging_setup import setup_logging
from fib_repl.repl import FibonacciSession


def build_parser():
    parser = argparse.ArgumentParser(
        prog="fib-repl",
        description="Interactively compute Fibonacci numbers by naive recursion.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument(
        "--config", "-c",
        metavar="PATH",
        default=None,
        help="YAML configuration file. Defaults to $FIB_REPL_CONFIG when set."
    )
    parser.add_argument(
        "--bits", "-b",
        type=int,
        default=None,
        help="Width in bits of the emulated unsigned integer (platform width if omitted)."
    )
    parser.add_argument(
        "--log-format",
        choices=LOG_FORMATS,
        default=None,
        help="Format of log lines written to stderr."
    )
    parser.add_argument(
        "--debug", "-d",
        action="store_true",
        help="Enable DEBUG level logging."
    )
    return parser


def run(argv=None) -> int:
    """Parse arguments, run one session and return the exit status."""
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config)
        if args.bits is not None:
            if args.bits <= 0:
                raise ConfigError(f"bits must be a positive integer, got {args.bits}")
            config = replace(config, bits=args.bits)
        if args.log_format is not None:
            config = replace(config, log_format=args.log_format)
        if args.debug:
            config = replace(config, log_level="DEBUG")
    except ConfigError as e:
        setup_logging()
        logging.getLogger(__name__).error({"event": "config", "status": "failed", "error": str(e)})
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    setup_logging(config.log_level, config.log_format)
    logger = logging.getLogger(__name__)
    start_time = time.time()
    logger.info({"event": "cli_start", "bits": config.bits, "log_level": config.log_level})

    session = FibonacciSession(bits=config.bits)
    try:
        status = session.run()
    except ReadLineError as e:
        logger.error({"event": "cli_end", "status": "failed", "reason": "read_failed", "error": str(e)})
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    except FibonacciOverflowError as e:
        logger.error({"event": "cli_end", "status": "failed", "reason": "overflow", "n": e.n,
                      "overflow_at": e.overflow_at, "bits": e.bits})
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    except StackExhaustedError as e:
        logger.error({"event": "cli_end", "status": "failed", "reason": "stack_exhausted", "n": e.n})
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    total_duration = time.time() - start_time
    logger.info({
        "event": "cli_end",
        "status": "success",
        "computed": session.computed,
        "total_duration_seconds": round(total_duration, 3),
    })
    return status


def main(argv=None):
    """Console script entry point."""
    sys.exit(run(argv))


if __name__ == "__main__":
    main()
