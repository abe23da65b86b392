import json
import logging
import sys
from logging import Formatter, StreamHandler
from typing import Optional, TextIO


class JsonFormatter(Formatter):
    """
    Formats log records as JSON strings (JSONL format - one JSON object per line).
    """
    def format(self, record):
        log_record = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "name": record.name,
        }
        # Dict messages are merged into the record
        if isinstance(record.msg, dict):
            log_record.update(record.msg)
        else:
            log_record["message"] = record.getMessage()

        if record.exc_info:
            log_record['exception'] = self.formatException(record.exc_info).replace('\n', '\\n')
        if record.stack_info:
            log_record['stack_info'] = self.formatStack(record.stack_info).replace('\n', '\\n')

        return json.dumps(log_record, default=str)


def setup_logging(level: str = "WARNING", fmt: str = "json", stream: Optional[TextIO] = None):
    """Configures logging on stderr, leaving stdout to the session."""
    log_level = getattr(logging, level.upper())
    logger = logging.getLogger()
    logger.setLevel(log_level)

    if logger.hasHandlers():
        logger.handlers.clear()

    handler = StreamHandler(stream if stream is not None else sys.stderr)
    if fmt == "json":
        formatter = JsonFormatter(datefmt='%Y-%m-%dT%H:%M:%S%z')  # ISO 8601
    else:
        formatter = Formatter('%(asctime)s %(levelname)s %(name)s: %(message)s')

    handler.setFormatter(formatter)
    logger.addHandler(handler)

    logging.getLogger("fib_repl").setLevel(log_level)
    return handler
