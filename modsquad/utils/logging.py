"""Logging setup."""

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

# Job context attached by the pipeline through ``extra=``
JOB_FIELDS = ("input_path", "output_path", "step", "error_code")

CONSOLE_FORMAT = "%(levelname)s: %(message)s"
FILE_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


class JsonFormatter(logging.Formatter):
    """One JSON object per record, carrying job context when present."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in JOB_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                entry[name] = str(value)

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry)


def job_context(input_path: Path, step: str, **fields) -> dict[str, object]:
    """Build the ``extra`` mapping for a job-level log call."""
    return {"input_path": input_path, "step": step, **fields}


def setup_logging(
    level: str = "INFO",
    log_file: Path | None = None,
    jsonl: bool = False,
) -> logging.Logger:
    """
    Configure the ``modsquad`` logger.

    Job messages (skips, tool failures, "Processed a -> b") go to stderr
    so they interleave with the external tools' own output. An optional
    log file receives everything, as text or JSON Lines.
    """
    logger = logging.getLogger("modsquad")
    logger.setLevel(logging.getLevelName(level.upper()))
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(console)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(JsonFormatter() if jsonl else logging.Formatter(FILE_FORMAT))
        logger.addHandler(file_handler)

    return logger
