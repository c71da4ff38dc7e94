import logging
import json
from datetime import datetime
from pathlib import Path
from typing import Optional

_HANDLER_MARK = "_jobnexus_handler"


class JSONFormatter(logging.Formatter):
    def format(self, record):
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "path": record.pathname,
            "line": record.lineno
        }
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry)


def setup_logging(level: str = "INFO", log_file: Optional[str] = None):
    logger = logging.getLogger()
    logger.setLevel(level.upper())

    # Drop handlers from an earlier call so app factories can run repeatedly.
    for existing in list(logger.handlers):
        if getattr(existing, _HANDLER_MARK, False):
            logger.removeHandler(existing)
            existing.close()

    # Console handler
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
    setattr(handler, _HANDLER_MARK, True)
    logger.addHandler(handler)

    # File handler (JSON)
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(JSONFormatter())
        setattr(file_handler, _HANDLER_MARK, True)
        logger.addHandler(file_handler)
