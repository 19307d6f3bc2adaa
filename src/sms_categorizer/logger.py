import logging
import logging.config
import os
import sys

LOG_FORMAT = "%(asctime)s - %(threadName)s - %(name)s - %(levelname)s - %(message)s"
DIAGNOSTICS_LOGGER = "sms_categorizer.diagnostics"


class ColourizedFormatter(logging.Formatter):
    """Colour the level name when writing to a terminal."""

    LEVEL_COLORS = {
        logging.DEBUG: "\x1b[90m",
        logging.INFO: "\x1b[32m",
        logging.WARNING: "\x1b[33m",
        logging.ERROR: "\x1b[31m",
        logging.CRITICAL: "\x1b[31;1m",
    }
    RESET = "\x1b[0m"

    def __init__(self, fmt: str | None = None, datefmt: str | None = None, use_colors: bool | None = None):
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.use_colors = sys.stdout.isatty() if use_colors is None else use_colors

    def format(self, record: logging.LogRecord) -> str:
        colour = self.LEVEL_COLORS.get(record.levelno)
        if not self.use_colors or colour is None:
            return super().format(record)

        levelname = record.levelname
        record.levelname = f"{colour}{levelname}{self.RESET}"
        try:
            return super().format(record)
        finally:
            # other handlers format the same record
            record.levelname = levelname


def _use_colors() -> bool | None:
    raw = os.getenv("LOG_COLORS")
    if raw is None:
        return None
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def get_logging_config() -> dict:
    """
    dictConfig for the service and uvicorn.

    Everything goes to stdout. With ``LOG_DIR`` set, the root logger also
    writes ``app.log`` and the diagnostics stream gets its own
    ``diagnostics.log``.
    """
    level = os.getenv("LOG_LEVEL", "INFO").upper()
    log_dir = os.getenv("LOG_DIR")

    handlers: dict[str, dict] = {
        "console": {
            "class": "logging.StreamHandler",
            "stream": "ext://sys.stdout",
            "formatter": "console",
        },
    }
    root_handlers = ["console"]
    diagnostics_handlers: list[str] = []
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        handlers["file"] = {
            "class": "logging.FileHandler",
            "filename": os.path.join(log_dir, "app.log"),
            "formatter": "plain",
        }
        handlers["diagnostics_file"] = {
            "class": "logging.FileHandler",
            "filename": os.path.join(log_dir, "diagnostics.log"),
            "formatter": "plain",
        }
        root_handlers.append("file")
        diagnostics_handlers.append("diagnostics_file")

    loggers: dict[str, dict] = {
        "": {"handlers": root_handlers, "level": level},
        # propagates to the root handlers as well
        DIAGNOSTICS_LOGGER: {"handlers": diagnostics_handlers, "level": "INFO"},
    }
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        loggers[name] = {"handlers": root_handlers, "level": "INFO", "propagate": False}

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "console": {
                "()": "sms_categorizer.logger.ColourizedFormatter",
                "fmt": LOG_FORMAT,
                "use_colors": _use_colors(),
            },
            "plain": {"format": LOG_FORMAT},
        },
        "handlers": handlers,
        "loggers": loggers,
    }


def setup_logging() -> None:
    logging.config.dictConfig(get_logging_config())


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
