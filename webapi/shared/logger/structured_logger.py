import logging
import inspect
import os
from typing import Optional, Dict, Tuple
from datetime import datetime, timezone

import structlog


class StructuredLogger:
    """
    Console + JSON-file logger built on structlog.

    Instances are cached per (name, log file, level) so every component
    asking for the same logger shares the underlying stdlib loggers and
    handlers.
    """
    _logger_cache: Dict[Tuple[str, str, str], "StructuredLogger"] = {}

    LEVEL_COLORS = {
        "DEBUG": "\033[36m",     # cyan
        "INFO": "\033[32m",      # green
        "WARNING": "\033[33m",   # yellow
        "ERROR": "\033[31m",     # red
        "CRITICAL": "\033[1;31m" # bold red
    }
    RESET_COLOR = "\033[0m"

    def __init__(self, name: str = "webapi", log_file: str = "webapi.log", level: str = "INFO", context: Optional[dict] = None):
        self.name = name
        self.log_file = log_file
        self.level = level.upper()
        self.context = context or {}

        cache_key = (name, os.path.abspath(log_file), self.level)
        cached = self._logger_cache.get(cache_key)
        if cached is not None:
            self.console_logger = cached.console_logger.bind(**self.context)
            self.file_logger = cached.file_logger.bind(**self.context)
            return

        log_level = getattr(logging, self.level, logging.INFO)

        # ----------------------------
        # Caller lookup processor
        # ----------------------------
        def add_caller(logger, method_name, event_dict):
            frame = inspect.currentframe()
            while frame:
                module_name = frame.f_globals.get("__name__", "")
                if module_name and not module_name.startswith(("structlog", "logging")) \
                        and not module_name.endswith("structured_logger"):
                    event_dict["module"] = module_name
                    event_dict["function"] = frame.f_code.co_name
                    event_dict["lineno"] = frame.f_lineno
                    break
                frame = frame.f_back
            return event_dict

        # ----------------------------
        # Console renderer
        # ----------------------------
        def render_console(logger, method_name, event_dict):
            ts = event_dict.pop("timestamp", None) or datetime.now(timezone.utc).isoformat()
            level = event_dict.pop("level", method_name).upper()
            logger_name = event_dict.pop("logger", self.name)
            msg = event_dict.pop("event", "")
            exc = event_dict.pop("exception", None)
            module = event_dict.pop("module", "")
            func = event_dict.pop("function", "")
            lineno = event_dict.pop("lineno", "")

            # Caller info only for WARNING and above
            caller = ""
            if level in ("WARNING", "ERROR", "CRITICAL") and module and func:
                caller = f" ({module}.{func}:{lineno})"

            fields = " ".join(f"{k}={v}" for k, v in event_dict.items())
            line = f"{ts} [{logger_name}] {level}: {msg}"
            if fields:
                line += f" {fields}"
            line += caller
            if exc:
                line += f"\n{exc}"
            color = self.LEVEL_COLORS.get(level, "")
            return f"{color}{line}{self.RESET_COLOR}"

        # ----------------------------
        # Console logger
        # ----------------------------
        console_logger = logging.getLogger(f"{name}.console.{self.level}")
        console_logger.setLevel(log_level)
        console_logger.propagate = False
        if not console_logger.handlers:
            ch = logging.StreamHandler()
            ch.setFormatter(logging.Formatter("%(message)s"))
            console_logger.addHandler(ch)

        self.console_logger = structlog.wrap_logger(
            console_logger,
            processors=[
                structlog.stdlib.filter_by_level,
                structlog.processors.TimeStamper(fmt="ISO"),
                structlog.stdlib.add_log_level,
                structlog.processors.format_exc_info,
                add_caller,
                render_console,
            ],
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        ).bind(logger=name, **self.context)

        # ----------------------------
        # File logger (JSON lines)
        # ----------------------------
        file_logger = logging.getLogger(f"{name}.file.{self.level}.{cache_key[1]}")
        file_logger.setLevel(log_level)
        file_logger.propagate = False
        if not any(isinstance(h, logging.FileHandler) for h in file_logger.handlers):
            fh = logging.FileHandler(log_file, encoding="utf-8")
            fh.setFormatter(logging.Formatter("%(message)s"))
            file_logger.addHandler(fh)

        self.file_logger = structlog.wrap_logger(
            file_logger,
            processors=[
                structlog.stdlib.filter_by_level,
                structlog.processors.TimeStamper(fmt="ISO"),
                structlog.stdlib.add_log_level,
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                add_caller,
                structlog.processors.UnicodeDecoder(),
                structlog.processors.JSONRenderer(default=str),
            ],
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        ).bind(logger=name, **self.context)

        self._logger_cache[cache_key] = self

    def bind(self, **context) -> "StructuredLogger":
        """Return a logger sharing these handlers with extra bound context."""
        return StructuredLogger(self.name, self.log_file, self.level, context={**self.context, **context})

    # ----------------------------
    # Logging methods
    # ----------------------------
    def debug(self, msg: str, **extra):
        self.console_logger.debug(msg, **extra)
        self.file_logger.debug(msg, **extra)

    def info(self, msg: str, **extra):
        self.console_logger.info(msg, **extra)
        self.file_logger.info(msg, **extra)

    def warning(self, msg: str, **extra):
        self.console_logger.warning(msg, **extra)
        self.file_logger.warning(msg, **extra)

    def error(self, msg: str, **extra):
        self.console_logger.error(msg, **extra)
        self.file_logger.error(msg, **extra)

    def critical(self, msg: str, **extra):
        self.console_logger.critical(msg, **extra)
        self.file_logger.critical(msg, **extra)

    def exception(self, msg: str, **extra):
        self.console_logger.exception(msg, **extra)
        self.file_logger.exception(msg, **extra)
