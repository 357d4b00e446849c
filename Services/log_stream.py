import logging
import os
import sys
from typing import Optional

DEFAULT_LOG_PATH = "/tmp/figma-mcp.log"
LOG_FORMAT = "[%(asctime)s] %(message)s"


class LogStream:
    """
    File-backed logger with an explicit lifecycle.

    open() attaches an append-mode file handler (and a stderr echo) to a
    named logger and returns it; close() flushes and detaches them. The
    returned logger is handed to components by construction.
    """

    def __init__(self, path: Optional[str] = None, name: str = "figma_resources", echo_stderr: bool = True):
        self.path = path or os.getenv("FIGMA_MCP_LOG_FILE", DEFAULT_LOG_PATH)
        self.name = name
        self.echo_stderr = echo_stderr
        self._handlers = []
        self._logger: Optional[logging.Logger] = None

    @property
    def logger(self) -> logging.Logger:
        if self._logger is None:
            raise RuntimeError("log stream is not open")
        return self._logger

    def open(self) -> logging.Logger:
        if self._logger is not None:
            return self._logger

        formatter = logging.Formatter(LOG_FORMAT)
        handlers = [logging.FileHandler(self.path, mode="a", encoding="utf-8")]
        if self.echo_stderr:
            handlers.append(logging.StreamHandler(sys.stderr))

        logger = logging.getLogger(self.name)
        logger.setLevel(logging.INFO)
        for handler in handlers:
            handler.setFormatter(formatter)
            logger.addHandler(handler)

        self._handlers = handlers
        self._logger = logger
        return logger

    def close(self):
        if self._logger is None:
            return
        for handler in self._handlers:
            handler.flush()
            self._logger.removeHandler(handler)
            handler.close()
        self._handlers = []
        self._logger = None

    def __enter__(self) -> logging.Logger:
        return self.open()

    def __exit__(self, exc_type, exc, tb):
        self.close()
