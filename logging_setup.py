# logging_setup.py
from __future__ import annotations

import logging
import sys


class _AppOnlyFilter(logging.Filter):
    """Keep our own loggers; third-party ones only at WARNING and up."""

    APP_LOGGERS = ("__main__", "auth", "controller", "db", "ui", "utils")

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name.split(".")[0] in self.APP_LOGGERS:
            return True
        return record.levelno >= logging.WARNING


def setup_logging(level: str | int = "INFO") -> None:
    """
    One stderr handler on the root logger. Call this ONCE per process;
    Streamlit reruns the script, so main.py wraps it in st.cache_resource.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger()
    root.setLevel(level)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(level)
    ch.setFormatter(fmt)
    ch.addFilter(_AppOnlyFilter())
    root.addHandler(ch)

    logging.captureWarnings(True)
