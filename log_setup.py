"""Centralized logging setup for the report runner and tests.

Call these before importing modules that may configure logging themselves
(matplotlib and friends).
"""
import datetime
import logging
import os
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)-7s] %(filename)s:%(lineno)d %(message)s"
DEFAULT_DATEFMT = "%H:%M:%S"

NOISY_LOGGERS = ("matplotlib", "matplotlib.font_manager", "PIL", "networkx")


def ensure_logging(level: int = logging.INFO, *, force: bool = False) -> None:
    """Ensure the root logger has a stdout StreamHandler.

    - No handlers yet (or `force`): configure one via basicConfig.
    - Otherwise only adjust the root level.

    Safe to call multiple times.
    """
    root = logging.getLogger()
    if force or not root.handlers:
        logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=DEFAULT_DATEFMT, stream=sys.stdout, force=force)
    else:
        root.setLevel(level)


def _safe_tag(tag: str) -> str:
    return "".join(c if c.isalnum() or c in "._-" else "_" for c in tag.lower())


def configure_run_logging(run_tag: str, *, log_dir: str = "results/logs",
                          console_level: int = logging.INFO, file_level: int = logging.DEBUG,
                          force: bool = False) -> str:
    """Console logging plus a per-run log file named after `run_tag`.

    The file handler captures everything down to `file_level`; the console stays at
    `console_level`. Returns the absolute path of the log file. Calling again for the
    same run tag without `force` reuses the existing file handler.
    """
    ensure_logging(level=console_level, force=force)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    tag = _safe_tag(run_tag or "run")
    root = logging.getLogger()
    if not force:
        for h in root.handlers:
            if isinstance(h, logging.FileHandler) and os.path.basename(h.baseFilename).startswith(tag + "_"):
                return os.path.abspath(h.baseFilename)

    os.makedirs(log_dir, exist_ok=True)
    timestamp = datetime.datetime.now().strftime("%Y%m%d_%H%M%S")
    logfile = os.path.join(log_dir, f"{tag}_{timestamp}.log")

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DEFAULT_DATEFMT)
    for h in root.handlers:
        if isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler):
            h.setLevel(console_level)
            h.setFormatter(formatter)

    fh = logging.FileHandler(logfile, mode="a", encoding="utf-8")
    fh.setLevel(file_level)
    fh.setFormatter(formatter)
    root.addHandler(fh)

    # root passes everything the file wants; handlers filter
    root.setLevel(min(console_level, file_level))
    return os.path.abspath(logfile)
