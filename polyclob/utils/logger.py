"""Logging utilities"""

import os
import traceback
from datetime import datetime
from zoneinfo import ZoneInfo
from polyclob.config.settings import LOG_DIR, LOG_FILE, ERROR_LOG_FILE, LOG_TO_FILE


def _timestamp() -> str:
    return datetime.now(tz=ZoneInfo("UTC")).strftime("%Y-%m-%d %H:%M:%S UTC")


def _append(path: str, text: str) -> None:
    if not LOG_TO_FILE:
        return
    try:
        os.makedirs(LOG_DIR, exist_ok=True)
        with open(path, "a", encoding="utf-8") as f:
            f.write(text)
    except OSError:
        pass


def log(text: str) -> None:
    """Log message to console and file"""
    line = f"[{_timestamp()}] {text}"
    try:
        print(line, flush=True)
    except UnicodeEncodeError:
        # Consoles without unicode support
        print(line.encode("ascii", "replace").decode("ascii"), flush=True)

    _append(LOG_FILE, line + "\n")


def log_error(text: str, include_traceback: bool = True) -> None:
    """Log error message to console, main log, and dedicated error log"""
    error_msg = f"❌ ERROR: {text}"
    log(error_msg)

    report = [f"[{_timestamp()}] {error_msg}"]
    if include_traceback:
        report.append(traceback.format_exc())

    _append(ERROR_LOG_FILE, "\n".join(report) + "\n" + "-" * 50 + "\n")
