"""
@file logging.py
@brief Centralized logging configuration
@details
Configures application logging with support for file and stdout output.
Safely handles log directory creation.

@author PAFS Project
@date 2026-01-12
@version 1.0
@license AGPL-3.0
"""

import logging
import sys
import os


def _resolve_log_dir():
    """
    @brief Pick a writable log directory
    @details
    LOG_DIR wins when set. Otherwise /app/logs (container) is tried,
    then a local logs/ directory next to the package. Returns None when
    nothing is writable, in which case only stdout is used.
    """
    log_dir = os.getenv("LOG_DIR", None)
    if log_dir is not None:
        return log_dir

    try:
        _app_logs = "/app/logs"
        if not os.path.exists(_app_logs):
            if os.access(os.path.dirname(_app_logs), os.W_OK):
                os.makedirs(_app_logs, exist_ok=True)

        if os.path.exists(_app_logs) and os.access(_app_logs, os.W_OK):
            return _app_logs
    except (OSError, PermissionError):
        pass

    # this file is in app/core/, so back 2 levels is the repo root
    base_dir = os.path.dirname(os.path.dirname(os.path.dirname(__file__)))
    log_dir = os.path.join(base_dir, "logs")
    if not os.path.exists(log_dir):
        try:
            os.makedirs(log_dir, exist_ok=True)
        except (OSError, PermissionError):
            return None
    return log_dir


def setup_logging() -> logging.Logger:
    """
    @brief Configure and return the application logger
    @details
    Sets up logging based on LOG_OUTPUT env var:
    - 'file': Write to logs/app.log
    - 'stdout': Write to console
    - 'both': Write to both (default)

    LOG_LEVEL selects the root level (default INFO).
    """
    log_dir = _resolve_log_dir()
    log_output = os.getenv("LOG_OUTPUT", "both").lower()
    log_level = getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO)

    handlers = []

    if log_output in ("stdout", "both"):
        handlers.append(logging.StreamHandler(sys.stdout))

    if log_output in ("file", "both") and log_dir:
        try:
            handlers.append(logging.FileHandler(f"{log_dir}/app.log"))
        except (OSError, PermissionError):
            if not any(isinstance(h, logging.StreamHandler) for h in handlers):
                handlers.append(logging.StreamHandler(sys.stdout))

    # Safety net
    if not handlers:
        handlers.append(logging.StreamHandler(sys.stdout))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=handlers
    )

    return logging.getLogger("pafs")
