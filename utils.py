# utils.py

import json
import logging
import sys
import uuid
from pathlib import Path
from typing import Any, Dict, List

from config import LOG_FILE, LOG_LEVEL, SUPPORTED_BATCH_EXTENSIONS

log_formatter = logging.Formatter(
    '%(asctime)s - %(name)s - %(levelname)s - [%(funcName)s] - %(message)s'
)


def setup_logger():
    """Configures the service logger with file and stdout handlers."""
    logger = logging.getLogger("SIValidator")
    if not logger.handlers:
        logger.setLevel(LOG_LEVEL)

        file_handler = logging.FileHandler(LOG_FILE, mode='a')
        file_handler.setFormatter(log_formatter)
        logger.addHandler(file_handler)

        stdout_handler = logging.StreamHandler(sys.stdout)
        stdout_handler.setFormatter(log_formatter)
        logger.addHandler(stdout_handler)
    return logger

# This global 'log' object will be configured by the lifespan manager in main.py
log = logging.getLogger("SIValidator")


def is_supported_batch_file(filename: str) -> bool:
    return Path(filename).suffix.lower() in SUPPORTED_BATCH_EXTENSIONS


def load_batch_records(file_path) -> List[Dict[str, Any]]:
    """
    Reads a batch export. Accepts either a bare JSON list of records or an
    object with a 'records' list.
    """
    with open(file_path, "r", encoding="utf-8") as f:
        payload = json.load(f)
    if isinstance(payload, dict):
        payload = payload.get("records")
    if not isinstance(payload, list):
        raise ValueError("Batch file must contain a list of SI records.")
    return payload


def new_id(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex[:12]}"
