from __future__ import annotations

import logging
from pathlib import Path

from pdf_harvester.core.errors import (
    DirectoryNotFoundError,
    HarvesterError,
    NetworkError,
    ParseError,
    StorageError,
    UnparseableUrlError,
    ValidationError,
)
from pdf_harvester.core.filenames import is_absolute_http_url, url_to_filename
from pdf_harvester.core.settings import DIRECTORY_MODE

logger = logging.getLogger(__name__)


def file_exists(path: Path) -> bool:
    """Return True when ``path`` is an existing regular file."""
    return path.is_file()


def directory_exists(path: Path) -> bool:
    return path.is_dir()


def create_directory(path: Path, mode: int = DIRECTORY_MODE) -> Path:
    if not directory_exists(path):
        logger.info("Creating directory %s", path)
        path.mkdir(mode=mode, parents=True, exist_ok=True)
    return path


def read_text_file(path: Path) -> str:
    return path.read_text(encoding="utf-8", errors="replace")


def assert_dir_exists(path: Path) -> Path:
    if not path.exists() or not path.is_dir():
        raise DirectoryNotFoundError(f"The directory '{path}' does not exist.")
    return path


__all__ = [
    "DirectoryNotFoundError",
    "HarvesterError",
    "NetworkError",
    "ParseError",
    "StorageError",
    "UnparseableUrlError",
    "ValidationError",
    "assert_dir_exists",
    "create_directory",
    "directory_exists",
    "file_exists",
    "is_absolute_http_url",
    "read_text_file",
    "url_to_filename",
]
