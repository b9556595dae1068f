from __future__ import annotations


class HarvesterError(Exception):
    """Base class for per-URL failures raised inside the download pipeline."""


class ParseError(HarvesterError):
    """Raised when an HTML document or a URL cannot be parsed."""


class UnparseableUrlError(ParseError, ValueError):
    """Raised when a URL cannot be turned into a filename or fetched."""


class NetworkError(HarvesterError):
    """Raised on transport failures, timeouts and non-200 responses."""


class ValidationError(HarvesterError):
    """Raised when a response is not a usable PDF payload."""


class StorageError(HarvesterError):
    """Raised when the destination file cannot be created or written."""


class DirectoryNotFoundError(FileNotFoundError):
    """Raised when a required directory is missing."""
