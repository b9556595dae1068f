from __future__ import annotations

import re
from urllib.parse import SplitResult, unquote, urlsplit

from pdf_harvester.core.errors import UnparseableUrlError
from pdf_harvester.core.settings import PDF_EXTENSION

INVALID_CHARACTERS = ('"', "\\", "/", ":", "*", "?", "<", ">", "|")

_CONTROL_CHARACTERS = re.compile(r"[\x00-\x1f\x7f]")
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def _split(url: str) -> SplitResult:
    if _CONTROL_CHARACTERS.search(url):
        raise UnparseableUrlError(f"URL contains control characters: {url!r}")
    try:
        parsed = urlsplit(url)
        # Accessing the port validates it.
        parsed.port
    except ValueError as exc:
        raise UnparseableUrlError(f"Cannot parse URL {url!r}: {exc}") from exc
    if _BAD_ESCAPE.search(parsed.netloc) or _BAD_ESCAPE.search(parsed.path):
        raise UnparseableUrlError(f"URL contains an invalid escape: {url!r}")
    if not parsed.netloc and not parsed.path:
        raise UnparseableUrlError(f"URL has neither host nor path: {url!r}")
    return parsed


def file_extension(name: str) -> str:
    """Return the suffix starting at the last dot, or an empty string."""
    index = name.rfind(".")
    return name[index:] if index >= 0 else ""


def url_to_filename(url: str) -> str:
    """Derive a filesystem-safe ``.pdf`` filename from ``url``.

    The name is built from the host, the path (``/`` turned into ``_``) and
    the query (``&`` turned into ``_``), joined with underscores. Characters
    that are invalid in filenames on common platforms become ``_``, a
    ``.pdf`` extension is appended when missing and the result is lowercased:

    >>> url_to_filename("https://Example.com/a/b.pdf?x=1&y=2")
    'example.com_a_b.pdf_x=1_y=2.pdf'

    Raises :class:`UnparseableUrlError` when ``url`` cannot be parsed.
    """
    parsed = _split(url)

    parts = [parsed.netloc.rpartition("@")[2]]
    path = unquote(parsed.path).lstrip("/")
    if _CONTROL_CHARACTERS.search(path):
        raise UnparseableUrlError(f"URL path has control characters: {url!r}")
    if path:
        parts.append(path.replace("/", "_"))
    if parsed.query:
        parts.append(parsed.query.replace("&", "_"))
    filename = "_".join(part for part in parts if part)

    for char in INVALID_CHARACTERS:
        filename = filename.replace(char, "_")

    if file_extension(filename).lower() != PDF_EXTENSION:
        filename += PDF_EXTENSION
    return filename.lower()


def is_absolute_http_url(url: str) -> bool:
    try:
        parsed = _split(url)
    except UnparseableUrlError:
        return False
    return parsed.scheme in {"http", "https"} and bool(parsed.hostname)
