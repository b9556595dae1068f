from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Iterable

import httpx
from tqdm import tqdm

from pdf_harvester.core import (
    HarvesterError,
    NetworkError,
    ParseError,
    StorageError,
    ValidationError,
    assert_dir_exists,
    file_exists,
    url_to_filename,
)
from pdf_harvester.core.settings import (
    DEFAULT_OUTPUT_DIR,
    DOWNLOAD_TIMEOUT,
    PDF_CONTENT_TYPE,
    USER_AGENT,
)
from pdf_harvester.domain.models import DownloadOutcome

logger = logging.getLogger(__name__)

ERROR_CATEGORIES = (ParseError, NetworkError, ValidationError, StorageError)


def _error_category(exc: HarvesterError) -> str:
    for category in ERROR_CATEGORIES:
        if isinstance(exc, category):
            return category.__name__
    return type(exc).__name__


class PdfDownloader:
    """Download PDF files into a destination directory.

    Each URL goes through the same steps: derive a filename, skip when the
    file is already on disk, fetch, check the content type, buffer the whole
    body and only then write it. A file on disk is therefore either absent or
    complete, and an existing file is never overwritten.
    """

    def __init__(
        self,
        target_dir: Path | str = DEFAULT_OUTPUT_DIR,
        *,
        timeout: float = DOWNLOAD_TIMEOUT,
    ) -> None:
        self.target_dir = Path(target_dir)
        headers = {"User-Agent": USER_AGENT}
        self._client = httpx.Client(
            headers=headers, timeout=timeout, follow_redirects=True
        )
        self._closed = False
        self._locks: dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    def close(self) -> None:
        if not self._closed:
            self._client.close()
            self._closed = True

    def __enter__(self) -> "PdfDownloader":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def fetch_html(self, url: str) -> str:
        response = self._client.get(url)
        response.raise_for_status()
        return response.text

    def _lock_for(self, path: Path) -> threading.Lock:
        with self._locks_guard:
            return self._locks.setdefault(str(path), threading.Lock())

    def _fetch_pdf(self, url: str) -> bytes:
        try:
            with self._client.stream("GET", url) as response:
                if response.status_code != httpx.codes.OK:
                    status = f"{response.status_code} {response.reason_phrase}"
                    raise NetworkError(f"unexpected status {status.strip()}")
                content_type = response.headers.get("Content-Type", "")
                if PDF_CONTENT_TYPE not in content_type.lower():
                    logger.debug("Content type of %s is %r", url, content_type)
                    raise ValidationError("invalid content type")
                payload = response.read()
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise NetworkError(f"{type(exc).__name__}: {exc}") from exc
        if not payload:
            raise ValidationError("zero-byte download")
        return payload

    def _commit(self, dest_path: Path, payload: bytes) -> int:
        try:
            handle = dest_path.open("xb")
        except FileExistsError:
            if file_exists(dest_path):
                raise
            raise StorageError(f"cannot create {dest_path}: path is not a file")
        except (OSError, ValueError) as exc:
            raise StorageError(f"cannot create {dest_path}: {exc}") from exc
        try:
            with handle:
                return handle.write(payload)
        except OSError as exc:
            dest_path.unlink(missing_ok=True)
            raise StorageError(f"cannot write {dest_path}: {exc}") from exc

    def download_pdf(
        self, url: str, output_dir: Path | str | None = None
    ) -> DownloadOutcome:
        target_dir = Path(output_dir) if output_dir is not None else self.target_dir
        try:
            filename = url_to_filename(url)
        except ParseError as exc:
            logger.error("Failed to download %s: %s", url, exc)
            return DownloadOutcome.failed(url, "unparseable URL", _error_category(exc))

        dest_path = target_dir / filename
        with self._lock_for(dest_path):
            if file_exists(dest_path):
                logger.debug("Skipping %s, %s already exists", url, dest_path)
                return DownloadOutcome.skipped(url, dest_path, "file already exists")
            try:
                written = self._commit(dest_path, self._fetch_pdf(url))
            except FileExistsError:
                return DownloadOutcome.skipped(url, dest_path, "file already exists")
            except HarvesterError as exc:
                logger.error("Failed to download %s: %s", url, exc)
                return DownloadOutcome.failed(
                    url, str(exc), _error_category(exc), path=dest_path
                )
        logger.debug("Downloaded %s bytes from %s to %s", written, url, dest_path)
        return DownloadOutcome.success(url, dest_path, written)

    def download_pdfs(
        self,
        urls: Iterable[str],
        output_dir: Path | str | None = None,
        *,
        max_workers: int = 1,
    ) -> list[DownloadOutcome]:
        """Run :meth:`download_pdf` for every URL, returning outcomes in input order."""
        urls = list(urls)
        target_dir = assert_dir_exists(
            Path(output_dir) if output_dir is not None else self.target_dir
        )
        if max_workers <= 1:
            outcomes = [
                self.download_pdf(url, target_dir)
                for url in tqdm(urls, desc="Downloading PDFs", unit="file")
            ]
        else:
            with ThreadPoolExecutor(max_workers=max_workers) as executor:
                futures = [
                    executor.submit(self.download_pdf, url, target_dir) for url in urls
                ]
                for _ in tqdm(
                    as_completed(futures),
                    total=len(futures),
                    desc="Downloading PDFs",
                    unit="file",
                ):
                    pass
                outcomes = [future.result() for future in futures]
        downloaded = sum(1 for outcome in outcomes if outcome.bytes_written)
        logger.info("Downloaded %s of %s PDFs", downloaded, len(outcomes))
        return outcomes
