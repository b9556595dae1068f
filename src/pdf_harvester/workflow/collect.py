from __future__ import annotations

import logging
from pathlib import Path

from pdf_harvester.core import (
    UnparseableUrlError,
    create_directory,
    file_exists,
    is_absolute_http_url,
    read_text_file,
)
from pdf_harvester.core.settings import (
    DEFAULT_HTML_CACHE,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_URL,
    DOWNLOAD_TIMEOUT,
)
from pdf_harvester.domain import CollectReport, PdfDownloader, PdfLinkExtractor

logger = logging.getLogger(__name__)


def load_seed_html(
    downloader: PdfDownloader, url: str, cache_path: Path | None = None
) -> str:
    """Return the seed page, reading ``cache_path`` when it already exists."""
    if cache_path is not None and file_exists(cache_path):
        logger.info("Reading cached HTML for %s from %s", url, cache_path)
        return read_text_file(cache_path)
    if not is_absolute_http_url(url):
        raise UnparseableUrlError(f"Not an absolute http(s) URL: {url!r}")

    logger.info("Fetching %s", url)
    html = downloader.fetch_html(url)
    if cache_path is not None:
        try:
            cache_path.parent.mkdir(parents=True, exist_ok=True)
            cache_path.write_text(html, encoding="utf-8")
        except OSError as exc:
            logger.warning("Cannot cache %s at %s: %s", url, cache_path, exc)
    return html


def cache_path_for(html_cache: Path | str | None) -> Path | None:
    """Return the cache location, or None when caching is turned off."""
    if not html_cache or str(html_cache).strip() in ("", "."):
        return None
    return Path(html_cache)


def discover_links(html: str, base_url: str) -> list[str]:
    links = PdfLinkExtractor.deduplicate(PdfLinkExtractor.extract_links(html))
    return PdfLinkExtractor.resolve_links(links, base_url)


def collect(
    url: str = DEFAULT_URL,
    output_dir: Path | str = DEFAULT_OUTPUT_DIR,
    html_cache: Path | str | None = DEFAULT_HTML_CACHE,
    *,
    timeout: float = DOWNLOAD_TIMEOUT,
    max_workers: int = 1,
) -> CollectReport:
    cache_path = cache_path_for(html_cache)

    logger.info("Collecting PDFs from %s", url)
    with PdfDownloader(output_dir, timeout=timeout) as downloader:
        html = load_seed_html(downloader, url, cache_path)
        create_directory(downloader.target_dir)
        links = discover_links(html, url)
        logger.info("Discovered %s PDF links", len(links))
        outcomes = downloader.download_pdfs(links, max_workers=max_workers)

    report = CollectReport(source_url=url, discovered=len(links), outcomes=outcomes)
    logger.info(
        "Downloaded %s PDFs, skipped %s, failed %s",
        len(report.succeeded),
        len(report.skipped),
        len(report.failed),
    )
    return report


if __name__ == "__main__":
    collect()
