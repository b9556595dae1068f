from __future__ import annotations

import logging
from pathlib import Path

from pdf_harvester.core.settings import DEFAULT_HTML_CACHE, DEFAULT_URL, DOWNLOAD_TIMEOUT
from pdf_harvester.domain import PdfDownloader
from pdf_harvester.workflow.collect import (
    cache_path_for,
    discover_links,
    load_seed_html,
)

logger = logging.getLogger(__name__)


def links(
    url: str = DEFAULT_URL,
    html_cache: Path | str | None = DEFAULT_HTML_CACHE,
    *,
    timeout: float = DOWNLOAD_TIMEOUT,
) -> list[str]:
    cache_path = cache_path_for(html_cache)
    with PdfDownloader(timeout=timeout) as downloader:
        html = load_seed_html(downloader, url, cache_path)
    found = discover_links(html, url)
    logger.info("Discovered %s PDF links on %s", len(found), url)
    return found


if __name__ == "__main__":
    for link in links():
        print(link)
