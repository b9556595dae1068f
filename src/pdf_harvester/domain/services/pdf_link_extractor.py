from __future__ import annotations

import logging
from typing import Iterable
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag
from bs4.builder import ParserRejectedMarkup

from pdf_harvester.core.settings import PDF_EXTENSION

logger = logging.getLogger(__name__)


class PdfLinkExtractor:
    """Extract PDF links from an HTML page."""

    @staticmethod
    def extract_links(html: str) -> list[str]:
        """Return every anchor ``href`` ending in ``.pdf``, in document order.

        Values are returned verbatim and may repeat. Markup the parser
        rejects yields an empty list.
        """
        try:
            soup = BeautifulSoup(html, "html.parser")
        except ParserRejectedMarkup as exc:
            logger.warning("Failed to parse HTML: %s", exc)
            return []

        links: list[str] = []
        # descendants is an iterative pre-order walk.
        for node in soup.descendants:
            if not isinstance(node, Tag) or node.name != "a":
                continue
            href = node.attrs.get("href")
            if isinstance(href, str) and href.lower().endswith(PDF_EXTENSION):
                links.append(href)
        logger.info("Extracted %s PDF links from HTML", len(links))
        return links

    @staticmethod
    def deduplicate(urls: Iterable[str]) -> list[str]:
        seen: set[str] = set()
        unique: list[str] = []
        for url in urls:
            if url not in seen:
                seen.add(url)
                unique.append(url)
        return unique

    @classmethod
    def resolve_links(cls, urls: Iterable[str], base_url: str) -> list[str]:
        """Make links absolute against ``base_url`` and drop new duplicates."""
        return cls.deduplicate(urljoin(base_url, url) for url in urls)
