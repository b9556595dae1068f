from __future__ import annotations

from pathlib import Path
from typing import Iterator

import httpx
import pytest

from pdf_harvester.domain import PdfDownloader

PDF_BYTES = b"%PDF-1.4\n1 0 obj\n<< /Type /Catalog >>\nendobj\ntrailer\n%%EOF\n"


def pdf_response(content: bytes = PDF_BYTES, **headers: str) -> httpx.Response:
    return httpx.Response(
        200,
        content=content,
        headers={"Content-Type": "application/pdf", **headers},
    )


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    target = tmp_path / "pdfs"
    target.mkdir()
    return target


@pytest.fixture
def downloader(output_dir: Path) -> Iterator[PdfDownloader]:
    with PdfDownloader(output_dir, timeout=5.0) as instance:
        yield instance
