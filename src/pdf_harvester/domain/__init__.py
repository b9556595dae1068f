from pdf_harvester.domain.models import CollectReport, DownloadOutcome, DownloadStatus
from pdf_harvester.domain.services.pdf_downloader import PdfDownloader
from pdf_harvester.domain.services.pdf_link_extractor import PdfLinkExtractor

__all__ = [
    "CollectReport",
    "DownloadOutcome",
    "DownloadStatus",
    "PdfDownloader",
    "PdfLinkExtractor",
]
