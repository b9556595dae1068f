from __future__ import annotations

DEFAULT_URL = "https://www.laballey.com/pages/chemical-safety-data-sheets"
DEFAULT_OUTPUT_DIR = "PDFs"
DEFAULT_HTML_CACHE = "seed.html"

DOWNLOAD_TIMEOUT = 30.0
DIRECTORY_MODE = 0o755

USER_AGENT = "pdf-harvester/0.1"
PDF_CONTENT_TYPE = "application/pdf"
PDF_EXTENSION = ".pdf"

ENV_PREFIX = "PDF_HARVESTER_"
