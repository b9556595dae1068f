from __future__ import annotations

import logging
from pathlib import Path

import httpx
import typer

from pdf_harvester.core import UnparseableUrlError
from pdf_harvester.core.settings import (
    DEFAULT_HTML_CACHE,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_URL,
    DOWNLOAD_TIMEOUT,
    ENV_PREFIX,
)
from pdf_harvester.workflow import collect, links

app = typer.Typer(no_args_is_help=True)

UrlArgument = typer.Argument(DEFAULT_URL, help="Page to scan for PDF links.")
HtmlCacheOption = typer.Option(
    Path(DEFAULT_HTML_CACHE),
    "--html-cache",
    envvar=f"{ENV_PREFIX}HTML_CACHE",
    help="Where the seed page is cached; reused when it already exists.",
)
NoHtmlCacheOption = typer.Option(
    False,
    "--no-html-cache",
    help="Always fetch the page and do not cache it.",
)
TimeoutOption = typer.Option(
    DOWNLOAD_TIMEOUT,
    "--timeout",
    min=0.1,
    envvar=f"{ENV_PREFIX}TIMEOUT",
    help="HTTP timeout in seconds.",
)


@app.command("collect")
def collect_command(
    url: str = UrlArgument,
    output_dir: Path = typer.Option(
        Path(DEFAULT_OUTPUT_DIR),
        "--output-dir",
        "-o",
        envvar=f"{ENV_PREFIX}OUTPUT_DIR",
        help="Directory the PDFs are written to.",
    ),
    html_cache: Path | None = HtmlCacheOption,
    no_html_cache: bool = NoHtmlCacheOption,
    timeout: float = TimeoutOption,
    workers: int = typer.Option(
        1,
        "--workers",
        min=1,
        envvar=f"{ENV_PREFIX}WORKERS",
        help="Number of concurrent downloads.",
    ),
) -> None:
    """Download every PDF linked from a page."""
    cache = None if no_html_cache else html_cache
    try:
        report = collect(url, output_dir, cache, timeout=timeout, max_workers=workers)
    except (httpx.HTTPError, UnparseableUrlError, OSError) as exc:
        typer.echo(f"Cannot read {url}: {exc}", err=True)
        raise typer.Exit(code=2) from exc

    typer.echo(
        f"{report.discovered} links, {len(report.succeeded)} downloaded, "
        f"{len(report.skipped)} skipped, {len(report.failed)} failed"
    )
    for outcome in report.failed:
        typer.echo(f"FAILED {outcome.url}: {outcome.reason}", err=True)
    if report.failed:
        raise typer.Exit(code=1)


@app.command("links")
def links_command(
    url: str = UrlArgument,
    html_cache: Path | None = HtmlCacheOption,
    no_html_cache: bool = NoHtmlCacheOption,
    timeout: float = TimeoutOption,
) -> None:
    """Print the PDF links found on a page."""
    cache = None if no_html_cache else html_cache
    try:
        found = links(url, cache, timeout=timeout)
    except (httpx.HTTPError, UnparseableUrlError, OSError) as exc:
        typer.echo(f"Cannot read {url}: {exc}", err=True)
        raise typer.Exit(code=2) from exc
    for link in found:
        typer.echo(link)


def main() -> None:
    configure_logging()
    app()


__all__ = [
    "app",
    "main",
]


def configure_logging() -> None:
    root = logging.getLogger()
    if root.handlers:
        return
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s : %(message)s",
    )
