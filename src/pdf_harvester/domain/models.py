"""Result types produced by the download pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class DownloadStatus(str, Enum):
    SUCCESS = "success"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class DownloadOutcome:
    """The result of running the pipeline for a single URL."""

    url: str
    status: DownloadStatus
    path: Path | None = None
    bytes_written: int = 0
    reason: str | None = None
    error: str | None = None

    @classmethod
    def success(cls, url: str, path: Path, bytes_written: int) -> "DownloadOutcome":
        return cls(url, DownloadStatus.SUCCESS, path=path, bytes_written=bytes_written)

    @classmethod
    def skipped(cls, url: str, path: Path, reason: str) -> "DownloadOutcome":
        return cls(url, DownloadStatus.SKIPPED, path=path, reason=reason)

    @classmethod
    def failed(
        cls, url: str, reason: str, error: str, path: Path | None = None
    ) -> "DownloadOutcome":
        return cls(url, DownloadStatus.FAILED, path=path, reason=reason, error=error)

    @property
    def ok(self) -> bool:
        return self.status is not DownloadStatus.FAILED


@dataclass
class CollectReport:
    """Aggregated outcomes of one collect run."""

    source_url: str
    discovered: int = 0
    outcomes: list[DownloadOutcome] = field(default_factory=list)

    def _with_status(self, status: DownloadStatus) -> list[DownloadOutcome]:
        return [outcome for outcome in self.outcomes if outcome.status is status]

    @property
    def succeeded(self) -> list[DownloadOutcome]:
        return self._with_status(DownloadStatus.SUCCESS)

    @property
    def skipped(self) -> list[DownloadOutcome]:
        return self._with_status(DownloadStatus.SKIPPED)

    @property
    def failed(self) -> list[DownloadOutcome]:
        return self._with_status(DownloadStatus.FAILED)

    @property
    def bytes_written(self) -> int:
        return sum(outcome.bytes_written for outcome in self.succeeded)
