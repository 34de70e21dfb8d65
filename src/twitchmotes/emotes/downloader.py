"""Fetch remote emote images into the staging area with bounded parallelism."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
import logging
from pathlib import Path
import threading

import requests

from twitchmotes.core.exceptions import EmoteIOError, NetworkFetchError, TwitchmotesError
from twitchmotes.core.http import create_session, http_get
from twitchmotes.emotes.logging import EmotePipelineLogger
from twitchmotes.emotes.records import EmoteRecord
from twitchmotes.emotes.staging import StagingArea


logger = logging.getLogger(__name__)

CDN_URL = "https://static-cdn.jtvnw.net/emoticons/v2"
IMAGE_FORMAT = "static"
THEME_MODE = "light"


def asset_url(asset_id: str, scale: int) -> str:
    """Return the CDN URL of an emote image at the requested scale."""
    return f"{CDN_URL}/{asset_id}/{IMAGE_FORMAT}/{THEME_MODE}/{scale}.0"


@dataclass(frozen=True, slots=True)
class DownloadFailure:
    record: EmoteRecord
    error: TwitchmotesError


@dataclass(slots=True)
class DownloadReport:
    """Staged paths keyed by codepoint plus any per-item failures."""

    staged: dict[int, Path] = field(default_factory=dict)
    failures: list[DownloadFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


class BoundedAssetDownloader:
    """Download emote images with at most ``max_workers`` requests in flight.

    Each task owns a distinct output file derived from its codepoint. Every
    worker thread fetches through its own session built by ``session_factory``;
    sessions created by the default factory are closed when the batch ends.
    """

    def __init__(
        self,
        *,
        session_factory: Callable[[], requests.Session] | None = None,
        max_workers: int = 8,
        timeout: float = 30.0,
        pipeline_logger: EmotePipelineLogger | None = None,
    ) -> None:
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self._session_factory = session_factory or create_session
        self._owns_sessions = session_factory is None
        self._local = threading.local()
        self._sessions: list[requests.Session] = []
        self._sessions_lock = threading.Lock()
        self.max_workers = max_workers
        self.timeout = timeout
        self.logger = pipeline_logger or EmotePipelineLogger()

    def _session(self) -> requests.Session:
        session = getattr(self._local, "session", None)
        if session is None:
            session = self._session_factory()
            self._local.session = session
            with self._sessions_lock:
                self._sessions.append(session)
        return session

    def _close_sessions(self) -> None:
        with self._sessions_lock:
            sessions, self._sessions = self._sessions, []
        self._local = threading.local()
        if self._owns_sessions:
            for session in sessions:
                session.close()

    def _fetch(self, record: EmoteRecord, staging: StagingArea, scale: int) -> Path:
        if record.remote_asset_id is None:
            raise NetworkFetchError(f"Emote '{record.name}' has no remote asset id.")
        url = asset_url(record.remote_asset_id, scale)
        response = http_get(self._session(), url, timeout=self.timeout)
        if response.status_code >= 400:
            raise NetworkFetchError(
                f"Failed to download emote '{record.name}' from {url}: HTTP {response.status_code}",
                url=url,
            )
        data = response.content
        if not data:
            raise NetworkFetchError(
                f"Failed to download emote '{record.name}' from {url}: empty response", url=url
            )
        path = staging.write(record.identifier, data)
        logger.debug("Downloaded %s -> %s", url, path.name)
        return path

    def download(
        self,
        records: Sequence[EmoteRecord],
        staging: StagingArea,
        *,
        scale: int,
        fail_fast: bool = True,
    ) -> DownloadReport:
        """Download every record, raising on the first failure when ``fail_fast``."""
        report = DownloadReport()
        if not records:
            return report

        try:
            with (
                self.logger.progress("Downloading emotes", total=len(records)) as advance,
                ThreadPoolExecutor(max_workers=self.max_workers) as executor,
            ):
                futures: dict[Future[Path], EmoteRecord] = {
                    executor.submit(self._fetch, record, staging, scale): record
                    for record in records
                }
                for future in as_completed(futures):
                    record = futures[future]
                    try:
                        report.staged[record.identifier] = future.result()
                    except (NetworkFetchError, EmoteIOError) as exc:
                        if fail_fast:
                            executor.shutdown(wait=True, cancel_futures=True)
                            raise
                        report.failures.append(DownloadFailure(record, exc))
                        self.logger.warning("Skipping emote '%s': %s", record.name, exc)
                    advance(1)
        finally:
            self._close_sessions()

        self.logger.info("Downloaded %d remote emotes", len(report.staged))
        return report


__all__ = [
    "CDN_URL",
    "BoundedAssetDownloader",
    "DownloadFailure",
    "DownloadReport",
    "asset_url",
]
