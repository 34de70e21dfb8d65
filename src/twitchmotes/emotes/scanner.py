"""Collect user-supplied emote images from a local directory."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from twitchmotes.core.exceptions import EmoteIOError
from twitchmotes.emotes.logging import EmotePipelineLogger
from twitchmotes.emotes.records import EmoteOrigin, EmoteRecord
from twitchmotes.emotes.sequencer import CodepointSequencer
from twitchmotes.emotes.staging import StagingArea


logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = frozenset({".png"})


def emote_name(path: Path) -> str:
    """Return the file stem as text, replacing bytes that are not valid UTF-8."""
    return os.fsencode(path.stem).decode("utf-8", "replace")


class CustomEmoteScanner:
    """Copy supported images into the staging area and assign codepoints.

    Entries are visited in file-name order so that the same directory yields
    the same codepoints on every platform. Files with an unsupported or
    missing extension are skipped; a failed copy aborts the scan.
    """

    def __init__(
        self,
        staging: StagingArea,
        *,
        pipeline_logger: EmotePipelineLogger | None = None,
    ) -> None:
        self.staging = staging
        self.logger = pipeline_logger or EmotePipelineLogger()

    def _entries(self, directory: Path) -> list[Path]:
        try:
            return sorted(directory.iterdir(), key=lambda path: path.name)
        except OSError as exc:
            raise EmoteIOError(f"Unable to read custom emote directory: {directory}") from exc

    def scan(self, directory: Path, sequencer: CodepointSequencer) -> list[EmoteRecord]:
        records: list[EmoteRecord] = []
        for entry in self._entries(directory):
            if entry.suffix.lower() not in SUPPORTED_EXTENSIONS or not entry.stem:
                logger.debug("Skipping unsupported custom emote file %s", entry)
                continue
            if not entry.is_file():
                continue
            identifier = sequencer.next()
            self.staging.copy_in(entry, identifier)
            records.append(EmoteRecord(emote_name(entry), identifier, EmoteOrigin.LOCAL))
        self.logger.info("Staged %d custom emotes from %s", len(records), directory)
        return records


__all__ = ["SUPPORTED_EXTENSIONS", "CustomEmoteScanner", "emote_name"]
