"""Final ordered emote catalogue and the views derived from it."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
import hashlib
from pathlib import Path

from twitchmotes.core.exceptions import EmoteIOError
from twitchmotes.emotes.records import EmoteRecord
from twitchmotes.emotes.staging import StagingArea


@dataclass(frozen=True, slots=True)
class EmojiDescriptor:
    """Glyph description consumed by the font compiler."""

    sequence: tuple[int, ...]
    name: str | None = None


@dataclass(frozen=True, slots=True)
class ManifestEntry:
    """A catalogue record paired with its staged image and content digest."""

    record: EmoteRecord
    emoji: EmojiDescriptor
    path: Path
    digest: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.emoji.name,
            "sequence": list(self.emoji.sequence),
            "origin": self.record.origin.value,
            "path": str(self.path),
            "sha256": self.digest,
            "error": self.error,
        }


def _digest(path: Path) -> str:
    hasher = hashlib.sha256()
    with path.open("rb") as handle:
        for chunk in iter(lambda: handle.read(65536), b""):
            hasher.update(chunk)
    return hasher.hexdigest()


class EmoteRegistry:
    """Local records followed by remote records, in assignment order.

    Codepoint uniqueness follows from the single sequencer and is not
    re-checked here.
    """

    def __init__(self, records: Sequence[EmoteRecord]) -> None:
        self._records: tuple[EmoteRecord, ...] = tuple(records)

    @classmethod
    def build(
        cls,
        local: Sequence[EmoteRecord],
        remote: Sequence[EmoteRecord],
    ) -> EmoteRegistry:
        return cls([*local, *remote])

    @property
    def records(self) -> tuple[EmoteRecord, ...]:
        return self._records

    def __iter__(self) -> Iterator[EmoteRecord]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def mapping(self) -> list[tuple[str, int]]:
        """Return ``(name, codepoint)`` pairs in catalogue order."""
        return [(record.name, record.identifier) for record in self._records]

    def mapping_text(self) -> str:
        return "".join(f"{record.name},{record.hex_identifier}\n" for record in self._records)

    def write_mapping(self, path: Path) -> Path:
        """Write the ``name,hexcodepoint`` mapping file."""
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(self.mapping_text(), encoding="utf-8")
        except (OSError, UnicodeError) as exc:
            raise EmoteIOError(f"Unable to write emote map {path}: {exc}") from exc
        return path

    def manifest(self, staging: StagingArea) -> list[ManifestEntry]:
        """Pair every record with its staged image for the font compiler."""
        entries: list[ManifestEntry] = []
        for record in self._records:
            path = staging.path_for(record.identifier)
            emoji = EmojiDescriptor(sequence=(record.identifier,), name=record.name)
            try:
                digest = _digest(path)
            except OSError as exc:
                entries.append(ManifestEntry(record, emoji, path, error=str(exc)))
                continue
            entries.append(ManifestEntry(record, emoji, path, digest=digest))
        return entries


__all__ = ["EmojiDescriptor", "EmoteRegistry", "ManifestEntry"]
