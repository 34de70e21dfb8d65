"""Staging directory holding renamed emote images for the font compiler."""

from __future__ import annotations

from pathlib import Path
import shutil

from twitchmotes.core.exceptions import EmoteIOError
from twitchmotes.emotes.records import STAGED_PREFIX, STAGED_SUFFIX, staged_filename


class StagingArea:
    """Resolve and manage the per-run image staging directory.

    Every staged image is named ``emoji_u<hex>.png`` after its codepoint, so
    concurrent writers never collide as long as codepoints are unique.
    """

    def __init__(self, root: Path) -> None:
        self.root = root

    def reset(self) -> Path:
        """Remove any previous contents and recreate the directory."""
        if self.root.exists():
            try:
                shutil.rmtree(self.root)
            except OSError as exc:
                raise EmoteIOError(
                    f"Unable to remove old png build dir: {self.root}"
                ) from exc
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise EmoteIOError(f"Unable to create png build dir: {self.root}") from exc
        return self.root

    def path_for(self, identifier: int) -> Path:
        """Return the staged image path for a codepoint."""
        return self.root / staged_filename(identifier)

    def copy_in(self, source: Path, identifier: int) -> Path:
        """Copy a local image into the staging area under its canonical name."""
        target = self.path_for(identifier)
        try:
            shutil.copyfile(source, target)
        except OSError as exc:
            raise EmoteIOError(f"Unable to copy emote {source} to {target}") from exc
        return target

    def write(self, identifier: int, data: bytes) -> Path:
        """Write downloaded bytes under the canonical name for a codepoint."""
        target = self.path_for(identifier)
        try:
            target.write_bytes(data)
        except OSError as exc:
            raise EmoteIOError(f"Unable to write emote image {target}") from exc
        return target

    def staged_files(self) -> list[Path]:
        """List staged images sorted by name."""
        if not self.root.exists():
            return []
        return sorted(
            path
            for path in self.root.iterdir()
            if path.name.startswith(STAGED_PREFIX) and path.name.endswith(STAGED_SUFFIX)
        )


__all__ = ["StagingArea"]
