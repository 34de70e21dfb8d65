"""Hand-off to the external font compiler."""

from __future__ import annotations

from collections.abc import Sequence
import json
import logging
from pathlib import Path
import shlex
import subprocess
from typing import Protocol, runtime_checkable

from twitchmotes.core.exceptions import EmoteIOError, FontCompilationError
from twitchmotes.emotes.registry import ManifestEntry


logger = logging.getLogger(__name__)


@runtime_checkable
class FontCompiler(Protocol):
    """Anything able to turn a staged manifest into a font file."""

    def compile(self, manifest: Sequence[ManifestEntry], output: Path) -> None: ...


def write_manifest(manifest: Sequence[ManifestEntry], path: Path) -> Path:
    """Serialise the manifest as JSON for command-line compilers."""
    payload = {"emotes": [entry.to_dict() for entry in manifest]}
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        raise EmoteIOError(f"Unable to write font manifest {path}") from exc
    return path


class CommandFontCompiler:
    """Run an external command, substituting ``{manifest}`` and ``{output}``.

    The manifest JSON must already exist at ``manifest_path``; see
    :func:`write_manifest`.
    """

    def __init__(self, command: Sequence[str], manifest_path: Path) -> None:
        if not command:
            raise ValueError("Font compiler command must not be empty.")
        self.command = list(command)
        self.manifest_path = manifest_path

    def build_command(self, output: Path) -> list[str]:
        """Substitute the two placeholders, leaving any other braces untouched."""
        return [
            part.replace("{manifest}", str(self.manifest_path)).replace("{output}", str(output))
            for part in self.command
        ]

    def compile(self, manifest: Sequence[ManifestEntry], output: Path) -> None:
        broken = [entry for entry in manifest if not entry.ok]
        if broken:
            names = ", ".join(entry.record.name for entry in broken)
            raise FontCompilationError(f"Staged images are missing for: {names}")
        command = self.build_command(output)
        logger.debug("Running font compiler: %s", shlex.join(command))
        try:
            output.parent.mkdir(parents=True, exist_ok=True)
            result = subprocess.run(command, capture_output=True, text=True, check=False)
        except OSError as exc:
            raise FontCompilationError(f"Unable to run font compiler '{command[0]}': {exc}") from exc
        if result.returncode != 0:
            detail = (result.stderr or result.stdout).strip()
            message = f"Font compiler exited with status {result.returncode}"
            if detail:
                message = f"{message}: {detail.splitlines()[-1]}"
            raise FontCompilationError(message)


__all__ = ["CommandFontCompiler", "FontCompiler", "write_manifest"]
