"""Data records describing emotes as they travel through the pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


STAGED_PREFIX = "emoji_u"
STAGED_SUFFIX = ".png"


class EmoteOrigin(str, Enum):
    """Where an emote was sourced from."""

    LOCAL = "local"
    GLOBAL_REMOTE = "global"
    CHANNEL_REMOTE = "channel"

    @property
    def is_remote(self) -> bool:
        return self is not EmoteOrigin.LOCAL


@dataclass(frozen=True, slots=True)
class EmoteRecord:
    """A named emote bound to its assigned codepoint."""

    name: str
    identifier: int
    origin: EmoteOrigin
    remote_asset_id: str | None = None
    channel: str | None = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Emote names must not be empty.")
        if self.identifier < 0:
            raise ValueError(f"Emote '{self.name}' has a negative codepoint.")
        if self.origin.is_remote and not self.remote_asset_id:
            raise ValueError(f"Remote emote '{self.name}' is missing its asset id.")
        if not self.origin.is_remote and self.remote_asset_id is not None:
            raise ValueError(f"Local emote '{self.name}' cannot carry a remote asset id.")

    @property
    def hex_identifier(self) -> str:
        return format(self.identifier, "x")

    @property
    def staged_filename(self) -> str:
        return staged_filename(self.identifier)


def staged_filename(identifier: int) -> str:
    """Return the canonical staging file name for a codepoint."""
    return f"{STAGED_PREFIX}{identifier:x}{STAGED_SUFFIX}"


__all__ = ["STAGED_PREFIX", "STAGED_SUFFIX", "EmoteOrigin", "EmoteRecord", "staged_filename"]
