"""Retrieve remote emote metadata and assign codepoints in pass order."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from twitchmotes.emotes.logging import EmotePipelineLogger
from twitchmotes.emotes.records import EmoteOrigin, EmoteRecord
from twitchmotes.emotes.sequencer import CodepointSequencer
from twitchmotes.emotes.twitch import RemoteEmote, TwitchClient


@dataclass(slots=True)
class RemoteCatalog:
    """Remote emotes with assigned codepoints, not yet downloaded."""

    scale: int
    records: list[EmoteRecord] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.records)


class RemoteCatalogFetcher:
    """Walk the global set, then each channel, handing out codepoints.

    Metadata requests are issued one after another; only the asset downloads
    that follow run concurrently. Without a credential the stage is skipped
    and an empty catalogue is returned.
    """

    def __init__(
        self,
        *,
        client: TwitchClient | None = None,
        pipeline_logger: EmotePipelineLogger | None = None,
    ) -> None:
        self.client = client or TwitchClient()
        self.logger = pipeline_logger or EmotePipelineLogger()

    def fetch(
        self,
        credential: str | None,
        sequencer: CodepointSequencer,
        *,
        global_emotes: bool,
        channels: Sequence[str],
        scale: int,
    ) -> RemoteCatalog:
        catalog = RemoteCatalog(scale=scale)
        if not credential:
            self.logger.info("No Twitch token provided; skipping remote emotes.")
            return catalog

        token = self.client.validate(credential)
        self.logger.debug("Authenticated with Twitch as %s", token.login or "<unknown>")

        if global_emotes:
            emotes = self.client.global_emotes(token)
            catalog.records.extend(
                self._assign(emotes, sequencer, EmoteOrigin.GLOBAL_REMOTE, channel=None)
            )
            self.logger.info("Fetched %d global emotes", len(emotes))

        for channel in channels:
            broadcaster_id = self.client.user_id(token, channel)
            emotes = self.client.channel_emotes(token, broadcaster_id)
            catalog.records.extend(
                self._assign(emotes, sequencer, EmoteOrigin.CHANNEL_REMOTE, channel=channel)
            )
            self.logger.info("Fetched %d emotes for channel %s", len(emotes), channel)

        return catalog

    @staticmethod
    def _assign(
        emotes: Sequence[RemoteEmote],
        sequencer: CodepointSequencer,
        origin: EmoteOrigin,
        *,
        channel: str | None,
    ) -> list[EmoteRecord]:
        return [
            EmoteRecord(
                name=emote.name,
                identifier=sequencer.next(),
                origin=origin,
                remote_asset_id=emote.id,
                channel=channel,
            )
            for emote in emotes
        ]


__all__ = ["RemoteCatalog", "RemoteCatalogFetcher"]
