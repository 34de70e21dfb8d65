"""Emote acquisition and codepoint assignment.

Architecture
: `CodepointSequencer` hands out consecutive codepoints. One instance is
  threaded through every source so assignment order is explicit: local files
  first, then global emotes, then each configured channel.
: `CustomEmoteScanner` copies local `.png` files into the `StagingArea`,
  while `RemoteCatalogFetcher` walks the Twitch API sequentially and
  `BoundedAssetDownloader` fetches the images with a fixed-size worker pool.
: `EmoteRegistry` concatenates the records and derives the mapping file and
  the manifest consumed by a `FontCompiler`.
: `build_emote_font` runs the phases in order for a validated configuration.
"""

from twitchmotes.emotes.catalog import RemoteCatalog, RemoteCatalogFetcher
from twitchmotes.emotes.compiler import CommandFontCompiler, FontCompiler, write_manifest
from twitchmotes.emotes.downloader import (
    BoundedAssetDownloader,
    DownloadFailure,
    DownloadReport,
    asset_url,
)
from twitchmotes.emotes.logging import EmotePipelineLogger
from twitchmotes.emotes.pipeline import PipelineResult, build_emote_font
from twitchmotes.emotes.records import EmoteOrigin, EmoteRecord, staged_filename
from twitchmotes.emotes.registry import EmojiDescriptor, EmoteRegistry, ManifestEntry
from twitchmotes.emotes.scanner import CustomEmoteScanner
from twitchmotes.emotes.sequencer import CodepointSequencer
from twitchmotes.emotes.staging import StagingArea
from twitchmotes.emotes.twitch import AccessToken, RemoteEmote, TwitchClient


__all__ = [
    "AccessToken",
    "BoundedAssetDownloader",
    "CodepointSequencer",
    "CommandFontCompiler",
    "CustomEmoteScanner",
    "DownloadFailure",
    "DownloadReport",
    "EmojiDescriptor",
    "EmoteOrigin",
    "EmotePipelineLogger",
    "EmoteRecord",
    "EmoteRegistry",
    "FontCompiler",
    "ManifestEntry",
    "PipelineResult",
    "RemoteCatalog",
    "RemoteCatalogFetcher",
    "RemoteEmote",
    "StagingArea",
    "TwitchClient",
    "asset_url",
    "build_emote_font",
    "staged_filename",
]
