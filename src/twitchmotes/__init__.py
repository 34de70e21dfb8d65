"""Build fonts out of Twitch emotes and local images."""

from __future__ import annotations

from twitchmotes.core.config import EmoteFontConfig, load_config
from twitchmotes.core.exceptions import (
    AuthError,
    ChannelNotFoundError,
    ConfigError,
    EmoteIOError,
    FontCompilationError,
    NetworkFetchError,
    TwitchmotesError,
)
from twitchmotes.emotes import (
    BoundedAssetDownloader,
    CodepointSequencer,
    CustomEmoteScanner,
    EmoteOrigin,
    EmoteRecord,
    EmoteRegistry,
    RemoteCatalogFetcher,
    StagingArea,
    build_emote_font,
)
from twitchmotes.version import get_version


__version__ = get_version()


__all__ = [
    "AuthError",
    "BoundedAssetDownloader",
    "ChannelNotFoundError",
    "CodepointSequencer",
    "ConfigError",
    "CustomEmoteScanner",
    "EmoteFontConfig",
    "EmoteIOError",
    "EmoteOrigin",
    "EmoteRecord",
    "EmoteRegistry",
    "FontCompilationError",
    "NetworkFetchError",
    "RemoteCatalogFetcher",
    "StagingArea",
    "TwitchmotesError",
    "__version__",
    "build_emote_font",
    "get_version",
    "load_config",
]
