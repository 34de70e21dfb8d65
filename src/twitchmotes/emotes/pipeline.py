"""End-to-end emote font build.

Phases run strictly in order: reset the staging area, scan local emotes,
retrieve remote metadata, download remote images concurrently, then write the
mapping file and the manifest and hand the manifest to the font compiler.
Codepoints are all assigned before the download phase begins. Any failure
aborts the run before the mapping file or font are written.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import requests

from twitchmotes.core.config import EmoteFontConfig
from twitchmotes.core.http import create_session
from twitchmotes.emotes.catalog import RemoteCatalogFetcher
from twitchmotes.emotes.compiler import CommandFontCompiler, FontCompiler, write_manifest
from twitchmotes.emotes.downloader import BoundedAssetDownloader
from twitchmotes.emotes.logging import EmotePipelineLogger
from twitchmotes.emotes.records import EmoteRecord
from twitchmotes.emotes.registry import EmoteRegistry, ManifestEntry
from twitchmotes.emotes.scanner import CustomEmoteScanner
from twitchmotes.emotes.sequencer import CodepointSequencer
from twitchmotes.emotes.staging import StagingArea
from twitchmotes.emotes.twitch import TwitchClient


@dataclass(slots=True)
class PipelineResult:
    registry: EmoteRegistry
    manifest: list[ManifestEntry] = field(default_factory=list)
    mapping_path: Path | None = None
    manifest_path: Path | None = None
    font_path: Path | None = None


def _resolve_compiler(config: EmoteFontConfig) -> FontCompiler | None:
    if not config.font_command:
        return None
    return CommandFontCompiler(config.font_command, config.manifest_path)


def build_emote_font(
    config: EmoteFontConfig,
    *,
    credential: str | None,
    session: requests.Session | None = None,
    compiler: FontCompiler | None = None,
    pipeline_logger: EmotePipelineLogger | None = None,
) -> PipelineResult:
    """Assemble, number, and stage every emote, then compile the font.

    An injected ``session`` is reused by every download worker; without one,
    each worker opens its own.
    """
    log = pipeline_logger or EmotePipelineLogger()
    http = session or create_session()
    staging = StagingArea(config.staging_dir)
    staging.reset()

    sequencer = CodepointSequencer(config.start_point)

    local: list[EmoteRecord] = []
    if config.custom_emotes is not None:
        scanner = CustomEmoteScanner(staging, pipeline_logger=log)
        local = scanner.scan(config.custom_emotes, sequencer)

    fetcher = RemoteCatalogFetcher(
        client=TwitchClient(session=http, timeout=config.request_timeout),
        pipeline_logger=log,
    )
    catalog = fetcher.fetch(
        credential,
        sequencer,
        global_emotes=config.global_emotes,
        channels=config.channels,
        scale=config.emote_scale,
    )

    downloader = BoundedAssetDownloader(
        session_factory=(lambda: session) if session is not None else None,
        max_workers=config.parallel_downloads,
        timeout=config.request_timeout,
        pipeline_logger=log,
    )
    downloader.download(catalog.records, staging, scale=catalog.scale)

    registry = EmoteRegistry.build(local, catalog.records)
    result = PipelineResult(registry=registry)
    result.mapping_path = registry.write_mapping(config.output_map)
    log.info("Wrote %d emote mappings to %s", len(registry), config.output_map)

    result.manifest = registry.manifest(staging)
    result.manifest_path = write_manifest(result.manifest, config.manifest_path)

    compiler = compiler or _resolve_compiler(config)
    if compiler is None:
        log.warning(
            "No font_command configured; staged %d emotes in %s without building a font.",
            len(registry),
            staging.root,
        )
        return result

    compiler.compile(result.manifest, config.output_font)
    result.font_path = config.output_font
    log.info("Built font %s", config.output_font)
    return result


__all__ = ["PipelineResult", "build_emote_font"]
