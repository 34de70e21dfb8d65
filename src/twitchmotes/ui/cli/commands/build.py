"""Implementation of the ``twitchmotes`` build command."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Annotated

import typer

from twitchmotes.core.config import load_config
from twitchmotes.core.exceptions import TwitchmotesError
from twitchmotes.emotes.logging import EmotePipelineLogger
from twitchmotes.emotes.pipeline import build_emote_font

from ..state import emit_error, get_cli_state


TOKEN_ENV = "TWITCHMOTES_TOKEN"

ConfigPathArgument = Annotated[
    Path,
    typer.Argument(
        metavar="CONFIG",
        help="TOML document describing the emote sources and output paths.",
        dir_okay=False,
    ),
]


def read_credential() -> str | None:
    """Return the Twitch token from the environment, if any."""
    value = os.environ.get(TOKEN_ENV, "").strip()
    return value or None


def build(ctx: typer.Context, config: ConfigPathArgument) -> None:
    """Fetch emotes, assign codepoints, and stage them for the font compiler."""
    state = get_cli_state(ctx)
    if state.show_tracebacks:
        state.verbosity = max(state.verbosity, 2)
    credential = read_credential()

    try:
        settings = load_config(config)
        build_emote_font(
            settings,
            credential=credential,
            pipeline_logger=EmotePipelineLogger(verbose=state.verbosity > 0),
        )
    except TwitchmotesError as exc:
        if state.show_tracebacks:
            raise
        emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc


__all__ = ["TOKEN_ENV", "build", "read_credential"]
