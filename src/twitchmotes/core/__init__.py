"""Configuration, error kinds, and HTTP plumbing shared by the pipeline."""

from __future__ import annotations

from .config import EmoteFontConfig, load_config
from .exceptions import (
    AuthError,
    ChannelNotFoundError,
    ConfigError,
    EmoteIOError,
    FontCompilationError,
    NetworkFetchError,
    TwitchmotesError,
    exception_hint,
    exception_messages,
)
from .http import TLSCertificateError, create_session, http_get


__all__ = [
    "AuthError",
    "ChannelNotFoundError",
    "ConfigError",
    "EmoteFontConfig",
    "EmoteIOError",
    "FontCompilationError",
    "NetworkFetchError",
    "TLSCertificateError",
    "TwitchmotesError",
    "create_session",
    "exception_hint",
    "exception_messages",
    "http_get",
    "load_config",
]
