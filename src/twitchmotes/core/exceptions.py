"""Custom exception hierarchy for the emote font pipeline."""

from __future__ import annotations


class TwitchmotesError(RuntimeError):
    """Base exception for emote acquisition and font build failures."""


class ConfigError(TwitchmotesError):
    """Raised when the configuration document is missing, unreadable, or invalid."""


class EmoteIOError(TwitchmotesError):
    """Raised when staging directories or emote files cannot be created or copied."""


class AuthError(TwitchmotesError):
    """Raised when the access credential cannot be exchanged for a session token."""


class ChannelNotFoundError(TwitchmotesError):
    """Raised when a configured channel does not exist on the remote platform."""

    def __init__(self, channel: str) -> None:
        super().__init__(f"Channel '{channel}' does not exist on Twitch.")
        self.channel = channel


class NetworkFetchError(TwitchmotesError):
    """Raised when remote metadata or an emote asset cannot be retrieved."""

    def __init__(self, message: str, *, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url


class FontCompilationError(TwitchmotesError):
    """Raised when the external font compiler fails to produce the font."""


def exception_messages(exc: BaseException) -> list[str]:
    """Return the collected message chain for an exception and its causes."""
    messages: list[str] = []
    visited: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in visited:
        visited.add(id(current))
        text = str(current).strip()
        if text:
            first_line = text.splitlines()[0].strip()
            if first_line:
                messages.append(first_line)
        current = current.__cause__ or current.__context__
    return messages


def exception_hint(exc: BaseException) -> str | None:
    """Return the most specific message available for an exception chain."""
    messages = exception_messages(exc)
    return messages[-1] if messages else None


__all__ = [
    "AuthError",
    "ChannelNotFoundError",
    "ConfigError",
    "EmoteIOError",
    "FontCompilationError",
    "NetworkFetchError",
    "TwitchmotesError",
    "exception_hint",
    "exception_messages",
]
