from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
import json
from pathlib import Path
import threading
import time
from typing import Any

import pytest

from twitchmotes.emotes.downloader import asset_url
from twitchmotes.emotes.twitch import HELIX_URL, VALIDATE_URL


@dataclass
class FakeResponse:
    status_code: int = 200
    payload: Any = None
    content: bytes = b""

    def json(self) -> Any:
        if self.payload is None:
            raise ValueError("no JSON body")
        return self.payload


@dataclass
class FakeSession:
    """Minimal stand-in for ``requests.Session`` routing GETs by URL."""

    delay: float = 0.0
    routes: dict[str, Callable[[Mapping[str, str]], FakeResponse]] = field(default_factory=dict)
    calls: list[tuple[str, dict[str, str]]] = field(default_factory=list)
    threads: set[int] = field(default_factory=set)
    in_flight: int = 0
    max_in_flight: int = 0
    closed: bool = False
    _lock: threading.Lock = field(default_factory=threading.Lock)

    def route(self, url: str, handler: Callable[[Mapping[str, str]], FakeResponse]) -> None:
        self.routes[url] = handler

    def respond(
        self,
        url: str,
        *,
        status_code: int = 200,
        payload: Any = None,
        content: bytes = b"",
    ) -> None:
        response = FakeResponse(status_code=status_code, payload=payload, content=content)
        self.routes[url] = lambda _params: response

    def get(self, url, headers=None, params=None, timeout=None):
        with self._lock:
            self.calls.append((url, dict(params or {})))
            self.threads.add(threading.get_ident())
            self.in_flight += 1
            self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.delay:
                time.sleep(self.delay)
            handler = self.routes.get(url)
            if handler is None:
                return FakeResponse(status_code=404)
            return handler(dict(params or {}))
        finally:
            with self._lock:
                self.in_flight -= 1

    def close(self) -> None:
        self.closed = True


def _twitch_session(
    *,
    global_emotes: list[tuple[str, str]] | None = None,
    channels: Mapping[str, list[tuple[str, str]]] | None = None,
    token_status: int = 200,
) -> FakeSession:
    session = FakeSession()
    session.respond(
        VALIDATE_URL,
        status_code=token_status,
        payload={"client_id": "client-123", "login": "tester"} if token_status == 200 else {},
    )
    session.respond(
        f"{HELIX_URL}/chat/emotes/global",
        payload={"data": [{"id": i, "name": n} for i, n in global_emotes or []]},
    )
    channel_map = dict(channels or {})
    ids = {login: str(1000 + index) for index, login in enumerate(channel_map)}

    def users(params: Mapping[str, str]) -> FakeResponse:
        login = params.get("login", "")
        if login not in ids:
            return FakeResponse(payload={"data": []})
        return FakeResponse(payload={"data": [{"id": ids[login], "login": login}]})

    def channel_emotes(params: Mapping[str, str]) -> FakeResponse:
        by_id = {ids[login]: emotes for login, emotes in channel_map.items()}
        emotes = by_id.get(params.get("broadcaster_id", ""), [])
        return FakeResponse(payload={"data": [{"id": i, "name": n} for i, n in emotes]})

    session.route(f"{HELIX_URL}/users", users)
    session.route(f"{HELIX_URL}/chat/emotes", channel_emotes)
    return session


def _serve_assets(session: FakeSession, asset_ids: list[str], scale: int = 3) -> None:
    for asset_id in asset_ids:
        session.respond(asset_url(asset_id, scale), content=f"png-{asset_id}".encode())


@pytest.fixture
def make_session() -> Callable[..., FakeSession]:
    """Factory for bare fake sessions."""
    return FakeSession


@pytest.fixture
def make_twitch_session() -> Callable[..., FakeSession]:
    """Factory for fake sessions serving the Twitch endpoints used by the pipeline."""
    return _twitch_session


@pytest.fixture
def serve_assets() -> Callable[..., None]:
    """Register CDN image responses on a fake session."""
    return _serve_assets


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[..., Path]:
    """Write a TOML config under ``tmp_path`` with sensible required values."""

    def _write(**values: Any) -> Path:
        settings: dict[str, Any] = {
            "start_point": 0,
            "output_font": str(tmp_path / "out" / "emotes.ttf"),
            "output_map": str(tmp_path / "out" / "emotes.csv"),
            "build_dir": str(tmp_path / "build"),
        }
        settings.update(values)
        lines = [f"{key} = {json.dumps(value)}" for key, value in settings.items()]
        path = tmp_path / "config.toml"
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write


@pytest.fixture
def png_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "custom"
    directory.mkdir()
    (directory / "a.png").write_bytes(b"image-a")
    (directory / "b.png").write_bytes(b"image-b")
    (directory / "c.txt").write_text("not an image", encoding="utf-8")
    return directory
