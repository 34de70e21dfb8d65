"""Thin client for the Twitch endpoints needed to enumerate emotes."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
import logging
from typing import Any

import requests

from twitchmotes.core.exceptions import AuthError, ChannelNotFoundError, NetworkFetchError
from twitchmotes.core.http import create_session, http_get


logger = logging.getLogger(__name__)

VALIDATE_URL = "https://id.twitch.tv/oauth2/validate"
HELIX_URL = "https://api.twitch.tv/helix"


@dataclass(frozen=True, slots=True)
class AccessToken:
    """Validated user token plus the client id Helix requires alongside it."""

    token: str
    client_id: str
    login: str | None = None

    def headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}", "Client-Id": self.client_id}


@dataclass(frozen=True, slots=True)
class RemoteEmote:
    """Emote metadata as returned by the Helix chat endpoints."""

    id: str
    name: str


class TwitchClient:
    """Retrieve token details, channel ids, and emote lists from Twitch."""

    def __init__(
        self,
        *,
        session: requests.Session | None = None,
        timeout: float = 30.0,
    ) -> None:
        self._session = session or create_session()
        self._timeout = timeout

    def validate(self, raw_token: str) -> AccessToken:
        """Exchange a raw OAuth token for a usable session token."""
        token = raw_token.strip()
        if token.lower().startswith("oauth:"):
            token = token.split(":", 1)[1]
        try:
            response = http_get(
                self._session,
                VALIDATE_URL,
                headers={"Authorization": f"OAuth {token}"},
                timeout=self._timeout,
            )
        except NetworkFetchError as exc:
            raise AuthError(f"Unable to validate Twitch token: {exc}") from exc
        if response.status_code >= 400:
            raise AuthError(f"Twitch rejected the access token (HTTP {response.status_code}).")
        payload = self._json(response, VALIDATE_URL, error=AuthError)
        client_id = payload.get("client_id")
        if not isinstance(client_id, str) or not client_id:
            raise AuthError("Twitch token validation returned no client id.")
        login = payload.get("login")
        return AccessToken(token=token, client_id=client_id, login=login or None)

    def global_emotes(self, token: AccessToken) -> list[RemoteEmote]:
        payload = self._helix(token, "/chat/emotes/global")
        return self._emotes(payload)

    def user_id(self, token: AccessToken, login: str) -> str:
        """Resolve a channel login to its broadcaster id."""
        payload = self._helix(token, "/users", params={"login": login})
        users = payload.get("data") or []
        if not users:
            raise ChannelNotFoundError(login)
        user_id = users[0].get("id")
        if not user_id:
            raise ChannelNotFoundError(login)
        return str(user_id)

    def channel_emotes(self, token: AccessToken, broadcaster_id: str) -> list[RemoteEmote]:
        payload = self._helix(token, "/chat/emotes", params={"broadcaster_id": broadcaster_id})
        return self._emotes(payload)

    def _helix(
        self,
        token: AccessToken,
        path: str,
        *,
        params: Mapping[str, str] | None = None,
    ) -> dict[str, Any]:
        url = f"{HELIX_URL}{path}"
        logger.debug("GET %s %s", url, dict(params or {}))
        response = http_get(
            self._session,
            url,
            headers=token.headers(),
            params=params,
            timeout=self._timeout,
        )
        if response.status_code == 401:
            raise AuthError(f"Twitch refused the session token for {url}.")
        if response.status_code >= 400:
            raise NetworkFetchError(f"{url}: HTTP {response.status_code}", url=url)
        return self._json(response, url, error=NetworkFetchError)

    @staticmethod
    def _json(response: Any, url: str, *, error: type[Exception]) -> dict[str, Any]:
        try:
            payload = response.json()
        except ValueError as exc:
            raise error(f"{url}: response is not valid JSON") from exc
        if not isinstance(payload, dict):
            raise error(f"{url}: unexpected response payload")
        return payload

    @staticmethod
    def _emotes(payload: Mapping[str, Any]) -> list[RemoteEmote]:
        emotes: list[RemoteEmote] = []
        for item in payload.get("data") or []:
            emote_id = item.get("id")
            name = item.get("name")
            if not emote_id or not name:
                logger.debug("Ignoring malformed emote entry %r", item)
                continue
            emotes.append(RemoteEmote(id=str(emote_id), name=str(name)))
        return emotes


__all__ = ["HELIX_URL", "VALIDATE_URL", "AccessToken", "RemoteEmote", "TwitchClient"]
