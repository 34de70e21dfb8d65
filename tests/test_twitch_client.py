import pytest
import requests

from twitchmotes.core.exceptions import AuthError, ChannelNotFoundError, NetworkFetchError
from twitchmotes.emotes.twitch import HELIX_URL, VALIDATE_URL, AccessToken, TwitchClient


def test_validate_returns_access_token(make_twitch_session) -> None:
    client = TwitchClient(session=make_twitch_session())

    token = client.validate("oauth:secret")

    assert token == AccessToken(token="secret", client_id="client-123", login="tester")
    assert token.headers() == {"Authorization": "Bearer secret", "Client-Id": "client-123"}


def test_validate_rejected_token_raises_auth_error(make_twitch_session) -> None:
    client = TwitchClient(session=make_twitch_session(token_status=401))

    with pytest.raises(AuthError, match="HTTP 401"):
        client.validate("bad")


def test_validate_transport_failure_raises_auth_error() -> None:
    class BrokenSession:
        def get(self, url, **_kwargs):
            raise requests.ConnectionError("offline")

    with pytest.raises(AuthError, match="Unable to validate"):
        TwitchClient(session=BrokenSession()).validate("token")


def test_validate_without_client_id_raises(make_session) -> None:
    session = make_session()
    session.respond(VALIDATE_URL, payload={"login": "x"})

    with pytest.raises(AuthError, match="client id"):
        TwitchClient(session=session).validate("token")


def test_global_and_channel_emotes_preserve_platform_order(make_twitch_session) -> None:
    session = make_twitch_session(
        global_emotes=[("25", "Kappa"), ("88", "PogChamp")],
        channels={"somechannel": [("emotesv2_1", "someHi")]},
    )
    client = TwitchClient(session=session)
    token = client.validate("t")

    assert [e.name for e in client.global_emotes(token)] == ["Kappa", "PogChamp"]
    broadcaster = client.user_id(token, "somechannel")
    assert [(e.id, e.name) for e in client.channel_emotes(token, broadcaster)] == [
        ("emotesv2_1", "someHi")
    ]


def test_unknown_channel_raises_channel_not_found(make_twitch_session) -> None:
    client = TwitchClient(session=make_twitch_session())
    token = client.validate("t")

    with pytest.raises(ChannelNotFoundError) as excinfo:
        client.user_id(token, "ghost")
    assert excinfo.value.channel == "ghost"


def test_helix_server_error_raises_network_fetch_error(make_twitch_session) -> None:
    session = make_twitch_session()
    session.respond(f"{HELIX_URL}/chat/emotes/global", status_code=503)
    client = TwitchClient(session=session)
    token = client.validate("t")

    with pytest.raises(NetworkFetchError, match="HTTP 503") as excinfo:
        client.global_emotes(token)
    assert excinfo.value.url == f"{HELIX_URL}/chat/emotes/global"


def test_malformed_emote_entries_are_ignored(make_twitch_session) -> None:
    session = make_twitch_session()
    session.respond(
        f"{HELIX_URL}/chat/emotes/global",
        payload={"data": [{"id": "1"}, {"id": "2", "name": "Ok"}]},
    )
    client = TwitchClient(session=session)

    assert [e.name for e in client.global_emotes(client.validate("t"))] == ["Ok"]
