from pathlib import Path

import pytest

from twitchmotes.core.exceptions import NetworkFetchError
from twitchmotes.emotes import downloader as downloader_module
from twitchmotes.emotes.downloader import BoundedAssetDownloader, asset_url
from twitchmotes.emotes.records import EmoteOrigin, EmoteRecord
from twitchmotes.emotes.staging import StagingArea


def _records(count: int, start: int = 0x300) -> list[EmoteRecord]:
    return [
        EmoteRecord(
            name=f"emote{index}",
            identifier=start + index,
            origin=EmoteOrigin.GLOBAL_REMOTE,
            remote_asset_id=f"id{index}",
        )
        for index in range(count)
    ]


def _staging(tmp_path: Path) -> StagingArea:
    staging = StagingArea(tmp_path / "png")
    staging.reset()
    return staging


def test_asset_url_uses_static_light_template() -> None:
    assert (
        asset_url("emotesv2_abc", 2)
        == "https://static-cdn.jtvnw.net/emoticons/v2/emotesv2_abc/static/light/2.0"
    )


def test_download_writes_each_record_under_its_codepoint(
    tmp_path: Path, make_session, serve_assets
) -> None:
    records = _records(3)
    session = make_session()
    serve_assets(session, [r.remote_asset_id for r in records], scale=3)
    staging = _staging(tmp_path)

    report = BoundedAssetDownloader(session_factory=lambda: session, max_workers=2).download(
        records, staging, scale=3
    )

    assert report.ok
    assert sorted(report.staged) == [0x300, 0x301, 0x302]
    assert (staging.root / "emoji_u301.png").read_bytes() == b"png-id1"


@pytest.mark.parametrize("limit", [1, 2, 4])
def test_download_never_exceeds_concurrency_limit(
    tmp_path: Path, limit: int, make_session, serve_assets
) -> None:
    records = _records(10)
    session = make_session(delay=0.02)
    serve_assets(session, [r.remote_asset_id for r in records], scale=1)

    BoundedAssetDownloader(session_factory=lambda: session, max_workers=limit).download(
        records, _staging(tmp_path), scale=1
    )

    assert len(session.calls) == 10
    assert 1 <= session.max_in_flight <= limit


def test_each_worker_thread_uses_its_own_session(
    tmp_path: Path, make_session, serve_assets
) -> None:
    records = _records(9)
    created = []

    def factory():
        session = make_session(delay=0.02)
        serve_assets(session, [r.remote_asset_id for r in records], scale=3)
        created.append(session)
        return session

    report = BoundedAssetDownloader(session_factory=factory, max_workers=3).download(
        records, _staging(tmp_path), scale=3
    )

    assert report.ok
    assert 1 <= len(created) <= 3
    assert sum(len(session.calls) for session in created) == 9
    assert all(len(session.threads) == 1 for session in created)
    assert not any(session.closed for session in created)


def test_default_sessions_are_closed_after_batch(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, make_session, serve_assets
) -> None:
    records = _records(4)
    created = []

    def create_session():
        session = make_session()
        serve_assets(session, [r.remote_asset_id for r in records], scale=3)
        created.append(session)
        return session

    monkeypatch.setattr(downloader_module, "create_session", create_session)

    BoundedAssetDownloader(max_workers=2).download(records, _staging(tmp_path), scale=3)

    assert created
    assert all(session.closed for session in created)


def test_single_failure_aborts_batch(tmp_path: Path, make_session, serve_assets) -> None:
    records = _records(4)
    session = make_session()
    serve_assets(session, [r.remote_asset_id for r in records], scale=3)
    session.respond(asset_url("id2", 3), status_code=500)

    with pytest.raises(NetworkFetchError, match="emote2") as excinfo:
        BoundedAssetDownloader(session_factory=lambda: session, max_workers=1).download(
            records, _staging(tmp_path), scale=3
        )
    assert excinfo.value.url == asset_url("id2", 3)


def test_empty_body_counts_as_failure(tmp_path: Path, make_session) -> None:
    records = _records(1)
    session = make_session()
    session.respond(asset_url("id0", 3), content=b"")

    with pytest.raises(NetworkFetchError, match="empty response"):
        BoundedAssetDownloader(session_factory=lambda: session).download(
            records, _staging(tmp_path), scale=3
        )


def test_collecting_mode_reports_failures(tmp_path: Path, make_session, serve_assets) -> None:
    records = _records(3)
    session = make_session()
    serve_assets(session, ["id0", "id2"], scale=3)

    report = BoundedAssetDownloader(session_factory=lambda: session, max_workers=3).download(
        records, _staging(tmp_path), scale=3, fail_fast=False
    )

    assert not report.ok
    assert sorted(report.staged) == [0x300, 0x302]
    assert [failure.record.name for failure in report.failures] == ["emote1"]


def test_empty_batch_is_a_no_op(tmp_path: Path, make_session) -> None:
    session = make_session()

    report = BoundedAssetDownloader(session_factory=lambda: session).download(
        [], _staging(tmp_path), scale=3
    )

    assert report.ok
    assert session.calls == []


def test_invalid_worker_count_is_rejected() -> None:
    with pytest.raises(ValueError):
        BoundedAssetDownloader(max_workers=0)
