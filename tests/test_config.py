from pathlib import Path

import pytest

from twitchmotes.core.config import load_config
from twitchmotes.core.exceptions import ConfigError


def test_load_config_applies_defaults(tmp_path: Path, write_config) -> None:
    config = load_config(write_config(start_point=983040))

    assert config.start_point == 0xF0000
    assert config.global_emotes is False
    assert config.channels == []
    assert config.custom_emotes is None
    assert config.emote_scale == 3
    assert config.parallel_downloads == 8
    assert config.font_command is None
    assert config.staging_dir == tmp_path / "build" / "png"
    assert config.manifest_path == tmp_path / "build" / "manifest.json"


def test_channels_are_normalised(write_config) -> None:
    config = load_config(write_config(channels=[" SomeChannel ", "other"]))

    assert config.channels == ["somechannel", "other"]


def test_blank_channel_is_rejected(write_config) -> None:
    with pytest.raises(ConfigError, match="Invalid config"):
        load_config(write_config(channels=["  "]))


def test_missing_config_file_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="Unable to open config file"):
        load_config(tmp_path / "absent.toml")


def test_malformed_toml_raises(tmp_path: Path) -> None:
    path = tmp_path / "broken.toml"
    path.write_text("start_point = [\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="Failed to parse"):
        load_config(path)


@pytest.mark.parametrize(
    "overrides",
    [
        {"unknown_key": 1},
        {"parallel_downloads": 0},
        {"emote_scale": 4},
        {"start_point": -1},
    ],
)
def test_invalid_values_raise_config_error(overrides: dict, write_config) -> None:
    with pytest.raises(ConfigError):
        load_config(write_config(**overrides))


def test_required_fields_are_enforced(tmp_path: Path) -> None:
    path = tmp_path / "partial.toml"
    path.write_text('output_map = "map.csv"\n', encoding="utf-8")

    with pytest.raises(ConfigError, match="start_point"):
        load_config(path)
