"""Configuration model for an emote font build.

EmoteFontConfig

`start_point` (`int`)
: First codepoint handed out by the sequencer. Every emote, local or remote,
  receives the next value in turn. Pick a Private Use Area value such as
  `0xF0000` to avoid clashing with real characters.

`global_emotes` (`bool`)
: Include the platform's global emote set before any channel emotes.

`channels` (`list[str]`)
: Channel logins whose emote sets are fetched, in order. Logins are
  case-insensitive and normalised to lower case.

`custom_emotes` (`Path | None`)
: Directory of user-supplied `.png` files. Each file stem becomes the emote
  name.

`output_font` (`Path`)
: Destination of the compiled font artifact.

`output_map` (`Path`)
: Destination of the `name,hexcodepoint` mapping file.

`emote_scale` (`int`)
: Resolution tier requested from the CDN (`1`, `2` or `3`).

`parallel_downloads` (`int`)
: Maximum number of emote downloads in flight at once.

`build_dir` (`Path`)
: Working directory for staged images and the font manifest. The `png`
  subdirectory is wiped at the start of every run.

`request_timeout` (`float`)
: Transport timeout, in seconds, applied to every HTTP request.

`font_command` (`list[str] | None`)
: External compiler invocation. `{manifest}` and `{output}` are replaced with
  the manifest JSON path and `output_font`.
"""

from __future__ import annotations

from pathlib import Path

try:  # Python >=3.11
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # Python 3.10
    import tomli as tomllib
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from twitchmotes.core.exceptions import ConfigError


class EmoteFontConfig(BaseModel):
    """Settings controlling emote acquisition and codepoint assignment."""

    model_config = ConfigDict(extra="forbid")

    start_point: int = Field(ge=0, description="First codepoint assigned")
    global_emotes: bool = False
    channels: list[str] = Field(default_factory=list)
    custom_emotes: Path | None = None
    output_font: Path
    output_map: Path
    emote_scale: int = Field(default=3, ge=1, le=3)
    parallel_downloads: int = Field(default=8, ge=1)
    build_dir: Path = Path("build")
    request_timeout: float = Field(default=30.0, gt=0)
    font_command: list[str] | None = None

    @field_validator("channels")
    @classmethod
    def normalise_channels(cls, value: list[str]) -> list[str]:
        """Strip and lower-case channel logins, rejecting blanks."""
        channels: list[str] = []
        for entry in value:
            login = entry.strip().lower()
            if not login:
                raise ValueError("channel names must not be empty")
            channels.append(login)
        return channels

    @property
    def staging_dir(self) -> Path:
        """Directory receiving the renamed emote images."""
        return self.build_dir / "png"

    @property
    def manifest_path(self) -> Path:
        """Location of the JSON manifest handed to the font compiler."""
        return self.build_dir / "manifest.json"


def load_config(path: Path) -> EmoteFontConfig:
    """Load and validate a TOML configuration document."""
    try:
        content = tomllib.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ConfigError(f"Unable to open config file: {path}") from exc
    except UnicodeDecodeError as exc:
        raise ConfigError(f"Config file is not valid UTF-8: {path}") from exc
    except OSError as exc:
        raise ConfigError(f"Failed to read config file {path}: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Failed to parse config file {path}: {exc}") from exc

    try:
        return EmoteFontConfig.model_validate(content)
    except ValidationError as exc:
        raise ConfigError(f"Invalid config file {path}: {exc}") from exc


__all__ = ["EmoteFontConfig", "load_config"]
