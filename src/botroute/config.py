from __future__ import annotations

import tomllib
from pathlib import Path

ENV_BOT_TOKEN = "BOTROUTE_BOT_TOKEN"

LOCAL_CONFIG_NAME = Path(".botroute") / "botroute.toml"
HOME_CONFIG_PATH = Path.home() / ".botroute" / "botroute.toml"


class ConfigError(RuntimeError):
    pass


def _config_candidates() -> list[Path]:
    candidates = [Path.cwd() / LOCAL_CONFIG_NAME, HOME_CONFIG_PATH]
    if candidates[0] == candidates[1]:
        return [candidates[0]]
    return candidates


def _read_config(cfg_path: Path) -> dict:
    try:
        raw = cfg_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigError(f"Missing config file {cfg_path}.") from None
    except OSError as e:
        raise ConfigError(f"Failed to read config file {cfg_path}: {e}") from e
    try:
        return tomllib.loads(raw)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Malformed TOML in {cfg_path}: {e}") from None


def load_config(path: str | Path | None = None) -> tuple[dict, Path]:
    """Read the TOML config at `path`, or the first default location found."""
    if path:
        cfg_path = Path(path).expanduser()
        return _read_config(cfg_path), cfg_path

    for candidate in _config_candidates():
        if candidate.is_file():
            return _read_config(candidate), candidate

    raise ConfigError(
        f"Missing botroute config. Looked in: "
        f"{', '.join(str(c) for c in _config_candidates())}."
    )
