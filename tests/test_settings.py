from pathlib import Path

import httpx
import pytest

from botroute.config import ENV_BOT_TOKEN, ConfigError, load_config
from botroute.dispatcher import Dispatcher
from botroute.settings import RouterSettings, load_settings, settings_from_dict


async def _noop(bot, ctx) -> None:
    return None


class TestLoadConfig:
    def test_load_from_explicit_path(self, tmp_path: Path) -> None:
        config_file = tmp_path / "botroute.toml"
        config_file.write_text("max_concurrency = 4")

        config, path = load_config(config_file)

        assert config["max_concurrency"] == 4
        assert path == config_file

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Missing config file"):
            load_config(tmp_path / "nonexistent.toml")

    def test_malformed_toml_raises(self, tmp_path: Path) -> None:
        bad_file = tmp_path / "bad.toml"
        bad_file.write_text("invalid = [unclosed")

        with pytest.raises(ConfigError, match="Malformed TOML"):
            load_config(bad_file)

    def test_path_is_directory(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Failed to read config file"):
            load_config(tmp_path)

    def test_default_location(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        cfg_dir = tmp_path / ".botroute"
        cfg_dir.mkdir()
        (cfg_dir / "botroute.toml").write_text("debug = true")
        monkeypatch.chdir(tmp_path)

        config, path = load_config()

        assert config == {"debug": True}
        assert path.parts[-2:] == (".botroute", "botroute.toml")


class TestSettings:
    def test_defaults(self) -> None:
        settings = RouterSettings()

        assert settings.command_triggers == ("/",)
        assert settings.allow_edited is False
        assert settings.max_concurrency == 16

    def test_full_config(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv(ENV_BOT_TOKEN, raising=False)
        config_file = tmp_path / "botroute.toml"
        config_file.write_text(
            'bot_token = "123:abc"\n'
            'command_triggers = "/!"\n'
            "allow_edited = true\n"
            "max_concurrency = 4\n"
        )

        settings, path = load_settings(config_file)

        assert path == config_file
        assert settings.bot_token is not None
        assert settings.bot_token.get_secret_value() == "123:abc"
        assert settings.command_triggers == ("/", "!")
        assert settings.max_concurrency == 4

    def test_triggers_as_list(self, tmp_path: Path) -> None:
        settings = settings_from_dict(
            {"command_triggers": ["!", "→"]}, config_path=tmp_path / "c.toml"
        )

        assert settings.command_triggers == ("!", "→")

    def test_env_token_overrides_file(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv(ENV_BOT_TOKEN, " 999:env ")

        settings = settings_from_dict(
            {"bot_token": "123:file"}, config_path=tmp_path / "c.toml"
        )

        assert settings.bot_token is not None
        assert settings.bot_token.get_secret_value() == "999:env"

    @pytest.mark.parametrize(
        "config",
        [
            {"command_triggers": ""},
            {"command_triggers": ["ab"]},
            {"command_triggers": [" "]},
            {"max_concurrency": 0},
            {"unknown_key": 1},
        ],
    )
    def test_invalid_config(self, tmp_path: Path, config: dict) -> None:
        with pytest.raises(ConfigError, match="Invalid config"):
            settings_from_dict(config, config_path=tmp_path / "c.toml")

    def test_command_uses_configured_defaults(self) -> None:
        settings = RouterSettings(
            command_triggers="/!", allow_edited=True, allow_channel=True
        )

        handler = settings.command("Help", _noop)

        assert handler.name == "command_help"
        assert handler.triggers == ("/", "!")
        assert handler.allow_edited
        assert handler.allow_channel

    def test_sender_requires_token(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv(ENV_BOT_TOKEN, raising=False)

        with pytest.raises(ConfigError, match="Missing bot token"):
            RouterSettings().sender()

    @pytest.mark.anyio
    async def test_serve_connects_and_dispatches(self) -> None:
        paths: list[str] = []
        handled: list[int] = []

        def handler(request: httpx.Request) -> httpx.Response:
            paths.append(request.url.path)
            return httpx.Response(
                200,
                json={
                    "ok": True,
                    "result": {"id": 42, "is_bot": True, "username": "MyBot"},
                },
            )

        async def respond(bot, ctx) -> None:
            assert bot.username == "MyBot"
            handled.append(ctx.update.update_id)

        async def updates():
            yield {
                "update_id": 9,
                "message": {
                    "message_id": 1,
                    "chat": {"id": 1, "type": "private"},
                    "text": "/help@MyBot",
                },
            }

        settings = RouterSettings(bot_token="123:abc", max_concurrency=1)
        dispatcher = Dispatcher([settings.command("help", respond)])

        async with httpx.AsyncClient(
            transport=httpx.MockTransport(handler)
        ) as client:
            await settings.serve(dispatcher, updates(), client=client)

        assert paths == ["/bot123:abc/getMe"]
        assert handled == [9]
