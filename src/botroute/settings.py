from __future__ import annotations

import os
from collections.abc import AsyncIterable
from pathlib import Path
from typing import Any

import httpx
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SecretStr,
    ValidationError,
    field_validator,
)

from .api_models import Update
from .bot import Bot, HttpSender
from .config import ENV_BOT_TOKEN, ConfigError, load_config
from .dispatcher import DEFAULT_MAX_CONCURRENCY, Dispatcher
from .handlers import CommandHandler, Response
from .logging import setup_logging


class RouterSettings(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    bot_token: SecretStr | None = None
    command_triggers: tuple[str, ...] = ("/",)
    allow_edited: bool = False
    allow_channel: bool = False
    max_concurrency: int = Field(default=DEFAULT_MAX_CONCURRENCY, ge=1)
    debug: bool = False

    @field_validator("command_triggers", mode="before")
    @classmethod
    def _split_triggers(cls, value: Any) -> Any:
        if isinstance(value, str):
            return tuple(value)
        return value

    @field_validator("command_triggers")
    @classmethod
    def _check_triggers(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if not value:
            raise ValueError("expected at least one trigger character")
        for trigger in value:
            if len(trigger) != 1 or trigger.isspace():
                raise ValueError(
                    f"invalid trigger {trigger!r}; expected one non-space character"
                )
        return value

    def command(self, name: str, response: Response) -> CommandHandler:
        """Build a command handler using the configured defaults."""
        return CommandHandler(
            command=name,
            response=response,
            triggers=self.command_triggers,
            allow_edited=self.allow_edited,
            allow_channel=self.allow_channel,
        )

    def sender(self, *, client: httpx.AsyncClient | None = None) -> HttpSender:
        if self.bot_token is None:
            raise ConfigError(f"Missing bot token; set bot_token or {ENV_BOT_TOKEN}")
        return HttpSender(self.bot_token.get_secret_value(), client=client)

    async def serve(
        self,
        dispatcher: Dispatcher,
        updates: AsyncIterable[Update | bytes | str | dict[str, Any]],
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Set up logging, connect the bot and dispatch `updates`."""
        setup_logging(debug=self.debug)
        sender = self.sender(client=client)
        try:
            bot = await Bot.connect(sender)
            await dispatcher.serve(
                bot, updates, max_concurrency=self.max_concurrency
            )
        finally:
            await sender.close()


def settings_from_dict(config: dict, *, config_path: Path) -> RouterSettings:
    """Validate a parsed config table.

    Environment variable BOTROUTE_BOT_TOKEN takes precedence over the file.
    """
    data = dict(config)
    env_token = os.environ.get(ENV_BOT_TOKEN)
    if env_token and env_token.strip():
        data["bot_token"] = env_token.strip()
    try:
        return RouterSettings.model_validate(data)
    except ValidationError as exc:
        details = "; ".join(
            f"{'.'.join(str(part) for part in err['loc']) or 'config'}: {err['msg']}"
            for err in exc.errors()
        )
        raise ConfigError(f"Invalid config in {config_path}: {details}") from exc


def load_settings(path: str | Path | None = None) -> tuple[RouterSettings, Path]:
    config, config_path = load_config(path)
    return settings_from_dict(config, config_path=config_path), config_path
