from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

from ..context import Context
from ..filters.command import DEFAULT_TRIGGERS, invokes_command
from .base import Response, eligible_message

if TYPE_CHECKING:
    from ..bot import Bot


@dataclass(frozen=True, slots=True)
class CommandHandler:
    """Run `response` for messages invoking `command`.

    Commands are case-insensitive. By default only new, non-channel messages
    are considered and `/` is the sole trigger, so a handler for "help"
    answers "/help" and "/HELP@<bot username>". With `triggers="/!"` it also
    answers "!help".
    """

    command: str
    response: Response
    triggers: tuple[str, ...] = tuple(DEFAULT_TRIGGERS)
    allow_edited: bool = False
    allow_channel: bool = False
    _normalized: str = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_normalized", self.command.lower())
        object.__setattr__(self, "triggers", tuple(self.triggers))

    @property
    def name(self) -> str:
        return f"command_{self._normalized}"

    def with_allow_edited(self, allow: bool = True) -> CommandHandler:
        return replace(self, allow_edited=allow)

    def with_allow_channel(self, allow: bool = True) -> CommandHandler:
        return replace(self, allow_channel=allow)

    def with_triggers(self, triggers: Iterable[str]) -> CommandHandler:
        return replace(self, triggers=tuple(triggers))

    def check_update(self, bot: Bot, ctx: Context) -> bool:
        msg = eligible_message(
            ctx, allow_edited=self.allow_edited, allow_channel=self.allow_channel
        )
        if msg is None or not msg.get_text():
            return False
        return invokes_command(
            msg,
            self._normalized,
            triggers=self.triggers,
            bot_username=bot.username,
        )

    async def handle_update(self, bot: Bot, ctx: Context) -> None:
        await self.response(bot, ctx)
