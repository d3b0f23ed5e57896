from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from ..context import Context
from ..filters import MessageFilter
from .base import Response, eligible_message

if TYPE_CHECKING:
    from ..bot import Bot


@dataclass(frozen=True, slots=True)
class MessageHandler:
    """Run `response` for messages accepted by `filter`.

    Compose filters with plain boolean expressions, e.g.
    ``lambda m: message.private(m) and message.photo(m)``.
    """

    filter: MessageFilter
    response: Response
    allow_edited: bool = False
    allow_channel: bool = False

    @property
    def name(self) -> str:
        return f"message_{id(self.response):x}"

    def with_allow_edited(self, allow: bool = True) -> MessageHandler:
        return replace(self, allow_edited=allow)

    def with_allow_channel(self, allow: bool = True) -> MessageHandler:
        return replace(self, allow_channel=allow)

    def check_update(self, bot: Bot, ctx: Context) -> bool:
        msg = eligible_message(
            ctx, allow_edited=self.allow_edited, allow_channel=self.allow_channel
        )
        return msg is not None and self.filter(msg)

    async def handle_update(self, bot: Bot, ctx: Context) -> None:
        await self.response(bot, ctx)
