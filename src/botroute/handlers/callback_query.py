from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..context import Context
from ..filters import CallbackQueryFilter
from .base import Response

if TYPE_CHECKING:
    from ..bot import Bot


def _any_query(_) -> bool:
    return True


@dataclass(frozen=True, slots=True)
class CallbackQueryHandler:
    response: Response
    filter: CallbackQueryFilter = _any_query

    @property
    def name(self) -> str:
        return f"callbackquery_{id(self.response):x}"

    def check_update(self, bot: Bot, ctx: Context) -> bool:
        query = ctx.callback_query
        return query is not None and self.filter(query)

    async def handle_update(self, bot: Bot, ctx: Context) -> None:
        await self.response(bot, ctx)
