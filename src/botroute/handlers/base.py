from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from ..api_models import Message
from ..context import Context

if TYPE_CHECKING:
    from ..bot import Bot

Response = Callable[["Bot", Context], Awaitable[None]]


@runtime_checkable
class Handler(Protocol):
    """A predicate over updates paired with the action that processes them.

    `check_update` must be side-effect free: the dispatcher may call it on
    any number of handlers, concurrently, for the same update.
    `handle_update` raises to signal that the action itself failed.
    """

    @property
    def name(self) -> str: ...

    def check_update(self, bot: Bot, ctx: Context) -> bool: ...

    async def handle_update(self, bot: Bot, ctx: Context) -> None: ...


def eligible_message(
    ctx: Context, *, allow_edited: bool, allow_channel: bool
) -> Message | None:
    """Pick the message variant a message-based handler may look at."""
    if ctx.message is not None:
        return ctx.message
    if allow_edited and ctx.edited_message is not None:
        return ctx.edited_message
    if allow_channel and ctx.channel_post is not None:
        return ctx.channel_post
    if allow_channel and allow_edited and ctx.edited_channel_post is not None:
        return ctx.edited_channel_post
    return None
