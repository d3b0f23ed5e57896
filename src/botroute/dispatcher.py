from __future__ import annotations

from collections.abc import AsyncIterable, Iterable
from typing import TYPE_CHECKING, Any

import anyio

from .api_models import Update, UpdateDecodeError, decode_update
from .context import Context
from .handlers import Handler
from .logging import get_logger

if TYPE_CHECKING:
    from .bot import Bot

logger = get_logger(__name__)

DEFAULT_MAX_CONCURRENCY = 16


class ContinueMatching(Exception):
    """Raised by an action to let later handlers also see the update."""


class StopMatching(Exception):
    """Raised by an action to end the pass without reporting an error."""


class HandlerError(RuntimeError):
    def __init__(self, handler_name: str, update_id: int) -> None:
        super().__init__(f"handler {handler_name!r} failed on update {update_id}")
        self.handler_name = handler_name
        self.update_id = update_id


class Dispatcher:
    """Routes each update to the first registered handler that accepts it.

    Registration order is the only precedence rule. Handlers are read-only
    once registered, so any number of updates may be dispatched at once.
    """

    def __init__(self, handlers: Iterable[Handler] = ()) -> None:
        self._handlers: list[Handler] = []
        for handler in handlers:
            self.add_handler(handler)

    @property
    def handlers(self) -> tuple[Handler, ...]:
        return tuple(self._handlers)

    def add_handler(self, handler: Handler) -> None:
        name = handler.name
        if any(existing.name == name for existing in self._handlers):
            logger.warning("dispatcher.duplicate_handler", handler=name)
        self._handlers.append(handler)

    def select(self, bot: Bot, ctx: Context) -> Handler | None:
        for handler in self._handlers:
            if handler.check_update(bot, ctx):
                return handler
        return None

    async def process_update(self, bot: Bot, update: Update) -> Handler | None:
        """Run the matching handler's action and return that handler.

        Raises HandlerError, chained to the original exception, when the
        action fails. Returns None when no handler took the update.
        """
        ctx = Context(update)
        handled: Handler | None = None
        for handler in self._handlers:
            if not handler.check_update(bot, ctx):
                continue
            logger.debug(
                "dispatcher.matched",
                handler=handler.name,
                update_id=update.update_id,
            )
            handled = handler
            try:
                await handler.handle_update(bot, ctx)
            except ContinueMatching:
                continue
            except StopMatching:
                return handler
            except Exception as exc:
                raise HandlerError(handler.name, update.update_id) from exc
            return handler
        if handled is None:
            logger.debug("dispatcher.unhandled", update_id=update.update_id)
        return handled

    async def serve(
        self,
        bot: Bot,
        updates: AsyncIterable[Update | bytes | str | dict[str, Any]],
        *,
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
    ) -> None:
        """Dispatch updates from `updates` until it is exhausted.

        Up to `max_concurrency` updates are processed at once. Failures are
        logged per update and never stop the loop.
        """
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")
        slots = anyio.Semaphore(max_concurrency)
        async with anyio.create_task_group() as tg:
            async for raw in updates:
                await slots.acquire()
                tg.start_soon(self._serve_one, bot, raw, slots)

    async def _serve_one(
        self,
        bot: Bot,
        raw: Update | bytes | str | dict[str, Any],
        slots: anyio.Semaphore,
    ) -> None:
        update: Update | None = None
        try:
            update = raw if isinstance(raw, Update) else decode_update(raw)
            await self.process_update(bot, update)
        except UpdateDecodeError as exc:
            logger.warning("dispatcher.bad_update", error=str(exc))
        except HandlerError as exc:
            cause = exc.__cause__
            logger.error(
                "dispatcher.handler_failed",
                handler=exc.handler_name,
                update_id=exc.update_id,
                error=str(cause),
                error_type=cause.__class__.__name__,
                exc_info=cause,
            )
        except Exception as exc:
            logger.error(
                "dispatcher.update_failed",
                update_id=update.update_id if update is not None else None,
                error=str(exc),
                error_type=exc.__class__.__name__,
                exc_info=exc,
            )
        finally:
            slots.release()
