import anyio
import pytest

from botroute.context import Context
from botroute.dispatcher import (
    ContinueMatching,
    Dispatcher,
    HandlerError,
    StopMatching,
)
from botroute.filters import message
from botroute.handlers import CommandHandler, MessageHandler
from tests.fakes import _make_bot, _msg, _update


def _recorder(log: list[str], label: str):
    async def respond(bot, ctx: Context) -> None:
        log.append(label)

    return respond


@pytest.mark.anyio
async def test_first_registered_handler_wins() -> None:
    log: list[str] = []
    dispatcher = Dispatcher(
        [
            MessageHandler(message.text, _recorder(log, "first")),
            CommandHandler("help", _recorder(log, "second")),
        ]
    )

    handled = await dispatcher.process_update(
        _make_bot(), _update(message=_msg("/help"))
    )

    assert log == ["first"]
    assert handled is dispatcher.handlers[0]


@pytest.mark.anyio
async def test_falls_through_non_matching_handlers() -> None:
    log: list[str] = []
    dispatcher = Dispatcher(
        [
            CommandHandler("start", _recorder(log, "start")),
            CommandHandler("help", _recorder(log, "help")),
        ]
    )

    await dispatcher.process_update(_make_bot(), _update(message=_msg("/help")))

    assert log == ["help"]


@pytest.mark.anyio
async def test_unhandled_update_returns_none() -> None:
    dispatcher = Dispatcher([CommandHandler("help", _recorder([], "help"))])

    result = await dispatcher.process_update(
        _make_bot(), _update(message=_msg("hello"))
    )

    assert result is None


@pytest.mark.anyio
async def test_continue_matching_tries_later_handlers() -> None:
    log: list[str] = []

    async def keep_going(bot, ctx) -> None:
        log.append("first")
        raise ContinueMatching

    dispatcher = Dispatcher(
        [
            MessageHandler(message.text, keep_going),
            CommandHandler("help", _recorder(log, "second")),
            MessageHandler(message.text, _recorder(log, "third")),
        ]
    )

    handled = await dispatcher.process_update(
        _make_bot(), _update(message=_msg("/help"))
    )

    assert log == ["first", "second"]
    assert handled is dispatcher.handlers[1]


@pytest.mark.anyio
async def test_stop_matching_is_not_an_error() -> None:
    async def stop(bot, ctx) -> None:
        raise StopMatching

    dispatcher = Dispatcher([MessageHandler(message.text, stop)])

    handled = await dispatcher.process_update(_make_bot(), _update(message=_msg("x")))

    assert handled is dispatcher.handlers[0]


@pytest.mark.anyio
async def test_action_failure_surfaces_as_handler_error() -> None:
    async def boom(bot, ctx) -> None:
        raise RuntimeError("send failed")

    dispatcher = Dispatcher([CommandHandler("help", boom)])

    with pytest.raises(HandlerError) as exc:
        await dispatcher.process_update(
            _make_bot(), _update(update_id=7, message=_msg("/help"))
        )

    assert exc.value.handler_name == "command_help"
    assert exc.value.update_id == 7
    assert isinstance(exc.value.__cause__, RuntimeError)


def test_duplicate_names_are_kept_in_order() -> None:
    first = CommandHandler("help", _recorder([], "a"))
    second = CommandHandler("HELP", _recorder([], "b"))
    dispatcher = Dispatcher()
    dispatcher.add_handler(first)
    dispatcher.add_handler(second)

    assert dispatcher.handlers == (first, second)


def test_select_is_side_effect_free() -> None:
    log: list[str] = []
    dispatcher = Dispatcher([CommandHandler("help", _recorder(log, "help"))])
    ctx = Context(_update(message=_msg("/help")))

    assert dispatcher.select(_make_bot(), ctx) is dispatcher.handlers[0]
    assert dispatcher.select(_make_bot(), ctx) is dispatcher.handlers[0]
    assert log == []


async def _feed(items):
    for item in items:
        yield item


@pytest.mark.anyio
async def test_serve_isolates_failures() -> None:
    log: list[int] = []

    async def respond(bot, ctx: Context) -> None:
        if ctx.update.update_id == 2:
            raise RuntimeError("boom")
        log.append(ctx.update.update_id)

    dispatcher = Dispatcher([CommandHandler("help", respond)])
    updates = [
        _update(update_id=1, message=_msg("/help")),
        _update(update_id=2, message=_msg("/help")),
        b"not json",
        {
            "update_id": 3,
            "message": {
                "message_id": 1,
                "chat": {"id": 1, "type": "private"},
                "text": "/help",
            },
        },
    ]

    await dispatcher.serve(_make_bot(), _feed(updates), max_concurrency=2)

    assert sorted(log) == [1, 3]


@pytest.mark.anyio
async def test_serve_dispatches_concurrently() -> None:
    started = anyio.Event()
    release = anyio.Event()
    order: list[str] = []

    async def slow(bot, ctx) -> None:
        started.set()
        await release.wait()
        order.append("slow")

    async def fast(bot, ctx) -> None:
        await started.wait()
        order.append("fast")
        release.set()

    dispatcher = Dispatcher(
        [CommandHandler("slow", slow), CommandHandler("fast", fast)]
    )
    updates = [
        _update(update_id=1, message=_msg("/slow")),
        _update(update_id=2, message=_msg("/fast")),
    ]

    with anyio.fail_after(5):
        await dispatcher.serve(_make_bot(), _feed(updates))

    assert order == ["fast", "slow"]


@pytest.mark.anyio
async def test_serve_rejects_invalid_concurrency() -> None:
    with pytest.raises(ValueError):
        await Dispatcher().serve(_make_bot(), _feed([]), max_concurrency=0)


@pytest.mark.anyio
async def test_serve_survives_a_failing_filter() -> None:
    log: list[int] = []

    async def respond(bot, ctx: Context) -> None:
        log.append(ctx.update.update_id)

    dispatcher = Dispatcher(
        [
            MessageHandler(lambda msg: msg.text.startswith("x"), respond),
            CommandHandler("help", respond),
        ]
    )
    updates = [
        _update(update_id=1, message=_msg(None, caption="a photo")),
        _update(update_id=2, message=_msg("/help")),
    ]

    with anyio.fail_after(5):
        await dispatcher.serve(_make_bot(), _feed(updates), max_concurrency=2)

    assert log == [2]
