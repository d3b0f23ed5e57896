from collections.abc import Callable

import pytest

from botroute.bot import Bot
from tests.fakes import _FakeSender, _make_bot


@pytest.fixture
def fake_sender() -> _FakeSender:
    return _FakeSender()


@pytest.fixture
def make_bot() -> Callable[..., Bot]:
    def _factory(
        sender: _FakeSender | None = None, *, username: str | None = "MyBot"
    ) -> Bot:
        return _make_bot(sender, username=username)

    return _factory
