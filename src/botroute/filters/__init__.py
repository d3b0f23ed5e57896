"""Predicates over inbound messages and callback queries."""

from __future__ import annotations

from collections.abc import Callable

from ..api_models import CallbackQuery, Message

MessageFilter = Callable[[Message], bool]
CallbackQueryFilter = Callable[[CallbackQuery], bool]

__all__ = [
    "CallbackQueryFilter",
    "MessageFilter",
]
