"""Handlers pair an update predicate with the action that processes it."""

from .base import Handler, Response, eligible_message
from .callback_query import CallbackQueryHandler
from .command import CommandHandler
from .message import MessageHandler

__all__ = [
    "CallbackQueryHandler",
    "CommandHandler",
    "Handler",
    "MessageHandler",
    "Response",
    "eligible_message",
]
