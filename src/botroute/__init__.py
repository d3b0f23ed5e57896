"""Update routing and attachment resolution for Telegram bots."""

from __future__ import annotations

from .api_models import Update, decode_update
from .bot import ApiError, Bot, HttpSender
from .context import Context
from .dispatcher import ContinueMatching, Dispatcher, HandlerError, StopMatching
from .files import (
    InputFile,
    InputMedia,
    input_file_id,
    input_file_reader,
    input_file_url,
)
from .handlers import CallbackQueryHandler, CommandHandler, Handler, MessageHandler

__version__ = "0.1.0"

__all__ = [
    "ApiError",
    "Bot",
    "CallbackQueryHandler",
    "CommandHandler",
    "Context",
    "ContinueMatching",
    "Dispatcher",
    "Handler",
    "HandlerError",
    "HttpSender",
    "InputFile",
    "InputMedia",
    "MessageHandler",
    "StopMatching",
    "Update",
    "decode_update",
    "input_file_id",
    "input_file_reader",
    "input_file_url",
]
