from __future__ import annotations

from collections.abc import Iterable

from ..api_models import Message
from . import MessageFilter

BOT_COMMAND = "bot_command"
DEFAULT_TRIGGERS = "/"


def is_command(msg: Message) -> bool:
    """True if the message opens with a bot_command entity."""
    ents = msg.get_entities()
    return len(ents) > 0 and ents[0].type == BOT_COMMAND and ents[0].offset == 0


def parse_command(
    text: str,
    *,
    triggers: Iterable[str] = DEFAULT_TRIGGERS,
    bot_username: str | None = None,
) -> str | None:
    """Extract the lower-cased command name from `text`.

    Only the first trigger equal to the leading character is considered; if
    the command then addresses another bot (`/cmd@otherbot`) there is no
    retry with later triggers.
    """
    if not text:
        return None
    first = text[0]
    for trigger in triggers:
        if first != trigger:
            continue
        tokens = text.split(maxsplit=1)
        if not tokens:
            return None
        parts = tokens[0].lower().split("@")
        if len(parts) > 1 and parts[1] != (bot_username or "").lower():
            return None
        return parts[0][len(trigger) :] or None
    return None


def invokes_command(
    msg: Message,
    command: str,
    *,
    triggers: Iterable[str] = DEFAULT_TRIGGERS,
    bot_username: str | None = None,
) -> bool:
    """True if `msg` invokes the already lower-cased `command`.

    A non-command entity at offset 0 (bold, code, ...) lets users escape text
    that would otherwise read as a command.
    """
    name = parse_command(msg.get_text(), triggers=triggers, bot_username=bot_username)
    if name is None:
        return False
    ents = msg.get_entities()
    if ents and ents[0].offset == 0 and ents[0].type != BOT_COMMAND:
        return False
    return name == command


def command_name_triggers(
    bot_username: str | None,
    command: str,
    triggers: Iterable[str] = DEFAULT_TRIGGERS,
) -> MessageFilter:
    """Match messages invoking `command` through any of `triggers`."""
    ordered = tuple(triggers)
    expected = command.lower()

    def check(msg: Message) -> bool:
        return invokes_command(
            msg, expected, triggers=ordered, bot_username=bot_username
        )

    return check


def command_name(bot_username: str | None, command: str) -> MessageFilter:
    return command_name_triggers(bot_username, command, DEFAULT_TRIGGERS)
