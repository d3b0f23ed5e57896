"""Message predicates.

Plain predicates take a `Message` and return a bool. Parameterized ones are
factories returning a `MessageFilter` bound to their argument. None of them
raise: a missing field simply fails the check.
"""

from __future__ import annotations

import re

from ..api_models import Message
from . import MessageFilter

CHAT_PRIVATE = "private"
CHAT_GROUP = "group"
CHAT_SUPERGROUP = "supergroup"
CHAT_CHANNEL = "channel"


def all_messages(_: Message) -> bool:
    return True


def from_user_id(user_id: int) -> MessageFilter:
    def check(msg: Message) -> bool:
        return msg.from_ is not None and msg.from_.id == user_id

    return check


def from_username(name: str) -> MessageFilter:
    def check(msg: Message) -> bool:
        return msg.from_ is not None and msg.from_.username == name

    return check


def chat_id(value: int) -> MessageFilter:
    def check(msg: Message) -> bool:
        return msg.chat.id == value

    return check


def chat_username(name: str) -> MessageFilter:
    def check(msg: Message) -> bool:
        return bool(msg.chat.username) and msg.chat.username == name

    return check


def chat_type(value: str) -> MessageFilter:
    def check(msg: Message) -> bool:
        return msg.chat.type == value

    return check


def private(msg: Message) -> bool:
    return msg.chat.type == CHAT_PRIVATE


def group(msg: Message) -> bool:
    return msg.chat.type == CHAT_GROUP


def supergroup(msg: Message) -> bool:
    return msg.chat.type == CHAT_SUPERGROUP


def channel(msg: Message) -> bool:
    return msg.chat.type == CHAT_CHANNEL


def business(msg: Message) -> bool:
    return bool(msg.business_connection_id)


def forwarded(msg: Message) -> bool:
    return msg.forward_origin is not None


def forward_from_user_id(user_id: int) -> MessageFilter:
    def check(msg: Message) -> bool:
        origin = msg.forward_origin
        if origin is None or origin.sender_user is None:
            return False
        return origin.sender_user.id == user_id

    return check


def forward_from_chat_id(value: int) -> MessageFilter:
    """Match posts forwarded from the channel with the given id."""

    def check(msg: Message) -> bool:
        origin = msg.forward_origin
        if origin is None or origin.chat is None:
            return False
        return origin.chat.id == value

    return check


def is_automatic_forward(msg: Message) -> bool:
    return msg.is_automatic_forward


def reply(msg: Message) -> bool:
    return msg.reply_to_message is not None


# Text predicates. An empty body never matches, whatever the argument.


def text(msg: Message) -> bool:
    return bool(msg.text)


def caption(msg: Message) -> bool:
    return bool(msg.caption)


def has_prefix(prefix: str) -> MessageFilter:
    def check(msg: Message) -> bool:
        body = msg.get_text()
        return bool(body) and body.startswith(prefix)

    return check


def has_suffix(suffix: str) -> MessageFilter:
    def check(msg: Message) -> bool:
        body = msg.get_text()
        return bool(body) and body.endswith(suffix)

    return check


def contains(value: str) -> MessageFilter:
    def check(msg: Message) -> bool:
        body = msg.get_text()
        return bool(body) and value in body

    return check


def equal(value: str) -> MessageFilter:
    def check(msg: Message) -> bool:
        body = msg.get_text()
        return bool(body) and body == value

    return check


def regex(pattern: str) -> MessageFilter:
    """Match when `pattern` is found anywhere in the message text.

    Raises ValueError for an invalid pattern.
    """
    try:
        compiled = re.compile(pattern)
    except re.error as exc:
        raise ValueError(f"failed to compile regex {pattern!r}: {exc}") from exc

    def check(msg: Message) -> bool:
        body = msg.get_text()
        return bool(body) and compiled.search(body) is not None

    return check


def entities(msg: Message) -> bool:
    return len(msg.entities) > 0


def entity(entity_type: str) -> MessageFilter:
    def check(msg: Message) -> bool:
        return any(ent.type == entity_type for ent in msg.entities)

    return check


def caption_entities(msg: Message) -> bool:
    return len(msg.caption_entities) > 0


def caption_entity(entity_type: str) -> MessageFilter:
    def check(msg: Message) -> bool:
        return any(ent.type == entity_type for ent in msg.caption_entities)

    return check


def animation(msg: Message) -> bool:
    return msg.animation is not None


def audio(msg: Message) -> bool:
    return msg.audio is not None


def document(msg: Message) -> bool:
    return msg.document is not None


def photo(msg: Message) -> bool:
    return len(msg.photo) > 0


def sticker(msg: Message) -> bool:
    return msg.sticker is not None


def video(msg: Message) -> bool:
    return msg.video is not None


def video_note(msg: Message) -> bool:
    return msg.video_note is not None


def voice(msg: Message) -> bool:
    return msg.voice is not None


def contact(msg: Message) -> bool:
    return msg.contact is not None


def dice(msg: Message) -> bool:
    return msg.dice is not None


def dice_value(value: int) -> MessageFilter:
    def check(msg: Message) -> bool:
        return msg.dice is not None and msg.dice.value == value

    return check


def game(msg: Message) -> bool:
    return msg.game is not None


def poll(msg: Message) -> bool:
    return msg.poll is not None


def venue(msg: Message) -> bool:
    return msg.venue is not None


def location(msg: Message) -> bool:
    return msg.location is not None


def new_chat_members(msg: Message) -> bool:
    return msg.new_chat_members is not None


def left_chat_member(msg: Message) -> bool:
    return msg.left_chat_member is not None


def pinned_message(msg: Message) -> bool:
    return msg.pinned_message is not None


def via_bot(msg: Message) -> bool:
    return msg.via_bot is not None


def migrate(msg: Message) -> bool:
    return migrate_from(msg) or migrate_to(msg)


def migrate_from(msg: Message) -> bool:
    return bool(msg.migrate_from_chat_id)


def migrate_to(msg: Message) -> bool:
    return bool(msg.migrate_to_chat_id)


def reply_markup(msg: Message) -> bool:
    return msg.reply_markup is not None


def media_group(msg: Message) -> bool:
    return bool(msg.media_group_id)


def users_shared(msg: Message) -> bool:
    return msg.users_shared is not None


def chat_shared(msg: Message) -> bool:
    return msg.chat_shared is not None


def story(msg: Message) -> bool:
    return msg.story is not None


def topic_created(msg: Message) -> bool:
    return msg.forum_topic_created is not None


def topic_edited(msg: Message) -> bool:
    return msg.forum_topic_edited is not None


def topic_closed(msg: Message) -> bool:
    return msg.forum_topic_closed is not None


def topic_reopened(msg: Message) -> bool:
    return msg.forum_topic_reopened is not None


def topic_action(msg: Message) -> bool:
    return (
        topic_created(msg)
        or topic_edited(msg)
        or topic_closed(msg)
        or topic_reopened(msg)
    )
