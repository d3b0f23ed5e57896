from __future__ import annotations

from typing import Any

import msgspec

__all__ = [
    "Animation",
    "Audio",
    "CallbackQuery",
    "Chat",
    "ChatShared",
    "Contact",
    "Dice",
    "Document",
    "ForumTopicClosed",
    "ForumTopicCreated",
    "ForumTopicEdited",
    "ForumTopicReopened",
    "Game",
    "Location",
    "Message",
    "MessageEntity",
    "MessageOrigin",
    "PhotoSize",
    "Poll",
    "Sticker",
    "Story",
    "Update",
    "UpdateDecodeError",
    "User",
    "UsersShared",
    "Venue",
    "Video",
    "VideoNote",
    "Voice",
    "decode_update",
]


class UpdateDecodeError(ValueError):
    pass


class User(msgspec.Struct, frozen=True, forbid_unknown_fields=False):
    id: int
    is_bot: bool = False
    first_name: str = ""
    last_name: str | None = None
    username: str | None = None


class Chat(msgspec.Struct, frozen=True, forbid_unknown_fields=False):
    id: int
    type: str
    title: str | None = None
    username: str | None = None
    is_forum: bool | None = None


class MessageEntity(msgspec.Struct, frozen=True, forbid_unknown_fields=False):
    type: str
    offset: int
    length: int
    url: str | None = None
    user: User | None = None
    language: str | None = None


class MessageOrigin(msgspec.Struct, frozen=True, forbid_unknown_fields=False):
    # One struct for every origin kind: user, hidden_user, chat and channel.
    type: str
    date: int = 0
    sender_user: User | None = None
    sender_user_name: str | None = None
    sender_chat: Chat | None = None
    chat: Chat | None = None
    message_id: int | None = None
    author_signature: str | None = None


class PhotoSize(msgspec.Struct, frozen=True, forbid_unknown_fields=False):
    file_id: str
    file_unique_id: str
    width: int
    height: int
    file_size: int | None = None


class Animation(msgspec.Struct, frozen=True, forbid_unknown_fields=False):
    file_id: str
    file_unique_id: str
    duration: int | None = None
    file_name: str | None = None
    mime_type: str | None = None


class Audio(msgspec.Struct, frozen=True, forbid_unknown_fields=False):
    file_id: str
    file_unique_id: str
    duration: int | None = None
    title: str | None = None
    mime_type: str | None = None


class Document(msgspec.Struct, frozen=True, forbid_unknown_fields=False):
    file_id: str
    file_unique_id: str
    file_name: str | None = None
    mime_type: str | None = None
    file_size: int | None = None


class Sticker(msgspec.Struct, frozen=True, forbid_unknown_fields=False):
    file_id: str
    file_unique_id: str
    type: str = "regular"
    emoji: str | None = None


class Video(msgspec.Struct, frozen=True, forbid_unknown_fields=False):
    file_id: str
    file_unique_id: str
    duration: int | None = None
    file_name: str | None = None
    mime_type: str | None = None


class VideoNote(msgspec.Struct, frozen=True, forbid_unknown_fields=False):
    file_id: str
    file_unique_id: str
    length: int = 0
    duration: int = 0


class Voice(msgspec.Struct, frozen=True, forbid_unknown_fields=False):
    file_id: str
    file_unique_id: str
    duration: int = 0
    mime_type: str | None = None


class Contact(msgspec.Struct, frozen=True, forbid_unknown_fields=False):
    phone_number: str
    first_name: str
    user_id: int | None = None


class Dice(msgspec.Struct, frozen=True, forbid_unknown_fields=False):
    emoji: str
    value: int


class Game(msgspec.Struct, frozen=True, forbid_unknown_fields=False):
    title: str
    description: str = ""


class Poll(msgspec.Struct, frozen=True, forbid_unknown_fields=False):
    id: str
    question: str


class Location(msgspec.Struct, frozen=True, forbid_unknown_fields=False):
    latitude: float
    longitude: float


class Venue(msgspec.Struct, frozen=True, forbid_unknown_fields=False):
    location: Location
    title: str
    address: str


class Story(msgspec.Struct, frozen=True, forbid_unknown_fields=False):
    chat: Chat
    id: int


class UsersShared(msgspec.Struct, frozen=True, forbid_unknown_fields=False):
    request_id: int


class ChatShared(msgspec.Struct, frozen=True, forbid_unknown_fields=False):
    request_id: int
    chat_id: int


class ForumTopicCreated(msgspec.Struct, frozen=True, forbid_unknown_fields=False):
    name: str
    icon_color: int = 0


class ForumTopicEdited(msgspec.Struct, frozen=True, forbid_unknown_fields=False):
    name: str | None = None


class ForumTopicClosed(msgspec.Struct, frozen=True, forbid_unknown_fields=False):
    pass


class ForumTopicReopened(msgspec.Struct, frozen=True, forbid_unknown_fields=False):
    pass


class Message(msgspec.Struct, frozen=True, forbid_unknown_fields=False):
    message_id: int
    chat: Chat
    date: int = 0
    message_thread_id: int | None = None
    from_: User | None = msgspec.field(default=None, name="from")
    sender_chat: Chat | None = None
    business_connection_id: str | None = None
    forward_origin: MessageOrigin | None = None
    is_automatic_forward: bool = False
    reply_to_message: Message | None = None
    via_bot: User | None = None
    media_group_id: str | None = None
    text: str | None = None
    entities: tuple[MessageEntity, ...] = ()
    caption: str | None = None
    caption_entities: tuple[MessageEntity, ...] = ()
    animation: Animation | None = None
    audio: Audio | None = None
    document: Document | None = None
    photo: tuple[PhotoSize, ...] = ()
    sticker: Sticker | None = None
    story: Story | None = None
    video: Video | None = None
    video_note: VideoNote | None = None
    voice: Voice | None = None
    contact: Contact | None = None
    dice: Dice | None = None
    game: Game | None = None
    poll: Poll | None = None
    venue: Venue | None = None
    location: Location | None = None
    new_chat_members: tuple[User, ...] | None = None
    left_chat_member: User | None = None
    migrate_to_chat_id: int | None = None
    migrate_from_chat_id: int | None = None
    pinned_message: Message | None = None
    users_shared: UsersShared | None = None
    chat_shared: ChatShared | None = None
    forum_topic_created: ForumTopicCreated | None = None
    forum_topic_edited: ForumTopicEdited | None = None
    forum_topic_closed: ForumTopicClosed | None = None
    forum_topic_reopened: ForumTopicReopened | None = None
    reply_markup: dict[str, Any] | None = None

    def get_text(self) -> str:
        """Text body, falling back to the media caption."""
        if self.text:
            return self.text
        return self.caption or ""

    def get_entities(self) -> tuple[MessageEntity, ...]:
        if self.entities:
            return self.entities
        return self.caption_entities


class CallbackQuery(msgspec.Struct, frozen=True, forbid_unknown_fields=False):
    id: str
    from_: User = msgspec.field(name="from")
    chat_instance: str = ""
    message: Message | None = None
    inline_message_id: str | None = None
    data: str | None = None


class Update(msgspec.Struct, frozen=True, forbid_unknown_fields=False):
    update_id: int
    message: Message | None = None
    edited_message: Message | None = None
    channel_post: Message | None = None
    edited_channel_post: Message | None = None
    callback_query: CallbackQuery | None = None


def decode_update(payload: bytes | str | dict[str, Any]) -> Update:
    try:
        if isinstance(payload, dict):
            return msgspec.convert(payload, type=Update)
        return msgspec.json.decode(payload, type=Update)
    except msgspec.MsgspecError as exc:
        raise UpdateDecodeError(f"Malformed update: {exc}") from exc
