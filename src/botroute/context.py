from __future__ import annotations

from dataclasses import dataclass

from .api_models import CallbackQuery, Chat, Message, Update, User


@dataclass(frozen=True, slots=True)
class Context:
    update: Update

    @property
    def message(self) -> Message | None:
        return self.update.message

    @property
    def edited_message(self) -> Message | None:
        return self.update.edited_message

    @property
    def channel_post(self) -> Message | None:
        return self.update.channel_post

    @property
    def edited_channel_post(self) -> Message | None:
        return self.update.edited_channel_post

    @property
    def callback_query(self) -> CallbackQuery | None:
        return self.update.callback_query

    @property
    def effective_message(self) -> Message | None:
        update = self.update
        if update.message is not None:
            return update.message
        if update.edited_message is not None:
            return update.edited_message
        if update.channel_post is not None:
            return update.channel_post
        if update.edited_channel_post is not None:
            return update.edited_channel_post
        if update.callback_query is not None:
            return update.callback_query.message
        return None

    @property
    def effective_chat(self) -> Chat | None:
        msg = self.effective_message
        return msg.chat if msg is not None else None

    @property
    def effective_user(self) -> User | None:
        if self.update.callback_query is not None:
            return self.update.callback_query.from_
        msg = self.effective_message
        return msg.from_ if msg is not None else None
