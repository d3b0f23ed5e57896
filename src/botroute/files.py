"""Outbound file parameters.

An `InputFile` is either an inline reference (a public URL or a platform
file id) or a named raw byte source. Raw sources cannot be embedded in the
request body: `attach` records them in a per-request attachment table and
returns an `attach://<key>` placeholder that the serializer pairs with a
multipart part named `<key>`.
"""

from __future__ import annotations

from collections.abc import MutableMapping
from dataclasses import dataclass
from typing import IO, Any

ATTACH_PREFIX = "attach://"

__all__ = [
    "ATTACH_PREFIX",
    "AmbiguousAttachment",
    "AttachmentError",
    "AttachmentTable",
    "DuplicateAttachmentKey",
    "EmptyAttachment",
    "InputFile",
    "InputMedia",
    "input_file_id",
    "input_file_reader",
    "input_file_url",
]


class AttachmentError(ValueError):
    pass


class EmptyAttachment(AttachmentError):
    def __init__(self) -> None:
        super().__init__("empty attachment: neither a value nor data was given")


class AmbiguousAttachment(AttachmentError):
    def __init__(self) -> None:
        super().__init__("ambiguous attachment: both a value and data were given")


class DuplicateAttachmentKey(AttachmentError):
    def __init__(self, key: str) -> None:
        super().__init__(f"duplicate attachment key {key!r}")
        self.key = key


FileData = bytes | IO[bytes]
AttachmentTable = MutableMapping[str, "InputFile"]


@dataclass(frozen=True, slots=True)
class InputFile:
    value: str | None = None
    name: str | None = None
    data: FileData | None = None

    def attach(self, key: str, table: AttachmentTable) -> str:
        """Resolve this file to the string placed in the request body."""
        has_value = bool(self.value)
        has_data = self.data is not None
        if not has_value and not has_data:
            raise EmptyAttachment()
        if has_value and has_data:
            raise AmbiguousAttachment()
        if has_value:
            return self.value  # type: ignore[return-value]
        if not key:
            raise AttachmentError("attachment key must not be empty")
        if key in table:
            raise DuplicateAttachmentKey(key)
        table[key] = self
        return ATTACH_PREFIX + key

    def filename(self, key: str) -> str:
        return self.name or key


def input_file_url(url: str) -> InputFile:
    """Send a file the platform downloads from a public HTTP URL."""
    return InputFile(value=url)


def input_file_id(file_id: str) -> InputFile:
    """Reuse a file already stored on the platform."""
    return InputFile(value=file_id)


def input_file_reader(name: str, data: FileData) -> InputFile:
    """Upload raw bytes, or the contents of a binary file object.

    For example::

        with open("report.pdf", "rb") as fh:
            await bot.send_document(chat_id, input_file_reader("report.pdf", fh))
    """
    return InputFile(name=name, data=data)


@dataclass(frozen=True, slots=True)
class InputMedia:
    """One item of a media group (photo, video, document, audio, animation)."""

    type: str
    media: InputFile
    caption: str | None = None
    parse_mode: str | None = None
    thumbnail: InputFile | None = None

    def to_payload(self, key: str, table: AttachmentTable) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "type": self.type,
            "media": self.media.attach(key, table),
        }
        if self.thumbnail is not None:
            payload["thumbnail"] = self.thumbnail.attach(f"{key}_thumbnail", table)
        if self.caption is not None:
            payload["caption"] = self.caption
        if self.parse_mode is not None:
            payload["parse_mode"] = self.parse_mode
        return payload
