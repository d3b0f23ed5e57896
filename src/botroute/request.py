from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import msgspec

from .files import AttachmentTable, InputFile, InputMedia


@dataclass(frozen=True, slots=True)
class PreparedRequest:
    """Form fields plus the raw parts they reference by `attach://` key."""

    fields: dict[str, str]
    files: dict[str, InputFile] = field(default_factory=dict)

    @property
    def is_multipart(self) -> bool:
        return bool(self.files)

    def multipart(self) -> dict[str, tuple[str, Any]]:
        # Part name is the attachment key; httpx accepts bytes or file objects.
        return {
            key: (attachment.filename(key), attachment.data)
            for key, attachment in self.files.items()
        }


def _encode_scalar(value: Any) -> str:
    if isinstance(value, str):
        return value
    return msgspec.json.encode(value).decode("utf-8")


def _resolve(value: Any, key: str, table: AttachmentTable) -> Any:
    # Files nested in containers get keys derived from their position:
    # list items append the index, mapping values append "_<name>".
    if isinstance(value, InputFile):
        return value.attach(key, table)
    if isinstance(value, InputMedia):
        return value.to_payload(key, table)
    if isinstance(value, Mapping):
        return {k: _resolve(v, f"{key}_{k}", table) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_resolve(item, f"{key}{idx}", table) for idx, item in enumerate(value)]
    return value


def build_request(params: Mapping[str, Any]) -> PreparedRequest:
    """Serialize outbound parameters, resolving every file-like value.

    A fresh attachment table is used per call, so keys only need to be
    unique within one request. A file passed directly is keyed by its
    parameter name; media group items by name plus index ("media0").
    Raises `AttachmentError` for malformed files.
    """
    table: dict[str, InputFile] = {}
    fields: dict[str, str] = {}
    for name, value in params.items():
        if value is None:
            continue
        fields[name] = _encode_scalar(_resolve(value, name, table))
    return PreparedRequest(fields=fields, files=table)
