from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Protocol

import httpx
import msgspec

from .api_models import Message, User
from .files import InputFile, InputMedia
from .logging import get_logger
from .request import PreparedRequest, build_request

logger = get_logger(__name__)

API_BASE_URL = "https://api.telegram.org"


class ApiError(RuntimeError):
    def __init__(
        self,
        method: str,
        description: str,
        *,
        error_code: int | None = None,
    ) -> None:
        super().__init__(f"{method} failed: {description}")
        self.method = method
        self.description = description
        self.error_code = error_code


class RequestSender(Protocol):
    async def send(self, method: str, request: PreparedRequest) -> Any: ...


class HttpSender:
    """Posts prepared requests to the Bot API over httpx.

    Form-encoded when the request carries no raw files, multipart otherwise.
    """

    def __init__(
        self,
        token: str,
        *,
        base_url: str = API_BASE_URL,
        timeout_s: float = 120,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        if not token:
            raise ValueError("Bot token is empty")
        self._base = f"{base_url}/bot{token}"
        self._client = client or httpx.AsyncClient(timeout=timeout_s)
        self._owns_client = client is None

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def send(self, method: str, request: PreparedRequest) -> Any:
        logger.debug(
            "http.request",
            method=method,
            fields=sorted(request.fields),
            files=sorted(request.files),
        )
        try:
            if request.is_multipart:
                resp = await self._client.post(
                    f"{self._base}/{method}",
                    data=request.fields,
                    files=request.multipart(),
                )
            else:
                resp = await self._client.post(
                    f"{self._base}/{method}", data=request.fields
                )
        except httpx.HTTPError as exc:
            url = getattr(exc.request, "url", None)
            logger.error(
                "http.network_error",
                method=method,
                url=str(url) if url is not None else None,
                error=str(exc),
                error_type=exc.__class__.__name__,
            )
            raise ApiError(method, str(exc)) from exc
        return self._parse_envelope(method=method, resp=resp)

    def _parse_envelope(self, *, method: str, resp: httpx.Response) -> Any:
        try:
            payload = resp.json()
        except ValueError as exc:
            logger.error(
                "http.bad_response",
                method=method,
                status=resp.status_code,
                error=str(exc),
                body=resp.text,
            )
            raise ApiError(
                method, f"invalid response (HTTP {resp.status_code})"
            ) from exc

        if not isinstance(payload, dict):
            logger.error("http.invalid_payload", method=method, payload=payload)
            raise ApiError(method, "invalid payload")

        if not payload.get("ok"):
            description = str(payload.get("description") or "unknown error")
            error_code = payload.get("error_code")
            logger.error(
                "http.api_error",
                method=method,
                status=resp.status_code,
                error_code=error_code,
                description=description,
            )
            raise ApiError(
                method,
                description,
                error_code=error_code if isinstance(error_code, int) else None,
            )

        logger.debug("http.response", method=method)
        return payload.get("result")


class Bot:
    """Handle passed to handler actions for issuing further API requests."""

    def __init__(self, user: User, sender: RequestSender) -> None:
        self.user = user
        self._sender = sender

    @property
    def username(self) -> str | None:
        return self.user.username

    @classmethod
    async def connect(cls, sender: RequestSender) -> Bot:
        result = await sender.send("getMe", build_request({}))
        return cls(msgspec.convert(result, type=User), sender)

    async def request(self, method: str, params: Mapping[str, Any]) -> Any:
        return await self._sender.send(method, build_request(params))

    async def send_message(
        self,
        chat_id: int,
        text: str,
        *,
        reply_to_message_id: int | None = None,
        parse_mode: str | None = None,
    ) -> Message:
        result = await self.request(
            "sendMessage",
            {
                "chat_id": chat_id,
                "text": text,
                "reply_to_message_id": reply_to_message_id,
                "parse_mode": parse_mode,
            },
        )
        return msgspec.convert(result, type=Message)

    async def send_document(
        self,
        chat_id: int,
        document: InputFile,
        *,
        caption: str | None = None,
        thumbnail: InputFile | None = None,
    ) -> Message:
        result = await self.request(
            "sendDocument",
            {
                "chat_id": chat_id,
                "document": document,
                "thumbnail": thumbnail,
                "caption": caption,
            },
        )
        return msgspec.convert(result, type=Message)

    async def send_media_group(
        self,
        chat_id: int,
        media: Sequence[InputMedia],
    ) -> list[Message]:
        result = await self.request(
            "sendMediaGroup", {"chat_id": chat_id, "media": list(media)}
        )
        return msgspec.convert(result, type=list[Message])
