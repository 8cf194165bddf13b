"""DeepSeek chat-completion client: prompt building, transport, and reply parsing."""
import asyncio
import json
import time
from typing import Optional

from log import get_logger

logger = get_logger("tutor.llm")

import httpx
from pydantic import ValidationError

from config import RelayConfig
from errors import UpstreamTransportError, UpstreamFormatError
from models import SYSTEM_PROMPT, ChatMessage, ChatCompletionRequest, ChatCompletionResponse


def build_chat_request(config: RelayConfig, user_message: str) -> ChatCompletionRequest:
    return ChatCompletionRequest(
        model=config.model,
        messages=[
            ChatMessage(role="system", content=SYSTEM_PROMPT),
            ChatMessage(role="user", content=user_message),
        ],
        max_tokens=config.max_tokens,
        temperature=config.temperature,
        stream=False,
    )


def encode_chat_request(req: ChatCompletionRequest) -> bytes:
    return json.dumps(req.model_dump(), ensure_ascii=False).encode("utf-8")


def parse_chat_response(body: str) -> str:
    """Pull ``choices[0].message.content`` out of a raw response body."""
    try:
        data = json.loads(body)
    except json.JSONDecodeError as e:
        raise UpstreamFormatError(f"Failed to parse DeepSeek response: {e}")
    try:
        parsed = ChatCompletionResponse.model_validate(data)
    except ValidationError:
        logger.error("Invalid DeepSeek response format", extra={"component": "deepseek", "detail": body[:200]})
        raise UpstreamFormatError("Invalid response format from DeepSeek API")
    return parsed.choices[0].message.content


class DeepSeekClient:
    """One-shot caller for the DeepSeek chat-completions endpoint.

    A fresh ``httpx.AsyncClient`` is opened for every call and closed on
    every exit path. ``transport`` replaces the network (tests pass an
    ``httpx.MockTransport``).
    """

    def __init__(self, config: RelayConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
        if not config.api_key:
            raise ValueError("DeepSeekClient requires an API key")
        self.config = config
        self.transport = transport

    def _headers(self, body: bytes) -> dict:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.config.api_key}",
            "Content-Length": str(len(body)),
            "User-Agent": self.config.user_agent,
        }

    async def _post(self, body: bytes) -> httpx.Response:
        async with httpx.AsyncClient(transport=self.transport, timeout=self.config.timeout) as client:
            return await client.post(self.config.api_url, content=body, headers=self._headers(body))

    async def chat(self, user_message: str) -> str:
        """Send one user message and return the assistant's raw content."""
        body = encode_chat_request(build_chat_request(self.config, user_message))
        started = time.monotonic()
        logger.info("Sending request to DeepSeek", extra={"component": "deepseek", "count": len(body)})
        try:
            resp = await asyncio.wait_for(self._post(body), timeout=self.config.timeout)
        except (asyncio.TimeoutError, httpx.TimeoutException):
            logger.error("Request timeout", extra={"component": "deepseek", "duration_ms": _ms_since(started)})
            raise UpstreamTransportError("Request timeout - DeepSeek API did not respond in time")
        except httpx.HTTPError as e:
            logger.error("HTTPS request error", extra={"component": "deepseek", "detail": str(e)})
            raise UpstreamTransportError(f"HTTP request failed: {e}")

        logger.info("DeepSeek response", extra={
            "component": "deepseek", "status_code": resp.status_code, "duration_ms": _ms_since(started),
        })
        if resp.status_code != 200:
            logger.error("DeepSeek API error", extra={
                "component": "deepseek", "status_code": resp.status_code, "detail": resp.text[:200],
            })
            raise UpstreamTransportError(f"DeepSeek API returned status {resp.status_code}: {resp.text}")

        content = parse_chat_response(resp.text)
        logger.info("AI content received", extra={"component": "deepseek", "count": len(content)})
        return content


def _ms_since(started: float) -> int:
    return int((time.monotonic() - started) * 1000)


async def get_transport() -> Optional[httpx.AsyncBaseTransport]:
    """FastAPI dependency; ``None`` means the real network."""
    return None
