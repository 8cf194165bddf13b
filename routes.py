"""The relay route: validate, call DeepSeek, split, respond."""
import json
from typing import Optional

from log import get_logger, relay_invocation

logger = get_logger("tutor.routes")

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse
import httpx
from pydantic import ValidationError

from config import API_KEY_ENV, RelayConfig, get_config
from errors import RelayError, InvalidRequestError, ConfigurationError, UpstreamTransportError
from llm import DeepSeekClient, get_transport
from models import ChatRequest, SuccessEnvelope
from splitter import split_content

router = APIRouter()

# Unlisted methods are turned into the same 405 envelope by backend.py.
ROUTED_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

CONFIG_MISSING = (
    f"Server configuration error: API key not set. Please set {API_KEY_ENV} in the environment."
)


def cors_headers(full: bool = False) -> dict:
    headers = {"Access-Control-Allow-Origin": "*"}
    if full:
        headers["Access-Control-Allow-Headers"] = "Content-Type"
        headers["Access-Control-Allow-Methods"] = "POST, OPTIONS"
    return headers


async def read_message(request: Request) -> str:
    raw = await request.body()
    try:
        payload = json.loads(raw)
        req = ChatRequest.model_validate(payload)
    except (ValueError, ValidationError):
        # json.JSONDecodeError and UnicodeDecodeError are both ValueErrors
        logger.warning("No message provided", extra={"component": "validator"})
        raise InvalidRequestError()
    preview = req.message[:50] + "..." if len(req.message) > 50 else req.message
    logger.info("Received message", extra={"component": "validator", "detail": preview})
    return req.message


def require_api_key(config: RelayConfig) -> str:
    if not config.api_key:
        logger.error(f"{API_KEY_ENV} environment variable is not set", extra={"component": "config"})
        raise ConfigurationError(error=CONFIG_MISSING)
    return config.api_key


@router.api_route(
    "/.netlify/functions/chat", methods=ROUTED_METHODS, tags=["Tutor"],
    summary="Ask the English tutor (original deployment path)",
)
@router.api_route(
    "/api/chat", methods=ROUTED_METHODS, tags=["Tutor"], summary="Ask the English tutor",
    description="Relays one English-learning question to DeepSeek and returns the reply split into English and Chinese.",
)
async def chat(
    request: Request,
    config: RelayConfig = Depends(get_config),
    transport: Optional[httpx.AsyncBaseTransport] = Depends(get_transport),
):
    method = request.method
    with relay_invocation(logger, request.url.path, method):
        if method == "OPTIONS":
            return Response(status_code=200, content=b"", headers=cors_headers(full=True))
        if method != "POST":
            logger.warning("Invalid method", extra={"method": method})
            raise InvalidRequestError(error="Method Not Allowed", status_code=405)

        message = await read_message(request)
        require_api_key(config)

        try:
            content = await DeepSeekClient(config, transport=transport).chat(message)
            english, translation = split_content(content)
        except RelayError:
            raise
        except Exception as e:
            logger.exception("Unexpected relay failure", extra={"component": "relay"})
            raise UpstreamTransportError(str(e))

        envelope = SuccessEnvelope(text=english, translation=translation)
        return JSONResponse(envelope.model_dump(), status_code=200, headers=cors_headers(full=True))
