"""
Chat API Router - WebSocket and HTTP entry points for sending messages.

- Receives handlers via Dependency Injection (Dishka)
- Thin layer: envelope validation and frame delivery only
- Delegates routing and persistence to SendMessageHandler

Flow:
  WS frame → validate_message_ingress → SendMessageCommand → Handler
                                                   ↓
  new_message / streaming_* / error frames ←───────┘
"""

import json
from logging import getLogger
from typing import Any, Optional
from uuid import uuid4

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, Body, HTTPException, Query, WebSocket, WebSocketDisconnect, status
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from hatch_chat.application.commands.chat.send_message import (
    SendMessageCommand,
    SendMessageHandler,
    SendMessageResult,
)
from hatch_chat.application.dto.chat import ErrorFrame, FallbackDTO, MessageDTO
from hatch_chat.application.ingress.message_ingress import (
    SEND_MESSAGE_TYPE,
    validate_message_ingress,
)
from hatch_chat.config.logging_config import correlation_id_var
from hatch_chat.domain.exceptions import EnvelopeValidationError, InvariantViolationError

logger = getLogger(__name__)

INVALID_ENVELOPE = EnvelopeValidationError.code
INVARIANT_VIOLATION = "INVARIANT_VIOLATION"
INTERNAL_ERROR = "INTERNAL_ERROR"
UNSUPPORTED_TYPE = "UNSUPPORTED_TYPE"


# ==================== RESPONSE MODELS ====================


class ChatResponse(BaseModel):
    """Response of POST /chat: both persisted messages of the turn."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    user_message: MessageDTO
    message: MessageDTO
    authority_reason: str
    fallback: Optional[FallbackDTO] = None

    @classmethod
    def from_result(cls, result: SendMessageResult) -> "ChatResponse":
        fallback = result.decision.fallback
        return cls(
            user_message=MessageDTO.from_entity(result.user_message),
            message=MessageDTO.from_entity(result.response_message),
            authority_reason=result.decision.reason,
            fallback=FallbackDTO(**fallback.to_dict()) if fallback else None,
        )


def streaming_complete_frame(result: SendMessageResult) -> dict[str, Any]:
    response = ChatResponse.from_result(result)
    frame = {
        "type": "streaming_complete",
        "messageId": result.response_message.id.value,
        "message": response.message.to_wire(),
        "authorityReason": response.authority_reason,
    }
    if response.fallback is not None:
        frame["fallback"] = response.fallback.model_dump()
    return frame


# ==================== ROUTER ====================

router = APIRouter(tags=["chat"])


# ==================== ENDPOINTS ====================


@router.post("/chat", response_model=ChatResponse, response_model_by_alias=True)
@inject
async def send_chat_message(
    handler: FromDishka[SendMessageHandler],
    payload: dict[str, Any] = Body(...),
    project_id: Optional[str] = Query(default=None, alias="projectId"),
):
    """
    Send one message over HTTP and return the persisted turn.

    Body is the WebSocket envelope; "type" may be omitted.
    """
    payload.setdefault("type", SEND_MESSAGE_TYPE)
    result = validate_message_ingress(
        payload, strict=handler.guard.strict, known_project_id=project_id
    )
    if not result.success:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=result.error)

    outcome = await handler.execute(SendMessageCommand.from_ingress(result))
    return ChatResponse.from_result(outcome)


@router.websocket("/ws")
async def chat_socket(
    websocket: WebSocket,
    project_id: Optional[str] = Query(default=None, alias="projectId"),
):
    """
    Chat WebSocket. One `send_message_streaming` frame in, a sequence of
    frames out. `projectId` (query) is used as the known project id when
    parsing conversation identifiers.
    """
    await websocket.accept()
    strict = websocket.app.state.strict
    logger.info("WebSocket connected (projectId=%s, strict=%s)", project_id, strict)
    try:
        while True:
            raw = await websocket.receive_text()
            await _handle_frame(websocket, raw, strict=strict, project_id=project_id)
    except WebSocketDisconnect:
        logger.info("WebSocket disconnected")


async def _handle_frame(
    websocket: WebSocket, raw: str, *, strict: bool, project_id: Optional[str]
) -> None:
    try:
        payload: Any = json.loads(raw)
    except json.JSONDecodeError:
        payload = raw

    correlation_id_var.set(_frame_correlation_id(payload))

    if isinstance(payload, dict) and payload.get("type") != SEND_MESSAGE_TYPE:
        await _send_error(
            websocket,
            UNSUPPORTED_TYPE,
            f"Unsupported frame type: {payload.get('type')!r}",
        )
        return

    try:
        result = validate_message_ingress(payload, strict=strict, known_project_id=project_id)
        if not result.success:
            await _send_error(websocket, INVALID_ENVELOPE, result.error)
            return

        async with websocket.app.state.dishka_container() as request_container:
            handler = await request_container.get(SendMessageHandler)
            outcome = await handler.execute(
                SendMessageCommand.from_ingress(result), emit=websocket.send_json
            )
        await websocket.send_json(streaming_complete_frame(outcome))

    except WebSocketDisconnect:
        raise
    except EnvelopeValidationError as e:
        # Only raised in strict mode
        await _send_error(websocket, e.code, e.message, {"errors": e.errors})
        raise
    except InvariantViolationError as e:
        await _send_error(websocket, INVARIANT_VIOLATION, e.message, {"invariant": e.invariant})
        raise
    except Exception as e:
        logger.exception("Failed to handle chat frame: %s", e)
        await _send_error(websocket, INTERNAL_ERROR, "Failed to process message")
        if strict:
            raise


def _frame_correlation_id(payload: Any) -> str:
    if isinstance(payload, dict):
        message = payload.get("message")
        if isinstance(message, dict) and isinstance(message.get("id"), str):
            return message["id"]
    return uuid4().hex


async def _send_error(
    websocket: WebSocket,
    code: str,
    message: Optional[str],
    details: Optional[dict[str, Any]] = None,
) -> None:
    logger.warning("Sending error frame %s: %s", code, message)
    frame = ErrorFrame(code=code, message=message or code, details=details)
    await websocket.send_json(frame.to_wire())
