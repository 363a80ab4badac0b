"""
Message Ingress - the single boundary for inbound send-message payloads.

Every `send_message_streaming` frame is validated into one canonical shape
before any storage or orchestration runs:

    {
        "type": "send_message_streaming",
        "conversationId": "team-saas-design",
        "message": {"content": "...", ...},
        "addressedAgentId": "agent-7",            # optional, wins
        "metadata": {"addressedAgentId": "..."}   # optional fallback
    }

Strict mode raises EnvelopeValidationError (fail fast for developers).
Otherwise a failed IngressResult is returned and the caller sends an error
frame instead of dropping the connection.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from hatch_chat.domain.exceptions.conversation_id import ConversationIdError
from hatch_chat.domain.exceptions.envelope import EnvelopeValidationError
from hatch_chat.domain.value_objects.conversation_id import (
    ParsedConversationId,
    parse_conversation_id,
    scope_prefix,
)

logger = logging.getLogger(__name__)

SEND_MESSAGE_TYPE = "send_message_streaming"


class IngressMessage(BaseModel):
    """The `message` object of the envelope."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    content: str = Field(min_length=1)
    id: Optional[str] = None
    user_id: Optional[str] = Field(default=None, alias="userId")
    message_type: Optional[Literal["user", "agent", "system"]] = Field(
        default=None, alias="messageType"
    )
    timestamp: Optional[str] = None
    sender_name: Optional[str] = Field(default=None, alias="senderName")
    parent_message_id: Optional[str] = Field(default=None, alias="parentMessageId")
    thread_root_id: Optional[str] = Field(default=None, alias="threadRootId")
    thread_depth: Optional[int] = Field(default=None, alias="threadDepth")
    metadata: Optional[dict[str, Any]] = None

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("message content is required")
        return value


class MessageIngressEnvelope(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    type: Literal["send_message_streaming"]
    conversation_id: str = Field(min_length=1, alias="conversationId")
    message: IngressMessage
    addressed_agent_id: Optional[str] = Field(default=None, alias="addressedAgentId")
    metadata: Optional[dict[str, Any]] = None

    @field_validator("conversation_id")
    @classmethod
    def conversation_id_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("conversationId is required")
        return value.strip()

    def resolved_addressed_agent_id(self) -> Optional[str]:
        """Top-level addressedAgentId overrides the one nested in metadata."""
        if self.addressed_agent_id:
            return self.addressed_agent_id
        nested = (self.metadata or {}).get("addressedAgentId")
        return nested if isinstance(nested, str) and nested else None


@dataclass(frozen=True)
class IngressResult:
    success: bool
    envelope: Optional[MessageIngressEnvelope] = None
    parsed: Optional[ParsedConversationId] = None
    error: Optional[str] = None
    addressed_agent_id: Optional[str] = None

    @property
    def mode(self) -> Optional[str]:
        return self.parsed.scope if self.parsed else None

    @property
    def project_id(self) -> Optional[str]:
        return self.parsed.project_id if self.parsed else None

    @property
    def context_id(self) -> Optional[str]:
        return self.parsed.context_id if self.parsed else None


def _format_validation_error(exc: ValidationError) -> list[str]:
    errors = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ()))
        errors.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return errors


def _check_scope_consistency(parsed: ParsedConversationId) -> Optional[str]:
    """The literal prefix and context id must agree with the parsed scope."""
    prefix = scope_prefix(parsed.raw)
    if prefix != parsed.scope:
        return (
            f'conversationId prefix "{prefix}" does not match parsed scope '
            f'"{parsed.scope}"'
        )
    if parsed.scope == "project" and parsed.context_id is not None:
        return "project conversationId must not carry a contextId"
    if parsed.scope in ("team", "agent") and not parsed.context_id:
        return f"{parsed.scope} conversationId requires a non-empty contextId"
    return None


def _fail(message: str, errors: list[str], *, strict: bool) -> IngressResult:
    if strict:
        raise EnvelopeValidationError(f"Invalid message ingress envelope: {message}", errors)
    logger.warning("Rejected inbound envelope: %s", message)
    return IngressResult(success=False, error=f"Invalid message format: {message}")


def validate_message_ingress(
    raw: Union[dict[str, Any], str, bytes],
    *,
    strict: bool,
    known_project_id: Optional[str] = None,
) -> IngressResult:
    """
    Validate an inbound send-message payload.

    Args:
        raw: Decoded JSON object, or the raw JSON text
        strict: Raise instead of returning a failed result
        known_project_id: Owning project id when the transport already holds
            it; needed for identifiers whose ids contain hyphens

    Returns:
        IngressResult with mode, project_id, context_id and addressed_agent_id

    Raises:
        EnvelopeValidationError: in strict mode, on any validation failure
    """
    try:
        if isinstance(raw, (str, bytes)):
            envelope = MessageIngressEnvelope.model_validate_json(raw)
        else:
            envelope = MessageIngressEnvelope.model_validate(raw)
    except ValidationError as exc:
        errors = _format_validation_error(exc)
        return _fail(", ".join(errors), errors, strict=strict)

    try:
        parsed = parse_conversation_id(envelope.conversation_id, known_project_id)
    except ConversationIdError as exc:
        message = f"conversationId: {exc}"
        return _fail(message, [message], strict=strict)

    inconsistency = _check_scope_consistency(parsed)
    if inconsistency:
        message = f"conversationId: {inconsistency}"
        return _fail(message, [message], strict=strict)

    return IngressResult(
        success=True,
        envelope=envelope,
        parsed=parsed,
        addressed_agent_id=envelope.resolved_addressed_agent_id(),
    )
