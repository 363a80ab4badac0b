"""
Canonical Conversation ID - build and parse the scope-prefixed identifier.

Formats (bit-exact, no other forms are valid):
- Project: project-{projectId}
- Team:    team-{projectId}-{teamId}
- Agent:   agent-{projectId}-{agentId}

Project ids, team ids and agent ids may all contain hyphens, so a team or
agent identifier with more than three hyphen-separated parts cannot be
split without knowing the project id. Parsing refuses to guess: it either
uses the known project id or raises AmbiguousConversationIdError.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

from hatch_chat.domain.exceptions.conversation_id import (
    AmbiguousConversationIdError,
    ConversationIdMismatchError,
    MalformedConversationIdError,
)

ConversationScope = Literal["project", "team", "agent"]

SCOPES: tuple[str, ...] = ("project", "team", "agent")
SEPARATOR = "-"


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


@dataclass(frozen=True)
class ParsedConversationId:
    """Decoded form of a canonical conversation identifier.

    Pass this alongside the raw string wherever it is already known instead
    of parsing the string again.
    """

    scope: ConversationScope
    project_id: str
    context_id: Optional[str]  # team id or agent id, None for project scope
    raw: str

    @property
    def team_id(self) -> Optional[str]:
        return self.context_id if self.scope == "team" else None

    @property
    def agent_id(self) -> Optional[str]:
        return self.context_id if self.scope == "agent" else None

    def build(self) -> str:
        return build_conversation_id(self.scope, self.project_id, self.context_id)

    def __str__(self) -> str:
        return self.raw


def build_conversation_id(
    scope: str, project_id: str, context_id: Optional[str] = None
) -> str:
    """
    Build a conversation ID in the canonical format.

    Raises:
        MalformedConversationIdError: empty ids, a context id on project
            scope, a missing context id on team/agent scope, unknown scope
    """
    if _is_blank(project_id):
        raise MalformedConversationIdError(
            "projectId is required and cannot be empty"
        )

    if scope == "project":
        if context_id is not None:
            raise MalformedConversationIdError(
                "project scope must not accept contextId"
            )
        return f"project{SEPARATOR}{project_id}"

    if scope in ("team", "agent"):
        if _is_blank(context_id):
            label = "teamId" if scope == "team" else "agentId"
            raise MalformedConversationIdError(
                f"contextId ({label}) is required for {scope} conversation ID"
            )
        return f"{scope}{SEPARATOR}{project_id}{SEPARATOR}{context_id}"

    raise MalformedConversationIdError(f"Unknown conversation scope: {scope!r}")


def scope_prefix(conversation_id: str) -> Optional[str]:
    """Return the literal scope prefix of a string, or None if it has none."""
    if not conversation_id:
        return None
    head = conversation_id.strip().split(SEPARATOR, 1)[0]
    return head if head in SCOPES else None


def parse_conversation_id(
    conversation_id: str, known_project_id: Optional[str] = None
) -> ParsedConversationId:
    """
    Parse a canonical conversation ID into scope, project id and context id.

    Args:
        conversation_id: The identifier string
        known_project_id: Owning project id, if the caller already holds it.
            Required to decode team/agent identifiers with more than three
            hyphen-separated parts.

    Raises:
        MalformedConversationIdError: grammar violation
        AmbiguousConversationIdError: needs known_project_id to decode
        ConversationIdMismatchError: identifier belongs to another project
    """
    if _is_blank(conversation_id):
        raise MalformedConversationIdError("conversationId cannot be empty")

    trimmed = conversation_id.strip()
    parts = trimmed.split(SEPARATOR)
    scope = parts[0]

    if scope not in SCOPES:
        raise MalformedConversationIdError(
            'Invalid conversation ID format: must start with "project-", "team-", '
            f'or "agent-". Got: "{trimmed}"'
        )

    if scope == "project":
        if len(parts) < 2:
            raise MalformedConversationIdError(
                f'Invalid project conversation ID: missing projectId. Got: "{trimmed}"'
            )
        project_id = trimmed[len("project") + 1 :]
        if _is_blank(project_id):
            raise MalformedConversationIdError(
                'Invalid project conversation ID: projectId is empty after "project-" prefix'
            )
        if known_project_id and project_id != known_project_id:
            raise ConversationIdMismatchError(
                trimmed, known_project_id, f"project-{known_project_id}"
            )
        return ParsedConversationId(
            scope="project", project_id=project_id, context_id=None, raw=trimmed
        )

    if len(parts) < 3:
        raise MalformedConversationIdError(
            f"Invalid {scope} conversation ID: must have at least 3 parts "
            f'(scope-projectId-contextId). Got: "{trimmed}"'
        )

    if known_project_id:
        expected_prefix = f"{scope}{SEPARATOR}{known_project_id}{SEPARATOR}"
        if not trimmed.startswith(expected_prefix):
            raise ConversationIdMismatchError(trimmed, known_project_id, expected_prefix)
        context_id = trimmed[len(expected_prefix) :]
        if _is_blank(context_id):
            raise MalformedConversationIdError(
                f"Invalid {scope} conversation ID: contextId is empty after known "
                f'projectId "{known_project_id}"'
            )
        return ParsedConversationId(
            scope=scope, project_id=known_project_id, context_id=context_id, raw=trimmed
        )

    if len(parts) > 3:
        raise AmbiguousConversationIdError(trimmed, len(parts))

    _, project_id, context_id = parts
    if not project_id or not context_id:
        raise MalformedConversationIdError(
            f'Invalid {scope} conversation ID: empty projectId or contextId. Got: "{trimmed}"'
        )
    return ParsedConversationId(
        scope=scope, project_id=project_id, context_id=context_id, raw=trimmed
    )


def belongs_to_project(conversation_id: str, project_id: str) -> bool:
    """True if the identifier decodes under the given project id."""
    try:
        parse_conversation_id(conversation_id, known_project_id=project_id)
    except (ConversationIdMismatchError, MalformedConversationIdError):
        return False
    return True
