"""Roster and conversation DTOs for API request/response."""

from datetime import datetime
from pydantic import BaseModel
from typing import Optional

from hatch_chat.domain.entities.agent import Agent
from hatch_chat.domain.entities.conversation import Conversation


class ProjectDTO(BaseModel):
    id: str
    name: str


class TeamDTO(BaseModel):
    id: str
    project_id: str
    name: str


class AgentDTO(BaseModel):
    id: str
    name: str
    role: str
    project_id: str
    team_id: Optional[str] = None
    is_team_lead: bool = False

    @classmethod
    def from_entity(cls, agent: Agent) -> "AgentDTO":
        return cls(
            id=agent.id,
            name=agent.name,
            role=agent.role,
            project_id=agent.project_id,
            team_id=agent.team_id,
            is_team_lead=agent.is_team_lead,
        )


class ConversationDTO(BaseModel):
    id: str
    scope: str
    project_id: str
    team_id: Optional[str] = None
    agent_id: Optional[str] = None
    title: Optional[str] = None
    created_at: datetime

    @classmethod
    def from_entity(cls, conversation: Conversation) -> "ConversationDTO":
        return cls(
            id=conversation.id,
            scope=conversation.scope,
            project_id=conversation.project_id,
            team_id=conversation.team_id,
            agent_id=conversation.agent_id,
            title=conversation.title,
            created_at=conversation.created_at,
        )
