"""
Projects API Router - roster management (projects, teams, agents).
"""

from logging import getLogger
from typing import Optional

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, status
from pydantic import BaseModel, ConfigDict, Field

from hatch_chat.application.commands.roster import (
    CreateAgentCommand,
    CreateAgentHandler,
    CreateProjectCommand,
    CreateProjectHandler,
    CreateTeamCommand,
    CreateTeamHandler,
)
from hatch_chat.application.dto.roster import AgentDTO, ProjectDTO, TeamDTO
from hatch_chat.application.queries.roster import ListAgentsHandler, ListAgentsQuery

logger = getLogger(__name__)


# ==================== REQUEST MODELS ====================


class CreateProjectRequest(BaseModel):
    id: str
    name: str


class CreateTeamRequest(BaseModel):
    id: str
    name: str


class CreateAgentRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    role: str = ""
    team_id: Optional[str] = Field(default=None, alias="teamId")
    is_team_lead: bool = Field(default=False, alias="isTeamLead")


class ListAgentsResponse(BaseModel):
    agents: list[AgentDTO]


# ==================== ROUTER ====================

router = APIRouter(prefix="/projects", tags=["projects"])


# ==================== ENDPOINTS ====================


@router.post("", response_model=ProjectDTO, status_code=status.HTTP_201_CREATED)
@inject
async def create_project(
    request: CreateProjectRequest,
    handler: FromDishka[CreateProjectHandler],
):
    project = await handler.execute(CreateProjectCommand(project_id=request.id, name=request.name))
    logger.info("Created project %s", project.id)
    return ProjectDTO(id=project.id, name=project.name)


@router.post(
    "/{project_id}/teams", response_model=TeamDTO, status_code=status.HTTP_201_CREATED
)
@inject
async def create_team(
    project_id: str,
    request: CreateTeamRequest,
    handler: FromDishka[CreateTeamHandler],
):
    team = await handler.execute(
        CreateTeamCommand(project_id=project_id, team_id=request.id, name=request.name)
    )
    return TeamDTO(id=team.id, project_id=team.project_id, name=team.name)


@router.post(
    "/{project_id}/agents", response_model=AgentDTO, status_code=status.HTTP_201_CREATED
)
@inject
async def create_agent(
    project_id: str,
    request: CreateAgentRequest,
    handler: FromDishka[CreateAgentHandler],
):
    """Add an agent to the project roster. Roster order is creation order."""
    agent = await handler.execute(
        CreateAgentCommand(
            project_id=project_id,
            agent_id=request.id,
            name=request.name,
            role=request.role,
            team_id=request.team_id,
            is_team_lead=request.is_team_lead,
        )
    )
    return AgentDTO.from_entity(agent)


@router.get("/{project_id}/agents", response_model=ListAgentsResponse)
@inject
async def list_agents(
    project_id: str,
    handler: FromDishka[ListAgentsHandler],
):
    agents = await handler.execute(ListAgentsQuery(project_id=project_id))
    return ListAgentsResponse(agents=[AgentDTO.from_entity(a) for a in agents])
