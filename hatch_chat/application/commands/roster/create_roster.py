"""
Roster Commands - create projects, teams and agents.
"""

from dataclasses import dataclass
from typing import Optional

from hatch_chat.application.common.interfaces import Command, CommandHandler
from hatch_chat.domain.entities.agent import SYSTEM_SENDER, Agent
from hatch_chat.domain.entities.project import Project, Team
from hatch_chat.domain.exceptions import DomainValidationError, EntityNotFoundError
from hatch_chat.domain.ports.repositories import (
    AgentRepository,
    ProjectRepository,
    TeamRepository,
)


@dataclass(frozen=True)
class CreateProjectCommand(Command[Project]):
    project_id: str
    name: str


class CreateProjectHandler(CommandHandler[Project]):
    def __init__(self, project_repo: ProjectRepository):
        self._project_repo = project_repo

    async def execute(self, command: CreateProjectCommand) -> Project:
        if await self._project_repo.get_by_id(command.project_id):
            raise DomainValidationError(f"Project {command.project_id} already exists")
        try:
            project = Project(id=command.project_id, name=command.name)
        except ValueError as e:
            raise DomainValidationError(str(e))
        await self._project_repo.save(project)
        return project


@dataclass(frozen=True)
class CreateTeamCommand(Command[Team]):
    project_id: str
    team_id: str
    name: str


class CreateTeamHandler(CommandHandler[Team]):
    def __init__(self, project_repo: ProjectRepository, team_repo: TeamRepository):
        self._project_repo = project_repo
        self._team_repo = team_repo

    async def execute(self, command: CreateTeamCommand) -> Team:
        if not await self._project_repo.get_by_id(command.project_id):
            raise EntityNotFoundError(f"Project {command.project_id} not found")
        if await self._team_repo.get_by_id(command.team_id):
            raise DomainValidationError(f"Team {command.team_id} already exists")
        try:
            team = Team(id=command.team_id, project_id=command.project_id, name=command.name)
        except ValueError as e:
            raise DomainValidationError(str(e))
        await self._team_repo.save(team)
        return team


@dataclass(frozen=True)
class CreateAgentCommand(Command[Agent]):
    project_id: str
    agent_id: str
    name: str
    role: str
    team_id: Optional[str] = None
    is_team_lead: bool = False


class CreateAgentHandler(CommandHandler[Agent]):
    def __init__(
        self,
        project_repo: ProjectRepository,
        team_repo: TeamRepository,
        agent_repo: AgentRepository,
    ):
        self._project_repo = project_repo
        self._team_repo = team_repo
        self._agent_repo = agent_repo

    async def execute(self, command: CreateAgentCommand) -> Agent:
        if not command.agent_id or not command.agent_id.strip():
            raise DomainValidationError("Agent id cannot be empty")
        if command.agent_id == SYSTEM_SENDER:
            raise DomainValidationError(f'"{SYSTEM_SENDER}" is reserved and cannot be an agent id')
        if not await self._project_repo.get_by_id(command.project_id):
            raise EntityNotFoundError(f"Project {command.project_id} not found")
        if await self._agent_repo.get_by_id(command.agent_id):
            raise DomainValidationError(f"Agent {command.agent_id} already exists")
        if command.team_id:
            team = await self._team_repo.get_by_id(command.team_id)
            if team is None or team.project_id != command.project_id:
                raise EntityNotFoundError(
                    f"Team {command.team_id} not found in project {command.project_id}"
                )

        agent = Agent(
            id=command.agent_id,
            name=command.name,
            role=command.role,
            project_id=command.project_id,
            team_id=command.team_id,
            is_team_lead=command.is_team_lead,
        )
        await self._agent_repo.save(agent)
        return agent
