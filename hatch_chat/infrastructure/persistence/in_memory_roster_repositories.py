"""
In-memory Project, Team and Agent Repository Implementations.
"""

from typing import Optional

from hatch_chat.domain.entities.agent import Agent
from hatch_chat.domain.entities.project import Project, Team
from hatch_chat.domain.ports.repositories.roster_repositories import (
    AgentRepository,
    ProjectRepository,
    TeamRepository,
)


class InMemoryProjectRepository(ProjectRepository):
    def __init__(self):
        self._projects: dict[str, Project] = {}

    async def get_by_id(self, project_id: str) -> Optional[Project]:
        return self._projects.get(project_id)

    async def save(self, project: Project) -> None:
        self._projects[project.id] = project


class InMemoryTeamRepository(TeamRepository):
    def __init__(self):
        self._teams: dict[str, Team] = {}

    async def get_by_id(self, team_id: str) -> Optional[Team]:
        return self._teams.get(team_id)

    async def get_by_project(self, project_id: str) -> list[Team]:
        return [t for t in self._teams.values() if t.project_id == project_id]

    async def save(self, team: Team) -> None:
        self._teams[team.id] = team


class InMemoryAgentRepository(AgentRepository):
    # dict preserves insertion order, which is the roster order
    def __init__(self):
        self._agents: dict[str, Agent] = {}

    async def get_by_id(self, agent_id: str) -> Optional[Agent]:
        return self._agents.get(agent_id)

    async def get_by_project(self, project_id: str) -> list[Agent]:
        return [a for a in self._agents.values() if a.project_id == project_id]

    async def save(self, agent: Agent) -> None:
        self._agents[agent.id] = agent
