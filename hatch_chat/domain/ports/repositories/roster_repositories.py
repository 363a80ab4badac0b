"""
Roster Repository Ports - projects, teams and agents.
Implementation: hatch_chat/infrastructure/persistence/in_memory_roster_repositories.py
"""

from abc import ABC, abstractmethod
from typing import Optional

from hatch_chat.domain.entities.agent import Agent
from hatch_chat.domain.entities.project import Project, Team


class ProjectRepository(ABC):
    @abstractmethod
    async def get_by_id(self, project_id: str) -> Optional[Project]: ...

    @abstractmethod
    async def save(self, project: Project) -> None: ...


class TeamRepository(ABC):
    @abstractmethod
    async def get_by_id(self, team_id: str) -> Optional[Team]: ...

    @abstractmethod
    async def get_by_project(self, project_id: str) -> list[Team]: ...

    @abstractmethod
    async def save(self, team: Team) -> None: ...


class AgentRepository(ABC):
    @abstractmethod
    async def get_by_id(self, agent_id: str) -> Optional[Agent]: ...

    @abstractmethod
    async def get_by_project(self, project_id: str) -> list[Agent]:
        """Project roster in creation order."""
        ...

    @abstractmethod
    async def save(self, agent: Agent) -> None: ...
