"""
ListAgents Query - project roster in roster order.
"""

from dataclasses import dataclass

from hatch_chat.application.common.interfaces import Query, QueryHandler
from hatch_chat.domain.entities.agent import Agent
from hatch_chat.domain.exceptions import EntityNotFoundError
from hatch_chat.domain.ports.repositories import AgentRepository, ProjectRepository


@dataclass(frozen=True)
class ListAgentsQuery(Query[list[Agent]]):
    project_id: str


class ListAgentsHandler(QueryHandler[list[Agent]]):
    def __init__(self, project_repo: ProjectRepository, agent_repo: AgentRepository):
        self._project_repo = project_repo
        self._agent_repo = agent_repo

    async def execute(self, query: ListAgentsQuery) -> list[Agent]:
        if not await self._project_repo.get_by_id(query.project_id):
            raise EntityNotFoundError(f"Project {query.project_id} not found")
        return await self._agent_repo.get_by_project(query.project_id)
