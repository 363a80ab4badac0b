"""
Dishka DI Container Setup.

- Registers repositories, the reply generator, the invariant guard and
  command/query handlers
- Maps abstract ports to concrete implementations
- Scope.APP = one instance for the app, Scope.REQUEST = per HTTP request or
  per WebSocket frame

Flow:
  Container → InMemoryMessageRepository → as MessageRepository → SendMessageHandler
"""

from typing import Optional

from dishka import AsyncContainer, Provider, Scope, make_async_container, provide
from openai import AsyncOpenAI

from hatch_chat.application.commands.chat.send_message import SendMessageHandler
from hatch_chat.application.commands.conversations import EnsureConversationHandler
from hatch_chat.application.commands.roster import (
    CreateAgentHandler,
    CreateProjectHandler,
    CreateTeamHandler,
)
from hatch_chat.application.queries.chat import GetChatHistoryHandler
from hatch_chat.application.queries.roster import ListAgentsHandler
from hatch_chat.config.settings import Config
from hatch_chat.domain.ports.reply_generator import ReplyGenerator
from hatch_chat.domain.ports.repositories import (
    AgentRepository,
    ConversationRepository,
    MessageRepository,
    ProjectRepository,
    TeamRepository,
)
from hatch_chat.domain.services.invariants import InvariantGuard
from hatch_chat.infrastructure.llm import CannedReplyGenerator, OpenAIReplyGenerator
from hatch_chat.infrastructure.persistence import (
    InMemoryAgentRepository,
    InMemoryConversationRepository,
    InMemoryMessageRepository,
    InMemoryProjectRepository,
    InMemoryTeamRepository,
)


class AppProvider(Provider):
    """
    Application dependency provider.

    Args:
        strict: Strict mode for the invariant guard (defaults to Config.STRICT_MODE)
        reply_generator: Overrides the configured reply generator
    """

    def __init__(
        self,
        strict: Optional[bool] = None,
        reply_generator: Optional[ReplyGenerator] = None,
    ):
        super().__init__()
        self._strict = Config.STRICT_MODE if strict is None else strict
        self._reply_generator = reply_generator

    # ==================== REPOSITORIES ====================
    # APP scope: the in-memory stores must outlive a single request.

    @provide(scope=Scope.APP)
    def get_conversation_repository(self) -> ConversationRepository:
        return InMemoryConversationRepository()

    @provide(scope=Scope.APP)
    def get_message_repository(self) -> MessageRepository:
        return InMemoryMessageRepository()

    @provide(scope=Scope.APP)
    def get_project_repository(self) -> ProjectRepository:
        return InMemoryProjectRepository()

    @provide(scope=Scope.APP)
    def get_team_repository(self) -> TeamRepository:
        return InMemoryTeamRepository()

    @provide(scope=Scope.APP)
    def get_agent_repository(self) -> AgentRepository:
        return InMemoryAgentRepository()

    # ==================== SERVICES ====================

    @provide(scope=Scope.APP)
    def get_reply_generator(self) -> ReplyGenerator:
        """
        OpenAI streaming when an API key is configured, otherwise the
        deterministic canned generator.
        """
        if self._reply_generator is not None:
            return self._reply_generator
        if Config.OPENAI_KEY:
            return OpenAIReplyGenerator(
                AsyncOpenAI(api_key=Config.OPENAI_KEY),
                model=Config.OPENAI_MODEL,
                temperature=Config.OPENAI_TEMPERATURE,
                max_tokens=Config.CHAT_MAX_TOKENS,
            )
        return CannedReplyGenerator()

    @provide(scope=Scope.APP)
    def get_invariant_guard(self) -> InvariantGuard:
        return InvariantGuard(strict=self._strict)

    # ==================== HANDLERS ====================

    @provide(scope=Scope.REQUEST)
    def get_send_message_handler(
        self,
        conversation_repository: ConversationRepository,
        message_repository: MessageRepository,
        project_repository: ProjectRepository,
        team_repository: TeamRepository,
        agent_repository: AgentRepository,
        reply_generator: ReplyGenerator,
        guard: InvariantGuard,
    ) -> SendMessageHandler:
        return SendMessageHandler(
            conv_repo=conversation_repository,
            msg_repo=message_repository,
            project_repo=project_repository,
            team_repo=team_repository,
            agent_repo=agent_repository,
            reply_generator=reply_generator,
            guard=guard,
        )

    @provide(scope=Scope.REQUEST)
    def get_ensure_conversation_handler(
        self, conversation_repository: ConversationRepository
    ) -> EnsureConversationHandler:
        return EnsureConversationHandler(conversation_repository)

    @provide(scope=Scope.REQUEST)
    def get_chat_history_handler(
        self,
        conversation_repository: ConversationRepository,
        message_repository: MessageRepository,
    ) -> GetChatHistoryHandler:
        return GetChatHistoryHandler(
            conv_repo=conversation_repository,
            msg_repo=message_repository,
        )

    @provide(scope=Scope.REQUEST)
    def get_create_project_handler(
        self, project_repository: ProjectRepository
    ) -> CreateProjectHandler:
        return CreateProjectHandler(project_repository)

    @provide(scope=Scope.REQUEST)
    def get_create_team_handler(
        self, project_repository: ProjectRepository, team_repository: TeamRepository
    ) -> CreateTeamHandler:
        return CreateTeamHandler(project_repository, team_repository)

    @provide(scope=Scope.REQUEST)
    def get_create_agent_handler(
        self,
        project_repository: ProjectRepository,
        team_repository: TeamRepository,
        agent_repository: AgentRepository,
    ) -> CreateAgentHandler:
        return CreateAgentHandler(project_repository, team_repository, agent_repository)

    @provide(scope=Scope.REQUEST)
    def get_list_agents_handler(
        self, project_repository: ProjectRepository, agent_repository: AgentRepository
    ) -> ListAgentsHandler:
        return ListAgentsHandler(project_repository, agent_repository)


def create_container(
    strict: Optional[bool] = None,
    reply_generator: Optional[ReplyGenerator] = None,
) -> AsyncContainer:
    """Create the DI container. Call once per application instance."""
    return make_async_container(AppProvider(strict=strict, reply_generator=reply_generator))
