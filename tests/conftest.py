import pytest
from fastapi.testclient import TestClient

from hatch_chat.domain.entities.agent import Agent
from hatch_chat.fastapi_app import create_fastapi_app
from hatch_chat.infrastructure.llm import CannedReplyGenerator
from hatch_chat.setup.ioc import create_container


def make_agent(agent_id, role, name=None, project_id="saas", team_id=None, is_team_lead=False):
    return Agent(
        id=agent_id,
        name=name or agent_id.capitalize(),
        role=role,
        project_id=project_id,
        team_id=team_id,
        is_team_lead=is_team_lead,
    )


@pytest.fixture()
def dev():
    return make_agent("dev", "Software Engineer", name="Dana")


@pytest.fixture()
def pm():
    return make_agent("pm", "Product Manager", name="Priya")


@pytest.fixture()
def designer():
    return make_agent("designer", "Product Designer", name="Dimitri")


@pytest.fixture()
def tech_lead():
    return make_agent("tech-lead", "Tech Lead", name="Tomas", team_id="design")


@pytest.fixture()
def strict():
    """Override in a test module to run the app in production mode."""
    return True


@pytest.fixture()
def app(strict):
    """Create a new FastAPI app with a fresh DI container for each test."""
    container = create_container(strict=strict, reply_generator=CannedReplyGenerator())
    return create_fastapi_app(strict=strict, container=container)


@pytest.fixture()
def client(app):
    """A test client for the FastAPI app."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def seed_project(client):
    """Create a project with the given agents through the roster API."""

    def _seed(project_id="saas", agents=(), teams=()):
        res = client.post("/projects", json={"id": project_id, "name": project_id.title()})
        assert res.status_code == 201, res.text
        for team_id in teams:
            res = client.post(
                f"/projects/{project_id}/teams", json={"id": team_id, "name": team_id.title()}
            )
            assert res.status_code == 201, res.text
        for agent in agents:
            res = client.post(f"/projects/{project_id}/agents", json=agent)
            assert res.status_code == 201, res.text

    return _seed
