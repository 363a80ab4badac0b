PM = {"id": "pm", "name": "Priya", "role": "Product Manager"}
LEAD = {"id": "lead", "name": "Tomas", "role": "Tech Lead", "teamId": "design"}


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}
    res = client.get("/", headers={"X-Correlation-ID": "abc-123"})
    assert res.status_code == 200
    assert res.headers["X-Correlation-ID"] == "abc-123"


class TestRoster:
    def test_create_and_list_agents(self, client, seed_project):
        seed_project(agents=[PM, LEAD], teams=["design"])
        res = client.get("/projects/saas/agents")
        assert res.status_code == 200
        agents = res.json()["agents"]
        assert [a["id"] for a in agents] == ["pm", "lead"]
        assert agents[1]["team_id"] == "design"

    def test_duplicate_project(self, client, seed_project):
        seed_project()
        res = client.post("/projects", json={"id": "saas", "name": "Again"})
        assert res.status_code == 422

    def test_unknown_project(self, client):
        assert client.get("/projects/ghost/agents").status_code == 404
        res = client.post("/projects/ghost/agents", json=PM)
        assert res.status_code == 404

    def test_agent_in_unknown_team(self, client, seed_project):
        seed_project()
        res = client.post("/projects/saas/agents", json=LEAD)
        assert res.status_code == 404

    def test_system_is_reserved(self, client, seed_project):
        seed_project()
        res = client.post(
            "/projects/saas/agents", json={"id": "system", "name": "System", "role": "Bot"}
        )
        assert res.status_code == 422

    def test_missing_fields(self, client):
        res = client.post("/projects", json={"name": "No id"})
        assert res.status_code == 400
        assert res.json()["error"] == "Validation error"


class TestConversations:
    def test_bootstrap_is_idempotent(self, client):
        body = {"scope": "team", "projectId": "saas-startup", "contextId": "design-team"}
        first = client.post("/conversations", json=body)
        second = client.post("/conversations", json=body)
        assert first.status_code == 201
        assert first.json()["id"] == "team-saas-startup-design-team"
        assert second.json()["created_at"] == first.json()["created_at"]

    def test_project_scope_rejects_context(self, client):
        res = client.post(
            "/conversations", json={"scope": "project", "projectId": "saas", "contextId": "x"}
        )
        assert res.status_code == 422
        assert res.json()["error"] == "project scope must not accept contextId"

    def test_unknown_conversation(self, client):
        assert client.get("/conversations/project-ghost/messages").status_code == 404


class TestChatEndpoint:
    def test_send_and_read_back(self, client, seed_project):
        seed_project(agents=[PM])
        res = client.post(
            "/chat",
            json={"conversationId": "project-saas", "message": {"content": "Status?"}},
        )
        assert res.status_code == 200
        body = res.json()
        assert body["authorityReason"] == "project_scope_pm_authority"
        assert body["message"]["agentId"] == "pm"
        assert body["userMessage"]["content"] == "Status?"

        history = client.get("/conversations/project-saas/messages").json()
        assert [m["messageType"] for m in history["messages"]] == ["user", "agent"]
        assert history["conversation"]["scope"] == "project"

    def test_zero_agents(self, client, seed_project):
        seed_project()
        body = client.post(
            "/chat",
            json={"conversationId": "project-saas", "message": {"content": "Anyone?"}},
        ).json()
        assert body["message"]["agentId"] is None
        assert body["fallback"] == {"type": "system", "reason": "no_agents_in_project"}

    def test_invalid_envelope(self, client):
        res = client.post("/chat", json={"conversationId": "nope", "message": {"content": "x"}})
        assert res.status_code == 400
        assert res.json()["code"] == "INVALID_ENVELOPE"

    def test_known_project_query(self, client, seed_project):
        seed_project(project_id="saas-startup", agents=[PM])
        res = client.post(
            "/chat?projectId=saas-startup",
            json={"conversationId": "project-saas-startup", "message": {"content": "Hi"}},
        )
        assert res.status_code == 200
        assert res.json()["message"]["agentId"] == "pm"
