"""
Dashboard API tests.
"""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from leakage_dashboard.agents.channel import AgentControlChannel, AgentControlError
from leakage_dashboard.api import main


@pytest.fixture
def channel(monkeypatch):
    mock_channel = AsyncMock(spec=AgentControlChannel)
    monkeypatch.setattr(main.proposal_applier, "channel", mock_channel)
    monkeypatch.setattr(main.mission_control, "channel", mock_channel)
    return mock_channel


@pytest.fixture
def client(channel):
    main.dashboard_state.reset()
    main.dashboard_state.applying_proposal_ids.clear()
    with TestClient(main.app) as test_client:
        yield test_client
    main.dashboard_state.reset()


def post_event(client, tool_name, params=None):
    body = {"toolName": tool_name}
    if params is not None:
        body["params"] = params
    return client.post("/events", json=body)


class TestEvents:
    """Test the /events endpoint."""

    def test_findings_event(self, client):
        """Test a findings event reaching the dashboard snapshot."""
        response = post_event(client, "agent_v2.update_findings", {
            "findings": [{"id": "f1", "title": "Gap", "impact": {"amount": 1200, "currency": "usd"}}],
        })
        assert response.status_code == 200
        assert response.json() == {"success": True}

        findings = client.get("/dashboard").json()["findings"]
        assert findings == [{
            "id": "f1",
            "title": "Gap",
            "impactAmount": 1200,
            "impactCurrency": "USD",
            "impactText": "USD 1,200",
            "raw": {"id": "f1", "title": "Gap", "impact": {"amount": 1200, "currency": "usd"}},
        }]

    def test_unknown_tool_is_acknowledged(self, client):
        """Test that an unknown tool is acknowledged."""
        response = post_event(client, "brand_new_tool", {"anything": [1, 2]})
        assert response.status_code == 200
        assert response.json() == {"success": True}

    def test_non_mapping_params_are_acknowledged(self, client):
        """Test that non-mapping params are acknowledged and ignored."""
        response = post_event(client, "update_findings", ["not", "a", "mapping"])
        assert response.json() == {"success": True}
        assert client.get("/dashboard").json()["findings"] == []

    def test_reset_event(self, client):
        """Test that a reset event clears collections and mission."""
        post_event(client, "update_trace", {"trace": [{"label": "one"}]})
        post_event(client, "set_mission", {"mission": {"type": "custom"}})
        post_event(client, "reset_dashboard")

        snapshot = client.get("/dashboard").json()
        assert snapshot["trace"] == []
        assert snapshot["mission"] is None
        assert snapshot["missionSummary"] is None

    def test_missing_tool_name_is_acknowledged(self, client):
        """Test that an event without a tool name is still acknowledged."""
        response = client.post("/events", json={"params": {}})
        assert response.status_code == 200
        assert response.json() == {"success": True}

    def test_non_string_tool_name_is_acknowledged(self, client):
        """Test that a non-string tool name is acknowledged without changing state."""
        response = client.post("/events", json={"toolName": 5, "params": {"findings": [{"id": "f1"}]}})
        assert response.status_code == 200
        assert response.json() == {"success": True}
        assert client.get("/dashboard").json()["findings"] == []


class TestMissions:
    """Test mission endpoints."""

    def test_definitions(self, client):
        """Test listing mission definitions."""
        values = [d["value"] for d in client.get("/missions/definitions").json()]
        assert values == ["plan_vs_invoice", "missing_invoice", "revenue_leakage_overview", "custom"]

    def test_launch(self, client, channel):
        """Test launching a mission."""
        post_event(client, "update_findings", {"findings": [{"id": "old"}]})

        response = client.post("/missions", json={
            "missionType": "plan_vs_invoice", "planId": " PLAN-1 ", "currency": "usd", "notes": "  ",
        })

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["briefSent"] is True
        assert data["missionSummary"]["title"] == "Plan vs Invoice Mismatch"

        snapshot = client.get("/dashboard").json()
        assert snapshot["findings"] == []
        assert snapshot["mission"] == {"missionType": "plan_vs_invoice", "planId": "PLAN-1", "currency": "USD"}
        channel.send_user_message.assert_awaited_once()

    def test_launch_rejects_unknown_mission_type(self, client):
        """Test launch validation of the mission type."""
        assert client.post("/missions", json={"missionType": "fraud_hunt"}).status_code == 422

    def test_launch_rejects_bad_currency(self, client):
        """Test launch validation of the currency code."""
        response = client.post("/missions", json={"missionType": "custom", "currency": "dollars"})
        assert response.status_code == 422

    def test_reset(self, client):
        """Test resetting the mission."""
        client.post("/missions", json={"missionType": "custom"})
        assert client.post("/missions/reset").json() == {"success": True}
        assert client.get("/dashboard").json()["mission"] is None


class TestProposals:
    """Test proposal application endpoints."""

    def test_apply(self, client, channel):
        """Test applying a proposal."""
        post_event(client, "update_proposals", {"proposals": [{"id": "p1", "type": "make good", "title": "Bill April"}]})

        response = client.post("/proposals/p1/apply")

        assert response.status_code == 200
        assert response.json() == {"success": True, "proposalId": "p1"}
        audit = client.get("/dashboard").json()["auditLog"]
        assert audit[-1]["actor"] == "Operator"
        assert audit[-1]["action"] == "Apply make_good_invoice"
        assert audit[-1]["details"] == "Bill April"
        sent = channel.send_custom_action.await_args.args[0]
        assert sent["payload"]["proposalId"] == "p1"

    def test_apply_failure(self, client, channel):
        """Test a failed apply."""
        channel.send_custom_action.side_effect = AgentControlError("offline")
        post_event(client, "update_proposals", {"proposals": [{"id": "p1"}]})

        response = client.post("/proposals/p1/apply")

        assert response.json() == {"success": False, "proposalId": "p1"}
        snapshot = client.get("/dashboard").json()
        assert snapshot["auditLog"] == []
        assert snapshot["applyingProposalIds"] == []

    def test_apply_unknown(self, client):
        """Test applying an unknown proposal."""
        assert client.post("/proposals/nope/apply").status_code == 404

    def test_apply_in_flight(self, client):
        """Test applying a proposal that is already in flight."""
        post_event(client, "update_proposals", {"proposals": [{"id": "p1"}]})
        main.dashboard_state.applying_proposal_ids.add("p1")
        assert client.post("/proposals/p1/apply").status_code == 409


class TestHealth:
    """Test the health endpoint."""

    def test_health(self, client):
        """Test health check response."""
        post_event(client, "update_findings", {"findings": [{"id": "f1"}]})
        data = client.get("/health").json()
        assert data["agentChannel"] is True
        assert data["counts"]["findings"] == 1
        assert data["version"]
