"""
Pytest fixtures for API tests
"""
import pytest
from fastapi.testclient import TestClient

from learntree.modules.workspace.state import workspace_manager
from main import create_app


@pytest.fixture
def client():
    workspace_manager.workspaces.clear()
    with TestClient(create_app()) as c:
        yield c
    workspace_manager.workspaces.clear()


@pytest.fixture
def workspace(client, sample_tree):
    """Workspace seeded with the sample tree"""
    resp = client.post(
        "/v1/workspaces",
        json={"tree": sample_tree.model_dump(by_alias=True, mode="json")},
    )
    assert resp.status_code == 201
    return resp.json()


@pytest.fixture
def base(workspace):
    return f"/v1/workspaces/{workspace['id']}"
