import json

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine

from plotpad.api.dependencies import get_sheet_service, get_chart_pipeline
from plotpad.server import app

CSV = "x,y\n1,2\n3,4\n5,6"


@pytest.fixture
def client(sheet_service, pipeline):
    app.dependency_overrides[get_sheet_service] = lambda: sheet_service
    app.dependency_overrides[get_chart_pipeline] = lambda: pipeline
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def create_sheet(client, name=None, content=None):
    sheet = client.post("/sheets", json={"name": name}).json()
    if content is not None:
        sheet = client.put(f"/sheets/{sheet['id']}/content", json={"content": content}).json()
    return sheet


def test_health_check(tmp_path, mocker):
    engine = create_engine(f"sqlite:///{tmp_path / 'health.db'}")
    mocker.patch("plotpad.server.get_db_engine", return_value=engine)
    response = TestClient(app).get("/health")
    assert response.status_code == 200
    assert response.json()["database"] == "connected"


def test_create_and_fetch_sheet(client):
    response = client.post("/sheets", json={})
    assert response.status_code == 201
    assert response.json()["name"] == "Untitled 1"
    assert client.get("/sheets/1").json()["id"] == 1
    assert client.get("/sheets/2").status_code == 404


def test_rename_tag_and_search(client):
    sheet = create_sheet(client, "Budget")
    client.patch(f"/sheets/{sheet['id']}", json={"name": "Budget 2024"})
    client.post(f"/sheets/{sheet['id']}/tags", json={"tag": "finance"})
    create_sheet(client, "Notes")

    assert [s["name"] for s in client.get("/sheets", params={"q": "FIN"}).json()] == ["Budget 2024"]
    assert len(client.get("/sheets").json()) == 2

    response = client.delete(f"/sheets/{sheet['id']}/tags/finance")
    assert response.json()["tags"] == []
    assert client.patch(f"/sheets/{sheet['id']}", json={"name": " "}).status_code == 422


def test_lock_unlock_flow(client):
    sheet = create_sheet(client, content=CSV)
    locked = client.post(f"/sheets/{sheet['id']}/lock", json={"password": "pw"}).json()
    assert locked["is_encrypted"] is True
    assert locked["content"] != CSV
    assert "vault_ref" not in locked

    assert client.post(f"/sheets/{sheet['id']}/unlock", json={"password": "bad"}).status_code == 403
    unlocked = client.post(f"/sheets/{sheet['id']}/unlock", json={"password": "pw"})
    assert unlocked.json() == {"content": CSV}

    edit = client.put(f"/sheets/{sheet['id']}/content", json={"content": "a\n1"})
    assert edit.status_code == 409


def test_unlock_with_missing_record(client, secret_store):
    sheet = create_sheet(client, content=CSV)
    client.post(f"/sheets/{sheet['id']}/lock", json={"password": "pw"})
    for key in secret_store.keys():
        secret_store.delete(key)
    assert client.post(f"/sheets/{sheet['id']}/unlock", json={"password": "pw"}).status_code == 409


def test_relock_and_delete(client, secret_store):
    sheet = create_sheet(client, content=CSV)
    client.post(f"/sheets/{sheet['id']}/lock", json={"password": "pw"})
    response = client.post(
        f"/sheets/{sheet['id']}/relock",
        json={"password": "pw", "new_password": "pw2", "content": "a,b\n1,1"}
    )
    assert response.status_code == 200
    assert client.post(f"/sheets/{sheet['id']}/unlock", json={"password": "pw2"}).json()["content"] == "a,b\n1,1"
    assert client.post(f"/sheets/{sheet['id']}/relock", json={"password": "pw"}).status_code == 403

    assert client.delete(f"/sheets/{sheet['id']}").status_code == 204
    assert secret_store.keys() == []
    assert client.get(f"/sheets/{sheet['id']}").status_code == 404


def test_sheet_charts(client, mock_text_service):
    mock_text_service.complete.return_value = json.dumps([{"kind": "scatter", "x": "x", "y": "y"}])
    sheet = create_sheet(client, content=CSV)
    response = client.post(f"/sheets/{sheet['id']}/charts")
    assert response.status_code == 200
    body = response.json()
    assert body["recommendations"] == 1
    assert body["charts"][0]["spec"]["points"] == [[1.0, 2.0], [3.0, 4.0], [5.0, 6.0]]


def test_locked_sheet_charts_need_password(client):
    sheet = create_sheet(client, content=CSV)
    client.post(f"/sheets/{sheet['id']}/lock", json={"password": "pw"})
    assert client.post(f"/sheets/{sheet['id']}/charts").status_code == 422
    assert client.post(f"/sheets/{sheet['id']}/charts", json={"password": "bad"}).status_code == 403
    response = client.post(f"/sheets/{sheet['id']}/charts", json={"password": "pw"})
    assert response.json()["charts"][0]["kind"] == "histogram"


def test_preview_charts(client, mock_text_service):
    mock_text_service.complete.return_value = "no json here"
    response = client.post("/charts/preview", json={"csv": CSV})
    assert response.status_code == 200
    chart, = response.json()["charts"]
    assert chart["title"] == "x distribution"
    assert client.post("/charts/preview", json={"csv": "  "}).status_code == 422


def test_preview_all_categorical(client):
    response = client.post("/charts/preview", json={"csv": "a,b\nx,y\nz,w"})
    assert response.json() == {"charts": [], "recommendations": 0}


def test_analyze_and_capabilities(client):
    analysis = client.post("/charts/analyze", json={"csv": CSV}).json()
    assert analysis["profile"]["numeric_columns"] == ["x", "y"]
    capabilities = client.get("/charts/capabilities").json()
    assert "radar" in capabilities["supported_chart_types"]
