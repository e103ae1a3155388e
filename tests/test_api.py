"""Tests for the preview API routes."""

import pytest
from fastapi.testclient import TestClient

from blaster.api.main import app
from blaster.payloads import registry as registry_module
from blaster.payloads.registry import PayloadRegistry


@pytest.fixture
def client(tmp_path, compiler, monkeypatch):
    (tmp_path / "greeting.yaml").write_text(
        "payload_key: greeting\n"
        "name: Greeting\n"
        "method: POST\n"
        "path: /hello\n"
        "body:\n"
        "  who: \"{{.who}}\"\n"
        "  tag: \"{{rand_metadata_tag}}\"\n"
        "tags: [demo]\n"
    )
    monkeypatch.setattr(registry_module, "_registry", PayloadRegistry(tmp_path, compiler))
    return TestClient(app)


def test_list_payloads(client):
    response = client.get("/v1/payloads")
    assert response.status_code == 200
    assert [p["payload_key"] for p in response.json()] == ["greeting"]

    response = client.get("/v1/payloads", params={"tag": "other"})
    assert response.json() == []


def test_get_payload(client):
    assert client.get("/v1/payloads/greeting").json()["method"] == "POST"
    assert client.get("/v1/payloads/missing").status_code == 404


def test_render_payload(client):
    response = client.post(
        "/v1/payloads/greeting/render",
        json={"context": {"who": "kupo"}, "count": 3},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["count"] == 3
    assert data["method"] == "POST"
    for result in data["results"]:
        assert result["path"] == "/hello"
        assert result["body"]["who"] == "kupo"
        assert result["body"]["tag"].startswith("{")


def test_render_missing_variable_is_422(client):
    response = client.post("/v1/payloads/greeting/render", json={})
    assert response.status_code == 422
    assert "body.who" in response.json()["detail"]


def test_render_count_is_bounded(client):
    response = client.post("/v1/payloads/greeting/render", json={"count": 0})
    assert response.status_code == 422


def test_preview(client):
    response = client.post(
        "/v1/payloads/preview",
        json={"body": {"to": "addr1{{rand_string 8}}", "amount": 42}, "count": 2},
    )
    assert response.status_code == 200
    results = response.json()["results"]
    assert len(results) == 2
    assert results[0]["body"]["amount"] == 42
    assert len(results[0]["body"]["to"]) == 13


def test_preview_syntax_error_is_400(client):
    response = client.post("/v1/payloads/preview", json={"body": {"x": "{{ oops( }}"}})
    assert response.status_code == 400
    assert "body.x" in response.json()["detail"]


def test_list_functions(client):
    names = client.get("/v1/functions").json()
    assert "rand_address" in names
    assert "rand_output_ref" in names


def test_health(client):
    data = client.get("/health").json()
    assert data["status"] == "healthy"
    assert data["payloads_loaded"] == 1


def test_preview_cannot_reach_python_internals(client):
    response = client.post(
        "/v1/payloads/preview",
        json={"body": {"x": "{{ cycler.__init__.__globals__.os.popen('echo hacked').read() }}"}},
    )
    assert response.status_code in (400, 422)
    assert "hacked\n" not in response.text


def test_preview_unknown_function_is_400(client):
    response = client.post("/v1/payloads/preview", json={"body": {"to": "{{rand_adress}}"}})
    assert response.status_code == 400
    assert "rand_adress" in response.json()["detail"]


def test_preview_oversized_string_is_422(client):
    response = client.post(
        "/v1/payloads/preview",
        json={"body": {"x": "{{rand_string 1000000000}}"}},
    )
    assert response.status_code == 422
