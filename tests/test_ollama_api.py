from __future__ import annotations

import httpx
from fastapi.testclient import TestClient


def test_invalid_action_returns_400(client: TestClient, ollama):
    response = client.post("/api/ai/ollama", json={"action": "delete"})

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid action"}
    assert ollama["requests"] == []


def test_generate_action_returns_raw_upstream_body(client: TestClient, ollama):
    upstream = {"model": "mistral", "response": "raw", "done": True, "eval_count": 12}
    ollama["reply"] = httpx.Response(200, json=upstream)

    response = client.post(
        "/api/ai/ollama",
        json={"action": "generate", "prompt": "Hi", "options": {"top_p": 0.5}},
    )

    assert response.status_code == 200
    assert response.json() == upstream
    sent = ollama["requests"][0]["json"]
    assert sent["model"] == "mistral"
    assert sent["options"] == {"temperature": 0.7, "top_p": 0.5}


def test_chat_action_requires_messages(client: TestClient, ollama):
    response = client.post("/api/ai/ollama", json={"action": "chat", "model": "m"})

    assert response.status_code == 400
    assert ollama["requests"] == []


def test_chat_action_failure_keeps_upstream_status(client: TestClient, ollama):
    ollama["reply"] = httpx.Response(503, text="loading model")

    response = client.post(
        "/api/ai/ollama",
        json={"action": "chat", "messages": [{"role": "user", "content": "Hi"}]},
    )

    assert response.status_code == 503
    assert response.json() == {"error": "Ollama chat failed", "details": "loading model"}


def test_models_and_pull_actions(client: TestClient, ollama):
    ollama["reply"] = httpx.Response(200, json={"models": [{"name": "mistral:latest"}]})
    models = client.post("/api/ai/ollama", json={"action": "models"})

    ollama["reply"] = httpx.Response(200, json={"status": "success"})
    pulled = client.post("/api/ai/ollama", json={"action": "pull", "name": "mistral"})

    assert models.json() == {"models": [{"name": "mistral:latest"}]}
    assert pulled.json() == {"status": "success"}
    assert ollama["requests"][0]["method"] == "GET"
    assert ollama["requests"][0]["path"] == "/api/tags"
    assert ollama["requests"][1]["json"] == {"name": "mistral", "stream": False}


def test_status_connected(client: TestClient, ollama):
    ollama["reply"] = httpx.Response(200, json={"models": [{"name": "mistral:latest"}]})

    body = client.get("/api/ai/ollama").json()

    assert body == {
        "status": "connected",
        "ollamaUrl": "http://ollama.test",
        "models": [{"name": "mistral:latest"}],
    }


def test_status_disconnected(client: TestClient, ollama):
    ollama["reply"] = httpx.ConnectError("refused")

    response = client.get("/api/ai/ollama")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "disconnected"
    assert body["error"] == "refused"


def test_status_tolerates_non_object_model_listing(client: TestClient, ollama):
    ollama["reply"] = httpx.Response(200, json=[{"name": "mistral:latest"}])

    response = client.get("/api/ai/ollama")

    assert response.status_code == 200
    assert response.json() == {
        "status": "connected",
        "ollamaUrl": "http://ollama.test",
        "models": [],
    }


def test_non_json_upstream_body_is_bad_gateway(client: TestClient, ollama):
    ollama["reply"] = httpx.Response(200, text="<html>proxy page</html>")

    response = client.post("/api/ai/ollama", json={"action": "generate", "prompt": "Hi"})

    assert response.status_code == 502
    assert response.json() == {
        "error": "Ollama generation failed",
        "details": "<html>proxy page</html>",
    }
