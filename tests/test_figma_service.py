import pytest
import requests

from errors import (
    FigmaResourceError,
    InvalidFigmaTokenError,
    ResourceAccessDeniedError,
    ResourceNotFoundError,
    TransportError,
)
from Services.figma_service import load_figma_token


def test_request_sends_token_and_decodes_json(client, session):
    session.add("/files/ABC", {"name": "File"})

    assert client.get_file("ABC") == {"name": "File"}
    call = session.calls[0]
    assert call["headers"] == {"X-Figma-Token": "test-token"}
    assert call["timeout"] == 5


def test_nodes_and_search_pass_query_params(client, session):
    session.add("/files/ABC/nodes", {"nodes": {}})
    session.add("/search", {"files": []})

    client.get_file_nodes("ABC", "1:2,1:3")
    client.search_files("hero & footer")

    assert session.calls[0]["params"] == {"ids": "1:2,1:3"}
    assert session.calls[1]["params"] == {"query": "hero & footer"}


def test_not_found_maps_to_resource_not_found(client):
    with pytest.raises(ResourceNotFoundError):
        client.get_file("missing")


def test_forbidden_maps_to_access_denied(client, session):
    session.add("/files/secret", {"status": 403}, status_code=403, reason="Forbidden")
    with pytest.raises(ResourceAccessDeniedError):
        client.get_file("secret")


def test_other_failures_carry_upstream_status_text(client, session):
    session.add("/files/ABC", {"status": 429}, status_code=429, reason="Too Many Requests")
    with pytest.raises(TransportError) as excinfo:
        client.get_file("ABC")

    assert excinfo.value.status_code == 429
    assert excinfo.value.reason == "Too Many Requests"
    assert "Too Many Requests" in str(excinfo.value)
    # no retries
    assert len(session.calls) == 1


def test_connection_errors_become_transport_errors(client, session):
    session.fail("/me/files", requests.ConnectionError("connection refused"))
    with pytest.raises(TransportError) as excinfo:
        client.list_my_files()
    assert excinfo.value.status_code is None


class HtmlBodyResponse:
    status_code = 200
    reason = "OK"
    ok = True

    def json(self):
        raise requests.JSONDecodeError("Expecting value", "<html>proxy</html>", 0)


def test_non_json_success_body_becomes_transport_error(client, session):
    session.routes["/files/ABC"] = HtmlBodyResponse()

    with pytest.raises(TransportError) as excinfo:
        client.get_file("ABC")

    assert excinfo.value.status_code == 200
    assert "invalid JSON" in str(excinfo.value)


def test_non_json_body_is_reported_by_read(handler, session):
    session.routes["/files/ABC"] = HtmlBodyResponse()

    with pytest.raises(FigmaResourceError):
        handler.read("figma:///file/ABC")


def test_collection_path(client, session):
    session.add("/files/ABC/variables/local", {"meta": {"variables": {}}})
    assert client.get_file_collection("ABC", "variables/local") == {"meta": {"variables": {}}}


def test_load_token_prefers_access_token(monkeypatch):
    monkeypatch.setenv("FIGMA_ACCESS_TOKEN", "primary")
    monkeypatch.setenv("FIGMA_TOKEN", "fallback")
    assert load_figma_token() == "primary"


def test_load_token_falls_back_to_figma_token(monkeypatch):
    monkeypatch.delenv("FIGMA_ACCESS_TOKEN", raising=False)
    monkeypatch.setenv("FIGMA_TOKEN", "fallback")
    assert load_figma_token() == "fallback"


def test_missing_token_raises(monkeypatch):
    monkeypatch.delenv("FIGMA_ACCESS_TOKEN", raising=False)
    monkeypatch.delenv("FIGMA_TOKEN", raising=False)
    with pytest.raises(InvalidFigmaTokenError):
        load_figma_token()
