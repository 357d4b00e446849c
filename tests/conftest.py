"""
Shared fixtures: an in-memory stand-in for requests.Session so the Figma
client can be exercised without network access.
"""
import logging

import pytest

from Services.figma_service import FigmaClient
from Services.resource_gateway import FigmaResourceHandler

BASE_URL = "https://api.figma.test/v1"


class FakeResponse:
    def __init__(self, status_code=200, payload=None, reason="OK"):
        self.status_code = status_code
        self.reason = reason
        self._payload = payload

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def json(self):
        return self._payload


class FakeSession:
    """Maps request paths (relative to BASE_URL) to canned responses."""

    def __init__(self):
        self.routes = {}
        self.calls = []

    def add(self, path, payload=None, status_code=200, reason="OK"):
        self.routes[path] = FakeResponse(status_code, payload, reason)

    def fail(self, path, exc):
        self.routes[path] = exc

    def get(self, url, headers=None, params=None, timeout=None):
        path = url[len(BASE_URL):]
        self.calls.append({"path": path, "params": params, "headers": headers, "timeout": timeout})
        route = self.routes.get(path)
        if isinstance(route, Exception):
            raise route
        return route or FakeResponse(404, {"status": 404, "err": "Not found"}, "Not Found")


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def client(session):
    return FigmaClient("test-token", base_url=BASE_URL, timeout=5, session=session)


@pytest.fixture
def handler(client):
    return FigmaResourceHandler(client, logger=logging.getLogger("figma_resources.test"))


@pytest.fixture
def figma_file():
    return {
        "name": "Landing Page",
        "version": "1234",
        "lastModified": "2024-01-01T00:00:00Z",
        "thumbnailUrl": "https://example.com/thumb.png",
        "role": "owner",
        "schemaVersion": 0,
        "document": {
            "id": "0:0",
            "name": "Document",
            "type": "DOCUMENT",
            "children": [
                {
                    "id": "0:1",
                    "name": "Page 1",
                    "type": "CANVAS",
                    "backgroundColor": {"r": 1, "g": 1, "b": 1, "a": 1},
                    "children": [
                        {
                            "id": "1:2",
                            "name": "Hero",
                            "type": "FRAME",
                            "absoluteBoundingBox": {"x": 0, "y": 0, "width": 1440, "height": 900},
                            "children": [
                                {
                                    "id": "1:3",
                                    "name": "Title",
                                    "type": "TEXT",
                                    "characters": "Welcome",
                                    "style": {
                                        "fontFamily": "Inter",
                                        "fontSize": 48,
                                        "fontWeight": 700,
                                        "lineHeight": {"value": 56, "unit": "PIXELS"},
                                    },
                                    "absoluteBoundingBox": {"x": 80, "y": 120, "width": 600, "height": 56},
                                }
                            ],
                        }
                    ],
                }
            ],
        },
    }
