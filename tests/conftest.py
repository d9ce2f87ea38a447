"""Shared fixtures for canvasview tests."""

import json

import pytest
import requests

from canvasview.config import JsonFileStore


@pytest.fixture
def store(tmp_path):
    """A settings store in a temporary directory."""
    return JsonFileStore(tmp_path / "settings.json")


@pytest.fixture
def make_response():
    """Build a real requests.Response with the given status and body."""

    def _make(status: int = 200, body=None, reason: str = "OK", raw: bytes | None = None):
        response = requests.Response()
        response.status_code = status
        response.reason = reason
        response.encoding = "utf-8"
        response._content = raw if raw is not None else json.dumps(body).encode("utf-8")
        return response

    return _make
