#!/usr/bin/env python
"""Tests for the FastAPI routes."""

import pytest
from fastapi.testclient import TestClient

from canvasview.canvas.assignment import Assignment
from canvasview.canvas.course import Course
from canvasview.web.app import create_app
from canvasview.web.controller import Controller, ViewState


class StubClient:
    def __init__(self, config):
        self.config = config

    def get_courses(self):
        return [Course(5, "Biology", "BIO 101")]

    def get_assignments(self, course_id):
        return [Assignment(id=1, name="Lab report", points_possible=15.0)]


@pytest.fixture
def controller(store):
    return Controller(store, client_factory=StubClient)


@pytest.fixture
def client(controller):
    """FastAPI test client."""
    return TestClient(create_app(controller))


class TestRoutes:
    """Test the page and action endpoints."""

    def test_index(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]
        assert 'id="courses-section"' in response.text

    def test_actions_redirect_to_page(self, client):
        response = client.post("/courses", follow_redirects=False)
        assert response.status_code == 303
        assert response.headers["location"] == "/"

    def test_save_config(self, client, controller, store):
        response = client.post(
            "/config",
            data={"domain": "http://canvas.example.edu", "token": "tok", "proxy": ""},
        )
        assert response.status_code == 200
        assert "Configuration saved!" in response.text
        assert store.get("canvasDomain") == "canvas.example.edu"
        assert controller.config.access_token == "tok"

    def test_course_then_assignments_then_back(self, client, controller):
        page = client.post("/courses").text
        assert "Biology" in page

        page = client.post("/courses/5/assignments", data={"name": "Biology"}).text
        assert controller.view is ViewState.ASSIGNMENT_TABLE
        assert '<h2 id="selected-course-name">Biology</h2>' in page
        assert "Lab report" in page
        assert "<td>15</td>" in page

        client.post("/back")
        assert controller.view is ViewState.COURSE_LIST
