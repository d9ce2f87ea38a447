"""FastAPI application serving the browser UI.

Every action is a form POST that updates the controller and redirects back to
the page, so reloading the browser never repeats a request.
"""

from fastapi import FastAPI, Form
from fastapi.responses import HTMLResponse, RedirectResponse

from canvasview.web.controller import Controller


def _back_to_page() -> RedirectResponse:
    return RedirectResponse("/", status_code=303)


def create_app(controller: Controller) -> FastAPI:
    """Build the web app around a controller."""
    app = FastAPI(title="canvasview")
    app.state.controller = controller

    @app.get("/", response_class=HTMLResponse)
    def index():
        return controller.render()

    @app.post("/config")
    def save_config(
        domain: str = Form(""),
        token: str = Form(""),
        proxy: str = Form(""),
    ):
        controller.save_config(domain, token, proxy)
        return _back_to_page()

    @app.post("/courses")
    def load_courses():
        controller.load_courses()
        return _back_to_page()

    @app.post("/courses/{course_id}/assignments")
    def load_assignments(course_id: int, name: str = Form("")):
        controller.load_assignments(course_id, name)
        return _back_to_page()

    @app.post("/back")
    def back_to_courses():
        controller.show_courses()
        return _back_to_page()

    return app
