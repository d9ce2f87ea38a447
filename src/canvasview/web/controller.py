"""State and rendering for the two-screen course/assignment UI.

The controller owns everything the page shows. Load operations update state
only; `render()` turns the current state into HTML. Exactly one of the two
sections is visible at a time, selected by `ViewState`.

Loads run synchronously inside the request that triggers them, and the page
is rendered after they finish. The loading indicator is therefore only seen
by other page views rendered while a load is in flight, never by the user who
started it.
"""

import threading
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape
from loguru import logger

from canvasview.canvas.client import CanvasClient
from canvasview.canvas.course import Course
from canvasview.config import CanvasConfig, JsonFileStore, load_config, save_config
from canvasview.errors import CanvasError
from canvasview.formatting import AssignmentRow, assignment_row

_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"


class ViewState(Enum):
    COURSE_LIST = "courses"
    ASSIGNMENT_TABLE = "assignments"


@dataclass
class Notice:
    """A transient message shown once on the next render."""

    message: str
    kind: str = "info"


class ErrorBanner:
    """User-visible error message area."""

    def __init__(self):
        self.message = ""
        self.visible = False

    def show(self, message: str) -> None:
        self.message = message
        self.visible = True

    def hide(self) -> None:
        self.visible = False


class LoadingIndicator:
    def __init__(self):
        self.visible = False

    def show(self) -> None:
        self.visible = True

    def hide(self) -> None:
        self.visible = False


def _get_env() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(_TEMPLATES_DIR)),
        autoescape=select_autoescape(["html", "xml"]),
    )


class Controller:
    """Drives the course list and assignment table views.

    Attributes:
        store: Persistent key-value store holding the configuration
        config: The current configuration, replaced on every save
        view: Which of the two sections is visible
        courses: Loaded courses; None until the first successful load
        course_name: Heading of the assignment table
        rows: Formatted rows of the assignment table
        error: The error banner
        loading: The loading indicator
    """

    def __init__(
        self,
        store: JsonFileStore,
        client_factory: Callable[[CanvasConfig], CanvasClient] = CanvasClient,
    ):
        self.store = store
        self.client_factory = client_factory
        self.config = load_config(store)
        self.view = ViewState.COURSE_LIST
        self.courses: list[Course] | None = None
        self.course_name = ""
        self.rows: list[AssignmentRow] = []
        self.error = ErrorBanner()
        self.loading = LoadingIndicator()
        self.notices: deque[Notice] = deque()
        self._busy = threading.Lock()

    def notify(self, message: str, kind: str = "info") -> None:
        """Queue a non-blocking notification for the next render."""
        self.notices.append(Notice(message, kind))

    def save_config(self, domain: str, token: str, proxy_prefix: str) -> CanvasConfig:
        """Persist new settings and use them for subsequent requests."""
        self.config = save_config(self.store, domain, token, proxy_prefix)
        self.notify("Configuration saved!", "success")
        return self.config

    def _begin_load(self, what: str) -> bool:
        # A second load while one is in flight is dropped rather than queued
        if not self._busy.acquire(blocking=False):
            logger.warning(f"Ignoring request to load {what}: another load is in progress")
            self.notify("Still loading, please wait.")
            return False
        self.loading.show()
        self.error.hide()
        return True

    def _end_load(self) -> None:
        self.loading.hide()
        self._busy.release()

    def load_courses(self) -> None:
        """Fetch active courses and show them as cards."""
        if not self._begin_load("courses"):
            return
        self.courses = None
        try:
            self.courses = self.client_factory(self.config).get_courses()
        except CanvasError as e:
            logger.error(f"Failed to load courses: {e}")
            self.error.show(str(e))
        except Exception as e:
            logger.exception(f"Unexpected error loading courses: {e}")
            self.error.show(f"Unexpected error: {e}")
        finally:
            self._end_load()

    def load_assignments(self, course_id: int | str, course_name: str) -> None:
        """Fetch a course's assignments and switch to the assignment table."""
        if not self._begin_load(f"assignments for course {course_id}"):
            return
        self.rows = []
        self.course_name = course_name
        try:
            assignments = self.client_factory(self.config).get_assignments(course_id)
            self.rows = [assignment_row(a) for a in assignments]
            self.view = ViewState.ASSIGNMENT_TABLE
        except CanvasError as e:
            logger.error(f"Failed to load assignments for course {course_id}: {e}")
            self.error.show(str(e))
        except Exception as e:
            logger.exception(f"Unexpected error loading assignments for course {course_id}: {e}")
            self.error.show(f"Unexpected error: {e}")
        finally:
            self._end_load()

    def show_courses(self) -> None:
        """Go back to the course list without fetching anything."""
        self.view = ViewState.COURSE_LIST

    def render(self, export: bool = False) -> str:
        """Render the full page for the current state, consuming pending notices.

        With `export`, the settings form and all action forms are left out, so
        the page can be saved as a static file without the access token.
        """
        notices = list(self.notices)
        self.notices.clear()
        template = _get_env().get_template("index.html")
        return template.render(
            config=None if export else self.config,
            view=self.view.value,
            courses=self.courses,
            course_name=self.course_name,
            rows=self.rows,
            error=self.error,
            loading=self.loading,
            notices=notices,
            export=export,
        )
