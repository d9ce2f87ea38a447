"""Module to fetch courses and assignments from the Canvas REST API."""

from collections.abc import Callable
from typing import Any, TypeVar
from urllib.parse import quote

import requests
from loguru import logger

from canvasview.canvas.assignment import Assignment
from canvasview.canvas.course import Course
from canvasview.config import CanvasConfig
from canvasview.errors import AuthError, ConfigurationError, ForbiddenError, RequestError

# Characters encodeURIComponent leaves alone in addition to quote()'s defaults
_URI_COMPONENT_SAFE = "!*'()"

T = TypeVar("T")

COURSES_ENDPOINT = "/courses?enrollment_state=active&per_page=100"
ASSIGNMENTS_ENDPOINT = "/courses/{course_id}/assignments?per_page=100&include[]=rubric"


def _parse_records(data: Any, parse: Callable[[dict], T], what: str) -> list[T]:
    """Map a JSON list of records to model objects.

    Raises:
        RequestError: If the body is not a list of records in the expected shape.
    """
    if not isinstance(data, list):
        raise RequestError(f"API request failed: unexpected response for {what}")
    try:
        return [parse(record) for record in data]
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise RequestError(f"API request failed: unexpected response for {what} ({e})") from e


class CanvasClient:
    """Client for the Canvas REST API.

    Requests can be routed through a forwarding proxy, which is what the
    browser UI needs to get around cross-origin restrictions. There is no
    retry logic: every failure is raised to the caller as a `CanvasError`.
    """

    def __init__(self, config: CanvasConfig, session: requests.Session | None = None):
        """Initializes the CanvasClient."""
        self.config = config
        if session is not None:
            self.session = session
        else:
            self.session = requests.Session()

    def build_url(self, endpoint: str) -> str:
        """Build the URL to request for an API endpoint.

        Args:
            endpoint: Path under `/api/v1`, including any query string

        Returns:
            The upstream URL, or the proxy prefix followed by the
            percent-encoded upstream URL when a proxy is configured.
        """
        canvas_url = f"https://{self.config.domain}/api/v1{endpoint}"
        if self.config.proxy_prefix:
            return self.config.proxy_prefix + quote(canvas_url, safe=_URI_COMPONENT_SAFE)
        return canvas_url

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.config.access_token}",
            # Some proxies refuse requests without this header
            "X-Requested-With": "XMLHttpRequest",
        }

    def request(self, endpoint: str) -> Any:
        """Make an authenticated GET request and return the decoded JSON body.

        Args:
            endpoint: Path under `/api/v1`, including any query string

        Raises:
            ConfigurationError: If the domain or access token is missing.
            AuthError: If Canvas rejects the token (HTTP 401).
            ForbiddenError: If the proxy or Canvas refuses the request (HTTP 403).
            RequestError: On any other failure.
        """
        if not self.config.is_complete:
            raise ConfigurationError(
                "Please configure your Canvas domain and access token first."
            )

        url = self.build_url(endpoint)
        logger.debug(f"GET {url}")
        try:
            response = self.session.get(url, headers=self._headers())
        except requests.RequestException as e:
            logger.error(f"Request to {self.config.domain} failed: {e}")
            raise RequestError(f"API request failed: {e}") from e

        if not response.ok:
            status = response.status_code
            logger.warning(f"GET {endpoint} returned {status} {response.reason}")
            if status == 401:
                raise AuthError("Invalid access token. Please check your token and try again.")
            if status == 403:
                raise ForbiddenError(
                    "Access forbidden. The CORS proxy may be blocking the request, "
                    "or your token lacks permissions."
                )
            raise RequestError(f"API request failed: {status} {response.reason}", status=status)

        try:
            return response.json()
        except ValueError as e:
            raise RequestError(f"API request failed: invalid JSON in response ({e})") from e

    def get_courses(self) -> list[Course]:
        """Fetch the first page (up to 100) of the user's active courses."""
        data = self.request(COURSES_ENDPOINT)
        courses = _parse_records(data, Course.from_dict, "courses")
        logger.info(f"Fetched {len(courses)} active courses")
        return courses

    def get_assignments(self, course_id: int | str) -> list[Assignment]:
        """Fetch the first page (up to 100) of a course's assignments, with rubrics.

        Args:
            course_id: The Canvas course ID

        Returns:
            list[Assignment]: Assignments in the order Canvas returns them.
        """
        data = self.request(ASSIGNMENTS_ENDPOINT.format(course_id=course_id))
        assignments = _parse_records(data, Assignment.from_dict, "assignments")
        logger.info(f"Fetched {len(assignments)} assignments for course {course_id}")
        return assignments
