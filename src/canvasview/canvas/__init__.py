from pathlib import Path
from typing import Annotated

import typer
from loguru import logger
from rich.console import Console
from rich.table import Table

from canvasview import app as main_app
from canvasview.config import (
    DEFAULT_PROXY_PREFIX,
    CanvasConfig,
    JsonFileStore,
    load_config,
    normalize_domain,
    save_config,
)
from canvasview.errors import CanvasError
from canvasview.formatting import (
    INSTRUCTIONS_MAX_LENGTH,
    format_due_date,
    format_number,
    format_points,
    html_to_text,
)

from .client import CanvasClient

SettingsOption = Annotated[
    Path | None,
    typer.Option(envvar="CANVASVIEW_SETTINGS", help="Path to the settings JSON file"),
]
DomainOption = Annotated[
    str | None,
    typer.Option(envvar="CANVAS_DOMAIN", help="Override the stored Canvas domain"),
]
TokenOption = Annotated[
    str | None,
    typer.Option(envvar="CANVAS_TOKEN", help="Override the stored access token"),
]
ProxyOption = Annotated[
    str | None,
    typer.Option(envvar="CANVAS_PROXY", help="Override the stored proxy prefix ('' to disable)"),
]


def resolve_config(
    settings: Path | None,
    domain: str | None = None,
    token: str | None = None,
    proxy: str | None = None,
) -> CanvasConfig:
    """Load the stored configuration and apply any per-run overrides.

    Overrides come from command-line options or the environment (including a
    `.env` file) and are not written back to the store.
    """
    config = load_config(JsonFileStore(settings))
    if domain is not None:
        config.domain = normalize_domain(domain)
    if token is not None:
        config.access_token = token.strip()
    if proxy is not None:
        config.proxy_prefix = proxy.strip()
    return config


# Create a local Typer app for configuration subcommands
config_app = typer.Typer(help="Manage the stored Canvas configuration")


@config_app.command("set")
def set_config(
    domain: Annotated[str, typer.Option(prompt=True, help="Canvas domain, e.g. canvas.nyu.edu")],
    token: Annotated[str, typer.Option(prompt=True, hide_input=True, help="Canvas access token")],
    proxy: Annotated[
        str, typer.Option(help="Forwarding proxy prefix; pass '' to call Canvas directly")
    ] = DEFAULT_PROXY_PREFIX,
    settings: SettingsOption = None,
) -> None:
    """Save the Canvas domain, access token, and proxy prefix."""
    save_config(JsonFileStore(settings), domain, token, proxy)
    typer.echo("Configuration saved!")


@config_app.command("show")
def show_config(settings: SettingsOption = None) -> None:
    """Print the stored configuration with the token masked."""
    store = JsonFileStore(settings)
    config = load_config(store)
    if len(config.access_token) > 4:
        masked = "*" * (len(config.access_token) - 4) + config.access_token[-4:]
    elif config.access_token:
        masked = "*" * len(config.access_token)
    else:
        masked = "(not set)"
    typer.echo(f"Settings file: {store.path}")
    typer.echo(f"Domain: {config.domain or '(not set)'}")
    typer.echo(f"Token: {masked}")
    typer.echo(f"Proxy: {config.proxy_prefix or '(none)'}")


@main_app.command("courses")
def list_courses(
    domain: DomainOption = None,
    token: TokenOption = None,
    proxy: ProxyOption = None,
    settings: SettingsOption = None,
) -> None:
    """List your active Canvas courses."""
    client = CanvasClient(resolve_config(settings, domain, token, proxy))
    try:
        courses = client.get_courses()
    except CanvasError as e:
        typer.echo(f"Loading courses failed: {e}", err=True)
        raise typer.Exit(code=1)

    if not courses:
        typer.echo("No active courses found.")
        return

    table = Table("ID", "Name", "Code")
    for course in courses:
        table.add_row(str(course.id), course.name, course.course_code or "")
    Console().print(table)


@main_app.command("assignments")
def list_assignments(
    course_id: Annotated[int, typer.Argument(help="Canvas course ID")],
    html: Annotated[
        Path | None, typer.Option(help="Write the assignment table as an HTML page to this path")
    ] = None,
    domain: DomainOption = None,
    token: TokenOption = None,
    proxy: ProxyOption = None,
    settings: SettingsOption = None,
) -> None:
    """List the assignments of a course with due dates, points, and rubrics."""
    config = resolve_config(settings, domain, token, proxy)

    if html is not None:
        from canvasview.web.controller import Controller

        controller = Controller(JsonFileStore(settings))
        controller.config = config
        controller.load_assignments(course_id, f"Course {course_id}")
        if controller.error.visible:
            typer.echo(f"Loading assignments failed: {controller.error.message}", err=True)
            raise typer.Exit(code=1)
        html.parent.mkdir(parents=True, exist_ok=True)
        html.write_text(controller.render(export=True), encoding="utf-8")
        logger.success(f"Wrote assignments for course {course_id} to {html}")
        return

    client = CanvasClient(config)
    try:
        assignments = client.get_assignments(course_id)
    except CanvasError as e:
        typer.echo(f"Loading assignments failed: {e}", err=True)
        raise typer.Exit(code=1)

    if not assignments:
        typer.echo("No assignments found.")
        return

    table = Table("Assignment", "Due", "Points", "Rubric", "Instructions")
    for assignment in assignments:
        if assignment.rubric:
            rubric = "\n".join(
                f"{c.description} ({format_number(c.points)}pts)" for c in assignment.rubric
            )
        else:
            rubric = "No rubric"
        if assignment.description:
            instructions = html_to_text(assignment.description).strip()
            if len(instructions) > INSTRUCTIONS_MAX_LENGTH:
                instructions = instructions[:INSTRUCTIONS_MAX_LENGTH] + "..."
        else:
            instructions = "No instructions"
        table.add_row(
            assignment.name,
            format_due_date(assignment),
            format_points(assignment),
            rubric,
            instructions,
        )
    Console().print(table)


# Register the config app as a subcommand with the main app
main_app.add_typer(config_app, name="config")
