from pathlib import Path
from typing import Annotated

import typer
import uvicorn
from loguru import logger

from canvasview import app as main_app
from canvasview.config import JsonFileStore

from .app import create_app
from .controller import Controller


@main_app.command("serve")
def serve(
    host: Annotated[str, typer.Option(help="Interface to listen on")] = "127.0.0.1",
    port: Annotated[int, typer.Option(help="Port to listen on")] = 8000,
    settings: Annotated[
        Path | None,
        typer.Option(envvar="CANVASVIEW_SETTINGS", help="Path to the settings JSON file"),
    ] = None,
) -> None:
    """Run the course and assignment browser as a local web app."""
    store = JsonFileStore(settings)
    logger.info(f"Using settings from {store.path}")
    app = create_app(Controller(store))
    typer.echo(f"Open http://{host}:{port}/ in your browser.")
    uvicorn.run(app, host=host, port=port)
