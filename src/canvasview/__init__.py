"""Top-level package for canvasview."""

import typer
from dotenv import load_dotenv

app = typer.Typer(help="Browse Canvas courses and assignments")


@app.callback()
def main() -> None:
    """Browse Canvas courses and assignments."""
    # Runs before subcommand options are parsed, so CANVAS_* values in a
    # .env file are picked up as option defaults
    load_dotenv()


# Import submodules at the end to register their commands
from canvasview import (  # noqa: E402
    canvas,  # noqa: F401
    web,  # noqa: F401
)

if __name__ == "__main__":
    app()
