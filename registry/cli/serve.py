#!/usr/bin/env python
"""
Run the webhook server.

Usage:
    registry-serve [--host HOST] [--port PORT]
"""

from typing import Optional

import typer
import uvicorn

from registry.cli.base import setup_script_environment
from registry.lib.config_manager import config

app = typer.Typer(help="Serve the registry webhook API")


@app.command()
def main(
    host: str = typer.Option("0.0.0.0", "--host", help="Bind address"),
    port: Optional[int] = typer.Option(None, "--port", help="Listen port (default: PORT)"),
):
    """Start uvicorn with the FastAPI app."""
    setup_script_environment("webhook")
    uvicorn.run(
        "registry.api.main:app",
        host=host,
        port=port or config.get("PORT"),
        log_config=None,
    )


if __name__ == "__main__":
    app()
