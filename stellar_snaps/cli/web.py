"""Web server command."""

from pathlib import Path

import rich_click as click

from ._console import console


@click.command()
@click.option("--host", "-h", default="0.0.0.0", help="Host to bind to")
@click.option("--port", "-p", default=3000, help="Port to bind to")
@click.option("--reload/--no-reload", default=False, help="Auto-reload on code changes")
def web(host: str, port: int, reload: bool):
    """Start the snap service (API, registry and share pages)."""
    import subprocess
    import sys

    project_dir = Path(__file__).parent.parent.parent

    console.print(f"Starting stellar-snaps service at http://{host}:{port}")
    console.print("Press Ctrl+C to stop")

    cmd = [
        "uv",
        "run",
        "--project",
        str(project_dir),
        "--with",
        "uvicorn[standard]",
        "uvicorn",
        "stellar_snaps.web:create_app",
        "--host",
        host,
        "--port",
        str(port),
        "--factory",
    ]
    if reload:
        cmd.append("--reload")

    try:
        subprocess.run(cmd, check=True)
    except FileNotFoundError:
        console.print("[red]Error: 'uv' not found. Install with: curl -LsSf https://astral.sh/uv/install.sh | sh[/red]")
        sys.exit(1)
    except KeyboardInterrupt:
        pass
