"""CLI principal (Typer).

Uso:
- `xlts-download TOKEN`
- `python main.py TOKEN`

Descarga todos los tarballs de XLTS for AngularJS a `tarballs/` y los
extrae en `packages/`, ambos junto al proyecto o, si está instalado, en el directorio actual
(ver `AppSettings.workspace_dir`).
"""

from __future__ import annotations

import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, TaskID

from adapters.http_client import build_client
from adapters.registry_client import RegistryClient
from cli.ui_components import (
    build_download_progress,
    build_plan_panel,
    print_header,
    print_report,
)
from core.config import ANGULAR_PACKAGES, AppSettings
from core.domain.models import Tarball
from core.errors import ProvisioningError
from core.services.provisioning import PipelineHooks, build_plan, provision
from core.token import require_token
from core.workspace import Workspace

app = typer.Typer(
    add_completion=False,
    help="Download and extract the XLTS for AngularJS package tarballs.",
)

_console = Console()
_err_console = Console(stderr=True)


class _DownloadProgress:
    """Una barra de progreso por descarga (equivalente a `curl -#`)."""

    def __init__(self, console: Console) -> None:
        self._console = console
        self._progress: Progress | None = None
        self._task: TaskID | None = None

    def start(self, package: str, output: Path) -> None:
        self._console.print(f"Downloading {escape(package)} to '{escape(str(output))}'")
        self._progress = build_download_progress(self._console)
        self._progress.start()
        self._task = self._progress.add_task(package, total=None)

    def advance(self, size: int, total: int | None) -> None:
        if self._progress is None or self._task is None:
            return
        self._progress.update(self._task, advance=size, total=total)

    def stop(self, _tarball: Tarball | None = None) -> None:
        if self._progress is not None:
            self._progress.stop()
        self._progress = None
        self._task = None


def _confirm(console: Console) -> bool:
    """Lee una línea; solo continúa si empieza por `y`/`Y`. EOF equivale a no."""

    try:
        response = console.input(
            "Do you wish to download the XLTS for AngularJS packages (y/n)? "
        )
    except EOFError:
        response = ""
    console.print()
    return response.strip().lower().startswith("y")


def _fail(exc: ProvisioningError) -> None:
    _err_console.print(f"[bold red]ERROR:[/bold red] {escape(exc.message)}")
    if exc.operation:
        _err_console.print(f"The following operation failed:\n ▶ {escape(exc.operation)}")


@app.command()
def download(
    token: str = typer.Argument(
        "",
        help="Full authentication token (header.payload.signature).",
        show_default=False,
    ),
) -> None:
    """Download all XLTS for AngularJS packages and extract them."""

    settings = AppSettings()
    workspace = Workspace(settings.resolved_workspace_dir())
    progress = _DownloadProgress(_console)

    try:
        token = require_token(token)
        with build_client(token, settings) as client:
            registry = RegistryClient(client)
            plan = build_plan(token, registry, ANGULAR_PACKAGES)

            _console.print(build_plan_panel(plan))
            if not _confirm(_console):
                _console.print("Download aborted")
                raise typer.Exit(code=0)

            hooks = PipelineHooks(
                phase_start=lambda title: print_header(_console, title),
                download_start=progress.start,
                download_progress=progress.advance,
                download_done=progress.stop,
                extract_start=lambda name, output: _console.print(
                    f"Extracting '{escape(name)}' to '{escape(str(output))}'"
                ),
            )
            try:
                result = provision(plan, registry, workspace, hooks)
            finally:
                progress.stop()
    except ProvisioningError as exc:
        _fail(exc)
        raise typer.Exit(code=1) from exc

    print_report(_console, workspace.package_dirs(), result.extracted)


def run() -> None:
    # Workaround for UnicodeEncodeError on Windows terminals/CI (cp1252 vs utf-8).
    if sys.platform == "win32":
        sys.stdout.reconfigure(encoding="utf-8")
        sys.stderr.reconfigure(encoding="utf-8")
    app()


if __name__ == "__main__":
    run()
