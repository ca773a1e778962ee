"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar la lógica del comando con detalles visuales.
- El resumen, los encabezados y el reporte final se prueban por separado.
"""

from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.progress import (
    BarColumn,
    DownloadColumn,
    Progress,
    TextColumn,
    TransferSpeedColumn,
)
from rich.table import Table
from rich.text import Text

from core.domain.models import ExtractedPackage, ProvisioningPlan


def print_header(console: Console, title: str) -> None:
    """Encabezado de sección (`Downloading`, `Extracting`, ...)."""

    console.print()
    console.print(Text(title, style="bold cyan"))
    console.print("-" * 20, style="dim")


def build_plan_panel(plan: ProvisioningPlan) -> Panel:
    """Panel con los parámetros resueltos antes de confirmar."""

    body = Text()
    body.append("Registry: ", style="bold")
    body.append(f"{plan.registry}\n")
    body.append("Username: ", style="bold")
    body.append(f"{plan.username}\n")
    body.append("Total packages: ", style="bold")
    body.append(f"{plan.total_packages}\n")
    body.append("XLTS for AngularJS version: ", style="bold")
    body.append(plan.version)
    return Panel(body, title=Text("XLTS for AngularJS", style="bold cyan"), border_style="cyan")


def build_download_progress(console: Console) -> Progress:
    return Progress(
        TextColumn("[bold blue]{task.description}"),
        BarColumn(),
        DownloadColumn(),
        TransferSpeedColumn(),
        console=console,
    )


def build_packages_table(
    package_dirs: list[Path],
    extracted: list[ExtractedPackage] | None = None,
) -> Table:
    file_counts = {item.path: item.file_count for item in extracted or []}
    table = Table(show_header=True)
    table.add_column("Package", style="cyan", no_wrap=True)
    table.add_column("Files", style="green", justify="right")
    table.add_column("Directory", style="magenta")
    for path in package_dirs:
        count = file_counts.get(path)
        table.add_row(path.name, "-" if count is None else str(count), str(path))
    return table


def print_report(
    console: Console,
    package_dirs: list[Path],
    extracted: list[ExtractedPackage] | None = None,
) -> None:
    """Reporte final con los directorios extraídos."""

    print_header(
        console,
        f"Successfully downloaded and extracted {len(package_dirs)} XLTS for AngularJS packages:",
    )
    console.print(build_packages_table(package_dirs, extracted))
