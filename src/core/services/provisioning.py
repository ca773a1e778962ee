"""Flujo de descarga y extracción de los paquetes XLTS for AngularJS.

La CLI solo pregunta e imprime; todo lo que toca el registry o el workspace
vive aquí y funciona con cualquier `PackageRegistry`. El progreso y las
líneas de estado salen por hooks opcionales, fuera de la lógica del Core.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Sequence

from adapters.tarball_extractor import extract_stripped
from core.config import ANGULAR_PACKAGES, TARBALL_EXTENSION
from core.domain.models import ExtractedPackage, ProvisioningPlan, Tarball
from core.interfaces.registry import PackageRegistry
from core.token import extract_username
from core.workspace import Workspace


@dataclass
class PipelineHooks:
    """Callbacks opcionales para la capa de UI (progreso, líneas de estado)."""

    phase_start: Callable[[str], None] | None = None
    download_start: Callable[[str, Path], None] | None = None
    download_progress: Callable[[int, int | None], None] | None = None
    download_done: Callable[[Tarball], None] | None = None
    extract_start: Callable[[str, Path], None] | None = None


@dataclass
class ProvisioningResult:
    """Salida de `provision`: tarballs descargados y paquetes extraídos."""

    tarballs: list[Tarball] = field(default_factory=list)
    extracted: list[ExtractedPackage] = field(default_factory=list)


def package_name_from_tarball(filename: str, version: str | None = None) -> str:
    """Deriva el nombre del paquete a partir de `{package}-{version}.tgz`.

    Si se conoce la versión y el nombre termina en `-{version}`, se quita ese
    sufijo exacto; si no, se corta en el último guion.
    """

    base = filename[: -len(TARBALL_EXTENSION)] if filename.endswith(TARBALL_EXTENSION) else filename
    if version:
        suffix = f"-{version}"
        if base.endswith(suffix) and len(base) > len(suffix):
            return base[: -len(suffix)]
    name, sep, _ = base.rpartition("-")
    return name if sep else base


def build_plan(
    token: str,
    registry: PackageRegistry,
    packages: Sequence[str] = ANGULAR_PACKAGES,
) -> ProvisioningPlan:
    """Decodifica el usuario y resuelve la versión con el primer paquete."""

    username = extract_username(token)
    version = registry.get_latest_version(packages[0])
    return ProvisioningPlan(
        registry=registry.registry_url,
        username=username,
        packages=tuple(packages),
        version=version,
    )


def download_tarballs(
    plan: ProvisioningPlan,
    registry: PackageRegistry,
    workspace: Workspace,
    hooks: PipelineHooks | None = None,
) -> list[Tarball]:
    """Descarga cada paquete del plan, en orden; el primer fallo aborta."""

    hooks = hooks or PipelineHooks()
    tarballs: list[Tarball] = []
    for package in plan.packages:
        output = workspace.tarballs_dir / Tarball.filename_for(package, plan.version)
        if hooks.download_start:
            hooks.download_start(package, output)
        registry.download_archive(
            package,
            plan.version,
            output,
            on_progress=hooks.download_progress,
        )
        tarball = Tarball(package=package, version=plan.version, path=output)
        tarballs.append(tarball)
        if hooks.download_done:
            hooks.download_done(tarball)
    return tarballs


def extract_tarballs(
    workspace: Workspace,
    version: str | None = None,
    hooks: PipelineHooks | None = None,
) -> list[ExtractedPackage]:
    """Extrae cada `*.tgz` de `tarballs/` en `packages/{nombre}/`."""

    hooks = hooks or PipelineHooks()
    extracted: list[ExtractedPackage] = []
    for tarball in workspace.tarball_files():
        name = package_name_from_tarball(tarball.name, version)
        output = workspace.packages_dir / name
        if hooks.extract_start:
            hooks.extract_start(name, output)
        files = extract_stripped(tarball, output)
        extracted.append(
            ExtractedPackage(name=name, path=output, tarball=tarball, file_count=len(files))
        )
    return extracted


def provision(
    plan: ProvisioningPlan,
    registry: PackageRegistry,
    workspace: Workspace,
    hooks: PipelineHooks | None = None,
) -> ProvisioningResult:
    """Reinicia el workspace, descarga y extrae. Solo tras la confirmación."""

    hooks = hooks or PipelineHooks()
    workspace.reset()
    if hooks.phase_start:
        hooks.phase_start("Downloading")
    tarballs = download_tarballs(plan, registry, workspace, hooks)
    if hooks.phase_start:
        hooks.phase_start("Extracting")
    extracted = extract_tarballs(workspace, plan.version, hooks)
    return ProvisioningResult(tarballs=tarballs, extracted=extracted)
