"""Directorios de salida (`tarballs/` y `packages/`).

Cada ejecución reconstruye ambos desde cero: no hay modo incremental.
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass
from pathlib import Path

from core.config import TARBALL_EXTENSION
from core.errors import WorkspaceError


@dataclass(frozen=True)
class Workspace:
    """Par de directorios de salida bajo un mismo `root`."""

    root: Path

    @property
    def tarballs_dir(self) -> Path:
        return self.root / "tarballs"

    @property
    def packages_dir(self) -> Path:
        return self.root / "packages"

    def reset(self) -> None:
        """Borra (si existen) y recrea vacíos los dos directorios."""

        for directory in (self.tarballs_dir, self.packages_dir):
            try:
                shutil.rmtree(directory, ignore_errors=False)
            except FileNotFoundError:
                pass
            except OSError as exc:
                raise WorkspaceError(
                    f"Unable to remove '{directory}': {exc}",
                    operation=f"rm -rf {directory}",
                ) from exc

        for directory in (self.tarballs_dir, self.packages_dir):
            try:
                directory.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise WorkspaceError(
                    f"Unable to create '{directory}': {exc}",
                    operation=f"mkdir -p {directory}",
                ) from exc

    def tarball_files(self) -> list[Path]:
        """Tarballs presentes en `tarballs/`, en orden de listado (ordenado)."""

        if not self.tarballs_dir.is_dir():
            return []
        return sorted(
            p
            for p in self.tarballs_dir.iterdir()
            if p.is_file() and p.name.endswith(TARBALL_EXTENSION)
        )

    def package_dirs(self) -> list[Path]:
        """Subdirectorios inmediatos de `packages/`."""

        if not self.packages_dir.is_dir():
            return []
        return sorted(p for p in self.packages_dir.iterdir() if p.is_dir())
