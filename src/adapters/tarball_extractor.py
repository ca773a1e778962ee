"""Extracción de tarballs con la carpeta raíz eliminada.

Equivale a `tar -xf <tarball> --strip-components=1 -C <destination>`:
los paquetes npm envuelven su contenido en una única carpeta (`package/`)
que no se conserva.
"""

from __future__ import annotations

import tarfile
from pathlib import Path, PurePosixPath

from core.errors import ExtractionError


def _strip_root(member_name: str) -> PurePosixPath | None:
    """Quita el primer componente de la ruta; `None` si no queda nada."""

    relative = PurePosixPath(member_name.replace("\\", "/"))
    parts = [part for part in relative.parts if part not in ("", ".")]
    if relative.is_absolute() or ".." in parts:
        raise ValueError(f"Unsafe path detected in archive: {member_name}")
    if len(parts) <= 1:
        return None
    return PurePosixPath(*parts[1:])


def _stripped_members(archive: tarfile.TarFile) -> list[tarfile.TarInfo]:
    members: list[tarfile.TarInfo] = []
    for member in archive.getmembers():
        stripped = _strip_root(member.name)
        if stripped is None:
            continue
        if member.islnk():
            link_target = _strip_root(member.linkname)
            if link_target is None:
                continue
            member.linkname = str(link_target)
        member.name = str(stripped)
        members.append(member)
    return members


def extract_stripped(tarball: Path, destination: Path) -> list[Path]:
    """Extrae `tarball` en `destination` sin su directorio raíz.

    Devuelve los archivos extraídos (sin directorios). Cualquier fallo
    (archivo corrupto, rutas fuera del destino) se propaga como
    `ExtractionError`.
    """

    operation = f"tar -xf {tarball} --strip-components=1 -C {destination}"
    try:
        destination.mkdir(parents=True, exist_ok=True)
        with tarfile.open(tarball, "r:*") as archive:
            members = _stripped_members(archive)
            archive.extractall(destination, members=members, filter="data")
    except (tarfile.TarError, OSError, ValueError) as exc:
        raise ExtractionError(
            f"Unable to extract '{tarball.name}': {exc}",
            operation=operation,
        ) from exc

    return [destination / member.name for member in members if member.isfile()]
