"""Contrato del registry de paquetes.

Por qué Protocol:
- El servicio de aprovisionamiento no depende de httpx.
- Permite sustituir el cliente real por un doble en tests.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Protocol, runtime_checkable

ProgressCallback = Callable[[int, int | None], None]


@runtime_checkable
class PackageRegistry(Protocol):
    """Operaciones mínimas que necesita el flujo de descarga.

    Reglas de diseño:
    - Ambas operaciones son síncronas y bloqueantes.
    - Los fallos se señalan con excepciones de `core.errors`, nunca con
      valores vacíos.
    """

    registry_url: str

    def get_latest_version(self, package: str) -> str:
        """Devuelve la versión `latest` publicada para `package`."""

        ...

    def download_archive(
        self,
        package: str,
        version: str,
        destination: Path,
        on_progress: ProgressCallback | None = None,
    ) -> Path:
        """Descarga el tarball `package@version` a `destination`."""

        ...
