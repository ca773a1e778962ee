"""Modelos del dominio (Pydantic v2).

Nota:
- Estos modelos describen *qué* se descarga y dónde queda, no *cómo*.
- Todos son transitorios: solo viven durante una ejecución.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from core.config import TARBALL_EXTENSION


class TokenPayload(BaseModel):
    """Segmento central (payload) del token de autenticación.

    Solo `name` es relevante; el resto de claims se conservan sin validar.
    """

    model_config = ConfigDict(extra="allow")

    name: str | None = Field(
        default=None,
        description="Nombre legible del usuario al que pertenece el token.",
    )


class ProvisioningPlan(BaseModel):
    """Parámetros resueltos que se muestran antes de pedir confirmación."""

    registry: str = Field(..., min_length=1, description="URL base del registry.")
    username: str = Field(..., min_length=1, description="Usuario extraído del token.")
    packages: tuple[str, ...] = Field(..., min_length=1, description="Paquetes a descargar, en orden.")
    version: str = Field(..., min_length=1, description="Versión común a todos los paquetes.")

    @property
    def total_packages(self) -> int:
        return len(self.packages)


class Tarball(BaseModel):
    """Archivo `{package}-{version}.tgz` descargado en `tarballs/`."""

    package: str = Field(..., min_length=1)
    version: str = Field(..., min_length=1)
    path: Path

    @staticmethod
    def filename_for(package: str, version: str) -> str:
        return f"{package}-{version}{TARBALL_EXTENSION}"


class ExtractedPackage(BaseModel):
    """Directorio `packages/{name}` con el contenido del tarball sin la raíz."""

    name: str = Field(..., min_length=1)
    path: Path
    tarball: Path
    file_count: int = Field(default=0, ge=0, description="Archivos extraídos del tarball.")
