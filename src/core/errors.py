"""Errores del flujo de aprovisionamiento.

Cada paso que puede fallar lanza una subclase de `ProvisioningError` con
la descripción de la operación concreta que falló. La CLI es la única capa
que los convierte en mensajes y códigos de salida.
"""

from __future__ import annotations


class ProvisioningError(Exception):
    """Base de todos los errores fatales de una ejecución."""

    def __init__(self, message: str, *, operation: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.operation = operation


class MissingTokenError(ProvisioningError):
    """No se pasó el token de autenticación."""


class TokenDecodeError(ProvisioningError):
    """El payload del token no es un objeto JSON decodificable."""


class UsernameExtractionError(ProvisioningError):
    """El payload no contiene un `name` utilizable."""


class VersionResolutionError(ProvisioningError):
    """El registry no devolvió una versión `latest` válida."""


class DownloadError(ProvisioningError):
    """Fallo HTTP o de escritura al descargar un tarball."""


class ExtractionError(ProvisioningError):
    """Fallo al extraer un tarball en `packages/`."""


class WorkspaceError(ProvisioningError):
    """Fallo al reiniciar los directorios de salida."""
