"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Registry y lista de paquetes son constantes: no se exponen en `AppSettings`.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


REGISTRY_URL = "https://registry.xlts.dev"
REGISTRY_SCOPE = "@xlts.dev"
TARBALL_EXTENSION = ".tgz"

# El primer paquete se usa para resolver la versión.
ANGULAR_PACKAGES: tuple[str, ...] = (
    "angular",
    "angular-animate",
    "angular-aria",
    "angular-cookies",
    "angular-i18n",
    "angular-message-format",
    "angular-messages",
    "angular-mocks",
    "angular-parse-ext",
    "angular-resource",
    "angular-route",
    "angular-sanitize",
    "angular-touch",
)


def project_root() -> Path:
    # core/config.py -> core -> src -> <project_root>
    return Path(__file__).resolve().parents[2]


def default_workspace_dir() -> Path:
    """Directorio por defecto para `tarballs/` y `packages/`.

    Reglas:
    - Desde el árbol de fuentes (existe `<root>/main.py`), junto a `main.py`.
    - Instalado (site-packages), el directorio de trabajo actual.
    """

    root = project_root()
    if (root / "main.py").is_file() and (root / "src" / "core").is_dir():
        return root
    return Path.cwd()


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Solo cubre aspectos del entorno (HTTP, ubicación del workspace); el
    contrato de invocación sigue siendo un único argumento posicional.
    """

    model_config = SettingsConfigDict(
        env_prefix="XLTS_",
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="xlts-download/0.1",
        min_length=1,
        description="User-Agent para las peticiones al registry.",
    )
    workspace_dir: Path | None = Field(
        default=None,
        description="Directorio donde se crean `tarballs/` y `packages/` (por defecto, junto a main.py o el cwd si está instalado).",
    )

    def resolved_workspace_dir(self) -> Path:
        return self.workspace_dir or default_workspace_dir()
