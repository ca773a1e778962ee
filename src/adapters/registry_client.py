"""Cliente del registry XLTS (API estilo npm).

Endpoints:
- `GET {registry}/@xlts.dev/{package}` -> metadata con `dist-tags.latest`.
- `GET {registry}/@xlts.dev/{package}/-/{package}-{version}.tgz` -> tarball.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import httpx

from core.config import REGISTRY_SCOPE, REGISTRY_URL
from core.domain.models import Tarball
from core.errors import DownloadError, VersionResolutionError
from core.interfaces.registry import PackageRegistry, ProgressCallback


def _latest_from_metadata(payload: Any) -> str:
    if not isinstance(payload, dict):
        return ""
    dist_tags = payload.get("dist-tags")
    latest = dist_tags.get("latest") if isinstance(dist_tags, dict) else None
    if latest is None:
        latest = payload.get("latest")
    if not isinstance(latest, str):
        return ""
    return latest.strip()


class RegistryClient(PackageRegistry):
    """Implementación httpx de `PackageRegistry`.

    El `httpx.Client` lo crea el llamador (ver `adapters.http_client`) y ya
    lleva el header `Authorization`.
    """

    def __init__(
        self,
        client: httpx.Client,
        registry_url: str = REGISTRY_URL,
        scope: str = REGISTRY_SCOPE,
    ) -> None:
        self._client = client
        self.registry_url = registry_url.rstrip("/")
        self._scope = scope

    def metadata_url(self, package: str) -> str:
        return f"{self.registry_url}/{self._scope}/{package}"

    def archive_url(self, package: str, version: str) -> str:
        return f"{self.metadata_url(package)}/-/{Tarball.filename_for(package, version)}"

    def get_latest_version(self, package: str) -> str:
        url = self.metadata_url(package)
        try:
            response = self._client.get(url)
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise VersionResolutionError(
                "Unable to determine the latest XLTS for AngularJS version",
                operation=f"GET {url}",
            ) from exc

        version = _latest_from_metadata(payload)
        if not version:
            raise VersionResolutionError(
                "Unable to determine the latest XLTS for AngularJS version",
                operation=f"GET {url}",
            )
        return version

    def download_archive(
        self,
        package: str,
        version: str,
        destination: Path,
        on_progress: ProgressCallback | None = None,
    ) -> Path:
        url = self.archive_url(package, version)
        try:
            with self._client.stream("GET", url) as response:
                response.raise_for_status()
                total = int(response.headers.get("Content-Length") or 0) or None
                with destination.open("wb") as fh:
                    for chunk in response.iter_bytes():
                        fh.write(chunk)
                        if on_progress is not None:
                            on_progress(len(chunk), total)
        except httpx.HTTPStatusError as exc:
            raise DownloadError(
                f"Registry returned HTTP {exc.response.status_code} for {package}@{version}",
                operation=f"GET {url}",
            ) from exc
        except httpx.HTTPError as exc:
            raise DownloadError(
                f"Unable to download {package}@{version}: {exc}",
                operation=f"GET {url}",
            ) from exc
        except OSError as exc:
            raise DownloadError(
                f"Unable to write '{destination}': {exc}",
                operation=f"GET {url} > {destination}",
            ) from exc
        return destination
