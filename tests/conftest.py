"""Fixtures compartidas: tokens de prueba, tarballs en memoria y registry simulado."""

from __future__ import annotations

import base64
import io
import json
import tarfile
from pathlib import Path
from typing import Callable

import httpx
import pytest

from adapters.http_client import build_client
from core.config import ANGULAR_PACKAGES, AppSettings


def encode_token(payload: dict | str) -> str:
    raw = payload if isinstance(payload, str) else json.dumps(payload)
    segment = base64.urlsafe_b64encode(raw.encode("utf-8")).decode("ascii").rstrip("=")
    return f"eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9.{segment}.c2lnbmF0dXJl"


def build_tarball(files: dict[str, bytes], root: str = "package") -> bytes:
    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode="w:gz") as archive:
        root_info = tarfile.TarInfo(root)
        root_info.type = tarfile.DIRTYPE
        root_info.mode = 0o755
        archive.addfile(root_info)
        for name, content in files.items():
            info = tarfile.TarInfo(f"{root}/{name}")
            info.size = len(content)
            info.mode = 0o644
            archive.addfile(info, io.BytesIO(content))
    return buffer.getvalue()


def package_files(package: str, version: str) -> dict[str, bytes]:
    return {
        "package.json": json.dumps({"name": f"@xlts.dev/{package}", "version": version}).encode(),
        f"{package}.js": f"/* {package} {version} */\n".encode(),
        "docs/README.md": f"# {package}\n".encode(),
    }


@pytest.fixture
def make_token() -> Callable[[dict | str], str]:
    return encode_token


@pytest.fixture
def make_tarball() -> Callable[..., bytes]:
    return build_tarball


@pytest.fixture
def token() -> str:
    return encode_token({"sub": "123", "name": "jane.doe@example.com", "iat": 1516239022})


@pytest.fixture
def workspace_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    root = tmp_path / "workspace"
    root.mkdir()
    monkeypatch.setenv("XLTS_WORKSPACE_DIR", str(root))
    return root


class RegistryStub:
    """Handler para `httpx.MockTransport` que imita el registry XLTS."""

    def __init__(self, token: str, version: str | None = "9.9.9") -> None:
        self.token = token
        self.version = version
        self.requests: list[httpx.Request] = []
        self.failing: set[str] = set()
        self.metadata: dict | None = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.headers.get("Authorization") != f"Bearer {self.token}":
            return httpx.Response(401, json={"error": "unauthorized"})

        path = request.url.path
        if path == f"/@xlts.dev/{ANGULAR_PACKAGES[0]}":
            if self.metadata is not None:
                return httpx.Response(200, json=self.metadata)
            tags = {"latest": self.version} if self.version else {}
            return httpx.Response(200, json={"name": "@xlts.dev/angular", "dist-tags": tags})

        for package in ANGULAR_PACKAGES:
            if path == f"/@xlts.dev/{package}/-/{package}-{self.version}.tgz":
                if package in self.failing:
                    return httpx.Response(500, text="boom")
                return httpx.Response(
                    200,
                    content=build_tarball(package_files(package, self.version)),
                    headers={"Content-Type": "application/octet-stream"},
                )
        return httpx.Response(404, json={"error": "not found"})


@pytest.fixture
def registry_stub(token: str) -> RegistryStub:
    return RegistryStub(token)


@pytest.fixture
def client_factory(registry_stub: RegistryStub) -> Callable[..., httpx.Client]:
    def factory(token: str, settings: AppSettings | None = None, **_: object) -> httpx.Client:
        return build_client(token, settings, transport=httpx.MockTransport(registry_stub))

    return factory
