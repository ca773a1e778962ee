"""Tests del workspace (`tarballs/` y `packages/`)."""

import core.config as config_module
from core.config import AppSettings, project_root
from core.workspace import Workspace


def test_reset_creates_missing_directories(tmp_path):
    workspace = Workspace(tmp_path / "fresh")

    workspace.reset()

    assert workspace.tarballs_dir.is_dir()
    assert workspace.packages_dir.is_dir()
    assert workspace.tarball_files() == []
    assert workspace.package_dirs() == []


def test_reset_wipes_previous_contents(tmp_path):
    workspace = Workspace(tmp_path)
    (workspace.packages_dir / "angular" / "nested").mkdir(parents=True)
    (workspace.packages_dir / "angular" / "nested" / "file.js").write_text("old")
    workspace.tarballs_dir.mkdir()
    (workspace.tarballs_dir / "angular-1.0.0.tgz").write_bytes(b"old")
    (tmp_path / "unrelated.txt").write_text("keep")

    workspace.reset()

    assert list(workspace.packages_dir.iterdir()) == []
    assert list(workspace.tarballs_dir.iterdir()) == []
    assert (tmp_path / "unrelated.txt").read_text() == "keep"


def test_package_dirs_lists_only_directories(tmp_path):
    workspace = Workspace(tmp_path)
    workspace.reset()
    (workspace.packages_dir / "angular-touch").mkdir()
    (workspace.packages_dir / "angular").mkdir()
    (workspace.packages_dir / "stray.txt").write_text("x")

    assert [p.name for p in workspace.package_dirs()] == ["angular", "angular-touch"]


def test_workspace_defaults_to_project_root(monkeypatch):
    monkeypatch.delenv("XLTS_WORKSPACE_DIR", raising=False)
    settings = AppSettings(_env_file=None)

    assert settings.resolved_workspace_dir() == project_root()
    assert (project_root() / "main.py").is_file()


def test_workspace_dir_from_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("XLTS_WORKSPACE_DIR", str(tmp_path))

    assert AppSettings(_env_file=None).resolved_workspace_dir() == tmp_path


def test_installed_layout_uses_current_directory(tmp_path, monkeypatch):
    site_packages = tmp_path / "venv" / "lib" / "python3.12" / "site-packages"
    (site_packages / "core").mkdir(parents=True)
    cwd = tmp_path / "work"
    cwd.mkdir()
    monkeypatch.setattr(config_module, "__file__", str(site_packages / "core" / "config.py"))
    monkeypatch.delenv("XLTS_WORKSPACE_DIR", raising=False)
    monkeypatch.chdir(cwd)

    resolved = AppSettings(_env_file=None).resolved_workspace_dir()

    assert resolved == cwd.resolve()
    assert site_packages not in resolved.parents
    assert resolved != site_packages.parent
