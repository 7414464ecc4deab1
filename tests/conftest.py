"""Shared fakes for registry and download tests."""

import json
import zipfile
from pathlib import Path
from typing import Dict, List, Optional

import pytest

from pacrinth.exceptions import APINotFoundError, DownloadError
from pacrinth.models import ProjectInfo, VersionInfo
from pacrinth.paths import StorageLocator


def make_version(
    url: str,
    game_versions=("1.20.1",),
    loaders=("fabric",),
    dependencies=(),
    version_id: str = "v1",
) -> VersionInfo:
    """Build a VersionInfo the way the registry would return it."""
    return VersionInfo.from_modrinth(
        {
            "id": version_id,
            "version_number": "1.0.0",
            "game_versions": list(game_versions),
            "loaders": list(loaders),
            "dependencies": [
                {"project_id": project_id, "dependency_type": dep_type}
                for project_id, dep_type in dependencies
            ],
            "files": [{"url": url, "primary": True}],
        }
    )


def make_archive(path: Path, entries: Dict[str, object]) -> Path:
    """Write a zip whose entries are str/bytes or JSON-serialisable objects."""
    with zipfile.ZipFile(path, "w") as archive:
        for name, content in entries.items():
            if isinstance(content, (dict, list)):
                content = json.dumps(content)
            archive.writestr(name, content)
    return path


class FakeClient:
    """In-memory stand-in for ModrinthClient that records every call."""

    def __init__(self):
        self.projects: Dict[str, ProjectInfo] = {}
        self.versions: Dict[str, List[VersionInfo]] = {}
        self.calls: List[tuple] = []

    def add_project(
        self,
        slug: str,
        versions: Optional[List[VersionInfo]] = None,
        project_type: str = "mod",
        project_id: Optional[str] = None,
    ) -> ProjectInfo:
        project = ProjectInfo(
            id=project_id or slug.upper(), slug=slug, project_type=project_type
        )
        self.projects[slug.lower()] = project
        self.projects[project.id.lower()] = project
        if versions is not None:
            self.versions[slug.lower()] = versions
        return project

    async def get_project(self, slug: str) -> ProjectInfo:
        self.calls.append(("project", slug))
        project = self.projects.get(slug.lower())
        if project is None:
            raise APINotFoundError(f"no project {slug}", status=404)
        return project

    async def get_versions(self, slug: str) -> List[VersionInfo]:
        self.calls.append(("versions", slug))
        if slug.lower() not in self.versions:
            raise APINotFoundError(f"no versions for {slug}", status=404)
        return self.versions[slug.lower()]

    async def project_exists(self, slug: str) -> bool:
        return slug.lower() in self.projects


class FakeDownloader:
    """Writes either a prepared archive or placeholder bytes for each URL."""

    def __init__(self):
        self.archives: Dict[str, Dict[str, object]] = {}
        self.downloads: List[Path] = []
        self.failing: set = set()

    async def download_file(self, url: str, download_dir) -> Path:
        filename = url.rsplit("/", 1)[-1]
        if filename in self.failing:
            raise DownloadError(f"HTTP 500 for {filename}")
        download_dir = Path(download_dir)
        download_dir.mkdir(parents=True, exist_ok=True)
        path = download_dir / filename
        entries = self.archives.get(filename)
        if entries is None:
            path.write_bytes(b"not a zip")
        else:
            make_archive(path, entries)
        self.downloads.append(path)
        return path


@pytest.fixture
def client():
    return FakeClient()


@pytest.fixture
def downloader():
    return FakeDownloader()


@pytest.fixture
def storage(tmp_path):
    return StorageLocator(str(tmp_path / "minecraft"))
