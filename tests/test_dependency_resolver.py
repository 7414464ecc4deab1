"""Tests for the recursive dependency resolution engine."""

import pytest

from pacrinth.models import Category, ResolutionContext
from pacrinth.services import DependencyResolver

from conftest import make_version


CDN = "https://cdn.modrinth.com/data"


def _resolver(client, downloader, storage, context=None):
    return DependencyResolver(client, downloader, storage, context=context)


def _names(downloader):
    return [path.name for path in downloader.downloads]


class TestResolveAndDownload:
    @pytest.mark.asyncio
    async def test_downloads_required_dependency_after_parent(
        self, client, downloader, storage
    ):
        """coolmod with required libapi downloads both, parent first."""
        client.add_project(
            "coolmod",
            [make_version(f"{CDN}/coolmod-1.0.jar", dependencies=[("libapi", "required")])],
        )
        client.add_project("libapi", [make_version(f"{CDN}/libapi-1.0.jar")])
        resolver = _resolver(client, downloader, storage)

        path = await resolver.resolve_and_download("coolmod", "", "fabric")

        assert path.name == "coolmod-1.0.jar"
        assert _names(downloader) == ["coolmod-1.0.jar", "libapi-1.0.jar"]
        assert resolver.context.visited["coolmod"] is True
        assert resolver.context.visited["libapi"] is True
        assert path.parent == storage.folder(Category.MODS)

    @pytest.mark.asyncio
    async def test_second_request_is_a_no_op(self, client, downloader, storage):
        """Requesting the same package twice downloads it once and makes no calls."""
        client.add_project("coolmod", [make_version(f"{CDN}/coolmod-1.0.jar")])
        resolver = _resolver(client, downloader, storage)

        await resolver.resolve_and_download("coolmod", "", "fabric")
        client.calls.clear()
        second = await resolver.resolve_and_download("CoolMod", "", "fabric")

        assert second is None
        assert client.calls == []
        assert _names(downloader) == ["coolmod-1.0.jar"]

    @pytest.mark.asyncio
    async def test_unresolved_dependency_is_reported_and_processing_continues(
        self, client, downloader, storage
    ):
        client.add_project(
            "coolmod",
            [
                make_version(
                    f"{CDN}/coolmod-1.0.jar",
                    dependencies=[("unknown-thing", "required"), ("libapi", "required")],
                )
            ],
        )
        client.add_project("libapi", [make_version(f"{CDN}/libapi-1.0.jar")])
        resolver = _resolver(client, downloader, storage)

        await resolver.resolve_and_download("coolmod", "", "fabric")

        assert resolver.context.unresolved == ["unknown-thing"]
        assert _names(downloader) == ["coolmod-1.0.jar", "libapi-1.0.jar"]

    @pytest.mark.asyncio
    async def test_ignored_dependencies_never_resolved(self, client, downloader, storage):
        client.add_project(
            "coolmod",
            [
                make_version(
                    f"{CDN}/coolmod-1.0.jar",
                    dependencies=[("minecraft", "required"), ("FabricLoader", "required")],
                )
            ],
        )
        resolver = _resolver(client, downloader, storage)

        await resolver.resolve_and_download("coolmod", "", "fabric")

        queried = {slug.lower() for _, slug in client.calls}
        assert "minecraft" not in queried
        assert "fabricloader" not in queried
        assert resolver.context.unresolved == []

    @pytest.mark.asyncio
    async def test_injected_ignore_list_is_used(self, client, downloader, storage):
        client.add_project(
            "coolmod",
            [make_version(f"{CDN}/coolmod-1.0.jar", dependencies=[("libapi", "required")])],
        )
        client.add_project("libapi", [make_version(f"{CDN}/libapi-1.0.jar")])
        context = ResolutionContext(ignored=frozenset({"LibAPI"}))
        resolver = _resolver(client, downloader, storage, context)

        await resolver.resolve_and_download("coolmod", "", "fabric")

        assert _names(downloader) == ["coolmod-1.0.jar"]

    @pytest.mark.asyncio
    async def test_optional_dependencies_are_skipped(self, client, downloader, storage):
        client.add_project(
            "coolmod",
            [
                make_version(
                    f"{CDN}/coolmod-1.0.jar",
                    dependencies=[
                        ("extras", "optional"),
                        ("bundled", "embedded"),
                        ("enemy", "incompatible"),
                    ],
                )
            ],
        )
        client.add_project("extras", [make_version(f"{CDN}/extras-1.0.jar")])
        resolver = _resolver(client, downloader, storage)

        await resolver.resolve_and_download("coolmod", "", "fabric")

        assert _names(downloader) == ["coolmod-1.0.jar"]

    @pytest.mark.asyncio
    async def test_archive_dependencies_follow_api_dependencies(
        self, client, downloader, storage
    ):
        client.add_project(
            "coolmod",
            [make_version(f"{CDN}/coolmod-1.0.jar", dependencies=[("libapi", "required")])],
        )
        client.add_project("libapi", [make_version(f"{CDN}/libapi-1.0.jar")])
        client.add_project("jarlib", [make_version(f"{CDN}/jarlib-2.0.jar")])
        downloader.archives["coolmod-1.0.jar"] = {
            "fabric.mod.json": {
                "depends": {"fabricloader": ">=0.14", "jarlib": "*", "libapi": "*"}
            }
        }
        resolver = _resolver(client, downloader, storage)

        await resolver.resolve_and_download("coolmod", "1.20.1", "fabric")

        assert _names(downloader) == [
            "coolmod-1.0.jar",
            "libapi-1.0.jar",
            "jarlib-2.0.jar",
        ]

    @pytest.mark.asyncio
    async def test_dependency_naming_variant_is_resolved(
        self, client, downloader, storage
    ):
        downloader.archives["coolmod-1.0.jar"] = {
            "fabric.mod.json": {"depends": {"cloth_config": "*"}}
        }
        client.add_project("coolmod", [make_version(f"{CDN}/coolmod-1.0.jar")])
        client.add_project("cloth-config", [make_version(f"{CDN}/cloth-config-11.jar")])
        resolver = _resolver(client, downloader, storage)

        await resolver.resolve_and_download("coolmod", "", "fabric")

        assert _names(downloader) == ["coolmod-1.0.jar", "cloth-config-11.jar"]
        assert resolver.context.is_visited("cloth-config")

    @pytest.mark.asyncio
    async def test_project_id_and_slug_dedupe_to_one_download(
        self, client, downloader, storage
    ):
        """An API dependency given by id and an archive dependency by slug are one package."""
        client.add_project(
            "coolmod",
            [make_version(f"{CDN}/coolmod-1.0.jar", dependencies=[("P7dR8mSH", "required")])],
        )
        client.add_project(
            "fabric-api", [make_version(f"{CDN}/fabric-api-0.90.jar")], project_id="P7dR8mSH"
        )
        downloader.archives["coolmod-1.0.jar"] = {
            "fabric.mod.json": {"depends": {"fabric-api": "*"}}
        }
        resolver = _resolver(client, downloader, storage)

        await resolver.resolve_and_download("coolmod", "", "fabric")

        assert _names(downloader) == ["coolmod-1.0.jar", "fabric-api-0.90.jar"]

    @pytest.mark.asyncio
    async def test_top_level_id_is_translated_to_slug(self, client, downloader, storage):
        client.add_project(
            "coolmod", [make_version(f"{CDN}/coolmod-1.0.jar")], project_id="AbCd1234"
        )
        resolver = _resolver(client, downloader, storage)

        await resolver.resolve_and_download("AbCd1234", "", "fabric")

        assert resolver.context.is_visited("coolmod")
        assert resolver.context.is_visited("abcd1234")
        assert ("versions", "coolmod") in client.calls

    @pytest.mark.asyncio
    async def test_dependencies_inherit_loader_and_game_version(
        self, client, downloader, storage
    ):
        client.add_project(
            "coolmod",
            [make_version(f"{CDN}/coolmod-1.0.jar", dependencies=[("libapi", "required")])],
        )
        client.add_project(
            "libapi", [make_version(f"{CDN}/libapi-forge.jar", loaders=["forge"])]
        )
        resolver = _resolver(client, downloader, storage)

        await resolver.resolve_and_download("coolmod", "1.20.1", "fabric")

        assert _names(downloader) == ["coolmod-1.0.jar"]
        assert resolver.context.failed == ["libapi"]

    @pytest.mark.asyncio
    async def test_download_failure_stops_branch_but_marks_visited(
        self, client, downloader, storage
    ):
        client.add_project(
            "coolmod",
            [make_version(f"{CDN}/coolmod-1.0.jar", dependencies=[("libapi", "required")])],
        )
        client.add_project("libapi", [make_version(f"{CDN}/libapi-1.0.jar")])
        downloader.failing.add("coolmod-1.0.jar")
        resolver = _resolver(client, downloader, storage)

        result = await resolver.resolve_and_download("coolmod", "", "fabric")

        assert result is None
        assert downloader.downloads == []
        assert resolver.context.failed == ["coolmod"]
        assert resolver.context.is_visited("coolmod")
        assert not resolver.context.is_visited("libapi")

    @pytest.mark.asyncio
    async def test_missing_project_is_reported_not_raised(
        self, client, downloader, storage
    ):
        resolver = _resolver(client, downloader, storage)

        result = await resolver.resolve_and_download("ghost", "", "fabric")

        assert result is None
        assert resolver.context.failed == ["ghost"]

    @pytest.mark.asyncio
    async def test_dependency_cycle_terminates(self, client, downloader, storage):
        client.add_project(
            "alpha",
            [make_version(f"{CDN}/alpha.jar", dependencies=[("beta", "required")])],
        )
        client.add_project(
            "beta",
            [make_version(f"{CDN}/beta.jar", dependencies=[("alpha", "required")])],
        )
        resolver = _resolver(client, downloader, storage)

        await resolver.resolve_and_download("alpha", "", "fabric")

        assert _names(downloader) == ["alpha.jar", "beta.jar"]

    @pytest.mark.asyncio
    async def test_plugin_category_resolves_plugin_yml(self, client, downloader, storage):
        client.add_project("essentials", [make_version(f"{CDN}/essentials.jar", loaders=["paper"])])
        client.add_project("vault", [make_version(f"{CDN}/vault.jar", loaders=["paper"])])
        downloader.archives["essentials.jar"] = {"plugin.yml": "name: Essentials\nsoftdepend: [Vault]\n"}
        resolver = _resolver(client, downloader, storage)

        await resolver.resolve_and_download("essentials", "", "paper", Category.PLUGINS)

        assert _names(downloader) == ["essentials.jar", "vault.jar"]
        assert all(p.parent == storage.folder(Category.PLUGINS) for p in downloader.downloads)


class TestDownloadProject:
    @pytest.mark.asyncio
    async def test_does_not_follow_dependencies(self, client, downloader, storage):
        client.add_project(
            "bigpack",
            [make_version(f"{CDN}/bigpack.mrpack", dependencies=[("libapi", "required")])],
            project_type="modpack",
        )
        client.add_project("libapi", [make_version(f"{CDN}/libapi-1.0.jar")])
        resolver = _resolver(client, downloader, storage)

        path = await resolver.download_project("bigpack", "", "fabric", Category.MODPACKS)

        assert path == storage.folder(Category.MODPACKS) / "bigpack.mrpack"
        assert _names(downloader) == ["bigpack.mrpack"]
