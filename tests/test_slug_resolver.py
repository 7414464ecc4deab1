"""Tests for dependency identifier to slug resolution."""

import pytest

from pacrinth.services import SlugResolver


class TestVariants:
    def test_variant_order(self):
        assert SlugResolver.variants("my-lib_core") == [
            "my-lib_core",
            "my-lib_core-api",
            "my-lib_core-mod",
            "my-lib_core-mc",
            "my_lib_core",
            "mylib_core",
            "my-lib-core",
            "my-libcore",
        ]

    def test_duplicates_removed(self):
        assert SlugResolver.variants("sodium") == [
            "sodium",
            "sodium-api",
            "sodium-mod",
            "sodium-mc",
        ]


class TestResolve:
    @pytest.mark.asyncio
    async def test_stops_at_first_existing_variant(self, client):
        client.add_project("geckolib-mod")
        client.add_project("geckolib_mc")
        resolver = SlugResolver(client)

        slug = await resolver.resolve("geckolib")

        assert slug == "geckolib-mod"
        assert [name for _, name in client.calls] == [
            "geckolib",
            "geckolib-api",
            "geckolib-mod",
        ]

    @pytest.mark.asyncio
    async def test_returns_registry_slug_for_project_id(self, client):
        client.add_project("Fabric-API", project_id="P7dR8mSH")
        resolver = SlugResolver(client)

        assert await resolver.resolve("P7dR8mSH") == "fabric-api"

    @pytest.mark.asyncio
    async def test_unknown_identifier_returns_empty(self, client):
        resolver = SlugResolver(client)

        assert await resolver.resolve("unknown-thing") == ""
        assert len(client.calls) == len(SlugResolver.variants("unknown-thing"))


class TestIdToSlug:
    @pytest.mark.asyncio
    async def test_translates_id(self, client):
        client.add_project("sodium", project_id="AANobbMI")
        resolver = SlugResolver(client)

        assert await resolver.id_to_slug("AANobbMI") == "sodium"

    @pytest.mark.asyncio
    async def test_unknown_passes_through(self, client):
        resolver = SlugResolver(client)

        assert await resolver.id_to_slug("Mystery") == "Mystery"

    @pytest.mark.asyncio
    async def test_empty_slug_passes_through(self, client):
        client.add_project("", project_id="XYZ")
        resolver = SlugResolver(client)

        assert await resolver.id_to_slug("XYZ") == "XYZ"
