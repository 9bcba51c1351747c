"""Tests for the internal package registry and name translation."""

import pytest

from workspace.registry import (
    PackageRegistry,
    directory_name,
    display_name,
    distribution_name,
    internal_distribution_names,
)


class TestPackageRegistry:
    """Membership set composition."""

    def test_default_membership_order(self):
        registry = PackageRegistry()
        assert registry.all == [
            "architect", "cloudflare-pages", "cloudflare-workers", "express",
            "cloudflare", "deno", "node",
            "dev", "server-runtime", "react", "eslint-config", "css-bundle", "testing",
            "serve",
        ]

    def test_standalone_tool_is_last(self):
        registry = PackageRegistry(adapters=["x"], runtimes=["y"], core=["z"], standalone_tool="tool")
        assert registry.all[-1] == "tool"
        assert registry.all == ["x", "y", "z", "tool"]

    def test_membership_by_logical_name(self):
        registry = PackageRegistry()
        assert "dev" in registry
        assert "@remix-run/dev" not in registry

    def test_without_standalone_tool(self):
        registry = PackageRegistry(adapters=[], runtimes=[], core=["a"], standalone_tool=None)
        assert registry.all == ["a"]

    def test_from_dict_overrides_only_given_categories(self):
        registry = PackageRegistry.from_dict({"core": ["a", "b"]})
        assert registry.core == ["a", "b"]
        assert registry.adapters == PackageRegistry().adapters
        assert registry.standalone_tool == "serve"

    def test_from_dict_rejects_non_list(self):
        with pytest.raises(ValueError):
            PackageRegistry.from_dict({"adapters": "express"})


class TestNameTranslation:
    """Logical, distribution and directory names."""

    def test_distribution_name(self):
        assert distribution_name("dev") == "@remix-run/dev"
        assert distribution_name("dev", "@acme") == "@acme/dev"

    def test_distribution_name_drops_directory_prefix(self):
        assert distribution_name("remix-serve") == "@remix-run/serve"
        assert distribution_name("remix-serve") == display_name("remix-serve")

    def test_internal_distribution_names_with_prefixed_tool(self):
        registry = PackageRegistry(adapters=[], runtimes=[], core=["dev"], standalone_tool="remix-serve")
        assert internal_distribution_names(registry) == ["@remix-run/dev", "@remix-run/serve"]

    def test_directory_name_adds_prefix(self):
        assert directory_name("server-runtime") == "remix-server-runtime"

    def test_directory_name_keeps_existing_prefix(self):
        assert directory_name("remix-serve") == "remix-serve"

    def test_display_name(self):
        assert display_name("remix-dev") == "@remix-run/dev"
        assert display_name("create-remix") == "create-remix"
        assert display_name("remix") == "remix"

    def test_internal_distribution_names(self):
        registry = PackageRegistry(adapters=[], runtimes=["deno"], core=["dev"], standalone_tool="serve")
        assert internal_distribution_names(registry) == [
            "@remix-run/deno", "@remix-run/dev", "@remix-run/serve",
        ]
