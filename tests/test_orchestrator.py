"""End-to-end tests for the release orchestrator."""

import asyncio

import pytest

from common.git import VersionControlError
from conftest import FakeGit, read_json, write_json
from versioning.models import UpdateOutcome
from workspace.import_map import ImportMapRewriter
from workspace.orchestrator import VersionPropagationOrchestrator
from workspace.registry import PackageRegistry


def _seed_repo(root):
    packages = root / "packages"
    for name in ("remix-a", "remix-b"):
        write_json(packages / name / "package.json", {
            "name": f"@remix-run/{name[len('remix-'):]}",
            "version": "1.0.0",
            "dependencies": {"@remix-run/a": "1.0.0"},
            "peerDependencies": {"@remix-run/b": "^1.0.0"},
        })
    write_json(root / "import_map.json", {
        "imports": {
            "@remix-run/a": "https://cdn/@remix-run/a@1.0.0",
            "lodash": "https://cdn/lodash@4.17.21",
        },
    })
    write_json(root / "scripts" / "deployment-test" / "package.json", {
        "name": "deployment-test",
        "dependencies": {"@remix-run/dev": "1.0.0", "fs-extra": "^10.0.0"},
    })


class TestRelease:
    """Full release flow against a temporary repository."""

    def test_release_updates_everything_and_tags_once(self, tmp_path, config):
        _seed_repo(tmp_path)
        git = FakeGit()

        asyncio.run(VersionPropagationOrchestrator(config, git).release("1.1.0"))

        for name in ("remix-a", "remix-b"):
            manifest = read_json(tmp_path / "packages" / name / "package.json")
            assert manifest["version"] == "1.1.0"
            assert manifest["dependencies"]["@remix-run/a"] == "1.1.0"
            assert manifest["peerDependencies"]["@remix-run/b"] == "^1.1.0"

        imports = read_json(tmp_path / "import_map.json")["imports"]
        assert imports["@remix-run/a"] == "https://cdn/@remix-run/a@1.1.0"
        assert imports["lodash"] == "https://cdn/lodash@4.17.21"

        deployment = read_json(tmp_path / "scripts" / "deployment-test" / "package.json")
        assert deployment["dependencies"] == {"@remix-run/dev": "1.1.0", "fs-extra": "^10.0.0"}
        assert "version" not in deployment

        assert git.calls == [
            ("commit", "Version 1.1.0"),
            ("tag", "v1.1.0", "Version 1.1.0"),
        ]

    def test_missing_packages_do_not_abort(self, tmp_path, config):
        write_json(tmp_path / "packages" / "remix-a" / "package.json", {"version": "1.0.0"})
        git = FakeGit()

        results = asyncio.run(VersionPropagationOrchestrator(config, git).propagate("1.1.0"))

        by_path = {r.name: r.outcome for r in results if r.name}
        assert by_path["remix-a"] == UpdateOutcome.UPDATED
        assert by_path["remix"] == UpdateOutcome.SKIPPED_MISSING
        assert by_path["create-remix"] == UpdateOutcome.SKIPPED_MISSING
        assert by_path["remix-b"] == UpdateOutcome.SKIPPED_MISSING
        assert not (tmp_path / "packages" / "remix").exists()

    def test_update_order(self, tmp_path, config):
        orchestrator = VersionPropagationOrchestrator(config, FakeGit())
        results = asyncio.run(orchestrator.update_manifests("1.1.0"))
        assert [r.name for r in results] == ["remix", "create-remix", "remix-a", "remix-b"]

    def test_commit_failure_propagates(self, tmp_path, config):
        _seed_repo(tmp_path)
        git = FakeGit(fail_on="commit")

        with pytest.raises(VersionControlError):
            asyncio.run(VersionPropagationOrchestrator(config, git).release("1.1.0"))

        assert git.calls == []
        # files were still rewritten before the failure
        assert read_json(tmp_path / "packages" / "remix-a" / "package.json")["version"] == "1.1.0"

    def test_tag_failure_propagates(self, tmp_path, config):
        _seed_repo(tmp_path)
        git = FakeGit(fail_on="tag")
        with pytest.raises(VersionControlError):
            asyncio.run(VersionPropagationOrchestrator(config, git).release("1.1.0"))
        assert git.calls == [("commit", "Version 1.1.0")]

    def test_rerun_is_idempotent(self, tmp_path, config):
        _seed_repo(tmp_path)
        orchestrator = VersionPropagationOrchestrator(config, FakeGit())
        asyncio.run(orchestrator.propagate("1.1.0"))
        snapshot = {p: p.read_bytes() for p in tmp_path.rglob("*.json")}
        asyncio.run(orchestrator.propagate("1.1.0"))
        assert {p: p.read_bytes() for p in tmp_path.rglob("*.json")} == snapshot

    def test_import_maps_updated_concurrently(self, tmp_path, config):
        config.import_maps = ["one.json", "two.json", "missing.json"]
        for name in ("one.json", "two.json"):
            write_json(tmp_path / name, {"imports": {"@remix-run/b/x": "old"}})

        results = asyncio.run(VersionPropagationOrchestrator(config, FakeGit()).update_import_maps("1.1.0"))

        assert [r.outcome for r in results] == [
            UpdateOutcome.UPDATED, UpdateOutcome.UPDATED, UpdateOutcome.SKIPPED_MISSING,
        ]
        for name in ("one.json", "two.json"):
            assert read_json(tmp_path / name)["imports"] == {"@remix-run/b/x": "https://cdn/@remix-run/b@1.1.0/x"}

    def test_import_map_error_raised_after_siblings_finish(self, tmp_path, config):
        config.import_maps = ["bad.json", "one.json", "two.json"]
        for name in ("one.json", "two.json"):
            write_json(tmp_path / name, {"imports": {"@remix-run/b": "old"}})

        class _FailingRewriter(ImportMapRewriter):
            async def update_import_map(self, path, target_version):
                if path.endswith("bad.json"):
                    raise RuntimeError("disk on fire")
                return await super().update_import_map(path, target_version)

        orchestrator = VersionPropagationOrchestrator(config, FakeGit())
        orchestrator.import_maps = _FailingRewriter(config)

        with pytest.raises(RuntimeError, match="disk on fire"):
            asyncio.run(orchestrator.update_import_maps("1.1.0"))
        for name in ("one.json", "two.json"):
            assert read_json(tmp_path / name)["imports"] == {"@remix-run/b": "https://cdn/@remix-run/b@1.1.0"}

    def test_package_directories_use_prefix(self, config):
        config.registry = PackageRegistry(adapters=["express"], runtimes=[], core=[], standalone_tool="remix-serve")
        orchestrator = VersionPropagationOrchestrator(config, FakeGit())
        assert orchestrator.package_directories() == ["remix-express", "remix-serve"]

    def test_prefixed_standalone_tool_matches_scoped_dependency(self, tmp_path, config):
        config.registry = PackageRegistry(adapters=[], runtimes=[], core=["a"], standalone_tool="remix-serve")
        write_json(tmp_path / "packages" / "remix-a" / "package.json", {
            "version": "1.0.0",
            "dependencies": {"@remix-run/serve": "1.0.0"},
        })

        asyncio.run(VersionPropagationOrchestrator(config, FakeGit()).update_manifests("1.1.0"))

        manifest = read_json(tmp_path / "packages" / "remix-a" / "package.json")
        assert manifest["dependencies"] == {"@remix-run/serve": "1.1.0"}
