"""Shared fixtures for release tests."""

import json

import pytest

from cli_config import ReleaseConfig
from workspace.registry import PackageRegistry


def write_json(path, data):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")


def read_json(path):
    return json.loads(path.read_text(encoding="utf-8"))


class FakeGit:
    """Records commit/tag calls instead of running git."""

    def __init__(self, status="", fail_on=None):
        self.status = status
        self.fail_on = fail_on
        self.calls = []

    def status_porcelain(self):
        return self.status

    def commit_all(self, message):
        self._record("commit", message)

    def tag_annotated(self, name, message):
        self._record("tag", name, message)

    def _record(self, *call):
        if self.fail_on == call[0]:
            from common.git import VersionControlError
            raise VersionControlError(["git", call[0]], 1, "boom")
        self.calls.append(call)


@pytest.fixture
def small_registry():
    return PackageRegistry(adapters=[], runtimes=[], core=["a", "b"], standalone_tool=None)


@pytest.fixture
def config(tmp_path, small_registry):
    return ReleaseConfig(
        root_dir=str(tmp_path),
        registry=small_registry,
        cdn_base="https://cdn",
        import_maps=["import_map.json"],
    )


@pytest.fixture
def fake_git():
    return FakeGit()
