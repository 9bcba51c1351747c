"""Release orchestration.

Sequences the manifest updates, fans out the import-map rewrites, pins the
deployment-test harness, and finally commits and tags the release.
"""

from __future__ import annotations

import asyncio
import logging
from typing import List, Optional

from cli_config import ReleaseConfig
from common.git import GitRunner, commit_and_tag
from common.logging_utils import extra_context, is_debug_enabled
from versioning.models import UpdateResult
from workspace.import_map import ImportMapRewriter
from workspace.manifest import ManifestUpdater, package_manifest_path, update_package_config
from workspace.registry import directory_name, distribution_name

logger = logging.getLogger(__name__)


class VersionPropagationOrchestrator:
    """Propagates one version across every package of the monorepo."""

    def __init__(self, config: ReleaseConfig, git: Optional[GitRunner] = None):
        self.config = config
        self.git = git if git is not None else GitRunner(cwd=config.root_dir)
        self.manifests = ManifestUpdater(config)
        self.import_maps = ImportMapRewriter(config)

    def package_directories(self) -> List[str]:
        """Manifest directories of the internal packages, in membership order."""
        return [
            directory_name(name, self.config.directory_prefix)
            for name in self.config.registry.all
        ]

    async def update_manifests(self, target_version: str) -> List[UpdateResult]:
        """Update the standalone packages, then every internal package."""
        results = []
        for package_dir in [*self.config.standalone_packages, *self.package_directories()]:
            results.append(await self.manifests.update_manifest(package_dir, target_version))
        return results

    async def update_import_maps(self, target_version: str) -> List[UpdateResult]:
        """Rewrite every known import map concurrently and wait for all of them.

        Every rewrite finishes before an unexpected error from any of them is
        re-raised.
        """
        tasks = [
            self.import_maps.update_import_map(self.config.path(location), target_version)
            for location in self.config.import_maps
        ]
        outcomes = await asyncio.gather(*tasks, return_exceptions=True)
        for outcome in outcomes:
            if isinstance(outcome, BaseException):
                raise outcome
        return list(outcomes)

    async def update_deployment_script(self, target_version: str) -> UpdateResult:
        """Pin the deployment-test harness to the released version."""
        dependency = distribution_name(
            self.config.deployment_dependency, self.config.scope, self.config.directory_prefix
        )

        def _pin(manifest):
            deps = manifest.get("dependencies")
            if not isinstance(deps, dict):
                deps = manifest["dependencies"] = {}
            deps[dependency] = target_version

        path = package_manifest_path(
            self.config.root_dir, self.config.deployment_package, self.config.scripts_dir
        )
        result = await update_package_config(path, _pin, name=self.config.deployment_package)
        if result.updated:
            logger.info(
                "  Updated Remix to version %s in %s/%s",
                target_version,
                self.config.scripts_dir,
                self.config.deployment_package,
            )
        return result

    async def propagate(self, target_version: str) -> List[UpdateResult]:
        """Run every file update for ``target_version`` without committing."""
        results = await self.update_manifests(target_version)
        results.extend(await self.update_import_maps(target_version))
        results.append(await self.update_deployment_script(target_version))
        if is_debug_enabled(logger):
            logger.debug(
                "File updates finished",
                extra=extra_context(
                    event="barrier",
                    component="orchestrator",
                    action="propagate",
                    updated=sum(1 for r in results if r.updated),
                    skipped=sum(1 for r in results if not r.updated),
                ),
            )
        return results

    async def release(self, target_version: str) -> None:
        """Update every file, then commit and tag ``v<target_version>``.

        Raises:
            VersionControlError: If the commit or tag command fails.
        """
        await self.propagate(target_version)
        tag = await asyncio.to_thread(commit_and_tag, self.git, target_version)
        logger.info("  Committed and tagged version %s (%s)", target_version, tag)
