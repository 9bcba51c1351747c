"""Package manifest (package.json) version updates.

Updates are best-effort: a manifest that is missing or cannot be parsed is
reported as a skip and never aborts the release.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Callable, Dict, Iterable, Optional

from constants import Constants
from common.jsonfile import read_json, write_json
from common.logging_utils import extra_context, is_debug_enabled
from versioning.models import DependencyField, UpdateOutcome, UpdateResult
from versioning.parser import rewrite_constraint
from workspace.registry import display_name, internal_distribution_names

logger = logging.getLogger(__name__)

Manifest = Dict[str, Any]


def package_manifest_path(root_dir: str, package_name: str, directory: str = "") -> str:
    """``<root>/<directory>/<package>/package.json``."""
    return os.path.join(root_dir, directory, package_name, Constants.PACKAGE_JSON_FILE)


def rewrite_manifest(
    manifest: Manifest, target_version: str, internal_names: Iterable[str]
) -> Manifest:
    """Set the manifest version and every internal dependency to ``target_version``.

    ``dependencies`` and ``devDependencies`` are pinned exactly;
    ``peerDependencies`` keep a caret when the previous value had one.
    Dependency fields that are absent are left absent. Mutates and returns
    ``manifest``.
    """
    manifest["version"] = target_version
    names = list(internal_names)
    for dep_field in DependencyField:
        deps = manifest.get(dep_field.value)
        if not isinstance(deps, dict):
            continue
        for name in names:
            if name in deps:
                deps[name] = rewrite_constraint(str(deps[name]), target_version, dep_field)
    return manifest


async def update_package_config(
    path: str, transform: Callable[[Manifest], Any], name: Optional[str] = None
) -> UpdateResult:
    """Load the manifest at ``path``, apply ``transform`` and write it back.

    A missing file or unparsable content yields a skipped result; no file is
    created in either case.
    """
    label = name or path
    try:
        manifest = await read_json(path)
    except FileNotFoundError:
        logger.info("  No package.json found for %s; skipping", label)
        return UpdateResult(path, UpdateOutcome.SKIPPED_MISSING, name, "not found")
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        logger.warning("  Could not read package.json for %s (%s); skipping", label, exc)
        return UpdateResult(path, UpdateOutcome.SKIPPED_INVALID, name, str(exc))

    if not isinstance(manifest, dict):
        logger.warning("  package.json for %s is not a JSON object; skipping", label)
        return UpdateResult(path, UpdateOutcome.SKIPPED_INVALID, name, "not a JSON object")

    transform(manifest)
    try:
        await write_json(path, manifest)
    except OSError as exc:
        logger.warning("  Could not write package.json for %s (%s); skipping", label, exc)
        return UpdateResult(path, UpdateOutcome.SKIPPED_INVALID, name, str(exc))

    if is_debug_enabled(logger):
        logger.debug(
            "Manifest written",
            extra=extra_context(event="file_write", component="manifest", target=path),
        )
    return UpdateResult(path, UpdateOutcome.UPDATED, name)


class ManifestUpdater:
    """Rewrites package manifests under a packages root."""

    def __init__(self, config):
        self.config = config
        self._internal_names = internal_distribution_names(
            config.registry, config.scope, config.directory_prefix
        )

    def manifest_path(self, package_dir: str) -> str:
        return package_manifest_path(self.config.root_dir, package_dir, self.config.packages_dir)

    async def update_manifest(
        self,
        package_dir: str,
        target_version: str,
        success_message: Optional[str] = None,
    ) -> UpdateResult:
        """Update one package's manifest to ``target_version``.

        Args:
            package_dir: Directory name under the packages root (``remix-dev``).
            target_version: Version written verbatim; not validated here.
            success_message: Optional replacement for the default success line.
        """
        result = await update_package_config(
            self.manifest_path(package_dir),
            lambda manifest: rewrite_manifest(manifest, target_version, self._internal_names),
            name=package_dir,
        )
        if result.updated:
            log_name = display_name(package_dir, self.config.scope, self.config.directory_prefix)
            logger.info(
                "  %s",
                success_message or f"Updated {log_name} to version {target_version}",
            )
        return result

    async def get_package_version(self, package_dir: str) -> Optional[str]:
        """Return the current ``version`` of a package, or None when unavailable."""
        try:
            manifest = await read_json(self.manifest_path(package_dir))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            logger.debug("Could not read version of %s: %s", package_dir, exc)
            return None
        if not isinstance(manifest, dict):
            return None
        version = manifest.get("version")
        return version if isinstance(version, str) else None
