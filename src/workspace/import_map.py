"""Import map rewriting.

Entries whose specifier names an internal package are pointed at the CDN
build of ``target_version``; every other entry, and every top-level field
besides ``imports``, is written back unchanged and in its original order.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterable

from common.jsonfile import read_json, write_json
from versioning.models import UpdateOutcome, UpdateResult
from versioning.parser import split_import_specifier, versioned_cdn_url
from workspace.registry import internal_distribution_names

logger = logging.getLogger(__name__)


def rewrite_imports(
    imports: Dict[str, Any],
    target_version: str,
    internal_names: Iterable[str],
    exclusions: Iterable[str],
    cdn_base: str,
) -> Dict[str, Any]:
    """Return a new ``imports`` mapping with internal entries versioned.

    Keys and their order are preserved; only URLs of matching entries change.
    """
    members = set(internal_names)
    excluded = set(exclusions)
    rewritten: Dict[str, Any] = {}
    for specifier, url in imports.items():
        parsed = split_import_specifier(specifier)
        if parsed.package_name in members and specifier not in excluded:
            rewritten[specifier] = versioned_cdn_url(
                cdn_base, parsed.package_name, target_version, parsed.subpath
            )
        else:
            rewritten[specifier] = url
    return rewritten


class ImportMapRewriter:
    """Rewrites import-map documents against the internal package set."""

    def __init__(self, config):
        self.config = config
        self._internal_names = internal_distribution_names(
            config.registry, config.scope, config.directory_prefix
        )

    def rewrite_document(self, document: Dict[str, Any], target_version: str) -> Dict[str, Any]:
        """Return ``document`` with its ``imports`` rewritten in place of the original key."""
        return {
            key: (
                rewrite_imports(
                    value,
                    target_version,
                    self._internal_names,
                    self.config.import_map_exclusions,
                    self.config.cdn_base,
                )
                if key == "imports"
                else value
            )
            for key, value in document.items()
        }

    async def update_import_map(self, path: str, target_version: str) -> UpdateResult:
        """Rewrite the import map at ``path`` to ``target_version``."""
        try:
            document = await read_json(path)
        except FileNotFoundError:
            logger.info("  No import map found at %s; skipping", path)
            return UpdateResult(path, UpdateOutcome.SKIPPED_MISSING, detail="not found")
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            logger.warning("  Could not read import map %s (%s); skipping", path, exc)
            return UpdateResult(path, UpdateOutcome.SKIPPED_INVALID, detail=str(exc))

        if not isinstance(document, dict) or not isinstance(document.get("imports"), dict):
            logger.warning("  Import map %s has no imports mapping; skipping", path)
            return UpdateResult(path, UpdateOutcome.SKIPPED_INVALID, detail="no imports mapping")

        try:
            await write_json(path, self.rewrite_document(document, target_version))
        except OSError as exc:
            logger.warning("  Could not write import map %s (%s); skipping", path, exc)
            return UpdateResult(path, UpdateOutcome.SKIPPED_INVALID, detail=str(exc))

        logger.info("  Updated import map %s to version %s", path, target_version)
        return UpdateResult(path, UpdateOutcome.UPDATED)
