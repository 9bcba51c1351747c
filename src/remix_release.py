"""remix-release - propagate one version across the Remix monorepo

    Updates every package manifest, the Deno import maps and the
    deployment-test harness to the requested version, then commits and tags
    the release.

    Returns:
        int: Exit code
"""
import asyncio
import logging
import os
import sys

import semantic_version

from args import parse_args
from cli_config import ConfigError, apply_cli_overrides, load_release_config
from common.git import (
    DirtyWorkingTreeError,
    GitRunner,
    VersionControlError,
    ensure_clean_working_directory,
)
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from constants import ExitCodes
from workspace.manifest import ManifestUpdater
from workspace.orchestrator import VersionPropagationOrchestrator

logger = logging.getLogger(__name__)


def validate_version(version):
    """Return True if ``version`` is a valid semantic version."""
    try:
        semantic_version.Version(version)
    except ValueError:
        return False
    return True


def show_current(config, package_dir):
    """Log the current version of ``package_dir`` under the packages root."""
    version = asyncio.run(ManifestUpdater(config).get_package_version(package_dir))
    if version is None:
        logger.error("No version found for %s", package_dir)
        return ExitCodes.FILE_ERROR.value
    print(version)
    return ExitCodes.SUCCESS.value


def run(args):
    """Run the CLI with parsed ``args`` and return an exit code."""
    configure_logging(getattr(args, "LOG_LEVEL", None), getattr(args, "LOG_FILE", None))

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action="main")
        )

    root_dir = os.path.abspath(args.ROOT_DIR or os.getcwd())
    try:
        config = load_release_config(args.CONFIG, root_dir=root_dir)
    except ConfigError as e:
        logger.error("%s", e)
        return ExitCodes.CONFIG_ERROR.value
    config = apply_cli_overrides(config, args)

    if args.SHOW_CURRENT is not None:
        return show_current(config, args.SHOW_CURRENT)

    version = args.version.strip()
    if version.startswith("v"):
        version = version[1:]
    if not validate_version(version):
        logger.error("Invalid version: %s", args.version)
        return ExitCodes.INVALID_VERSION.value

    git = GitRunner(cwd=config.root_dir)
    if not args.SKIP_CLEAN_CHECK:
        try:
            ensure_clean_working_directory(git)
        except DirtyWorkingTreeError as e:
            logger.error("%s", e)
            for line in e.changes:
                logger.debug("  %s", line)
            return ExitCodes.DIRTY_WORKING_TREE.value
        except VersionControlError as e:
            logger.error("Could not query working tree status: %s", e)
            return ExitCodes.VCS_ERROR.value

    logger.info("Releasing version %s", version)
    try:
        asyncio.run(VersionPropagationOrchestrator(config, git).release(version))
    except VersionControlError as e:
        logger.error("Commit/tag failed: %s", e)
        logger.error("Files were updated but not committed; clean up the working tree manually.")
        return ExitCodes.VCS_ERROR.value

    return ExitCodes.SUCCESS.value


def main():
    """Main function of the program."""
    sys.exit(run(parse_args()))


if __name__ == "__main__":
    main()
