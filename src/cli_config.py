"""Release configuration.

Holds every path and naming convention the release needs in one explicit
value that is handed to the orchestrator. Defaults come from ``Constants``;
an optional YAML file may override them, and CLI arguments win over both.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, List, Optional

import yaml

from constants import Constants
from workspace.registry import PackageRegistry

logger = logging.getLogger(__name__)


_STRING_KEYS = (
    "root_dir",
    "packages_dir",
    "scripts_dir",
    "scope",
    "directory_prefix",
    "cdn_base",
    "deployment_package",
    "deployment_dependency",
)
_LIST_KEYS = ("standalone_packages", "import_maps", "import_map_exclusions")


class ConfigError(ValueError):
    """The configuration file could not be loaded or has invalid values."""


@dataclass
class ReleaseConfig:
    """Configuration for one release run."""

    root_dir: str = "."
    packages_dir: str = Constants.PACKAGES_DIR
    scripts_dir: str = Constants.SCRIPTS_DIR
    scope: str = Constants.ORG_SCOPE
    directory_prefix: str = Constants.DIRECTORY_PREFIX
    cdn_base: str = Constants.CDN_BASE_URL
    standalone_packages: List[str] = field(
        default_factory=lambda: list(Constants.STANDALONE_PACKAGES)
    )
    import_maps: List[str] = field(default_factory=lambda: list(Constants.IMPORT_MAPS))
    import_map_exclusions: List[str] = field(
        default_factory=lambda: list(Constants.IMPORT_MAP_EXCLUSIONS)
    )
    deployment_package: str = Constants.DEPLOYMENT_PACKAGE
    deployment_dependency: str = Constants.DEPLOYMENT_DEPENDENCY
    registry: PackageRegistry = field(default_factory=PackageRegistry)

    def path(self, *parts: str) -> str:
        """Join ``parts`` onto the repository root."""
        return os.path.join(self.root_dir, *parts)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], root_dir: Optional[str] = None) -> "ReleaseConfig":
        """Build a config from a mapping, ignoring unknown keys with a warning."""
        known = {f.name for f in fields(cls)}
        kwargs: Dict[str, Any] = {}
        for key, value in data.items():
            if key not in known:
                logger.warning("Ignoring unknown configuration key: %s", key)
                continue
            if key == "registry":
                continue
            kwargs[key] = value

        packages = data.get("registry")
        if packages is not None:
            if not isinstance(packages, dict):
                raise ConfigError("registry must be a mapping of category to package names")
            try:
                kwargs["registry"] = PackageRegistry.from_dict(packages)
            except ValueError as exc:
                raise ConfigError(str(exc)) from exc

        for str_key in _STRING_KEYS:
            if str_key in kwargs and not isinstance(kwargs[str_key], str):
                raise ConfigError(f"{str_key} must be a string")

        for list_key in _LIST_KEYS:
            if list_key not in kwargs:
                continue
            value = kwargs[list_key]
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                raise ConfigError(f"{list_key} must be a list of strings")

        if root_dir is not None:
            kwargs["root_dir"] = root_dir
        return cls(**kwargs)


def load_release_config(config_path: Optional[str], root_dir: Optional[str] = None) -> ReleaseConfig:
    """Load a ReleaseConfig from a YAML (or JSON) file.

    Args:
        config_path: Path to the configuration file, or None for defaults.
        root_dir: Repository root; overrides any ``root_dir`` in the file.

    Raises:
        ConfigError: If the file exists but cannot be parsed.
    """
    if not config_path:
        return ReleaseConfig() if root_dir is None else ReleaseConfig(root_dir=root_dir)

    if not os.path.isfile(config_path):
        logger.warning("Config file not found: %s; using defaults", config_path)
        return ReleaseConfig() if root_dir is None else ReleaseConfig(root_dir=root_dir)

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"Failed to load config {config_path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"Config {config_path} must contain a mapping")

    # Allow the settings to live under a top-level "release" section
    section = data.get("release", data)
    if not isinstance(section, dict):
        raise ConfigError("release section must be a mapping")

    config = ReleaseConfig.from_dict(section, root_dir=root_dir)
    logger.info("Loaded release config from: %s", config_path)
    return config


def apply_cli_overrides(config: ReleaseConfig, args: Any) -> ReleaseConfig:
    """Return ``config`` with CLI values applied (highest precedence)."""
    overrides: Dict[str, Any] = {}
    if getattr(args, "CDN_BASE", None):
        overrides["cdn_base"] = args.CDN_BASE
    if overrides:
        return replace(config, **overrides)
    return config
