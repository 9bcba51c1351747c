"""Internal package registry and name translation.

Packages are known by their logical name (``dev``). The published
distribution name carries the organization scope (``@remix-run/dev``) and the
source directory under the packages root carries the ``remix-`` prefix
(``remix-dev``).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from constants import Constants, PackageCategories


@dataclass(frozen=True)
class PackageRegistry:
    """Static enumeration of the packages versioned together."""

    adapters: List[str] = field(default_factory=lambda: list(Constants.DEFAULT_ADAPTERS))
    runtimes: List[str] = field(default_factory=lambda: list(Constants.DEFAULT_RUNTIMES))
    core: List[str] = field(default_factory=lambda: list(Constants.DEFAULT_CORE))
    standalone_tool: Optional[str] = Constants.STANDALONE_TOOL

    @property
    def all(self) -> List[str]:
        """Internal membership set in declaration order, standalone tool last."""
        members = [*self.adapters, *self.runtimes, *self.core]
        if self.standalone_tool:
            members.append(self.standalone_tool)
        return members

    def __contains__(self, logical_name: object) -> bool:
        return logical_name in self.all

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PackageRegistry":
        """Build a registry from a config mapping, falling back to defaults per key."""
        defaults = cls()

        def _names(key: str, fallback: List[str]) -> List[str]:
            value = data.get(key)
            if value is None:
                return list(fallback)
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                raise ValueError(f"packages.{key} must be a list of package names")
            return list(value)

        tool = data.get("standalone_tool", defaults.standalone_tool)
        if tool is not None and not isinstance(tool, str):
            raise ValueError("packages.standalone_tool must be a package name")
        return cls(
            adapters=_names(PackageCategories.ADAPTERS.value, defaults.adapters),
            runtimes=_names(PackageCategories.RUNTIMES.value, defaults.runtimes),
            core=_names(PackageCategories.CORE.value, defaults.core),
            standalone_tool=tool,
        )


def distribution_name(
    logical_name: str,
    scope: str = Constants.ORG_SCOPE,
    prefix: str = Constants.DIRECTORY_PREFIX,
) -> str:
    """``dev`` -> ``@remix-run/dev``; a leading ``remix-`` is dropped first."""
    if logical_name.startswith(prefix):
        logical_name = logical_name[len(prefix):]
    return f"{scope}/{logical_name}"


def directory_name(logical_name: str, prefix: str = Constants.DIRECTORY_PREFIX) -> str:
    """``dev`` -> ``remix-dev``; names already carrying the prefix are kept."""
    if logical_name.startswith(prefix):
        return logical_name
    return f"{prefix}{logical_name}"


def display_name(
    package_dir: str,
    scope: str = Constants.ORG_SCOPE,
    prefix: str = Constants.DIRECTORY_PREFIX,
) -> str:
    """Name used in log lines: ``remix-dev`` -> ``@remix-run/dev``, others unchanged."""
    if package_dir.startswith(prefix):
        return distribution_name(package_dir, scope, prefix)
    return package_dir


def internal_distribution_names(
    registry: PackageRegistry,
    scope: str = Constants.ORG_SCOPE,
    prefix: str = Constants.DIRECTORY_PREFIX,
) -> List[str]:
    """Distribution names of every internal package, in membership order."""
    return [distribution_name(name, scope, prefix) for name in registry.all]
