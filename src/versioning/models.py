"""Data models for version constraints and release update results."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ConstraintKind(Enum):
    """Shape of a dependency version constraint."""
    EXACT = "exact"
    CARET = "caret"


class DependencyField(Enum):
    """Manifest fields that map dependency names to constraints."""
    DEPENDENCIES = "dependencies"
    DEV_DEPENDENCIES = "devDependencies"
    PEER_DEPENDENCIES = "peerDependencies"


class UpdateOutcome(Enum):
    """Result of a best-effort file update."""
    UPDATED = "updated"
    SKIPPED_MISSING = "skipped_missing"
    SKIPPED_INVALID = "skipped_invalid"


@dataclass
class VersionConstraint:
    """A dependency constraint split into its range prefix and version."""
    raw: str
    kind: ConstraintKind
    version: str

    @property
    def is_caret(self) -> bool:
        return self.kind == ConstraintKind.CARET


@dataclass
class ImportSpecifier:
    """An import-map key decomposed into package name and subpath."""
    raw: str
    package_name: str
    subpath: str  # "" when the specifier names the package root


@dataclass
class UpdateResult:
    """Outcome of updating one manifest or import map on disk."""
    path: str
    outcome: UpdateOutcome
    name: Optional[str] = None
    detail: Optional[str] = None  # reason for a skip

    @property
    def updated(self) -> bool:
        return self.outcome == UpdateOutcome.UPDATED
