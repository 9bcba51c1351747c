"""Parsing utilities for version constraints and import specifiers."""

from .models import ConstraintKind, DependencyField, ImportSpecifier, VersionConstraint


def parse_constraint(raw: str) -> VersionConstraint:
    """Split a constraint string into kind and bare version.

    Only the caret prefix is recognized; anything else is treated as exact.
    """
    if raw.startswith('^'):
        return VersionConstraint(raw=raw, kind=ConstraintKind.CARET, version=raw[1:])
    return VersionConstraint(raw=raw, kind=ConstraintKind.EXACT, version=raw)


def rewrite_constraint(previous: str, target_version: str, field: DependencyField) -> str:
    """Return the constraint that replaces ``previous`` for ``target_version``.

    Regular and dev dependencies are pinned exactly. Peer dependencies keep a
    leading caret if and only if the previous value had one.
    """
    if field == DependencyField.PEER_DEPENDENCIES and parse_constraint(previous).is_caret:
        return f"^{target_version}"
    return target_version


def split_import_specifier(specifier: str) -> ImportSpecifier:
    """Decompose an import-map key into (package name, subpath).

    Scoped specifiers (``@scope/name/...``) use the first two segments as the
    package name; unscoped ones use the first segment.
    """
    parts = specifier.split('/')
    if specifier.startswith('@'):
        package_name = '/'.join(parts[:2])
        rest = parts[2:]
    else:
        package_name = parts[0]
        rest = parts[1:]
    return ImportSpecifier(raw=specifier, package_name=package_name, subpath='/'.join(rest))


def versioned_cdn_url(cdn_base: str, distribution_name: str, version: str, subpath: str = '') -> str:
    """Build ``<cdn>/<name>@<version>[/<subpath>]``."""
    url = f"{cdn_base.rstrip('/')}/{distribution_name}@{version}"
    if subpath:
        url = f"{url}/{subpath}"
    return url
