"""Monorepo version propagation.

- registry.py: internal package names and distribution/directory naming
- manifest.py: package.json version and dependency rewriting
- import_map.py: Deno import map rewriting
- orchestrator.py: release sequencing, commit and tag
"""
