"""Shared helpers: logging setup, JSON file I/O and the git collaborator."""
