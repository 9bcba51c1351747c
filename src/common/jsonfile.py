"""Asynchronous JSON file helpers.

Reads and writes run in a worker thread so callers on the event loop only
suspend at file boundaries. Output is always 2-space indented with a
trailing newline so repeated writes produce identical bytes.
"""
from __future__ import annotations

import asyncio
import json
import os
from typing import Any

from constants import Constants


def _read(path: str) -> Any:
    with open(path, "r", encoding="utf-8") as file:
        return json.load(file)


def dumps(data: Any) -> str:
    """Serialize ``data`` the way manifests are stored on disk."""
    return json.dumps(data, indent=Constants.JSON_INDENT, ensure_ascii=False) + "\n"


def _write(path: str, data: Any) -> None:
    with open(path, "w", encoding="utf-8") as file:
        file.write(dumps(data))


async def read_json(path: str) -> Any:
    """Load a JSON document.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        json.JSONDecodeError: If the content is not valid JSON.
    """
    return await asyncio.to_thread(_read, path)


async def write_json(path: str, data: Any) -> None:
    """Write ``data`` to ``path`` with stable formatting."""
    await asyncio.to_thread(_write, path, data)


async def file_exists(path: str) -> bool:
    """Return True if ``path`` can be stat'ed."""
    try:
        await asyncio.to_thread(os.stat, path)
        return True
    except OSError:
        return False
