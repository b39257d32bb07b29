from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Protocol

from .errors import PersistenceError

log = logging.getLogger(__name__)


class Sink(Protocol):
    async def save(self, blob: bytes, filename: str) -> None: ...


class DirectorySink:
    """Write blobs as files into `output_dir` (created on first save)."""

    def __init__(self, output_dir: str | Path):
        self.output_dir = Path(output_dir)

    def path_for(self, filename: str) -> Path:
        return self.output_dir / filename

    def _write(self, blob: bytes, filename: str) -> Path:
        self.output_dir.mkdir(parents=True, exist_ok=True)
        out_path = self.path_for(filename)
        out_path.write_bytes(blob)
        return out_path

    async def save(self, blob: bytes, filename: str) -> None:
        try:
            out_path = await asyncio.to_thread(self._write, blob, filename)
        except OSError as exc:
            raise PersistenceError(f"failed to write {filename}: {exc}") from exc
        log.debug("wrote %s (%d bytes)", out_path, len(blob))


class MemorySink:
    """Keep saved blobs in a dict; handy for embedding and tests."""

    def __init__(self):
        self.saved: dict[str, bytes] = {}

    async def save(self, blob: bytes, filename: str) -> None:
        self.saved[filename] = blob
