from __future__ import annotations

import asyncio
import io
import logging
import re
import zipfile

from .errors import SerializationError, StructureError

log = logging.getLogger(__name__)

_CONTROL_CHARS_RE = re.compile(r"[\x00-\x1f\x7f]")


def _to_bytes(content: str | bytes) -> bytes:
    if isinstance(content, bytes):
        return content
    return content.encode("utf-8")


class ArchiveHandle:
    """
    In-memory zip tree built up by one packaging call.

    Entries are kept in insertion order. Folder entries end with "/" and map
    to None; file entries map to their bytes. Adding a file implicitly creates
    its parent folders, and creating an existing folder is a no-op.
    """

    def __init__(self, compression: int = zipfile.ZIP_DEFLATED):
        self.compression = compression
        self._entries: dict[str, bytes | None] = {}

    def _ensure_folder(self, path: str) -> None:
        parts = path.strip("/").split("/")
        for i in range(1, len(parts) + 1):
            key = "/".join(parts[:i]) + "/"
            self._entries.setdefault(key, None)

    def folder(self, name: str) -> ArchiveFolder:
        """Get or create the folder `name` (nested paths allowed)."""
        clean = name.strip("/")
        if not clean or not clean.strip():
            raise StructureError(f"Failed to create folder: {name!r} (empty name)")
        if _CONTROL_CHARS_RE.search(clean):
            raise StructureError(f"Failed to create folder: {name!r} (control characters)")
        if any(seg in {".", ".."} for seg in clean.split("/")):
            raise StructureError(f"Failed to create folder: {name!r} (relative segment)")
        self._ensure_folder(clean)
        return ArchiveFolder(self, clean)

    def get_folder(self, name: str) -> ArchiveFolder | None:
        """Return a view of an existing folder, or None without creating it."""
        clean = name.strip("/")
        if not clean or f"{clean}/" not in self._entries:
            return None
        return ArchiveFolder(self, clean)

    def add_file(self, path: str, content: str | bytes) -> None:
        parent = "/".join(path.split("/")[:-1])
        if parent:
            self._ensure_folder(parent)
        self._entries[path] = _to_bytes(content)

    def add_file_if_absent(self, path: str, content: str | bytes) -> bool:
        if self.exists(path):
            return False
        self.add_file(path, content)
        return True

    def exists(self, path: str) -> bool:
        if path in self._entries:
            return True
        return f"{path.rstrip('/')}/" in self._entries

    def get_file(self, path: str) -> bytes | None:
        if path.endswith("/"):
            return None
        return self._entries.get(path)

    def paths(self) -> list[str]:
        """All entry names, folders included (with a trailing "/")."""
        return list(self._entries)

    def file_entries(self) -> dict[str, bytes]:
        return {name: data for name, data in self._entries.items() if data is not None}

    def _write_zip(self) -> bytes:
        buf = io.BytesIO()
        with zipfile.ZipFile(buf, "w", compression=self.compression) as zf:
            for name, data in self._entries.items():
                zf.writestr(name, b"" if data is None else data)
        return buf.getvalue()

    async def serialize(self) -> bytes:
        """Write all entries into a zip blob (runs in a worker thread)."""
        try:
            blob = await asyncio.to_thread(self._write_zip)
        except (OSError, ValueError, RuntimeError, zipfile.BadZipFile, zipfile.LargeZipFile) as exc:
            raise SerializationError(f"failed to serialize archive: {exc}") from exc
        log.debug("serialized %d entries into %d bytes", len(self._entries), len(blob))
        return blob


class ArchiveFolder:
    """A path-prefixed view onto an ArchiveHandle."""

    def __init__(self, handle: ArchiveHandle, prefix: str):
        self.handle = handle
        self.prefix = prefix

    @property
    def name(self) -> str:
        return self.prefix

    def _full(self, rel_path: str) -> str:
        return f"{self.prefix}/{rel_path}"

    def folder(self, rel_path: str) -> ArchiveFolder:
        # Nested folders are not validated; add_file creates them implicitly anyway.
        full = self._full(rel_path.strip("/"))
        self.handle._ensure_folder(full)
        return ArchiveFolder(self.handle, full.rstrip("/"))

    def add_file(self, rel_path: str, content: str | bytes) -> None:
        self.handle.add_file(self._full(rel_path), content)

    def add_file_if_absent(self, rel_path: str, content: str | bytes) -> bool:
        return self.handle.add_file_if_absent(self._full(rel_path), content)

    def exists(self, rel_path: str) -> bool:
        return self.handle.exists(self._full(rel_path))

    def get_file(self, rel_path: str) -> bytes | None:
        return self.handle.get_file(self._full(rel_path))

    def file_entries(self) -> dict[str, bytes]:
        """Files under this folder, keyed by their path relative to it."""
        start = len(self.prefix) + 1
        return {
            name[start:]: data
            for name, data in self.handle.file_entries().items()
            if name.startswith(f"{self.prefix}/")
        }
