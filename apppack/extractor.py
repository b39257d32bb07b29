"""
Split AI-generated text into files.

Three marker conventions are recognised. Each is a pure function of the input
text; they are tried in order and the first one that yields at least one file
wins. Results from different conventions are never merged.
"""

from __future__ import annotations

import logging
import re
from typing import Callable

from .constants import PLATFORM_FILE_EXTENSIONS
from .models import ExtractedFile, FileMap

log = logging.getLogger(__name__)

# `// Filename: path` line, then a fenced block.
_PRIMARY_RE = re.compile(r"// Filename: ([^\n]+)\n```(?:\w+)?\n([\s\S]+?)\n```")
# Marker as the first line inside the fence.
_ALTERNATE_RE = re.compile(r"```(?:\w+)?\s*// Filename: ([^\n]+)\n([\s\S]+?)```")
# Bare `Name.swift:` as the first line inside the fence.
_BASIC_RE = re.compile(
    r"```(?:\w+)?\n([^:]+\.(?:%s)):\n([\s\S]+?)```" % "|".join(PLATFORM_FILE_EXTENSIONS)
)


def _collect(pattern: re.Pattern[str], text: str) -> list[ExtractedFile]:
    found: list[ExtractedFile] = []
    for m in pattern.finditer(text):
        path, content = m.group(1), m.group(2)
        if not path.strip() or not content:
            continue
        found.append(ExtractedFile(path=path, content=content))
    return found


def parse_primary(text: str) -> list[ExtractedFile]:
    return _collect(_PRIMARY_RE, text)


def parse_alternate(text: str) -> list[ExtractedFile]:
    return _collect(_ALTERNATE_RE, text)


def parse_basic(text: str) -> list[ExtractedFile]:
    return _collect(_BASIC_RE, text)


GRAMMARS: list[tuple[str, Callable[[str], list[ExtractedFile]]]] = [
    ("primary", parse_primary),
    ("alternate", parse_alternate),
    ("basic", parse_basic),
]


def _to_file_map(files: list[ExtractedFile]) -> FileMap:
    file_map: FileMap = {}
    for f in files:
        if f.path in file_map:
            log.debug("duplicate path %r, keeping the later block", f.path)
        file_map[f.path] = f.content
    return file_map


def extract_with_grammar(raw: str) -> tuple[str | None, FileMap]:
    """Return (grammar name, file map); (None, {}) when nothing matched."""
    if not isinstance(raw, str) or not raw:
        return None, {}
    for name, parse in GRAMMARS:
        files = parse(raw)
        if files:
            log.debug("%s grammar matched %d block(s)", name, len(files))
            return name, _to_file_map(files)
    return None, {}


def extract_files(raw: str) -> FileMap:
    """Parse annotated text into an ordered path -> content map (possibly empty)."""
    _, file_map = extract_with_grammar(raw)
    return file_map
