from __future__ import annotations

import re
from pathlib import PurePosixPath

from .models import SanitizedPath

_LEADING_SEPARATORS_RE = re.compile(r"^[/\\]+")
_WHITESPACE_RE = re.compile(r"\s+")
_CONTROL_CHARS_RE = re.compile(r"[\x00-\x1f\x7f]")


def sanitize_path(path: str) -> SanitizedPath:
    """
    Clean an extracted path for placement inside the archive root folder.

    Trims surrounding whitespace and strips any run of leading `/` or `\\`.
    The parent portion is every `/`-separated segment but the last.

    `..` segments are kept as-is; extracted paths are treated as trusted.
    """
    clean = _LEADING_SEPARATORS_RE.sub("", path.strip())
    parent = "/".join(clean.split("/")[:-1])
    return SanitizedPath(clean_path=clean, parent_folders=parent)


def is_usable_path(clean_path: str) -> bool:
    """
    True when a sanitized path can name a zip entry.

    zipfile truncates entry names at NUL, so control characters would make
    distinct paths collide in the serialized archive.
    """
    if not clean_path or clean_path.endswith("/"):
        return False
    return not _CONTROL_CHARS_RE.search(clean_path)


def compact_app_name(app_name: str) -> str:
    """Remove every whitespace run: "My App" -> "MyApp"."""
    return _WHITESPACE_RE.sub("", app_name)


def line_count_from_text(text: str) -> int:
    if not text:
        return 0
    n = text.count("\n")
    if not text.endswith("\n"):
        n += 1
    return n


def build_tree(rel_paths_posix: list[str], root_name: str, style: str = "ascii") -> str:
    """
    Build a directory tree string from root-relative posix paths.

    style:
      - "ascii": |-- / `-- connectors (glyph-safe in built-in PDF fonts)
      - "unicode": ├── / └── connectors (nicer in terminals)

    Paths ending in "/" are rendered as (possibly empty) folders.
    """
    tree: dict[str, dict | None] = {}
    for p in rel_paths_posix:
        is_dir = p.endswith("/")
        parts = PurePosixPath(p).parts
        if not parts:
            continue
        node = tree
        for part in parts[:-1]:
            node = node.setdefault(f"{part}/", {})
        if is_dir:
            node.setdefault(f"{parts[-1]}/", {})
        else:
            node[parts[-1]] = None

    if style == "unicode":
        branch_mid, branch_last = "├── ", "└── "
        vert, indent = "│   ", "    "
    else:
        branch_mid, branch_last = "|-- ", "`-- "
        vert, indent = "|   ", "    "

    lines = [f"{root_name}/"]

    def walk(node: dict, prefix: str):
        items = list(node.items())
        for idx, (name, subtree) in enumerate(items):
            is_last = idx == len(items) - 1
            connector = branch_last if is_last else branch_mid
            lines.append(f"{prefix}{connector}{name}")
            if subtree is not None:
                extension = indent if is_last else vert
                walk(subtree, prefix + extension)

    walk(tree, "")
    return "\n".join(lines)
