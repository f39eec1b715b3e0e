"""Wildcard entrypoint patterns restricted to the two supported shapes.

``Dir/*.ext`` matches files directly inside ``Dir``; ``Dir/*/*.ext`` matches
files one level below ``Dir``. Anything else containing a wildcard raises
:class:`PatternError`. There is no ``**`` recursion.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import List, Union

from .errors import PatternError
from .logging import get_logger
from .models import SourcePattern

LITERAL = "literal"
FILES = "files"
NESTED = "nested"

_WILDCARD = "*"

_logger = get_logger("patterns")


def parse_pattern(raw: str) -> SourcePattern:
    """Classify ``raw`` into one of the supported pattern shapes."""
    normalized = raw.replace("\\", "/")
    if _WILDCARD not in normalized:
        return SourcePattern(raw=raw, kind=LITERAL, directory=normalized)
    if "**" in normalized:
        raise PatternError(f"Recursive wildcard '**' is not supported: {raw}")

    *dir_parts, file_part = normalized.split("/")
    if not file_part:
        raise PatternError(f"Pattern must end with a file name: {raw}")

    wildcard_dirs = [index for index, part in enumerate(dir_parts) if _WILDCARD in part]
    if not wildcard_dirs:
        kind = FILES
    elif wildcard_dirs == [len(dir_parts) - 1] and dir_parts[-1] == _WILDCARD:
        kind = NESTED
        dir_parts = dir_parts[:-1]
    else:
        raise PatternError(
            f"Unsupported wildcard position in {raw}; use 'Dir/*.ext' or 'Dir/*/*.ext'"
        )

    return SourcePattern(
        raw=raw,
        kind=kind,
        directory="/".join(dir_parts),
        file_regex=_compile_file_glob(file_part),
    )


def _compile_file_glob(glob: str) -> re.Pattern[str]:
    pieces = [re.escape(piece) for piece in glob.split(_WILDCARD)]
    return re.compile("^" + ".*".join(pieces) + "$")


def expand_pattern(
    base_dir: Path, source: Union[str, SourcePattern], *, ignore_underscore: bool = False
) -> List[Path]:
    """Expand a pattern relative to ``base_dir`` into absolute file paths.

    Literal patterns are returned as-is without checking that the file exists.
    Missing directories and empty matches are logged and yield no paths.
    """
    pattern = source if isinstance(source, SourcePattern) else parse_pattern(source)
    raw = pattern.raw
    if pattern.kind == LITERAL:
        return [_absolute(base_dir / pattern.directory)]

    directory = _absolute(base_dir / pattern.directory) if pattern.directory else _absolute(base_dir)
    if not directory.is_dir():
        _logger.warning("Directory not found for pattern %s", raw)
        return []

    if pattern.kind == FILES:
        matched = _match_files(directory, pattern, ignore_underscore)
    else:
        matched = []
        for subdir in _list_entries(directory, want_dirs=True):
            matched.extend(_match_files(subdir, pattern, ignore_underscore))

    if not matched:
        _logger.warning("No files found for pattern %s", raw)
    else:
        _logger.debug("Pattern %s matched %d file(s) in %s", raw, len(matched), directory)
    return matched


def _match_files(directory: Path, pattern: SourcePattern, ignore_underscore: bool) -> List[Path]:
    matched: List[Path] = []
    for path in _list_entries(directory, want_dirs=False):
        if not pattern.matches_name(path.name):
            continue
        if ignore_underscore and path.name.startswith("_"):
            continue
        matched.append(path)
    return matched


def _list_entries(directory: Path, *, want_dirs: bool) -> List[Path]:
    try:
        with os.scandir(directory) as iterator:
            entries = [
                entry
                for entry in iterator
                if (entry.is_dir() if want_dirs else entry.is_file())
            ]
    except OSError as exc:
        _logger.warning("Unable to read directory %s: %s", directory, exc)
        return []
    return [directory / entry.name for entry in sorted(entries, key=lambda entry: entry.name)]


def _absolute(path: Path) -> Path:
    return Path(os.path.abspath(path))


__all__ = ["expand_pattern", "parse_pattern", "FILES", "LITERAL", "NESTED"]
