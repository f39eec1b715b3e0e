"""Logical entry names shared by entrypoint generation and manifest cleanup."""

from __future__ import annotations

import os
import re
from pathlib import Path, PurePath
from typing import Mapping, Optional, Sequence, Union

PathLike = Union[str, PurePath]

SCRIPT_EXTENSIONS = (".js",)
STYLE_EXTENSIONS = (".scss",)
ENTRY_EXTENSIONS = SCRIPT_EXTENSIONS + STYLE_EXTENSIONS

GLOBAL_NAMESPACE = "global"

_SEPARATORS = re.compile(r"[\\/]+")


def is_entry_asset(path: PathLike) -> bool:
    """Return True for script and style sources, which receive logical names."""
    return str(path).endswith(ENTRY_EXTENSIONS)


def entry_name(path: PathLike, sitenames: Sequence[str], hint: Optional[str] = None) -> str:
    """Derive the namespaced logical name for ``path``.

    Non script/style paths are returned unchanged. Otherwise the lower-cased
    file stem is prefixed with the hinted site, the site matching the parent
    directory (case-insensitively), or ``global``.
    """
    text = str(path)
    if not is_entry_asset(text):
        return text

    segments = [segment for segment in _SEPARATORS.split(text) if segment]
    stem = os.path.splitext(segments[-1])[0].lower()

    if hint:
        return f"{hint}_{stem}"

    parent = segments[-2].lower() if len(segments) > 1 else ""
    for site in sitenames:
        if site.lower() == parent:
            return f"{site}_{stem}"
    return f"{GLOBAL_NAMESPACE}_{stem}"


def detect_site(path: PathLike, sitenames: Sequence[str]) -> Optional[str]:
    """Return the first configured site appearing as any segment of ``path``."""
    segments = {segment.lower() for segment in _SEPARATORS.split(str(path)) if segment}
    for site in sitenames:
        if site.lower() in segments:
            return site
    return None


class NamingRule:
    """Binds the site list and the site hints recorded during discovery."""

    def __init__(self, sitenames: Sequence[str], hints: Mapping[str, str] | None = None) -> None:
        self.sitenames = list(sitenames)
        self._hints = hints if hints is not None else {}

    def hint_for(self, path: PathLike) -> Optional[str]:
        return self._hints.get(hint_key(path))

    def name_for(self, path: PathLike) -> str:
        return entry_name(path, self.sitenames, self.hint_for(path))


def hint_key(path: PathLike) -> str:
    """Key used for the site-hint table: the absolute, normalized path."""
    return os.path.abspath(Path(path))


__all__ = [
    "ENTRY_EXTENSIONS",
    "NamingRule",
    "detect_site",
    "entry_name",
    "hint_key",
    "is_entry_asset",
]
