"""Core data models shared across vitex components."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class SourcePattern:
    """A parsed entrypoint pattern such as ``Styles/*.scss`` or ``Styles/*/*.scss``."""

    raw: str
    kind: str
    directory: str
    file_regex: Optional[re.Pattern[str]] = None

    def matches_name(self, name: str) -> bool:
        if self.file_regex is None:
            return False
        return self.file_regex.match(name) is not None


@dataclass(frozen=True)
class ResolvedEntry:
    """A concrete file produced by expanding a source pattern."""

    path: Path
    pattern: SourcePattern
    site: Optional[str] = None
