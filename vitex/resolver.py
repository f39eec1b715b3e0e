"""Entrypoint discovery across packages and the project root build folder."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, List, Sequence, Set

from .config import RootBuildConfig
from .errors import DeclarationError
from .logging import get_logger
from .models import ResolvedEntry, SourcePattern
from .naming import NamingRule, detect_site, entry_name, hint_key
from .patterns import expand_pattern, parse_pattern

DECLARATION_PATH = Path("Configuration") / "ViteEntrypoints.json"


class EntrypointResolver:
    """Collects entrypoint files and assigns each a unique logical name.

    Root build entries are discovered first so that their site hints are in
    place before names are derived; package entries follow in package order.
    """

    def __init__(
        self,
        packages_dir: Path,
        *,
        sitenames: Sequence[str] = (),
        root_build: RootBuildConfig | None = None,
        root_build_dir: Path | None = None,
    ) -> None:
        self.packages_dir = Path(packages_dir)
        self.sitenames = list(sitenames)
        self.root_build = root_build or RootBuildConfig()
        self.root_build_dir = Path(root_build_dir or Path.cwd() / self.root_build.path)
        self._site_hints: Dict[str, str] = {}
        self.naming = NamingRule(self.sitenames, self._site_hints)
        self.logger = get_logger("resolver")

    def find_declaration_files(self) -> List[Path]:
        """Return ``ViteEntrypoints.json`` files found in package directories."""
        if not self.packages_dir.exists():
            self.logger.warning("packagesPath not found: %s", self.packages_dir)
            return []
        try:
            packages = sorted(entry for entry in self.packages_dir.iterdir() if entry.is_dir())
        except OSError as exc:
            self.logger.warning("Unable to read packagesPath %s: %s", self.packages_dir, exc)
            return []

        declarations = [package / DECLARATION_PATH for package in packages]
        return [path for path in declarations if path.is_file()]

    def discover_package_entries(self) -> List[ResolvedEntry]:
        entries: List[ResolvedEntry] = []
        for declaration in self.find_declaration_files():
            base_dir = declaration.parent
            for raw in _read_declaration(declaration):
                pattern = parse_pattern(raw)
                for path in self._expand(base_dir, pattern):
                    entries.append(ResolvedEntry(path=path, pattern=pattern))
        return entries

    def discover_root_entries(self) -> List[ResolvedEntry]:
        if not self.root_build.enabled:
            return []
        if not self.root_build_dir.is_dir():
            self.logger.warning("Root build folder not found: %s", self.root_build_dir)
            return []

        entries: List[ResolvedEntry] = []
        for raw in self.root_build.patterns:
            pattern = parse_pattern(raw)
            for path in self._expand(self.root_build_dir, pattern):
                key = hint_key(path)
                if key not in self._site_hints:
                    site = detect_site(path, self.sitenames)
                    if site:
                        self._site_hints[key] = site
                entries.append(
                    ResolvedEntry(path=path, pattern=pattern, site=self._site_hints.get(key))
                )
        return entries

    def discover(self) -> List[ResolvedEntry]:
        return [*self.discover_root_entries(), *self.discover_package_entries()]

    def build_entrypoints(self) -> Dict[str, str]:
        """Map logical entry names to absolute file paths.

        The first file claims the bare name; later files with the same name get
        ``_<map size>`` appended. A path that was already registered is
        skipped.
        """
        entrypoints: Dict[str, str] = {}
        registered: Set[str] = set()
        for entry in self.discover():
            target = str(entry.path)
            if target in registered:
                continue
            registered.add(target)

            name = entry_name(entry.path, self.sitenames, entry.site)
            if name not in entrypoints:
                entrypoints[name] = target
                continue

            self.logger.warning("Duplicate entry name detected: %s. Renaming...", name)
            suffix = len(entrypoints)
            while f"{name}_{suffix}" in entrypoints:
                suffix += 1
            entrypoints[f"{name}_{suffix}"] = target
        return entrypoints

    def _expand(self, base_dir: Path, pattern: SourcePattern) -> List[Path]:
        return expand_pattern(base_dir, pattern, ignore_underscore=self.root_build.ignore_underscore)


def _read_declaration(path: Path) -> List[str]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise DeclarationError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, list) or not all(isinstance(item, str) for item in data):
        raise DeclarationError(f"{path} must contain a JSON list of path patterns")
    return data


__all__ = ["DECLARATION_PATH", "EntrypointResolver"]
