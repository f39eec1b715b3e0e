"""Post-build cleanup of the bundler manifest (.vite/manifest.json)."""

from __future__ import annotations

import json
import os
import posixpath
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional

from .errors import ManifestError
from .logging import get_logger
from .naming import NamingRule, is_entry_asset

_logger = get_logger("manifest")


def normalize_manifest_path(value: str) -> str:
    """Use forward slashes and drop a leading ``./``."""
    normalized = value.replace("\\", "/")
    if normalized.startswith("./"):
        normalized = normalized[2:]
    return normalized


def is_self_import(src: str, import_path: str) -> bool:
    """Return True when ``import_path`` refers to the entry's own source file."""
    normalized_src = normalize_manifest_path(src)
    normalized_import = normalize_manifest_path(import_path)
    if normalized_import == normalized_src:
        return True
    # "./x" written relative to the importing file
    if import_path.replace("\\", "/").startswith("./"):
        sibling = posixpath.join(posixpath.dirname(normalized_src), normalized_import)
        return posixpath.normpath(sibling) == posixpath.normpath(normalized_src)
    return False


class ManifestNormalizer:
    """Removes self-imports and rewrites entry names in the bundler manifest.

    Names are recomputed with the same :class:`NamingRule` used when the entry
    inputs were generated, so manifest names line up with build-time names.
    Assets other than scripts and styles lose their ``name`` field.
    """

    def __init__(self, manifest_path: Path, naming: NamingRule, *, root: Path | None = None) -> None:
        self.manifest_path = Path(manifest_path)
        self.naming = naming
        self.root = Path(root) if root is not None else Path.cwd()

    def load(self) -> Optional[Dict[str, Any]]:
        """Return the parsed manifest, or None when the bundler wrote none."""
        if not self.manifest_path.exists():
            _logger.warning("Manifest not found at %s. Skipping cleanup.", self.manifest_path)
            return None
        try:
            data = json.loads(self.manifest_path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise ManifestError(f"Invalid JSON in {self.manifest_path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ManifestError(f"{self.manifest_path} must contain a JSON object")
        return data

    def clean(self, manifest: Dict[str, Any]) -> Dict[str, Any]:
        return {key: self.clean_entry(entry) for key, entry in manifest.items()}

    def clean_entry(self, entry: Any) -> Any:
        if not isinstance(entry, dict):
            return entry
        cleaned = dict(entry)
        src = cleaned.get("src")
        if not isinstance(src, str):
            return cleaned

        imports = cleaned.get("imports")
        if isinstance(imports, list):
            kept: List[Any] = []
            for item in imports:
                if not isinstance(item, str):
                    kept.append(item)
                    continue
                if is_self_import(src, item):
                    _logger.info("Removed self-import: %s", normalize_manifest_path(item))
                    continue
                kept.append(normalize_manifest_path(item))
            cleaned["imports"] = kept

        if is_entry_asset(src):
            cleaned["name"] = self.naming.name_for(self.root / normalize_manifest_path(src))
        else:
            cleaned.pop("name", None)
        return cleaned

    def persist(self, manifest: Dict[str, Any]) -> None:
        write_json_atomic(self.manifest_path, manifest)
        _logger.info("Cleaned manifest written to %s", self.manifest_path)

    def run(self) -> bool:
        """Load, clean and write back the manifest; return whether it was rewritten."""
        manifest = self.load()
        if manifest is None:
            return False
        self.persist(self.clean(manifest))
        return True


def write_json_atomic(path: Path, payload: Any) -> None:
    """Write ``payload`` as indented JSON, replacing ``path`` only once fully written."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    # mkstemp creates 0600 files; keep the target readable by the web server.
    mode = path.stat().st_mode & 0o777 if path.exists() else 0o644
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            json.dump(payload, handle, indent=2, ensure_ascii=False)
            handle.flush()
            os.fsync(handle.fileno())
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise


__all__ = [
    "ManifestNormalizer",
    "is_self_import",
    "normalize_manifest_path",
    "write_json_atomic",
]
