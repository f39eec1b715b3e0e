"""Configuration loading for vitex (vitex.yml)."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .errors import ConfigError

CONFIG_FILENAME = "vitex.yml"

DEFAULT_ROOT_BUILD_PATTERNS = (
    "Styles/*.scss",
    "JavaScript/*.js",
    "Styles/*/*.scss",
    "JavaScript/*/*.js",
)

COMMENT_POLICIES = ("none", "eof", "inline")

# Relative to the output directory; Vite writes its manifest here when build.manifest is on.
MANIFEST_RELATIVE_PATH = Path(".vite") / "manifest.json"


@dataclass
class Alias:
    """Module alias passed through to the bundler's resolver."""

    find: str
    replacement: str


@dataclass
class StaticCopyTarget:
    """Files copied verbatim into the output directory."""

    src: str
    dest: str


@dataclass
class OptimizeConfig:
    """Output optimization flags."""

    bundle_bootstrap: bool = True
    strip_js_comments: bool = True
    comments_policy: str = "none"


@dataclass
class RootBuildConfig:
    """Discovery of entrypoints in the project-level frontend folder."""

    enabled: bool = True
    path: str = "Build/Frontend"
    patterns: List[str] = field(default_factory=lambda: list(DEFAULT_ROOT_BUILD_PATTERNS))
    ignore_underscore: bool = False

    def __post_init__(self) -> None:
        # An empty list falls back to the default patterns.
        if not self.patterns:
            self.patterns = list(DEFAULT_ROOT_BUILD_PATTERNS)


@dataclass
class VitexConfig:
    """Represents the settings defined in vitex.yml."""

    root: Path
    sitenames: List[str] = field(default_factory=list)
    output_path: str = "public/assets/"
    packages_path: str = "packages"
    aliases: List[Alias] = field(default_factory=list)
    static_copy_targets: List[StaticCopyTarget] = field(default_factory=list)
    server: Dict[str, Any] = field(default_factory=dict)
    optimize: OptimizeConfig = field(default_factory=OptimizeConfig)
    root_build: RootBuildConfig = field(default_factory=RootBuildConfig)

    def __post_init__(self) -> None:
        self.root = Path(os.path.abspath(self.root))
        if self.optimize.comments_policy not in COMMENT_POLICIES:
            allowed = ", ".join(COMMENT_POLICIES)
            raise ConfigError(
                f"optimize.comments_policy must be one of {allowed}, "
                f"got {self.optimize.comments_policy!r}"
            )

    @property
    def output_dir(self) -> Path:
        return Path(os.path.abspath(self.root / self.output_path))

    @property
    def packages_dir(self) -> Path:
        return self.root / self.packages_path

    @property
    def root_build_dir(self) -> Path:
        return self.root / self.root_build.path

    @property
    def manifest_path(self) -> Path:
        """Location of the manifest the bundler emits below the output directory."""
        return self.output_dir / MANIFEST_RELATIVE_PATH


def load_config(config_path: Path) -> VitexConfig:
    """Load configuration from disk."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return VitexConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    defaults = VitexConfig(root=root)

    optimize = OptimizeConfig()
    optimize_data = _as_dict(data.get("optimize"))
    if optimize_data:
        optimize = OptimizeConfig(
            bundle_bootstrap=_as_bool(optimize_data.get("bundle_bootstrap"), True),
            strip_js_comments=_as_bool(optimize_data.get("strip_js_comments"), True),
            comments_policy=_as_str(optimize_data.get("comments_policy")) or "none",
        )

    root_build = RootBuildConfig()
    root_build_data = _as_dict(data.get("root_build"))
    if root_build_data:
        root_build = RootBuildConfig(
            enabled=_as_bool(root_build_data.get("enabled"), True),
            path=_as_str(root_build_data.get("path")) or root_build.path,
            patterns=_as_str_list(root_build_data.get("patterns")),
            ignore_underscore=_as_bool(root_build_data.get("ignore_underscore"), False),
        )

    aliases: List[Alias] = []
    for item in _as_list(data.get("aliases")):
        mapping = _as_dict(item)
        find = _as_str(mapping.get("find"))
        replacement = _as_str(mapping.get("replacement"))
        if not find or replacement is None:
            raise ConfigError("Each alias requires 'find' and 'replacement'")
        aliases.append(Alias(find=find, replacement=replacement))

    targets: List[StaticCopyTarget] = []
    for item in _as_list(data.get("static_copy_targets")):
        mapping = _as_dict(item)
        src = _as_str(mapping.get("src"))
        dest = _as_str(mapping.get("dest"))
        if not src or dest is None:
            raise ConfigError("Each static copy target requires 'src' and 'dest'")
        targets.append(StaticCopyTarget(src=src, dest=dest))

    return VitexConfig(
        root=root,
        sitenames=_as_str_list(data.get("sitenames")),
        output_path=_as_str(data.get("output_path")) or defaults.output_path,
        packages_path=_as_str(data.get("packages_path")) or defaults.packages_path,
        aliases=aliases,
        static_copy_targets=targets,
        server=_as_dict(data.get("server")),
        optimize=optimize,
        root_build=root_build,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_bool(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return default


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = [
    "Alias",
    "ConfigError",
    "OptimizeConfig",
    "RootBuildConfig",
    "StaticCopyTarget",
    "VitexConfig",
    "load_config",
]
