"""Bundler configuration generation for modular frontend projects."""

from __future__ import annotations

import os
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping

from .config import VitexConfig, load_config
from .logging import configure_logging, get_logger
from .manifest import ManifestNormalizer, write_json_atomic
from .resolver import EntrypointResolver

# Bootstrap and Popper end up in one shared chunk when bundling is requested.
_BOOTSTRAP_CHUNK = "bootstrap"
_BOOTSTRAP_MODULES = ("node_modules/bootstrap", "@popperjs/core")


class ConfigGenerator:
    """Produces the bundler configuration for a project.

    Entrypoints are resolved once, on construction. The returned configuration
    is a plain JSON-compatible mapping; the bundler-side loader is expected to
    call :meth:`after_build` once the bundle and its manifest are written.
    """

    def __init__(self, config: VitexConfig) -> None:
        self.config = config
        self.root = config.root
        self.logger = get_logger("generator")
        self.resolver = EntrypointResolver(
            config.packages_dir,
            sitenames=config.sitenames,
            root_build=config.root_build,
            root_build_dir=config.root_build_dir,
        )
        self._entrypoints = MappingProxyType(self.resolver.build_entrypoints())
        self.logger.info("Resolved %d entrypoint(s)", len(self._entrypoints))

    @classmethod
    def from_file(
        cls,
        config_path: Path,
        *,
        verbose: bool = False,
        quiet: bool = False,
        log_file: Path | None = None,
    ) -> ConfigGenerator:
        """Build a generator from a vitex.yml file or the directory holding it.

        This is the entry used by the bundler-side loader, so it also installs
        the vitex log handlers.
        """
        configure_logging(verbose=verbose, quiet=quiet, log_file=log_file)
        return cls(load_config(Path(config_path)))

    @property
    def entrypoints(self) -> Mapping[str, str]:
        return self._entrypoints

    @property
    def output_dir(self) -> Path:
        return self.config.output_dir

    def resolve_static_targets(self) -> List[Dict[str, str]]:
        targets: List[Dict[str, str]] = []
        for target in self.config.static_copy_targets:
            src = target.src
            for alias in self.config.aliases:
                if src.startswith(alias.find):
                    src = alias.replacement + src[len(alias.find):]
            targets.append(
                {"src": os.path.abspath(self.root / src), "dest": target.dest}
            )
        return targets

    def resolve_aliases(self) -> List[Dict[str, str]]:
        return [
            {"find": alias.find, "replacement": os.path.abspath(self.root / alias.replacement)}
            for alias in self.config.aliases
        ]

    def bundler_config(self) -> Dict[str, Any]:
        optimize = self.config.optimize
        output: Dict[str, Any] = {
            "chunkFileNames": "assets/[name]-[hash].js",
            "entryFileNames": "assets/[name]-[hash].js",
            "assetFileNames": "assets/[name]-[hash][extname]",
        }
        if optimize.bundle_bootstrap:
            output["manualChunks"] = {_BOOTSTRAP_CHUNK: list(_BOOTSTRAP_MODULES)}

        return {
            "base": "",
            "build": {
                "manifest": True,
                "cssCodeSplit": True,
                "outDir": str(self.output_dir),
                "minify": "terser",
                "terserOptions": {
                    "compress": True,
                    "mangle": True,
                    "format": {"comments": not optimize.strip_js_comments},
                },
                "rollupOptions": {
                    "input": dict(self._entrypoints),
                    "output": output,
                },
                "cssMinify": "esbuild",
            },
            "esbuild": {"legalComments": optimize.comments_policy},
            "css": {
                "devSourcemap": True,
                "postcss": "./postcss.config.cjs",
            },
            "server": dict(self.config.server),
            "resolve": {"alias": self.resolve_aliases()},
            "staticCopy": {"targets": self.resolve_static_targets()},
        }

    def write_bundler_config(self, path: Path) -> Path:
        """Write :meth:`bundler_config` as JSON for the bundler-side loader."""
        target = Path(path)
        if not target.is_absolute():
            target = self.root / target
        write_json_atomic(target, self.bundler_config())
        self.logger.info("Bundler configuration written to %s", target)
        return target

    def manifest_normalizer(self) -> ManifestNormalizer:
        return ManifestNormalizer(
            self.config.manifest_path,
            self.resolver.naming,
            root=self.root,
        )

    def after_build(self) -> bool:
        """Post-build hook: clean the manifest the bundler just wrote."""
        return self.manifest_normalizer().run()


__all__ = ["ConfigGenerator"]
