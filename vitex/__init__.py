"""Entrypoint discovery and manifest cleanup for modular Vite builds."""

from .config import VitexConfig, load_config
from .errors import ConfigError, DeclarationError, ManifestError, PatternError, VitexError
from .generator import ConfigGenerator
from .manifest import ManifestNormalizer
from .naming import NamingRule, entry_name
from .resolver import EntrypointResolver

__all__ = [
    "ConfigError",
    "ConfigGenerator",
    "DeclarationError",
    "EntrypointResolver",
    "ManifestError",
    "ManifestNormalizer",
    "NamingRule",
    "PatternError",
    "VitexConfig",
    "VitexError",
    "entry_name",
    "load_config",
]
