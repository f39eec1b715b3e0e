"""Exception types raised by vitex."""

from __future__ import annotations


class VitexError(RuntimeError):
    """Base class for errors that abort configuration generation."""


class ConfigError(VitexError):
    """Raised when the configuration file cannot be parsed."""


class DeclarationError(VitexError):
    """Raised when a package entrypoint declaration file is malformed."""


class PatternError(VitexError, ValueError):
    """Raised for source patterns outside the supported wildcard shapes."""


class ManifestError(VitexError):
    """Raised when an existing bundler manifest cannot be parsed."""


__all__ = [
    "ConfigError",
    "DeclarationError",
    "ManifestError",
    "PatternError",
    "VitexError",
]
