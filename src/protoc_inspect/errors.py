from __future__ import annotations


class PluginError(Exception):
    """Base class for every failure the plugin reports."""


class TransportError(PluginError):
    """Raised when the input bytes are not a well-formed CodeGeneratorRequest."""


class GenerationError(PluginError):
    """Raised when an artifact cannot be built from a decoded request."""


class EncodingError(PluginError):
    """Raised when a response cannot be serialized."""
