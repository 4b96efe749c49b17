"""
Error types raised while loading and resolving models.

Index-creation failures are not listed here: they are raised by the
document mapper itself and propagate untouched.
"""
from pathlib import Path
from typing import Optional


class DocbridgeError(Exception):
    """Base class for docbridge errors."""


class ModelLoadError(DocbridgeError):
    """A model source file is missing or could not be imported."""

    def __init__(self, message: str, identifier: Optional[str] = None, path: Optional[Path] = None):
        super().__init__(message)
        self.identifier = identifier
        self.path = path


class NameResolutionError(DocbridgeError):
    """No type with the expected identifier exists after loading."""

    def __init__(self, identifier: str, message: Optional[str] = None):
        super().__init__(message or f"Uninitialized model: {identifier}")
        self.identifier = identifier
