"""
Path to identifier translation for model files.

A model file found under a models root maps to two names:

- a qualified identifier, each path segment camelized and joined with
  ``NAMESPACE_SEPARATOR`` (``twitter/follow.py`` -> ``Twitter.Follow``)
- a load identifier, the relative path without its extension
  (``twitter/follow``), used to ask the autoloader for the file again
"""
import re
from dataclasses import dataclass
from pathlib import Path, PurePath
from typing import Tuple, Union


NAMESPACE_SEPARATOR = "."
MODEL_EXTENSION = ".py"
DEFAULT_PATTERN = "**/*" + MODEL_EXTENSION

# Conventional location of models inside an application or engine
MODELS_ANCHOR = ("app", "models")

GLOB_CHARS = set("*?[")


def camelize(segment: str) -> str:
    """Convert a snake_case path segment to a CamelCase type name."""
    if not segment:
        raise ValueError("Cannot camelize an empty path segment")
    return "".join(part[:1].upper() + part[1:] for part in segment.split("_"))


def underscore(identifier: str) -> str:
    """
    Convert a qualified identifier back to a load identifier.
    
    ``Twitter.UserProfile`` -> ``twitter/user_profile``
    """
    segments = []
    for name in identifier.split(NAMESPACE_SEPARATOR):
        name = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", name)
        name = re.sub(r"([a-z\d])([A-Z])", r"\1_\2", name)
        segments.append(name.lower())
    return "/".join(segments)


def split_pattern(pattern: str) -> Tuple[str, str]:
    """
    Split a glob pattern into its literal root directory and glob suffix.
    
    ``/app/models/**/*.py`` -> (``/app/models``, ``**/*.py``)
    """
    parts = pattern.split("/")
    for index, part in enumerate(parts):
        if GLOB_CHARS.intersection(part):
            break
    else:
        # No wildcard: the pattern names one file
        index = len(parts) - 1
    
    root = "/".join(parts[:index])
    suffix = "/".join(parts[index:])
    if not root:
        root = "/" if pattern.startswith("/") else "."
    return root, suffix


@dataclass(frozen=True)
class ModelReference:
    """A model file and the names derived from its location."""
    root_path: Path
    relative_segments: Tuple[str, ...]
    path: Path
    
    @classmethod
    def from_path(cls, path: Union[str, PurePath], root: Union[str, PurePath],
                  strip_models_anchor: bool = False) -> 'ModelReference':
        """
        Build a reference for a file found under root.

        With strip_models_anchor, segments up to and including the last
        ``app/models`` directory in the relative path are dropped. Broad
        patterns rooted above the models directory use this to keep names
        relative to the models directory.

        Raises:
            ValueError: If path is not under root
        """
        relative = PurePath(path).relative_to(PurePath(root))
        parts = list(relative.parts)
        if not parts:
            raise ValueError(f"Empty model path: {path}")
        
        stem = parts[-1]
        if stem.endswith(MODEL_EXTENSION):
            stem = stem[:-len(MODEL_EXTENSION)]
        parts[-1] = stem
        
        if strip_models_anchor:
            anchor = len(MODELS_ANCHOR)
            for index in range(len(parts) - anchor - 1, -1, -1):
                if tuple(parts[index:index + anchor]) == MODELS_ANCHOR:
                    parts = parts[index + anchor:]
                    break

        return cls(root_path=Path(root), relative_segments=tuple(parts), path=Path(path))
    
    @property
    def qualified_name(self) -> str:
        return resolve_identifier(self)
    
    @property
    def load_identifier(self) -> str:
        return "/".join(self.relative_segments)
    
    @property
    def namespace(self) -> str:
        """Qualified name of the enclosing namespace ('' at the top level)."""
        return NAMESPACE_SEPARATOR.join(camelize(s) for s in self.relative_segments[:-1])


def resolve_identifier(reference: ModelReference) -> str:
    """Camelize each segment of the reference and join with the namespace separator."""
    if not reference.relative_segments:
        raise ValueError(f"Model reference has no path segments: {reference.path}")
    return NAMESPACE_SEPARATOR.join(camelize(s) for s in reference.relative_segments)


def is_models_root(root: Union[str, PurePath]) -> bool:
    """True when root is itself an ``app/models`` directory."""
    return tuple(PurePath(root).parts[-len(MODELS_ANCHOR):]) == MODELS_ANCHOR


def namespace_for(load_identifier: str) -> str:
    """Namespace of a load identifier: ``twitter/follow`` -> ``Twitter``."""
    segments = [s for s in load_identifier.split("/") if s][:-1]
    return NAMESPACE_SEPARATOR.join(camelize(s) for s in segments)
