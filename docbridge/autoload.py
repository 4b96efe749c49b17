"""
Load-by-name primitive for model source files.

Model files are plain Python files under one or more load paths; they are
not required to live on sys.path or inside a package. Each file is
imported at most once per Autoloader.
"""
import hashlib
import importlib.util
import logging
import sys
from pathlib import Path
from types import ModuleType
from typing import Dict, Iterable, List, Optional, Union

from docbridge.errors import ModelLoadError
from docbridge.naming import MODEL_EXTENSION


logger = logging.getLogger(__name__)

MODULE_PREFIX = "docbridge_models"


class Autoloader:
    """Locates and imports model files by load identifier or path."""
    
    def __init__(self, load_paths: Optional[Iterable[Union[str, Path]]] = None):
        self.load_paths: List[Path] = []
        self._loaded: Dict[Path, ModuleType] = {}
        for path in load_paths or []:
            self.add_load_path(path)
    
    def add_load_path(self, path: Union[str, Path]) -> None:
        """Append a directory to the search list (ignored if already present)."""
        path = Path(path)
        if path not in self.load_paths:
            self.load_paths.append(path)
    
    def locate(self, identifier: str) -> Path:
        """
        Find the source file for a load identifier such as ``twitter/follow``.
        
        Raises:
            ModelLoadError: If no load path contains the file
        """
        relative = identifier + MODEL_EXTENSION
        for load_path in self.load_paths:
            candidate = load_path / relative
            if candidate.is_file():
                return candidate
        searched = ", ".join(str(p) for p in self.load_paths) or "(no load paths)"
        raise ModelLoadError(
            f"No such file to load -- {identifier} (searched: {searched})",
            identifier=identifier
        )
    
    def require(self, identifier: str) -> ModuleType:
        """Load the file for identifier unless it is already loaded."""
        return self.load_file(self.locate(identifier), identifier)
    
    def is_loaded(self, path: Union[str, Path]) -> bool:
        return Path(path).resolve() in self._loaded
    
    def load_file(self, path: Union[str, Path], identifier: Optional[str] = None) -> ModuleType:
        """
        Import a model file once, keyed by its resolved path.
        
        Raises:
            ModelLoadError: If the file does not exist or fails to import
        """
        path = Path(path).resolve()
        module = self._loaded.get(path)
        if module is not None:
            return module
        
        if not path.is_file():
            raise ModelLoadError(f"No such file to load -- {path}", identifier=identifier, path=path)
        
        module_name = self._module_name(path)
        spec = importlib.util.spec_from_file_location(module_name, path)
        if spec is None or spec.loader is None:
            raise ModelLoadError(f"Cannot import {path}", identifier=identifier, path=path)
        
        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        try:
            spec.loader.exec_module(module)
        except Exception as e:
            sys.modules.pop(module_name, None)
            raise ModelLoadError(
                f"Failed to load {path}: {type(e).__name__}: {e}",
                identifier=identifier,
                path=path
            ) from e
        
        self._loaded[path] = module
        logger.debug(f"Loaded {path} as {module_name}")
        return module
    
    @staticmethod
    def _module_name(path: Path) -> str:
        # Same file -> same module name across runs; different roots never collide
        digest = hashlib.sha1(str(path).encode("utf-8")).hexdigest()[:12]
        return f"{MODULE_PREFIX}_{path.stem}_{digest}"
