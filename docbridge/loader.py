"""
Model discovery, loading and index creation.

ModelLoader ties the pieces together:

- enumerate model files under one or more roots
- derive a qualified identifier from each relative path
- load each file once and resolve the identifier through the registry
- ask every persistent, non-embedded document to create its indexes

Two discovery modes exist. ``create_indexes`` is strict: any load,
resolution or index-creation error aborts the pass and reaches the caller
unchanged. ``discover_models`` is tolerant: every file yields a result,
and failures are reported as skips with a reason.
"""
import glob
import inspect
import logging
import os
from pathlib import PurePath
from types import ModuleType
from typing import Iterable, Iterator, List, Optional, Union

from docbridge.autoload import Autoloader
from docbridge.config import HostConfig
from docbridge.discovery import DiscoveryResult, ModelFound, ModelSkipped, SkipReason
from docbridge.documents import describe_model, is_document, is_embedded, is_indexable
from docbridge.errors import ModelLoadError, NameResolutionError
from docbridge.naming import (
    DEFAULT_PATTERN,
    NAMESPACE_SEPARATOR,
    ModelReference,
    is_models_root,
    namespace_for,
    resolve_identifier,
    split_pattern,
    underscore,
)
from docbridge.registry import ModelRegistry


logger = logging.getLogger(__name__)

PACKAGE_MARKER = "__init__.py"

PathLike = Union[str, PurePath]


class ModelLoader:
    """Loads model files and drives index creation for document types."""
    
    def __init__(self, registry: Optional[ModelRegistry] = None,
                 autoloader: Optional[Autoloader] = None):
        self.registry = registry if registry is not None else ModelRegistry()
        self.autoloader = autoloader if autoloader is not None else Autoloader()
    
    def enumerate_models(self, root_dirs: Union[PathLike, Iterable[PathLike]],
                         pattern: str = DEFAULT_PATTERN,
                         strip_models_anchor: bool = False) -> Iterator[ModelReference]:
        """
        Yield a reference for every file matching pattern under each root.
        
        Files come out in glob order, root by root. Package markers
        (``__init__.py``) are not models and are skipped. With
        strip_models_anchor, names are taken relative to the innermost
        ``app/models`` directory below the root.
        """
        if isinstance(root_dirs, (str, PurePath)):
            root_dirs = [root_dirs]
        
        for root in root_dirs:
            for file_path in glob.glob(os.path.join(str(root), pattern), recursive=True):
                if os.path.basename(file_path) == PACKAGE_MARKER:
                    continue
                yield ModelReference.from_path(file_path, root, strip_models_anchor)
    
    def resolve_identifier(self, reference: ModelReference) -> str:
        return resolve_identifier(reference)
    
    def load_and_ensure_defined(self, identifier: str, source: Optional[PathLike] = None) -> type:
        """
        Return the type registered as identifier, loading its file if needed.
        
        Only an exact registration short-circuits the load. Otherwise the
        file is loaded and its classes registered. A file kept in a
        subdirectory may expose a top-level class instead
        (``twitter/unfollow.py`` importing ``Unfollow``): a class the module
        exposes under the bare final segment is registered as identifier.
        Classes the file does not expose never satisfy identifier.
        
        Args:
            identifier: Qualified identifier, e.g. ``Twitter.Follow``
            source: File defining it; located through the autoloader when omitted
        
        Raises:
            ModelLoadError: If the file is missing or fails to import
            NameResolutionError: If the file loaded but defined no such type
        """
        model = self.registry.lookup(identifier)
        if model is not None:
            return model
        
        if source is not None:
            module = self.autoloader.load_file(source, underscore(identifier))
        else:
            module = self.autoloader.require(underscore(identifier))
        
        namespace, _, bare_name = identifier.rpartition(NAMESPACE_SEPARATOR)
        registered = self.registry.register_module(module, namespace)
        if identifier not in registered:
            exposed = getattr(module, bare_name, None)
            if inspect.isclass(exposed):
                self.registry.register(exposed, identifier)
        return self.registry.resolve(identifier)
    
    def create_indexes(self, pattern: PathLike) -> List[type]:
        """
        Create indexes for every document type whose file matches pattern.
        
        Each persistent, non-embedded document is indexed once, however many
        matched files resolve to it. Errors are not caught: the first failure
        stops the pass and already-indexed models stay indexed.
        
        Returns:
            Models whose indexes were created, in creation order
        """
        return self.create_indexes_for([pattern])
    
    def create_indexes_for(self, patterns: Iterable[PathLike]) -> List[type]:
        """Like create_indexes over several patterns, indexing each model once overall."""
        indexed: List[type] = []
        
        for reference in self._enumerate_patterns(patterns):
            model = self.load_and_ensure_defined(reference.qualified_name, source=reference.path)
            
            if not is_indexable(model):
                logger.info(f"Not a parent document model: {reference.path}")
                continue
            if any(model is seen for seen in indexed):
                continue
            
            model.create_indexes()
            indexed.append(model)
            logger.info(f"Generated indexes for {describe_model(model)}")
        
        return indexed
    
    def _enumerate_patterns(self, patterns: Iterable[PathLike]) -> Iterator[ModelReference]:
        for pattern in patterns:
            root, suffix = split_pattern(str(pattern))
            yield from self.enumerate_models([root], suffix, strip_models_anchor=not is_models_root(root))
    
    def discover_models(self, pattern: PathLike) -> List[DiscoveryResult]:
        """
        Scan files matching pattern without raising for any single file.
        
        Returns:
            One ModelFound or ModelSkipped per matched file, in glob order
        """
        return [self._discover(reference) for reference in self._enumerate_patterns([pattern])]
    
    def _discover(self, reference: ModelReference) -> DiscoveryResult:
        try:
            model = self.load_and_ensure_defined(reference.qualified_name, source=reference.path)
        except ModelLoadError as e:
            logger.debug(f"Skipping {reference.path}: {e}")
            return ModelSkipped(reference, SkipReason.LOAD_FAILED, e)
        except NameResolutionError as e:
            logger.debug(f"Skipping {reference.path}: {e}")
            return ModelSkipped(reference, SkipReason.UNRESOLVED, e)
        
        if not is_document(model):
            return ModelSkipped(reference, SkipReason.NOT_DOCUMENT)
        if is_embedded(model):
            return ModelSkipped(reference, SkipReason.EMBEDDED)
        return ModelFound(reference, model)
    
    def preload_models(self, config: HostConfig) -> bool:
        """
        Load every model up front, unless preloading is switched off.
        
        Returns:
            True if models were loaded, False if preloading is disabled
        """
        if not config.preload_models:
            logger.debug("Model preloading disabled, leaving models to on-demand loading")
            return False
        self.load_models(config)
        return True
    
    def load_models(self, config: HostConfig) -> None:
        """
        Load every model file under every model root, regardless of the toggle.
        
        Roots are application model directories followed by engine model
        directories. Within a root, files load in sorted path order.
        """
        for root in config.model_paths():
            self.autoloader.add_load_path(root)
            references = sorted(self.enumerate_models([root]), key=lambda r: str(r.path))
            for reference in references:
                self.load_model(reference.load_identifier)
    
    def load_model(self, identifier: str) -> ModuleType:
        """
        Load a model file by load identifier, e.g. ``twitter/follow``.
        
        Raises:
            ModelLoadError: If no load path has the file or it fails to import
        """
        module = self.autoloader.require(identifier)
        self.registry.register_module(module, namespace_for(identifier))
        return module
