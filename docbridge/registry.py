"""
Explicit registry of model types by qualified identifier.

Types get here in two ways: the loader registers every class a model file
defines right after loading it, and host code can register classes
directly. Lookups never reflect over the running process.
"""
import inspect
import logging
from types import ModuleType
from typing import Dict, Iterator, List, Optional

from docbridge.errors import NameResolutionError
from docbridge.naming import NAMESPACE_SEPARATOR


logger = logging.getLogger(__name__)


class ModelRegistry:
    """Maps qualified identifiers (``Twitter.Follow``) to classes."""
    
    def __init__(self):
        self._models: Dict[str, type] = {}
    
    def register(self, model: type, name: Optional[str] = None) -> type:
        """
        Register a class under name, or under its own class name.
        
        Returns the class so this can be used as a decorator.
        """
        name = name or model.__name__
        existing = self._models.get(name)
        if existing is not None and existing is not model:
            logger.warning(f"Rebinding model {name} from {existing!r} to {model!r}")
        self._models[name] = model
        logger.debug(f"Registered model {name}")
        return model
    
    def register_module(self, module: ModuleType, namespace: str = "") -> List[str]:
        """
        Register every class defined in module under namespace.
        
        Classes imported into the module from elsewhere are ignored.
        
        Returns:
            Qualified identifiers that were registered
        """
        registered = []
        for attr_name, value in vars(module).items():
            if not inspect.isclass(value) or value.__module__ != module.__name__:
                continue
            name = f"{namespace}{NAMESPACE_SEPARATOR}{attr_name}" if namespace else attr_name
            self.register(value, name)
            registered.append(name)
        return registered
    
    def lookup(self, identifier: str) -> Optional[type]:
        """Find the class registered under exactly identifier, or None."""
        return self._models.get(identifier)
    
    def resolve(self, identifier: str) -> type:
        """Like lookup, but raise NameResolutionError when nothing matches."""
        model = self.lookup(identifier)
        if model is None:
            raise NameResolutionError(identifier)
        return model
    
    def names(self) -> List[str]:
        return sorted(self._models)
    
    def __contains__(self, identifier: str) -> bool:
        return self.lookup(identifier) is not None
    
    def __iter__(self) -> Iterator[str]:
        return iter(self.names())
    
    def __len__(self) -> int:
        return len(self._models)
