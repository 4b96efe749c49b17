"""
Capability seam between docbridge and the document mapper.

docbridge never subclasses or imports the mapper. A model class takes part
in index creation when it answers the three calls in DocumentType.
"""
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class DocumentType(Protocol):
    """What a document mapper class must expose."""
    
    @classmethod
    def is_persistent_document(cls) -> bool: ...
    
    @classmethod
    def is_embedded(cls) -> bool: ...
    
    @classmethod
    def create_indexes(cls) -> None: ...


def is_document(model: Any) -> bool:
    """True if model reports itself as a persistent document type."""
    check = getattr(model, "is_persistent_document", None)
    return callable(check) and bool(check())


def is_embedded(model: Any) -> bool:
    check = getattr(model, "is_embedded", None)
    return callable(check) and bool(check())


def is_indexable(model: Any) -> bool:
    """Persistent, top-level documents get their own indexes."""
    return is_document(model) and not is_embedded(model)


def describe_model(model: Any) -> str:
    return getattr(model, "__qualname__", None) or getattr(model, "__name__", None) or repr(model)
