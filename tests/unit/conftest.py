"""
Pytest configuration for unit tests.

Provides model-tree builders and keeps DOCBRIDGE_* settings from the
developer's environment out of the tests.
"""
import pytest
from pathlib import Path
from unittest.mock import Mock

from docbridge.loader import ModelLoader


MODEL_TEMPLATE = '''
class {name}:
    index_calls = 0

    @classmethod
    def is_persistent_document(cls):
        return {document}

    @classmethod
    def is_embedded(cls):
        return {embedded}

    @classmethod
    def create_indexes(cls):
        cls.index_calls += 1
'''


@pytest.fixture(autouse=True)
def clean_docbridge_env(monkeypatch):
    """Unset DOCBRIDGE_* variables for every test."""
    for name in ("DOCBRIDGE_CONFIG", "DOCBRIDGE_PRELOAD_MODELS", "DOCBRIDGE_MODEL_PATHS"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def loader():
    """A fresh loader with its own registry and autoloader."""
    return ModelLoader()


@pytest.fixture
def write_model():
    """
    Write a model file defining one class.
    
    Usage: write_model(root, "twitter/follow.py", "Follow", embedded=False)
    """
    def _write(root: Path, relative: str, class_name: str,
               document: bool = True, embedded: bool = False) -> Path:
        path = Path(root) / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(MODEL_TEMPLATE.format(name=class_name, document=document, embedded=embedded))
        return path
    return _write


@pytest.fixture
def document_class():
    """
    Build an in-memory document class whose create_indexes is a Mock.
    
    Usage: document_class("Follow", embedded=False)
    """
    def _build(name: str, document: bool = True, embedded: bool = False) -> type:
        return type(name, (), {
            "is_persistent_document": classmethod(lambda cls: document),
            "is_embedded": classmethod(lambda cls: embedded),
            "create_indexes": Mock(name=f"{name}.create_indexes"),
        })
    return _build
