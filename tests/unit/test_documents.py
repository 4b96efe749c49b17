"""
Unit tests for the document capability checks.
"""
from unittest.mock import Mock

from docbridge.documents import (
    DocumentType,
    describe_model,
    is_document,
    is_embedded,
    is_indexable,
)


class TestCapabilities:
    """Test which classes count as indexable documents."""
    
    def test_top_level_document(self, document_class):
        person = document_class("Person")
        
        assert isinstance(person, DocumentType)
        assert is_document(person)
        assert not is_embedded(person)
        assert is_indexable(person)
    
    def test_embedded_document(self, document_class):
        address = document_class("Address", embedded=True)
        
        assert is_document(address)
        assert is_embedded(address)
        assert not is_indexable(address)
    
    def test_non_document_answering_the_calls(self, document_class):
        assert not is_indexable(document_class("Report", document=False))
    
    def test_plain_class(self):
        class Helper:
            pass
        
        assert not isinstance(Helper, DocumentType)
        assert not is_document(Helper)
        assert not is_embedded(Helper)
        assert not is_indexable(Helper)
    
    def test_non_callable_attribute_ignored(self):
        class Odd:
            is_persistent_document = True
        
        assert not is_document(Odd)


class TestDescribeModel:
    
    def test_class_qualname(self, document_class):
        assert describe_model(document_class("Carrot")) == "Carrot"
    
    def test_falls_back_to_repr(self):
        model = Mock(spec=[])
        assert describe_model(model) == repr(model)
