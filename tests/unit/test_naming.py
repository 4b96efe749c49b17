"""
Unit tests for path to identifier translation.
"""
import pytest
from pathlib import Path

from docbridge.naming import (
    ModelReference,
    camelize,
    is_models_root,
    namespace_for,
    resolve_identifier,
    split_pattern,
    underscore,
)


class TestCamelize:
    """Test segment camelization."""
    
    def test_single_word(self):
        assert camelize("twitter") == "Twitter"
    
    def test_snake_case(self):
        assert camelize("user_profile") == "UserProfile"
    
    def test_already_capitalized(self):
        assert camelize("Carrot") == "Carrot"
    
    def test_empty_segment_rejected(self):
        with pytest.raises(ValueError):
            camelize("")


class TestUnderscore:
    """Test qualified identifier to load identifier conversion."""
    
    def test_namespaced(self):
        assert underscore("Twitter.UserProfile") == "twitter/user_profile"
    
    def test_top_level(self):
        assert underscore("Carrot") == "carrot"
    
    def test_acronym(self):
        assert underscore("HTMLParser") == "html_parser"


class TestSplitPattern:
    """Test splitting a glob into literal root and suffix."""
    
    @pytest.mark.parametrize("pattern,expected", [
        ("/app/models/**/*.py", ("/app/models", "**/*.py")),
        ("spec/app/models/**/*.py", ("spec/app/models", "**/*.py")),
        ("/gem_path/engines/some_engine_gem/app/models/**/*.py",
         ("/gem_path/engines/some_engine_gem/app/models", "**/*.py")),
        ("**/*.py", (".", "**/*.py")),
        ("/*.py", ("/", "*.py")),
        ("/app/models/user.py", ("/app/models", "user.py")),
        ("/app/models/user_[ab].py", ("/app/models", "user_[ab].py")),
    ])
    def test_split(self, pattern, expected):
        assert split_pattern(pattern) == expected


class TestModelReference:
    """Test references derived from file paths."""
    
    def test_namespaced_model(self):
        """Subdirectories become namespaces."""
        ref = ModelReference.from_path("/app/models/twitter/follow.py", "/app/models")
        
        assert ref.relative_segments == ("twitter", "follow")
        assert ref.qualified_name == "Twitter.Follow"
        assert ref.load_identifier == "twitter/follow"
        assert ref.namespace == "Twitter"
        assert ref.root_path == Path("/app/models")
        assert ref.path == Path("/app/models/twitter/follow.py")
    
    def test_top_level_model(self):
        ref = ModelReference.from_path("/app/models/carrot.py", "/app/models")
        
        assert ref.qualified_name == "Carrot"
        assert ref.load_identifier == "carrot"
        assert ref.namespace == ""
    
    def test_nested_namespaces(self):
        ref = ModelReference.from_path("/m/admin/billing/line_item.py", "/m")
        assert ref.qualified_name == "Admin.Billing.LineItem"
    
    def test_models_directory_below_root_is_stripped(self):
        """A root above app/models still yields engine-relative names."""
        ref = ModelReference.from_path(
            "/gem_path/engines/some_engine_gem/app/models/carrot.py",
            "/gem_path",
            strip_models_anchor=True
        )
        assert ref.relative_segments == ("carrot",)
        assert ref.qualified_name == "Carrot"
    
    def test_models_directory_kept_by_default(self):
        """Without stripping, the name stays relative to the root."""
        ref = ModelReference.from_path("/srv/models/app/models/carrot.py", "/srv/models")
        
        assert ref.relative_segments == ("app", "models", "carrot")
        assert ref.load_identifier == "app/models/carrot"
    
    def test_path_outside_root_rejected(self):
        with pytest.raises(ValueError):
            ModelReference.from_path("/elsewhere/user.py", "/app/models")
    
    def test_resolve_identifier_requires_segments(self):
        ref = ModelReference(root_path=Path("/app/models"), relative_segments=(), path=Path("/app/models"))
        with pytest.raises(ValueError):
            resolve_identifier(ref)


class TestNamespaceFor:
    
    def test_namespaced(self):
        assert namespace_for("mongoid/behaviour") == "Mongoid"
    
    def test_top_level(self):
        assert namespace_for("user") == ""


class TestIsModelsRoot:
    
    @pytest.mark.parametrize("root,expected", [
        ("/app/models", True),
        ("/gem_path/engines/some_engine_gem/app/models", True),
        ("/gem_path", False),
        ("/srv/models", False),
        (".", False),
    ])
    def test_is_models_root(self, root, expected):
        assert is_models_root(root) is expected
