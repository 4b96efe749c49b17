"""
Per-file results of the tolerant model scan.

The scan never raises for a single file. Each matched file ends up as a
ModelFound or a ModelSkipped carrying the reason and, for failures, the
exception, so a genuine load error is never confused with a stray
non-model file.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from docbridge.naming import ModelReference


class SkipReason(str, Enum):
    """Why a matched file produced no indexable document."""
    LOAD_FAILED = "load_failed"       # File missing or import raised
    UNRESOLVED = "unresolved"         # Loaded, but no type of the expected name
    NOT_DOCUMENT = "not_document"     # Type is not a persistent document
    EMBEDDED = "embedded"             # Document stored inside a parent


@dataclass(frozen=True)
class ModelFound:
    reference: ModelReference
    model: type
    
    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class ModelSkipped:
    reference: ModelReference
    reason: SkipReason
    error: Optional[Exception] = None
    
    @property
    def ok(self) -> bool:
        return False
    
    def describe(self) -> str:
        if self.error is not None:
            return f"{self.reason.value}: {self.error}"
        return self.reason.value


DiscoveryResult = Union[ModelFound, ModelSkipped]
