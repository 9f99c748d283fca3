"""
OBO Canonical Writer (obocanon) Package

Deterministic, byte-stable serialization of OBO ontology documents.

ARCHITECTURAL GUARANTEE:
------------------------
The document model in this package contains ZERO knowledge of:
    - Text layout
    - Sort order
    - Escaping rules

The model defines DOCUMENT STRUCTURE only.

Ordering (`obocanon.ordering`) and rendering (`obocanon.formatter`) are
pure functions over the model. The writer (`obocanon.backends`) consumes
the model unchanged.
"""

__version__ = "0.1.0"

from obocanon.backends.obo_writer import write_document, write_document_to_file, write_document_to_string
from obocanon.config import WriterOptions
from obocanon.formatter import MalformedClauseError
from obocanon.model import Clause, Document, DuplicateFrameError, Frame, Qualifier, Xref
from obocanon.parser import OBOParseError, parse_obo_file, parse_obo_string
from obocanon.tags import FrameType, OboTag

__all__ = [
    "Clause",
    "Document",
    "DuplicateFrameError",
    "Frame",
    "FrameType",
    "MalformedClauseError",
    "OBOParseError",
    "OboTag",
    "Qualifier",
    "WriterOptions",
    "Xref",
    "parse_obo_file",
    "parse_obo_string",
    "write_document",
    "write_document_to_file",
    "write_document_to_string",
]
