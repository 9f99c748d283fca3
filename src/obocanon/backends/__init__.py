"""Backends for document output (canonical OBO text)."""

from .obo_writer import (
    iterate_obo_lines,
    normalize_trailing_newlines,
    write_clause,
    write_document,
    write_document_to_file,
    write_document_to_string,
)

__all__ = [
    "iterate_obo_lines",
    "normalize_trailing_newlines",
    "write_clause",
    "write_document",
    "write_document_to_file",
    "write_document_to_string",
]
