"""
Tests for the Document Model.

These tests verify:
    - Clause construction and immutability
    - Frame lookup and insertion order
    - Document collections and id uniqueness
"""

import dataclasses

import pytest

from obocanon.model import (
    Clause,
    Document,
    DuplicateFrameError,
    Frame,
    Qualifier,
    Xref,
)
from obocanon.tags import FrameType, OboTag


class TestClause:
    """Test Clause objects."""

    def test_create_with_enum_tag(self):
        """Clause.of stores the written tag name."""
        clause = Clause.of(OboTag.IS_A, "GO:0000001")
        assert clause.tag == "is_a"
        assert clause.value == "GO:0000001"
        assert clause.value2 is None

    def test_sequences_become_tuples(self):
        clause = Clause.of(
            OboTag.DEF,
            "A definition.",
            xrefs=[Xref("PMID:1")],
            qualifiers=[Qualifier("source", "x")],
            extra=["a"],
        )
        assert clause.xrefs == (Xref("PMID:1"),)
        assert clause.qualifiers == (Qualifier("source", "x"),)
        assert clause.extra == ("a",)

    def test_none_sequences_are_dropped(self):
        clause = Clause.of(OboTag.DEF, "text", xrefs=None)
        assert clause.xrefs == ()

    def test_clause_is_immutable(self):
        clause = Clause.of(OboTag.NAME, "nucleus")
        with pytest.raises(dataclasses.FrozenInstanceError):
            clause.value = "cytoplasm"

    def test_value_equality(self):
        assert Clause.of(OboTag.RELATIONSHIP, "part_of", "GO:1") == Clause(
            tag="relationship", value="part_of", value2="GO:1"
        )


class TestFrame:
    """Test Frame objects."""

    def test_clauses_keep_insertion_order(self):
        frame = Frame(FrameType.TERM, id="GO:1")
        frame.add_clause(Clause.of(OboTag.IS_A, "GO:3"))
        frame.add_clause(Clause.of(OboTag.NAME, "x"))
        frame.add_clause(Clause.of(OboTag.IS_A, "GO:2"))

        assert [c.value for c in frame.get_clauses(OboTag.IS_A)] == ["GO:3", "GO:2"]
        assert frame.tags() == ["is_a", "name"]

    def test_get_clause_and_value(self):
        frame = Frame(FrameType.TERM, id="GO:1")
        frame.add_clause(Clause.of(OboTag.NAME, "nucleus"))
        assert frame.get_clause(OboTag.NAME).value == "nucleus"
        assert frame.get_value("name") == "nucleus"
        assert frame.get_clause(OboTag.DEF) is None
        assert frame.get_value(OboTag.DEF) is None


class TestDocument:
    """Test Document container."""

    def test_add_frames_to_collections(self):
        doc = Document()
        doc.add_frame(Frame(FrameType.TERM, id="GO:1"))
        doc.add_frame(Frame(FrameType.TYPEDEF, id="part_of"))
        doc.add_frame(Frame(FrameType.INSTANCE, id="EX:1"))

        assert doc.get_term_frame("GO:1") is not None
        assert doc.get_typedef_frame("part_of") is not None
        assert doc.get_instance_frame("EX:1") is not None
        assert doc.get_frame("part_of").frame_type == FrameType.TYPEDEF
        assert doc.get_frame("missing") is None

    def test_duplicate_id_rejected(self):
        doc = Document()
        doc.add_frame(Frame(FrameType.TERM, id="GO:1"))
        with pytest.raises(DuplicateFrameError):
            doc.add_frame(Frame(FrameType.TERM, id="GO:1"))

    def test_same_id_in_different_collections(self):
        """Ids are unique per collection, not per document."""
        doc = Document()
        doc.add_frame(Frame(FrameType.TERM, id="X:1"))
        doc.add_frame(Frame(FrameType.TYPEDEF, id="X:1"))
        assert len(doc.terms) == 1
        assert len(doc.typedefs) == 1

    def test_frame_without_id_rejected(self):
        with pytest.raises(ValueError):
            Document().add_frame(Frame(FrameType.TERM))

    def test_header_has_no_collection(self):
        with pytest.raises(ValueError):
            Document().add_frame(Frame(FrameType.HEADER, id="h"))

    def test_iter_frames_order(self):
        doc = Document()
        doc.add_frame(Frame(FrameType.INSTANCE, id="I:1"))
        doc.add_frame(Frame(FrameType.TYPEDEF, id="R:1"))
        doc.add_frame(Frame(FrameType.TERM, id="T:2"))
        doc.add_frame(Frame(FrameType.TERM, id="T:1"))
        assert [f.id for f in doc.iter_frames()] == ["T:2", "T:1", "R:1", "I:1"]

    def test_remove_frame(self):
        doc = Document()
        doc.add_frame(Frame(FrameType.TERM, id="T:1"))
        removed = doc.remove_frame(FrameType.TERM, "T:1")
        assert removed.id == "T:1"
        assert doc.remove_frame(FrameType.TERM, "T:1") is None
        assert doc.is_empty()
