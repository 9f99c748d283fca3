"""
Tests for document change data.

Equality is variant + item equality; every operation handles each
variant and rejects anything else.
"""

import pytest

from obocanon.changes import (
    AddClauseData,
    AddFrameData,
    ChangeApplicationError,
    FrameClause,
    RemoveClauseData,
    RemoveFrameData,
    apply_change,
    change_signature,
    describe_change,
)
from obocanon.model import Clause, Document, DuplicateFrameError, Frame
from obocanon.tags import FrameType, OboTag


def located(frame_id, clause, frame_type=FrameType.TERM):
    return FrameClause(frame_type=frame_type, frame_id=frame_id, clause=clause)


def build_document():
    doc = Document()
    frame = Frame(FrameType.TERM, id="GO:1")
    frame.add_clause(Clause.of(OboTag.NAME, "one"))
    doc.add_frame(frame)
    return doc


class TestEquality:
    """Changes compare by variant and item, never by identity."""

    def test_same_variant_same_item(self):
        clause = Clause.of(OboTag.IS_A, "GO:2")
        assert AddClauseData(located("GO:1", clause)) == AddClauseData(
            located("GO:1", Clause.of(OboTag.IS_A, "GO:2"))
        )

    def test_different_variant_same_item(self):
        item = located("GO:1", Clause.of(OboTag.IS_A, "GO:2"))
        assert AddClauseData(item) != RemoveClauseData(item)

    def test_same_variant_different_item(self):
        assert AddClauseData(located("GO:1", Clause.of(OboTag.IS_A, "GO:2"))) != AddClauseData(
            located("GO:1", Clause.of(OboTag.IS_A, "GO:3"))
        )

    def test_frame_changes_compare_frames_by_value(self):
        assert AddFrameData(Frame(FrameType.TERM, id="GO:9")) == AddFrameData(
            Frame(FrameType.TERM, id="GO:9")
        )

    def test_clause_changes_are_hashable(self):
        item = located("GO:1", Clause.of(OboTag.IS_A, "GO:2"))
        assert len({AddClauseData(item), AddClauseData(item), RemoveClauseData(item)}) == 2

    def test_frame_changes_are_unhashable(self):
        frame = Frame(FrameType.TERM, id="GO:9")
        for change in (AddFrameData(frame), RemoveFrameData(frame)):
            with pytest.raises(TypeError, match="unhashable"):
                hash(change)

    def test_frame_changes_keyed_by_description(self):
        changes = [AddFrameData(Frame(FrameType.TERM, id="GO:9")) for _ in range(2)]
        assert len({describe_change(c) for c in changes}) == 1


class TestApplyChange:
    """apply_change edits the document in place."""

    def test_add_and_remove_frame(self):
        doc = build_document()
        frame = Frame(FrameType.TERM, id="GO:2")
        apply_change(doc, AddFrameData(frame))
        assert doc.get_term_frame("GO:2") is frame
        apply_change(doc, RemoveFrameData(frame))
        assert doc.get_term_frame("GO:2") is None

    def test_add_duplicate_frame(self):
        doc = build_document()
        with pytest.raises(DuplicateFrameError):
            apply_change(doc, AddFrameData(Frame(FrameType.TERM, id="GO:1")))

    def test_remove_missing_frame(self):
        with pytest.raises(ChangeApplicationError):
            apply_change(build_document(), RemoveFrameData(Frame(FrameType.TERM, id="GO:404")))

    def test_add_and_remove_clause(self):
        doc = build_document()
        clause = Clause.of(OboTag.IS_A, "GO:2")
        apply_change(doc, AddClauseData(located("GO:1", clause)))
        assert doc.get_term_frame("GO:1").get_clauses(OboTag.IS_A) == [clause]
        apply_change(doc, RemoveClauseData(located("GO:1", Clause.of(OboTag.IS_A, "GO:2"))))
        assert doc.get_term_frame("GO:1").get_clauses(OboTag.IS_A) == []

    def test_header_clause(self):
        doc = build_document()
        clause = Clause.of(OboTag.ONTOLOGY, "go")
        apply_change(doc, AddClauseData(located(None, clause, FrameType.HEADER)))
        assert doc.header.get_value(OboTag.ONTOLOGY) == "go"

    def test_remove_missing_clause(self):
        with pytest.raises(ChangeApplicationError, match="not found"):
            apply_change(build_document(), RemoveClauseData(located("GO:1", Clause.of(OboTag.IS_A, "GO:2"))))

    def test_clause_for_missing_frame(self):
        with pytest.raises(ChangeApplicationError, match="GO:404"):
            apply_change(build_document(), AddClauseData(located("GO:404", Clause.of(OboTag.NAME, "x"))))

    def test_unsupported_change(self):
        with pytest.raises(TypeError, match="Unsupported change type"):
            apply_change(build_document(), "not a change")


class TestDescribeAndSignature:
    """Read-only operations over changes."""

    def test_describe(self):
        assert describe_change(AddClauseData(located("GO:1", Clause.of(OboTag.IS_A, "GO:2")))) == (
            "AddClause(GO:1 is_a GO:2)"
        )
        assert describe_change(RemoveClauseData(located("GO:1", Clause.of(OboTag.RELATIONSHIP, "part_of", "GO:3")))) == (
            "RemoveClause(GO:1 relationship part_of GO:3)"
        )
        assert describe_change(AddFrameData(Frame(FrameType.TERM, id="X:1"))) == "AddFrame(Term X:1)"
        assert describe_change(RemoveFrameData(Frame(FrameType.TYPEDEF, id="R:1"))) == "RemoveFrame(Typedef R:1)"

    def test_signature_of_clause_change(self):
        change = AddClauseData(located("GO:1", Clause.of(OboTag.RELATIONSHIP, "part_of", "GO:3")))
        assert change_signature(change) == {"GO:1", "part_of", "GO:3"}

    def test_signature_of_frame_change(self):
        frame = Frame(FrameType.TERM, id="GO:5")
        frame.add_clause(Clause.of(OboTag.IS_A, "GO:1"))
        frame.add_clause(Clause.of(OboTag.NAME, "five"))
        assert change_signature(RemoveFrameData(frame)) == {"GO:5", "GO:1"}

    def test_header_signature_is_empty_for_plain_values(self):
        change = AddClauseData(located(None, Clause.of(OboTag.ONTOLOGY, "go"), FrameType.HEADER))
        assert change_signature(change) == set()

    def test_unsupported(self):
        with pytest.raises(TypeError):
            describe_change(42)
        with pytest.raises(TypeError):
            change_signature(None)
