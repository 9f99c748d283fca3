"""
Example document builder.

Builds a small cell-component style ontology in code, with clauses added
in a deliberately scrambled order so the canonical writer has something
to do: synonyms out of order, differentia before genus, property values
in a fixed curator order, an obsolete term and an opaque relation id.
"""
from obocanon.model import Clause, Document, Frame, Xref
from obocanon.tags import FrameType, OboTag


def build_example_document() -> Document:
    doc = Document()

    header = doc.header
    header.add_clause(Clause.of(OboTag.ONTOLOGY, "cc"))
    header.add_clause(Clause.of(OboTag.SUBSETDEF, "goslim_generic", "Generic GO slim"))
    header.add_clause(Clause.of(OboTag.FORMAT_VERSION, "1.4"))
    header.add_clause(Clause.of(OboTag.DEFAULT_NAMESPACE, "cellular_component"))

    # Relation with an opaque id; its name is used for `! name` comments
    regulates = Frame(FrameType.TYPEDEF, id="RO:0002211")
    regulates.add_clause(Clause.of(OboTag.NAME, "regulates"))
    regulates.add_clause(Clause.of(OboTag.IS_TRANSITIVE, "true"))

    part_of = Frame(FrameType.TYPEDEF, id="part_of")
    part_of.add_clause(Clause.of(OboTag.NAME, "part of"))
    part_of.add_clause(Clause.of(OboTag.XREF, "BFO:0000050"))
    part_of.add_clause(Clause.of(OboTag.IS_TRANSITIVE, True))

    cell = Frame(FrameType.TERM, id="CC:0000001")
    cell.add_clause(Clause.of(OboTag.NAME, "cell"))
    cell.add_clause(
        Clause.of(OboTag.DEF, "The basic structural unit of life.", xrefs=[Xref("PMID:1")])
    )

    organelle = Frame(FrameType.TERM, id="CC:0000002")
    organelle.add_clause(Clause.of(OboTag.IS_A, "CC:0000001"))
    organelle.add_clause(Clause.of(OboTag.NAME, "organelle"))
    organelle.add_clause(Clause.of(OboTag.SUBSET, "goslim_generic"))

    nucleus = Frame(FrameType.TERM, id="CC:0000003")
    nucleus.add_clause(Clause.of(OboTag.RELATIONSHIP, "part_of", "CC:0000001"))
    nucleus.add_clause(Clause.of(OboTag.SYNONYM, "cc", "EXACT"))
    nucleus.add_clause(Clause.of(OboTag.SYNONYM, "ccc", "EXACT"))
    nucleus.add_clause(Clause.of(OboTag.SYNONYM, "AAA", "RELATED"))
    nucleus.add_clause(Clause.of(OboTag.SYNONYM, "aaa", "RELATED"))
    nucleus.add_clause(Clause.of(OboTag.SYNONYM, "bbbb", "NARROW"))
    nucleus.add_clause(Clause.of(OboTag.NAME, "nucleus"))
    nucleus.add_clause(Clause.of(OboTag.INTERSECTION_OF, "part_of", "CC:0000001"))
    nucleus.add_clause(Clause.of(OboTag.INTERSECTION_OF, "CC:0000002"))
    nucleus.add_clause(Clause.of(OboTag.PROPERTY_VALUE, "IAO:0000589", "nucleus (CC)", extra=["xsd:string"]))
    nucleus.add_clause(Clause.of(OboTag.PROPERTY_VALUE, "IAO:0000117", "curator", extra=["xsd:string"]))
    nucleus.add_clause(Clause.of(OboTag.RELATIONSHIP, "RO:0002211", "CC:0000002"))
    nucleus.add_clause(Clause.of(OboTag.IS_A, "CC:0000002"))

    old = Frame(FrameType.TERM, id="CC:0000004")
    old.add_clause(Clause.of(OboTag.NAME, "obsolete nuclear thing"))
    old.add_clause(Clause.of(OboTag.IS_OBSOLETE, True))
    old.add_clause(Clause.of(OboTag.REPLACED_BY, "CC:0000003"))

    sample = Frame(FrameType.INSTANCE, id="EX:sample1")
    sample.add_clause(Clause.of(OboTag.INSTANCE_OF, "CC:0000003"))
    sample.add_clause(Clause.of(OboTag.NAME, "sample nucleus"))

    for frame in (cell, organelle, nucleus, old, regulates, part_of, sample):
        doc.add_frame(frame)

    return doc


EXPECTED_EXAMPLE_OBO = """\
format-version: 1.4
subsetdef: goslim_generic "Generic GO slim"
default-namespace: cellular_component
ontology: cc

[Term]
id: CC:0000001
name: cell
def: "The basic structural unit of life." [PMID:1]

[Term]
id: CC:0000002
name: organelle
subset: goslim_generic
is_a: CC:0000001 ! cell

[Term]
id: CC:0000003
name: nucleus
synonym: "AAA" RELATED []
synonym: "aaa" RELATED []
synonym: "bbbb" NARROW []
synonym: "cc" EXACT []
synonym: "ccc" EXACT []
is_a: CC:0000002 ! organelle
intersection_of: CC:0000002 ! organelle
intersection_of: part_of CC:0000001 ! cell
relationship: part_of CC:0000001 ! cell
relationship: RO:0002211 CC:0000002 ! regulates organelle
property_value: IAO:0000589 "nucleus (CC)" xsd:string
property_value: IAO:0000117 "curator" xsd:string

[Term]
id: CC:0000004
name: obsolete nuclear thing
is_obsolete: true
replaced_by: CC:0000003 ! nucleus

[Typedef]
id: RO:0002211
name: regulates
is_transitive: true

[Typedef]
id: part_of
name: part of
xref: BFO:0000050
is_transitive: true

[Instance]
id: EX:sample1
name: sample nucleus
instance_of: CC:0000003 ! nucleus

"""
