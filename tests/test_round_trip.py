"""
Parse -> write round trips over the fixture files in tests/input.

A canonical file must come back byte for byte. A non-canonical file must
keep every line (sorted tags) and the exact sequence of preserve-order
lines.
"""

from pathlib import Path

import pytest

from obocanon.backends.obo_writer import write_document_to_string
from obocanon.ordering import OrderPolicy, policy_for
from obocanon.parser import parse_obo_file, parse_obo_string
from obocanon.tags import is_known_tag

INPUT_DIR = Path(__file__).parent / "input"

CANONICAL_FIXTURES = ["writer_round_trip.obo", "tag_order_test.obo"]


def read_fixture(name: str) -> str:
    return (INPUT_DIR / name).read_text(encoding="utf-8")


def rewrite(text: str) -> str:
    return write_document_to_string(parse_obo_string(text))


def preserve_order_lines(text: str):
    lines = []
    for line in text.splitlines():
        tag, sep, _ = line.partition(":")
        if sep and policy_for(tag) == OrderPolicy.PRESERVE:
            lines.append(line)
    return lines


@pytest.mark.parametrize("name", CANONICAL_FIXTURES)
def test_canonical_file_is_reproduced(name):
    text = read_fixture(name)
    assert rewrite(text) == text


@pytest.mark.parametrize("name", CANONICAL_FIXTURES)
def test_writing_is_idempotent(name):
    once = rewrite(read_fixture(name))
    assert rewrite(once) == once


def test_property_value_order():
    """property_value lines come back in their input order, line for line."""
    text = read_fixture("tag_order_test.obo")
    written = rewrite(text)
    assert preserve_order_lines(written) == preserve_order_lines(text)
    assert preserve_order_lines(text) == [
        'property_value: IAO:0000589 "x1 (X)" xsd:string',
        'property_value: IAO:0000117 "Zed" xsd:string',
        'property_value: IAO:0000117 "Amy" xsd:string',
        "property_value: EX:seeAlso X:2",
        'property_value: IAO:0000233 "https://example.org/issues/2" xsd:anyURI',
        'property_value: IAO:0000117 "Bob" xsd:string',
    ]


def test_every_input_line_present_after_shuffle():
    """Shuffled input keeps every line; only the order changes."""
    text = read_fixture("writer_round_trip.obo")
    doc = parse_obo_string(text)
    for frame in doc.iter_frames():
        # Unknown tags keep their first-seen order, so only known tags are shuffled
        known = [c for c in frame.clauses if is_known_tag(c.tag)]
        unknown = [c for c in frame.clauses if not is_known_tag(c.tag)]
        frame.clauses = list(reversed(known)) + unknown
    shuffled = write_document_to_string(doc)

    output_lines = shuffled.split("\n")
    for line in text.splitlines():
        assert line in output_lines, f"'{line}' doesn't exist in the output"

    # Sorted tags are back in canonical order; preserve-order tags follow the model.
    preserved = set(preserve_order_lines(text))
    assert [l for l in shuffled.splitlines() if l not in preserved] == [
        l for l in text.splitlines() if l not in preserved
    ]


def test_opaque_ids_written_as_comments():
    doc = parse_obo_file(INPUT_DIR / "opaque_ids_test.obo")
    text = write_document_to_string(doc)
    assert any(
        line.startswith("relationship:") and "named relation y1" in line
        for line in text.split("\n")
    )


def test_equivtest_normalized():
    doc = parse_obo_file(INPUT_DIR / "equivtest.obo")
    assert write_document_to_string(doc) == (
        "format-version: 1.4\n"
        "ontology: equivtest\n"
        "\n"
        "[Term]\n"
        "id: X:1\n"
        "name: x1\n"
        "intersection_of: Y:1 ! y1\n"
        "intersection_of: R:1 Z:1 ! r1 z1\n"
        "\n"
        "[Term]\n"
        "id: Y:1\n"
        "name: y1\n"
        "\n"
        "[Term]\n"
        "id: Z:1\n"
        "name: z1\n"
        "\n"
        "[Typedef]\n"
        "id: R:1\n"
        "name: r1\n"
        "\n"
    )


def test_caro_trailing_blank_lines_trimmed():
    text = read_fixture("caro.obo")
    assert text.endswith("\n\n\n\n\n")
    written = rewrite(text)
    assert written.endswith("is_a: CARO:0000000 ! anatomical entity\n\n")
