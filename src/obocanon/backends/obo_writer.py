"""
Canonical OBO writer.

Turns a Document into deterministic OBO text:

    format-version: 1.4          <- header clauses, no marker
    ontology: go
                                 <- blank line
    [Term]                       <- terms, then typedefs, then instances
    id: GO:0005634
    name: nucleus
    is_a: GO:0043231 ! intracellular membrane-bounded organelle
                                 <- exactly one blank line at the end

Ordering comes from `obocanon.ordering`, line rendering from
`obocanon.formatter`. The whole document is rendered into a buffer first;
the trailing blank line is fixed up on the buffered text before anything
reaches the caller's sink.

The writer never modifies the Document it is given.
"""

import io
import logging
import os
import tempfile
from pathlib import Path
from typing import Iterator, Mapping, Optional, TextIO, Union

from obocanon.config import WriterOptions
from obocanon.formatter import collect_labels, escape_token, format_clause
from obocanon.model import Clause, Document, Frame
from obocanon.ordering import ordered_clauses
from obocanon.tags import FrameType, OboTag

logger = logging.getLogger(__name__)

FRAME_SEQUENCE = (FrameType.TERM, FrameType.TYPEDEF, FrameType.INSTANCE)


def normalize_trailing_newlines(text: str) -> str:
    """
    Make text end with its last content line plus exactly one blank line.

    Only line terminators are stripped, so trailing spaces on the last
    line survive. Text made only of terminators becomes the empty string.
    """
    content = text.rstrip("\n")
    if not content:
        return ""
    return content + "\n\n"


def iterate_frame_lines(
    frame: Frame,
    frame_type: FrameType,
    labels: Optional[Mapping[str, str]] = None,
    options: Optional[WriterOptions] = None,
) -> Iterator[str]:
    """
    Yield the lines of one frame, without terminators.

    Term, typedef and instance frames start with their `[Type]` marker and
    an `id:` line built from the frame id.
    """
    if options is None:
        options = WriterOptions()

    is_header = frame_type == FrameType.HEADER
    if not is_header:
        if frame.id is None:
            raise ValueError(f"{frame_type.value} frame has no id")
        yield f"[{frame_type.value}]"
        yield f"{OboTag.ID.value}: {escape_token(str(frame.id))}"

    clauses = ordered_clauses(frame, options.tag_order_for(frame_type), options.policies())
    for clause in clauses:
        if not is_header and clause.tag == OboTag.ID.value:
            if clause.value != frame.id:
                logger.debug(f"Ignoring id clause {clause.value} in frame {frame.id}")
            continue
        line = format_clause(clause, frame_id=frame.id, labels=labels, options=options)
        if line is not None:
            yield line


def iterate_obo_lines(document: Document, options: Optional[WriterOptions] = None) -> Iterator[str]:
    """
    Yield every line of the document in canonical order.

    Blank lines separate the header from the first frame and frames from
    each other. Trailing blank lines are not normalized here; see
    `normalize_trailing_newlines`.
    """
    if options is None:
        options = WriterOptions()

    labels = collect_labels(document, options.label_source) if options.annotate_references else {}

    header_lines = list(iterate_frame_lines(document.header, FrameType.HEADER, labels, options))
    if header_lines:
        yield from header_lines
        yield ""

    for frame_type in FRAME_SEQUENCE:
        for frame in document.collection(frame_type).values():
            yield from iterate_frame_lines(frame, frame_type, labels, options)
            yield ""


def write_document(document: Document, sink: TextIO, options: Optional[WriterOptions] = None) -> None:
    """
    Write a document to a text sink.

    Whether anything is written depends on the rendered lines, not on
    `Document.is_empty()`. A document whose clauses all render to nothing
    (a header holding only false flags) writes the empty string.

    Args:
        document: Document to write (not modified)
        sink: Any object with a `write(str)` method
        options: Writer options

    Raises:
        MalformedClauseError: If a clause doesn't fit its tag's arity
        OSError: If the sink rejects the write
    """
    buffer = io.StringIO()
    for line in iterate_obo_lines(document, options):
        buffer.write(line)
        buffer.write("\n")
    text = normalize_trailing_newlines(buffer.getvalue())
    logger.debug(
        f"Writing {len(document.terms)} terms, {len(document.typedefs)} typedefs, "
        f"{len(document.instances)} instances ({len(text)} chars)"
    )
    sink.write(text)


def write_document_to_string(document: Document, options: Optional[WriterOptions] = None) -> str:
    out = io.StringIO()
    write_document(document, out, options)
    return out.getvalue()


def write_document_to_file(
    document: Document,
    path: Union[str, Path],
    options: Optional[WriterOptions] = None,
) -> None:
    """
    Write a document to a file, replacing it only once writing succeeded.

    The text goes to a temporary file next to `path`, which is then moved
    into place. On failure the temporary file is removed and `path` is
    left untouched.
    """
    path = Path(path)
    directory = path.parent if str(path.parent) else Path(".")
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=directory)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            write_document(document, f, options)
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise
    logger.info(f"Wrote {path}")


def write_clause(
    clause: Clause,
    sink: TextIO,
    labels: Optional[Mapping[str, str]] = None,
    options: Optional[WriterOptions] = None,
) -> None:
    """Write a single clause line, or nothing when the clause renders to no output."""
    line = format_clause(clause, labels=labels, options=options)
    if line is not None:
        sink.write(line)
        sink.write("\n")


__all__ = [
    "FRAME_SEQUENCE",
    "normalize_trailing_newlines",
    "iterate_frame_lines",
    "iterate_obo_lines",
    "write_document",
    "write_document_to_string",
    "write_document_to_file",
    "write_clause",
]
