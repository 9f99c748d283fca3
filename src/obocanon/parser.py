"""
OBO Parser (raw text → Document).

Reads the line-oriented OBO format into the Document model. The parser
is deliberately small: it understands the shapes the canonical writer
produces plus the common OBO 1.4 variants.

Line shapes:
    [Term]                               frame marker
    tag: value                           clause
    tag: value value2 extra {q="1"} [X:1 "note"] ! comment
    ! whole line comment                 skipped

Syntax Notes:
    - Free-text tags (name, comment, remark, ...) and unknown tags take
      everything up to an unescaped `!` or `{` as their value
    - Other tags are split into tokens; "quoted strings" are one token
    - `\\n`, `\\t` and backslash escapes are decoded
    - The `id` line of a frame becomes Frame.id, not a clause
"""

import logging
import re
import warnings
from pathlib import Path
from typing import List, Optional, Tuple, Union

from obocanon.formatter import FREE_TEXT_TAGS
from obocanon.model import Clause, Document, DuplicateFrameError, Frame, Qualifier, Xref
from obocanon.tags import ArityClass, FrameType, OboTag, arity_of, is_boolean_tag, is_known_tag

logger = logging.getLogger(__name__)


class OBOParseError(Exception):
    """Raised when OBO parsing fails."""

    def __init__(self, lineno: int, msg: str, source: Optional[str] = None):
        self.lineno = lineno
        self.msg = msg
        self.source = source
        prefix = f"{source}:{lineno}" if source else f"line {lineno}"
        super().__init__(f"{prefix}: {msg}")


STANZA_TYPE_PATTERN = re.compile(r"\[(?P<stanza_type>\S+)\]\s*(?:!.*)?$")
TAG_VALUE_PATTERN = re.compile(r"(?P<tag>(?:[^:\\]|\\.)+):(?P<value>.*)$")

_STANZA_TYPES = {
    FrameType.TERM.value: FrameType.TERM,
    FrameType.TYPEDEF.value: FrameType.TYPEDEF,
    FrameType.INSTANCE.value: FrameType.INSTANCE,
}

DEFAULT_SYNONYM_SCOPE = "RELATED"

Token = Tuple[str, bool]


def unescape(s: str) -> str:
    """Decode backslash escapes (\\n, \\t, \\r, and escaped literals)."""
    out = []
    esc = False
    for c in s:
        if esc:
            if c == "n":
                out.append("\n")
            elif c == "t":
                out.append("\t")
            elif c == "r":
                out.append("\r")
            else:
                out.append(c)
            esc = False
        elif c == "\\":
            esc = True
        else:
            out.append(c)
    return "".join(out)


def _find_unescaped(text: str, chars: str, start: int = 0, track_quotes: bool = True) -> int:
    """Index of the first unescaped char in `chars` (outside quotes), or -1."""
    i = start
    in_quotes = False
    while i < len(text):
        c = text[i]
        if c == "\\":
            i += 2
            continue
        if track_quotes and c == '"':
            in_quotes = not in_quotes
        elif not in_quotes and c in chars:
            return i
        i += 1
    return -1


def _split_unescaped(text: str, sep: str = ",") -> List[str]:
    parts = []
    start = 0
    while True:
        pos = _find_unescaped(text, sep, start)
        if pos < 0:
            parts.append(text[start:])
            break
        parts.append(text[start:pos])
        start = pos + 1
    return [p.strip() for p in parts if p.strip()]


def parse_xref_list(inner: str) -> Tuple[Xref, ...]:
    """Parse the inside of `[A:1, B:2 "note"]`."""
    xrefs = []
    for item in _split_unescaped(inner):
        quote_pos = _find_unescaped(item, '"', track_quotes=False)
        if quote_pos < 0:
            xrefs.append(Xref(idref=unescape(item)))
            continue
        idref = unescape(item[:quote_pos].strip())
        end = _find_unescaped(item, '"', quote_pos + 1, track_quotes=False)
        annotation = item[quote_pos + 1:end] if end >= 0 else item[quote_pos + 1:]
        xrefs.append(Xref(idref=idref, annotation=unescape(annotation)))
    return tuple(xrefs)


def parse_qualifiers(inner: str, lineno: int) -> Tuple[Qualifier, ...]:
    """Parse the inside of `{key="value", key2="value2"}`."""
    qualifiers = []
    for item in _split_unescaped(inner):
        key, eq, value = item.partition("=")
        if not eq:
            raise OBOParseError(lineno, f"Invalid qualifier: {item}")
        value = value.strip()
        if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
            value = value[1:-1]
        qualifiers.append(Qualifier(key=key.strip(), value=unescape(value)))
    return tuple(qualifiers)


def _scan_tokens(text: str, lineno: int):
    """Split a structured value into tokens, qualifiers, xrefs and comment."""
    tokens: List[Token] = []
    qualifiers: Tuple[Qualifier, ...] = ()
    xrefs: Tuple[Xref, ...] = ()
    comment = None
    i, n = 0, len(text)
    while i < n:
        c = text[i]
        if c.isspace():
            i += 1
            continue
        if c == "!":
            comment = text[i + 1:].strip() or None
            break
        if c == '"':
            end = _find_unescaped(text, '"', i + 1, track_quotes=False)
            if end < 0:
                raise OBOParseError(lineno, "Unterminated quoted string")
            tokens.append((unescape(text[i + 1:end]), True))
            i = end + 1
            continue
        if c == "[":
            end = _find_unescaped(text, "]", i + 1)
            if end < 0:
                raise OBOParseError(lineno, "Missing closing ']' in xref list")
            xrefs = parse_xref_list(text[i + 1:end])
            i = end + 1
            continue
        if c == "{":
            end = _find_unescaped(text, "}", i + 1)
            if end < 0:
                raise OBOParseError(lineno, "Missing closing '}' in qualifier block")
            qualifiers = parse_qualifiers(text[i + 1:end], lineno)
            i = end + 1
            continue
        j = i
        while j < n and not text[j].isspace():
            j += 2 if text[j] == "\\" else 1
        tokens.append((unescape(text[i:j]), False))
        i = j
    return tokens, qualifiers, xrefs, comment


def _scan_free_text(text: str, lineno: int):
    """Split a free-text value into value, qualifiers and comment."""
    stop = _find_unescaped(text, "!{", track_quotes=False)
    if stop < 0:
        return unescape(text.strip()), (), None
    value = unescape(text[:stop].strip())
    rest = text[stop:]
    qualifiers: Tuple[Qualifier, ...] = ()
    if rest.startswith("{"):
        end = _find_unescaped(rest, "}", 1)
        if end < 0:
            raise OBOParseError(lineno, "Missing closing '}' in qualifier block")
        qualifiers = parse_qualifiers(rest[1:end], lineno)
        rest = rest[end + 1:].strip()
    comment = None
    if rest.startswith("!"):
        comment = rest[1:].strip() or None
    return value, qualifiers, comment


def _parse_boolean(text: str):
    if text == "true":
        return True
    if text == "false":
        return False
    return text


def parse_clause(tag: str, text: str, lineno: int = 0) -> Clause:
    """
    Parse the value part of one `tag: value` line into a Clause.

    Raises:
        OBOParseError: If the value is missing or badly formed
    """
    if tag in FREE_TEXT_TAGS or not is_known_tag(tag):
        value, qualifiers, comment = _scan_free_text(text, lineno)
        return Clause(tag=tag, value=value, qualifiers=qualifiers, comment=comment)

    tokens, qualifiers, xrefs, comment = _scan_tokens(text, lineno)
    if not tokens:
        raise OBOParseError(lineno, f"Missing value for tag {tag}")
    texts = [t for t, _ in tokens]

    if is_boolean_tag(tag):
        return Clause(tag=tag, value=_parse_boolean(texts[0]), comment=comment)

    value2 = None
    extra: Tuple[str, ...] = ()
    if arity_of(tag) == ArityClass.SCALAR:
        value = " ".join(texts)
    elif tag == OboTag.SYNONYM.value:
        value = texts[0]
        if len(texts) > 1:
            value2 = texts[1]
        else:
            warnings.warn(
                f"Synonym without scope at line {lineno}, using {DEFAULT_SYNONYM_SCOPE}",
                UserWarning,
            )
            value2 = DEFAULT_SYNONYM_SCOPE
        extra = tuple(texts[2:])
    else:
        value = texts[0]
        if len(texts) > 1:
            value2 = texts[1]
        extra = tuple(texts[2:])

    return Clause(
        tag=tag,
        value=value,
        value2=value2,
        extra=extra,
        qualifiers=qualifiers,
        xrefs=xrefs,
        comment=comment,
    )


def _close_frame(document: Document, frame: Frame, start_line: int, source: Optional[str]) -> None:
    if frame.frame_type == FrameType.HEADER:
        return
    if frame.id is None:
        raise OBOParseError(start_line, f"{frame.frame_type.value} frame without id", source)
    try:
        document.add_frame(frame)
    except DuplicateFrameError as e:
        raise OBOParseError(start_line, str(e), source) from e


def parse_obo_string(text: str, source: Optional[str] = None) -> Document:
    """
    Parse OBO text into a Document.

    Args:
        text: OBO content
        source: Optional name used in error messages

    Returns:
        Document with header, terms, typedefs and instances

    Raises:
        OBOParseError: If parsing fails
    """
    document = Document()
    current = document.header
    frame_start = 0

    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith("!"):
            continue

        m = STANZA_TYPE_PATTERN.match(line)
        if m is not None:
            _close_frame(document, current, frame_start, source)
            stanza_type = m.group("stanza_type")
            if stanza_type not in _STANZA_TYPES:
                raise OBOParseError(lineno, f"Unhandled stanza type {stanza_type}", source)
            current = Frame(_STANZA_TYPES[stanza_type])
            frame_start = lineno
            continue

        m = TAG_VALUE_PATTERN.match(line)
        if m is None:
            raise OBOParseError(lineno, "Syntax error, expected 'tag: value'", source)
        tag = unescape(m.group("tag").strip())
        value = m.group("value").strip()

        try:
            if current.frame_type != FrameType.HEADER and tag == OboTag.ID.value:
                if current.id is not None:
                    raise OBOParseError(lineno, f"Duplicate id in frame {current.id}")
                tokens, _, _, _ = _scan_tokens(value, lineno)
                if not tokens:
                    raise OBOParseError(lineno, "Missing value for tag id")
                current.id = tokens[0][0]
                continue
            current.add_clause(parse_clause(tag, value, lineno))
        except OBOParseError as e:
            if source is None or e.source is not None:
                raise
            raise OBOParseError(e.lineno, e.msg, source) from e

    _close_frame(document, current, frame_start, source)
    logger.debug(
        f"Parsed {len(document.terms)} terms, {len(document.typedefs)} typedefs, "
        f"{len(document.instances)} instances from {source or '<string>'}"
    )
    return document


def parse_obo_file(filepath: Union[str, Path]) -> Document:
    """
    Parse an OBO file into a Document.

    Raises:
        FileNotFoundError: If file doesn't exist
        OBOParseError: If parsing fails
    """
    try:
        with open(filepath, "r", encoding="utf-8") as f:
            content = f.read()
    except FileNotFoundError:
        raise FileNotFoundError(f"OBO file not found: {filepath}")
    return parse_obo_string(content, source=str(filepath))


__all__ = [
    "OBOParseError",
    "parse_obo_string",
    "parse_obo_file",
    "parse_clause",
    "parse_xref_list",
    "parse_qualifiers",
    "unescape",
]
