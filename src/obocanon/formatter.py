"""
Value Formatter

Renders one clause as one line of OBO text (without the line terminator):

    tag: value[ value2][ extra...][ {qualifiers}][ [xrefs]][ ! comment]

Rules applied here:
    - Boolean flags are written as `tag: true` or not at all
    - Reference-valued clauses get a `! name` comment when a display
      name for the referenced id is known
    - Free text is escaped so it can't be mistaken for a comment,
      a qualifier block or a line break
    - Identifiers and other bare tokens also escape whitespace, quotes
      and xref brackets, so each stays a single token on a single line

Shape errors (a paired tag missing its secondary value, a clause with
no value) are raised as MalformedClauseError, never silently dropped.
"""

from typing import Any, Dict, List, Mapping, Optional

from obocanon.config import WriterOptions
from obocanon.model import Clause, Document, Xref
from obocanon.tags import (
    ArityClass,
    OboTag,
    arity_of,
    is_boolean_tag,
    is_known_tag,
    is_reference_tag,
)


class MalformedClauseError(ValueError):
    """
    Raised when a clause value doesn't match its tag's arity.

    Properties:
        tag: Tag of the offending clause
        frame_id: Id of the frame holding it (None for the header)
    """

    def __init__(self, tag: str, frame_id: Optional[str], reason: str):
        self.tag = tag
        self.frame_id = frame_id
        where = f"frame {frame_id}" if frame_id is not None else "header"
        super().__init__(f"Malformed '{tag}' clause in {where}: {reason}")


# Tags written as free text (escaped). Unknown tags are free text too.
FREE_TEXT_TAGS = frozenset(t.value for t in (
    OboTag.NAME,
    OboTag.COMMENT,
    OboTag.REMARK,
    OboTag.CREATED_BY,
    OboTag.CREATION_DATE,
    OboTag.SAVED_BY,
    OboTag.AUTO_GENERATED_BY,
    OboTag.DATA_VERSION,
    OboTag.DATE,
))

# Tags that always carry an xref list, even an empty one.
_ALWAYS_XREF_TAGS = frozenset((OboTag.DEF.value, OboTag.SYNONYM.value))

# Tags whose secondary value is a quoted description.
_QUOTED_SECOND_TAGS = frozenset(t.value for t in (
    OboTag.SUBSETDEF,
    OboTag.SYNONYMTYPEDEF,
    OboTag.XREF,
))


# =========================================================================
# ESCAPING
# =========================================================================

def escape_free_text(s: str) -> str:
    """Escape an unquoted value: backslash, line breaks, '!' and '{'."""
    s = s.replace("\\", "\\\\")
    s = s.replace("\r\n", "\\n").replace("\n", "\\n").replace("\r", "\\n")
    s = s.replace("!", "\\!")
    s = s.replace("{", "\\{")
    return s


def escape_quoted(s: str) -> str:
    """Escape a value written inside double quotes."""
    s = s.replace("\\", "\\\\")
    s = s.replace("\r\n", "\\n").replace("\n", "\\n").replace("\r", "\\n")
    s = s.replace('"', '\\"')
    return s


# Characters that would end, split or reinterpret an unquoted token.
_TOKEN_ESCAPES = {
    "\\": "\\\\",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    " ": "\\ ",
    '"': '\\"',
    "!": "\\!",
    "{": "\\{",
    "[": "\\[",
}

_XREF_ID_ESCAPES = {**_TOKEN_ESCAPES, ",": "\\,", "]": "\\]"}


def escape_token(s: str) -> str:
    """
    Escape an identifier or other bare token so it stays one token.

    Whitespace, line breaks and the characters that open a quote, comment,
    qualifier block or xref list are backslash-escaped.
    """
    return "".join(_TOKEN_ESCAPES.get(ch, ch) for ch in s)


def escape_xref_id(s: str) -> str:
    return "".join(_XREF_ID_ESCAPES.get(ch, ch) for ch in s)


def quote(value: Any) -> str:
    return f'"{escape_quoted(str(value))}"'


def _needs_quotes(value: Any) -> bool:
    text = str(value)
    return text == "" or any(ch in text for ch in ' \t\n\r"!{[')


# =========================================================================
# BOOLEAN FLAGS
# =========================================================================

def is_true_flag(value: Any, case_sensitive: bool = True) -> bool:
    """
    True only for boolean True or the string "true".

    With case_sensitive=False any casing of "true" is accepted.
    Everything else (False, "false", None, "yes", 1) is not true.
    """
    if value is True:
        return True
    if isinstance(value, str):
        if case_sensitive:
            return value == "true"
        return value.strip().lower() == "true"
    return False


# =========================================================================
# LABELS
# =========================================================================

def collect_labels(document: Document, extra: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """
    Build the id -> display name table used for `! name` comments.

    Names come from the `name` clause of every term, typedef and
    instance frame. Entries in `extra` win over document names.
    """
    labels: Dict[str, str] = {}
    for frame in document.iter_frames():
        name = frame.get_value(OboTag.NAME)
        if frame.id is not None and name is not None:
            labels[frame.id] = str(name)
    if extra:
        labels.update(extra)
    return labels


def _is_opaque(identifier: str) -> bool:
    return ":" in identifier


def reference_comment(clause: Clause, labels: Optional[Mapping[str, str]]) -> Optional[str]:
    """
    Comment text for a reference-valued clause, or None.

    For relation + filler clauses the relation is named only when its id
    is a prefixed (opaque) identifier; the filler is named whenever a name
    is known.
    """
    if not labels or not is_reference_tag(clause.tag):
        return None
    names: List[str] = []
    if clause.value2 is not None:
        relation = str(clause.value)
        if _is_opaque(relation) and relation in labels:
            names.append(labels[relation])
        target = str(clause.value2)
    else:
        target = str(clause.value)
    if target in labels:
        names.append(labels[target])
    if not names:
        return None
    return " ".join(names)


# =========================================================================
# CLAUSE RENDERING
# =========================================================================

def _check_shape(clause: Clause, frame_id: Optional[str]) -> None:
    if clause.value is None:
        raise MalformedClauseError(clause.tag, frame_id, "missing value")
    if arity_of(clause.tag) == ArityClass.PAIRED and clause.value2 is None:
        raise MalformedClauseError(clause.tag, frame_id, "missing secondary value")
    if arity_of(clause.tag) == ArityClass.SCALAR and clause.extra:
        raise MalformedClauseError(clause.tag, frame_id, "unexpected extra values")


def _format_primary(clause: Clause) -> str:
    tag = clause.tag
    value = clause.value
    if tag in (OboTag.DEF.value, OboTag.SYNONYM.value):
        return quote(value)
    if tag in FREE_TEXT_TAGS or not is_known_tag(tag):
        return escape_free_text(str(value))
    return escape_token(str(value))


def _format_secondary(clause: Clause) -> Optional[str]:
    if clause.value2 is None:
        return None
    tag = clause.tag
    if tag in _QUOTED_SECOND_TAGS:
        return quote(clause.value2)
    if tag == OboTag.PROPERTY_VALUE.value and (clause.extra or _needs_quotes(clause.value2)):
        return quote(clause.value2)
    return escape_token(str(clause.value2))


def _format_extra(clause: Clause) -> List[str]:
    if clause.tag == OboTag.IDSPACE.value:
        return [quote(e) for e in clause.extra]
    return [escape_token(str(e)) for e in clause.extra]


def format_qualifiers(qualifiers) -> str:
    inner = ", ".join(f"{q.key}={quote(q.value)}" for q in qualifiers)
    return "{" + inner + "}"


def format_xref(xref: Xref) -> str:
    if xref.annotation is None:
        return escape_xref_id(xref.idref)
    return f"{escape_xref_id(xref.idref)} {quote(xref.annotation)}"


def format_xrefs(xrefs) -> str:
    return "[" + ", ".join(format_xref(x) for x in xrefs) + "]"


def format_clause(
    clause: Clause,
    *,
    frame_id: Optional[str] = None,
    labels: Optional[Mapping[str, str]] = None,
    options: Optional[WriterOptions] = None,
) -> Optional[str]:
    """
    Render a clause as a single line without terminator.

    Args:
        clause: The clause to render
        frame_id: Id of the owning frame, used in error messages
        labels: id -> display name table for reference comments
        options: Writer options (boolean casing, annotation switch)

    Returns:
        The line, or None when the clause contributes no output
        (a boolean flag that isn't true).

    Raises:
        MalformedClauseError: If the value shape doesn't fit the tag
    """
    if options is None:
        options = WriterOptions()

    if is_boolean_tag(clause.tag):
        if is_true_flag(clause.value, options.boolean_case_sensitive):
            return f"{clause.tag}: true"
        return None

    _check_shape(clause, frame_id)

    parts = [_format_primary(clause)]
    secondary = _format_secondary(clause)
    if secondary is not None:
        parts.append(secondary)
    parts.extend(_format_extra(clause))
    if clause.qualifiers:
        parts.append(format_qualifiers(clause.qualifiers))
    if clause.xrefs or clause.tag in _ALWAYS_XREF_TAGS:
        parts.append(format_xrefs(clause.xrefs))

    line = f"{clause.tag}: " + " ".join(parts)

    comment = None
    if options.annotate_references:
        comment = reference_comment(clause, labels)
    if comment is None:
        comment = clause.comment
    if comment:
        line += " ! " + " ".join(str(comment).splitlines())
    return line


__all__ = [
    "MalformedClauseError",
    "FREE_TEXT_TAGS",
    "escape_free_text",
    "escape_quoted",
    "escape_token",
    "escape_xref_id",
    "quote",
    "is_true_flag",
    "collect_labels",
    "reference_comment",
    "format_qualifiers",
    "format_xref",
    "format_xrefs",
    "format_clause",
]
