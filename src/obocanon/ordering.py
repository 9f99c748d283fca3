"""
Clause Ordering Policy

Decides the order clauses are written in, so that the same document
content always produces the same text.

Two levels of ordering:
    1. Tag level: tags of a frame follow a fixed per-frame-type table,
       unknown tags follow in first-seen order.
    2. Clause level: clauses sharing a tag are ordered by that tag's policy.

Clause level policies (kept as data in TAG_POLICIES):
    DEFAULT:
        Case-insensitive alphabetical on the value. On a case-only tie the
        value with the upper-case character first wins. A case-insensitive
        prefix sorts before the longer value.
            {cc, ccc, AAA, aaa, bbbb} -> AAA, aaa, bbbb, cc, ccc
    GENUS_FIRST:
        Clauses without a secondary value (the genus) before clauses with
        one (the differentia). DEFAULT breaks ties inside each group.
    PRESERVE:
        Clauses keep their document order.

Everything here is a pure function of its arguments.
"""

from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from obocanon.model import Clause, Frame
from obocanon.tags import FrameType, OboTag


class OrderPolicy(Enum):
    """Clause level ordering policies."""
    DEFAULT = "default"
    GENUS_FIRST = "genus_first"
    PRESERVE = "preserve"


TAG_POLICIES: Dict[str, OrderPolicy] = {
    OboTag.PROPERTY_VALUE.value: OrderPolicy.PRESERVE,
    OboTag.REMARK.value: OrderPolicy.PRESERVE,
    OboTag.IMPORT.value: OrderPolicy.PRESERVE,
    OboTag.HOLDS_OVER_CHAIN.value: OrderPolicy.PRESERVE,
    OboTag.EQUIVALENT_TO_CHAIN.value: OrderPolicy.PRESERVE,
    OboTag.EXPAND_ASSERTION_TO.value: OrderPolicy.PRESERVE,
    OboTag.EXPAND_EXPRESSION_TO.value: OrderPolicy.PRESERVE,
    OboTag.INTERSECTION_OF.value: OrderPolicy.GENUS_FIRST,
    OboTag.EQUIVALENT_TO.value: OrderPolicy.GENUS_FIRST,
}


# =========================================================================
# FRAME CATEGORY ORDER
# =========================================================================

HEADER_TAG_ORDER: Tuple[str, ...] = tuple(t.value for t in (
    OboTag.FORMAT_VERSION,
    OboTag.DATA_VERSION,
    OboTag.DATE,
    OboTag.SAVED_BY,
    OboTag.AUTO_GENERATED_BY,
    OboTag.IMPORT,
    OboTag.SUBSETDEF,
    OboTag.SYNONYMTYPEDEF,
    OboTag.DEFAULT_NAMESPACE,
    OboTag.NAMESPACE_ID_RULE,
    OboTag.IDSPACE,
    OboTag.TREAT_XREFS_AS_EQUIVALENT,
    OboTag.TREAT_XREFS_AS_GENUS_DIFFERENTIA,
    OboTag.TREAT_XREFS_AS_RELATIONSHIP,
    OboTag.TREAT_XREFS_AS_IS_A,
    OboTag.REMARK,
    OboTag.ONTOLOGY,
    OboTag.PROPERTY_VALUE,
))

# Annotation tags (property_value, created_by, creation_date) follow the
# obsolescence tags in every frame type.
TERM_TAG_ORDER: Tuple[str, ...] = tuple(t.value for t in (
    OboTag.ID,
    OboTag.IS_ANONYMOUS,
    OboTag.NAME,
    OboTag.NAMESPACE,
    OboTag.ALT_ID,
    OboTag.DEF,
    OboTag.COMMENT,
    OboTag.SUBSET,
    OboTag.SYNONYM,
    OboTag.XREF,
    OboTag.BUILTIN,
    OboTag.IS_A,
    OboTag.INTERSECTION_OF,
    OboTag.UNION_OF,
    OboTag.EQUIVALENT_TO,
    OboTag.DISJOINT_FROM,
    OboTag.RELATIONSHIP,
    OboTag.IS_OBSOLETE,
    OboTag.REPLACED_BY,
    OboTag.CONSIDER,
    OboTag.PROPERTY_VALUE,
    OboTag.CREATED_BY,
    OboTag.CREATION_DATE,
))

TYPEDEF_TAG_ORDER: Tuple[str, ...] = tuple(t.value for t in (
    OboTag.ID,
    OboTag.IS_ANONYMOUS,
    OboTag.NAME,
    OboTag.NAMESPACE,
    OboTag.ALT_ID,
    OboTag.DEF,
    OboTag.COMMENT,
    OboTag.SUBSET,
    OboTag.SYNONYM,
    OboTag.XREF,
    OboTag.DOMAIN,
    OboTag.RANGE,
    OboTag.BUILTIN,
    OboTag.HOLDS_OVER_CHAIN,
    OboTag.IS_ANTI_SYMMETRIC,
    OboTag.IS_CYCLIC,
    OboTag.IS_REFLEXIVE,
    OboTag.IS_SYMMETRIC,
    OboTag.IS_TRANSITIVE,
    OboTag.IS_FUNCTIONAL,
    OboTag.IS_INVERSE_FUNCTIONAL,
    OboTag.IS_A,
    OboTag.INTERSECTION_OF,
    OboTag.UNION_OF,
    OboTag.EQUIVALENT_TO,
    OboTag.DISJOINT_FROM,
    OboTag.INVERSE_OF,
    OboTag.TRANSITIVE_OVER,
    OboTag.EQUIVALENT_TO_CHAIN,
    OboTag.DISJOINT_OVER,
    OboTag.RELATIONSHIP,
    OboTag.IS_OBSOLETE,
    OboTag.REPLACED_BY,
    OboTag.CONSIDER,
    OboTag.PROPERTY_VALUE,
    OboTag.CREATED_BY,
    OboTag.CREATION_DATE,
    OboTag.EXPAND_ASSERTION_TO,
    OboTag.EXPAND_EXPRESSION_TO,
    OboTag.IS_METADATA_TAG,
    OboTag.IS_CLASS_LEVEL,
))

INSTANCE_TAG_ORDER: Tuple[str, ...] = tuple(t.value for t in (
    OboTag.ID,
    OboTag.IS_ANONYMOUS,
    OboTag.NAME,
    OboTag.NAMESPACE,
    OboTag.ALT_ID,
    OboTag.DEF,
    OboTag.COMMENT,
    OboTag.SUBSET,
    OboTag.SYNONYM,
    OboTag.XREF,
    OboTag.INSTANCE_OF,
    OboTag.RELATIONSHIP,
    OboTag.IS_OBSOLETE,
    OboTag.REPLACED_BY,
    OboTag.CONSIDER,
    OboTag.PROPERTY_VALUE,
    OboTag.CREATED_BY,
    OboTag.CREATION_DATE,
))

DEFAULT_TAG_ORDERS: Dict[FrameType, Tuple[str, ...]] = {
    FrameType.HEADER: HEADER_TAG_ORDER,
    FrameType.TERM: TERM_TAG_ORDER,
    FrameType.TYPEDEF: TYPEDEF_TAG_ORDER,
    FrameType.INSTANCE: INSTANCE_TAG_ORDER,
}


# =========================================================================
# COMPARATORS
# =========================================================================

def _value_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def string_sort_key(value: Any) -> Tuple[str, str]:
    """
    Sort key for the default rule.

    Lower-cased text first, then the text itself: on a case-only tie the
    plain code point order puts upper-case letters first.
    """
    text = _value_text(value)
    return (text.lower(), text)


def clause_sort_key(clause: Clause) -> tuple:
    """Default sort key for a clause: value, then secondary value, then the rest."""
    return (
        string_sort_key(clause.value),
        string_sort_key(clause.value2),
        tuple(string_sort_key(e) for e in clause.extra),
        tuple((string_sort_key(x.idref), _value_text(x.annotation)) for x in clause.xrefs),
        tuple((q.key, q.value) for q in clause.qualifiers),
    )


def genus_first_sort_key(clause: Clause) -> tuple:
    return (0 if clause.value2 is None else 1,) + clause_sort_key(clause)


def policy_for(tag: str, policies: Optional[Mapping[str, OrderPolicy]] = None) -> OrderPolicy:
    """Look up the clause level policy of a tag, DEFAULT when not listed."""
    table = TAG_POLICIES if policies is None else policies
    return table.get(tag, OrderPolicy.DEFAULT)


def sort_clauses(
    clauses: Sequence[Clause],
    tag: Optional[str] = None,
    policies: Optional[Mapping[str, OrderPolicy]] = None,
) -> List[Clause]:
    """
    Order the clauses of one tag group.

    Args:
        clauses: Clauses sharing one tag
        tag: The shared tag (taken from the first clause when omitted)
        policies: Optional replacement for TAG_POLICIES

    Returns:
        A new list. The input is not modified.
    """
    if not clauses:
        return []
    if tag is None:
        tag = clauses[0].tag
    policy = policy_for(tag, policies)
    if policy == OrderPolicy.PRESERVE:
        return list(clauses)
    if policy == OrderPolicy.GENUS_FIRST:
        return sorted(clauses, key=genus_first_sort_key)
    return sorted(clauses, key=clause_sort_key)


# =========================================================================
# FRAME LEVEL
# =========================================================================

def order_tags(
    tags_in_frame: Iterable[str],
    frame_type: FrameType,
    tag_order: Optional[Sequence[str]] = None,
) -> List[str]:
    """
    Order distinct tags: known tags by table position, the rest by first sight.

    Args:
        tags_in_frame: Tags in first-seen order
        frame_type: Selects the default table
        tag_order: Optional replacement table for this frame type
    """
    table = DEFAULT_TAG_ORDERS[frame_type] if tag_order is None else tag_order
    position = {t: i for i, t in enumerate(table)}
    seen = list(dict.fromkeys(tags_in_frame))
    known = sorted((t for t in seen if t in position), key=position.__getitem__)
    unknown = [t for t in seen if t not in position]
    return known + unknown


def order_frame_tags(frame: Frame, tag_order: Optional[Sequence[str]] = None) -> List[str]:
    return order_tags(frame.tags(), frame.frame_type, tag_order)


def ordered_clauses(
    frame: Frame,
    tag_order: Optional[Sequence[str]] = None,
    policies: Optional[Mapping[str, OrderPolicy]] = None,
) -> List[Clause]:
    """All clauses of a frame in write order."""
    result: List[Clause] = []
    for tag in order_frame_tags(frame, tag_order):
        result.extend(sort_clauses(frame.get_clauses(tag), tag, policies))
    return result


def sort_term_clauses(
    clauses: Sequence[Clause],
    policies: Optional[Mapping[str, OrderPolicy]] = None,
) -> List[Clause]:
    """
    Order a loose list of term clauses, possibly mixing tags.

    Equivalent to putting the clauses in a Term frame and asking
    for `ordered_clauses`.
    """
    return ordered_clauses(Frame(FrameType.TERM, clauses=list(clauses)), policies=policies)


__all__ = [
    "OrderPolicy",
    "TAG_POLICIES",
    "HEADER_TAG_ORDER",
    "TERM_TAG_ORDER",
    "TYPEDEF_TAG_ORDER",
    "INSTANCE_TAG_ORDER",
    "DEFAULT_TAG_ORDERS",
    "string_sort_key",
    "clause_sort_key",
    "genus_first_sort_key",
    "policy_for",
    "sort_clauses",
    "order_tags",
    "order_frame_tags",
    "ordered_clauses",
    "sort_term_clauses",
]
