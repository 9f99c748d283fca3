"""
Tag vocabulary for OBO documents.

Every clause in a frame is keyed by a tag. A tag decides:
    - The shape of the clause value (its arity class)
    - Whether the clause is a boolean flag
    - Whether the clause value points at another frame

Tags that are not listed here are still legal. They are carried as
plain strings and treated as repeatable single-valued clauses.

ARCHITECTURAL RULE:
    This module is vocabulary only.
    Ordering lives in `obocanon.ordering`, rendering in `obocanon.formatter`.
"""

from enum import Enum
from typing import Union


class ArityClass(Enum):
    """
    Value shape of a clause.

    SCALAR:
        One value, at most one clause per frame (id, name, def)
    PAIRED:
        Primary value plus a mandatory secondary value
        (relationship: R:1 Z:1, synonym: "text" EXACT)
    LIST:
        Repeatable; a secondary value is optional
        (is_a, alt_id, intersection_of)
    """

    SCALAR = "scalar"
    PAIRED = "paired"
    LIST = "list"


class FrameType(Enum):
    """Frame kinds, in the order they appear in a file."""

    HEADER = "Header"
    TERM = "Term"
    TYPEDEF = "Typedef"
    INSTANCE = "Instance"


class OboTag(Enum):
    """
    Known OBO 1.4 tags.

    The enum value is the tag exactly as written in a file.
    """

    # Header
    FORMAT_VERSION = "format-version"
    DATA_VERSION = "data-version"
    DATE = "date"
    SAVED_BY = "saved-by"
    AUTO_GENERATED_BY = "auto-generated-by"
    IMPORT = "import"
    SUBSETDEF = "subsetdef"
    SYNONYMTYPEDEF = "synonymtypedef"
    DEFAULT_NAMESPACE = "default-namespace"
    NAMESPACE_ID_RULE = "namespace-id-rule"
    IDSPACE = "idspace"
    TREAT_XREFS_AS_EQUIVALENT = "treat-xrefs-as-equivalent"
    TREAT_XREFS_AS_GENUS_DIFFERENTIA = "treat-xrefs-as-genus-differentia"
    TREAT_XREFS_AS_RELATIONSHIP = "treat-xrefs-as-relationship"
    TREAT_XREFS_AS_IS_A = "treat-xrefs-as-is_a"
    REMARK = "remark"
    ONTOLOGY = "ontology"

    # Shared by frames
    ID = "id"
    IS_ANONYMOUS = "is_anonymous"
    NAME = "name"
    NAMESPACE = "namespace"
    ALT_ID = "alt_id"
    DEF = "def"
    COMMENT = "comment"
    SUBSET = "subset"
    SYNONYM = "synonym"
    XREF = "xref"
    BUILTIN = "builtin"
    PROPERTY_VALUE = "property_value"
    IS_A = "is_a"
    INTERSECTION_OF = "intersection_of"
    UNION_OF = "union_of"
    EQUIVALENT_TO = "equivalent_to"
    DISJOINT_FROM = "disjoint_from"
    RELATIONSHIP = "relationship"
    CREATED_BY = "created_by"
    CREATION_DATE = "creation_date"
    IS_OBSOLETE = "is_obsolete"
    REPLACED_BY = "replaced_by"
    CONSIDER = "consider"

    # Typedef only
    DOMAIN = "domain"
    RANGE = "range"
    HOLDS_OVER_CHAIN = "holds_over_chain"
    IS_ANTI_SYMMETRIC = "is_anti_symmetric"
    IS_CYCLIC = "is_cyclic"
    IS_REFLEXIVE = "is_reflexive"
    IS_SYMMETRIC = "is_symmetric"
    IS_TRANSITIVE = "is_transitive"
    IS_FUNCTIONAL = "is_functional"
    IS_INVERSE_FUNCTIONAL = "is_inverse_functional"
    INVERSE_OF = "inverse_of"
    TRANSITIVE_OVER = "transitive_over"
    EQUIVALENT_TO_CHAIN = "equivalent_to_chain"
    DISJOINT_OVER = "disjoint_over"
    EXPAND_ASSERTION_TO = "expand_assertion_to"
    EXPAND_EXPRESSION_TO = "expand_expression_to"
    IS_METADATA_TAG = "is_metadata_tag"
    IS_CLASS_LEVEL = "is_class_level"

    # Instance only
    INSTANCE_OF = "instance_of"


TagLike = Union[OboTag, str]


def tag_name(tag: TagLike) -> str:
    """Return the written form of a tag."""
    if isinstance(tag, OboTag):
        return tag.value
    return tag


_PAIRED_TAGS = {
    OboTag.RELATIONSHIP.value,
    OboTag.SYNONYM.value,
    OboTag.SUBSETDEF.value,
    OboTag.SYNONYMTYPEDEF.value,
    OboTag.PROPERTY_VALUE.value,
    OboTag.HOLDS_OVER_CHAIN.value,
    OboTag.EQUIVALENT_TO_CHAIN.value,
    OboTag.IDSPACE.value,
}

_SCALAR_TAGS = {
    OboTag.FORMAT_VERSION.value,
    OboTag.DATA_VERSION.value,
    OboTag.DATE.value,
    OboTag.SAVED_BY.value,
    OboTag.AUTO_GENERATED_BY.value,
    OboTag.DEFAULT_NAMESPACE.value,
    OboTag.ONTOLOGY.value,
    OboTag.ID.value,
    OboTag.NAME.value,
    OboTag.NAMESPACE.value,
    OboTag.DEF.value,
    OboTag.COMMENT.value,
    OboTag.CREATED_BY.value,
    OboTag.CREATION_DATE.value,
}

BOOLEAN_TAGS = frozenset({
    OboTag.IS_OBSOLETE.value,
    OboTag.IS_ANONYMOUS.value,
    OboTag.BUILTIN.value,
    OboTag.IS_ANTI_SYMMETRIC.value,
    OboTag.IS_CYCLIC.value,
    OboTag.IS_REFLEXIVE.value,
    OboTag.IS_SYMMETRIC.value,
    OboTag.IS_TRANSITIVE.value,
    OboTag.IS_FUNCTIONAL.value,
    OboTag.IS_INVERSE_FUNCTIONAL.value,
    OboTag.IS_METADATA_TAG.value,
    OboTag.IS_CLASS_LEVEL.value,
})

# Tags whose values are identifiers of other frames.
REFERENCE_TAGS = frozenset({
    OboTag.IS_A.value,
    OboTag.INTERSECTION_OF.value,
    OboTag.UNION_OF.value,
    OboTag.EQUIVALENT_TO.value,
    OboTag.DISJOINT_FROM.value,
    OboTag.RELATIONSHIP.value,
    OboTag.REPLACED_BY.value,
    OboTag.CONSIDER.value,
    OboTag.INSTANCE_OF.value,
    OboTag.DOMAIN.value,
    OboTag.RANGE.value,
    OboTag.INVERSE_OF.value,
    OboTag.TRANSITIVE_OVER.value,
    OboTag.DISJOINT_OVER.value,
})

# Tags whose primary value is written inside double quotes.
QUOTED_TAGS = frozenset({
    OboTag.DEF.value,
    OboTag.SYNONYM.value,
})

KNOWN_TAGS = frozenset(t.value for t in OboTag)


def arity_of(tag: TagLike) -> ArityClass:
    """
    Return the arity class of a tag.

    Boolean flags are scalar. Unknown tags are LIST.
    """
    name = tag_name(tag)
    if name in _PAIRED_TAGS:
        return ArityClass.PAIRED
    if name in _SCALAR_TAGS or name in BOOLEAN_TAGS:
        return ArityClass.SCALAR
    return ArityClass.LIST


def is_boolean_tag(tag: TagLike) -> bool:
    return tag_name(tag) in BOOLEAN_TAGS


def is_reference_tag(tag: TagLike) -> bool:
    return tag_name(tag) in REFERENCE_TAGS


def is_known_tag(tag: TagLike) -> bool:
    return tag_name(tag) in KNOWN_TAGS


__all__ = [
    "ArityClass",
    "FrameType",
    "OboTag",
    "TagLike",
    "tag_name",
    "arity_of",
    "is_boolean_tag",
    "is_reference_tag",
    "is_known_tag",
    "BOOLEAN_TAGS",
    "REFERENCE_TAGS",
    "QUOTED_TAGS",
    "KNOWN_TAGS",
]
