"""
Core Document Model Objects

Defines the data structures an OBO document is held in:
    - Xref (database cross-reference)
    - Qualifier (trailing {key="value"} modifier)
    - Clause (one tagged fact)
    - Frame (header, term, typedef or instance block)
    - Document (root container)

ARCHITECTURAL RULE:
    These objects:
        - Know nothing about text layout or sort order
        - Store clauses in the order they were added
        - Represent structure, not behavior

The writer reads these objects and never mutates them.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple

from obocanon.tags import FrameType, TagLike, tag_name


class DuplicateFrameError(ValueError):
    """Raised when a frame id is added twice to the same collection."""
    pass


@dataclass(frozen=True)
class Xref:
    """
    A database cross-reference, written as `ID "annotation"` inside [...].

    Properties:
        idref: Referenced identifier (e.g. "PMID:12345")
        annotation: Optional quoted description
    """

    idref: str
    annotation: Optional[str] = None


@dataclass(frozen=True)
class Qualifier:
    """A trailing modifier, written as key="value" inside {...}."""

    key: str
    value: str


@dataclass(frozen=True)
class Clause:
    """
    One tagged fact within a frame.

    Examples:
        name: nucleus
        relationship: part_of GO:0005623
        synonym: "cell nucleus" EXACT []

    Properties:
        tag:
            Written tag name (see `obocanon.tags.OboTag`)

        value:
            Primary value. A string for most tags, a bool for flags.

        value2:
            Secondary value for paired tags
            (relation filler, synonym scope, subset description)

        extra:
            Further tokens after the secondary value
            (synonym type, property value datatype)

        qualifiers:
            Trailing {key="value"} modifiers, in input order

        xrefs:
            Cross-references, in input order

        comment:
            Trailing `! comment` read from the source text, if any

    IMPORTANT:
        Clauses are immutable (frozen=True).
        Shape checks against the tag arity happen at write time.
    """

    tag: str
    value: Any = None
    value2: Any = None
    extra: Tuple[str, ...] = ()
    qualifiers: Tuple[Qualifier, ...] = ()
    xrefs: Tuple[Xref, ...] = ()
    comment: Optional[str] = None

    @classmethod
    def of(cls, tag: TagLike, value: Any = None, value2: Any = None, **kwargs) -> "Clause":
        """Build a clause from an `OboTag` or a tag string, coercing sequences to tuples."""
        for key in ("extra", "qualifiers", "xrefs"):
            if key not in kwargs:
                continue
            if kwargs[key] is None:
                del kwargs[key]
            else:
                kwargs[key] = tuple(kwargs[key])
        return cls(tag=tag_name(tag), value=value, value2=value2, **kwargs)


@dataclass
class Frame:
    """
    A block of clauses describing one entity, or the document header.

    Properties:
        frame_type: FrameType (HEADER, TERM, TYPEDEF, INSTANCE)
        id: Frame identifier, None for the header
        clauses: Clauses in insertion (parse) order

    The insertion order is kept as given. Tags with a preserve-order
    policy are written in exactly this order.
    """

    frame_type: FrameType
    id: Optional[str] = None
    clauses: List[Clause] = field(default_factory=list)

    def add_clause(self, clause: Clause) -> None:
        self.clauses.append(clause)

    def get_clauses(self, tag: TagLike) -> List[Clause]:
        """Return all clauses with the given tag, in insertion order."""
        name = tag_name(tag)
        return [c for c in self.clauses if c.tag == name]

    def get_clause(self, tag: TagLike) -> Optional[Clause]:
        """Return the first clause with the given tag, or None."""
        name = tag_name(tag)
        for clause in self.clauses:
            if clause.tag == name:
                return clause
        return None

    def get_value(self, tag: TagLike) -> Any:
        clause = self.get_clause(tag)
        if clause is None:
            return None
        return clause.value

    def tags(self) -> List[str]:
        """Distinct tags in first-seen order."""
        seen: Dict[str, None] = {}
        for clause in self.clauses:
            seen.setdefault(clause.tag, None)
        return list(seen)


@dataclass
class Document:
    """
    Root container for an OBO document.

    Properties:
        header:
            The header frame (no marker line in the file)

        terms, typedefs, instances:
            Frames keyed by id, in insertion order

    INVARIANTS:
        - Frame ids are unique within their collection
        - Every frame in a collection has the collection's frame type
    """

    header: Frame = field(default_factory=lambda: Frame(FrameType.HEADER))
    terms: Dict[str, Frame] = field(default_factory=dict)
    typedefs: Dict[str, Frame] = field(default_factory=dict)
    instances: Dict[str, Frame] = field(default_factory=dict)

    def collection(self, frame_type: FrameType) -> Dict[str, Frame]:
        """Return the id-keyed collection holding frames of this type."""
        if frame_type == FrameType.TERM:
            return self.terms
        if frame_type == FrameType.TYPEDEF:
            return self.typedefs
        if frame_type == FrameType.INSTANCE:
            return self.instances
        raise ValueError(f"No frame collection for {frame_type.value}")

    def add_frame(self, frame: Frame) -> Frame:
        """
        Add a term, typedef or instance frame.

        Raises:
            DuplicateFrameError: If the id is already in the collection
            ValueError: If the frame has no id or is a header
        """
        if frame.id is None:
            raise ValueError(f"{frame.frame_type.value} frame has no id")
        frames = self.collection(frame.frame_type)
        if frame.id in frames:
            raise DuplicateFrameError(
                f"Duplicate {frame.frame_type.value} frame id: {frame.id}"
            )
        frames[frame.id] = frame
        return frame

    def remove_frame(self, frame_type: FrameType, frame_id: str) -> Optional[Frame]:
        return self.collection(frame_type).pop(frame_id, None)

    def get_term_frame(self, frame_id: str) -> Optional[Frame]:
        return self.terms.get(frame_id)

    def get_typedef_frame(self, frame_id: str) -> Optional[Frame]:
        return self.typedefs.get(frame_id)

    def get_instance_frame(self, frame_id: str) -> Optional[Frame]:
        return self.instances.get(frame_id)

    def get_frame(self, frame_id: str) -> Optional[Frame]:
        """Look a frame up by id in terms, then typedefs, then instances."""
        for frames in (self.terms, self.typedefs, self.instances):
            if frame_id in frames:
                return frames[frame_id]
        return None

    def iter_frames(self) -> Iterator[Frame]:
        """Yield terms, then typedefs, then instances."""
        yield from self.terms.values()
        yield from self.typedefs.values()
        yield from self.instances.values()

    def is_empty(self) -> bool:
        """No header clauses and no frames. A non-empty document can still write no lines."""
        return not self.header.clauses and not (self.terms or self.typedefs or self.instances)


__all__ = [
    "Xref",
    "Qualifier",
    "Clause",
    "Frame",
    "Document",
    "DuplicateFrameError",
]
