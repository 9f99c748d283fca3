"""
Change data for documents.

A change is one of a closed set of variants, each carrying one item:

    AddFrameData(item=Frame)
    RemoveFrameData(item=Frame)
    AddClauseData(item=FrameClause)
    RemoveClauseData(item=FrameClause)

Two changes are equal when they are the same variant and carry equal
items. Nothing compares by identity. Clause changes are hashable; frame
changes are not, because a Frame is mutable. Key frame changes by
`describe_change` when they need to go in a set or dict.

Operations over changes (`apply_change`, `change_signature`,
`describe_change`) handle every variant explicitly and raise TypeError
for anything outside the set.
"""

from dataclasses import dataclass
from typing import Optional, Set, Union

from obocanon.analyzer import referenced_ids
from obocanon.model import Clause, Document, Frame
from obocanon.tags import FrameType


@dataclass(frozen=True)
class FrameClause:
    """
    A clause located in a frame.

    Properties:
        frame_type: Type of the owning frame
        frame_id: Id of the owning frame (None for the header)
        clause: The clause itself
    """

    frame_type: FrameType
    frame_id: Optional[str]
    clause: Clause


@dataclass(frozen=True)
class AddFrameData:
    """Adds a frame. Compared by value, never hashed."""

    item: Frame

    __hash__ = None


@dataclass(frozen=True)
class RemoveFrameData:
    """Removes a frame. Compared by value, never hashed."""

    item: Frame

    __hash__ = None


@dataclass(frozen=True)
class AddClauseData:
    item: FrameClause


@dataclass(frozen=True)
class RemoveClauseData:
    item: FrameClause


ChangeData = Union[AddFrameData, RemoveFrameData, AddClauseData, RemoveClauseData]


class ChangeApplicationError(ValueError):
    """Raised when a change doesn't fit the document it is applied to."""
    pass


def _target_frame(document: Document, located: FrameClause) -> Frame:
    if located.frame_type == FrameType.HEADER:
        return document.header
    frame = document.collection(located.frame_type).get(located.frame_id)
    if frame is None:
        raise ChangeApplicationError(
            f"No {located.frame_type.value} frame with id {located.frame_id}"
        )
    return frame


def apply_change(document: Document, change: ChangeData) -> None:
    """
    Apply a change to a document in place.

    Raises:
        ChangeApplicationError: If the target frame or clause doesn't exist
        DuplicateFrameError: If an added frame id already exists
        TypeError: If `change` is not a ChangeData variant
    """
    match change:
        case AddFrameData(item=frame):
            document.add_frame(frame)
        case RemoveFrameData(item=frame):
            if document.remove_frame(frame.frame_type, frame.id) is None:
                raise ChangeApplicationError(
                    f"No {frame.frame_type.value} frame with id {frame.id}"
                )
        case AddClauseData(item=located):
            _target_frame(document, located).add_clause(located.clause)
        case RemoveClauseData(item=located):
            frame = _target_frame(document, located)
            try:
                frame.clauses.remove(located.clause)
            except ValueError as e:
                raise ChangeApplicationError(
                    f"Clause {located.clause.tag} not found in {located.frame_id or 'header'}"
                ) from e
        case _:
            raise TypeError(f"Unsupported change type: {type(change)}")


def change_signature(change: ChangeData) -> Set[str]:
    """Ids mentioned by a change: frame ids and referenced ids."""
    match change:
        case AddFrameData(item=frame) | RemoveFrameData(item=frame):
            ids = {frame.id} if frame.id is not None else set()
            for clause in frame.clauses:
                ids.update(referenced_ids(clause))
            return ids
        case AddClauseData(item=located) | RemoveClauseData(item=located):
            ids = {located.frame_id} if located.frame_id is not None else set()
            ids.update(referenced_ids(located.clause))
            return ids
        case _:
            raise TypeError(f"Unsupported change type: {type(change)}")


def describe_change(change: ChangeData) -> str:
    """Short human-readable form, e.g. `AddClause(GO:1 is_a GO:2)`."""
    match change:
        case AddFrameData(item=frame):
            return f"AddFrame({frame.frame_type.value} {frame.id})"
        case RemoveFrameData(item=frame):
            return f"RemoveFrame({frame.frame_type.value} {frame.id})"
        case AddClauseData(item=located):
            return f"AddClause({_describe_located(located)})"
        case RemoveClauseData(item=located):
            return f"RemoveClause({_describe_located(located)})"
        case _:
            raise TypeError(f"Unsupported change type: {type(change)}")


def _describe_located(located: FrameClause) -> str:
    clause = located.clause
    parts = [located.frame_id or "header", clause.tag, str(clause.value)]
    if clause.value2 is not None:
        parts.append(str(clause.value2))
    return " ".join(parts)


__all__ = [
    "FrameClause",
    "AddFrameData",
    "RemoveFrameData",
    "AddClauseData",
    "RemoveClauseData",
    "ChangeData",
    "ChangeApplicationError",
    "apply_change",
    "change_signature",
    "describe_change",
]
