"""
Document Analyzer — diagnostics and inventory of OBO documents.

This module provides lightweight analysis of Document objects:
    - Frame and clause inventory
    - Tag usage, including tags outside the known vocabulary
    - Clauses whose shape doesn't fit their tag (would fail to write)
    - Dangling and obsolete references
    - Warning flags for curation risk

IMPORTANT: This is read-only. It does NOT modify the document.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, List, Set, Tuple

from obocanon.formatter import MalformedClauseError, format_clause, is_true_flag
from obocanon.model import Clause, Document, Frame
from obocanon.tags import OboTag, is_known_tag, is_reference_tag


def referenced_ids(clause: Clause) -> List[str]:
    """Ids a reference-valued clause points at (relation and target)."""
    if not is_reference_tag(clause.tag) or clause.value is None:
        return []
    if clause.value2 is not None:
        return [str(clause.value), str(clause.value2)]
    return [str(clause.value)]


def _target_id(clause: Clause) -> str:
    return str(clause.value2 if clause.value2 is not None else clause.value)


def _is_obsolete(frame: Frame) -> bool:
    return any(is_true_flag(c.value) for c in frame.get_clauses(OboTag.IS_OBSOLETE))


@dataclass
class DocumentReport:
    """Analysis report for a document."""

    total_terms: int = 0
    total_typedefs: int = 0
    total_instances: int = 0
    total_clauses: int = 0

    # Tag usage
    tag_usage: Dict[str, int] = field(default_factory=dict)
    unknown_tags: Set[str] = field(default_factory=set)

    # Shape problems: (frame id or "header", tag, message)
    malformed_clauses: List[Tuple[str, str, str]] = field(default_factory=list)

    # References
    dangling_references: Set[Tuple[str, str]] = field(default_factory=set)
    obsolete_references: Set[Tuple[str, str]] = field(default_factory=set)
    obsolete_frames: Set[str] = field(default_factory=set)
    frames_without_name: Set[str] = field(default_factory=set)

    # Warnings and flags
    warnings: List[str] = field(default_factory=list)

    def add_warning(self, msg: str) -> None:
        """Add a warning to the report."""
        if msg not in self.warnings:
            self.warnings.append(msg)

    @property
    def is_writable(self) -> bool:
        return not self.malformed_clauses


def analyze_document(document: Document) -> DocumentReport:
    """
    Perform analysis of a Document.

    Checks for:
    - Tag usage and unknown tags
    - Clause shapes against tag arity
    - References to ids not defined in the document
    - References to obsolete frames

    Returns a DocumentReport with metrics and warnings.
    """
    report = DocumentReport()
    report.total_terms = len(document.terms)
    report.total_typedefs = len(document.typedefs)
    report.total_instances = len(document.instances)

    usage: Dict[str, int] = defaultdict(int)
    frames = [document.header] + list(document.iter_frames())

    # =========================================================================
    # 1. CLAUSES
    # =========================================================================

    for frame in frames:
        for clause in frame.clauses:
            report.total_clauses += 1
            usage[clause.tag] += 1
            if not is_known_tag(clause.tag):
                report.unknown_tags.add(clause.tag)
            try:
                format_clause(clause, frame_id=frame.id)
            except MalformedClauseError as e:
                report.malformed_clauses.append((frame.id or "header", clause.tag, str(e)))
    report.tag_usage = dict(usage)

    # =========================================================================
    # 2. REFERENCES
    # =========================================================================

    for frame in document.iter_frames():
        if frame.get_value(OboTag.NAME) is None:
            report.frames_without_name.add(frame.id)
        if _is_obsolete(frame):
            report.obsolete_frames.add(frame.id)

    for frame in document.iter_frames():
        # Obsolete frames may point anywhere, including at other obsolete frames.
        check_obsolete = frame.id not in report.obsolete_frames
        for clause in frame.clauses:
            if not is_reference_tag(clause.tag):
                continue
            for ref in referenced_ids(clause):
                if ":" in ref and document.get_frame(ref) is None:
                    report.dangling_references.add((frame.id, ref))
            target = _target_id(clause)
            if (
                check_obsolete
                and clause.tag not in (OboTag.REPLACED_BY.value, OboTag.CONSIDER.value)
                and target in report.obsolete_frames
            ):
                report.obsolete_references.add((frame.id, target))

    # =========================================================================
    # 3. WARNING FLAGS
    # =========================================================================

    if document.header.get_clause(OboTag.FORMAT_VERSION) is None:
        report.add_warning("Missing format-version in header")

    if report.malformed_clauses:
        report.add_warning(f"Malformed clauses: {len(report.malformed_clauses)}")

    if report.unknown_tags:
        report.add_warning(f"Unknown tags: {', '.join(sorted(report.unknown_tags))}")

    if report.dangling_references:
        targets = sorted({ref for _, ref in report.dangling_references})
        report.add_warning(f"References to undefined ids: {', '.join(targets)}")

    if report.obsolete_references:
        pairs = sorted(f"{src} -> {dst}" for src, dst in report.obsolete_references)
        report.add_warning(f"References to obsolete frames: {', '.join(pairs)}")

    if report.frames_without_name:
        report.add_warning(
            f"Frames without name: {', '.join(sorted(report.frames_without_name))}"
        )

    return report


__all__ = ["DocumentReport", "analyze_document", "referenced_ids"]
